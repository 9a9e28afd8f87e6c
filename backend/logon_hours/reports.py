from __future__ import annotations

import csv
import io
from typing import Iterable

from openpyxl import Workbook
from openpyxl.styles import Font, PatternFill

from .bitmap import WeeklyBitmap
from .time_utils import HOURS_PER_DAY, Weekday, format_hour

RANGE_HEADERS = ["#", "Days", "Start", "End"]
ALLOWED_MARK = "X"


def build_range_rows(entries: Iterable) -> list[list[str]]:
    rows = [RANGE_HEADERS]
    for index, entry in enumerate(entries):
        rows.append([
            str(index),
            entry.day_token,
            format_hour(entry.start_hour),
            format_hour(entry.end_hour),
        ])
    return rows


def build_logon_grid(bitmap: WeeklyBitmap) -> list[list[str]]:
    rows = [["Hour", *(day.label for day in Weekday)]]
    for hour in range(HOURS_PER_DAY):
        row = [f"{format_hour(hour)}-{format_hour(hour + 1)}"]
        for day in Weekday:
            row.append(ALLOWED_MARK if bitmap.is_allowed(day, hour) else "")
        rows.append(row)
    return rows


def write_csv(rows: list[list[str]]) -> bytes:
    buffer = io.StringIO()
    writer = csv.writer(buffer)
    writer.writerows(rows)
    return buffer.getvalue().encode("utf-8")


def write_xlsx(rows: list[list[str]], title: str = "Logon Hours") -> bytes:
    wb = Workbook()
    ws = wb.active
    ws.title = title
    for row in rows:
        ws.append(row)
    for cell in ws[1]:
        cell.font = Font(bold=True)
    allowed_fill = PatternFill(start_color="C6EFCE", end_color="C6EFCE", fill_type="solid")
    for row in ws.iter_rows(min_row=2):
        for cell in row:
            if cell.value == ALLOWED_MARK:
                cell.fill = allowed_fill
    output = io.BytesIO()
    wb.save(output)
    return output.getvalue()
