import io

from openpyxl import load_workbook

from logon_hours import reports
from logon_hours.bitmap import encode
from logon_hours.builder import ScheduleBuilder, ScheduleEntry


def test_logon_grid_marks_allowed_hours():
    rows = reports.build_logon_grid(encode([ScheduleEntry("M", 16, 18)]))
    assert rows[0] == ["Hour", "Sunday", "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday"]
    assert len(rows) == 25
    assert rows[17] == ["16:00-17:00", "", "X", "", "", "", "", ""]
    assert rows[18][2] == "X"
    assert rows[19][2] == ""


def test_range_rows_and_csv():
    builder = ScheduleBuilder()
    builder.add_range("M-F", "9AM", "5PM")
    builder.add_range("Sa", "10", "14")
    rows = reports.build_range_rows(builder.list())
    assert rows[1] == ["0", "M-F", "09:00", "17:00"]
    assert rows[2] == ["1", "Sa", "10:00", "14:00"]

    content = reports.write_csv(rows).decode("utf-8")
    assert content.splitlines()[0] == "#,Days,Start,End"


def test_xlsx_export_has_bold_header():
    rows = reports.build_logon_grid(encode([ScheduleEntry("Su", 0, 2)]))
    workbook = load_workbook(io.BytesIO(reports.write_xlsx(rows)))
    sheet = workbook.active
    assert sheet.title == "Logon Hours"
    assert sheet["A1"].font.bold
    assert sheet["B2"].value == "X"
    assert not sheet["C2"].value
