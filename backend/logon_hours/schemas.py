from __future__ import annotations

from typing import Dict, List, Optional

from pydantic import BaseModel, Field


class RangeCreate(BaseModel):
    days: str = Field(..., examples=["M-F"])
    start: str = Field(..., examples=["9AM"])
    end: str = Field(..., examples=["17:00"])


class ScheduleEntry(BaseModel):
    index: int
    days: str
    start_hour: int
    end_hour: int
    weekdays: List[int]


class AddRangeResponse(BaseModel):
    entry: ScheduleEntry
    advisories: List[str] = []


class SessionCreated(BaseModel):
    session_id: str


class HourSpan(BaseModel):
    start_hour: int
    end_hour: int


class BitmapPreview(BaseModel):
    hex: str
    allowed_hours: int
    empty: bool
    ranges: Dict[str, List[HourSpan]]


class ApplyRequest(BaseModel):
    account_ids: List[str] = []
    organizational_unit: Optional[str] = None
    allow_empty: bool = False


class ApplyOutcome(BaseModel):
    account_id: str
    ok: bool
    reason: Optional[str] = None

    class Config:
        from_attributes = True


class ApplyReport(BaseModel):
    bitmap: BitmapPreview
    outcomes: List[ApplyOutcome]


class OrganizationalUnit(BaseModel):
    id: int
    name: str

    class Config:
        from_attributes = True


class OrganizationalUnitCreate(BaseModel):
    name: str


class Account(BaseModel):
    display_name: str
    account_id: str

    class Config:
        from_attributes = True


class AccountCreate(BaseModel):
    account_id: str
    display_name: str
    organizational_unit: str


class AccountLogonHours(BaseModel):
    account_id: str
    configured: bool
    bitmap: Optional[BitmapPreview] = None
