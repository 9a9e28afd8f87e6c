from __future__ import annotations

from typing import List

from fastapi import Depends, FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import Response
from sqlalchemy.orm import Session

from . import crud, models, reports, schemas
from .bitmap import WeeklyBitmap
from .builder import ScheduleBuilder, ScheduleEntry
from .config import settings
from .db import SessionLocal, engine
from .directory import SqlDirectoryGateway, apply_to_accounts
from .errors import CUSTOM_ERRORS
from .logger import get_logger
from .sessions import SessionStore

logger = get_logger(__name__)

app = FastAPI(title="Logon Hours API")
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


models.Base.metadata.create_all(bind=engine)

sessions = SessionStore(
    ttl_seconds=settings.session_ttl_seconds,
    max_sessions=settings.max_sessions,
)

XLSX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def get_gateway(db: Session = Depends(get_db)) -> SqlDirectoryGateway:
    return SqlDirectoryGateway(db)


def get_builder(session_id: str) -> ScheduleBuilder:
    try:
        return sessions.get(session_id)
    except tuple(CUSTOM_ERRORS) as exc:
        raise HTTPException(status_code=CUSTOM_ERRORS[type(exc)], detail=str(exc)) from exc


def entry_payload(index: int, entry: ScheduleEntry) -> schemas.ScheduleEntry:
    return schemas.ScheduleEntry(
        index=index,
        days=entry.day_token,
        start_hour=entry.start_hour,
        end_hour=entry.end_hour,
        weekdays=[int(day) for day in entry.weekdays],
    )


def bitmap_preview(bitmap: WeeklyBitmap) -> schemas.BitmapPreview:
    return schemas.BitmapPreview(
        hex=bitmap.hex(),
        allowed_hours=bitmap.allowed_hour_count,
        empty=bitmap.is_empty,
        ranges={
            day.label: [schemas.HourSpan(start_hour=start, end_hour=end) for start, end in spans]
            for day, spans in bitmap.to_ranges().items()
        },
    )


@app.post("/sessions", response_model=schemas.SessionCreated)
def create_session():
    return schemas.SessionCreated(session_id=sessions.create())


@app.delete("/sessions/{session_id}")
def delete_session(session_id: str):
    try:
        sessions.discard(session_id)
    except tuple(CUSTOM_ERRORS) as exc:
        raise HTTPException(status_code=CUSTOM_ERRORS[type(exc)], detail=str(exc)) from exc
    return {"ok": True}


@app.get("/sessions/{session_id}/ranges", response_model=List[schemas.ScheduleEntry])
def list_ranges(builder: ScheduleBuilder = Depends(get_builder)):
    return [entry_payload(index, entry) for index, entry in enumerate(builder.list())]


@app.post("/sessions/{session_id}/ranges", response_model=schemas.AddRangeResponse)
def add_range(payload: schemas.RangeCreate, builder: ScheduleBuilder = Depends(get_builder)):
    try:
        entry = builder.add_range(payload.days, payload.start, payload.end)
    except tuple(CUSTOM_ERRORS) as exc:
        raise HTTPException(status_code=CUSTOM_ERRORS[type(exc)], detail=str(exc)) from exc
    return schemas.AddRangeResponse(
        entry=entry_payload(len(builder) - 1, entry),
        advisories=list(entry.advisories),
    )


@app.delete("/sessions/{session_id}/ranges/{index}", response_model=schemas.ScheduleEntry)
def remove_range(index: int, builder: ScheduleBuilder = Depends(get_builder)):
    try:
        entry = builder.remove_range(index)
    except tuple(CUSTOM_ERRORS) as exc:
        raise HTTPException(status_code=CUSTOM_ERRORS[type(exc)], detail=str(exc)) from exc
    return entry_payload(index, entry)


@app.get("/sessions/{session_id}/bitmap", response_model=schemas.BitmapPreview)
def preview_bitmap(builder: ScheduleBuilder = Depends(get_builder)):
    return bitmap_preview(builder.encode())


@app.post("/sessions/{session_id}/apply", response_model=schemas.ApplyReport)
def apply_schedule(
    payload: schemas.ApplyRequest,
    builder: ScheduleBuilder = Depends(get_builder),
    gateway: SqlDirectoryGateway = Depends(get_gateway),
):
    account_ids = list(payload.account_ids)
    if payload.organizational_unit:
        try:
            account_ids.extend(
                account.account_id for account in gateway.list_accounts(payload.organizational_unit)
            )
        except tuple(CUSTOM_ERRORS) as exc:
            raise HTTPException(status_code=CUSTOM_ERRORS[type(exc)], detail=str(exc)) from exc
    account_ids = list(dict.fromkeys(account_ids))
    if not account_ids:
        raise HTTPException(status_code=400, detail="No accounts selected")

    bitmap = builder.encode()
    if bitmap.is_empty and not payload.allow_empty:
        raise HTTPException(
            status_code=409,
            detail="No logon hours are allowed; set allow_empty to deny logon at all hours",
        )
    logger.info("Applying %d allowed hours to %d accounts", bitmap.allowed_hour_count, len(account_ids))
    outcomes = apply_to_accounts(gateway, account_ids, bitmap)
    return schemas.ApplyReport(
        bitmap=bitmap_preview(bitmap),
        outcomes=[schemas.ApplyOutcome.model_validate(outcome) for outcome in outcomes],
    )


@app.get("/sessions/{session_id}/reports/ranges.csv")
def export_ranges_csv(builder: ScheduleBuilder = Depends(get_builder)):
    rows = reports.build_range_rows(builder.list())
    return Response(reports.write_csv(rows), media_type="text/csv")


@app.get("/sessions/{session_id}/reports/grid.csv")
def export_grid_csv(builder: ScheduleBuilder = Depends(get_builder)):
    rows = reports.build_logon_grid(builder.encode())
    return Response(reports.write_csv(rows), media_type="text/csv")


@app.get("/sessions/{session_id}/reports/grid.xlsx")
def export_grid_xlsx(builder: ScheduleBuilder = Depends(get_builder)):
    rows = reports.build_logon_grid(builder.encode())
    return Response(reports.write_xlsx(rows), media_type=XLSX_MEDIA_TYPE)


@app.get("/ous", response_model=List[str])
def list_organizational_units(gateway: SqlDirectoryGateway = Depends(get_gateway)):
    return gateway.list_organizational_units()


@app.post("/ous", response_model=schemas.OrganizationalUnit)
def create_organizational_unit(payload: schemas.OrganizationalUnitCreate, db: Session = Depends(get_db)):
    try:
        return crud.create_organizational_unit(db, payload.name)
    except tuple(CUSTOM_ERRORS) as exc:
        raise HTTPException(status_code=CUSTOM_ERRORS[type(exc)], detail=str(exc)) from exc


@app.get("/ous/{name}/accounts", response_model=List[schemas.Account])
def list_accounts(name: str, gateway: SqlDirectoryGateway = Depends(get_gateway)):
    try:
        return gateway.list_accounts(name)
    except tuple(CUSTOM_ERRORS) as exc:
        raise HTTPException(status_code=CUSTOM_ERRORS[type(exc)], detail=str(exc)) from exc


@app.post("/accounts", response_model=schemas.Account)
def create_account(payload: schemas.AccountCreate, db: Session = Depends(get_db)):
    try:
        return crud.create_account(db, payload.account_id, payload.display_name, payload.organizational_unit)
    except tuple(CUSTOM_ERRORS) as exc:
        raise HTTPException(status_code=CUSTOM_ERRORS[type(exc)], detail=str(exc)) from exc


@app.get("/accounts/{account_id}/logon-hours", response_model=schemas.AccountLogonHours)
def get_account_logon_hours(account_id: str, gateway: SqlDirectoryGateway = Depends(get_gateway)):
    try:
        bitmap = gateway.read_logon_hours(account_id)
    except tuple(CUSTOM_ERRORS) as exc:
        raise HTTPException(status_code=CUSTOM_ERRORS[type(exc)], detail=str(exc)) from exc
    return schemas.AccountLogonHours(
        account_id=account_id,
        configured=bitmap is not None,
        bitmap=bitmap_preview(bitmap) if bitmap is not None else None,
    )
