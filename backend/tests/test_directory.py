from __future__ import annotations

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from logon_hours import crud, models
from logon_hours.bitmap import WeeklyBitmap, encode
from logon_hours.builder import ScheduleEntry
from logon_hours.directory import AccountRef, ApplyOutcome, SqlDirectoryGateway, apply_to_accounts
from logon_hours.errors import AccountNotFound, DuplicateDirectoryObject, OrganizationalUnitNotFound


def setup_db():
    engine = create_engine("sqlite:///:memory:", connect_args={"check_same_thread": False})
    models.Base.metadata.create_all(bind=engine)
    return sessionmaker(bind=engine)()


def seed(db):
    crud.create_organizational_unit(db, "Sales")
    crud.create_organizational_unit(db, "Engineering")
    crud.create_account(db, "jdoe", "Jane Doe", "Sales")
    crud.create_account(db, "asmith", "Alex Smith", "Sales")
    crud.create_account(db, "root", "Build Agent", "Engineering")


def test_lists_units_and_accounts():
    db = setup_db()
    seed(db)
    gateway = SqlDirectoryGateway(db)

    assert gateway.list_organizational_units() == ["Engineering", "Sales"]
    assert gateway.list_accounts("Sales") == [
        AccountRef(display_name="Alex Smith", account_id="asmith"),
        AccountRef(display_name="Jane Doe", account_id="jdoe"),
    ]
    with pytest.raises(OrganizationalUnitNotFound):
        gateway.list_accounts("Marketing")


def test_duplicate_directory_objects_are_rejected():
    db = setup_db()
    seed(db)
    with pytest.raises(DuplicateDirectoryObject):
        crud.create_organizational_unit(db, "Sales")
    with pytest.raises(DuplicateDirectoryObject):
        crud.create_account(db, "jdoe", "Someone Else", "Engineering")
    with pytest.raises(OrganizationalUnitNotFound):
        crud.create_account(db, "new", "New Hire", "Marketing")


def test_apply_schedule_stores_raw_bytes():
    db = setup_db()
    seed(db)
    gateway = SqlDirectoryGateway(db)
    bitmap = encode([ScheduleEntry("M-F", 9, 17)])

    assert gateway.read_logon_hours("jdoe") is None
    assert gateway.apply_schedule("jdoe", bitmap) == ApplyOutcome(account_id="jdoe", ok=True)
    assert crud.get_account(db, "jdoe").logon_hours == bytes(bitmap)
    assert gateway.read_logon_hours("jdoe") == bitmap
    with pytest.raises(AccountNotFound):
        gateway.read_logon_hours("ghost")


def test_fan_out_reports_each_account():
    db = setup_db()
    seed(db)
    gateway = SqlDirectoryGateway(db)
    bitmap = encode([ScheduleEntry("Sa-Su", 10, 14)])

    outcomes = apply_to_accounts(gateway, ["jdoe", "ghost", "root"], bitmap)

    assert [outcome.account_id for outcome in outcomes] == ["jdoe", "ghost", "root"]
    assert [outcome.ok for outcome in outcomes] == [True, False, True]
    assert "ghost" in outcomes[1].reason
    assert gateway.read_logon_hours("jdoe") == bitmap
    assert gateway.read_logon_hours("root") == bitmap
    assert gateway.read_logon_hours("asmith") is None


def test_empty_bitmap_is_a_valid_write():
    db = setup_db()
    seed(db)
    gateway = SqlDirectoryGateway(db)

    assert gateway.apply_schedule("asmith", WeeklyBitmap()).ok
    assert gateway.read_logon_hours("asmith").is_empty
