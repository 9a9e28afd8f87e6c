from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.orm import Session

from . import models
from .errors import AccountNotFound, DuplicateDirectoryObject, OrganizationalUnitNotFound


def create_organizational_unit(db: Session, name: str) -> models.OrganizationalUnit:
    name = name.strip()
    if get_organizational_unit(db, name) is not None:
        raise DuplicateDirectoryObject(f"Organizational unit {name!r} already exists")
    instance = models.OrganizationalUnit(name=name)
    db.add(instance)
    db.commit()
    db.refresh(instance)
    return instance


def get_organizational_unit(db: Session, name: str) -> models.OrganizationalUnit | None:
    return db.scalars(
        select(models.OrganizationalUnit).where(models.OrganizationalUnit.name == name)
    ).first()


def list_organizational_units(db: Session) -> list[models.OrganizationalUnit]:
    return list(db.scalars(select(models.OrganizationalUnit).order_by(models.OrganizationalUnit.name)))


def create_account(
    db: Session, account_id: str, display_name: str, organizational_unit: str
) -> models.Account:
    unit = get_organizational_unit(db, organizational_unit)
    if unit is None:
        raise OrganizationalUnitNotFound(f"Organizational unit {organizational_unit!r} not found")
    if get_account(db, account_id) is not None:
        raise DuplicateDirectoryObject(f"Account {account_id!r} already exists")
    instance = models.Account(
        account_id=account_id,
        display_name=display_name,
        organizational_unit=unit,
    )
    db.add(instance)
    db.commit()
    db.refresh(instance)
    return instance


def get_account(db: Session, account_id: str) -> models.Account | None:
    return db.scalars(select(models.Account).where(models.Account.account_id == account_id)).first()


def list_accounts(db: Session, organizational_unit: str) -> list[models.Account]:
    unit = get_organizational_unit(db, organizational_unit)
    if unit is None:
        raise OrganizationalUnitNotFound(f"Organizational unit {organizational_unit!r} not found")
    return list(
        db.scalars(
            select(models.Account)
            .where(models.Account.organizational_unit_id == unit.id)
            .order_by(models.Account.display_name, models.Account.account_id)
        )
    )


def set_logon_hours(db: Session, account_id: str, data: bytes) -> models.Account:
    model = get_account(db, account_id)
    if model is None:
        raise AccountNotFound(f"Account {account_id!r} not found")
    model.logon_hours = data
    db.commit()
    db.refresh(model)
    return model
