from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Iterable

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from . import crud
from .bitmap import WeeklyBitmap
from .errors import AccountNotFound, DirectoryError
from .logger import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class AccountRef:
    display_name: str
    account_id: str


@dataclass(frozen=True)
class ApplyOutcome:
    account_id: str
    ok: bool
    reason: str | None = None


class DirectoryGateway(ABC):
    """Access to the directory that holds accounts and their logonHours attribute."""

    @abstractmethod
    def list_organizational_units(self) -> list[str]:
        ...

    @abstractmethod
    def list_accounts(self, organizational_unit: str) -> list[AccountRef]:
        ...

    @abstractmethod
    def write_logon_hours(self, account_id: str, data: bytes) -> None:
        """Store the raw attribute value; raise ``DirectoryError`` when rejected."""

    def apply_schedule(self, account_id: str, bitmap: WeeklyBitmap) -> ApplyOutcome:
        try:
            self.write_logon_hours(account_id, bytes(bitmap))
        except DirectoryError as exc:
            logger.warning("Could not apply logon hours to %s: %s", account_id, exc)
            return ApplyOutcome(account_id=account_id, ok=False, reason=str(exc))
        logger.info("Applied logon hours to %s", account_id)
        return ApplyOutcome(account_id=account_id, ok=True)


def apply_to_accounts(
    gateway: DirectoryGateway, account_ids: Iterable[str], bitmap: WeeklyBitmap
) -> list[ApplyOutcome]:
    """Write the same bitmap to every account, one independent outcome per account."""
    outcomes = [gateway.apply_schedule(account_id, bitmap) for account_id in account_ids]
    failed = sum(1 for outcome in outcomes if not outcome.ok)
    if failed:
        logger.warning("Logon hours applied to %d of %d accounts", len(outcomes) - failed, len(outcomes))
    return outcomes


class SqlDirectoryGateway(DirectoryGateway):
    def __init__(self, db: Session) -> None:
        self.db = db

    def list_organizational_units(self) -> list[str]:
        return [unit.name for unit in crud.list_organizational_units(self.db)]

    def list_accounts(self, organizational_unit: str) -> list[AccountRef]:
        return [
            AccountRef(display_name=account.display_name, account_id=account.account_id)
            for account in crud.list_accounts(self.db, organizational_unit)
        ]

    def write_logon_hours(self, account_id: str, data: bytes) -> None:
        try:
            crud.set_logon_hours(self.db, account_id, data)
        except SQLAlchemyError as exc:
            self.db.rollback()
            raise DirectoryError(f"Directory write failed: {exc}") from exc

    def read_logon_hours(self, account_id: str) -> WeeklyBitmap | None:
        account = crud.get_account(self.db, account_id)
        if account is None:
            raise AccountNotFound(f"Account {account_id!r} not found")
        if account.logon_hours is None:
            return None
        return WeeklyBitmap(account.logon_hours)
