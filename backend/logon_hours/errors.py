from __future__ import annotations


class ScheduleInputError(ValueError):
    """Base class for user-correctable schedule input errors."""


class InvalidTimeFormat(ScheduleInputError):
    """Raised when a time literal is neither H[:MM] nor H[:MM]AM/PM."""


class InvalidDayToken(ScheduleInputError):
    """Raised when a day name, abbreviation or range is not recognized."""


class InvalidTimeOrder(ScheduleInputError):
    """Raised when a range does not start before it ends."""


class IndexOutOfRange(ScheduleInputError, IndexError):
    """Raised when removing an entry that does not exist."""


class SessionNotFound(LookupError):
    """Raised when a configuration session id is unknown."""


class DirectoryError(Exception):
    """Raised when the directory store rejects an operation."""


class OrganizationalUnitNotFound(DirectoryError):
    pass


class AccountNotFound(DirectoryError):
    pass


class DuplicateDirectoryObject(DirectoryError):
    pass


# Mapping of custom exceptions to HTTP status codes
CUSTOM_ERRORS = {
    InvalidTimeFormat: 422,
    InvalidDayToken: 422,
    InvalidTimeOrder: 422,
    IndexOutOfRange: 404,
    SessionNotFound: 404,
    OrganizationalUnitNotFound: 404,
    AccountNotFound: 404,
    DuplicateDirectoryObject: 409,
}
