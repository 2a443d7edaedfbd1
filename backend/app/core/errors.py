from __future__ import annotations

from typing import Any


class DomainError(Exception):
    """Base class for errors raised by the service layer."""


class Unauthorized(DomainError):
    def __init__(self, message: str = "Not authenticated") -> None:
        super().__init__(message)


class ValidationError(DomainError):
    def __init__(self, errors: list[dict[str, Any]]) -> None:
        self.errors = errors
        super().__init__(f"{len(errors)} validation error(s)")


class InvalidTimezone(DomainError):
    def __init__(self, tz_name: str | None) -> None:
        self.tz_name = tz_name
        super().__init__(f"Invalid timezone: {tz_name!r}")


class InvalidTransition(DomainError):
    pass
