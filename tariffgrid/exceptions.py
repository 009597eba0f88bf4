from __future__ import annotations
from typing import TYPE_CHECKING, Sequence

if TYPE_CHECKING:
    from .types import Group, Interval


class TariffGridError(Exception): ...


class TimeFormatError(TariffGridError, ValueError): ...


class FieldValidationError(TariffGridError, ValueError): ...


class ModeConflictError(TariffGridError): ...


class OverlapError(TariffGridError):
    """Candidate range collides with one or more intervals in the same group."""

    def __init__(
        self, message: str, *, conflicts: Sequence["Interval"], group: "Group"
    ):
        super().__init__(message)
        self.conflicts = list(conflicts)
        self.group = group


def require(
    condition: bool, message: str, exc: type[TariffGridError] = TariffGridError
):
    """Raise the given exception if condition is False."""
    if not condition:
        raise exc(message)
