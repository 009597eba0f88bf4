from __future__ import annotations
import logging
import math
from typing import Any, Callable, Iterable, Optional

from . import slotclock
from .config import TariffGridConfig, default_config
from .exceptions import FieldValidationError, TariffGridError, TimeFormatError, require
from .intervals import check_overlaps
from .schema import (
    CreateDemandRequest,
    CreatePeriodRequest,
    UpdateDemandRequest,
    UpdatePeriodRequest,
)
from .types import Group, Interval

logger = logging.getLogger(__name__)


def assert_time(value: Optional[str], label: str) -> str:
    """Required, strict 'HH:MM'. Returns the zero-padded form."""
    require(bool(value and str(value).strip()), f"{label} is required.", FieldValidationError)
    s = str(value).strip()
    if not slotclock.is_valid_time(s):
        raise TimeFormatError(f"{label} must be in HH:MM format.")
    return slotclock.normalize_time(s)


def _number(value: Any, message: str) -> float:
    try:
        out = float(value)
    except (TypeError, ValueError):
        raise FieldValidationError(message) from None
    require(not math.isnan(out), message, FieldValidationError)
    return out


def _check_period_fields(
    name: str, start_time: Any, end_time: Any, price: Any
) -> tuple[str, str, str, float]:
    require(bool(name and name.strip()), "Period name is required.", FieldValidationError)
    require(bool(start_time), "Start time is required.", FieldValidationError)
    require(bool(end_time), "End time is required.", FieldValidationError)
    require(price not in (None, ""), "Price is required.", FieldValidationError)
    start = assert_time(start_time, "Start time")
    end = assert_time(end_time, "End time")
    require(start != end, "Start time and end time cannot be the same.", FieldValidationError)
    value = _number(price, "Price must be a positive number.")
    require(value >= 0, "Price must be a positive number.", FieldValidationError)
    return name.strip(), start, end, value


def build_period_request(
    *,
    name: str,
    start_time: str,
    end_time: str,
    price: Any,
    group: Group | int,
    split: bool,
    existing: Iterable[Interval],
    description: Optional[str] = None,
) -> CreatePeriodRequest:
    """
    Create payload for a new period, or raise the first problem found.

    Field checks run first so a malformed time never reaches overlap detection.
    """
    nm, start, end, value = _check_period_fields(name, start_time, end_time, price)
    grp = Group(group)
    require(
        split or grp == Group.GENERAL,
        "Cannot use weekday/weekend groups when weekday pricing is disabled.",
        FieldValidationError,
    )
    check_overlaps((start, end), grp, existing)
    logger.debug("period request accepted: %s %s-%s (%s)", nm, start, end, grp.label)
    return CreatePeriodRequest(
        name=nm,
        start_time=start,
        end_time=end,
        price=value,
        period_group=int(grp),
        description=(description or "").strip() or None,
    )


def build_period_update(
    interval: Interval,
    *,
    name: str,
    start_time: str,
    end_time: str,
    price: Any,
    group: Group | int,
    split: bool,
    existing: Iterable[Interval],
    description: Optional[str] = None,
) -> UpdatePeriodRequest:
    """Like build_period_request, ignoring the period being edited in overlap checks."""
    nm, start, end, value = _check_period_fields(name, start_time, end_time, price)
    grp = Group(group)
    require(
        split or grp == Group.GENERAL,
        "Cannot use weekday/weekend groups when weekday pricing is disabled.",
        FieldValidationError,
    )
    check_overlaps((start, end), grp, existing, exclude_id=interval.id)
    return UpdatePeriodRequest(
        name=nm,
        start_time=start,
        end_time=end,
        price=value,
        period_group=int(grp),
        description=(description or "").strip() or None,
    )


def _check_demand_fields(
    name: str,
    start_time: str,
    end_time: str,
    start_month: int,
    end_month: int,
    lookback_days: int,
    price_base: Any,
) -> tuple[str, str, str, float]:
    require(bool(name and name.strip()), "Demand name is required.", FieldValidationError)
    if not slotclock.is_valid_time(start_time or ""):
        raise TimeFormatError("Start time must follow HH:MM format.")
    if not slotclock.is_valid_time(end_time or ""):
        raise TimeFormatError("End time must follow HH:MM format.")
    start = slotclock.normalize_time(start_time)
    end = slotclock.normalize_time(end_time, is_end=True)
    require(start != end, "Start time and end time cannot be the same.", FieldValidationError)
    require(
        1 <= start_month <= 12 and 1 <= end_month <= 12,
        "Month must be between 1 and 12.",
        FieldValidationError,
    )
    require(lookback_days >= 1, "Lookback days must be at least 1.", FieldValidationError)
    if price_base in (None, ""):
        raise FieldValidationError("Price base must be greater than 0.")
    base = _number(price_base, "Price base must be greater than 0.")
    require(base > 0, "Price base must be greater than 0.", FieldValidationError)
    return name.strip(), start, end, base


def build_demand_request(
    *,
    name: str,
    start_time: str,
    end_time: str,
    price_base: Any,
    start_month: int = 1,
    end_month: int = 12,
    lookback_days: int = 365,
    weekday_pricing: str = "all_days",
    sampling_method: str = "maximum_interval",
    description: Optional[str] = None,
) -> CreateDemandRequest:
    nm, start, end, base = _check_demand_fields(
        name, start_time, end_time, start_month, end_month, lookback_days, price_base
    )
    return CreateDemandRequest(
        name=nm,
        description=(description or "").strip() or None,
        start_time=start,
        end_time=end,
        start_month=start_month,
        end_month=end_month,
        lookback_days=lookback_days,
        price_base=base,
        weekday_pricing=weekday_pricing,  # type: ignore[arg-type]
        sampling_method=sampling_method,  # type: ignore[arg-type]
    )


def build_demand_update(
    *,
    name: str,
    start_time: str,
    end_time: str,
    price_base: Any,
    start_month: int = 1,
    end_month: int = 12,
    lookback_days: int = 365,
    weekday_pricing: str = "all_days",
    sampling_method: str = "maximum_interval",
    description: Optional[str] = None,
) -> UpdateDemandRequest:
    nm, start, end, base = _check_demand_fields(
        name, start_time, end_time, start_month, end_month, lookback_days, price_base
    )
    return UpdateDemandRequest(
        name=nm,
        description=(description or "").strip() or None,
        start_time=start,
        end_time=end,
        start_month=start_month,
        end_month=end_month,
        lookback_days=lookback_days,
        price_base=base,
        weekday_pricing=weekday_pricing,  # type: ignore[arg-type]
        sampling_method=sampling_method,  # type: ignore[arg-type]
    )


def first_error(fn: Callable[..., Any], *args, **kwargs) -> Optional[str]:
    """Run a builder and return its error message for display, or None if it passes."""
    try:
        fn(*args, **kwargs)
    except TariffGridError as exc:
        return str(exc)
    return None


def period_draft(group: Group | int, start_time: str = "", end_time: str = "") -> dict:
    """Blank period form seeded with a committed drag range."""
    return {
        "name": "",
        "start_time": start_time,
        "end_time": end_time,
        "price": "",
        "group": Group(group),
        "description": "",
    }


def demand_draft(
    start_time: Optional[str] = None,
    end_time: Optional[str] = None,
    config: Optional[TariffGridConfig] = None,
) -> dict:
    """Demand form with configured defaults, times taken from a drag when given."""
    d = (config or default_config()).demand
    return {
        "name": "",
        "description": "",
        "start_time": slotclock.normalize_time(start_time) if start_time else d.start_time,
        "end_time": (
            slotclock.normalize_time(end_time, is_end=True) if end_time else d.end_time
        ),
        "start_month": d.start_month,
        "end_month": d.end_month,
        "lookback_days": d.lookback_days,
        "price_base": "",
        "weekday_pricing": d.weekday_pricing,
        "sampling_method": d.sampling_method,
    }
