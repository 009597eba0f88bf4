from __future__ import annotations
from typing import Literal, Optional
from pydantic import BaseModel, Field, field_validator

from . import slotclock
from .intervals import IntervalSet
from .types import Group, Interval, SamplingMethod, WeekdayPricing

PeriodGroup = Literal[0, 1, 2]

DEMAND_GROUPS: dict[str, Group] = {
    "all_days": Group.GENERAL,
    "weekday": Group.WEEKDAY,
    "weekend": Group.WEEKEND,
}


class _TimedRecord(BaseModel):
    """Normalizes inbound start/end times to 'HH:MM' at the boundary."""

    start_time: str
    end_time: str

    @field_validator("start_time", mode="before")
    @classmethod
    def _norm_start(cls, v):
        return slotclock.normalize_time(v)

    @field_validator("end_time", mode="before")
    @classmethod
    def _norm_end(cls, v):
        return slotclock.normalize_time(v, is_end=True)


## Inbound (from persistence)
class PricingPeriodRecord(_TimedRecord):
    id: int
    name: str
    price: float
    period_group: PeriodGroup = 0
    group_text: Optional[str] = None
    description: Optional[str] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None

    def to_interval(self) -> Interval:
        return Interval(
            id=self.id,
            name=self.name,
            start_time=self.start_time,
            end_time=self.end_time,
            group=Group(self.period_group),
            payload=self.model_dump(
                exclude={"id", "name", "start_time", "end_time", "period_group"}
            ),
        )


class DemandRecord(_TimedRecord):
    id: int
    scheme_id: Optional[int] = None
    name: str
    description: Optional[str] = None
    start_time: str = "00:00"
    end_time: str = "23:59"
    start_month: int = 1
    end_month: int = 12
    lookback_days: int = 365
    price_base: float = 0.0
    weekday_pricing: WeekdayPricing = "all_days"
    sampling_method: SamplingMethod = "maximum_interval"
    created_at: Optional[str] = None
    updated_at: Optional[str] = None

    def to_interval(self) -> Interval:
        return Interval(
            id=self.id,
            name=self.name,
            start_time=self.start_time,
            end_time=self.end_time,
            group=DEMAND_GROUPS[self.weekday_pricing],
            payload=self.model_dump(exclude={"id", "name", "start_time", "end_time"}),
        )


class PricingSchemeRecord(BaseModel):
    id: int
    name: str
    state: Optional[str] = None
    description: Optional[str] = None
    enable_weekday_pricing: bool = False
    periods: list[PricingPeriodRecord] = Field(default_factory=list)
    demands: list[DemandRecord] = Field(default_factory=list)

    def period_set(self) -> IntervalSet:
        return IntervalSet.of(p.to_interval() for p in self.periods)

    def demand_set(self) -> IntervalSet:
        """Demands in backend order: created_at when every record has it, else id."""
        demands = list(self.demands)
        if demands and all(d.created_at for d in demands):
            demands.sort(key=lambda d: d.created_at or "")
        else:
            demands.sort(key=lambda d: d.id)
        return IntervalSet.of(d.to_interval() for d in demands)


## Outbound (to persistence)
class CreatePeriodRequest(_TimedRecord):
    name: str
    price: float
    period_group: PeriodGroup = 0
    description: Optional[str] = None


class UpdatePeriodRequest(BaseModel):
    name: Optional[str] = None
    start_time: Optional[str] = None
    end_time: Optional[str] = None
    price: Optional[float] = None
    period_group: Optional[PeriodGroup] = None
    description: Optional[str] = None

    @field_validator("start_time", mode="before")
    @classmethod
    def _norm_start(cls, v):
        return None if v is None else slotclock.normalize_time(v)

    @field_validator("end_time", mode="before")
    @classmethod
    def _norm_end(cls, v):
        return None if v is None else slotclock.normalize_time(v, is_end=True)


class CreateDemandRequest(_TimedRecord):
    name: str
    description: Optional[str] = None
    start_month: int = 1
    end_month: int = 12
    lookback_days: int = 365
    price_base: float
    weekday_pricing: WeekdayPricing = "all_days"
    sampling_method: SamplingMethod = "maximum_interval"


class UpdateDemandRequest(BaseModel):
    name: Optional[str] = None
    description: Optional[str] = None
    start_time: Optional[str] = None
    end_time: Optional[str] = None
    start_month: Optional[int] = None
    end_month: Optional[int] = None
    lookback_days: Optional[int] = None
    price_base: Optional[float] = None
    weekday_pricing: Optional[WeekdayPricing] = None
    sampling_method: Optional[SamplingMethod] = None

    @field_validator("start_time", mode="before")
    @classmethod
    def _norm_start(cls, v):
        return None if v is None else slotclock.normalize_time(v)

    @field_validator("end_time", mode="before")
    @classmethod
    def _norm_end(cls, v):
        return None if v is None else slotclock.normalize_time(v, is_end=True)
