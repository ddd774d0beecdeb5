"""Modelos tipados para registros diarios y muestras de frecuencia cardíaca."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class DateFilter(Enum):
    """Filter selections that are not a record date."""

    ALL = "all"


ALL_DATES = DateFilter.ALL
NOT_AVAILABLE = None
THRESHOLD_BPM = 120


@dataclass(frozen=True)
class HeartRateBlock:
    """Nested heart-rate block of one day."""

    max_heart_rate: float | None = None
    min_heart_rate: float | None = None
    resting_heart_rate: float | None = None
    last_seven_days_avg_resting_heart_rate: float | None = None
    values: list[tuple[int, float]] = field(default_factory=list)


@dataclass(frozen=True)
class DailyRecord:
    """One calendar day of measurements."""

    date: str | None
    heart_rate: HeartRateBlock | None = None


@dataclass(frozen=True)
class Sample:
    """One normalized heart-rate reading ready for the chart."""

    timestamp_display: str
    timestamp_millis: int
    heart_rate: float
    highlighted: bool


@dataclass(frozen=True)
class SummaryStats:
    """Summary figures shown next to the chart (None means N/A)."""

    max_hr: float | None = NOT_AVAILABLE
    min_hr: float | None = NOT_AVAILABLE
    resting_hr: float | None = NOT_AVAILABLE
    seven_day_avg_resting_hr: float | None = NOT_AVAILABLE
