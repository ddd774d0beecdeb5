"""Procesamiento de la serie de frecuencia cardíaca (aplanado, orden, resumen)."""

from __future__ import annotations

import logging
import math
from collections.abc import Sequence
from datetime import datetime, timezone, tzinfo
from typing import Any

import pandas as pd
from dateutil import tz

from hr_dashboard.model import (
    ALL_DATES,
    NOT_AVAILABLE,
    THRESHOLD_BPM,
    DailyRecord,
    DateFilter,
    HeartRateBlock,
    Sample,
    SummaryStats,
)

logger = logging.getLogger(__name__)

_FULL_LABEL_FORMAT = "%b %d, %I:%M %p"
_DAY_LABEL_FORMAT = "%d, %I:%M %p"

NO_DATA_MESSAGE = "No heart rate data available"

FRAME_COLUMNS = [
    "timestamp",
    "timestamp_millis",
    "heart_rate",
    "highlighted",
    "highlight",
]


def flatten_and_filter(
    dataset: Any,
    date_filter: str | DateFilter = ALL_DATES,
    *,
    threshold: float = THRESHOLD_BPM,
    zone: tzinfo | None = None,
) -> list[Sample]:
    """Flatten per-day readings into one chronological series.

    Args:
        dataset: Decoded JSON document (expected: list of daily records).
        date_filter: ``ALL_DATES`` or a ``date`` value of one record.
        threshold: Readings strictly above this value are highlighted.
        zone: Timezone used for display labels (local time when None).

    Returns:
        Samples sorted by timestamp instant. Empty when the dataset is
        malformed or no record matches the filter.
    """
    records = parse_dataset(dataset)
    if not records:
        return []

    if zone is None:
        zone = tz.tzlocal()
    if date_filter is ALL_DATES:
        selected = records
        label_format = _FULL_LABEL_FORMAT
    else:
        match = _first_record_for(records, date_filter)
        if match is None:
            logger.info("No record found for date %s", date_filter)
            return []
        selected = [match]
        label_format = _DAY_LABEL_FORMAT

    samples: list[Sample] = []
    for record in selected:
        if record.heart_rate is None:
            logger.debug("Record %s has no heart_rate block", record.date)
            continue
        skipped = 0
        for millis, bpm in record.heart_rate.values:
            try:
                label = format_timestamp(millis, label_format, zone)
            except (OverflowError, OSError, ValueError):
                skipped += 1
                continue
            samples.append(
                Sample(
                    timestamp_display=label,
                    timestamp_millis=millis,
                    heart_rate=bpm,
                    highlighted=bpm > threshold,
                )
            )
        if skipped:
            logger.warning(
                "Skipped %d heart rate values with unrepresentable timestamps on %s",
                skipped,
                record.date,
            )

    samples.sort(key=lambda s: s.timestamp_millis)
    logger.debug(
        "Processed %d heart rate samples (filter=%s)", len(samples), date_filter
    )
    return samples


def summarize(samples: Sequence[Sample]) -> SummaryStats:
    """Max/min heart rate of a series; N/A for an empty series."""
    if not samples:
        return SummaryStats()
    values = [s.heart_rate for s in samples]
    return SummaryStats(max_hr=max(values), min_hr=min(values))


def summary_from_record(dataset: Any) -> SummaryStats:
    """Read the pre-aggregated figures of the first daily record.

    Each missing field becomes N/A on its own.
    """
    first = _first_item_record(dataset)
    if first is None or first.heart_rate is None:
        return SummaryStats()
    block = first.heart_rate
    return SummaryStats(
        max_hr=block.max_heart_rate,
        min_hr=block.min_heart_rate,
        resting_hr=block.resting_heart_rate,
        seven_day_avg_resting_hr=block.last_seven_days_avg_resting_heart_rate,
    )


def available_dates(dataset: Any) -> list[str]:
    """Distinct record dates in order of first appearance."""
    seen: list[str] = []
    for record in parse_dataset(dataset, report=False):
        if record.date is not None and record.date not in seen:
            seen.append(record.date)
    return seen


def highlight_points(samples: Sequence[Sample]) -> list[Sample]:
    """Samples flagged above the threshold."""
    return [s for s in samples if s.highlighted]


def no_data_message(dataset: Any, date_filter: str | DateFilter = ALL_DATES) -> str:
    """Message to show instead of the chart when the series is empty."""
    if date_filter is not ALL_DATES and parse_dataset(dataset, report=False):
        return f"{NO_DATA_MESSAGE} for {date_filter}"
    return NO_DATA_MESSAGE


def dashboard_title(dataset: Any) -> str:
    """Page title with the date of the first record."""
    first = _first_item_record(dataset)
    if first is None or first.date is None:
        return "Heart Rate Analysis - No Data"
    return f"Heart Rate Analysis - {first.date}"


def samples_to_frame(samples: Sequence[Sample]) -> pd.DataFrame:
    """Convert samples to a DataFrame ordered by instant.

    The ``highlight`` column holds the bpm for highlighted rows and NA
    otherwise, which is what the scatter overlay plots.
    """
    rows = [
        {
            "timestamp": s.timestamp_display,
            "timestamp_millis": s.timestamp_millis,
            "heart_rate": s.heart_rate,
            "highlighted": s.highlighted,
            "highlight": s.heart_rate if s.highlighted else pd.NA,
        }
        for s in samples
    ]
    if not rows:
        return pd.DataFrame(columns=FRAME_COLUMNS)
    df = pd.DataFrame(rows, columns=FRAME_COLUMNS)
    return df.sort_values("timestamp_millis", kind="stable").reset_index(drop=True)


def format_timestamp(millis: int, label_format: str, zone: tzinfo) -> str:
    """Render epoch milliseconds as a 12-hour display label."""
    return datetime.fromtimestamp(millis / 1000, tz=zone).strftime(label_format)


def format_stat(value: float | None) -> str:
    """Format a summary figure ("N/A" when not available)."""
    if value is NOT_AVAILABLE:
        return "N/A"
    if float(value).is_integer():
        return str(int(value))
    return f"{value:.1f}"


def parse_dataset(dataset: Any, *, report: bool = True) -> list[DailyRecord]:
    """Parse the decoded JSON into typed records.

    Args:
        dataset: Decoded JSON document.
        report: Log a data-quality warning when the dataset is unusable.

    Returns:
        Parsed records; empty when the dataset is not a non-empty list.
    """
    if not isinstance(dataset, list) or not dataset:
        if report:
            logger.warning(
                "Invalid heart rate data format: expected a non-empty list, got %s",
                type(dataset).__name__ if dataset is not None else "None",
            )
        return []

    records: list[DailyRecord] = []
    for idx, item in enumerate(dataset):
        record = _item_to_record(item)
        if record is None:
            if report:
                logger.warning("Skipping malformed daily record at index %d", idx)
            continue
        records.append(record)
    return records


def _first_item_record(dataset: Any) -> DailyRecord | None:
    """Record built from ``dataset[0]`` itself; None if it is unusable."""
    if not isinstance(dataset, list) or not dataset:
        return None
    return _item_to_record(dataset[0])


def _first_record_for(records: list[DailyRecord], day: str) -> DailyRecord | None:
    for record in records:
        if record.date == day:
            return record
    return None


def _item_to_record(item: Any) -> DailyRecord | None:
    """Convert one JSON item; None if it is not a dict.

    Records without a date are kept: they only take part in the unfiltered
    series.
    """
    if not isinstance(item, dict):
        return None
    raw_day = item.get("date")
    day = str(raw_day) if raw_day is not None else None
    raw_block = item.get("heart_rate", item.get("heartRate"))
    return DailyRecord(date=day, heart_rate=_parse_block(raw_block, day))


def _parse_block(raw: Any, day: str | None) -> HeartRateBlock | None:
    if not isinstance(raw, dict):
        return None
    raw_values = raw.get("heartRateValues")
    if not isinstance(raw_values, list):
        raw_values = []

    values: list[tuple[int, float]] = []
    skipped = 0
    for pair in raw_values:
        parsed = _parse_pair(pair)
        if parsed is None:
            skipped += 1
            continue
        values.append(parsed)
    if skipped:
        logger.warning("Skipped %d malformed heart rate values on %s", skipped, day)

    return HeartRateBlock(
        max_heart_rate=_as_number(raw.get("maxHeartRate")),
        min_heart_rate=_as_number(raw.get("minHeartRate")),
        resting_heart_rate=_as_number(raw.get("restingHeartRate")),
        last_seven_days_avg_resting_heart_rate=_as_number(
            raw.get("lastSevenDaysAvgRestingHeartRate")
        ),
        values=values,
    )


def _parse_pair(pair: Any) -> tuple[int, float] | None:
    if not isinstance(pair, list | tuple) or len(pair) < 2:
        return None
    millis = _as_number(pair[0])
    bpm = _as_number(pair[1])
    if millis is None or bpm is None:
        return None
    if not math.isfinite(millis) or not math.isfinite(bpm):
        return None
    try:
        datetime.fromtimestamp(millis / 1000, tz=timezone.utc)
    except (OverflowError, OSError, ValueError):
        return None
    return int(millis), bpm


def _as_number(value: Any) -> float | None:
    """Return numeric JSON values as-is; None for anything else."""
    if isinstance(value, bool) or not isinstance(value, int | float):
        return None
    if isinstance(value, float) and math.isnan(value):
        return None
    return value
