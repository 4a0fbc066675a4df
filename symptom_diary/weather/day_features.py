"""Build ``DayFeature`` records from diary days, entries, and weather logs.

This is the adapter in front of the association engine.  It resolves which
weather reading belongs to each documented day:

1. Entry-linked weather (``DiaryEntry.weather_id``) nearest to the day's
   target time                                     → coverage ``entry``
2. Otherwise, the weather snapshot for that date nearest to the target time
                                                   → coverage ``snapshot``
3. Otherwise no weather                            → coverage ``none``

Target time per day: earliest pain entry (when ``prefer_pain_as_target``),
then the earliest entry with a valid time, then 12:00 local.  All day keys
and local times are computed in the diary's IANA timezone so entries after
local midnight are never assigned to the previous day.

Ties are broken by the lower weather id so the output is deterministic.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from datetime import date as date_cls
from datetime import datetime, timezone
from typing import Iterable, Sequence
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from symptom_diary.weather.base import CoverageCounts, DayFeature, WeatherCoverage

logger = logging.getLogger("symptom_diary.weather.day_features")

DEFAULT_TIMEZONE = "Europe/Berlin"

_TIME_RE = re.compile(r"^(\d{1,2}):(\d{2})(?::(\d{2}))?$")

# join_reason debug tags
JOIN_ENTRY_NEAREST = "entry_nearest"
JOIN_SNAPSHOT_NEAREST = "snapshot_nearest"
JOIN_SNAPSHOT_LOWEST_ID = "snapshot_lowest_id"
JOIN_NO_WEATHER = "no_weather"


class InvalidTimezoneError(ValueError):
    """Raised when the diary timezone is not a known IANA zone."""


# ---------------------------------------------------------------------------
# Input records
# ---------------------------------------------------------------------------


@dataclass
class DayRecord:
    """Per-day diary summary (already merged across same-day entries).

    Attributes:
        date:           ISO date (YYYY-MM-DD) in the diary's timezone.
        documented:     True if at least one entry exists for the day.
        headache:       True if a headache was logged.
        pain_max:       Highest pain level that day, or None.
        acute_med_used: True if acute medication was taken.
    """

    date: str
    documented: bool
    headache: bool = False
    pain_max: float | None = None
    acute_med_used: bool = False


@dataclass
class DiaryEntry:
    """A single diary entry, reduced to the fields needed for the weather join."""

    selected_date: str | None = None
    selected_time: str | None = None
    occurred_at: str | None = None
    timestamp_created: str | None = None
    weather_id: int | None = None
    entry_kind: str | None = None
    pain_level: str | float | None = None


@dataclass
class WeatherLog:
    """A stored weather reading.

    Attributes:
        id:                  Weather log primary key.
        snapshot_date:       Date the snapshot belongs to, if it is a daily snapshot.
        requested_at:        ISO timestamp the reading refers to.
        pressure_mb:         Absolute pressure (hPa).
        pressure_change_24h: Trailing 24h pressure change (hPa).
        temperature_c:       Air temperature.
        humidity:            Relative humidity (%).
    """

    id: int
    snapshot_date: str | None = None
    requested_at: str | None = None
    pressure_mb: float | None = None
    pressure_change_24h: float | None = None
    temperature_c: float | None = None
    humidity: float | None = None


@dataclass
class DayFeatureBuild:
    """Adapter output: features plus the provenance counts it observed."""

    features: list[DayFeature] = field(default_factory=list)
    coverage_counts: CoverageCounts = field(default_factory=CoverageCounts)


# ---------------------------------------------------------------------------
# Time helpers
# ---------------------------------------------------------------------------


def resolve_timezone(name: str) -> ZoneInfo:
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError) as exc:
        raise InvalidTimezoneError(f"Unknown timezone: {name!r}") from exc


def parse_timestamp(value: str | None) -> datetime | None:
    """Parse an ISO timestamp; naive values are taken as UTC.  Invalid → None."""
    if not value:
        return None
    text = value.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def to_local_date_iso(value: str | None, tz: ZoneInfo) -> str | None:
    """Return the local calendar date (YYYY-MM-DD) of a timestamp in ``tz``."""
    parsed = parse_timestamp(value)
    if parsed is None:
        return None
    return parsed.astimezone(tz).date().isoformat()


def parse_selected_time(value: str | None) -> tuple[int, int] | None:
    """Parse ``"8:00"``, ``"08:00"`` or ``"08:00:00"`` into (hour, minute).

    ``"24:00"`` is clamped to 23:59.  Anything else out of range → None.
    """
    if not value or not isinstance(value, str):
        return None
    match = _TIME_RE.match(value.strip())
    if not match:
        return None

    hour, minute = int(match.group(1)), int(match.group(2))
    if hour == 24 and minute == 0:
        hour, minute = 23, 59
    if not (0 <= hour <= 23 and 0 <= minute <= 59):
        return None
    return hour, minute


def local_time_to_epoch(date_iso: str, hour: int, minute: int, tz: ZoneInfo) -> float | None:
    """Epoch seconds for a local wall-clock time on ``date_iso`` in ``tz``."""
    try:
        day = date_cls.fromisoformat(date_iso)
    except ValueError:
        return None
    return datetime(day.year, day.month, day.day, hour, minute, tzinfo=tz).timestamp()


# ---------------------------------------------------------------------------
# Entry helpers
# ---------------------------------------------------------------------------


def _entry_day_key(entry: DiaryEntry, tz: ZoneInfo) -> str | None:
    if entry.selected_date:
        return entry.selected_date
    return to_local_date_iso(entry.occurred_at, tz) or to_local_date_iso(
        entry.timestamp_created, tz
    )


def _entry_epoch(entry: DiaryEntry, tz: ZoneInfo) -> float | None:
    if not entry.selected_date:
        return None
    hour, minute = parse_selected_time(entry.selected_time) or (12, 0)
    return local_time_to_epoch(entry.selected_date, hour, minute, tz)


def _is_pain_entry(entry: DiaryEntry) -> bool:
    if entry.entry_kind == "pain":
        return True
    return not entry.entry_kind and entry.pain_level not in (None, "")


def _target_epoch(
    day_entries: Sequence[DiaryEntry],
    date_iso: str,
    tz: ZoneInfo,
    prefer_pain_as_target: bool,
) -> float | None:
    timed = [
        e for e in day_entries
        if e.selected_date and parse_selected_time(e.selected_time) is not None
    ]
    if prefer_pain_as_target:
        pain = [e for e in timed if _is_pain_entry(e)]
        if pain:
            timed = pain

    epochs = [t for t in (_entry_epoch(e, tz) for e in timed) if t is not None]
    if epochs:
        return min(epochs)
    return local_time_to_epoch(date_iso, 12, 0, tz)


def _distance(epoch: float | None, target: float | None) -> float:
    if epoch is None or target is None:
        return float("inf")
    return abs(epoch - target)


def _pick_nearest_entry(
    entries: Sequence[DiaryEntry], target: float | None, tz: ZoneInfo
) -> DiaryEntry:
    return min(
        entries,
        key=lambda e: (_distance(_entry_epoch(e, tz), target), e.weather_id),
    )


def _pick_snapshot(
    logs: Sequence[WeatherLog], target: float | None
) -> tuple[WeatherLog, str]:
    """Nearest snapshot by ``requested_at``; lowest id when none carry a time."""
    timed = [
        (log, parse_timestamp(log.requested_at)) for log in logs
    ]
    timed = [(log, ts) for log, ts in timed if ts is not None]
    if timed:
        best, _ = min(
            timed,
            key=lambda pair: (_distance(pair[1].timestamp(), target), pair[0].id),
        )
        return best, JOIN_SNAPSHOT_NEAREST
    return min(logs, key=lambda log: log.id), JOIN_SNAPSHOT_LOWEST_ID


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def build_day_features(
    days: Iterable[DayRecord],
    entries: Iterable[DiaryEntry],
    weather_logs: Iterable[WeatherLog],
    timezone_name: str = DEFAULT_TIMEZONE,
    prefer_pain_as_target: bool = True,
) -> DayFeatureBuild:
    """Join diary days with weather readings into one DayFeature per documented day.

    Args:
        days:                  Per-day diary records; undocumented days are dropped.
        entries:               Diary entries used for target times and entry weather.
        weather_logs:          Candidate weather readings.
        timezone_name:         IANA timezone of the diary.
        prefer_pain_as_target: Use the earliest pain entry as the day's target time.

    Returns:
        DayFeatureBuild with features in input day order and provenance counts.

    Raises:
        InvalidTimezoneError: If ``timezone_name`` is not a known zone.
    """
    tz = resolve_timezone(timezone_name)
    days = list(days)
    valid_days = {d.date for d in days}

    weather_by_id: dict[int, WeatherLog] = {}
    snapshots_by_date: dict[str, list[WeatherLog]] = {}
    for log in weather_logs:
        weather_by_id[log.id] = log
        date_key = log.snapshot_date or to_local_date_iso(log.requested_at, tz)
        if date_key:
            snapshots_by_date.setdefault(date_key, []).append(log)

    entries_by_date: dict[str, list[DiaryEntry]] = {}
    skipped = 0
    for entry in entries:
        key = _entry_day_key(entry, tz)
        if key is None:
            skipped += 1
            continue
        if key in valid_days:
            entries_by_date.setdefault(key, []).append(entry)
    if skipped:
        logger.warning("Skipped %d diary entries with no resolvable date", skipped)

    features: list[DayFeature] = []
    counts = {WeatherCoverage.ENTRY: 0, WeatherCoverage.SNAPSHOT: 0, WeatherCoverage.NONE: 0}

    for day in days:
        if not day.documented:
            continue

        day_entries = entries_by_date.get(day.date, [])
        target = _target_epoch(day_entries, day.date, tz, prefer_pain_as_target)

        log: WeatherLog | None = None
        coverage = WeatherCoverage.NONE
        reason = JOIN_NO_WEATHER

        linked = [e for e in day_entries if e.weather_id is not None]
        if linked:
            best = _pick_nearest_entry(linked, target, tz)
            log = weather_by_id.get(best.weather_id)
            if log is None:
                logger.warning("Entry weather_id %s on %s not found", best.weather_id, day.date)
            else:
                coverage = WeatherCoverage.ENTRY
                reason = JOIN_ENTRY_NEAREST

        if log is None and snapshots_by_date.get(day.date):
            log, reason = _pick_snapshot(snapshots_by_date[day.date], target)
            coverage = WeatherCoverage.SNAPSHOT

        counts[coverage] += 1
        features.append(
            DayFeature(
                date=day.date,
                documented=True,
                had_headache=day.headache,
                pain_max=day.pain_max if day.pain_max is not None else 0.0,
                had_acute_med=day.acute_med_used is True,
                pressure_mb=log.pressure_mb if log else None,
                pressure_change_24h=log.pressure_change_24h if log else None,
                temperature_c=log.temperature_c if log else None,
                humidity=log.humidity if log else None,
                weather_coverage=coverage,
                join_reason=reason,
            )
        )

    coverage_counts = CoverageCounts(
        days_with_entry_weather=counts[WeatherCoverage.ENTRY],
        days_with_snapshot_weather=counts[WeatherCoverage.SNAPSHOT],
        days_with_no_weather=counts[WeatherCoverage.NONE],
    )
    logger.info(
        "Built %d day features (entry=%d, snapshot=%d, none=%d)",
        len(features),
        coverage_counts.days_with_entry_weather,
        coverage_counts.days_with_snapshot_weather,
        coverage_counts.days_with_no_weather,
    )
    return DayFeatureBuild(features=features, coverage_counts=coverage_counts)
