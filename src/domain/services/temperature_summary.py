"""Calendar grouping and summaries for temperature series."""

from __future__ import annotations

from datetime import timezone
from typing import Dict, List, Optional, Sequence

from src.domain.entities.time_series import TimeSeriesSample
from src.domain.entities.weather import CalendarResolution, TemperatureSummary

SUMMARY_PRECISION = 2

# Length of the RFC 3339 prefix shared by samples in the same group.
_PREFIX_LENGTH = {
    CalendarResolution.HOUR: 13,
    CalendarResolution.DAY: 10,
    CalendarResolution.MONTH: 7,
    CalendarResolution.YEAR: 4,
}


def summarise(samples: Sequence[TimeSeriesSample]) -> Optional[TemperatureSummary]:
    """Average, extremes and bounds of ``samples`` (ascending by time)."""
    if not samples:
        return None
    values = [sample.value for sample in samples]
    return TemperatureSummary(
        average=round(sum(values) / len(values), SUMMARY_PRECISION),
        min=min(values),
        max=max(values),
        start=samples[0].timestamp,
        end=samples[-1].timestamp,
    )


def group_by_calendar(
    samples: Sequence[TimeSeriesSample], resolution: CalendarResolution
) -> List[TemperatureSummary]:
    """One summary per calendar hour/day/month/year, in chronological order."""

    length = _PREFIX_LENGTH[resolution]
    groups: Dict[str, List[TimeSeriesSample]] = {}
    for sample in sorted(samples, key=lambda s: s.timestamp):
        instant = sample.timestamp.astimezone(timezone.utc)
        key = instant.strftime("%Y-%m-%dT%H:%M:%SZ")[:length]
        groups.setdefault(key, []).append(sample)

    summaries: List[TemperatureSummary] = []
    for key in sorted(groups):
        summary = summarise(groups[key])
        if summary is not None:
            summaries.append(summary)
    return summaries
