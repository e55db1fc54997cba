from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from src.domain.entities.errors import AggregationConfigError, ConfigurationError
from src.domain.entities.time_series import AggregateWindow, TimeSeriesSample
from src.domain.services.windowed_aggregator import (
    WindowedAggregator,
    parse_functions,
)

START = datetime(2021, 9, 1, 12, 0, tzinfo=timezone.utc)


def _series(spacing: timedelta, *values: float) -> list[TimeSeriesSample]:
    return [
        TimeSeriesSample(timestamp=START + spacing * i, value=value)
        for i, value in enumerate(values)
    ]


def test_hourly_average_over_twenty_minute_samples() -> None:
    samples = _series(timedelta(minutes=20), 1.0, 2.0, 3.0, 4.0, 5.23)

    windows = WindowedAggregator().aggregate(samples, "PT1H", "avg")

    assert [w.average for w in windows] == [2.0, 4.6]
    assert windows[0].start == START
    assert windows[0].end == START + timedelta(hours=1)
    assert windows[1].start == START + timedelta(hours=1)


def test_daily_average_over_twelve_hour_samples() -> None:
    samples = _series(timedelta(hours=12), 1, 2, 3, 4, 5)

    windows = WindowedAggregator().aggregate(samples, "PT24H", "avg")

    assert [w.average for w in windows] == [1.5, 3.5, 5.0]


def test_min_and_max_without_average() -> None:
    samples = _series(timedelta(minutes=20), 1.0, 2.0, 3.0, 4.0, 5.0)

    windows = WindowedAggregator().aggregate(samples, "PT1H", "max,min")

    assert len(windows) == 2
    assert windows[0].average is None
    assert windows[0].min == 1.0
    assert windows[1].max == 5.0


def test_unsupported_window_is_a_configuration_error() -> None:
    samples = _series(timedelta(hours=1), 1.0, 2.0)

    with pytest.raises(AggregationConfigError) as excinfo:
        WindowedAggregator().aggregate(samples, "P1M", "avg")

    assert isinstance(excinfo.value, ConfigurationError)
    assert excinfo.value.details == {"window": "P1M"}


def test_unknown_function_is_rejected() -> None:
    with pytest.raises(AggregationConfigError):
        parse_functions("avg,median")


def test_empty_buckets_are_skipped() -> None:
    samples = [
        TimeSeriesSample(START, 1.0),
        TimeSeriesSample(START + timedelta(minutes=10), 3.0),
        TimeSeriesSample(START + timedelta(hours=5, minutes=5), 7.0),
    ]

    windows = WindowedAggregator().aggregate(samples, "PT1H", ["avg"])

    assert len(windows) == 2
    assert windows[1].start == START + timedelta(hours=5)
    assert windows[1].average == 7.0


def test_explicit_start_anchors_the_first_window() -> None:
    samples = _series(timedelta(minutes=15), 1.0, 2.0, 3.0)
    anchor = START - timedelta(minutes=30)

    windows = WindowedAggregator().aggregate(samples, "PT1H", "avg", start=anchor)

    assert [(w.start, w.average) for w in windows] == [
        (anchor, 1.5),
        (anchor + timedelta(hours=1), 3.0),
    ]


def test_no_functions_passes_samples_through() -> None:
    samples = _series(timedelta(minutes=20), 1.0, 2.0)

    result = WindowedAggregator().aggregate(samples, "PT1H", "")

    assert result == samples
    assert not any(isinstance(item, AggregateWindow) for item in result)


def test_empty_input_returns_empty_output() -> None:
    assert WindowedAggregator().aggregate([], "P7D", "avg,min,max") == []


def test_precision_applies_to_averages_only() -> None:
    samples = _series(timedelta(minutes=1), 4.0, 5.24)

    (window,) = WindowedAggregator(precision=2).aggregate(samples, "PT15M", "avg,max")

    assert window.average == 4.62
    assert window.max == 5.2
