"""
Windowed aggregation of time series - Domain Layer

Buckets a chronologically ordered series into contiguous fixed-size
windows and computes avg/min/max per window.
"""

from __future__ import annotations

from datetime import datetime
from typing import Iterable, List, Optional, Sequence, Union

from src.domain.entities.errors import AggregationConfigError
from src.domain.entities.time_series import (
    AggregateFunction,
    AggregateWindow,
    TimeSeriesSample,
    WindowDuration,
)

AggregateResult = Union[AggregateWindow, TimeSeriesSample]

# Averages are rounded to ``precision`` decimals, extremes always to one.
EXTREME_PRECISION = 1


def parse_window(window: Union[str, WindowDuration]) -> WindowDuration:
    try:
        return WindowDuration(window)
    except ValueError as exc:
        supported = ", ".join(w.value for w in WindowDuration)
        raise AggregationConfigError(
            f"aggregation period {window} not in supported set [{supported}]",
            details={"window": str(window)},
        ) from exc


def parse_functions(
    functions: Union[str, Iterable[str], None],
) -> List[AggregateFunction]:
    """Parse ``"avg,max"`` style input. Empty input means pass-through."""

    if functions is None:
        return []
    names = functions.split(",") if isinstance(functions, str) else list(functions)

    parsed: List[AggregateFunction] = []
    for name in (n.strip() for n in names):
        if not name:
            continue
        try:
            function = AggregateFunction(name)
        except ValueError as exc:
            raise AggregationConfigError(
                f"aggregation method {name} not in supported set [avg, max, min]",
                details={"function": name},
            ) from exc
        if function not in parsed:
            parsed.append(function)
    return parsed


class WindowedAggregator:
    """Pure bucketing of samples into ``[start, start + duration)`` windows."""

    def __init__(self, precision: int = 1) -> None:
        self._precision = precision

    def aggregate(
        self,
        samples: Sequence[TimeSeriesSample],
        window: Union[str, WindowDuration],
        functions: Union[str, Iterable[str], None],
        start: Optional[datetime] = None,
    ) -> List[AggregateResult]:
        """
        Aggregate ``samples`` per window.

        Args:
            samples: Samples sorted by ascending timestamp.
            window: One of the supported ``WindowDuration`` values.
            functions: Subset of avg/max/min. Empty means the samples are
                returned unchanged.
            start: Start of the first window, defaults to the first sample.

        Raises:
            AggregationConfigError: For unsupported windows or functions.
        """
        # Validate before looking at the data so bad input never yields windows.
        duration = parse_window(window).delta
        requested = parse_functions(functions)

        if not samples:
            return []
        if not requested:
            return list(samples)

        window_start = start if start is not None else samples[0].timestamp
        window_end = window_start + duration

        results: List[AggregateResult] = []
        bucket: List[float] = []

        for sample in samples:
            if sample.timestamp < window_end:
                bucket.append(sample.value)
                continue

            if bucket:
                results.append(
                    self._build_window(window_start, window_end, bucket, requested)
                )
                bucket = []

            # Skip past empty windows without materialising them.
            while sample.timestamp >= window_end:
                window_start = window_end
                window_end = window_start + duration
            bucket.append(sample.value)

        if bucket:
            results.append(
                self._build_window(window_start, window_end, bucket, requested)
            )

        return results

    def _build_window(
        self,
        start: datetime,
        end: datetime,
        values: List[float],
        requested: List[AggregateFunction],
    ) -> AggregateWindow:
        average = minimum = maximum = None
        if AggregateFunction.AVERAGE in requested:
            average = round(sum(values) / len(values), self._precision)
        if AggregateFunction.MIN in requested:
            minimum = round(min(values), EXTREME_PRECISION)
        if AggregateFunction.MAX in requested:
            maximum = round(max(values), EXTREME_PRECISION)

        return AggregateWindow(
            start=start, end=end, average=average, min=minimum, max=maximum
        )
