"""Semicolon separated export of traffic flow summaries."""

from __future__ import annotations

from typing import Sequence

from src.domain.entities.traffic_flow import TrafficFlowSummary
from src.shared.consts import TRAFFIC_FLOW_CSV_HEADER


def _csv_row(summary: TrafficFlowSummary) -> str:
    lanes = ";".join(
        f"{count};{speed:.1f}"
        for count, speed in zip(summary.intensity, summary.average_speed)
    )
    observed = summary.date_observed.strftime("%Y-%m-%dT%H:%M:%SZ")
    return f"{observed};{summary.road_segment};{lanes}"


def render_traffic_flow_csv(summaries: Sequence[TrafficFlowSummary]) -> str:
    """Header plus one CRLF separated row per segment and observation time."""
    rows = [TRAFFIC_FLOW_CSV_HEADER]
    rows.extend(_csv_row(summary) for summary in summaries)
    return "\r\n".join(rows)
