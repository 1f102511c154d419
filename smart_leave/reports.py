"""
Report aggregation over leave requests.

Every series keeps the order in which keys first appear in the request
list, matching how the backend returns requests.
"""

from __future__ import annotations

from collections import Counter
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Any

from smart_leave.leave import parse_date
from smart_leave.models import LeaveRequest

_MONTHS = ("Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")


def leave_counts_per_user(requests: Sequence[LeaveRequest]) -> list[dict[str, Any]]:
    counts = Counter([req.user_name for req in requests])
    return [{"user": user, "count": count} for user, count in counts.items()]


def planned_vs_unplanned(requests: Sequence[LeaveRequest]) -> list[dict[str, Any]]:
    kinds = [req.leave_type_planned_and_unplanned for req in requests]
    return [
        {"label": "Planned", "value": kinds.count("PLANNED")},
        {"label": "Unplanned", "value": kinds.count("UNPLANNED")},
    ]


def leave_type_distribution(requests: Sequence[LeaveRequest]) -> list[dict[str, Any]]:
    counts = Counter([req.leave_type for req in requests])
    return [{"type": leave_type, "count": count} for leave_type, count in counts.items()]


def monthly_trend(requests: Sequence[LeaveRequest]) -> list[dict[str, Any]]:
    """Requests per start month (``Jan``..``Dec``); unparseable dates are skipped."""
    months = []
    for req in requests:
        start = parse_date(req.start_date)
        if start is not None:
            months.append(_MONTHS[start.month - 1])
    counts = Counter(months)
    return [{"month": month, "count": count} for month, count in counts.items()]


@dataclass
class ReportChart:
    title: str
    kind: str
    data: list[dict[str, Any]] = field(default_factory=list)
    series_label: str = ""

    @property
    def is_empty(self) -> bool:
        return not any((row.get("count") or row.get("value")) for row in self.data)


def build_report_charts(requests: Sequence[LeaveRequest]) -> list[ReportChart]:
    return [
        ReportChart("Leave Requests per User", "bar", leave_counts_per_user(requests), "Leaves"),
        ReportChart("Planned vs Unplanned Leaves", "pie", planned_vs_unplanned(requests)),
        ReportChart("Leave Type Distribution", "bar", leave_type_distribution(requests), "Count"),
        ReportChart("Monthly Leave Trend", "line", monthly_trend(requests), "Leaves per Month"),
    ]
