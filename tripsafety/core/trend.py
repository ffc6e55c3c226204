"""
Risk Trend Analysis — Aggregates audited assessments over time.

Buckets assessments by day, ISO week (keyed by its Monday) or month (keyed by
its 1st), and reports average / min / max score and the safe share per bucket.
A "safe" assessment is one that was not blocked.
"""

from __future__ import annotations

import logging
from collections import defaultdict
from datetime import date, datetime, timedelta, timezone
from typing import Sequence

from tripsafety.config import settings
from tripsafety.models.audit_models import AssessmentAuditEntry
from tripsafety.models.trend_models import GroupBy, RiskTrend, TrendBucket, TrendStatistics

logger = logging.getLogger("tripsafety.trend")

GROUP_BY_CHOICES = ("day", "week", "month")


def _as_utc(moment: datetime) -> datetime:
    if moment.tzinfo is None:
        return moment.replace(tzinfo=timezone.utc)
    return moment.astimezone(timezone.utc)


def bucket_start(moment: datetime, group_by: GroupBy) -> date:
    """First day of the bucket containing moment (UTC)."""
    day = _as_utc(moment).date()
    if group_by == "week":
        return day - timedelta(days=day.weekday())
    if group_by == "month":
        return day.replace(day=1)
    return day


def _percentage(part: int, total: int) -> float:
    return round(part / total * 100, 2) if total else 0.0


def compute_risk_trend(
    entries: Sequence[AssessmentAuditEntry],
    group_by: GroupBy = "day",
    days: int | None = None,
    trip_id: str | None = None,
    now: datetime | None = None,
) -> RiskTrend:
    """
    Build a risk trend from audit entries.

    Args:
        entries: Audited assessments, in any order.
        group_by: "day", "week" or "month".
        days: Look-back window in days (defaults to settings.trend_default_days).
        trip_id: Only include assessments for this trip.
        now: Reference time for the window (defaults to UTC now).

    Returns:
        RiskTrend with buckets ordered by date and overall statistics.

    Raises:
        ValueError: On an unknown group_by or a window shorter than one day.
    """
    if group_by not in GROUP_BY_CHOICES:
        raise ValueError(f"Unknown group_by: {group_by!r} (expected one of {GROUP_BY_CHOICES})")

    window_days = settings.trend_default_days if days is None else days
    if window_days < 1:
        raise ValueError(f"days must be at least 1, got {window_days}")

    window_end = _as_utc(now or datetime.now(timezone.utc))
    cutoff = window_end - timedelta(days=window_days)

    selected = [
        e
        for e in entries
        if cutoff <= _as_utc(e.assessment.assessed_at) <= window_end
        and (trip_id is None or e.trip_id == trip_id)
    ]

    grouped: dict[date, list[AssessmentAuditEntry]] = defaultdict(list)
    for entry in selected:
        grouped[bucket_start(entry.assessment.assessed_at, group_by)].append(entry)

    buckets: list[TrendBucket] = []
    for start in sorted(grouped):
        scores = [e.assessment.score for e in grouped[start]]
        unsafe = sum(1 for e in grouped[start] if e.assessment.blocked)
        safe = len(scores) - unsafe
        buckets.append(
            TrendBucket(
                date=start,
                count=len(scores),
                avg_risk_score=round(sum(scores) / len(scores), 2),
                min_risk_score=min(scores),
                max_risk_score=max(scores),
                safe_count=safe,
                unsafe_count=unsafe,
                safe_percentage=_percentage(safe, len(scores)),
            )
        )

    total = len(selected)
    unsafe_total = sum(1 for e in selected if e.assessment.blocked)
    statistics = TrendStatistics(
        total=total,
        avg_risk_score=round(sum(e.assessment.score for e in selected) / total, 2) if total else 0.0,
        safe_count=total - unsafe_total,
        unsafe_count=unsafe_total,
        safe_percentage=_percentage(total - unsafe_total, total),
    )

    logger.debug(
        "Risk trend computed: group_by=%s days=%d buckets=%d total=%d",
        group_by,
        window_days,
        len(buckets),
        total,
    )

    return RiskTrend(
        group_by=group_by,
        days=window_days,
        trip_id=trip_id,
        trend_data=buckets,
        statistics=statistics,
    )
