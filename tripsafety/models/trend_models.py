"""
Risk Trend Data Models — Aggregated assessment history.
"""

from __future__ import annotations

import datetime as dt
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

GroupBy = Literal["day", "week", "month"]


class TrendBucket(BaseModel):
    """Assessments falling in one day, week or month."""

    model_config = ConfigDict(populate_by_name=True, alias_generator=to_camel)

    date: dt.date = Field(..., description="Bucket start: the day, the Monday of the week, or the 1st of the month")
    count: int
    avg_risk_score: float
    min_risk_score: int
    max_risk_score: int
    safe_count: int
    unsafe_count: int
    safe_percentage: float = Field(..., description="Share of unblocked assessments, 0-100")


class TrendStatistics(BaseModel):
    """Totals across the whole trend window."""

    model_config = ConfigDict(populate_by_name=True, alias_generator=to_camel)

    total: int = 0
    avg_risk_score: float = 0.0
    safe_count: int = 0
    unsafe_count: int = 0
    safe_percentage: float = 0.0


class RiskTrend(BaseModel):
    model_config = ConfigDict(populate_by_name=True, alias_generator=to_camel)

    group_by: GroupBy
    days: int
    trip_id: str | None = None
    trend_data: list[TrendBucket] = Field(default_factory=list)
    statistics: TrendStatistics = Field(default_factory=TrendStatistics)
