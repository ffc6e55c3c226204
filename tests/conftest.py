"""
Test fixtures shared across all TripSafety tests.
"""

from datetime import datetime, timezone

import pytest

from tripsafety.core.risk_scorer import get_risk_level
from tripsafety.models.audit_models import AssessmentAuditEntry
from tripsafety.models.risk_models import (
    CertificationStatus,
    ChecklistResponse,
    EquipmentStatus,
    RiskAssessment,
    WeatherData,
)

FIXED_NOW = datetime(2026, 10, 15, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def fixed_clock():
    """Clock pinned to 2026-10-15 12:00 UTC."""
    return lambda: FIXED_NOW


@pytest.fixture
def all_checked():
    return [
        ChecklistResponse(item_id="lifejacket_briefing", checked=True),
        ChecklistResponse(item_id="radio_check", checked=True),
    ]


@pytest.fixture
def storm_weather():
    return WeatherData(condition="storm", has_alert=True, wind_speed=35)


@pytest.fixture
def lifejacket_shortage():
    return EquipmentStatus(
        total_items=10,
        checked_items=10,
        items_needing_repair=0,
        lifejacket_count=3,
        passenger_count=5,
    )


@pytest.fixture
def one_expired_cert():
    return CertificationStatus(
        valid_certifications=5,
        expired_certifications=1,
        expiring_within_30_days=0,
    )


@pytest.fixture
def make_entry():
    """Factory for audit entries with a given score and timestamp."""

    def _make(score: int, assessed_at: datetime, trip_id: str = "TRIP-001") -> AssessmentAuditEntry:
        level = get_risk_level(score)
        assessment = RiskAssessment(
            score=score,
            level=level,
            blocked=score >= 61,
            override_allowed=score < 80,
            assessed_at=assessed_at,
        )
        return AssessmentAuditEntry(trip_id=trip_id, assessment=assessment)

    return _make
