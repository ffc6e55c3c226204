"""
Tests for the trip start gate and supervisor override decisions.
"""

import pytest

from tripsafety.core.risk_levels import get_risk_level_label
from tripsafety.core.risk_scorer import calculate_risk_score
from tripsafety.core.trip_gate import OverrideRequestError, can_trip_start, evaluate_override
from tripsafety.models.risk_models import (
    CertificationStatus,
    ChecklistResponse,
    RiskLevel,
    WeatherData,
)


@pytest.fixture
def soft_red():
    """Blocked at 68: RED but below the override ceiling, no critical factor."""
    responses = [ChecklistResponse(item_id=f"i{i}", checked=i < 3) for i in range(10)]
    return calculate_risk_score(
        responses,
        weather=WeatherData(condition="Berawan", has_alert=True, wind_speed=25),
    )


@pytest.fixture
def hard_red():
    return calculate_risk_score([])


def test_unblocked_trip_starts(all_checked):
    risk = calculate_risk_score(all_checked)
    assert can_trip_start(risk) is True
    assert can_trip_start(risk, admin_override=True) is True


def test_soft_red_needs_override(soft_red):
    assert soft_red.blocked is True
    assert can_trip_start(soft_red) is False
    assert can_trip_start(soft_red, admin_override=True) is True


def test_hard_red_never_starts(hard_red):
    assert can_trip_start(hard_red) is False
    assert can_trip_start(hard_red, admin_override=True) is False


def test_override_approved_for_soft_red(soft_red):
    decision = evaluate_override(soft_red, approved_by="ops-supervisor", reason="  Cuaca membaik  ")
    assert decision.approved is True
    assert decision.denial_reason is None
    assert decision.reason == "Cuaca membaik"
    assert decision.score == 68
    assert decision.level == RiskLevel.RED


def test_override_denied_above_ceiling(hard_red):
    decision = evaluate_override(hard_red, approved_by="ops-supervisor", reason="Tamu VIP")
    assert decision.approved is False
    assert decision.denial_reason == "Risk score 100 >= 80, override tidak diizinkan"


def test_override_denied_for_critical_factor():
    risk = calculate_risk_score(
        [],
        certifications=CertificationStatus(
            valid_certifications=5, expired_certifications=1, expiring_within_30_days=0
        ),
    )
    assert risk.score == 76
    decision = evaluate_override(risk, approved_by="ops-supervisor", reason="Sertifikat diperpanjang")
    assert decision.approved is False
    assert decision.denial_reason == "Faktor kritis: Safety Checklist"


def test_override_on_unblocked_trip_is_approved(all_checked):
    decision = evaluate_override(
        calculate_risk_score(all_checked), approved_by="ops-supervisor", reason="Konfirmasi"
    )
    assert decision.approved is True
    assert decision.override_required is False
    assert decision.note == "Trip tidak diblokir, override tidak diperlukan"


def test_blocked_override_is_marked_required(soft_red):
    decision = evaluate_override(soft_red, approved_by="ops-supervisor", reason="Cuaca membaik")
    assert decision.override_required is True
    assert decision.note is None


def test_override_strips_supervisor_and_reason(soft_red):
    decision = evaluate_override(soft_red, approved_by="  ops-supervisor ", reason=" Cuaca membaik ")
    assert decision.approved_by == "ops-supervisor"
    assert decision.reason == "Cuaca membaik"


@pytest.mark.parametrize("approved_by, reason", [("ops-supervisor", ""), ("ops-supervisor", "   "), ("", "ok")])
def test_override_requires_supervisor_and_reason(soft_red, approved_by, reason):
    with pytest.raises(OverrideRequestError):
        evaluate_override(soft_red, approved_by=approved_by, reason=reason)


def test_risk_level_labels():
    assert get_risk_level_label(RiskLevel.GREEN) == "Aman"
    assert get_risk_level_label("YELLOW") == "Perlu Perhatian"
    assert get_risk_level_label(RiskLevel.RED) == "Risiko Tinggi"
