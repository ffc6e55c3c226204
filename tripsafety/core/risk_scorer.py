"""
Risk Scoring Engine — Pre-trip safety risk assessment.

Risk Score = Σ(factor_value × factor_weight) / Σ(factor_weight)

Only factors whose input was supplied take part in the blend; the checklist
is always evaluated. Levels: GREEN (0-30), YELLOW (31-60), RED (61-100).
A RED trip is blocked. Scores 61-79 remain overridable, 80+ never are.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Callable, Sequence

from tripsafety.models.risk_models import (
    CertificationStatus,
    ChecklistResponse,
    EquipmentStatus,
    RiskAssessment,
    RiskFactor,
    RiskInput,
    RiskLevel,
    RiskSource,
    WeatherData,
)

logger = logging.getLogger("tripsafety.risk")

CHECKLIST_WEIGHT = 0.3
WEATHER_WEIGHT = 0.25
EQUIPMENT_WEIGHT = 0.25
CERTIFICATION_WEIGHT = 0.2

GREEN_MAX_SCORE = 30
YELLOW_MAX_SCORE = 60
OVERRIDE_CEILING = 80

BAD_WEATHER_KEYWORDS = ("storm", "heavy rain", "thunderstorm", "badai", "hujan lebat")

Clock = Callable[[], datetime]


@dataclass
class FactorScore:
    """Intermediate result of one factor calculator."""

    score: float
    details: str
    recommendations: list[str] = field(default_factory=list)


def round_half_up(value: float) -> int:
    """Round .5 upwards, unlike the built-in round() which rounds to even."""
    # Compare the fractional part; value + 0.5 can round up in float arithmetic
    whole = math.floor(value)
    return whole + 1 if value - whole >= 0.5 else whole


def _format_number(value: float) -> str:
    # 35.0 -> "35", 2.5 -> "2.5"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def calculate_checklist_risk(responses: Sequence[ChecklistResponse]) -> FactorScore:
    if not responses:
        return FactorScore(
            score=100,
            details="Checklist belum dilengkapi",
            recommendations=["Lengkapi safety checklist sebelum memulai trip"],
        )

    checked_count = sum(1 for r in responses if r.checked)
    unchecked_count = len(responses) - checked_count
    completion_rate = checked_count / len(responses)

    recommendations: list[str] = []
    if unchecked_count > 0:
        recommendations.append(f"{unchecked_count} item checklist belum dicentang")

    return FactorScore(
        score=round_half_up((1 - completion_rate) * 100),
        details=f"{checked_count}/{len(responses)} item selesai",
        recommendations=recommendations,
    )


def calculate_weather_risk(weather: WeatherData) -> FactorScore:
    """
    Additive weather score; every matching condition stacks.

        alert            +50
        wind > 30 km/h   +30   (wind > 20 km/h  +15)
        wave > 2 m       +40   (wave > 1 m      +20)
        visibility < 1km +20
        storm keywords   +30
    """
    score = 0
    recommendations: list[str] = []

    if weather.has_alert:
        score += 50
        recommendations.append(f"Peringatan cuaca: {weather.alert_type or 'Aktif'}")

    if weather.wind_speed is not None:
        if weather.wind_speed > 30:
            score += 30
            recommendations.append(
                f"Angin kencang ({_format_number(weather.wind_speed)} km/h) - Pertimbangkan penundaan"
            )
        elif weather.wind_speed > 20:
            score += 15

    if weather.wave_height is not None:
        if weather.wave_height > 2:
            score += 40
            recommendations.append(
                f"Gelombang tinggi ({_format_number(weather.wave_height)}m) - Tidak aman untuk aktivitas laut"
            )
        elif weather.wave_height > 1:
            score += 20

    if weather.visibility is not None and weather.visibility < 1:
        score += 20
        recommendations.append("Visibility rendah - Hati-hati navigasi")

    condition = weather.condition.lower()
    if any(keyword in condition for keyword in BAD_WEATHER_KEYWORDS):
        score += 30

    return FactorScore(
        score=min(score, 100),
        details=weather.condition,
        recommendations=recommendations,
    )


def calculate_equipment_risk(equipment: EquipmentStatus) -> FactorScore:
    score = 0
    recommendations: list[str] = []

    if equipment.total_items > 0:
        completion_rate = equipment.checked_items / equipment.total_items
        score += round_half_up((1 - completion_rate) * 40)

    if equipment.items_needing_repair > 0:
        score += equipment.items_needing_repair * 15
        recommendations.append(f"{equipment.items_needing_repair} peralatan perlu perbaikan")

    # Missing life jackets alone push the factor to at least 50
    if equipment.lifejacket_count < equipment.passenger_count:
        deficit = equipment.passenger_count - equipment.lifejacket_count
        score += 50
        recommendations.append(f"KRITIS: Kekurangan {deficit} life jacket untuk penumpang")

    return FactorScore(
        score=min(score, 100),
        details=f"{equipment.checked_items}/{equipment.total_items} peralatan siap",
        recommendations=recommendations,
    )


def calculate_certification_risk(certifications: CertificationStatus) -> FactorScore:
    score = 0
    recommendations: list[str] = []

    if certifications.expired_certifications > 0:
        score += certifications.expired_certifications * 40
        recommendations.append(
            f"KRITIS: {certifications.expired_certifications} sertifikasi sudah expired"
        )

    if certifications.expiring_within_30_days > 0:
        score += certifications.expiring_within_30_days * 10
        recommendations.append(
            f"{certifications.expiring_within_30_days} sertifikasi akan expired dalam 30 hari"
        )

    return FactorScore(
        score=min(score, 100),
        details=f"{certifications.valid_certifications} sertifikasi valid",
        recommendations=recommendations,
    )


def aggregate_factors(factors: Sequence[RiskFactor]) -> int:
    """Weighted mean of the present factors, rounded half-up."""
    total_weight = sum(f.weight for f in factors)
    weighted_score = sum(f.value * f.weight for f in factors)
    return round_half_up(weighted_score / total_weight)


def get_risk_level(score: float) -> RiskLevel:
    """Map a blended score to its GREEN / YELLOW / RED bucket."""
    if score <= GREEN_MAX_SCORE:
        return RiskLevel.GREEN
    if score <= YELLOW_MAX_SCORE:
        return RiskLevel.YELLOW
    return RiskLevel.RED


def calculate_risk_score(
    checklist_responses: Sequence[ChecklistResponse],
    weather: WeatherData | None = None,
    equipment: EquipmentStatus | None = None,
    certifications: CertificationStatus | None = None,
    passenger_count: int | None = None,
    *,
    now: Clock | None = None,
) -> RiskAssessment:
    """
    Compute a deterministic risk assessment for a trip about to start.

    Args:
        checklist_responses: Safety checklist line items; may be empty.
        weather: Optional weather snapshot.
        equipment: Optional equipment inventory counts.
        certifications: Optional guide/crew certification counts.
        passenger_count: Informational only, not scored separately.
        now: Optional clock for assessed_at (defaults to UTC wall-clock).

    Returns:
        RiskAssessment with per-factor breakdown, block decision and
        recommendations in factor order (checklist, weather, equipment,
        certification).
    """
    candidates: list[tuple[str, str, float, RiskSource, FactorScore]] = [
        (
            "checklist",
            "Safety Checklist",
            CHECKLIST_WEIGHT,
            RiskSource.CHECKLIST,
            calculate_checklist_risk(checklist_responses),
        )
    ]
    if weather is not None:
        candidates.append(
            ("weather", "Kondisi Cuaca", WEATHER_WEIGHT, RiskSource.WEATHER, calculate_weather_risk(weather))
        )
    if equipment is not None:
        candidates.append(
            (
                "equipment",
                "Kondisi Peralatan",
                EQUIPMENT_WEIGHT,
                RiskSource.EQUIPMENT,
                calculate_equipment_risk(equipment),
            )
        )
    if certifications is not None:
        candidates.append(
            (
                "certification",
                "Sertifikasi",
                CERTIFICATION_WEIGHT,
                RiskSource.CERTIFICATION,
                calculate_certification_risk(certifications),
            )
        )

    factors: list[RiskFactor] = []
    recommendations: list[str] = []
    for factor_id, name, weight, source, result in candidates:
        factors.append(
            RiskFactor(
                id=factor_id,
                name=name,
                weight=weight,
                value=result.score,
                source=source,
                details=result.details,
            )
        )
        recommendations.extend(result.recommendations)

    score = aggregate_factors(factors)
    level = get_risk_level(score)

    blocked = level == RiskLevel.RED
    block_reason = (
        f"Risk score {score} melebihi ambang batas aman ({YELLOW_MAX_SCORE}). Trip tidak dapat dimulai."
        if blocked
        else None
    )

    logger.info(
        "Risk assessment calculated: score=%d level=%s blocked=%s factors=%d passengers=%s",
        score,
        level.value,
        blocked,
        len(factors),
        passenger_count,
    )

    return RiskAssessment(
        score=score,
        level=level,
        factors=factors,
        blocked=blocked,
        block_reason=block_reason,
        # RED below the ceiling stays overridable
        override_allowed=level != RiskLevel.RED or score < OVERRIDE_CEILING,
        recommendations=recommendations,
        assessed_at=(now or _utc_now)(),
    )


def assess(risk_input: RiskInput, *, now: Clock | None = None) -> RiskAssessment:
    """Run calculate_risk_score over a bundled RiskInput."""
    return calculate_risk_score(
        risk_input.checklist_responses,
        weather=risk_input.weather,
        equipment=risk_input.equipment,
        certifications=risk_input.certifications,
        passenger_count=risk_input.passenger_count,
        now=now,
    )


def can_admin_override(assessment: RiskAssessment) -> bool:
    """
    Stricter override gate on top of assessment.override_allowed.

    Denied when the blended score is at or above the ceiling, or when any
    single factor is itself at or above it.
    """
    if assessment.score >= OVERRIDE_CEILING:
        return False

    critical_factors = [f for f in assessment.factors if f.value >= OVERRIDE_CEILING]
    if critical_factors:
        return False

    return assessment.override_allowed
