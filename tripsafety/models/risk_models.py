"""
Risk Assessment Data Models — Pre-trip safety inputs and the assessment verdict.

Inputs are immutable value objects shaped by the data-gathering layer.
Every model accepts both snake_case names and the camelCase names sent by the
web client (itemId, windSpeed, checkedItems, ...).
"""

from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class RiskLevel(str, Enum):
    GREEN = "GREEN"
    YELLOW = "YELLOW"
    RED = "RED"


class RiskSource(str, Enum):
    """Origin of a risk factor."""

    CHECKLIST = "checklist"
    WEATHER = "weather"
    EQUIPMENT = "equipment"
    CERTIFICATION = "certification"
    PASSENGER = "passenger"
    CUSTOM = "custom"


class _InputModel(BaseModel):
    model_config = ConfigDict(
        frozen=True,
        populate_by_name=True,
        alias_generator=to_camel,
    )


class ChecklistResponse(_InputModel):
    """Completion state of one safety checklist line item."""

    item_id: str
    checked: bool
    notes: str | None = None


class WeatherData(_InputModel):
    """Current weather snapshot at the trip's departure point."""

    condition: str = Field(..., description="Free-text condition, e.g. 'Cerah', 'heavy rain'")
    wind_speed: float | None = Field(default=None, description="Wind speed in km/h")
    wave_height: float | None = Field(default=None, description="Wave height in meters")
    visibility: float | None = Field(default=None, description="Visibility in km")
    has_alert: bool | None = None
    alert_type: str | None = None


class EquipmentStatus(_InputModel):
    """Equipment inventory counts for the trip's vessel."""

    total_items: int
    checked_items: int
    items_needing_repair: int
    lifejacket_count: int
    passenger_count: int


class CertificationStatus(_InputModel):
    """Certification counts for the assigned guide and crew."""

    valid_certifications: int
    expired_certifications: int
    expiring_within_30_days: int


class RiskInput(_InputModel):
    """Everything the engine consumes for one assessment, bundled."""

    checklist_responses: list[ChecklistResponse] = Field(default_factory=list)
    weather: WeatherData | None = None
    equipment: EquipmentStatus | None = None
    certifications: CertificationStatus | None = None
    passenger_count: int | None = Field(
        default=None, description="Informational only; equipment scoring uses equipment.passenger_count"
    )


class RiskFactor(BaseModel):
    """One scored contributor to the overall trip risk."""

    model_config = ConfigDict(populate_by_name=True, alias_generator=to_camel)

    id: str = Field(..., description="Factor source identifier, e.g. 'checklist'")
    name: str
    weight: float = Field(..., description="Relative contribution, 0-1")
    value: float = Field(..., description="This factor's own risk score, 0-100")
    source: RiskSource
    details: str | None = None


class RiskAssessment(BaseModel):
    """Deterministic risk verdict for a trip about to start."""

    model_config = ConfigDict(populate_by_name=True, alias_generator=to_camel)

    score: int = Field(..., description="Weighted risk score 0-100")
    level: RiskLevel
    factors: list[RiskFactor] = Field(default_factory=list)
    blocked: bool
    block_reason: str | None = None
    override_allowed: bool
    recommendations: list[str] = Field(default_factory=list)
    assessed_at: datetime


class OverrideDecision(BaseModel):
    """Outcome of a supervisor's request to force-start a blocked trip."""

    model_config = ConfigDict(populate_by_name=True, alias_generator=to_camel)

    approved: bool
    approved_by: str
    reason: str
    score: int
    level: RiskLevel
    override_required: bool = Field(
        default=True, description="False when the trip was not blocked in the first place"
    )
    note: str | None = None
    denial_reason: str | None = None
    decided_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
