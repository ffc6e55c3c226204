"""
Risk level display labels.
"""

from __future__ import annotations

from tripsafety.models.risk_models import RiskLevel

RISK_LEVEL_LABELS: dict[RiskLevel, str] = {
    RiskLevel.GREEN: "Aman",
    RiskLevel.YELLOW: "Perlu Perhatian",
    RiskLevel.RED: "Risiko Tinggi",
}


def get_risk_level_label(level: RiskLevel | str) -> str:
    """Human-readable label for a risk level ("GREEN" -> "Aman")."""
    return RISK_LEVEL_LABELS[RiskLevel(level)]
