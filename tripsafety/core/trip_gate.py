"""
Trip Start Gate — Decides whether a trip may start given its assessment.

An unblocked trip starts freely. A blocked (RED) trip starts only with a
supervisor override that passes can_admin_override().
"""

from __future__ import annotations

import logging

from tripsafety.core.risk_scorer import OVERRIDE_CEILING, can_admin_override
from tripsafety.models.risk_models import OverrideDecision, RiskAssessment

logger = logging.getLogger("tripsafety.gate")


class OverrideRequestError(ValueError):
    """Raised when an override request is missing required information."""


def can_trip_start(assessment: RiskAssessment, admin_override: bool = False) -> bool:
    """Whether the trip may start, optionally with an admin override."""
    if not assessment.blocked:
        return True
    return admin_override and can_admin_override(assessment)


def evaluate_override(
    assessment: RiskAssessment,
    approved_by: str,
    reason: str,
) -> OverrideDecision:
    """
    Evaluate a supervisor override request against the override policy.

    Args:
        assessment: The assessment the supervisor wants to bypass.
        approved_by: Identifier of the supervisor making the request.
        reason: Free-text justification; required.

    Returns:
        OverrideDecision, approved or denied with the denial reason.

    Raises:
        OverrideRequestError: If approved_by or reason is blank.
    """
    if not approved_by or not approved_by.strip():
        raise OverrideRequestError("Override requires the approving supervisor")
    if not reason or not reason.strip():
        raise OverrideRequestError("Override requires a reason")

    denial_reason: str | None = None
    if assessment.blocked and not can_admin_override(assessment):
        if assessment.score >= OVERRIDE_CEILING:
            denial_reason = (
                f"Risk score {assessment.score} >= {OVERRIDE_CEILING}, override tidak diizinkan"
            )
        else:
            critical = [f.name for f in assessment.factors if f.value >= OVERRIDE_CEILING]
            if critical:
                denial_reason = f"Faktor kritis: {', '.join(critical)}"
            else:
                denial_reason = "Override tidak diizinkan untuk assessment ini"

    decision = OverrideDecision(
        approved=denial_reason is None,
        approved_by=approved_by.strip(),
        reason=reason.strip(),
        score=assessment.score,
        level=assessment.level,
        override_required=assessment.blocked,
        note=None if assessment.blocked else "Trip tidak diblokir, override tidak diperlukan",
        denial_reason=denial_reason,
    )

    if not decision.override_required:
        logger.info(
            "Override not required for %s (score=%d level=%s)",
            decision.approved_by,
            assessment.score,
            assessment.level.value,
        )
    elif decision.approved:
        logger.info(
            "Override approved by %s (score=%d level=%s)",
            decision.approved_by,
            assessment.score,
            assessment.level.value,
        )
    else:
        logger.warning(
            "Override denied for %s (score=%d): %s",
            decision.approved_by,
            assessment.score,
            denial_reason,
        )

    return decision
