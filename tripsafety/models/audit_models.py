"""
Audit Data Models — One persisted record per risk assessment.
"""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field

from tripsafety.models.risk_models import OverrideDecision, RiskAssessment


class AssessmentAuditEntry(BaseModel):
    """An assessment as recorded in the audit trail, verbatim."""

    trip_id: str = Field(..., description="Trip the assessment was made for")
    guide_id: str | None = Field(default=None, description="Guide who ran the checklist")
    assessment: RiskAssessment
    override: OverrideDecision | None = None
    timestamp: datetime | None = Field(
        default=None, description="Set by the audit logger when the entry is written"
    )
