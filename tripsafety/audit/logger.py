"""
Audit Logger — Structured JSON-lines trail of risk assessments.

Records every assessment verbatim (factors and recommendations included)
with its trip, guide and any override decision, for later trend analysis.
"""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from pathlib import Path

from pydantic import ValidationError

from tripsafety.config import settings
from tripsafety.models.audit_models import AssessmentAuditEntry

logger = logging.getLogger("tripsafety.audit")


class AssessmentAuditLogger:
    """Writes assessment audit entries to a JSON-lines file."""

    def __init__(self, log_path: str | Path | None = None, enabled: bool | None = None) -> None:
        self.log_path = Path(log_path or settings.audit_log_path)
        self.enabled = settings.audit_enabled if enabled is None else enabled

    def log(self, entry: AssessmentAuditEntry) -> None:
        """Append an audit entry to the log file."""
        if not self.enabled:
            return

        record = entry.model_copy(update={"timestamp": datetime.now(timezone.utc)})

        try:
            with open(self.log_path, "a", encoding="utf-8") as f:
                f.write(record.model_dump_json() + "\n")
        except OSError as e:
            logger.error(f"Failed to write audit log: {e}")

    def read_all(self, trip_id: str | None = None) -> list[AssessmentAuditEntry]:
        """Read every audit entry, optionally only those for one trip."""
        if not self.log_path.exists():
            return []

        entries: list[AssessmentAuditEntry] = []
        try:
            with open(self.log_path, encoding="utf-8") as f:
                for line in f:
                    line = line.strip()
                    if not line:
                        continue
                    try:
                        entry = AssessmentAuditEntry.model_validate(json.loads(line))
                    except (json.JSONDecodeError, ValidationError):
                        logger.warning("Skipping malformed audit line")
                        continue
                    if trip_id is None or entry.trip_id == trip_id:
                        entries.append(entry)
        except OSError as e:
            logger.error(f"Failed to read audit log: {e}")
            return []

        return entries

    def read_recent(self, count: int = 50) -> list[AssessmentAuditEntry]:
        """Read the most recent N audit entries."""
        if count <= 0:
            return []
        return self.read_all()[-count:]
