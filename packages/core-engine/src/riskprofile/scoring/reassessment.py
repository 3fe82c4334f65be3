"""Reassessment-timing policy.

Decides whether a user should be prompted to retake the questionnaire,
based on when they last completed it. Rules are checked in order and the
first match wins:
  1. no previous assessment
  2. last assessment older than 12 calendar months
  3. last assessment older than 6 calendar months
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional

from riskprofile_shared.types.enums import ReassessmentReason, RiskCategory
from riskprofile_shared.types.models import ReassessmentDecision

logger = logging.getLogger(__name__)


def months_before(now: datetime, months: int) -> datetime:
    """Return midnight of the same day-of-month ``months`` calendar months ago.

    Days that do not exist in the target month roll forward into the
    following month, e.g. 31 August minus 6 months is 3 March (non-leap year).
    """
    index = now.year * 12 + (now.month - 1) - months
    year, month0 = divmod(index, 12)
    first_of_month = now.replace(
        year=year,
        month=month0 + 1,
        day=1,
        hour=0,
        minute=0,
        second=0,
        microsecond=0,
    )
    return first_of_month + timedelta(days=now.day - 1)


def _comparable(value: datetime, reference: datetime) -> datetime:
    """Treat naive timestamps as UTC when the other side is aware."""
    if value.tzinfo is None and reference.tzinfo is not None:
        return value.replace(tzinfo=timezone.utc)
    if value.tzinfo is not None and reference.tzinfo is None:
        return value.astimezone(timezone.utc).replace(tzinfo=None)
    return value


@dataclass(frozen=True)
class ReassessmentPolicy:
    """Time windows after which a reassessment is suggested."""

    annual_months: int = 12
    advisory_months: int = 6

    def evaluate(
        self,
        last_assessment: Optional[datetime],
        now: datetime,
        current_profile: Optional[RiskCategory] = None,
    ) -> ReassessmentDecision:
        """Decide whether a reassessment should be suggested.

        Args:
            last_assessment: Completion time of the user's latest assessment.
            now: Reference time.
            current_profile: The user's current category, echoed back.

        Returns:
            ReassessmentDecision; ``reason`` is None when no reassessment is due.
        """
        reason: Optional[ReassessmentReason] = None

        if last_assessment is None:
            reason = ReassessmentReason.NO_PREVIOUS_ASSESSMENT
        else:
            last = _comparable(last_assessment, now)
            if last < months_before(now, self.annual_months):
                reason = ReassessmentReason.ANNUAL_REASSESSMENT_DUE
            elif last < months_before(now, self.advisory_months):
                reason = ReassessmentReason.TIME_ELAPSED_ADVISORY

        logger.debug(
            "Reassessment check: last=%s now=%s reason=%s",
            last_assessment.isoformat() if last_assessment else None,
            now.isoformat(),
            reason.value if reason else None,
        )

        return ReassessmentDecision(
            should_reassess=reason is not None,
            reason=reason,
            last_assessment=last_assessment,
            current_profile=current_profile,
        )


DEFAULT_POLICY = ReassessmentPolicy()


def should_reassess(
    last_assessment: Optional[datetime],
    now: datetime,
) -> tuple[bool, Optional[ReassessmentReason]]:
    """Apply the default 12/6-month policy.

    Returns:
        Tuple of (should_reassess, reason).
    """
    decision = DEFAULT_POLICY.evaluate(last_assessment, now)
    return decision.should_reassess, decision.reason
