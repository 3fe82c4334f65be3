"""Assessment service for riskprofile.

Coordinates a questionnaire submission:
1. Validate the raw submission
2. Score the answers (weighted mean)
3. Classify the score into a risk category
4. Persist the assessment and overwrite the user's current risk state

and answers read-side queries (catalog, history, current profile,
reassessment check).
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Iterable, Optional

from pydantic import ValidationError

from riskprofile_shared.types.enums import RiskCategory, RiskTrend
from riskprofile_shared.types.models import (
    Answer,
    Assessment,
    Question,
    ReassessmentDecision,
    RiskProfileDetails,
)

from riskprofile.config import RiskProfileConfig, load_config
from riskprofile.errors import AssessmentNotFoundError, InvalidSubmissionError
from riskprofile.scoring.catalog import QUESTION_CATALOG, get_profile_details
from riskprofile.scoring.reassessment import ReassessmentPolicy
from riskprofile.scoring.risk_scorer import RiskScorer, classify
from riskprofile.storage.store import AssessmentStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AssessmentResult:
    """A stored assessment together with its category metadata."""

    assessment: Assessment
    profile: RiskProfileDetails
    skipped: tuple[str, ...] = field(default_factory=tuple)
    trend: Optional[RiskTrend] = None


@dataclass(frozen=True)
class CurrentProfile:
    """A user's current category and when it was last assessed."""

    risk_profile: RiskCategory
    last_assessment: Optional[datetime]
    profile: RiskProfileDetails


def _to_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def risk_trend(newer: Assessment, older: Assessment | None) -> RiskTrend:
    """Compare an assessment with the one taken just before it."""
    if older is None:
        return RiskTrend.CURRENT
    if newer.risk_score > older.risk_score:
        return RiskTrend.DECREASED
    if newer.risk_score < older.risk_score:
        return RiskTrend.INCREASED
    return RiskTrend.STABLE


def parse_answers(raw_answers: Iterable[Any]) -> list[Answer]:
    """Validate raw answer payloads into Answer models.

    Accepts Answer instances or mappings with ``questionId``/``question_id``
    and ``answer`` string fields.

    Raises:
        InvalidSubmissionError: if the set is empty or an entry is malformed.
    """
    if raw_answers is None:
        raise InvalidSubmissionError("Answers array is required with at least one answer")

    answers: list[Answer] = []
    for index, raw in enumerate(raw_answers):
        if isinstance(raw, Answer):
            answers.append(raw)
            continue
        try:
            answers.append(Answer.model_validate(raw, strict=True))
        except ValidationError as e:
            raise InvalidSubmissionError(
                f"Answer #{index} is invalid: question id and answer must be strings"
            ) from e

    if not answers:
        raise InvalidSubmissionError("Answers array is required with at least one answer")
    return answers


class AssessmentService:
    """Runs questionnaire submissions through the scoring engine."""

    def __init__(
        self,
        store: AssessmentStore | None = None,
        config: RiskProfileConfig | None = None,
        scorer: RiskScorer | None = None,
    ):
        self.config = config or load_config()
        self.store = store or AssessmentStore(self.config.db_path)
        self.scorer = scorer or RiskScorer()
        self.policy = ReassessmentPolicy(
            annual_months=self.config.annual_months,
            advisory_months=self.config.advisory_months,
        )

    def questions(self) -> tuple[Question, ...]:
        """Return the questionnaire in presentation order."""
        return QUESTION_CATALOG

    def submit(
        self,
        user_id: str,
        answers: Iterable[Any],
        life_event: str | None = None,
        notes: str | None = None,
        now: datetime | None = None,
    ) -> AssessmentResult:
        """Score, classify and store one questionnaire submission.

        Args:
            user_id: Owner of the assessment.
            answers: Answer models or raw ``{"questionId", "answer"}`` mappings.
            life_event: Optional life-event tag (not scored).
            notes: Optional free-text notes.
            now: Completion time (defaults to the current UTC time).

        Returns:
            AssessmentResult with the stored assessment and profile details.

        Raises:
            InvalidSubmissionError: if the submission fails validation.
        """
        if not user_id:
            raise InvalidSubmissionError("User id is required")
        if life_event is not None and not isinstance(life_event, str):
            raise InvalidSubmissionError("Life event must be a string")
        if notes is not None and not isinstance(notes, str):
            raise InvalidSubmissionError("Notes must be a string")

        parsed = parse_answers(answers)

        breakdown = self.scorer.score(parsed)
        category = classify(breakdown.score)
        if breakdown.skipped:
            logger.info(
                "Ignored %d unmatched answer(s) for user %s: %s",
                len(breakdown.skipped),
                user_id,
                ", ".join(breakdown.skipped),
            )

        assessment = Assessment(
            user_id=user_id,
            answers=tuple(parsed),
            risk_score=breakdown.score,
            risk_profile=category,
            life_event=life_event or None,
            notes=notes or None,
            completed_at=_to_utc(now or datetime.now(timezone.utc)),
        )
        self.store.record(assessment)

        return AssessmentResult(
            assessment=assessment,
            profile=get_profile_details(category),
            skipped=breakdown.skipped,
        )

    def history(self, user_id: str) -> list[AssessmentResult]:
        """Return the user's assessments, newest first, each with its trend."""
        assessments = self.store.history(user_id)
        results = []
        for i, a in enumerate(assessments):
            older = assessments[i + 1] if i + 1 < len(assessments) else None
            results.append(AssessmentResult(
                assessment=a,
                profile=get_profile_details(a.risk_profile),
                trend=risk_trend(a, older),
            ))
        return results

    def current(self, user_id: str) -> CurrentProfile:
        """Return the user's current risk profile.

        Raises:
            AssessmentNotFoundError: if the user has never been assessed.
        """
        state = self.store.get_state(user_id)
        if state is None or state.risk_tolerance is None:
            raise AssessmentNotFoundError(f"No risk assessment found for user {user_id!r}")

        return CurrentProfile(
            risk_profile=state.risk_tolerance,
            last_assessment=state.last_risk_assessment,
            profile=get_profile_details(state.risk_tolerance),
        )

    def reassessment_check(
        self,
        user_id: str,
        now: datetime | None = None,
    ) -> ReassessmentDecision:
        """Decide whether the user should retake the questionnaire."""
        state = self.store.get_state(user_id)
        return self.policy.evaluate(
            last_assessment=state.last_risk_assessment if state else None,
            now=now or datetime.now(timezone.utc),
            current_profile=state.risk_tolerance if state else None,
        )
