"""Shared Pydantic models for riskprofile."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, ConfigDict, Field, field_validator

from riskprofile_shared.types.enums import QuestionType, ReassessmentReason, RiskCategory


class AnswerOption(BaseModel):
    """One selectable option of a questionnaire question."""

    model_config = ConfigDict(frozen=True)

    value: str = Field(description="Value token submitted by the client")
    label: str = Field(description="Text shown to the user")
    score: float = Field(description="Risk score contributed by this option (1.0-3.0)")


class Question(BaseModel):
    """A weighted single-choice question from the risk questionnaire."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(description="Stable question identifier (e.g. 'age')")
    prompt: str = Field(description="Question text")
    type: QuestionType = Field(default=QuestionType.SINGLE_CHOICE)
    options: tuple[AnswerOption, ...] = Field(description="Ordered, mutually exclusive options")
    weight: float = Field(gt=0, description="Influence of this question on the aggregate score")

    @field_validator("options")
    @classmethod
    def _unique_option_values(cls, options: tuple[AnswerOption, ...]) -> tuple[AnswerOption, ...]:
        values = [opt.value for opt in options]
        if len(values) != len(set(values)):
            raise ValueError("option values must be unique within a question")
        return options

    def get_option(self, value: str) -> Optional[AnswerOption]:
        """Find an option by its value token."""
        for opt in self.options:
            if opt.value == value:
                return opt
        return None

    @property
    def min_score(self) -> float:
        return min(opt.score for opt in self.options)

    @property
    def max_score(self) -> float:
        return max(opt.score for opt in self.options)


class Answer(BaseModel):
    """A (question, option value) pair submitted by a user.

    Accepts both ``question_id`` and the wire name ``questionId``.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    question_id: str = Field(alias="questionId")
    answer: str = Field(description="Selected option value")


class ScoreRange(BaseModel):
    """Closed score interval covered by a risk category."""

    model_config = ConfigDict(frozen=True)

    min: float
    max: float


class RiskProfileDetails(BaseModel):
    """Static descriptive metadata for a risk category."""

    model_config = ConfigDict(frozen=True)

    category: RiskCategory
    name: str
    description: str
    score_range: ScoreRange
    characteristics: tuple[str, ...]
    recommended_allocation: dict[str, str] = Field(
        description="Allocation ranges keyed by asset class (bonds, stocks, cash)"
    )


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Assessment(BaseModel):
    """Persisted result of one scoring run for one user."""

    model_config = ConfigDict(frozen=True)

    id: UUID = Field(default_factory=uuid4)
    user_id: str
    answers: tuple[Answer, ...] = Field(default_factory=tuple)
    risk_score: float
    risk_profile: RiskCategory
    life_event: Optional[str] = None
    notes: Optional[str] = None
    completed_at: datetime = Field(default_factory=_utcnow)


class UserRiskState(BaseModel):
    """A user's current category and the time of their latest assessment."""

    user_id: str
    risk_tolerance: Optional[RiskCategory] = None
    last_risk_assessment: Optional[datetime] = None


class ReassessmentDecision(BaseModel):
    """Outcome of the reassessment-timing policy."""

    should_reassess: bool
    reason: Optional[ReassessmentReason] = None
    last_assessment: Optional[datetime] = None
    current_profile: Optional[RiskCategory] = None

    @property
    def message(self) -> str:
        return self.reason.message if self.reason else ""
