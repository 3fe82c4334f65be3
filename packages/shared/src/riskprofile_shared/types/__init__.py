"""Shared type definitions for riskprofile."""

from riskprofile_shared.types.enums import (
    QuestionType,
    ReassessmentReason,
    RiskCategory,
    RiskTrend,
)
from riskprofile_shared.types.models import (
    Answer,
    AnswerOption,
    Assessment,
    Question,
    ReassessmentDecision,
    RiskProfileDetails,
    ScoreRange,
    UserRiskState,
)

__all__ = [
    "QuestionType",
    "ReassessmentReason",
    "RiskCategory",
    "RiskTrend",
    "Answer",
    "AnswerOption",
    "Assessment",
    "Question",
    "ReassessmentDecision",
    "RiskProfileDetails",
    "ScoreRange",
    "UserRiskState",
]
