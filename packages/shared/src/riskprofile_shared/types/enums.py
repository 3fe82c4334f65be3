"""Shared enumerations for riskprofile."""

from enum import Enum


class RiskCategory(str, Enum):
    """Risk profile categories, ordered from least to most risk-tolerant."""

    CONSERVATIVE = "CONSERVATIVE"
    MODERATE = "MODERATE"
    AGGRESSIVE = "AGGRESSIVE"

    @property
    def display_name(self) -> str:
        return self.value.capitalize()


class ReassessmentReason(str, Enum):
    """Why a user is being prompted to redo the questionnaire."""

    NO_PREVIOUS_ASSESSMENT = "no_previous_assessment"
    ANNUAL_REASSESSMENT_DUE = "annual_reassessment_due"
    TIME_ELAPSED_ADVISORY = "time_elapsed_advisory"

    @property
    def message(self) -> str:
        """Human-readable message shown alongside the reason code."""
        return _REASON_MESSAGES[self]


class RiskTrend(str, Enum):
    """Direction of an assessment relative to the one before it.

    The label describes the move from the newer entry's point of view:
    a lower score than the previous assessment reads as ``increased``
    and a higher one as ``decreased``. The oldest entry is ``current``.
    """

    INCREASED = "increased"
    DECREASED = "decreased"
    STABLE = "stable"
    CURRENT = "current"


class QuestionType(str, Enum):
    """Supported questionnaire answer types."""

    SINGLE_CHOICE = "single_choice"


_REASON_MESSAGES = {
    ReassessmentReason.NO_PREVIOUS_ASSESSMENT: "No previous assessment found",
    ReassessmentReason.ANNUAL_REASSESSMENT_DUE: "Annual reassessment recommended",
    ReassessmentReason.TIME_ELAPSED_ADVISORY: "Consider reassessment due to time elapsed",
}
