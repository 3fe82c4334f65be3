"""
riskprofile shared - Common types and constants for the risk-profiling engine.
"""

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
    UserRiskState,
)
from riskprofile_shared.constants.constants import (
    CONFIG_FILE_NAME,
    DEFAULT_CONFIG,
    EXIT_GENERAL_ERROR,
    EXIT_SUCCESS,
    KNOWN_LIFE_EVENTS,
)

__version__ = "0.1.0"

__all__ = [
    # Enums
    "QuestionType",
    "ReassessmentReason",
    "RiskCategory",
    "RiskTrend",
    # Models
    "Answer",
    "AnswerOption",
    "Assessment",
    "Question",
    "ReassessmentDecision",
    "RiskProfileDetails",
    "UserRiskState",
    # Constants
    "CONFIG_FILE_NAME",
    "DEFAULT_CONFIG",
    "EXIT_GENERAL_ERROR",
    "EXIT_SUCCESS",
    "KNOWN_LIFE_EVENTS",
]
