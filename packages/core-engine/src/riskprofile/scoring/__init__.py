"""Risk scoring module for riskprofile."""

from riskprofile.scoring.catalog import (
    CATALOG_VERSION,
    QUESTION_CATALOG,
    QUESTIONS_BY_ID,
    RISK_PROFILES,
    get_profile_details,
    get_question,
)
from riskprofile.scoring.reassessment import (
    ReassessmentPolicy,
    months_before,
    should_reassess,
)
from riskprofile.scoring.risk_scorer import (
    RiskScorer,
    ScoreBreakdown,
    classify,
    compute_score,
)

__all__ = [
    "CATALOG_VERSION",
    "QUESTION_CATALOG",
    "QUESTIONS_BY_ID",
    "RISK_PROFILES",
    "ReassessmentPolicy",
    "RiskScorer",
    "ScoreBreakdown",
    "classify",
    "compute_score",
    "get_profile_details",
    "get_question",
    "months_before",
    "should_reassess",
]
