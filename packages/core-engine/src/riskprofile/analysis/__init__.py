"""Assessment workflow for riskprofile."""

from riskprofile.analysis.service import (
    AssessmentResult,
    AssessmentService,
    CurrentProfile,
    parse_answers,
)

__all__ = [
    "AssessmentResult",
    "AssessmentService",
    "CurrentProfile",
    "parse_answers",
]
