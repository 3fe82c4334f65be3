"""Exceptions raised by the riskprofile collaborators.

The scoring engine itself never raises for well-typed input; these are
raised by the service and storage layers around it.
"""


class RiskProfileError(Exception):
    """Base class for riskprofile errors."""


class InvalidSubmissionError(RiskProfileError, ValueError):
    """An assessment submission failed validation before scoring."""


class AssessmentNotFoundError(RiskProfileError, LookupError):
    """The user has no stored assessment."""
