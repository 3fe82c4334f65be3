"""Assessment persistence for riskprofile."""

from riskprofile.storage.store import AssessmentStore

__all__ = ["AssessmentStore"]
