"""riskprofile - investor risk-profiling questionnaire engine."""

__version__ = "0.1.0"
