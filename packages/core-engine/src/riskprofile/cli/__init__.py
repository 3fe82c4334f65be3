"""Command line interface for riskprofile."""
