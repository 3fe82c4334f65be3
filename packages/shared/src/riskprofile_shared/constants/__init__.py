"""Shared constants for riskprofile."""
