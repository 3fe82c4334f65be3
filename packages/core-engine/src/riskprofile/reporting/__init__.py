"""Report builders for riskprofile results."""

from riskprofile.reporting.html_report import HTMLReportGenerator

__all__ = ["HTMLReportGenerator"]
