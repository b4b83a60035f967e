"""
Reporting tools for analyzed split times.

Usage:
    python -m splitanalysis.reporting.cli analyze --file results.txt
"""

from .report import ReportGenerator

__all__ = ["ReportGenerator"]
