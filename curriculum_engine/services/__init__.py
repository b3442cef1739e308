"""Analyzer services and report rendering."""

from .report import ValidationReport, render_classification_summary, render_dashboard

__all__ = [
    "ValidationReport",
    "render_dashboard",
    "render_classification_summary",
]
