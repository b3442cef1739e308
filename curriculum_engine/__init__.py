"""
Curriculum Validation & Normalization Engine.

Loads weekly lesson collections, validates their structure, detects duplicate
titles, cross-references lesson materials against the inventory, checks
subject distribution, and classifies each lesson's delivery modality.
"""

from .core.config import settings
from .pipeline import CurriculumEngine
from .services.report import ValidationReport, render_dashboard

__version__ = settings.APP_VERSION

__all__ = [
    "CurriculumEngine",
    "ValidationReport",
    "render_dashboard",
    "__version__",
]
