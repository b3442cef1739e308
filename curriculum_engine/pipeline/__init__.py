"""Analyzer orchestration."""

from .orchestrator import CurriculumEngine

__all__ = ["CurriculumEngine"]
