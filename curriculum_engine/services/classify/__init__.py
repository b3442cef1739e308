"""Lesson modality classification."""

from .classifier import ModalityClassifier, lesson_key
from .vocabulary import (
    AssetTemplate,
    ClassifierConfig,
    MatchClause,
    SubjectDefault,
    SubstitutionRule,
    TemplateRule,
)

__all__ = [
    "ModalityClassifier",
    "lesson_key",
    "ClassifierConfig",
    "AssetTemplate",
    "TemplateRule",
    "SubstitutionRule",
    "MatchClause",
    "SubjectDefault",
]
