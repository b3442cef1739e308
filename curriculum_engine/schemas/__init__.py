"""Data contracts for lesson collections and engine findings."""

from .findings import (
    AnalyzerFailure,
    ClassificationResult,
    CrossReferenceResult,
    DecisionBasis,
    DistributionIssue,
    DistributionIssueKind,
    DuplicateFinding,
    DuplicateKind,
    LessonLocator,
    MatchStrategy,
    MaterialResolution,
    Modality,
    NearDuplicateReason,
    ParseFailure,
    Remediation,
    Severity,
    StructuralViolation,
    TitleOccurrence,
    UnmatchedMaterial,
    UnreferencedItem,
    ViolationKind,
    WeekRef,
)
from .lesson import (
    LessonRecord,
    LessonType,
    Level,
    LoadedCurriculum,
    MaterialInventoryItem,
    Subject,
    WeekCollection,
)

__all__ = [
    "AnalyzerFailure",
    "ClassificationResult",
    "CrossReferenceResult",
    "DecisionBasis",
    "DistributionIssue",
    "DistributionIssueKind",
    "DuplicateFinding",
    "DuplicateKind",
    "LessonLocator",
    "LessonRecord",
    "LessonType",
    "Level",
    "LoadedCurriculum",
    "MatchStrategy",
    "MaterialInventoryItem",
    "MaterialResolution",
    "Modality",
    "NearDuplicateReason",
    "ParseFailure",
    "Remediation",
    "Severity",
    "StructuralViolation",
    "Subject",
    "TitleOccurrence",
    "UnmatchedMaterial",
    "UnreferencedItem",
    "ViolationKind",
    "WeekCollection",
    "WeekRef",
]
