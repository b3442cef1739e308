"""Loading and validation analyzers."""

from .cross_reference import CrossReferenceResolver, ResolverConfig
from .distribution import (
    PRIMARY_TEMPLATE,
    CombinedSubjectBand,
    DistributionChecker,
    DistributionConfig,
    DistributionTemplate,
    SubjectExpectation,
)
from .duplicates import DuplicateDetector, DuplicateDetectorConfig, compare_titles, scan_pair_shard
from .loader import CollectionLoader
from .structural import StructuralRules, StructuralValidator

__all__ = [
    "CollectionLoader",
    "StructuralValidator",
    "StructuralRules",
    "DuplicateDetector",
    "DuplicateDetectorConfig",
    "compare_titles",
    "scan_pair_shard",
    "CrossReferenceResolver",
    "ResolverConfig",
    "DistributionChecker",
    "DistributionConfig",
    "DistributionTemplate",
    "SubjectExpectation",
    "CombinedSubjectBand",
    "PRIMARY_TEMPLATE",
]
