"""Finding records produced by the loader, validators and classifier.

All records are frozen dataclasses built from tuples, str-valued enums and
primitives so they serialize directly with orjson.
"""

from dataclasses import dataclass, field
from enum import Enum


class Severity(str, Enum):
    """Whether a finding blocks publishing."""

    BLOCKING = "blocking"
    ADVISORY = "advisory"


@dataclass(frozen=True, order=True)
class WeekRef:
    """A (level, week) pair."""

    level: str
    week: int

    def __str__(self) -> str:
        return f"W{self.week}"


@dataclass(frozen=True)
class LessonLocator:
    """Enough context to find a record without re-scanning the source."""

    source: str
    level: str
    week: int | None
    position: int  # 1-based index within the collection file
    sort_order: int | None
    title_prefix: str

    def __str__(self) -> str:
        return f'Week {self.week}, lesson {self.position} ("{self.title_prefix}")'


# =============================================================================
# LOADER
# =============================================================================


@dataclass(frozen=True)
class ParseFailure:
    """A file (or inventory entry) that could not be loaded."""

    source: str
    message: str
    kind: str = "collection"  # collection | inventory

    @property
    def severity(self) -> Severity:
        # Inventory problems never block a run
        if self.kind == "inventory":
            return Severity.ADVISORY
        return Severity.BLOCKING


# =============================================================================
# STRUCTURAL VALIDATION
# =============================================================================


class ViolationKind(str, Enum):
    """Structural defect categories."""

    MISSING_FIELD = "missing_field"
    SLIDES_MISSING = "slides_missing"
    SLIDES_TOO_FEW = "slides_too_few"
    QUARTER_MISMATCH = "quarter_mismatch"
    DAY_OUT_OF_RANGE = "day_out_of_range"
    SORT_ORDER_OUT_OF_RANGE = "sort_order_out_of_range"
    DURATION_NOT_POSITIVE = "duration_not_positive"
    LEVEL_MISMATCH = "level_mismatch"
    LESSON_COUNT = "lesson_count"


@dataclass(frozen=True)
class StructuralViolation:
    """A field-level or cardinality defect."""

    kind: ViolationKind
    message: str
    source: str
    week: int
    location: LessonLocator | None = None
    field: str | None = None

    @property
    def severity(self) -> Severity:
        return Severity.BLOCKING

    @property
    def is_lesson_count(self) -> bool:
        return self.kind is ViolationKind.LESSON_COUNT


# =============================================================================
# DUPLICATES
# =============================================================================


class DuplicateKind(str, Enum):
    EXACT = "exact"
    NEAR = "near"
    INTRODUCTION_REPEAT = "introduction-repeat"
    CROSS_LEVEL = "cross-level"


class NearDuplicateReason(str, Enum):
    SAME_BASE = "same-base"
    EDIT_DISTANCE = "near-duplicate"


@dataclass(frozen=True, order=True)
class TitleOccurrence:
    """Where a title appears."""

    level: str
    week: int
    sort_order: int
    subject: str
    title: str

    def __str__(self) -> str:
        return f"W{self.week}/S{self.sort_order} ({self.subject})"


@dataclass(frozen=True)
class DuplicateFinding:
    """A title collision of some kind.

    ``titles`` holds one title for exact/cross-level/introduction findings and
    the ordered pair for near-duplicates.
    """

    kind: DuplicateKind
    titles: tuple[str, ...]
    occurrences: tuple[TitleOccurrence, ...]
    reason: NearDuplicateReason | None = None
    distance: int | None = None
    base: str | None = None

    @property
    def severity(self) -> Severity:
        # Exact duplicates are publish-blocking by policy; the rest are advisory
        if self.kind is DuplicateKind.EXACT:
            return Severity.BLOCKING
        return Severity.ADVISORY

    @property
    def weeks(self) -> tuple[int, ...]:
        return tuple(sorted({o.week for o in self.occurrences}))


# =============================================================================
# CROSS-REFERENCE
# =============================================================================


class MatchStrategy(str, Enum):
    EXPLICIT = "explicit"
    SUBSTRING = "substring"
    WORD_OVERLAP = "word-overlap"


@dataclass(frozen=True)
class MaterialResolution:
    """How one normalized material string was resolved."""

    material: str
    codes: tuple[str, ...] = ()
    strategy: MatchStrategy | None = None
    generic: bool = False

    @property
    def matched(self) -> bool:
        return self.strategy is not None


@dataclass(frozen=True)
class UnreferencedItem:
    code: str
    name: str
    subject_area: str


@dataclass(frozen=True)
class UnmatchedMaterial:
    material: str
    weeks: tuple[WeekRef, ...]

    @property
    def week_count(self) -> int:
        return len(self.weeks)


@dataclass(frozen=True)
class CrossReferenceResult:
    """Over- and under-provisioning signals for the materials inventory."""

    inventory_count: int = 0
    resolutions: tuple[MaterialResolution, ...] = ()
    referenced_codes: tuple[str, ...] = ()
    unreferenced: tuple[UnreferencedItem, ...] = ()
    unmatched: tuple[UnmatchedMaterial, ...] = ()
    strategy_counts: dict[str, int] = field(default_factory=dict)

    @property
    def severity(self) -> Severity:
        return Severity.ADVISORY


# =============================================================================
# DISTRIBUTION
# =============================================================================


class DistributionIssueKind(str, Enum):
    DAY_COUNT = "day_count"
    SUBJECT_COUNT = "subject_count"
    SUBJECT_MISSING_DAYS = "subject_missing_days"
    SUBJECT_UNEXPECTED_DAYS = "subject_unexpected_days"
    COMBINED_SUBJECTS = "combined_subjects"
    SORT_ORDER_DUPLICATE = "sort_order_duplicate"
    SORT_ORDER_GAP = "sort_order_gap"


@dataclass(frozen=True)
class DistributionIssue:
    """A per-week pedagogical-template defect."""

    level: str
    week: int
    kind: DistributionIssueKind
    message: str
    subject: str | None = None
    values: tuple[int, ...] = ()

    @property
    def severity(self) -> Severity:
        return Severity.ADVISORY


# =============================================================================
# CLASSIFICATION
# =============================================================================


class Modality(str, Enum):
    """Physical-interaction category a lesson requires."""

    PRINTABLE = "PRINTABLE"
    DIRECT = "DIRECT"
    NONE = "NONE"


class DecisionBasis(str, Enum):
    """Which branch of the decision rule produced the modality."""

    NO_CONVERSION_SUBJECT = "no-conversion-subject"
    KEYWORDS = "keywords"
    SUBJECT_DEFAULT = "subject-default"
    TIE_BREAK = "tie-break"


@dataclass(frozen=True)
class Remediation:
    """What ships instead of the physical material.

    ``pdf_templates`` is keyed on by the asset renderer; the remaining fields
    drive the lesson-display remediation panel.
    """

    pdf_templates: tuple[str, ...] = ()
    household_items: tuple[str, ...] = ()
    preparation: str | None = None
    control_of_error: str | None = None
    extensions: tuple[str, ...] = ()
    rule: str | None = None


@dataclass(frozen=True)
class ClassificationResult:
    """Advisory modality label for one lesson."""

    title: str
    subject: str
    modality: Modality
    basis: DecisionBasis
    reason: str
    printable_score: int
    direct_score: int
    printable_matches: tuple[str, ...]
    direct_matches: tuple[str, ...]
    remediation: Remediation
    key: str = ""


# =============================================================================
# ENGINE
# =============================================================================


@dataclass(frozen=True)
class AnalyzerFailure:
    """An analyzer that crashed; its findings are absent from the report."""

    analyzer: str
    error_code: str
    message: str
