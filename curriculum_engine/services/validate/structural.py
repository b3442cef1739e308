"""
Structural Validator

Checks every lesson record against the field contract and every collection
against the per-week lesson count. Runs only over collections the loader
could parse; each violation carries enough context to find the record.
"""

import logging
from dataclasses import dataclass
from typing import Iterable

from ...core.constants import (
    LESSONS_PER_WEEK,
    MAX_SORT_ORDER,
    MIN_SLIDES,
    MIN_SORT_ORDER,
    REQUIRED_FIELDS,
    SCHOOL_DAYS,
    SLIDE_CONTENT_REQUIRED_QUARTERS,
    expected_quarter,
)
from ...schemas.findings import LessonLocator, StructuralViolation, ViolationKind
from ...schemas.lesson import LessonRecord, LoadedCurriculum, WeekCollection

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StructuralRules:
    """Field contract and numeric bounds."""

    required_fields: tuple[str, ...] = REQUIRED_FIELDS
    lessons_per_week: int = LESSONS_PER_WEEK
    first_day: int = SCHOOL_DAYS[0]
    last_day: int = SCHOOL_DAYS[-1]
    min_sort_order: int = MIN_SORT_ORDER
    max_sort_order: int = MAX_SORT_ORDER
    min_slides: int = MIN_SLIDES
    slide_required_quarters: frozenset[int] = SLIDE_CONTENT_REQUIRED_QUARTERS


class StructuralValidator:
    """Per-record and per-collection structural checks."""

    def __init__(self, rules: StructuralRules | None = None):
        self.rules = rules or StructuralRules()

    def validate(self, curriculum: LoadedCurriculum) -> list[StructuralViolation]:
        """Validate every loaded collection."""
        violations = self.validate_collections(curriculum.collections)
        lesson_count = sum(1 for v in violations if v.is_lesson_count)
        logger.info(
            f"Structural validation: {lesson_count} lesson-count error(s), "
            f"{len(violations) - lesson_count} field error(s)"
        )
        return violations

    def validate_collections(
        self, collections: Iterable[WeekCollection]
    ) -> list[StructuralViolation]:
        violations: list[StructuralViolation] = []
        for collection in collections:
            violations.extend(self.validate_collection(collection))
        return violations

    def validate_collection(self, collection: WeekCollection) -> list[StructuralViolation]:
        """Lesson count plus field checks for one week."""
        violations: list[StructuralViolation] = []

        count = len(collection)
        if count != self.rules.lessons_per_week:
            violations.append(
                StructuralViolation(
                    kind=ViolationKind.LESSON_COUNT,
                    message=(
                        f"Week {collection.week_number}: found {count} lessons, "
                        f"expected {self.rules.lessons_per_week}"
                    ),
                    source=collection.source,
                    week=collection.week_number,
                )
            )

        for position, lesson in enumerate(collection.lessons, start=1):
            violations.extend(self.validate_lesson(lesson, collection, position))

        return violations

    def validate_lesson(
        self, lesson: LessonRecord, collection: WeekCollection, position: int
    ) -> list[StructuralViolation]:
        """
        Check one record.

        Args:
            lesson: Record to check
            collection: Week the record was loaded from
            position: 1-based index of the record in its file

        Returns:
            Every violation found; an empty list means the record is sound
        """
        locator = LessonLocator(
            source=collection.source,
            level=collection.level.value,
            week=lesson.week_number if lesson.week_number is not None else collection.week_number,
            position=position,
            sort_order=lesson.sort_order,
            title_prefix=lesson.title_prefix,
        )
        found: list[StructuralViolation] = []

        def add(kind: ViolationKind, message: str, field: str | None = None) -> None:
            found.append(
                StructuralViolation(
                    kind=kind,
                    message=message,
                    source=collection.source,
                    week=collection.week_number,
                    location=locator,
                    field=field,
                )
            )

        for name in self.rules.required_fields:
            if getattr(lesson, name) is None:
                source_name = LessonRecord.source_name(name)
                add(ViolationKind.MISSING_FIELD, f"Missing field: {source_name}", source_name)

        self._check_slides(lesson, collection, add)

        if lesson.quarter is not None and lesson.week_number is not None:
            expected = expected_quarter(lesson.week_number)
            if lesson.quarter != expected:
                add(
                    ViolationKind.QUARTER_MISMATCH,
                    f"Quarter mismatch: quarter {lesson.quarter} for week "
                    f"{lesson.week_number} (expected {expected})",
                    "quarter",
                )

        if lesson.day_of_week is not None and not (
            self.rules.first_day <= lesson.day_of_week <= self.rules.last_day
        ):
            add(
                ViolationKind.DAY_OUT_OF_RANGE,
                f"day_of_week {lesson.day_of_week} out of range "
                f"({self.rules.first_day}-{self.rules.last_day})",
                "day_of_week",
            )

        if lesson.sort_order is not None and not (
            self.rules.min_sort_order <= lesson.sort_order <= self.rules.max_sort_order
        ):
            add(
                ViolationKind.SORT_ORDER_OUT_OF_RANGE,
                f"sort_order {lesson.sort_order} out of range "
                f"({self.rules.min_sort_order}-{self.rules.max_sort_order})",
                "sort_order",
            )

        if lesson.duration_minutes is not None and lesson.duration_minutes <= 0:
            add(
                ViolationKind.DURATION_NOT_POSITIVE,
                f"duration_minutes must be positive, got {lesson.duration_minutes}",
                "duration_minutes",
            )

        if lesson.level is not None and lesson.level is not collection.level:
            add(
                ViolationKind.LEVEL_MISMATCH,
                f"level_name {lesson.level.value} does not match directory level "
                f"{collection.level.value}",
                "level_name",
            )

        return found

    def _check_slides(self, lesson: LessonRecord, collection: WeekCollection, add) -> None:
        if lesson.slide_content is None:
            if expected_quarter(collection.week_number) in self.rules.slide_required_quarters:
                add(ViolationKind.MISSING_FIELD, "Missing field: slide_content", "slide_content")
            return

        slides = lesson.slide_content.get("slides")
        if not isinstance(slides, list):
            add(
                ViolationKind.SLIDES_MISSING,
                "slide_content.slides is missing or not a list",
                "slide_content",
            )
        elif len(slides) < self.rules.min_slides:
            add(
                ViolationKind.SLIDES_TOO_FEW,
                f"slide_content.slides has {len(slides)} slide(s) "
                f"(minimum {self.rules.min_slides})",
                "slide_content",
            )
