"""
Distribution Checker

Compares each week's day, subject and sort-order layout with the level's
pedagogical template. Levels without a subject template still get the
day-count and sort-order checks.
"""

import logging
from collections import Counter, defaultdict
from dataclasses import dataclass

from ...core.constants import LESSONS_PER_DAY, SCHOOL_DAYS
from ...schemas.findings import DistributionIssue, DistributionIssueKind
from ...schemas.lesson import Level, LoadedCurriculum, Subject, WeekCollection

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SubjectExpectation:
    """How often and on which days a subject is taught each week."""

    subject: str
    count: int
    days: tuple[int, ...]


@dataclass(frozen=True)
class CombinedSubjectBand:
    """Subjects that share a weekly allotment (e.g. geography + culture)."""

    subjects: tuple[str, ...]
    minimum: int
    maximum: int
    target: int


@dataclass(frozen=True)
class DistributionTemplate:
    lessons_per_day: int = LESSONS_PER_DAY
    days: tuple[int, ...] = SCHOOL_DAYS
    subjects: tuple[SubjectExpectation, ...] = ()
    combined: tuple[CombinedSubjectBand, ...] = ()


PRIMARY_TEMPLATE = DistributionTemplate(
    subjects=(
        SubjectExpectation(Subject.PRACTICAL_LIFE.value, 3, (1, 3, 5)),
        SubjectExpectation(Subject.SENSORIAL.value, 2, (2, 4)),
        SubjectExpectation(Subject.LANGUAGE.value, 5, (1, 2, 3, 4, 5)),
        SubjectExpectation(Subject.MATH.value, 5, (1, 2, 3, 4, 5)),
        SubjectExpectation(Subject.SCIENCE.value, 2, (2, 4)),
        SubjectExpectation(Subject.ART_MUSIC.value, 2, (2, 4)),
        SubjectExpectation(Subject.READ_ALOUD.value, 3, (1, 3, 5)),
    ),
    combined=(
        CombinedSubjectBand(
            subjects=(Subject.GEOGRAPHY.value, Subject.CULTURE.value),
            minimum=2,
            maximum=4,
            target=3,
        ),
    ),
)


@dataclass(frozen=True)
class DistributionConfig:
    """Templates per level; unlisted levels use ``default_template``."""

    templates: tuple[tuple[str, DistributionTemplate], ...] = (
        (Level.PRIMARY.value, PRIMARY_TEMPLATE),
    )
    default_template: DistributionTemplate = DistributionTemplate()

    def template_for(self, level: str) -> DistributionTemplate:
        for name, template in self.templates:
            if name == level:
                return template
        return self.default_template


def _format_days(days) -> str:
    return ", ".join(str(d) for d in days)


class DistributionChecker:
    """Per-week template conformance."""

    def __init__(self, config: DistributionConfig | None = None):
        self.config = config or DistributionConfig()

    def check(self, curriculum: LoadedCurriculum) -> list[DistributionIssue]:
        issues: list[DistributionIssue] = []
        for collection in curriculum.collections:
            issues.extend(self.check_collection(collection))
        logger.info(f"Distribution check: {len(issues)} issue(s)")
        return issues

    def check_collection(self, collection: WeekCollection) -> list[DistributionIssue]:
        template = self.config.template_for(collection.level.value)
        issues: list[DistributionIssue] = []

        def add(kind, message, subject=None, values=()):
            issues.append(
                DistributionIssue(
                    level=collection.level.value,
                    week=collection.week_number,
                    kind=kind,
                    message=message,
                    subject=subject,
                    values=tuple(values),
                )
            )

        # Lessons per day
        day_counts = Counter(l.day_of_week for l in collection.lessons)
        for day in template.days:
            count = day_counts.get(day, 0)
            if count != template.lessons_per_day:
                add(
                    DistributionIssueKind.DAY_COUNT,
                    f"Day {day}: {count} lessons (expected {template.lessons_per_day})",
                    values=(day,),
                )

        # Subject counts and day placement
        subject_days: dict[str, list[int]] = defaultdict(list)
        for lesson in collection.lessons:
            if lesson.subject is not None:
                subject_days[lesson.subject.value].append(lesson.day_of_week)

        for expectation in template.subjects:
            days = subject_days.get(expectation.subject, [])
            if len(days) != expectation.count:
                add(
                    DistributionIssueKind.SUBJECT_COUNT,
                    f"{expectation.subject}: {len(days)} lessons (expected {expectation.count})",
                    subject=expectation.subject,
                )
            if not days:
                continue

            actual = {d for d in days if d is not None}
            missing = sorted(set(expectation.days) - actual)
            unexpected = sorted(actual - set(expectation.days))
            if missing:
                add(
                    DistributionIssueKind.SUBJECT_MISSING_DAYS,
                    f"{expectation.subject}: missing on day(s) {_format_days(missing)}",
                    subject=expectation.subject,
                    values=missing,
                )
            if unexpected:
                add(
                    DistributionIssueKind.SUBJECT_UNEXPECTED_DAYS,
                    f"{expectation.subject}: unexpected on day(s) {_format_days(unexpected)}",
                    subject=expectation.subject,
                    values=unexpected,
                )

        for band in template.combined:
            total = sum(len(subject_days.get(s, [])) for s in band.subjects)
            if not band.minimum <= total <= band.maximum:
                add(
                    DistributionIssueKind.COMBINED_SUBJECTS,
                    f"{' + '.join(band.subjects)}: {total} lessons "
                    f"(expected ~{band.target}, allowed {band.minimum}-{band.maximum})",
                    subject="+".join(band.subjects),
                )

        issues.extend(self._check_sort_order(collection))
        return issues

    def _check_sort_order(self, collection: WeekCollection) -> list[DistributionIssue]:
        values = [l.sort_order for l in collection.lessons if l.sort_order is not None]
        if not values:
            return []

        issues = []
        counts = Counter(values)
        duplicates = sorted(v for v, c in counts.items() if c > 1)
        if duplicates:
            issues.append(
                DistributionIssue(
                    level=collection.level.value,
                    week=collection.week_number,
                    kind=DistributionIssueKind.SORT_ORDER_DUPLICATE,
                    message=f"Duplicate sort_order value(s): {_format_days(duplicates)}",
                    values=tuple(duplicates),
                )
            )

        expected_last = len(collection)
        distinct = sorted(counts)
        missing = sorted(set(range(1, expected_last + 1)) - set(distinct))
        if missing or distinct[0] != 1 or distinct[-1] != expected_last:
            detail = f", missing {_format_days(missing)}" if missing else ""
            issues.append(
                DistributionIssue(
                    level=collection.level.value,
                    week=collection.week_number,
                    kind=DistributionIssueKind.SORT_ORDER_GAP,
                    message=(
                        f"sort_order values {distinct[0]}-{distinct[-1]} are not contiguous "
                        f"1-{expected_last}{detail}"
                    ),
                    values=tuple(missing),
                )
            )
        return issues
