"""Unit tests for the subject distribution checker."""

import pytest

from curriculum_engine.schemas.findings import DistributionIssueKind
from curriculum_engine.schemas.lesson import LessonRecord, Level, WeekCollection
from curriculum_engine.services.validate import DistributionChecker


def build_collection(records, week=5, level=Level.PRIMARY):
    return WeekCollection(
        level=level,
        week_number=week,
        source="test",
        lessons=tuple(LessonRecord.model_validate(r) for r in records),
    )


def kinds(issues):
    return [i.kind for i in issues]


@pytest.fixture
def checker():
    return DistributionChecker()


@pytest.mark.unit
class TestTemplateConformance:
    def test_valid_week_has_no_issues(self, checker, valid_week):
        assert checker.check_collection(build_collection(valid_week)) == []

    def test_subject_on_wrong_day(self, checker, valid_week):
        # Move the day-1 practical life lesson to day 2, and the day-2 sensorial to day 1
        for record in valid_week:
            if record["title"] == "Pouring Water Between Pitchers":
                record["day_of_week"] = 2
            elif record["title"] == "Pink Tower Building":
                record["day_of_week"] = 1

        issues = checker.check_collection(build_collection(valid_week))
        messages = [i.message for i in issues]

        assert "practical_life: missing on day(s) 1" in messages
        assert "practical_life: unexpected on day(s) 2" in messages
        assert "sensorial: missing on day(s) 2" in messages
        assert "sensorial: unexpected on day(s) 1" in messages
        assert DistributionIssueKind.DAY_COUNT not in kinds(issues)

    def test_subject_count(self, checker, valid_week):
        for record in valid_week:
            if record["title"] == "Rhyming Basket":
                record["subject_name"] = "math"

        issues = checker.check_collection(build_collection(valid_week))

        counts = [i for i in issues if i.kind is DistributionIssueKind.SUBJECT_COUNT]
        assert {i.subject for i in counts} == {"language", "math"}

    def test_combined_geography_culture_band(self, checker, valid_week):
        for record in valid_week:
            if record["subject_name"] in ("geography", "culture"):
                record["subject_name"] = "history"

        issues = checker.check_collection(build_collection(valid_week))

        combined = [i for i in issues if i.kind is DistributionIssueKind.COMBINED_SUBJECTS]
        assert len(combined) == 1
        assert "0 lessons" in combined[0].message

    def test_day_count(self, checker, valid_week):
        valid_week[0]["day_of_week"] = 2

        issues = checker.check_collection(build_collection(valid_week))

        day_issues = [i for i in issues if i.kind is DistributionIssueKind.DAY_COUNT]
        assert [i.message for i in day_issues] == [
            "Day 1: 4 lessons (expected 5)",
            "Day 2: 6 lessons (expected 5)",
        ]

    def test_elementary_levels_skip_subject_template(self, checker, valid_week):
        for record in valid_week:
            record["level_name"] = "lower_elementary"
            record["subject_name"] = "history"

        collection = build_collection(valid_week, level=Level.LOWER_ELEMENTARY)

        assert checker.check_collection(collection) == []


@pytest.mark.unit
class TestSortOrder:
    def test_duplicate_and_gap(self, checker, lesson_factory):
        records = [lesson_factory(sort_order=s, title=f"L{s}-{i}") for i, s in enumerate([1, 2, 2, 4, 5])]

        issues = checker.check_collection(build_collection(records, level=Level.UPPER_ELEMENTARY))

        duplicate = [i for i in issues if i.kind is DistributionIssueKind.SORT_ORDER_DUPLICATE]
        gap = [i for i in issues if i.kind is DistributionIssueKind.SORT_ORDER_GAP]
        assert len(duplicate) == 1
        assert duplicate[0].values == (2,)
        assert len(gap) == 1
        assert gap[0].values == (3,)
        assert "missing 3" in gap[0].message

    def test_offset_range_reported(self, checker, lesson_factory):
        records = [lesson_factory(sort_order=s) for s in (2, 3, 4)]

        issues = checker.check_collection(build_collection(records, level=Level.UPPER_ELEMENTARY))

        gap = [i for i in issues if i.kind is DistributionIssueKind.SORT_ORDER_GAP]
        assert gap[0].values == (1,)
        assert "2-4" in gap[0].message
