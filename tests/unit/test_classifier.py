"""Unit tests for the modality classifier."""

import pytest

from curriculum_engine.schemas.findings import DecisionBasis, Modality
from curriculum_engine.schemas.lesson import LessonRecord, Level, LoadedCurriculum, WeekCollection
from curriculum_engine.services.classify import ClassifierConfig, ModalityClassifier, lesson_key


def lesson(title="", subject=None, description="", instructions="", materials=()):
    return LessonRecord(
        title=title,
        subject=subject,
        description=description,
        instructions=instructions,
        materials_needed=tuple(materials),
    )


@pytest.fixture
def classifier():
    return ModalityClassifier()


@pytest.mark.unit
class TestDecisionRule:
    def test_math_without_keywords_uses_subject_default(self, classifier):
        result = classifier.classify(lesson("Counting Together", subject="math"))

        assert result.modality is Modality.PRINTABLE
        assert result.basis is DecisionBasis.SUBJECT_DEFAULT
        assert "default" in result.reason
        assert result.printable_score == result.direct_score == 0

    def test_read_aloud_is_always_none(self, classifier):
        result = classifier.classify(
            lesson("Counting with Golden Beads", subject="read_aloud", materials=["Number rods"])
        )

        assert result.modality is Modality.NONE
        assert result.basis is DecisionBasis.NO_CONVERSION_SUBJECT
        assert result.remediation.household_items == (
            "The book mentioned in the lesson",
            "Comfortable reading area",
        )

    def test_printable_keywords_win(self, classifier):
        result = classifier.classify(
            lesson("Golden Bead Place Value", subject="practical_life")
        )

        assert result.modality is Modality.PRINTABLE
        assert result.basis is DecisionBasis.KEYWORDS
        assert result.printable_matches == ("golden bead", "place value")
        assert result.printable_score == 2

    def test_direct_keywords_win(self, classifier):
        result = classifier.classify(lesson("Pouring Water", subject="math"))

        assert result.modality is Modality.DIRECT
        assert result.direct_matches == ("pouring water",)

    def test_nonzero_tie_uses_subject_default(self, classifier):
        # one printable hit ("pink tower") and one direct hit ("polishing")
        result = classifier.classify(lesson("Polishing the Pink Tower", subject="sensorial"))

        assert result.printable_score == result.direct_score == 1
        assert result.basis is DecisionBasis.TIE_BREAK
        assert result.modality is Modality.DIRECT
        assert "Tie" in result.reason

    def test_unknown_subject_falls_back_to_direct(self, classifier):
        result = classifier.classify(lesson("Quiet Rest"))

        assert result.modality is Modality.DIRECT
        assert "fallback" in result.reason

    def test_deterministic(self, classifier):
        item = lesson("Sandpaper Letters", subject="language", materials=["Sandpaper letters"])

        assert classifier.classify(item) == classifier.classify(item)


@pytest.mark.unit
class TestRemediation:
    def test_printable_templates_in_rule_order(self, classifier):
        result = classifier.classify(
            lesson("Hundred Board and Number Rods", subject="math")
        )

        assert result.remediation.pdf_templates == ("number-rods", "hundred-board")

    def test_printable_generic_fallback(self, classifier):
        result = classifier.classify(lesson("Days of the Week Song", subject="math"))

        assert result.modality is Modality.PRINTABLE
        assert result.remediation.pdf_templates == ("generic-printable",)

    def test_subject_default_printable_gets_fallback_template(self, classifier):
        result = classifier.classify(lesson("Counting Together", subject="math"))

        assert result.remediation.pdf_templates == ("generic-printable",)

    def test_direct_first_matching_rule(self, classifier):
        result = classifier.classify(
            lesson("Pouring Water", subject="practical_life", materials=["Two pitchers"])
        )

        assert result.remediation.rule == "pouring-water"
        assert "Water" in result.remediation.household_items
        assert result.remediation.preparation
        assert len(result.remediation.extensions) == 3

    def test_direct_fallback_uses_listed_materials(self, classifier):
        result = classifier.classify(
            lesson("Quiet Observation", subject="practical_life", materials=["Small chair", ""])
        )

        assert result.remediation.rule == "fallback"
        assert result.remediation.household_items == ("Small chair",)

    def test_direct_fallback_without_materials(self, classifier):
        result = classifier.classify(lesson("Quiet Observation", subject="practical_life"))

        assert result.remediation.household_items == ("See lesson for materials list",)

    def test_custom_vocabulary(self):
        classifier = ModalityClassifier(
            ClassifierConfig(direct_keywords=(), printable_keywords=("worksheet",))
        )

        result = classifier.classify(lesson("Worksheet", subject="practical_life"))

        assert result.modality is Modality.PRINTABLE


@pytest.mark.unit
def test_classify_curriculum_keys(classifier):
    lessons = (lesson("One", subject="math"), lesson("Two", subject="read_aloud"))
    curriculum = LoadedCurriculum(
        collections=[WeekCollection(Level.PRIMARY, 7, "primary-lessons/week-07.json", lessons)]
    )

    results = classifier.classify_curriculum(curriculum)

    assert [r.key for r in results] == [
        "primary-lessons/week-07/lesson-01",
        "primary-lessons/week-07/lesson-02",
    ]
    assert lesson_key("upper-elementary-lessons", 12, 3) == "upper-elementary-lessons/week-12/lesson-03"
