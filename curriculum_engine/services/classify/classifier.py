"""
Modality Classifier

Labels each lesson PRINTABLE, DIRECT or NONE from keyword evidence in its
text and attaches the remediation payload for that modality. The result is
advisory; it never affects validation status.
"""

import logging
from typing import Callable, Iterator

from ...schemas.findings import ClassificationResult, DecisionBasis, Modality, Remediation
from ...schemas.lesson import LessonRecord, LoadedCurriculum
from ...utils.text import safe_lower, safe_str
from .vocabulary import ClassifierConfig

logger = logging.getLogger(__name__)


def lesson_key(level_directory: str, week: int, position: int) -> str:
    """Stable identifier: ``primary-lessons/week-05/lesson-03``."""
    return f"{level_directory}/week-{week:02d}/lesson-{position:02d}"


class ModalityClassifier:
    """Keyword-scored modality classification with per-modality remediation."""

    def __init__(self, config: ClassifierConfig | None = None):
        self.config = config or ClassifierConfig()
        self._remediators: dict[Modality, Callable[[LessonRecord, tuple[str, ...]], Remediation]] = {
            Modality.PRINTABLE: self._printable_remediation,
            Modality.DIRECT: self._direct_remediation,
            Modality.NONE: self._no_conversion_remediation,
        }
        missing = set(Modality) - set(self._remediators)
        if missing:
            raise ValueError(f"No remediation handler for: {sorted(m.value for m in missing)}")

    # =========================================================================
    # PUBLIC API
    # =========================================================================

    def classify(self, lesson: LessonRecord, key: str = "") -> ClassificationResult:
        """
        Classify one lesson.

        Args:
            lesson: Lesson to classify
            key: Optional stable identifier carried on the result

        Returns:
            ClassificationResult with modality, evidence and remediation
        """
        blob = self._text_blob(lesson)
        printable_matches = tuple(k for k in self.config.printable_keywords if k in blob)
        direct_matches = tuple(k for k in self.config.direct_keywords if k in blob)
        printable_score = len(printable_matches)
        direct_score = len(direct_matches)
        subject = lesson.subject_value

        if subject == self.config.no_conversion_subject:
            modality = Modality.NONE
            basis = DecisionBasis.NO_CONVERSION_SUBJECT
            reason = "Read-aloud lesson: no physical materials to convert"
        elif printable_score > direct_score:
            modality = Modality.PRINTABLE
            basis = DecisionBasis.KEYWORDS
            reason = f"Matched printable keywords: {', '.join(printable_matches)}"
        elif direct_score > printable_score:
            modality = Modality.DIRECT
            basis = DecisionBasis.KEYWORDS
            reason = f"Matched direct keywords: {', '.join(direct_matches)}"
        else:
            default = self.config.default_for(subject)
            modality = default.modality
            if printable_score == 0:
                basis = DecisionBasis.SUBJECT_DEFAULT
                reason = f"No keywords matched; subject default: {default.reason}"
            else:
                basis = DecisionBasis.TIE_BREAK
                reason = (
                    f"Tie (printable={printable_score}, direct={direct_score}); "
                    f"subject default: {default.reason}"
                )

        remediation = self._remediators[modality](lesson, printable_matches)

        return ClassificationResult(
            title=safe_str(lesson.title),
            subject=subject,
            modality=modality,
            basis=basis,
            reason=reason,
            printable_score=printable_score,
            direct_score=direct_score,
            printable_matches=printable_matches,
            direct_matches=direct_matches,
            remediation=remediation,
            key=key,
        )

    def classify_curriculum(self, curriculum: LoadedCurriculum) -> list[ClassificationResult]:
        """Classify every loaded lesson, keyed by level directory, week and position."""
        results = [self.classify(lesson, key) for key, lesson in self._keyed_lessons(curriculum)]
        counts = {m.value: sum(1 for r in results if r.modality is m) for m in Modality}
        logger.info(f"Classified {len(results)} lesson(s): {counts}")
        return results

    # =========================================================================
    # REMEDIATION
    # =========================================================================

    def _printable_remediation(
        self, lesson: LessonRecord, printable_matches: tuple[str, ...]
    ) -> Remediation:
        templates = [
            rule.template.value
            for rule in self.config.template_rules
            if any(keyword in match for match in printable_matches for keyword in rule.keywords)
        ]
        if not templates:
            templates.append(self.config.fallback_template.value)
        return Remediation(pdf_templates=tuple(templates), rule="templates")

    def _direct_remediation(
        self, lesson: LessonRecord, printable_matches: tuple[str, ...]
    ) -> Remediation:
        title = safe_lower(lesson.title)
        materials = " ".join(m.lower() for m in lesson.materials)

        for rule in self.config.substitution_rules:
            if rule.matches(title, materials):
                return Remediation(
                    household_items=rule.substitutes,
                    preparation=rule.preparation,
                    control_of_error=rule.control_of_error,
                    extensions=rule.extensions,
                    rule=rule.name,
                )

        fallback = self.config.direct_fallback
        listed = tuple(m for m in lesson.materials if m)
        return Remediation(
            household_items=listed or fallback.household_items,
            preparation=fallback.preparation,
            control_of_error=fallback.control_of_error,
            extensions=fallback.extensions,
            rule=fallback.name,
        )

    def _no_conversion_remediation(
        self, lesson: LessonRecord, printable_matches: tuple[str, ...]
    ) -> Remediation:
        payload = self.config.no_conversion_remediation
        return Remediation(
            household_items=payload.household_items,
            preparation=payload.preparation,
            control_of_error=payload.control_of_error,
            extensions=payload.extensions,
            rule=payload.name,
        )

    # =========================================================================
    # HELPERS
    # =========================================================================

    @staticmethod
    def _text_blob(lesson: LessonRecord) -> str:
        parts = [
            safe_lower(lesson.title),
            safe_lower(lesson.description),
            safe_lower(lesson.instructions),
            " ".join(m.lower() for m in lesson.materials),
        ]
        return " ".join(parts)

    @staticmethod
    def _keyed_lessons(curriculum: LoadedCurriculum) -> Iterator[tuple[str, LessonRecord]]:
        for collection in curriculum.collections:
            for position, lesson in enumerate(collection.lessons, start=1):
                yield lesson_key(collection.level.directory, collection.week_number, position), lesson
