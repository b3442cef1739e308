"""
Validation report aggregation, JSON export and the terminal dashboard.
"""

from collections import Counter, defaultdict
from dataclasses import dataclass, field
from typing import Any, Iterable, Iterator, Optional

import orjson

from ..core.constants import LESSONS_PER_WEEK, TOTAL_WEEKS
from ..core.exceptions import AnalyzerError
from ..schemas.findings import (
    AnalyzerFailure,
    ClassificationResult,
    CrossReferenceResult,
    DistributionIssue,
    DuplicateFinding,
    DuplicateKind,
    Modality,
    ParseFailure,
    Severity,
    StructuralViolation,
)
from ..schemas.lesson import LoadedCurriculum

FIELD_GROUP_LIMIT = 10
SEPARATOR = "=" * 60
SUB_SEPARATOR = "-" * 60

# Report sections whose blocking findings fail the run
EXIT_BLOCKING_SECTIONS = ("parse_failures", "structural_violations")

# analyzer name -> list attribute its findings extend
_LIST_SECTIONS = {
    "structural": "structural_violations",
    "duplicates": "duplicates",
    "distribution": "distribution_issues",
    "classification": "classifications",
}


@dataclass
class ValidationReport:
    """Aggregate of every finding from one run.

    Analyzers append to disjoint sections through ``record``; nothing is
    removed once added.
    """

    levels: tuple[str, ...] = ()
    week_filter: Optional[int] = None
    weeks_present: dict[str, list[int]] = field(default_factory=dict)
    missing_weeks: dict[str, list[int]] = field(default_factory=dict)
    total_lessons: int = 0
    parse_failures: list[ParseFailure] = field(default_factory=list)
    structural_violations: list[StructuralViolation] = field(default_factory=list)
    duplicates: list[DuplicateFinding] = field(default_factory=list)
    cross_reference: Optional[CrossReferenceResult] = None
    distribution_issues: list[DistributionIssue] = field(default_factory=list)
    classifications: list[ClassificationResult] = field(default_factory=list)
    analyzer_failures: list[AnalyzerFailure] = field(default_factory=list)

    @classmethod
    def from_curriculum(
        cls, curriculum: LoadedCurriculum, week_filter: Optional[int] = None
    ) -> "ValidationReport":
        weeks_present: dict[str, list[int]] = defaultdict(list)
        for collection in curriculum.collections:
            weeks_present[collection.level.value].append(collection.week_number)

        return cls(
            levels=tuple(level.value for level in curriculum.levels),
            week_filter=week_filter,
            weeks_present={level: sorted(weeks) for level, weeks in weeks_present.items()},
            missing_weeks={level: list(weeks) for level, weeks in curriculum.missing_weeks.items()},
            total_lessons=curriculum.total_lessons,
            parse_failures=list(curriculum.parse_failures),
        )

    def record(self, analyzer: str, findings: Any) -> None:
        """Append one analyzer's output, or its failure, to the report."""
        if isinstance(findings, AnalyzerError):
            error = findings.to_dict()
            self.analyzer_failures.append(
                AnalyzerFailure(
                    analyzer=error["analyzer"],
                    error_code=error["error"],
                    message=error["detail"],
                )
            )
        elif analyzer == "cross_reference":
            self.cross_reference = findings
        elif analyzer in _LIST_SECTIONS:
            getattr(self, _LIST_SECTIONS[analyzer]).extend(findings)
        else:
            raise ValueError(f"Unknown analyzer: {analyzer}")

    # =========================================================================
    # VIEWS
    # =========================================================================

    @property
    def weeks_found(self) -> int:
        return sum(len(weeks) for weeks in self.weeks_present.values())

    @property
    def weeks_expected(self) -> int:
        per_level = 1 if self.week_filter is not None else TOTAL_WEEKS
        return per_level * max(len(self.levels), 1)

    @property
    def lessons_expected(self) -> int:
        return self.weeks_expected * LESSONS_PER_WEEK

    @property
    def collection_parse_failures(self) -> list[ParseFailure]:
        return [f for f in self.parse_failures if f.kind == "collection"]

    @property
    def inventory_parse_failures(self) -> list[ParseFailure]:
        return [f for f in self.parse_failures if f.kind == "inventory"]

    @property
    def lesson_count_errors(self) -> list[StructuralViolation]:
        return [v for v in self.structural_violations if v.is_lesson_count]

    @property
    def field_errors(self) -> list[StructuralViolation]:
        return [v for v in self.structural_violations if not v.is_lesson_count]

    def duplicates_of(self, kind: DuplicateKind) -> list[DuplicateFinding]:
        return [d for d in self.duplicates if d.kind is kind]

    @property
    def exact_duplicates(self) -> list[DuplicateFinding]:
        return self.duplicates_of(DuplicateKind.EXACT)

    @property
    def near_duplicates(self) -> list[DuplicateFinding]:
        return self.duplicates_of(DuplicateKind.NEAR)

    @property
    def distribution_weeks(self) -> list[tuple[str, int]]:
        return sorted({(i.level, i.week) for i in self.distribution_issues})

    def _sections(self) -> Iterator[tuple[str, list[Any]]]:
        yield "parse_failures", self.parse_failures
        yield "structural_violations", self.structural_violations
        yield "duplicates", self.duplicates
        xref = self.cross_reference
        yield "cross_reference", [xref] if xref and (xref.unreferenced or xref.unmatched) else []
        yield "distribution_issues", self.distribution_issues

    def partition(self, severity: Severity) -> dict[str, list[Any]]:
        """Findings of one severity, keyed by report section (empty sections omitted)."""
        parts: dict[str, list[Any]] = {}
        for section, findings in self._sections():
            matching = [f for f in findings if f.severity is severity]
            if matching:
                parts[section] = matching
        return parts

    @property
    def blocking(self) -> dict[str, list[Any]]:
        return self.partition(Severity.BLOCKING)

    @property
    def advisory(self) -> dict[str, list[Any]]:
        return self.partition(Severity.ADVISORY)

    @property
    def has_blocking_errors(self) -> bool:
        """Parse failures, lesson-count errors or field errors are present.

        Exact duplicates are blocking findings too, but they gate publishing
        rather than the exit status.
        """
        blocking = self.blocking
        return any(section in blocking for section in EXIT_BLOCKING_SECTIONS)

    @property
    def is_publishable(self) -> bool:
        return not self.blocking and not self.analyzer_failures

    def summary(self) -> dict[str, Any]:
        modality_counts = Counter(c.modality.value for c in self.classifications)
        return {
            "levels": list(self.levels),
            "weeks_found": self.weeks_found,
            "weeks_expected": self.weeks_expected,
            "total_lessons": self.total_lessons,
            "lessons_expected": self.lessons_expected,
            "parse_failures": len(self.collection_parse_failures),
            "inventory_failures": len(self.inventory_parse_failures),
            "lesson_count_errors": len(self.lesson_count_errors),
            "field_errors": len(self.field_errors),
            "exact_duplicates": len(self.exact_duplicates),
            "near_duplicates": len(self.near_duplicates),
            "introduction_repeats": len(self.duplicates_of(DuplicateKind.INTRODUCTION_REPEAT)),
            "cross_level_duplicates": len(self.duplicates_of(DuplicateKind.CROSS_LEVEL)),
            "unreferenced_inventory": len(self.cross_reference.unreferenced) if self.cross_reference else 0,
            "unmatched_materials": len(self.cross_reference.unmatched) if self.cross_reference else 0,
            "distribution_issue_weeks": len(self.distribution_weeks),
            "classifications": {m.value: modality_counts.get(m.value, 0) for m in Modality},
            "blocking_findings": sum(len(f) for f in self.blocking.values()),
            "advisory_findings": sum(len(f) for f in self.advisory.values()),
            "analyzer_failures": len(self.analyzer_failures),
            "has_blocking_errors": self.has_blocking_errors,
            "is_publishable": self.is_publishable,
        }

    def to_dict(self) -> dict[str, Any]:
        return {
            "summary": self.summary(),
            "blocking": self.blocking,
            "advisory": self.advisory,
            "weeks_present": self.weeks_present,
            "missing_weeks": self.missing_weeks,
            "parse_failures": self.parse_failures,
            "structural_violations": self.structural_violations,
            "duplicates": self.duplicates,
            "cross_reference": self.cross_reference,
            "distribution_issues": self.distribution_issues,
            "classifications": self.classifications,
            "analyzer_failures": self.analyzer_failures,
        }

    def to_json(self) -> bytes:
        return orjson.dumps(self.to_dict(), option=orjson.OPT_INDENT_2 | orjson.OPT_SORT_KEYS)


# =============================================================================
# DASHBOARD
# =============================================================================


def _week_list(weeks: Iterable[int]) -> str:
    return "[" + ", ".join(str(w) for w in weeks) + "]"


def _section(lines: list[str], title: str) -> None:
    lines.extend([SUB_SEPARATOR, f"  {title}", SUB_SEPARATOR])


def _more(lines: list[str], total: int, shown: int, indent: str = "  ") -> None:
    if total > shown:
        lines.append(f"{indent}... and {total - shown} more")


def render_dashboard(report: ValidationReport, limit: int = 20) -> str:
    """
    Render the human-readable report.

    Args:
        report: Completed report
        limit: Maximum entries listed per open-ended section

    Returns:
        Multi-line dashboard text
    """
    multi_level = len(report.levels) > 1
    lines = ["", SEPARATOR, "           CURRICULUM VALIDATION REPORT", SEPARATOR, ""]

    for level in report.levels or ("",):
        present = report.weeks_present.get(level, [])
        missing = report.missing_weeks.get(level, [])
        expected = 1 if report.week_filter is not None else TOTAL_WEEKS
        if multi_level:
            lines.append(f"  [{level}]")
        lines.append(f"  Weeks found:    {len(present)} of {expected}")
        lines.append(f"  Weeks present:  {_week_list(present)}")
        if missing:
            lines.append(f"  Weeks missing:  {_week_list(missing)}")
    lines.append(f"  Total lessons:  {report.total_lessons} of {report.lessons_expected}")
    lines.append("")

    # Parse failures
    _section(lines, "JSON PARSE ERRORS")
    if not report.parse_failures:
        lines.append("  None")
    for failure in report.parse_failures:
        suffix = " (inventory)" if failure.kind == "inventory" else ""
        lines.append(f"  {failure.source}: {failure.message}{suffix}")
    lines.append("")

    # Lesson counts
    _section(lines, "LESSON COUNT ERRORS")
    if not report.lesson_count_errors:
        lines.append("  None")
    for violation in report.lesson_count_errors:
        lines.append(f"  {violation.message} ({violation.source})")
    lines.append("")

    # Field errors, grouped by message
    _section(lines, "FIELD VALIDATION ERRORS")
    field_errors = report.field_errors
    if not field_errors:
        lines.append("  None")
    else:
        by_message: dict[str, list[StructuralViolation]] = defaultdict(list)
        for violation in field_errors:
            by_message[violation.message].append(violation)
        for message, group in by_message.items():
            lines.append(f"  {message}:")
            for violation in group[:FIELD_GROUP_LIMIT]:
                location = violation.location
                label = str(location) if location else violation.source
                if multi_level and location:
                    label = f"{location.level} {label}"
                lines.append(f"    - {label}")
            _more(lines, len(group), FIELD_GROUP_LIMIT, indent="    ")
    lines.append(f"  Total field errors: {len(field_errors)}")
    lines.append("")

    # Exact duplicates
    _section(lines, "EXACT DUPLICATE TITLES")
    exact = report.exact_duplicates
    if not exact:
        lines.append("  None")
    else:
        lines.append(f"  Count: {len(exact)}")
        lines.append("")
        lines.append("  " + "Title".ljust(50) + "Occurrences")
        lines.append("  " + "-" * 50 + " " + "-" * 40)
        for finding in exact:
            title = finding.titles[0]
            if len(title) > 48:
                title = title[:45] + "..."
            occurrences = ", ".join(str(o) for o in finding.occurrences)
            prefix = f"[{finding.occurrences[0].level}] " if multi_level else ""
            lines.append(f"  {prefix}{title.ljust(50)} {occurrences}")
    lines.append("")

    # Near duplicates
    _section(lines, "NEAR-DUPLICATE TITLES")
    near = report.near_duplicates
    if not near:
        lines.append("  None")
    else:
        lines.append(f"  Count: {len(near)}")
        lines.append("")
        for finding in near[:limit]:
            first, second = finding.titles
            reason = finding.reason.value if finding.reason else ""
            if finding.distance is not None:
                reason = f"{reason} (distance {finding.distance})"
            lines.append(f'  "{first}"')
            lines.append(f'    vs "{second}"')
            lines.append(f"    Weeks: {', '.join(f'W{w}' for w in finding.weeks)}")
            lines.append(f"    Reason: {reason}")
            lines.append("")
        _more(lines, len(near), limit)
    lines.append("")

    intros = report.duplicates_of(DuplicateKind.INTRODUCTION_REPEAT)
    if intros:
        _section(lines, "REPEATED INTRODUCTION LESSONS")
        lines.append(f"  Count: {len(intros)}")
        lines.append("")
        for finding in intros:
            lines.append(f'  Base: "{finding.base}"')
            for occurrence in finding.occurrences:
                lines.append(f'    {occurrence} "{occurrence.title}"')
            lines.append("")

    cross_level = report.duplicates_of(DuplicateKind.CROSS_LEVEL)
    if cross_level:
        _section(lines, "CROSS-LEVEL DUPLICATE TITLES")
        lines.append(f"  Count: {len(cross_level)}")
        for finding in cross_level[:limit]:
            levels = ", ".join(sorted({o.level for o in finding.occurrences}))
            lines.append(f'  "{finding.titles[0]}" ({levels})')
        _more(lines, len(cross_level), limit)
        lines.append("")

    # Materials cross-reference
    _section(lines, "MATERIALS INVENTORY CROSS-REFERENCE")
    xref = report.cross_reference
    if xref is None:
        lines.append("  Not available")
    else:
        counts = xref.strategy_counts
        lines.append(f"  Inventory items:     {xref.inventory_count}")
        lines.append(
            f"  Referenced items:    {len(xref.referenced_codes)} of {xref.inventory_count}"
        )
        lines.append(f"  Unreferenced items:  {len(xref.unreferenced)}")
        lines.append(f"  Code-map matches:    {counts.get('explicit', 0)}")
        lines.append(f"  Substring matches:   {counts.get('substring', 0)}")
        lines.append(f"  Word-overlap matches: {counts.get('word-overlap', 0)}")
        lines.append("")

        lines.append(f"  TOP {limit} UNREFERENCED INVENTORY ITEMS:")
        for item in xref.unreferenced[:limit]:
            lines.append(f"    {item.code}  {item.name[:55].ljust(55)}  [{item.subject_area}]")
        _more(lines, len(xref.unreferenced), limit, indent="    ")
        lines.append("")

        lines.append(f"  TOP {limit} UNMATCHED LESSON MATERIALS:")
        for unmatched in xref.unmatched[:limit]:
            if unmatched.week_count <= 5:
                weeks = ", ".join(str(ref) for ref in unmatched.weeks)
            else:
                weeks = f"{unmatched.week_count} weeks"
            lines.append(f'    "{unmatched.material}" ({weeks})')
        _more(lines, len(xref.unmatched), limit, indent="    ")
    lines.append("")

    # Distribution
    _section(lines, "SUBJECT DISTRIBUTION ISSUES")
    if not report.distribution_issues:
        lines.append("  None")
    else:
        by_week: dict[tuple[str, int], list[DistributionIssue]] = defaultdict(list)
        for issue in report.distribution_issues:
            by_week[(issue.level, issue.week)].append(issue)
        for (level, week), issues in sorted(by_week.items()):
            label = f"{level} week {week}" if multi_level else f"Week {week}"
            lines.append(f"  {label}:")
            for issue in issues:
                lines.append(f"    - {issue.message}")
    lines.append("")

    if report.classifications:
        _section(lines, "LESSON CLASSIFICATION")
        modality_counts = Counter(c.modality for c in report.classifications)
        basis_counts = Counter(c.basis.value for c in report.classifications)
        for modality in Modality:
            lines.append(f"  {modality.value.ljust(10)} {modality_counts.get(modality, 0)}")
        lines.append(
            "  Decided by: " + ", ".join(f"{k} {v}" for k, v in sorted(basis_counts.items()))
        )
        lines.append("")

    if report.analyzer_failures:
        _section(lines, "ANALYZER FAILURES")
        for failure in report.analyzer_failures:
            lines.append(f"  {failure.analyzer}: {failure.message} [{failure.error_code}]")
        lines.append("")

    # Final summary
    lines.append(SEPARATOR)
    total_errors = len(report.collection_parse_failures) + len(report.structural_violations)
    total_duplicates = len(exact) + len(near)
    issue_weeks = len(report.distribution_weeks)
    if (
        total_errors == 0
        and total_duplicates == 0
        and issue_weeks == 0
        and not report.analyzer_failures
    ):
        lines.append("  ALL CHECKS PASSED")
    else:
        summary = (
            f"  SUMMARY: {total_errors} validation error(s), {total_duplicates} duplicate(s), "
            f"{issue_weeks} week(s) with distribution issues"
        )
        if report.analyzer_failures:
            summary += f", {len(report.analyzer_failures)} analyzer failure(s)"
        lines.append(summary)
    lines.append(SEPARATOR)
    lines.append("")
    return "\n".join(lines)


def render_classification_summary(
    results: list[ClassificationResult], limit: int = 20
) -> str:
    """Per-modality, per-subject and template totals plus the lessons that
    needed a default decision."""
    lines = ["", SEPARATOR, "           LESSON CLASSIFICATION", SEPARATOR, ""]
    counts = Counter(r.modality for r in results)
    lines.append(f"  Lessons classified: {len(results)}")
    for modality in Modality:
        lines.append(f"  {modality.value.ljust(10)} {counts.get(modality, 0)}")
    lines.append("")

    _section(lines, "BY SUBJECT")
    by_subject: dict[str, Counter] = defaultdict(Counter)
    for result in results:
        by_subject[result.subject][result.modality] += 1
    for subject, subject_counts in sorted(by_subject.items()):
        breakdown = ", ".join(
            f"{m.value} {subject_counts[m]}" for m in Modality if subject_counts[m]
        )
        lines.append(f"  {subject.ljust(16)} {breakdown}")
    lines.append("")

    template_counts = Counter(t for r in results for t in r.remediation.pdf_templates)
    _section(lines, "PRINTABLE TEMPLATES")
    if not template_counts:
        lines.append("  None")
    for template, count in sorted(template_counts.items(), key=lambda kv: (-kv[1], kv[0])):
        lines.append(f"  {template.ljust(24)} {count}")
    lines.append("")

    defaulted = [r for r in results if r.basis.value in ("subject-default", "tie-break")]
    _section(lines, "DECIDED BY SUBJECT DEFAULT")
    if not defaulted:
        lines.append("  None")
    for result in defaulted[:limit]:
        lines.append(f"  {result.key}  {result.modality.value}  {result.title[:40]}")
        lines.append(f"    {result.reason}")
    _more(lines, len(defaulted), limit)
    lines.append("")
    return "\n".join(lines)
