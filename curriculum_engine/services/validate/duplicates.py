"""
Duplicate Detector

Finds title collisions within a level:

- exact duplicates (case-folded, trimmed titles equal)
- near duplicates (same title once a trailing parenthetical is dropped, or a
  small non-zero edit distance between normalized titles)
- repeated introduction lessons (the same concept introduced in more than one
  week)

and exact collisions across levels when more than one level is loaded.

The near-duplicate pass is O(n^2) in distinct titles. Rows of the pair matrix
can be split into shards and fanned out to a process pool; the scan function
is module-level so it pickles.
"""

import logging
from collections import defaultdict
from concurrent.futures import Executor
from dataclasses import dataclass
from typing import Iterable, Optional

from ...schemas.findings import (
    DuplicateFinding,
    DuplicateKind,
    NearDuplicateReason,
    TitleOccurrence,
)
from ...schemas.lesson import LoadedCurriculum
from ...utils.text import (
    collapse_whitespace,
    edit_distance,
    normalize_title,
    strip_parenthetical,
    title_key,
)

logger = logging.getLogger(__name__)

# (title a, title b, reason value, distance or None), with a < b
NearPair = tuple[str, str, str, Optional[int]]


@dataclass(frozen=True)
class DuplicateDetectorConfig:
    """Thresholds for the duplicate passes."""

    max_distance: int = 5
    shards: int = 1
    introduction_word: str = "introduction"


# =============================================================================
# PAIR SCAN (process-pool safe)
# =============================================================================


def compare_titles(a: str, b: str, max_distance: int) -> Optional[NearPair]:
    """Classify one pair of normalized titles, or return None when unrelated."""
    if a == b:
        return None
    base_a = strip_parenthetical(a)
    if base_a and base_a == strip_parenthetical(b):
        return (a, b, NearDuplicateReason.SAME_BASE.value, None)
    distance = edit_distance(a, b, max_distance)
    if 0 < distance < max_distance:
        return (a, b, NearDuplicateReason.EDIT_DISTANCE.value, distance)
    return None


def scan_pair_shard(
    titles: tuple[str, ...], shard_index: int, shard_count: int, max_distance: int
) -> list[NearPair]:
    """Compare every pair whose first row ``i`` satisfies ``i % shard_count == shard_index``.

    ``titles`` must be sorted and distinct so each unordered pair is visited
    exactly once across all shards.
    """
    pairs: list[NearPair] = []
    for i in range(shard_index, len(titles), shard_count):
        a = titles[i]
        for j in range(i + 1, len(titles)):
            pair = compare_titles(a, titles[j], max_distance)
            if pair is not None:
                pairs.append(pair)
    return pairs


def _scan_shard_job(job: tuple[tuple[str, ...], int, int, int]) -> list[NearPair]:
    return scan_pair_shard(*job)


# =============================================================================
# DETECTOR
# =============================================================================


class DuplicateDetector:
    """Title collision detection over a loaded curriculum."""

    def __init__(self, config: DuplicateDetectorConfig | None = None):
        self.config = config or DuplicateDetectorConfig()

    def detect(
        self, curriculum: LoadedCurriculum, executor: Optional[Executor] = None
    ) -> list[DuplicateFinding]:
        """
        Run every duplicate pass.

        Args:
            curriculum: Loaded collections
            executor: Optional process pool for sharded near-duplicate scans

        Returns:
            Findings grouped by level, then by kind
        """
        by_level: dict[str, list[TitleOccurrence]] = defaultdict(list)
        for collection, lesson in curriculum.iter_lessons():
            by_level[collection.level.value].append(
                TitleOccurrence(
                    level=collection.level.value,
                    week=collection.week_number,
                    sort_order=lesson.sort_order if lesson.sort_order is not None else 0,
                    subject=lesson.subject_value,
                    title=lesson.title or "",
                )
            )

        findings: list[DuplicateFinding] = []
        for level in sorted(by_level):
            occurrences = by_level[level]
            findings.extend(self.exact_duplicates(occurrences))
            findings.extend(self.near_duplicates(occurrences, executor))
            findings.extend(self.introduction_repeats(occurrences))

        if len(by_level) > 1:
            findings.extend(self.cross_level_duplicates(by_level))

        logger.info(
            "Duplicate detection: "
            + ", ".join(
                f"{sum(1 for f in findings if f.kind is kind)} {kind.value}"
                for kind in DuplicateKind
            )
        )
        return findings

    def exact_duplicates(self, occurrences: Iterable[TitleOccurrence]) -> list[DuplicateFinding]:
        groups = self._group(occurrences, lambda o: title_key(o.title))
        return [
            DuplicateFinding(
                kind=DuplicateKind.EXACT,
                titles=(group[0].title,),
                occurrences=tuple(group),
            )
            for _, group in sorted(groups.items())
            if len(group) > 1
        ]

    def near_duplicates(
        self, occurrences: Iterable[TitleOccurrence], executor: Optional[Executor] = None
    ) -> list[DuplicateFinding]:
        groups = self._group(occurrences, lambda o: normalize_title(o.title))
        titles = tuple(sorted(groups))
        shard_count = max(1, min(self.config.shards, len(titles)))
        jobs = [(titles, index, shard_count, self.config.max_distance) for index in range(shard_count)]

        if executor is not None and shard_count > 1:
            shard_results = list(executor.map(_scan_shard_job, jobs))
        else:
            shard_results = [_scan_shard_job(job) for job in jobs]

        findings = []
        seen: set[tuple[str, str]] = set()
        for a, b, reason, distance in sorted(p for shard in shard_results for p in shard):
            key = (a, b) if a <= b else (b, a)
            if key in seen:
                continue
            seen.add(key)
            findings.append(
                DuplicateFinding(
                    kind=DuplicateKind.NEAR,
                    titles=(groups[a][0].title, groups[b][0].title),
                    occurrences=tuple(sorted(groups[a] + groups[b])),
                    reason=NearDuplicateReason(reason),
                    distance=distance,
                )
            )
        return findings

    def introduction_repeats(
        self, occurrences: Iterable[TitleOccurrence]
    ) -> list[DuplicateFinding]:
        word = self.config.introduction_word
        intros = [o for o in occurrences if word in title_key(o.title)]
        groups = self._group(
            intros, lambda o: collapse_whitespace(normalize_title(o.title).replace(word, ""))
        )

        findings = []
        for base, group in sorted(groups.items()):
            if len({o.week for o in group}) > 1:
                findings.append(
                    DuplicateFinding(
                        kind=DuplicateKind.INTRODUCTION_REPEAT,
                        titles=tuple(sorted({o.title for o in group})),
                        occurrences=tuple(group),
                        base=base,
                    )
                )
        return findings

    def cross_level_duplicates(
        self, by_level: dict[str, list[TitleOccurrence]]
    ) -> list[DuplicateFinding]:
        everything = [o for level in sorted(by_level) for o in by_level[level]]
        groups = self._group(everything, lambda o: title_key(o.title))
        return [
            DuplicateFinding(
                kind=DuplicateKind.CROSS_LEVEL,
                titles=(group[0].title,),
                occurrences=tuple(group),
            )
            for _, group in sorted(groups.items())
            if len({o.level for o in group}) > 1
        ]

    @staticmethod
    def _group(occurrences, key_func) -> dict[str, list[TitleOccurrence]]:
        """Group occurrences by a string key, dropping empty keys; each group is sorted."""
        groups: dict[str, list[TitleOccurrence]] = defaultdict(list)
        for occurrence in occurrences:
            key = key_func(occurrence)
            if key:
                groups[key].append(occurrence)
        return {key: sorted(group) for key, group in groups.items()}
