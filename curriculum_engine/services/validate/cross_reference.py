"""
Cross-Reference Resolver

Maps free-text lesson materials to canonical inventory codes with an ordered
strategy: explicit code map, then substring containment, then
significant-word overlap. The first strategy that produces a match decides;
later strategies never add codes for the same material.
"""

import logging
from collections import Counter, defaultdict
from dataclasses import dataclass
from typing import Iterable, Optional

from ...schemas.findings import (
    CrossReferenceResult,
    MatchStrategy,
    MaterialResolution,
    UnmatchedMaterial,
    UnreferencedItem,
    WeekRef,
)
from ...schemas.lesson import LoadedCurriculum, MaterialInventoryItem
from ...utils.text import safe_lower, significant_words
from .materials_map import EXPLICIT_CODE_MAP, GENERIC_HOUSEHOLD_ITEMS

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ResolverConfig:
    """Vocabulary and thresholds for material resolution."""

    explicit_map: tuple[tuple[str, tuple[str, ...]], ...] = EXPLICIT_CODE_MAP
    generic_items: tuple[str, ...] = GENERIC_HOUSEHOLD_ITEMS
    min_word_length: int = 3
    min_word_overlap: int = 2


@dataclass(frozen=True)
class _IndexedItem:
    code: str
    name: str
    words: tuple[str, ...]


class CrossReferenceResolver:
    """Resolve lesson materials against a materials inventory."""

    def __init__(self, config: ResolverConfig | None = None):
        self.config = config or ResolverConfig()

    # =========================================================================
    # PUBLIC API
    # =========================================================================

    def resolve_curriculum(self, curriculum: LoadedCurriculum) -> CrossReferenceResult:
        """Cross-reference every lesson material in the loaded collections."""
        usage: dict[str, set[WeekRef]] = defaultdict(set)
        for collection, lesson in curriculum.iter_lessons():
            ref = WeekRef(collection.level.value, collection.week_number)
            for material in lesson.materials:
                normalized = safe_lower(material)
                if normalized:
                    usage[normalized].add(ref)

        result = self.cross_reference(usage, curriculum.inventory)
        logger.info(
            f"Cross-reference: {len(result.referenced_codes)}/{result.inventory_count} "
            f"inventory items referenced, {len(result.unmatched)} unmatched material(s)"
        )
        return result

    def cross_reference(
        self,
        usage: dict[str, set[WeekRef]],
        inventory: Iterable[MaterialInventoryItem],
    ) -> CrossReferenceResult:
        """
        Resolve a material-usage index against an inventory.

        Args:
            usage: Normalized material -> weeks it appears in
            inventory: Inventory items

        Returns:
            CrossReferenceResult with orphans and unmatched materials
        """
        items = self._index(inventory)

        resolutions = tuple(self.resolve(material, items) for material in sorted(usage))

        referenced = sorted({code for r in resolutions for code in r.codes})
        referenced_set = set(referenced)
        unreferenced = tuple(
            UnreferencedItem(code=item.code, name=item.name, subject_area=item.subject_area)
            for item in sorted(inventory, key=lambda i: i.code)
            if item.code not in referenced_set
        )

        unmatched = [
            UnmatchedMaterial(material=r.material, weeks=tuple(sorted(usage[r.material])))
            for r in resolutions
            if not r.matched and not r.generic
        ]
        unmatched.sort(key=lambda u: (-u.week_count, u.material))

        counts = Counter(r.strategy.value for r in resolutions if r.strategy is not None)
        counts["generic"] = sum(1 for r in resolutions if not r.matched and r.generic)
        counts["unmatched"] = len(unmatched)

        return CrossReferenceResult(
            inventory_count=len(items),
            resolutions=resolutions,
            referenced_codes=tuple(referenced),
            unreferenced=unreferenced,
            unmatched=tuple(unmatched),
            strategy_counts=dict(sorted(counts.items())),
        )

    def resolve(self, material: str, items: tuple[_IndexedItem, ...]) -> MaterialResolution:
        """Run the strategies in priority order for one normalized material."""
        codes = self._explicit_codes(material)
        if codes:
            return MaterialResolution(material, codes, MatchStrategy.EXPLICIT)

        item = self._substring_match(material, items)
        if item is not None:
            return MaterialResolution(material, (item.code,), MatchStrategy.SUBSTRING)

        item = self._word_overlap_match(material, items)
        if item is not None:
            return MaterialResolution(material, (item.code,), MatchStrategy.WORD_OVERLAP)

        return MaterialResolution(material, generic=self.is_generic(material))

    def is_generic(self, material: str) -> bool:
        return any(generic in material for generic in self.config.generic_items)

    # =========================================================================
    # STRATEGIES
    # =========================================================================

    def _index(self, inventory: Iterable[MaterialInventoryItem]) -> tuple[_IndexedItem, ...]:
        indexed = []
        for item in sorted(inventory, key=lambda i: i.code):
            name = safe_lower(item.name)
            words = significant_words(name, self.config.min_word_length, item_name=True)
            indexed.append(_IndexedItem(code=item.code, name=name, words=tuple(words)))
        return tuple(indexed)

    def _explicit_codes(self, material: str) -> tuple[str, ...]:
        codes: set[str] = set()
        for key, key_codes in self.config.explicit_map:
            if key in material:
                codes.update(key_codes)
        return tuple(sorted(codes))

    def _substring_match(
        self, material: str, items: tuple[_IndexedItem, ...]
    ) -> Optional[_IndexedItem]:
        for item in items:
            if item.name and (item.name in material or material in item.name):
                return item
        return None

    def _word_overlap_match(
        self, material: str, items: tuple[_IndexedItem, ...]
    ) -> Optional[_IndexedItem]:
        words = significant_words(material, self.config.min_word_length)
        if len(words) < self.config.min_word_overlap:
            return None

        best: Optional[_IndexedItem] = None
        best_overlap = 0
        for item in items:
            overlap = sum(
                1
                for word in words
                if any(word in item_word or item_word in word for item_word in item.words)
            )
            # Items are in code order, so ties keep the lowest code
            if overlap >= self.config.min_word_overlap and overlap > best_overlap:
                best, best_overlap = item, overlap
        return best
