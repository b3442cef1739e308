"""
Collection Loader

Reads ``<level-dir>/week-NN.json`` collections and the materials inventory
into typed models. A file that cannot be read, is not a JSON list, contains a
record that cannot be coerced into ``LessonRecord``, or disagrees with the
week number in its own filename becomes a ``ParseFailure`` and is excluded
from every analyzer. The run always continues with the readable files.
"""

import logging
import re
from pathlib import Path
from typing import Iterable, Optional

import orjson
from pydantic import ValidationError

from ...core.constants import DEFAULT_MATERIALS_FILE, TOTAL_WEEKS, WEEK_FILE_PATTERN
from ...core.exceptions import (
    CollectionParseError,
    DataDirectoryNotFoundError,
    InventoryLoadError,
    RecordCoercionError,
)
from ...schemas.findings import ParseFailure
from ...schemas.lesson import (
    LessonRecord,
    Level,
    LoadedCurriculum,
    MaterialInventoryItem,
    WeekCollection,
)

logger = logging.getLogger(__name__)

_WEEK_FILE = re.compile(WEEK_FILE_PATTERN)


def _first_error(exc: ValidationError) -> tuple[str, str]:
    """Return ``(field, message)`` for the first pydantic error."""
    errors = exc.errors()
    if not errors:
        return "<record>", str(exc)
    first = errors[0]
    field = ".".join(str(part) for part in first.get("loc", ())) or "<record>"
    return field, first.get("msg", "invalid value")


class CollectionLoader:
    """Load week collections and the inventory from a data root."""

    def __init__(self, data_dir: Path, materials_file: str = DEFAULT_MATERIALS_FILE):
        self.data_dir = Path(data_dir)
        self.materials_file = materials_file

    # =========================================================================
    # PUBLIC API
    # =========================================================================

    def load(self, levels: Iterable[Level], week: Optional[int] = None) -> LoadedCurriculum:
        """
        Load every week collection for the given levels plus the inventory.

        Args:
            levels: Levels to load
            week: Optional single week filter

        Returns:
            LoadedCurriculum with readable collections and all parse failures

        Raises:
            DataDirectoryNotFoundError: If the data root does not exist
        """
        if not self.data_dir.is_dir():
            raise DataDirectoryNotFoundError(str(self.data_dir))

        levels = tuple(levels)
        result = LoadedCurriculum(levels=levels)
        wanted_weeks = [week] if week is not None else list(range(1, TOTAL_WEEKS + 1))

        for level in levels:
            week_files = self._discover(level, result.parse_failures)
            result.missing_weeks[level.value] = [
                w for w in wanted_weeks if w not in week_files
            ]

            for week_number in sorted(week_files):
                if week is not None and week_number != week:
                    continue
                path = week_files[week_number]
                try:
                    collection = self.load_collection(path, level, week_number)
                except CollectionParseError as e:
                    logger.warning(f"Skipping {e.source}: {e.reason}")
                    result.parse_failures.append(ParseFailure(source=e.source, message=e.reason))
                    continue
                result.collections.append(collection)

        result.inventory = self.load_inventory(result.parse_failures)

        logger.info(
            f"Loaded {result.weeks_found} collection(s), {result.total_lessons} lesson(s), "
            f"{len(result.inventory)} inventory item(s), "
            f"{len(result.parse_failures)} parse failure(s)"
        )
        return result

    def load_collection(self, path: Path, level: Level, week_number: int) -> WeekCollection:
        """
        Parse one week file into a WeekCollection.

        Raises:
            CollectionParseError: If the file cannot be trusted as a whole
        """
        source = self._source_name(path)

        try:
            data = orjson.loads(path.read_bytes())
        except OSError as e:
            raise CollectionParseError(source, f"could not read file: {e}") from e
        except orjson.JSONDecodeError as e:
            raise CollectionParseError(source, f"invalid JSON: {e}") from e

        if not isinstance(data, list):
            raise CollectionParseError(
                source, f"top-level value is {type(data).__name__}, expected a list"
            )

        lessons = []
        for index, entry in enumerate(data):
            lesson = self._coerce_record(source, index, entry)
            if lesson.week_number is not None and lesson.week_number != week_number:
                raise CollectionParseError(
                    source,
                    f"lesson {index + 1} has week_number {lesson.week_number} "
                    f"but the file is week {week_number}",
                )
            lessons.append(lesson)

        return WeekCollection(
            level=level, week_number=week_number, source=source, lessons=tuple(lessons)
        )

    def load_inventory(self, failures: list[ParseFailure]) -> tuple[MaterialInventoryItem, ...]:
        """
        Parse the materials inventory.

        Whole-file problems and individual bad entries are appended to
        ``failures`` with ``kind="inventory"``; valid entries are kept.
        """
        path = self.data_dir / self.materials_file
        try:
            data = self._read_inventory(path)
        except InventoryLoadError as e:
            logger.warning(f"Materials inventory unavailable: {e.detail}")
            failures.append(ParseFailure(source=e.source, message=e.reason, kind="inventory"))
            return ()

        items: list[MaterialInventoryItem] = []
        seen_codes: set[str] = set()
        for index, entry in enumerate(data):
            source = f"{self.materials_file}[{index}]"
            try:
                item = MaterialInventoryItem.model_validate(entry)
            except ValidationError as exc:
                field, message = _first_error(exc)
                failures.append(
                    ParseFailure(source=source, message=f"{field}: {message}", kind="inventory")
                )
                continue
            if item.code in seen_codes:
                failures.append(
                    ParseFailure(
                        source=source, message=f"duplicate code {item.code}", kind="inventory"
                    )
                )
                continue
            seen_codes.add(item.code)
            items.append(item)

        return tuple(items)

    # =========================================================================
    # HELPERS
    # =========================================================================

    def _discover(self, level: Level, failures: list[ParseFailure]) -> dict[int, Path]:
        """Map week number -> file for one level directory."""
        level_dir = self.data_dir / level.directory
        if not level_dir.is_dir():
            logger.warning(f"Level directory not found: {level_dir}")
            return {}

        week_files: dict[int, Path] = {}
        for path in sorted(level_dir.glob("*.json")):
            name = path.name
            if "part" in name:
                logger.debug(f"Ignoring authoring fragment {name}")
                continue
            match = _WEEK_FILE.match(name)
            if not match:
                logger.debug(f"Ignoring non-week file {name}")
                continue

            week_number = int(match.group(1))
            source = self._source_name(path)
            if not 1 <= week_number <= TOTAL_WEEKS:
                failures.append(
                    ParseFailure(
                        source=source,
                        message=f"week {week_number} in filename is outside 1-{TOTAL_WEEKS}",
                    )
                )
                continue
            if week_number in week_files:
                failures.append(
                    ParseFailure(
                        source=source,
                        message=(
                            f"week {week_number} already provided by "
                            f"{self._source_name(week_files[week_number])}"
                        ),
                    )
                )
                continue
            week_files[week_number] = path

        return week_files

    def _coerce_record(self, source: str, index: int, entry: object) -> LessonRecord:
        if not isinstance(entry, dict):
            error = RecordCoercionError(
                index, "<record>", f"expected an object, got {type(entry).__name__}"
            )
            raise CollectionParseError(source, error.detail)
        try:
            return LessonRecord.model_validate(entry)
        except ValidationError as exc:
            field, message = _first_error(exc)
            error = RecordCoercionError(index, field, message)
            raise CollectionParseError(source, error.detail) from exc

    def _read_inventory(self, path: Path) -> list:
        source = path.name
        try:
            data = orjson.loads(path.read_bytes())
        except FileNotFoundError as e:
            raise InventoryLoadError(source, "file not found") from e
        except OSError as e:
            raise InventoryLoadError(source, f"could not read file: {e}") from e
        except orjson.JSONDecodeError as e:
            raise InventoryLoadError(source, f"invalid JSON: {e}") from e

        if not isinstance(data, list):
            raise InventoryLoadError(
                source, f"top-level value is {type(data).__name__}, expected a list"
            )
        return data

    def _source_name(self, path: Path) -> str:
        try:
            return path.relative_to(self.data_dir).as_posix()
        except ValueError:
            return path.as_posix()
