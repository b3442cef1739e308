"""Lesson, week-collection and inventory data contracts."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Iterator

from pydantic import BaseModel, ConfigDict, Field

from ..core.constants import LEVEL_DIRECTORIES, TITLE_PREFIX_LENGTH


class Level(str, Enum):
    """Grade bands."""

    PRIMARY = "primary"
    LOWER_ELEMENTARY = "lower_elementary"
    UPPER_ELEMENTARY = "upper_elementary"

    @property
    def directory(self) -> str:
        return LEVEL_DIRECTORIES[self.value]


class Subject(str, Enum):
    """Curriculum subjects."""

    PRACTICAL_LIFE = "practical_life"
    SENSORIAL = "sensorial"
    LANGUAGE = "language"
    MATH = "math"
    GEOMETRY = "geometry"
    SCIENCE = "science"
    GEOGRAPHY = "geography"
    CULTURE = "culture"
    HISTORY = "history"
    ART_MUSIC = "art_music"
    READ_ALOUD = "read_aloud"


class LessonType(str, Enum):
    """How a lesson is delivered."""

    GUIDED = "guided"
    INDEPENDENT = "independent"
    PROJECT = "project"
    REVIEW = "review"
    GREAT_LESSON = "great_lesson"
    ASSESSMENT = "assessment"


class LessonRecord(BaseModel):
    """One scheduled unit of instruction.

    Every field is optional at the type level: a missing or null value is a
    structural violation reported field-by-field, not a parse failure. A value
    that is present but cannot be coerced to the declared type is a parse
    failure for the whole collection.
    """

    model_config = ConfigDict(populate_by_name=True, frozen=True, extra="ignore")

    level: Level | None = Field(default=None, alias="level_name")
    subject: Subject | None = Field(default=None, alias="subject_name")
    week_number: int | None = None
    day_of_week: int | None = None
    quarter: int | None = None
    title: str | None = None
    description: str | None = None
    instructions: str | None = None
    duration_minutes: int | None = None
    lesson_type: LessonType | None = None
    materials_needed: tuple[str | None, ...] | None = None
    slide_content: dict[str, Any] | None = None
    parent_notes: str | None = None
    sort_order: int | None = None

    @classmethod
    def source_name(cls, field_name: str) -> str:
        """Return the on-disk key for a model field (e.g. ``subject`` -> ``subject_name``)."""
        info = cls.model_fields.get(field_name)
        if info is not None and info.alias:
            return info.alias
        return field_name

    @property
    def title_prefix(self) -> str:
        return (self.title or "NO TITLE")[:TITLE_PREFIX_LENGTH]

    @property
    def subject_value(self) -> str:
        return self.subject.value if self.subject is not None else ""

    @property
    def level_value(self) -> str:
        return self.level.value if self.level is not None else ""

    @property
    def materials(self) -> list[str]:
        """Materials with null entries folded to empty strings."""
        return [m or "" for m in (self.materials_needed or ())]


@dataclass(frozen=True)
class WeekCollection:
    """The lessons scheduled for one week within one level.

    Identity is ``(level, week_number)``. Collections are produced by the
    loader and never mutated afterwards.
    """

    level: Level
    week_number: int
    source: str
    lessons: tuple[LessonRecord, ...] = ()

    @property
    def identity(self) -> tuple[str, int]:
        return (self.level.value, self.week_number)

    def __len__(self) -> int:
        return len(self.lessons)

    def __iter__(self) -> Iterator[LessonRecord]:
        return iter(self.lessons)


class MaterialInventoryItem(BaseModel):
    """A canonical physical or printable resource."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    code: str = Field(min_length=1)
    name: str = Field(min_length=1)
    subject_area: str = ""
    description: str | None = None


@dataclass
class LoadedCurriculum:
    """Everything the loader produced for one run."""

    collections: list[WeekCollection] = field(default_factory=list)
    inventory: tuple[MaterialInventoryItem, ...] = ()
    parse_failures: list = field(default_factory=list)
    missing_weeks: dict[str, list[int]] = field(default_factory=dict)
    levels: tuple[Level, ...] = ()

    @property
    def total_lessons(self) -> int:
        return sum(len(c) for c in self.collections)

    @property
    def weeks_found(self) -> int:
        return len(self.collections)

    def iter_lessons(self) -> Iterator[tuple[WeekCollection, LessonRecord]]:
        """Yield every ``(collection, lesson)`` pair."""
        for collection in self.collections:
            for lesson in collection.lessons:
                yield collection, lesson

