"""Curriculum-wide constants: calendar shape, levels, subjects, limits."""

from types import MappingProxyType

# =============================================================================
# CALENDAR
# =============================================================================

TOTAL_WEEKS = 36
LESSONS_PER_WEEK = 25
SCHOOL_DAYS = (1, 2, 3, 4, 5)
LESSONS_PER_DAY = 5
MIN_SORT_ORDER = 1
MAX_SORT_ORDER = 25
MIN_SLIDES = 3

# quarter -> (first week, last week), inclusive
QUARTER_WEEKS = MappingProxyType(
    {
        1: (1, 9),
        2: (10, 18),
        3: (19, 27),
        4: (28, 36),
    }
)


def expected_quarter(week_number: int) -> int:
    """Return the quarter a week belongs to, or -1 when the week is out of range."""
    for quarter, (first, last) in QUARTER_WEEKS.items():
        if first <= week_number <= last:
            return quarter
    return -1


# =============================================================================
# LEVELS
# =============================================================================

# level value -> directory holding that level's week files
LEVEL_DIRECTORIES = MappingProxyType(
    {
        "primary": "primary-lessons",
        "lower_elementary": "lower-elementary-lessons",
        "upper_elementary": "upper-elementary-lessons",
    }
)

DEFAULT_MATERIALS_FILE = "materials.json"
WEEK_FILE_PATTERN = r"^week-(\d+)\.json$"

# =============================================================================
# RECORD CONTRACT
# =============================================================================

REQUIRED_FIELDS = (
    "level",
    "subject",
    "week_number",
    "day_of_week",
    "quarter",
    "title",
    "description",
    "instructions",
    "duration_minutes",
    "lesson_type",
    "materials_needed",
    "parent_notes",
    "sort_order",
)

# Only quarter-one lessons ship with slide decks
SLIDE_CONTENT_REQUIRED_QUARTERS = frozenset({1})

TITLE_PREFIX_LENGTH = 40
