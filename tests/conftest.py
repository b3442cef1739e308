"""
Shared test fixtures for the curriculum engine.

Provides record factories, a template-conformant 25-lesson week, a small
materials inventory, and helpers to lay them out on disk the way the loader
expects (``<data>/<level-dir>/week-NN.json`` plus ``materials.json``).
"""

import os
from pathlib import Path
from typing import Any, Callable

import orjson
import pytest

# Set test environment BEFORE importing modules
os.environ["ENVIRONMENT"] = "test"
os.environ.setdefault("LOG_LEVEL", "WARNING")

from curriculum_engine.core.constants import expected_quarter
from curriculum_engine.core.threadpool import ThreadPoolManager
from curriculum_engine.pipeline import CurriculumEngine

# =============================================================================
# PYTEST CONFIGURATION
# =============================================================================


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests (fast, isolated)")
    config.addinivalue_line("markers", "integration: Loader-to-report runs over a temp data dir")
    config.addinivalue_line("markers", "slow: Slow running tests")


# =============================================================================
# LESSON DATA
# =============================================================================

# (subject, title) per slot for each school day; five slots per day
WEEK_LAYOUT: dict[int, list[tuple[str, str]]] = {
    1: [
        ("practical_life", "Pouring Water Between Pitchers"),
        ("language", "Sandpaper Letters s m a"),
        ("math", "Number Rods One to Five"),
        ("read_aloud", "Read Aloud: The Snowy Day"),
        ("geography", "Land and Water Globe"),
    ],
    2: [
        ("sensorial", "Pink Tower Building"),
        ("language", "Sound Games with Objects"),
        ("math", "Spindle Box Counting"),
        ("science", "Sink or Float Experiment"),
        ("art_music", "Watercolor Washes"),
    ],
    3: [
        ("practical_life", "Folding Napkins"),
        ("language", "Moveable Alphabet Word Building"),
        ("math", "Golden Bead Presentation"),
        ("read_aloud", "Read Aloud: Frog and Toad"),
        ("culture", "Holidays Around the World"),
    ],
    4: [
        ("sensorial", "Color Tablets Box One"),
        ("language", "Rhyming Basket"),
        ("math", "Teen Board Work"),
        ("science", "Parts of a Leaf"),
        ("art_music", "Rhythm Sticks and Clapping"),
    ],
    5: [
        ("practical_life", "Polishing a Mirror"),
        ("language", "Storytelling with Pictures"),
        ("math", "Hundred Board Counting"),
        ("read_aloud", "Read Aloud: Corduroy"),
        ("geography", "Continents Puzzle Map"),
    ],
}


def make_lesson(**overrides: Any) -> dict[str, Any]:
    """A complete, valid on-disk lesson record for week 5 (quarter 1)."""
    record = {
        "level_name": "primary",
        "subject_name": "math",
        "week_number": 5,
        "day_of_week": 1,
        "quarter": 1,
        "title": "Number Rods One to Five",
        "description": "Introduce the first five number rods.",
        "instructions": "Lay out the rods. Count each segment together.",
        "duration_minutes": 20,
        "lesson_type": "guided",
        "materials_needed": ["Tray", "Work rug"],
        "parent_notes": "Let the child count at their own pace.",
        "sort_order": 1,
        "slide_content": {"slides": [{"text": "One"}, {"text": "Two"}, {"text": "Three"}]},
    }
    record.update(overrides)
    return record


def make_week(week: int = 5, level: str = "primary") -> list[dict[str, Any]]:
    """Twenty-five lessons that satisfy every structural and distribution rule.

    Days cycle 1..5 five times and ``sort_order`` runs 1..25.
    """
    records = []
    for slot in range(5):
        for day in range(1, 6):
            subject, title = WEEK_LAYOUT[day][slot]
            records.append(
                make_lesson(
                    level_name=level,
                    subject_name=subject,
                    week_number=week,
                    day_of_week=day,
                    quarter=expected_quarter(week),
                    title=title,
                    description=f"{title} for the week.",
                    sort_order=slot * 5 + day,
                )
            )
    return records


SAMPLE_INVENTORY = [
    {"code": "SN001", "name": "Pink Tower", "subject_area": "sensorial"},
    {"code": "MA001", "name": "Number Rods", "subject_area": "math"},
    {"code": "LA004", "name": "Large Moveable Alphabet", "subject_area": "language"},
    {"code": "GG001", "name": "Land and Water Globe", "subject_area": "geography"},
    {"code": "PL020", "name": "Napkin Folding Set", "subject_area": "practical_life"},
]


# =============================================================================
# DATA DIRECTORY FIXTURES
# =============================================================================


def write_json(path: Path, payload: Any) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(orjson.dumps(payload))
    return path


@pytest.fixture
def data_dir(tmp_path: Path) -> Path:
    """Empty data root containing only the materials inventory."""
    root = tmp_path / "data"
    write_json(root / "materials.json", SAMPLE_INVENTORY)
    return root


@pytest.fixture
def write_week(data_dir: Path) -> Callable[..., Path]:
    """Write ``records`` as ``<level-dir>/week-NN.json`` under the data root."""

    def _write(week: int, records: Any, level_dir: str = "primary-lessons") -> Path:
        return write_json(data_dir / level_dir / f"week-{week:02d}.json", records)

    return _write


@pytest.fixture
def valid_week() -> list[dict[str, Any]]:
    return make_week(5)


# =============================================================================
# ENGINE FIXTURES
# =============================================================================


@pytest.fixture
def pool():
    """Private executor pools, shut down after the test."""
    manager = ThreadPoolManager(max_workers=2, cpu_workers=1)
    yield manager
    manager.shutdown()


@pytest.fixture
def engine(data_dir: Path, pool: ThreadPoolManager) -> CurriculumEngine:
    return CurriculumEngine(data_dir=data_dir, pool=pool)


@pytest.fixture
def lesson_factory() -> Callable[..., dict[str, Any]]:
    return make_lesson


@pytest.fixture
def week_factory() -> Callable[..., list[dict[str, Any]]]:
    return make_week
