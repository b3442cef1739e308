"""
Curriculum Engine Core Module
=============================

Structure:
- config.py: Engine settings and environment configuration
- constants.py: Calendar shape, levels, record contract
- exceptions.py: Custom exception classes
- threadpool.py: Executor pools for analyzer fan-out
"""

from .config import Settings, get_settings, settings
from .constants import (
    LESSONS_PER_WEEK,
    LEVEL_DIRECTORIES,
    QUARTER_WEEKS,
    TOTAL_WEEKS,
    expected_quarter,
)
from .exceptions import (
    AnalyzerError,
    CollectionParseError,
    CurriculumEngineException,
    DataDirectoryNotFoundError,
    InventoryLoadError,
    RecordCoercionError,
)
from .threadpool import ThreadPoolManager, get_pool_manager

__all__ = [
    "LESSONS_PER_WEEK",
    "LEVEL_DIRECTORIES",
    "QUARTER_WEEKS",
    "TOTAL_WEEKS",
    "AnalyzerError",
    "CollectionParseError",
    "CurriculumEngineException",
    "DataDirectoryNotFoundError",
    "InventoryLoadError",
    "RecordCoercionError",
    "Settings",
    "ThreadPoolManager",
    "expected_quarter",
    "get_pool_manager",
    "get_settings",
    "settings",
]
