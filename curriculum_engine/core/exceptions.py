"""Custom exception classes for the curriculum validation engine.

Only DataDirectoryNotFoundError is fatal to a run. Everything else is raised
inside one loader step or one analyzer and converted into a report entry by
the caller.
"""

from datetime import UTC, datetime
from typing import Any


class CurriculumEngineException(Exception):
    """Base exception for all engine errors."""

    def __init__(self, detail: str, error_code: str = "ENGINE_ERROR"):
        self.detail = detail
        self.error_code = error_code
        self.timestamp = datetime.now(UTC).isoformat()
        super().__init__(detail)

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to dictionary for report output."""
        return {
            "error": self.error_code,
            "detail": self.detail,
            "timestamp": self.timestamp,
        }


class DataDirectoryNotFoundError(CurriculumEngineException):
    """Raised when the curriculum data root does not exist."""

    def __init__(self, path: str):
        self.path = path
        super().__init__(
            detail=f"Curriculum data directory not found: {path}",
            error_code="DATA_DIRECTORY_NOT_FOUND",
        )


# =============================================================================
# LOADER EXCEPTIONS (converted to ParseFailure records)
# =============================================================================


class CollectionParseError(CurriculumEngineException):
    """Raised when one week collection file cannot be loaded."""

    def __init__(self, source: str, reason: str):
        self.source = source
        self.reason = reason
        super().__init__(
            detail=f"{source}: {reason}", error_code="COLLECTION_PARSE_ERROR"
        )


class RecordCoercionError(CurriculumEngineException):
    """Raised when a single record cannot be coerced into a LessonRecord."""

    def __init__(self, index: int, field: str, reason: str):
        self.index = index
        self.field = field
        self.reason = reason
        super().__init__(
            detail=f"lesson {index + 1}, field '{field}': {reason}",
            error_code="RECORD_COERCION_ERROR",
        )


class InventoryLoadError(CurriculumEngineException):
    """Raised when the materials inventory cannot be loaded."""

    def __init__(self, source: str, reason: str):
        self.source = source
        self.reason = reason
        super().__init__(
            detail=f"{source}: {reason}", error_code="INVENTORY_LOAD_ERROR"
        )


# =============================================================================
# ANALYZER EXCEPTIONS
# =============================================================================


class AnalyzerError(CurriculumEngineException):
    """Wraps a crash inside one analyzer so the others can still complete."""

    def __init__(self, analyzer: str, original_error: Exception | None = None):
        self.analyzer = analyzer
        self.original_error = original_error
        reason = (
            f"{type(original_error).__name__}: {original_error}"
            if original_error is not None
            else "unknown failure"
        )
        super().__init__(
            detail=f"Analyzer '{analyzer}' failed ({reason})",
            error_code=f"ANALYZER_{analyzer.upper()}_ERROR",
        )

    def to_dict(self) -> dict[str, Any]:
        base = super().to_dict()
        base["analyzer"] = self.analyzer
        return base
