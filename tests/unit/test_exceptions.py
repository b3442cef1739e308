"""Unit tests for custom exceptions."""

import pytest

from curriculum_engine.core.exceptions import (
    AnalyzerError,
    CollectionParseError,
    CurriculumEngineException,
    DataDirectoryNotFoundError,
    InventoryLoadError,
    RecordCoercionError,
)


@pytest.mark.unit
def test_base_exception():
    """Test base CurriculumEngineException."""
    exc = CurriculumEngineException("Test error", error_code="TEST_ERROR")

    assert exc.detail == "Test error"
    assert exc.error_code == "TEST_ERROR"
    assert exc.timestamp is not None
    assert str(exc) == "Test error"

    exc_dict = exc.to_dict()
    assert exc_dict["error"] == "TEST_ERROR"
    assert exc_dict["detail"] == "Test error"


@pytest.mark.unit
def test_data_directory_not_found_error():
    """Test DataDirectoryNotFoundError."""
    exc = DataDirectoryNotFoundError("/missing/data")

    assert exc.path == "/missing/data"
    assert "/missing/data" in exc.detail
    assert isinstance(exc, CurriculumEngineException)


@pytest.mark.unit
def test_collection_parse_error():
    """Test CollectionParseError keeps source and reason."""
    exc = CollectionParseError("primary-lessons/week-03.json", "invalid JSON")

    assert exc.source == "primary-lessons/week-03.json"
    assert exc.reason == "invalid JSON"
    assert "week-03.json" in exc.detail


@pytest.mark.unit
def test_record_coercion_error_is_one_based():
    """Test RecordCoercionError reports a 1-based lesson position."""
    exc = RecordCoercionError(0, "week_number", "Input should be a valid integer")

    assert exc.index == 0
    assert exc.field == "week_number"
    assert "lesson 1" in exc.detail
    assert "week_number" in exc.detail


@pytest.mark.unit
def test_inventory_load_error():
    """Test InventoryLoadError."""
    exc = InventoryLoadError("materials.json", "file not found")

    assert exc.source == "materials.json"
    assert "file not found" in exc.detail


@pytest.mark.unit
def test_analyzer_error():
    """Test AnalyzerError wraps the original exception."""
    original = RuntimeError("boom")
    exc = AnalyzerError("duplicates", original)

    assert exc.analyzer == "duplicates"
    assert exc.original_error is original
    assert exc.error_code == "ANALYZER_DUPLICATES_ERROR"
    assert "boom" in exc.detail

    exc_dict = exc.to_dict()
    assert exc_dict["analyzer"] == "duplicates"
