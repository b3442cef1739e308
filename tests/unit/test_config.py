"""Unit tests for core configuration."""

from pathlib import Path

import pytest

from curriculum_engine.core.config import Settings, get_settings, settings


@pytest.mark.unit
def test_settings_initialization():
    """Test settings are initialized properly."""
    assert settings.APP_NAME == "Curriculum Validation Engine"
    assert settings.APP_VERSION == "1.0.0"
    assert get_settings() is settings


@pytest.mark.unit
def test_settings_analyzer_defaults():
    """Test analyzer thresholds have sane defaults."""
    assert settings.NEAR_DUPLICATE_MAX_DISTANCE >= 1
    assert settings.NEAR_DUPLICATE_SHARDS >= 1
    assert settings.REPORT_SECTION_LIMIT > 0
    assert settings.MATERIALS_FILE.endswith(".json")


@pytest.mark.unit
def test_materials_path_under_data_dir():
    """Test the inventory path is resolved inside the data root."""
    assert settings.materials_path.parent == settings.CURRICULUM_DATA_DIR


@pytest.mark.unit
def test_validate_required_reports_missing_data_dir(tmp_path):
    """Test startup validation flags a missing data root as an error."""
    custom = Settings()
    custom.CURRICULUM_DATA_DIR = tmp_path / "does-not-exist"

    issues = custom.validate_required()

    assert any(issue.startswith("ERROR") and "CURRICULUM_DATA_DIR" in issue for issue in issues)


@pytest.mark.unit
def test_validate_required_warns_on_missing_inventory(tmp_path):
    """Test a data root without materials.json is only a warning."""
    custom = Settings()
    custom.CURRICULUM_DATA_DIR = Path(tmp_path)

    issues = custom.validate_required()

    assert issues
    assert all(not issue.startswith("ERROR") for issue in issues)
    assert any("materials inventory" in issue for issue in issues)


@pytest.mark.unit
def test_validate_required_flags_bad_thresholds(tmp_path):
    """Test invalid concurrency and log-format settings are reported."""
    custom = Settings()
    custom.CURRICULUM_DATA_DIR = Path(tmp_path)
    custom.NEAR_DUPLICATE_SHARDS = 0
    custom.LOG_FORMAT = "yaml"

    issues = custom.validate_required()

    assert "ERROR: NEAR_DUPLICATE_SHARDS must be at least 1" in issues
    assert any("LOG_FORMAT" in issue for issue in issues)
