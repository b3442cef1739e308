"""Centralized configuration management for the curriculum validation engine."""

import logging
import os
from pathlib import Path

# Load .env file BEFORE any settings are read
from dotenv import load_dotenv

env_path = Path(__file__).parent.parent.parent / ".env"
if env_path.exists():
    load_dotenv(env_path)


class Settings:
    """Engine settings read from the environment."""

    # =================================================================
    # APPLICATION
    # =================================================================
    APP_NAME: str = "Curriculum Validation Engine"
    APP_VERSION: str = "1.0.0"
    ENVIRONMENT: str = os.getenv("ENVIRONMENT", "development")

    # =================================================================
    # INPUT
    # =================================================================
    CURRICULUM_DATA_DIR: Path = Path(os.getenv("CURRICULUM_DATA_DIR", "data"))
    MATERIALS_FILE: str = os.getenv("MATERIALS_FILE", "materials.json")

    # =================================================================
    # LOGGING
    # =================================================================
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")
    LOG_FORMAT: str = os.getenv("LOG_FORMAT", "text")  # text | json
    LOG_TO_FILE: bool = os.getenv("LOG_TO_FILE", "false").lower() == "true"
    LOG_DIR: Path = Path(os.getenv("LOG_DIR", "logs"))
    LOG_FILE: str = os.getenv("LOG_FILE", "curriculum_engine.log")
    LOG_MAX_BYTES: int = int(os.getenv("LOG_MAX_BYTES", str(10 * 1024 * 1024)))
    LOG_BACKUP_COUNT: int = int(os.getenv("LOG_BACKUP_COUNT", "5"))

    # =================================================================
    # ANALYZERS
    # =================================================================
    # Exclusive upper bound: pairs with 0 < distance < max are near-duplicates
    NEAR_DUPLICATE_MAX_DISTANCE: int = int(
        os.getenv("NEAR_DUPLICATE_MAX_DISTANCE", "5")
    )
    NEAR_DUPLICATE_SHARDS: int = int(os.getenv("NEAR_DUPLICATE_SHARDS", "1"))

    # =================================================================
    # CONCURRENCY
    # =================================================================
    THREADPOOL_MAX_WORKERS: int = int(os.getenv("THREADPOOL_MAX_WORKERS", "5"))
    CPU_WORKERS: int = int(os.getenv("CPU_WORKERS", "2"))

    # =================================================================
    # REPORTING
    # =================================================================
    REPORT_SECTION_LIMIT: int = int(os.getenv("REPORT_SECTION_LIMIT", "20"))

    @property
    def materials_path(self) -> Path:
        """Full path to the materials inventory file."""
        return self.CURRICULUM_DATA_DIR / self.MATERIALS_FILE

    def _validate_paths(self, issues: list[str]) -> None:
        if not self.CURRICULUM_DATA_DIR.exists():
            issues.append(
                f"ERROR: CURRICULUM_DATA_DIR ({self.CURRICULUM_DATA_DIR}) does not exist"
            )
        elif not self.materials_path.exists():
            issues.append(f"WARNING: materials inventory ({self.materials_path}) not found")

    def _validate_thresholds(self, issues: list[str]) -> None:
        if self.NEAR_DUPLICATE_MAX_DISTANCE < 1:
            issues.append("WARNING: NEAR_DUPLICATE_MAX_DISTANCE < 1 disables near-duplicate detection")
        if self.NEAR_DUPLICATE_SHARDS < 1:
            issues.append("ERROR: NEAR_DUPLICATE_SHARDS must be at least 1")
        if self.THREADPOOL_MAX_WORKERS < 1:
            issues.append("ERROR: THREADPOOL_MAX_WORKERS must be at least 1")
        if self.LOG_FORMAT not in ("text", "json"):
            issues.append(f"WARNING: unknown LOG_FORMAT '{self.LOG_FORMAT}', using text")

    def validate_required(self) -> list[str]:
        """
        Validate required configuration at startup.
        Returns list of warnings/errors.
        """
        issues: list[str] = []
        logger = logging.getLogger(__name__)

        self._validate_paths(issues)
        self._validate_thresholds(issues)

        for issue in issues:
            log_method = logger.error if issue.startswith("ERROR") else logger.warning
            log_method(issue)

        return issues


# Global settings instance
settings = Settings()


def get_settings() -> Settings:
    """Get the global settings instance."""
    return settings
