"""
Curriculum Engine Orchestrator.

Loads the curriculum once, then fans the read-only model out to every
analyzer concurrently:

- asyncio.gather() over analyzer tasks on the shared thread pool
- optional process-pool sharding for the near-duplicate pair scan
- an analyzer that raises is recorded as an AnalyzerFailure; the others
  still contribute their findings
"""

import asyncio
import logging
import time
from pathlib import Path
from typing import Any, Callable, Iterable, Optional

from ..core.config import Settings, get_settings
from ..core.exceptions import AnalyzerError
from ..core.threadpool import ThreadPoolManager, get_pool_manager
from ..schemas.findings import ClassificationResult
from ..schemas.lesson import Level, LoadedCurriculum
from ..services.classify import ModalityClassifier
from ..services.report import ValidationReport
from ..services.validate import (
    CollectionLoader,
    CrossReferenceResolver,
    DistributionChecker,
    DuplicateDetector,
    DuplicateDetectorConfig,
    StructuralValidator,
)

logger = logging.getLogger(__name__)


class CurriculumEngine:
    """
    Runs the loader and all analyzers, producing a ValidationReport.

    Every collaborator can be injected; defaults are built from settings.
    """

    def __init__(
        self,
        data_dir: Optional[Path] = None,
        materials_file: Optional[str] = None,
        settings: Optional[Settings] = None,
        structural: Optional[StructuralValidator] = None,
        duplicates: Optional[DuplicateDetector] = None,
        resolver: Optional[CrossReferenceResolver] = None,
        distribution: Optional[DistributionChecker] = None,
        classifier: Optional[ModalityClassifier] = None,
        pool: Optional[ThreadPoolManager] = None,
    ):
        self.settings = settings or get_settings()
        self.loader = CollectionLoader(
            Path(data_dir) if data_dir is not None else self.settings.CURRICULUM_DATA_DIR,
            materials_file or self.settings.MATERIALS_FILE,
        )
        self.structural = structural or StructuralValidator()
        self.duplicates = duplicates or DuplicateDetector(
            DuplicateDetectorConfig(
                max_distance=self.settings.NEAR_DUPLICATE_MAX_DISTANCE,
                shards=max(1, self.settings.NEAR_DUPLICATE_SHARDS),
            )
        )
        self.resolver = resolver or CrossReferenceResolver()
        self.distribution = distribution or DistributionChecker()
        self.classifier = classifier or ModalityClassifier()
        self.pool = pool or get_pool_manager()

    # =========================================================================
    # PUBLIC API
    # =========================================================================

    async def load(self, levels: Iterable[Level], week: Optional[int] = None) -> LoadedCurriculum:
        """Load collections and inventory off the event loop.

        Raises:
            DataDirectoryNotFoundError: If the data root does not exist
        """
        return await self.pool.run_in_thread(self.loader.load, tuple(levels), week)

    async def run(
        self,
        levels: Iterable[Level] = (Level.PRIMARY,),
        week: Optional[int] = None,
        classify: bool = True,
    ) -> ValidationReport:
        """
        Validate the curriculum.

        Args:
            levels: Levels to load
            week: Optional single-week filter
            classify: Include modality classification in the report

        Returns:
            ValidationReport with every analyzer's findings

        Raises:
            DataDirectoryNotFoundError: If the data root does not exist
        """
        start = time.perf_counter()
        curriculum = await self.load(levels, week)
        report = ValidationReport.from_curriculum(curriculum, week_filter=week)

        if not curriculum.collections:
            logger.warning("No readable week collections found; skipping analyzers")
            return report

        analyzers = self._analyzers(classify)
        task_names = list(analyzers)
        task_results = await asyncio.gather(
            *(self.pool.run_in_thread(analyzers[name], curriculum) for name in task_names),
            return_exceptions=True,
        )

        for name, task_result in zip(task_names, task_results, strict=False):
            if isinstance(task_result, Exception):
                logger.error(
                    f"Analyzer '{name}' failed: {task_result}",
                    exc_info=(type(task_result), task_result, task_result.__traceback__),
                )
                task_result = AnalyzerError(name, task_result)
            report.record(name, task_result)

        elapsed_ms = (time.perf_counter() - start) * 1000
        logger.info(
            f"Validation finished in {elapsed_ms:.0f}ms: "
            f"blocking={report.has_blocking_errors}, publishable={report.is_publishable}"
        )
        logger.debug(f"Pool stats: {self.pool.get_stats()}")
        return report

    async def classify(
        self, levels: Iterable[Level] = (Level.PRIMARY,), week: Optional[int] = None
    ) -> list[ClassificationResult]:
        """Load and classify every lesson without running the validators."""
        curriculum = await self.load(levels, week)
        return await self.pool.run_in_thread(self.classifier.classify_curriculum, curriculum)

    # =========================================================================
    # HELPERS
    # =========================================================================

    def _analyzers(self, classify: bool) -> dict[str, Callable[[LoadedCurriculum], Any]]:
        analyzers: dict[str, Callable[[LoadedCurriculum], Any]] = {
            "structural": self.structural.validate,
            "duplicates": self._detect_duplicates,
            "cross_reference": self.resolver.resolve_curriculum,
            "distribution": self.distribution.check,
        }
        if classify:
            analyzers["classification"] = self.classifier.classify_curriculum
        return analyzers

    def _detect_duplicates(self, curriculum: LoadedCurriculum):
        executor = self.pool.cpu_executor if self.duplicates.config.shards > 1 else None
        return self.duplicates.detect(curriculum, executor=executor)
