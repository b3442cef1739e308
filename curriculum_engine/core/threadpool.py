"""
Executor Pools for Analyzer Fan-Out
===================================
The loaded curriculum model is read-only, so every analyzer can run as an
independent task. Analyzers go to a thread pool; the near-duplicate pair
shards (pure CPU) can go to a process pool.

Strategy:
- Dedicated thread pool for analyzer tasks
- Process pool created lazily, only when sharding is enabled
- Async integration so the orchestrator can gather results
"""

import asyncio
import functools
import logging
import multiprocessing
import time
from concurrent.futures import ProcessPoolExecutor, ThreadPoolExecutor
from typing import Callable, Optional, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


def _process_context() -> multiprocessing.context.BaseContext:
    """Start method for shard workers; the threaded parent is never forked."""
    if "forkserver" in multiprocessing.get_all_start_methods():
        return multiprocessing.get_context("forkserver")
    return multiprocessing.get_context("spawn")


class ThreadPoolManager:
    """
    Manages the executor pools used by the engine.

    Features:
    - Separate pools for analyzer threads and CPU-bound shards
    - Automatic async integration
    - Task timing statistics for the run summary
    """

    def __init__(self, max_workers: int = 5, cpu_workers: int = 2):
        """
        Initialize pools.

        Args:
            max_workers: Max threads for analyzer tasks
            cpu_workers: Max processes for CPU-bound shards
        """
        self.max_workers = max_workers
        self.cpu_workers = cpu_workers

        self._io_executor: Optional[ThreadPoolExecutor] = None
        self._cpu_executor: Optional[ProcessPoolExecutor] = None

        self._stats = {
            "thread_tasks_submitted": 0,
            "thread_tasks_completed": 0,
            "total_thread_time_ms": 0.0,
        }

    @property
    def io_executor(self) -> ThreadPoolExecutor:
        """Get or create the analyzer thread pool."""
        if self._io_executor is None:
            self._io_executor = ThreadPoolExecutor(
                max_workers=self.max_workers, thread_name_prefix="curriculum_analyzer"
            )
            logger.debug(f"Created analyzer thread pool with {self.max_workers} workers")
        return self._io_executor

    @property
    def cpu_executor(self) -> ProcessPoolExecutor:
        """Get or create CPU process pool."""
        if self._cpu_executor is None:
            self._cpu_executor = ProcessPoolExecutor(
                max_workers=self.cpu_workers, mp_context=_process_context()
            )
            logger.debug(f"Created CPU process pool with {self.cpu_workers} workers")
        return self._cpu_executor

    async def run_in_thread(self, func: Callable[..., T], *args, **kwargs) -> T:
        """
        Run a blocking function in the thread pool.

        Args:
            func: Blocking function to run
            *args, **kwargs: Arguments to pass to function

        Returns:
            Function result
        """
        loop = asyncio.get_running_loop()
        self._stats["thread_tasks_submitted"] += 1

        start_time = time.time()

        try:
            if kwargs:
                wrapped = functools.partial(func, *args, **kwargs)
                return await loop.run_in_executor(self.io_executor, wrapped)
            return await loop.run_in_executor(self.io_executor, func, *args)
        finally:
            elapsed_ms = (time.time() - start_time) * 1000
            self._stats["thread_tasks_completed"] += 1
            self._stats["total_thread_time_ms"] += elapsed_ms

    def get_stats(self) -> dict:
        """Get pool statistics."""
        avg_thread_time = self._stats["total_thread_time_ms"] / max(
            self._stats["thread_tasks_completed"], 1
        )

        return {
            **self._stats,
            "avg_thread_time_ms": avg_thread_time,
            "thread_pool_workers": self.max_workers,
            "cpu_pool_workers": self.cpu_workers,
        }

    def shutdown(self, wait: bool = True):
        """Shutdown all pools."""
        if self._io_executor:
            self._io_executor.shutdown(wait=wait)
            self._io_executor = None

        if self._cpu_executor:
            self._cpu_executor.shutdown(wait=wait)
            self._cpu_executor = None

        logger.debug("Executor pools shut down")


# Global pool manager
_pool_manager: Optional[ThreadPoolManager] = None


def get_pool_manager() -> ThreadPoolManager:
    """Get or create global pool manager."""
    global _pool_manager
    if _pool_manager is None:
        from curriculum_engine.core.config import settings

        _pool_manager = ThreadPoolManager(
            max_workers=settings.THREADPOOL_MAX_WORKERS,
            cpu_workers=max(1, settings.CPU_WORKERS),
        )
    return _pool_manager
