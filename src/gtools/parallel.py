"""Parallel per-file processing with joblib."""

import logging
import os
from typing import Any, Callable, List

from joblib import Parallel, delayed
from rich.progress import BarColumn, Progress, SpinnerColumn, TaskProgressColumn, TextColumn

logger = logging.getLogger(__name__)


class ParallelProcessor:
    """Order-preserving parallel map over independent inputs."""

    def __init__(
        self,
        n_jobs: int = -1,
        backend: str = "loky",
        verbose: int = 0,
    ):
        """
        Initialize parallel processor.

        Args:
            n_jobs: Number of parallel jobs (-1 for all CPUs)
            backend: joblib backend ('loky', 'threading', 'multiprocessing')
            verbose: Verbosity level passed to joblib
        """
        self.n_jobs = n_jobs if n_jobs > 0 else (os.cpu_count() or 1)
        self.backend = backend
        self.verbose = verbose
        logger.debug("ParallelProcessor: %d jobs on %s backend", self.n_jobs, backend)

    def map(
        self,
        func: Callable,
        items: List[Any],
        description: str = "Processing",
        show_progress: bool = True,
    ) -> List[Any]:
        """
        Map function over items in parallel.

        Results come back in the order of `items`.

        Args:
            func: Function to apply
            items: Items to process
            description: Description for progress bar
            show_progress: Whether to show progress bar

        Returns:
            List of results
        """
        if not items:
            return []

        if show_progress:
            with Progress(
                SpinnerColumn(),
                TextColumn("[progress.description]{task.description}"),
                BarColumn(),
                TaskProgressColumn(),
            ) as progress:
                task = progress.add_task(f"[cyan]{description}...", total=len(items))

                results = []
                with Parallel(
                    n_jobs=self.n_jobs, backend=self.backend, verbose=self.verbose
                ) as parallel:
                    for result in parallel(delayed(func)(item) for item in items):
                        results.append(result)
                        progress.update(task, advance=1)

                return results

        return Parallel(n_jobs=self.n_jobs, backend=self.backend, verbose=self.verbose)(
            delayed(func)(item) for item in items
        )
