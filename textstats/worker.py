"""Background computation with latest-edit-wins delivery."""

import logging
import threading
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Callable, Optional

from .aggregator import StatisticsAggregator
from .exceptions import TextStatsError
from .models import StatisticsResult, TextSnapshot

logger = logging.getLogger(__name__)


class StatisticsWorker:
    """
    Runs statistics off the caller's thread for interactive editors.

    Every ``submit`` supersedes the previous one. Computations run one at a
    time on a single background thread; a result (or error) is delivered
    to the callbacks only if no newer submission has arrived, so the
    presenter never sees results out of order. Superseded work still
    queued is skipped before scanning; work already running finishes and
    its result is dropped.
    """

    def __init__(
        self,
        aggregator: Optional[StatisticsAggregator] = None,
        on_result: Optional[Callable[[StatisticsResult], None]] = None,
        on_error: Optional[Callable[[TextStatsError], None]] = None,
    ):
        self.aggregator = aggregator or StatisticsAggregator()
        self.on_result = on_result
        self.on_error = on_error
        self._executor = ThreadPoolExecutor(
            max_workers=1, thread_name_prefix="textstats"
        )
        self._lock = threading.Lock()
        self._generation = 0
        self._latest_result: Optional[StatisticsResult] = None

    @property
    def latest_result(self) -> Optional[StatisticsResult]:
        """Most recently delivered result."""
        with self._lock:
            return self._latest_result

    def submit(self, snapshot: TextSnapshot, locale: Optional[str] = None) -> Future:
        """
        Schedule a computation for a new snapshot.

        Returns:
            Future resolving to the result, or None if it was superseded.
        """
        with self._lock:
            self._generation += 1
            generation = self._generation
        return self._executor.submit(self._run, generation, snapshot, locale)

    def _is_current(self, generation: int) -> bool:
        with self._lock:
            return generation == self._generation

    def _run(
        self, generation: int, snapshot: TextSnapshot, locale: Optional[str]
    ) -> Optional[StatisticsResult]:
        if not self._is_current(generation):
            logger.debug(f"Skipping superseded computation #{generation}")
            return None

        try:
            result = self.aggregator.compute(snapshot, locale)
        except TextStatsError as e:
            if self._is_current(generation) and self.on_error is not None:
                self.on_error(e)
            raise

        with self._lock:
            if generation != self._generation:
                logger.debug(f"Dropping stale result of computation #{generation}")
                return None
            self._latest_result = result
        # Callbacks run unlocked so submit() never waits on the presenter
        if self.on_result is not None:
            self.on_result(result)
        return result

    def close(self) -> None:
        """Wait for pending work and stop the background thread."""
        self._executor.shutdown(wait=True)

    def __enter__(self) -> "StatisticsWorker":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()
