"""
Latest-input-wins dispatcher for EV recomputation.

Shoe edits arrive one card at a time, often faster than a full recomputation
finishes.  LatestResultPublisher numbers every submission with a generation
counter and only ever publishes the result of the newest submission:

    - a job whose generation is already superseded when it starts is skipped
    - a job that finishes after a newer submission exists is discarded
    - the published generation never goes backwards

"Newer submission exists" counts a submission that is still queued, not only
one that has started.  Under a steady stream of edits nothing is published
until the input pauses, and latest() keeps returning the last published
result in the meantime.

Each job works on its own copy of the shoe, so the engine's scratch state is
never shared between threads.  The worker pool may be shared between
publishers (one per dashboard session); a publisher only shuts down a pool
it created itself.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from concurrent.futures import Executor, Future, ThreadPoolExecutor

import numpy as np

from src.engine.shoe import validate_shoe
from src.solvers.ev import DEFAULT_ROLLING, CalculationResult, calculate_ev
from src.solvers.payouts import DEFAULT_TABLE_PAYOUTS, PayoutConfig

logger = logging.getLogger(__name__)

ComputeFn = Callable[[np.ndarray, PayoutConfig, float], CalculationResult]
PublishCallback = Callable[[int, CalculationResult], None]


class LatestResultPublisher:
    """Runs calculate_ev() in the background and keeps the newest result.

    A finished result is dropped as soon as any later submission exists, even
    one still waiting in the queue.  The last published result stays current
    until a job completes with no newer submission behind it.

    Args:
        payouts:     Default payout table for submissions that don't give one.
        rolling:     Default rolling percentage.
        max_workers: Worker threads when the publisher creates its own pool.
        compute:     EV function, calculate_ev unless overridden.
        on_publish:  Called with (generation, result) each time a result is published.
        executor:    Shared pool to run jobs on.  Left running by close().
    """

    def __init__(
        self,
        payouts: PayoutConfig = DEFAULT_TABLE_PAYOUTS,
        rolling: float = DEFAULT_ROLLING,
        max_workers: int = 2,
        compute: ComputeFn = calculate_ev,
        on_publish: PublishCallback | None = None,
        executor: Executor | None = None,
    ) -> None:
        self.payouts = payouts
        self.rolling = rolling
        self._compute = compute
        self._on_publish = on_publish
        self._owns_executor = executor is None
        if executor is None:
            executor = ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix="ev")
        self._executor = executor
        self._lock = threading.Lock()
        self._generation = 0
        self._published_generation = 0
        self._result: CalculationResult | None = None
        self._latest_future: Future | None = None

    @property
    def generation(self) -> int:
        """Generation number of the newest submission."""
        with self._lock:
            return self._generation

    def latest(self) -> tuple[int, CalculationResult | None]:
        """Return (generation, result) of the newest published result."""
        with self._lock:
            return self._published_generation, self._result

    def submit(
        self,
        shoe: np.ndarray,
        payouts: PayoutConfig | None = None,
        rolling: float | None = None,
    ) -> Future:
        """Queue a recomputation for this shoe state; supersedes every earlier submission.

        The shoe is copied before this returns, so the caller may keep mutating it.

        Returns:
            Future resolving to the CalculationResult, or None if the job was
            superseded before it started.
        """
        snapshot = validate_shoe(shoe)
        payouts = self.payouts if payouts is None else payouts
        rolling = self.rolling if rolling is None else rolling
        with self._lock:
            self._generation += 1
            generation = self._generation
            future = self._executor.submit(self._run, generation, snapshot, payouts, rolling)
            self._latest_future = future
        return future

    def _is_current(self, generation: int) -> bool:
        with self._lock:
            return generation == self._generation

    def _run(
        self,
        generation: int,
        snapshot: np.ndarray,
        payouts: PayoutConfig,
        rolling: float,
    ) -> CalculationResult | None:
        if not self._is_current(generation):
            logger.debug("Skipping superseded generation %d", generation)
            return None
        result = self._compute(snapshot, payouts, rolling)
        self._publish(generation, result)
        return result

    def _publish(self, generation: int, result: CalculationResult) -> bool:
        with self._lock:
            if generation != self._generation or generation <= self._published_generation:
                logger.debug(
                    "Discarding stale result for generation %d (newest %d)",
                    generation,
                    self._generation,
                )
                return False
            self._published_generation = generation
            self._result = result
        if self._on_publish is not None:
            self._on_publish(generation, result)
        return True

    def wait(self, timeout: float | None = None) -> tuple[int, CalculationResult | None]:
        """Block until the newest submission has finished, then return latest()."""
        with self._lock:
            future = self._latest_future
        if future is not None:
            future.result(timeout=timeout)
        return self.latest()

    def close(self) -> None:
        """Shut down the worker pool if this publisher created it."""
        if self._owns_executor:
            self._executor.shutdown(wait=True)

    def __enter__(self) -> LatestResultPublisher:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()
