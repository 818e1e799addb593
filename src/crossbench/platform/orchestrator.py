"""Benchmark run lifecycle: state machine, worker scheduling and run history."""

from __future__ import annotations

import logging
import threading
from concurrent.futures import Future, ThreadPoolExecutor
from datetime import datetime
from typing import Callable, Iterable

from crossbench.codec.buffer import BufferCodec
from crossbench.compute.accelerated import AcceleratedComputeStrategy
from crossbench.compute.backends import JaxBackend, make_backend
from crossbench.compute.general import GeneralComputeStrategy
from crossbench.configs.default import BenchmarkConfig
from crossbench.core.errors import BenchmarkError, RunFailure
from crossbench.core.matrix import check_seed, generate_matrix_pair
from crossbench.core.results import BenchmarkResult
from crossbench.core.state import IDLE, BenchmarkState, Computing, Error, Success
from crossbench.utils.memory import estimate_matmul_memory_mb

from .state_channel import StateChannel, Subscriber

logger = logging.getLogger(__name__)


def _default_accelerated() -> AcceleratedComputeStrategy:
    return AcceleratedComputeStrategy(JaxBackend())


class BenchmarkOrchestrator:
    """Runs benchmarks one at a time and publishes their lifecycle as states.

    States move ``Idle -> Computing(size) -> Success | Error``. ``Success`` and
    ``Error`` return to ``Idle`` through :meth:`reset_state`, or straight to
    ``Computing`` through a new run. While a run is in flight, further run
    requests are dropped (not queued): at most one run ever touches the
    accelerator.

    :meth:`reset_state` and :meth:`clear_history` do not cancel an in-flight
    run. They publish ``Idle`` at once, and the run later publishes its
    ``Success`` or ``Error`` straight from ``Idle``. A run that succeeds after
    :meth:`clear_history` is recorded in the cleared history.

    Runs execute on a single worker thread; :meth:`run_benchmark` returns at
    once and the outcome is observed through :attr:`state` or
    :meth:`subscribe`. No exception escapes a run: failures become
    ``Error(message, size)`` and nothing is added to the history.

    Subscribers are called without the orchestrator's lock held, so they may
    read :attr:`history` or start the next run from inside a callback.
    Deliveries follow the order of the transitions that produced them.

    The orchestrator owns its history and its worker; create it explicitly
    and close it (or use it as a context manager) when done.

    Args:
        general: Strategy for the general path (default: ``GeneralComputeStrategy()``)
        accelerated: Strategy for the accelerated path. If None, one is built
            by ``accelerated_factory`` on the first run, so an unavailable
            backend surfaces as an ``Error`` state.
        accelerated_factory: Builds the accelerated strategy (default: JAX backend
            on the default device)
        seed: Seed for matrix generation, in ``[0, 2**32)``; None draws fresh
            matrices per run
        clock: Timestamp source for results

    Raises:
        InvalidSeedError: If ``seed`` is outside ``[0, 2**32)``

    Example:
        >>> with BenchmarkOrchestrator(seed=0) as orchestrator:
        ...     orchestrator.subscribe(print)
        ...     orchestrator.run_benchmark(256)
    """

    def __init__(
        self,
        general: GeneralComputeStrategy | None = None,
        accelerated: AcceleratedComputeStrategy | None = None,
        accelerated_factory: Callable[[], AcceleratedComputeStrategy] | None = None,
        seed: int | None = None,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        self.general = general if general is not None else GeneralComputeStrategy()
        self._accelerated = accelerated
        self._accelerated_factory = accelerated_factory or _default_accelerated
        self.seed = check_seed(seed) if seed is not None else None
        self._clock = clock

        self._history: list[BenchmarkResult] = []
        self._channel: StateChannel[BenchmarkState] = StateChannel(IDLE)
        self._lock = threading.RLock()
        # Orders deliveries by transition; taken before _lock, never while holding it
        self._publish_lock = threading.RLock()
        self._transitions = 0
        self._published = 0
        self._in_flight = False
        self._executor: ThreadPoolExecutor | None = None
        self._closed = False

    @classmethod
    def from_config(cls, config: BenchmarkConfig, clock: Callable[[], datetime] = datetime.now) -> BenchmarkOrchestrator:
        """Build an orchestrator whose strategies follow ``config``."""
        general = GeneralComputeStrategy(
            transpose=config.general.transpose,
            transpose_min_size=config.general.transpose_min_size,
        )
        codec = BufferCodec(max_dimension=config.codec.max_dimension)

        def accelerated_factory() -> AcceleratedComputeStrategy:
            backend = make_backend(config.backend.name, **config.backend.factory_kwargs())
            return AcceleratedComputeStrategy(backend, codec)

        return cls(general=general, accelerated_factory=accelerated_factory, seed=config.seed, clock=clock)

    # --- Observation ---

    @property
    def state(self) -> BenchmarkState:
        return self._channel.value

    @property
    def history(self) -> tuple[BenchmarkResult, ...]:
        """Snapshot of completed results, in run order."""
        with self._lock:
            return tuple(self._history)

    @property
    def is_running(self) -> bool:
        with self._lock:
            return self._in_flight

    def subscribe(self, callback: Subscriber[BenchmarkState]) -> Callable[[], None]:
        """Observe state changes; ``callback`` first receives the current state."""
        with self._publish_lock:
            return self._channel.subscribe(callback)

    # --- Commands ---

    def run_benchmark(self, size: int) -> Future[BenchmarkState] | None:
        """Start a run for ``size`` on the worker thread.

        Returns:
            Future completing when the run has published its final state, or
            None if a run was already in flight and the request was dropped.
            The future never raises; its result is the state the run ended in.
        """
        # Held across submit so the worker cannot publish ahead of Computing
        with self._publish_lock:
            with self._lock:
                transition = self._begin(size)
                if transition is None:
                    return None
                future = self._get_executor().submit(self._run, size)
            self._publish(Computing(size), transition)
        return future

    def run_benchmark_sync(self, size: int) -> BenchmarkState:
        """Run ``size`` on the calling thread and return the state it ended in.

        Subject to the same single-run guard: if a run is already in flight the
        request is dropped and the current state is returned.
        """
        with self._lock:
            transition = self._begin(size)
        if transition is None:
            return self._channel.value
        self._publish(Computing(size), transition)
        return self._run(size)

    def run_sweep(self, sizes: Iterable[int]) -> list[BenchmarkState]:
        """Run each size in order on the calling thread."""
        return [self.run_benchmark_sync(size) for size in sizes]

    def reset_state(self) -> None:
        """Force the ``Idle`` state."""
        with self._lock:
            transition = self._next_transition()
        self._publish(IDLE, transition)

    def clear_history(self) -> None:
        """Drop every recorded result and force the ``Idle`` state."""
        with self._lock:
            self._history.clear()
            transition = self._next_transition()
        self._publish(IDLE, transition)
        logger.info("Benchmark history cleared")

    def close(self) -> None:
        """Wait for the in-flight run, if any, and stop the worker."""
        with self._lock:
            self._closed = True
            executor, self._executor = self._executor, None
        if executor is not None:
            executor.shutdown(wait=True)

    def __enter__(self) -> BenchmarkOrchestrator:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    # --- Run internals ---

    def _next_transition(self) -> int:
        self._transitions += 1
        return self._transitions

    def _publish(self, state: BenchmarkState, transition: int) -> None:
        with self._publish_lock:
            if transition < self._published:
                logger.debug(f"Dropping stale state {state!r}")
                return
            self._published = transition
            self._channel.publish(state)

    def _begin(self, size: int) -> int | None:
        if self._closed:
            raise RuntimeError("Cannot start a benchmark on a closed orchestrator")
        if self._in_flight:
            logger.debug(f"Ignoring run request for N={size}: a run is already in flight")
            return None
        self._in_flight = True
        return self._next_transition()

    def _get_executor(self) -> ThreadPoolExecutor:
        if self._executor is None:
            self._executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="crossbench-run")
        return self._executor

    def _get_accelerated(self) -> AcceleratedComputeStrategy:
        if self._accelerated is None:
            self._accelerated = self._accelerated_factory()
        return self._accelerated

    def _run(self, size: int) -> BenchmarkState:
        result: BenchmarkResult | None = None
        state: BenchmarkState = Error(message=f"Benchmark N={size} was interrupted", size=size)
        try:
            result = self._execute(size)
        except BenchmarkError as e:
            logger.error(f"Benchmark N={size} failed: {e}")
            state = Error(message=str(e), size=size)
        except Exception as e:
            failure = RunFailure.wrap(e)
            logger.exception(f"Benchmark N={size} failed unexpectedly")
            state = Error(message=str(failure), size=size)
        finally:
            with self._lock:
                if result is not None:
                    self._history.append(result)
                    state = Success(result=result, history=tuple(self._history))
                self._in_flight = False
                transition = self._next_transition()
            self._publish(state, transition)
        return state

    def _execute(self, size: int) -> BenchmarkResult:
        logger.info(f"Starting benchmark N={size}")

        matrix_a, matrix_b = generate_matrix_pair(size, seed=self.seed)
        memory_mb = estimate_matmul_memory_mb(size)

        # Strictly sequential: the two paths never overlap
        _, general_ms = self.general.multiply(matrix_a, matrix_b)
        accelerated = self._get_accelerated()
        _, timings = accelerated.multiply(matrix_a, matrix_b)

        result = BenchmarkResult.from_timings(
            matrix_size=size,
            general_time_ms=general_ms,
            timings=timings,
            memory_allocated_mb=memory_mb,
            timestamp=self._clock(),
            backend=accelerated.name,
        )
        logger.info(
            f"Benchmark N={size} done: general={result.general_time_ms:.2f}ms, "
            f"accelerated={result.accelerated_total_ms:.2f}ms ({result.speedup_message()})"
        )
        return result
