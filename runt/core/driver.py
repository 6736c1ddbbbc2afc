"""
Driver: the coordinating facade of a runt batch.

State machine:

    IDLE --use_batch--> BATCH_LOADED --launch_suites--> DISPATCHING --> COMPLETED

A failed use_batch leaves the driver IDLE. A COMPLETED driver may load a new
batch. There is no cancel and no deadline; DISPATCHING only ends once every
dispatched entry has reported.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import List, Optional, Tuple

from .aggregator import ResultAggregator
from .configuration import RuntConfig
from .discovery import Discoverer
from .errors import DriverStateError
from .events import event_from_outcome, json_events
from .filesystem import ReadDirFn, StatFn
from .launcher import BoundedLauncher, LaunchFn, SpawnFn
from .models import ChildOutcome, EventRecord

logger = logging.getLogger(__name__)


class DriverState(Enum):
    IDLE = "idle"
    BATCH_LOADED = "batch_loaded"
    DISPATCHING = "dispatching"
    COMPLETED = "completed"


class Driver:
    """One test batch: discover, dispatch, collect, report.

    Public API:
      - Driver(stat=None, read_dir=None, launch=None, spawn=None, config=None)
      - use_batch(path) -> list[str]
      - executables (property), next_executable()
      - launch_suites() -> list[ChildOutcome]
      - results (property), events(), json_events()
    """

    def __init__(
        self,
        *,
        stat: Optional[StatFn] = None,
        read_dir: Optional[ReadDirFn] = None,
        launch: Optional[LaunchFn] = None,
        spawn: Optional[SpawnFn] = None,
        config: Optional[RuntConfig] = None,
    ):
        self.config = config or RuntConfig()
        self._discoverer = Discoverer(stat=stat, read_dir_fn=read_dir)
        self._launch = launch
        self._spawn = spawn
        self._results: List[ChildOutcome] = []
        self._state = DriverState.IDLE

    @property
    def state(self) -> DriverState:
        return self._state

    @property
    def visited(self) -> List[str]:
        return list(self._discoverer.visited)

    def use_batch(self, path: str) -> List[str]:
        """Select the batch directory ``path`` and discover its executables."""
        if self._state is DriverState.DISPATCHING:
            raise DriverStateError("cannot load a batch while dispatching")
        self._state = DriverState.IDLE
        self._results = []
        found = self._discoverer.use_batch(path)
        self._state = DriverState.BATCH_LOADED
        return found

    @property
    def executables(self) -> List[str]:
        return self._discoverer.executables

    def next_executable(self) -> Tuple[str, bool]:
        return self._discoverer.next_executable()

    def launch_suites(self) -> List[ChildOutcome]:
        """Dispatch every pending executable and wait for all of them.

        Child failures never raise here; they are carried on the outcomes.
        """
        if self._state is not DriverState.BATCH_LOADED:
            raise DriverStateError(f"no batch loaded (state={self._state.value})")
        self._state = DriverState.DISPATCHING

        launcher = BoundedLauncher(
            self._launch,
            max_parallel=self.config.max_parallel,
            spawn=self._spawn,
            chunk_size=self.config.chunk_size,
        )
        aggregator = ResultAggregator()
        dispatched = 0
        while True:
            path, ok = self.next_executable()
            if not ok:
                break
            launcher.dispatch(path, aggregator.channel)
            dispatched += 1
        logger.debug("Dispatched %d executables (max_parallel=%d)", dispatched, launcher.max_parallel)

        self._results = aggregator.collect(dispatched)
        self._state = DriverState.COMPLETED
        failed = sum(1 for r in self._results if not r.ok)
        logger.info("Batch completed: %d ok, %d failed", dispatched - failed, failed)
        return list(self._results)

    @property
    def results(self) -> List[ChildOutcome]:
        if self._state is not DriverState.COMPLETED:
            raise DriverStateError(f"results unavailable (state={self._state.value})")
        return list(self._results)

    def events(self) -> List[EventRecord]:
        return [
            event_from_outcome(r, source=self.config.source, tags=self.config.tags)
            for r in self.results
        ]

    def json_events(self) -> List[str]:
        return json_events(self.results, source=self.config.source, tags=self.config.tags)
