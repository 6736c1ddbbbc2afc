"""
Bounded launcher: run each discovered executable as its own child process.

Shape of one dispatch:
- a LaunchWorker thread is started per entry, immediately
- the launch routine acquires one of N slots (BoundedSemaphore) and holds it
  for the whole spawn -> drain -> wait sequence
- stdout and stderr are drained by two separate threads so a child blocked on
  a full stderr pipe cannot wedge behind stdout, or the other way round
- the worker posts exactly one ChildOutcome to the completion channel, even
  when the launch routine itself blows up

There is no timeout: a child that never exits holds its slot forever.
"""

from __future__ import annotations

import functools
import logging
import queue
import subprocess
import threading
from typing import IO, Callable, List, Optional, Protocol

from .errors import ExitStatusError, LaunchError, StreamError
from .models import ChildOutcome

logger = logging.getLogger(__name__)

DEFAULT_MAX_PARALLEL = 4
DEFAULT_CHUNK_SIZE = 4096


class ChildProcess(Protocol):
    stdout: Optional[IO[bytes]]
    stderr: Optional[IO[bytes]]

    def wait(self) -> int: ...


SpawnFn = Callable[[str], ChildProcess]
LaunchFn = Callable[[str, threading.Semaphore], ChildOutcome]


def spawn_process(path: str) -> subprocess.Popen:
    """Start ``path`` with no arguments, stdin closed, both outputs piped."""
    return subprocess.Popen(
        [path],
        stdin=subprocess.DEVNULL,
        stdout=subprocess.PIPE,
        stderr=subprocess.PIPE,
    )


class StreamDrain(threading.Thread):
    """Read a byte stream to EOF, keeping each read as its own chunk."""

    def __init__(self, stream: IO[bytes], chunk_size: int = DEFAULT_CHUNK_SIZE, name: Optional[str] = None):
        super().__init__(name=name, daemon=True)
        self.stream = stream
        self.chunk_size = int(chunk_size)
        self.chunks: List[bytes] = []
        self.error: Optional[BaseException] = None

    def run(self) -> None:
        read = getattr(self.stream, "read1", None) or self.stream.read
        try:
            while True:
                buf = read(self.chunk_size)
                if not buf:
                    break
                self.chunks.append(bytes(buf))
        except (OSError, ValueError) as ex:
            self.error = ex
        finally:
            try:
                self.stream.close()
            except OSError:
                pass


def launch_executable(
    path: str,
    slots: threading.Semaphore,
    *,
    spawn: SpawnFn = spawn_process,
    chunk_size: int = DEFAULT_CHUNK_SIZE,
) -> ChildOutcome:
    """Run one executable under a concurrency slot and report its outcome.

    A failure at any stage ends that entry early with the error recorded on
    the outcome; nothing is raised for spawn, stream or exit problems.
    """
    with slots:
        try:
            proc = spawn(path)
        except OSError as ex:
            logger.warning("Failed to start %s: %s", path, ex)
            return ChildOutcome(executable=path, error=LaunchError(str(ex), path))
        logger.debug("Started %s", path)

        if proc.stdout is None or proc.stderr is None:
            # Nothing to drain; still reap the child so it does not linger.
            rc = proc.wait()
            logger.warning("No output streams for %s (rc=%s)", path, rc)
            return ChildOutcome(executable=path, error=StreamError("output streams unavailable", path))

        out = StreamDrain(proc.stdout, chunk_size, name=f"stdout-{path}")
        err = StreamDrain(proc.stderr, chunk_size, name=f"stderr-{path}")
        out.start()
        err.start()
        out.join()
        err.join()

        rc = proc.wait()
        logger.debug("%s exited rc=%d", path, rc)

        error: Optional[BaseException] = None
        if rc != 0:
            error = ExitStatusError(rc, path)
        elif out.error is not None or err.error is not None:
            failed = "stdout" if out.error is not None else "stderr"
            error = StreamError(f"reading {failed}: {out.error or err.error}", path)
        if error is not None:
            logger.warning("%s failed: %s", path, error)

        return ChildOutcome(
            executable=path,
            error=error,
            stdout=out.chunks,
            stderr=err.chunks,
        )


class LaunchWorker(threading.Thread):
    def __init__(self, path: str, launch: LaunchFn, slots: threading.Semaphore, channel: "queue.Queue[ChildOutcome]"):
        super().__init__(name=f"launch-{path}", daemon=True)
        self.path = path
        self.launch = launch
        self.slots = slots
        self.channel = channel

    def run(self) -> None:
        try:
            outcome = self.launch(self.path, self.slots)
            if not isinstance(outcome, ChildOutcome):
                raise TypeError(f"launch returned {type(outcome).__name__}, expected ChildOutcome")
        except Exception as ex:
            logger.warning("Launch of %s raised: %s", self.path, ex)
            outcome = ChildOutcome(executable=self.path, error=LaunchError(str(ex), self.path))
        self.channel.put(outcome)


class BoundedLauncher:
    """Dispatches entries onto worker threads, at most ``max_parallel`` running.

    ``launch`` replaces the whole per-entry routine; ``spawn`` replaces only
    process creation inside the default routine.
    """

    def __init__(
        self,
        launch: Optional[LaunchFn] = None,
        *,
        max_parallel: int = DEFAULT_MAX_PARALLEL,
        spawn: Optional[SpawnFn] = None,
        chunk_size: int = DEFAULT_CHUNK_SIZE,
    ):
        if int(max_parallel) < 1:
            raise ValueError(f"max_parallel must be >= 1, got {max_parallel}")
        self.max_parallel = int(max_parallel)
        self.slots = threading.BoundedSemaphore(self.max_parallel)
        if launch is None:
            launch = functools.partial(launch_executable, spawn=spawn or spawn_process, chunk_size=chunk_size)
        self._launch = launch
        self.workers: List[LaunchWorker] = []

    def dispatch(self, path: str, channel: "queue.Queue[ChildOutcome]") -> LaunchWorker:
        worker = LaunchWorker(path, self._launch, self.slots, channel)
        self.workers.append(worker)
        worker.start()
        return worker
