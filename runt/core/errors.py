"""
Error types for the runt dispatch engine.

Input errors (bad batch root) are raised and abort the run. Per-child errors
are never raised by the launcher; they are stored on the ChildOutcome of the
entry that failed so the rest of the batch keeps going.
"""

from __future__ import annotations

import signal
from typing import Optional


class RuntError(Exception):
    """Base class for errors raised by runt."""


class DirectoryExpectedError(RuntError):
    """The batch path exists but does not name a directory."""

    def __init__(self, path: Optional[str] = None):
        super().__init__("Directory expected")
        self.path = path


class DriverStateError(RuntError):
    """Operation requested in a driver state that does not allow it."""


class ConfigurationError(RuntError):
    """Invalid or unreadable runt configuration."""


class EventSerializationError(RuntError):
    """An event record could not be rendered as JSON."""


class ChildError(RuntError):
    """Terminal error of a single dispatched executable."""

    def __init__(self, message: str, path: Optional[str] = None):
        super().__init__(message)
        self.path = path


class LaunchError(ChildError):
    """The child process could not be spawned."""


class StreamError(ChildError):
    """A standard stream of the child could not be obtained or read."""


class ExitStatusError(ChildError):
    """The child exited with a non-zero status or was killed by a signal."""

    def __init__(self, returncode: int, path: Optional[str] = None):
        self.returncode = returncode
        super().__init__(describe_returncode(returncode), path=path)

    @property
    def signalled(self) -> bool:
        return self.returncode < 0


def describe_returncode(returncode: int) -> str:
    """Text for an abnormal exit: 'exit status N' or 'signal: NAME'."""
    if returncode < 0:
        try:
            name = signal.Signals(-returncode).name
        except ValueError:
            name = str(-returncode)
        return f"signal: {name}"
    return f"exit status {returncode}"
