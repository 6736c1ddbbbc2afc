"""
Core modules: batch discovery, bounded launching, aggregation and json_event output.
"""

from .configuration import RuntConfig, load_config
from .discovery import Discoverer
from .driver import Driver, DriverState
from .errors import (
    ChildError,
    ConfigurationError,
    DirectoryExpectedError,
    DriverStateError,
    EventSerializationError,
    ExitStatusError,
    LaunchError,
    RuntError,
    StreamError,
)
from .events import event_from_outcome, json_events
from .filesystem import EXECUTABLE_MASK, FileEntry
from .launcher import BoundedLauncher, launch_executable
from .aggregator import ResultAggregator
from .models import ChildOutcome, EventRecord

__all__ = [
    "RuntConfig",
    "load_config",
    "Discoverer",
    "Driver",
    "DriverState",
    "ChildError",
    "ConfigurationError",
    "DirectoryExpectedError",
    "DriverStateError",
    "EventSerializationError",
    "ExitStatusError",
    "LaunchError",
    "RuntError",
    "StreamError",
    "event_from_outcome",
    "json_events",
    "EXECUTABLE_MASK",
    "FileEntry",
    "BoundedLauncher",
    "launch_executable",
    "ResultAggregator",
    "ChildOutcome",
    "EventRecord",
]
