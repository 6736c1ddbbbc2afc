"""
Logging configuration for runt.

Console logging goes to stderr: stdout carries the json_event lines and must
stay machine-readable.
"""

import logging
import os
import sys
from pathlib import Path
from typing import Optional, Union


class _FastFileHandler(logging.FileHandler):
    """FileHandler that also fsyncs on flush when RUNT_LOG_FSYNC is set.

    Lets a log tailed from another machine (e.g. over NFS) see each record
    as soon as a child finishes.
    """

    def __init__(self, filename, mode="a", encoding=None, delay=False, *, fsync=False):
        super().__init__(filename, mode=mode, encoding=encoding, delay=delay)
        self._fsync = bool(fsync)

    def flush(self):
        super().flush()
        if self._fsync and self.stream and hasattr(self.stream, "fileno"):
            try:
                os.fsync(self.stream.fileno())
            except OSError:
                # Never let logging flush raise
                pass


def _env_flag(name: str) -> bool:
    v = os.environ.get(name)
    if v is None:
        return False
    return v not in ("0", "false", "False", "no", "NO", "")


def setup_logging(
    level: str = "INFO",
    log_file: Optional[Union[str, Path]] = None,
    format_string: Optional[str] = None,
    console_level: Optional[str] = None,
) -> logging.Logger:
    """
    Setup logging configuration.

    Args:
        level: Logging level for the file handler (DEBUG, INFO, WARNING, ERROR)
        log_file: Optional log file path; no file logging when omitted
        format_string: Custom format string
        console_level: Level of the stderr handler (default WARNING)

    Returns:
        The "runt" logger
    """
    if format_string is None:
        format_string = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    ch_level = (console_level or "WARNING").upper()
    file_level = level.upper()

    root = logging.getLogger()
    # Root must pass everything either handler wants
    root.setLevel(min(getattr(logging, ch_level), getattr(logging, file_level)))
    # Clear existing handlers
    for h in list(root.handlers):
        root.removeHandler(h)

    if log_file is not None:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        fh = _FastFileHandler(log_path, fsync=_env_flag("RUNT_LOG_FSYNC"))
        fh.setFormatter(logging.Formatter(format_string))
        fh.setLevel(getattr(logging, file_level))
        root.addHandler(fh)

    ch = logging.StreamHandler(sys.stderr)
    ch.setLevel(getattr(logging, ch_level))
    ch.setFormatter(logging.Formatter(format_string))
    root.addHandler(ch)

    return logging.getLogger("runt")
