"""
Utility modules for runt.
"""

from .logging_config import setup_logging

__all__ = [
    "setup_logging",
]
