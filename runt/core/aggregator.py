"""
Result aggregation: many launch workers report, one coordinator collects.
"""

from __future__ import annotations

import logging
import queue
from typing import List

from .models import ChildOutcome

logger = logging.getLogger(__name__)


class ResultAggregator:
    """Completion channel plus a blocking collect.

    Outcomes arrive in completion order. Nothing collected so far is visible
    until collect() has seen the expected count.
    """

    def __init__(self):
        self._channel: "queue.Queue[ChildOutcome]" = queue.Queue()

    @property
    def channel(self) -> "queue.Queue[ChildOutcome]":
        return self._channel

    def post(self, outcome: ChildOutcome) -> None:
        self._channel.put(outcome)

    def collect(self, expected: int) -> List[ChildOutcome]:
        """Block until ``expected`` outcomes have been received; no timeout."""
        results: List[ChildOutcome] = []
        while len(results) < expected:
            outcome = self._channel.get()
            results.append(outcome)
            logger.debug("Collected %s (%d/%d)", outcome.executable, len(results), expected)
        return results
