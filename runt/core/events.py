"""
json_event formatting of child outcomes.

Each outcome becomes one compact JSON object per line:

    {"@timestamp": "...", "@tags": [], "@type": "ShellCommand",
     "@source": "Runt Demo",
     "@fields": {"Executable": "...", "Stdout": "...", "Stderr": "..."},
     "@message": "Command completed successfully."}
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Iterable, List, Optional, Sequence

from .errors import EventSerializationError
from .models import EVENT_TYPE, SUCCESS_MESSAGE, ChildOutcome, EventRecord

DEFAULT_SOURCE = "Runt Demo"


def _text(chunks: Sequence[bytes]) -> str:
    return b"".join(chunks).decode("utf-8", errors="replace")


def event_from_outcome(
    outcome: ChildOutcome,
    *,
    source: str = DEFAULT_SOURCE,
    tags: Optional[Sequence[str]] = None,
    now: Optional[datetime] = None,
) -> EventRecord:
    message = SUCCESS_MESSAGE
    if outcome.error is not None:
        message = f"Error: {outcome.error}"
    return EventRecord.model_validate({
        "@timestamp": now or datetime.now(timezone.utc),
        "@tags": list(tags or []),
        "@type": EVENT_TYPE,
        "@source": source,
        "@fields": {
            "Executable": outcome.executable,
            "Stdout": _text(outcome.stdout),
            "Stderr": _text(outcome.stderr),
        },
        "@message": message,
    })


def dump_event(record: EventRecord) -> str:
    try:
        return record.model_dump_json(by_alias=True)
    except (ValueError, TypeError) as ex:
        raise EventSerializationError(f"Cannot translate to JSON: {record!r} (reason: {ex})") from ex


def json_events(
    outcomes: Iterable[ChildOutcome],
    *,
    source: str = DEFAULT_SOURCE,
    tags: Optional[Sequence[str]] = None,
) -> List[str]:
    """Render every outcome; the first failure aborts the whole batch of lines."""
    return [dump_event(event_from_outcome(o, source=source, tags=tags)) for o in outcomes]
