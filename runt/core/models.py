"""
Pydantic models for dispatch outcomes and their json_event projection.
"""

from __future__ import annotations

from datetime import datetime
from typing import List, Literal, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator

EVENT_TYPE = "ShellCommand"
SUCCESS_MESSAGE = "Command completed successfully."


class ChildOutcome(BaseModel):
    """Terminal result of one dispatched executable.

    ``error`` is None for a clean zero exit. Output is kept as the chunks the
    drain read them in; only their concatenation is meaningful.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    executable: str
    error: Optional[BaseException] = None
    stdout: Tuple[bytes, ...] = ()
    stderr: Tuple[bytes, ...] = ()

    @field_validator("executable")
    @classmethod
    def executable_not_empty(cls, v: str) -> str:
        if not v:
            raise ValueError("executable must not be empty")
        return v

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def stdout_bytes(self) -> bytes:
        return b"".join(self.stdout)

    @property
    def stderr_bytes(self) -> bytes:
        return b"".join(self.stderr)


class EventFields(BaseModel):
    model_config = ConfigDict(frozen=True)

    executable: str = Field(alias="Executable")
    stdout: str = Field(alias="Stdout")
    stderr: str = Field(alias="Stderr")


class EventRecord(BaseModel):
    """One json_event line, suitable for Logstash-style ingestion."""

    model_config = ConfigDict(frozen=True)

    timestamp: datetime = Field(alias="@timestamp")
    tags: List[str] = Field(default_factory=list, alias="@tags")
    event_type: Literal["ShellCommand"] = Field(default=EVENT_TYPE, alias="@type")
    source: str = Field(alias="@source")
    event_fields: EventFields = Field(alias="@fields")
    message: str = Field(alias="@message")

    @property
    def succeeded(self) -> bool:
        return self.message == SUCCESS_MESSAGE
