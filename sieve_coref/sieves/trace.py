"""Trace events recording which sieve and rule linked or blocked a pair."""

from __future__ import annotations

import json
import time
from dataclasses import asdict, dataclass, field
from typing import Any, Optional


@dataclass
class TraceEvent:
    """One merge or rejection, stamped with the sieve and rule that made it."""

    event_type: str
    timestamp_ms: int
    data: dict[str, Any] = field(default_factory=dict)
    doc_id: Optional[str] = None
    sieve: Optional[str] = None
    rule: Optional[str] = None
    mention_id: Optional[int] = None
    antecedent_id: Optional[int] = None

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


class TraceRecorder:
    """Decision log shared by every sieve of a system, cleared for each document."""

    def __init__(self) -> None:
        self.events: list[TraceEvent] = []

    def log(self, event_type: str, data: Optional[dict[str, Any]] = None, **where: Any) -> None:
        """Record an event; ``where`` names the document, sieve, rule and mention pair."""
        now = int(time.time() * 1000)
        self.events.append(TraceEvent(event_type, now, dict(data or {}), **where))

    def reset(self) -> None:
        self.events = []

    def to_list(self) -> list[dict[str, Any]]:
        return [event.to_dict() for event in self.events]

    def export_json(self, indent: int = 2) -> str:
        return json.dumps(self.to_list(), indent=indent)

    def filter_by_type(self, event_type: str) -> list[TraceEvent]:
        return [e for e in self.events if e.event_type == event_type]

    def filter_by_sieve(self, sieve: str) -> list[TraceEvent]:
        return [e for e in self.events if e.sieve == sieve]
