"""Diagnostic sink implementations.

Adapters between the services' IDiagnosticSink and concrete outputs.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from thermal_envelope.shared.logging import get_logger


class StructlogDiagnosticSink:
    """Forwards diagnostic events to a structlog logger."""

    def __init__(self, name: str = "thermal_envelope") -> None:
        self._logger = get_logger(name)

    def debug(self, event: str, **fields: Any) -> None:
        self._logger.debug(event, **fields)

    def info(self, event: str, **fields: Any) -> None:
        self._logger.info(event, **fields)

    def warning(self, event: str, **fields: Any) -> None:
        self._logger.warning(event, **fields)


class NullDiagnosticSink:
    """Discards every event."""

    def debug(self, event: str, **fields: Any) -> None:
        pass

    def info(self, event: str, **fields: Any) -> None:
        pass

    def warning(self, event: str, **fields: Any) -> None:
        pass


@dataclass(frozen=True)
class DiagnosticEvent:
    """Single recorded diagnostic event."""

    level: str
    event: str
    fields: dict[str, Any]


@dataclass
class CollectingDiagnosticSink:
    """Keeps every event in memory, optionally forwarding to another sink."""

    forward_to: Any = None
    events: list[DiagnosticEvent] = field(default_factory=list)

    def _record(self, level: str, event: str, fields: dict[str, Any]) -> None:
        self.events.append(DiagnosticEvent(level=level, event=event, fields=fields))
        if self.forward_to is not None:
            getattr(self.forward_to, level)(event, **fields)

    def debug(self, event: str, **fields: Any) -> None:
        self._record("debug", event, fields)

    def info(self, event: str, **fields: Any) -> None:
        self._record("info", event, fields)

    def warning(self, event: str, **fields: Any) -> None:
        self._record("warning", event, fields)

    @property
    def warnings(self) -> list[DiagnosticEvent]:
        """Recorded warning events."""
        return [e for e in self.events if e.level == "warning"]

    def clear(self) -> None:
        """Forget recorded events."""
        self.events.clear()
