"""Diagnostics observer interface.

Services report exclusions and intermediate values through this protocol
instead of a global logger, so the numeric core can run in isolation.
"""
from __future__ import annotations

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class IDiagnosticSink(Protocol):
    """Receiver of diagnostic events emitted by the envelope services."""

    def debug(self, event: str, **fields: Any) -> None: ...
    def info(self, event: str, **fields: Any) -> None: ...
    def warning(self, event: str, **fields: Any) -> None: ...
