"""Infrastructure Layer.

Concrete implementations of domain interfaces.
"""
from __future__ import annotations

from thermal_envelope.infrastructure.diagnostics import (
    CollectingDiagnosticSink,
    DiagnosticEvent,
    NullDiagnosticSink,
    StructlogDiagnosticSink,
)

__all__ = [
    "CollectingDiagnosticSink",
    "DiagnosticEvent",
    "NullDiagnosticSink",
    "StructlogDiagnosticSink",
]
