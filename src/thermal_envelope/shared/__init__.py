"""Shared module.

Cross-cutting concerns: configuration, logging, result pattern.
"""
from thermal_envelope.shared.config import Settings, get_settings, settings

__all__ = [
    "Settings",
    "get_settings",
    "settings",
]
