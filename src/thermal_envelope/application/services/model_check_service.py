"""Model Check Service.

Consistency checks on a building model: every id an element refers to
must exist in the model. The checks are purely diagnostic; the numeric
services already exclude elements with broken references.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from thermal_envelope.domain import BuildingModel, IDiagnosticSink
from thermal_envelope.infrastructure.diagnostics import StructlogDiagnosticSink


class WarningLevel(str, Enum):
    """Warning severity."""

    SUCCESS = "success"
    DANGER = "danger"
    WARNING = "warning"
    INFO = "info"


class CheckCategory(str, Enum):
    """Kind of broken reference."""

    WALL_SPACE = "wall_space"
    WALL_CONSTRUCTION = "wall_construction"
    WALL_NEXTTO = "wall_nextto"
    WINDOW_WALL = "window_wall"
    WINDOW_CONSTRUCTION = "window_construction"


@dataclass(frozen=True)
class ModelWarning:
    """Single model check warning."""

    level: WarningLevel
    id: str | None
    message: str
    category: CheckCategory

    def to_dict(self) -> dict[str, Any]:
        """Convert to dict."""
        return {
            "level": self.level.value,
            "id": self.id,
            "msg": self.message,
            "category": self.category.value,
        }


@dataclass
class CheckSummary:
    """Summary of all checks."""

    total_warnings: int = 0
    by_category: dict[CheckCategory, int] = field(default_factory=dict)

    @property
    def is_consistent(self) -> bool:
        """Check if no warning was raised."""
        return self.total_warnings == 0


@dataclass
class ModelCheckResult:
    """Complete model check result."""

    project_name: str
    warnings: list[ModelWarning] = field(default_factory=list)
    summary: CheckSummary = field(default_factory=CheckSummary)


class ModelCheckService:
    """Service for building model consistency checks."""

    def __init__(self, model: BuildingModel, sink: IDiagnosticSink | None = None) -> None:
        """Initialize service."""
        self._model = model
        self._sink = sink or StructlogDiagnosticSink(__name__)

    def run_all_checks(self) -> ModelCheckResult:
        """Run all consistency checks on the model.

        Returns:
            ModelCheckResult with every warning and per-category counts
        """
        result = ModelCheckResult(project_name=self._model.meta.name)
        result.warnings.extend(self._check_walls())
        result.warnings.extend(self._check_windows())

        result.summary.total_warnings = len(result.warnings)
        for warning in result.warnings:
            count = result.summary.by_category.get(warning.category, 0)
            result.summary.by_category[warning.category] = count + 1

        for warning in result.warnings:
            self._sink.warning(
                "Model check",
                element_id=warning.id,
                category=warning.category.value,
                message=warning.message,
            )
        self._sink.info(
            "Model check completed",
            project=result.project_name,
            warnings=result.summary.total_warnings,
        )
        return result

    def check_model(self) -> list[ModelWarning]:
        """Run all checks and return the bare warning list."""
        return self.run_all_checks().warnings

    # =========================================================================
    # Wall Checks
    # =========================================================================

    def _check_walls(self) -> list[ModelWarning]:
        model = self._model
        warnings = []

        for wall in model.walls.values():
            if wall.space not in model.spaces:
                warnings.append(ModelWarning(
                    level=WarningLevel.WARNING,
                    id=wall.id,
                    message=f"Wall {wall.id} ({wall.name}) references unknown space {wall.space}",
                    category=CheckCategory.WALL_SPACE,
                ))
            if wall.cons not in model.wall_constructions:
                warnings.append(ModelWarning(
                    level=WarningLevel.WARNING,
                    id=wall.id,
                    message=f"Wall {wall.id} ({wall.name}) references unknown construction {wall.cons}",
                    category=CheckCategory.WALL_CONSTRUCTION,
                ))
            if wall.nextto is not None and wall.nextto not in model.spaces:
                warnings.append(ModelWarning(
                    level=WarningLevel.WARNING,
                    id=wall.id,
                    message=f"Wall {wall.id} ({wall.name}) references unknown adjacent space {wall.nextto}",
                    category=CheckCategory.WALL_NEXTTO,
                ))

        return warnings

    # =========================================================================
    # Window Checks
    # =========================================================================

    def _check_windows(self) -> list[ModelWarning]:
        model = self._model
        warnings = []

        for window in model.windows.values():
            if window.wall not in model.walls:
                warnings.append(ModelWarning(
                    level=WarningLevel.WARNING,
                    id=window.id,
                    message=f"Window {window.id} ({window.name}) references unknown wall {window.wall}",
                    category=CheckCategory.WINDOW_WALL,
                ))
            if window.cons not in model.window_constructions:
                warnings.append(ModelWarning(
                    level=WarningLevel.WARNING,
                    id=window.id,
                    message=f"Window {window.id} ({window.name}) references unknown construction {window.cons}",
                    category=CheckCategory.WINDOW_CONSTRUCTION,
                ))

        return warnings
