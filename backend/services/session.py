"""Layout session - one player's grid, thermal model and catalog.

Mirrors the game flow: every successful mutation refreshes connectivity
feedback and the thermal map, and the returned message carries the
status text for the player.
"""

import logging
import random
from dataclasses import dataclass

from analysis.goals import GoalStatus, LayoutGoal, evaluate_goal
from analysis.issues import EfficiencyScore, Severity, ThermalIssue
from analysis.report import ThermalReport
from core.grid import Grid
from core.models import Building
from data.catalog import DEFAULT_CATALOG, BuildingCatalog, BuildingKind
from data.sample_layout import DEFAULT_LAYOUT, LayoutConfig
from simulation.config import DEFAULT as DEFAULT_THERMAL_CONFIG
from simulation.config import ThermalConfig
from simulation.thermal import ThermalMap, ThermalSimulation

logger = logging.getLogger(__name__)


@dataclass
class ActionResult:
    """Outcome of a player action."""

    success: bool
    message: str
    building_id: str | None = None


class LayoutSession:
    """Single-owner session. Not safe for concurrent use."""

    def __init__(
        self,
        layout: LayoutConfig = DEFAULT_LAYOUT,
        catalog: BuildingCatalog = DEFAULT_CATALOG,
        thermal_config: ThermalConfig = DEFAULT_THERMAL_CONFIG,
        goal: LayoutGoal | None = None,
        rng: random.Random | None = None,
    ) -> None:
        self.catalog = catalog
        self.grid = Grid(layout.width, layout.height)
        self.grid.set_stack_zones(layout.stack_zones)
        self.thermal = ThermalSimulation(self.grid, config=thermal_config)
        self.goal = goal or LayoutGoal()
        self._rng = rng or random.Random()

    # ------------------------------------------------------------------
    # Actions
    # ------------------------------------------------------------------

    def place(self, kind: BuildingKind, x: int, y: int, stack_mode: bool = False) -> ActionResult:
        building = self.catalog.create(kind)
        if not self.grid.place_building(building, x, y, stack_mode):
            return ActionResult(False, f"Cannot place {building.kind} at ({x},{y}).")

        message = f"{building.kind} placed at ({x},{y})"
        if stack_mode:
            message += f" at stack level {building.stack_level}"
        message += "."
        logger.info(message)

        critical = self._refresh_and_find_critical()
        if critical:
            message += f" Warning: Critical temperature detected! {critical[0].message}"
        return ActionResult(True, message, building.id)

    def stack_on(self, kind: BuildingKind, building_id: str) -> ActionResult:
        """Stack a new building at the origin of an existing one."""
        base = self.grid.find_building(building_id)
        if base is None:
            return ActionResult(False, f"Unknown building {building_id}.")

        building = self.catalog.create(kind)
        if not self.grid.place_building(building, base.x, base.y, stack_mode=True):
            return ActionResult(False, f"Cannot stack {building.kind} on top of {base.kind}.")

        logger.info("Stacked %s on %s at level %d", building.kind, base.kind, building.stack_level)
        message = f"{building.kind} stacked on top of {base.kind} at level {building.stack_level}."
        critical = self._refresh_and_find_critical()
        if critical:
            message += f" Warning: Critical temperature detected! {critical[0].message}"
        return ActionResult(True, message, building.id)

    def connect(self, source_id: str, target_id: str) -> ActionResult:
        source = self.grid.find_building(source_id)
        target = self.grid.find_building(target_id)
        if source is None or target is None:
            return ActionResult(False, "Both buildings must exist to connect them.")
        if source is target:
            return ActionResult(False, "A building cannot be connected to itself.")
        if not self.grid.create_connection(source, target):
            return ActionResult(False, "Buildings are already connected.")

        logger.info("Connected %s to %s", source.id, target.id)
        self.refresh()
        return ActionResult(True, f"Connected {source.kind} to {target.kind}.")

    def add_rover(self) -> ActionResult:
        """Send a rover along a randomly chosen connection."""
        if len(self.grid.buildings) < 2:
            return ActionResult(False, "Need at least two connected buildings to add a rover.")
        if not self.grid.connections:
            return ActionResult(False, "Create connections between buildings first.")

        connection = self._rng.choice(self.grid.connections)
        self.grid.add_rover(connection.source.id, connection.target.id)
        return ActionResult(True, "Rover added to simulate data flow.")

    def clear(self) -> ActionResult:
        self.grid.clear()
        self.thermal.update_thermal_map()
        logger.info("Grid cleared")
        return ActionResult(True, "Grid cleared.")

    def tick(self) -> None:
        self.grid.update()

    def refresh(self) -> ThermalMap:
        """Re-run connectivity feedback, then rebuild the thermal map."""
        self.grid.refresh_thermal_efficiency()
        return self.thermal.update_thermal_map()

    def _refresh_and_find_critical(self) -> list[ThermalIssue]:
        self.refresh()
        critical = [i for i in self.thermal.check_thermal_issues() if i.severity == Severity.CRITICAL]
        for issue in critical:
            logger.warning(issue.message)
        return critical

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def building(self, building_id: str) -> Building | None:
        return self.grid.find_building(building_id)

    def describe(self, building_id: str) -> ActionResult:
        building = self.grid.find_building(building_id)
        if building is None:
            return ActionResult(False, f"Unknown building {building_id}.")
        ratio = self.thermal.calculate_sav_ratio(building)
        dissipation = self.thermal.calculate_heat_dissipation(building)
        message = (
            f"{building.kind} at ({building.x},{building.y}). "
            f"Processing: {building.processing:g}. "
            f"Surface Area/Volume Ratio: {ratio:.2f}. "
            f"Heat Dissipation Rate: {dissipation:.2f}. "
            f"Stack Level: {building.stack_level}"
        )
        return ActionResult(True, message, building.id)

    def thermal_snapshot(self) -> ThermalMap:
        return self.thermal.thermal_map.copy()

    def issues(self) -> list[ThermalIssue]:
        return self.thermal.check_thermal_issues()

    def score(self) -> EfficiencyScore:
        return self.thermal.get_thermal_efficiency_score()

    def report(self) -> ThermalReport:
        self.refresh()
        return self.thermal.build_report()

    def goal_status(self) -> GoalStatus:
        return evaluate_goal(self.grid, self.score(), self.goal)
