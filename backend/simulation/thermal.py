"""Thermal simulation over the placement grid.

The map is rebuilt from scratch on every update:

1. Every cell starts at ambient temperature.
2. Each building adds ``processing / dissipation`` to every footprint cell,
   where dissipation falls with stacking and rises with the SA/V ratio.
3. One diffusion pass spreads a fraction of each cell's excess heat evenly
   to its four axis neighbours. Shares that would leave the grid are lost.

This is a heuristic, not a heat-equation solver.
"""

import logging
from dataclasses import dataclass

import numpy as np
from numpy.typing import NDArray
from scipy import ndimage

from analysis.issues import EfficiencyScore, ThermalIssue, efficiency_score, find_thermal_issues
from analysis.report import BuildingThermalSummary, ThermalReport
from core.grid import Grid
from core.models import Building
from simulation.config import DEFAULT, ThermalConfig

logger = logging.getLogger(__name__)

# Each axis neighbour receives a quarter of the spread amount.
_NEIGHBOUR_KERNEL = np.array(
    [
        [0.0, 0.25, 0.0],
        [0.25, 0.0, 0.25],
        [0.0, 0.25, 0.0],
    ]
)


@dataclass
class ThermalMap:
    """Per-cell temperature (°C) and dissipation rate, indexed [y, x]."""

    temperature: NDArray[np.float64]
    heat_dissipation: NDArray[np.float64]

    @classmethod
    def ambient(cls, width: int, height: int, ambient_temp: float) -> "ThermalMap":
        return cls(
            temperature=np.full((height, width), ambient_temp, dtype=np.float64),
            heat_dissipation=np.zeros((height, width), dtype=np.float64),
        )

    @property
    def shape(self) -> tuple[int, int]:
        return self.temperature.shape  # type: ignore[return-value]

    def copy(self) -> "ThermalMap":
        return ThermalMap(temperature=self.temperature.copy(), heat_dissipation=self.heat_dissipation.copy())

    def temperature_at(self, x: int, y: int) -> float:
        return float(self.temperature[y, x])


class ThermalSimulation:
    """Derives the thermal state of a grid: temperature map, issues, score."""

    def __init__(self, grid: Grid, config: ThermalConfig = DEFAULT) -> None:
        self.grid = grid
        self.config = config
        self.thermal_map = ThermalMap.ambient(grid.width, grid.height, config.ambient_temp_c)

    @property
    def heat_threshold(self) -> float:
        return self.config.heat_threshold_c

    @property
    def max_temperature(self) -> float:
        return self.config.max_temperature_c

    def calculate_sav_ratio(self, building: Building) -> float:
        """Surface area to volume ratio of a unit-depth prism."""
        return building.sav_ratio()

    def calculate_heat_dissipation(self, building: Building) -> float:
        """Heat dissipation rate. Lower means more heat build-up; may be <= 0."""
        cfg = self.config
        base_heat = building.processing * cfg.processing_heat_factor
        efficiency = cfg.base_dissipation_efficiency + self.calculate_sav_ratio(building) * cfg.sav_dissipation_gain
        stack_penalty = cfg.stack_penalty_per_level * building.stack_level if building.is_stacked else 0.0
        return base_heat * (efficiency - stack_penalty)

    def update_thermal_map(self) -> ThermalMap:
        """Recompute the whole map from the current buildings."""
        cfg = self.config
        thermal_map = ThermalMap.ambient(self.grid.width, self.grid.height, cfg.ambient_temp_c)

        for building in self.grid.buildings:
            dissipation = max(self.calculate_heat_dissipation(building), cfg.min_dissipation)
            heat_accumulation = building.processing / dissipation

            for x, y in building.footprint():
                if not self.grid.in_bounds(x, y):
                    continue
                thermal_map.temperature[y, x] += heat_accumulation
                thermal_map.heat_dissipation[y, x] = dissipation

        self.thermal_map = thermal_map
        self.simulate_heat_diffusion()

        logger.debug(
            "Thermal map updated: %d buildings, peak %.1f°C",
            len(self.grid.buildings),
            float(self.thermal_map.temperature.max()),
        )
        return self.thermal_map

    def simulate_heat_diffusion(self) -> None:
        """Single diffusion pass. All reads see the pre-diffusion snapshot."""
        snapshot = self.thermal_map.temperature
        excess = np.where(snapshot > self.config.ambient_temp_c, snapshot - self.config.ambient_temp_c, 0.0)
        spread = excess * self.config.diffusion_fraction

        received = ndimage.convolve(spread, _NEIGHBOUR_KERNEL, mode="constant", cval=0.0)
        self.thermal_map.temperature = snapshot - spread + received

    def check_thermal_issues(self) -> list[ThermalIssue]:
        return find_thermal_issues(self.thermal_map.temperature, self.heat_threshold, self.max_temperature)

    def get_thermal_efficiency_score(self) -> EfficiencyScore:
        return efficiency_score(
            self.thermal_map.temperature,
            ambient=self.config.ambient_temp_c,
            penalty_per_degree=self.config.score_penalty_per_degree,
        )

    def build_report(self) -> ThermalReport:
        """Score, issues and per-building SA/V and dissipation figures."""
        summaries = [
            BuildingThermalSummary(
                building_id=b.id,
                kind=b.kind,
                x=b.x,
                y=b.y,
                stack_level=b.stack_level,
                sav_ratio=self.calculate_sav_ratio(b),
                heat_dissipation=self.calculate_heat_dissipation(b),
                heat_output=b.heat_output(),
            )
            for b in self.grid.buildings
        ]
        return ThermalReport.from_parts(
            self.get_thermal_efficiency_score(),
            self.check_thermal_issues(),
            summaries,
        )
