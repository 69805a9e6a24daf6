"""Centralised thermal model tunables.

Every coefficient of the heat model lives here. Create a custom
``ThermalConfig`` to tweak values for testing::

    cfg = ThermalConfig(heat_threshold_c=60.0)
    thermal = ThermalSimulation(grid, config=cfg)
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class ThermalConfig:
    """All thermal model tunables, grouped by category."""

    # --- Thresholds ---
    ambient_temp_c: float = 25.0
    heat_threshold_c: float = 85.0  # warning above this
    max_temperature_c: float = 100.0  # critical above this

    # --- Dissipation model ---
    processing_heat_factor: float = 0.8  # base heat per unit of processing
    base_dissipation_efficiency: float = 0.7
    sav_dissipation_gain: float = 0.1  # efficiency gained per unit of SA/V ratio
    stack_penalty_per_level: float = 0.2
    # Floor on the divisor of the heat accumulation. Heavily stacked buildings
    # can reach a zero or negative dissipation rate.
    min_dissipation: float = 0.01

    # --- Diffusion ---
    diffusion_fraction: float = 0.1  # share of excess heat spread per pass

    # --- Scoring ---
    score_penalty_per_degree: float = 2.0

    def __post_init__(self) -> None:
        if self.heat_threshold_c > self.max_temperature_c:
            raise ValueError("heat_threshold_c must not exceed max_temperature_c")
        if self.min_dissipation <= 0:
            raise ValueError("min_dissipation must be positive")
        if not 0 <= self.diffusion_fraction <= 1:
            raise ValueError("diffusion_fraction must be within [0, 1]")


DEFAULT = ThermalConfig()
