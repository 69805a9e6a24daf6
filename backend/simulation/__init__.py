"""Simulation module - grid thermal model."""

from simulation.config import DEFAULT as DEFAULT_THERMAL_CONFIG
from simulation.config import ThermalConfig
from simulation.thermal import ThermalMap, ThermalSimulation

__all__ = [
    "DEFAULT_THERMAL_CONFIG",
    "ThermalConfig",
    "ThermalMap",
    "ThermalSimulation",
]
