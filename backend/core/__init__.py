"""Core domain models and the placement grid."""

from core.grid import Cell, Grid
from core.models import Building, Connection, HeatLevel, Rover

__all__ = [
    "Building",
    "Cell",
    "Connection",
    "Grid",
    "HeatLevel",
    "Rover",
]
