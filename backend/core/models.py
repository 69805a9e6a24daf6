"""Core data models for the base layout: buildings, connections, rovers."""

import uuid
from dataclasses import dataclass, field
from enum import StrEnum

# Connectivity feedback
_CONNECTION_EFFICIENCY_GAIN = 0.3  # up to +30% when connected to every other building
_STACK_EFFICIENCY_LOSS = 0.1  # per stack level
_MIN_THERMAL_EFFICIENCY = 0.5

# Building-local heat estimate
_STACK_HEAT_FACTOR = 0.2  # per stack level
_SAV_COOLING_FACTOR = 0.1
_HIGH_HEAT_OUTPUT = 15.0
_ELEVATED_HEAT_OUTPUT = 10.0

_ROVER_SPEED = 0.01  # progress per tick


def _new_id() -> str:
    return uuid.uuid4().hex[:9]


class HeatLevel(StrEnum):
    NORMAL = "normal"
    ELEVATED = "elevated"
    HIGH = "high"


@dataclass(eq=False)
class Building:
    """A rectangular processing building.

    Depth is a fixed unit for all area and volume math. The origin is
    assigned once by the grid on a successful placement.
    """

    kind: str
    width: int
    height: int
    processing: float
    id: str = field(default_factory=_new_id)
    x: int = 0
    y: int = 0
    is_stacked: bool = False
    stack_level: int = 0
    connections: list["Connection"] = field(default_factory=list, repr=False)
    thermal_efficiency: float = 1.0

    def place(self, x: int, y: int) -> None:
        self.x = x
        self.y = y

    def contains_point(self, x: int, y: int) -> bool:
        return self.x <= x < self.x + self.width and self.y <= y < self.y + self.height

    def footprint(self, x: int | None = None, y: int | None = None) -> list[tuple[int, int]]:
        """Cells covered with the origin at (x, y), defaulting to the current origin."""
        ox = self.x if x is None else x
        oy = self.y if y is None else y
        return [(ox + dx, oy + dy) for dy in range(self.height) for dx in range(self.width)]

    def surface_area(self) -> float:
        # 2(w*h) + 2(w*d) + 2(h*d) with d = 1
        return 2 * (self.width * self.height) + 2 * self.width + 2 * self.height

    def volume(self) -> float:
        return self.width * self.height

    def sav_ratio(self) -> float:
        """Surface area to volume ratio. Higher means better passive cooling."""
        return self.surface_area() / self.volume()

    def heat_output(self) -> float:
        """Building-local heat estimate from stacking, geometry and efficiency.

        Independent from the grid-level thermal map.
        """
        stacking_factor = 1 + self.stack_level * _STACK_HEAT_FACTOR if self.is_stacked else 1.0
        sav_factor = 1 - self.sav_ratio() * _SAV_COOLING_FACTOR
        return self.processing * stacking_factor * sav_factor / self.thermal_efficiency

    def heat_level(self) -> HeatLevel:
        output = self.heat_output()
        if output > _HIGH_HEAT_OUTPUT:
            return HeatLevel.HIGH
        if output > _ELEVATED_HEAT_OUTPUT:
            return HeatLevel.ELEVATED
        return HeatLevel.NORMAL

    def update_thermal_efficiency(self, connected_ids: set[str], total_buildings: int) -> None:
        """Recompute efficiency from network connectivity and stacking."""
        if self.id in connected_ids:
            connection_ratio = len(self.connections) / (total_buildings - 1)
            self.thermal_efficiency = 1.0 + connection_ratio * _CONNECTION_EFFICIENCY_GAIN
        else:
            self.thermal_efficiency = 1.0

        if self.is_stacked:
            self.thermal_efficiency -= self.stack_level * _STACK_EFFICIENCY_LOSS

        self.thermal_efficiency = max(_MIN_THERMAL_EFFICIENCY, self.thermal_efficiency)


@dataclass(eq=False)
class Connection:
    """Conveyor link between two distinct buildings. Direction carries no meaning."""

    source: Building
    target: Building
    id: str = field(default_factory=_new_id)

    def joins(self, a: Building, b: Building) -> bool:
        return (self.source is a and self.target is b) or (self.source is b and self.target is a)

    def joins_ids(self, a_id: str, b_id: str) -> bool:
        return {self.source.id, self.target.id} == {a_id, b_id}


@dataclass
class Rover:
    """Data packet travelling along a connection."""

    source_id: str
    target_id: str
    id: str = field(default_factory=_new_id)
    progress: float = 0.0  # 0 at source, 1 at target
    speed: float = _ROVER_SPEED

    def update(self) -> None:
        self.progress += self.speed
        if self.progress > 1:
            self.progress = 0.0
