"""Grid placement engine - occupancy, stacking legality, connections."""

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field

from core.models import Building, Connection, Rover

logger = logging.getLogger(__name__)


@dataclass
class Cell:
    """One grid cell. ``buildings`` holds non-owning references across all stack levels."""

    x: int
    y: int
    is_stack_zone: bool = False
    buildings: list[Building] = field(default_factory=list)


class Grid:
    """Fixed-size placement grid.

    ``buildings`` owns every placed building; the per-cell lists only index
    them. Expected failures (illegal placement, duplicate connection, missing
    connection) are reported as ``False``, never raised.
    """

    def __init__(self, width: int, height: int) -> None:
        if width <= 0 or height <= 0:
            raise ValueError(f"Grid dimensions must be positive, got {width}x{height}")
        self.width = width
        self.height = height
        self.cells: list[list[Cell]] = [[Cell(x, y) for x in range(width)] for y in range(height)]
        self.stack_zones: list[tuple[int, int]] = []
        self.buildings: list[Building] = []
        self.connections: list[Connection] = []
        self.rovers: list[Rover] = []

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def set_stack_zones(self, zones: Iterable[tuple[int, int]]) -> None:
        """Flag cells as stack zones. Out-of-bounds entries are ignored."""
        self.stack_zones = list(zones)
        for x, y in self.stack_zones:
            if self.in_bounds(x, y):
                self.cells[y][x].is_stack_zone = True

    # ------------------------------------------------------------------
    # Placement
    # ------------------------------------------------------------------

    def check_placement(self, building: Building, x: int, y: int, stack_mode: bool) -> int | None:
        """Return the stack level ``building`` would take at (x, y), or None if illegal.

        A building that is already on the grid is never placed again.

        Stack mode requires every covered cell to be a stack zone and lands one
        level above the highest occupant anywhere under the footprint (0 when
        the footprint is empty). Ground mode only conflicts with level-0
        occupants.
        """
        if building in self.buildings:
            return None
        if x < 0 or y < 0 or x + building.width > self.width or y + building.height > self.height:
            return None

        covered = [self.cells[cy][cx] for cx, cy in building.footprint(x, y)]

        if stack_mode:
            if not all(cell.is_stack_zone for cell in covered):
                return None
            max_level = max((b.stack_level for cell in covered for b in cell.buildings), default=-1)
            return max_level + 1

        if any(b.stack_level == 0 for cell in covered for b in cell.buildings):
            return None
        return 0

    def can_place_building(self, building: Building, x: int, y: int, stack_mode: bool) -> bool:
        return self.check_placement(building, x, y, stack_mode) is not None

    def place_building(self, building: Building, x: int, y: int, stack_mode: bool) -> bool:
        level = self.check_placement(building, x, y, stack_mode)
        if level is None:
            logger.debug("Rejected %s (%dx%d) at (%d,%d)", building.kind, building.width, building.height, x, y)
            return False

        building.stack_level = level
        building.is_stacked = stack_mode
        building.place(x, y)
        self.buildings.append(building)
        for cx, cy in building.footprint():
            self.cells[cy][cx].buildings.append(building)

        logger.debug("Placed %s %s at (%d,%d) level %d", building.kind, building.id, x, y, level)
        return True

    def building_at(self, x: int, y: int) -> Building | None:
        """Topmost building on a cell; the most recent one wins a level tie."""
        if not self.in_bounds(x, y):
            return None
        occupants = self.cells[y][x].buildings
        if not occupants:
            return None
        return max(reversed(occupants), key=lambda b: b.stack_level)

    def find_building(self, building_id: str) -> Building | None:
        return next((b for b in self.buildings if b.id == building_id), None)

    # ------------------------------------------------------------------
    # Network
    # ------------------------------------------------------------------

    def create_connection(self, source: Building, target: Building) -> bool:
        if source is target:
            return False
        if any(c.joins(source, target) for c in self.connections):
            return False

        connection = Connection(source, target)
        self.connections.append(connection)
        source.connections.append(connection)
        target.connections.append(connection)
        return True

    def add_rover(self, source_id: str, target_id: str) -> bool:
        """Start a rover along an existing connection between the two buildings."""
        if not any(c.joins_ids(source_id, target_id) for c in self.connections):
            return False
        self.rovers.append(Rover(source_id, target_id))
        return True

    def connected_building_ids(self) -> set[str]:
        ids: set[str] = set()
        for connection in self.connections:
            ids.add(connection.source.id)
            ids.add(connection.target.id)
        return ids

    def refresh_thermal_efficiency(self) -> None:
        """Re-run connectivity feedback for every building."""
        connected = self.connected_building_ids()
        total = len(self.buildings)
        for building in self.buildings:
            building.update_thermal_efficiency(connected, total)

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def update(self) -> None:
        """Per-frame tick. Safe to call when nothing changed."""
        for rover in self.rovers:
            rover.update()

    def clear(self) -> None:
        """Drop every building, connection and rover. Stack zones are kept."""
        self.buildings = []
        self.connections = []
        self.rovers = []
        for row in self.cells:
            for cell in row:
                cell.buildings = []
