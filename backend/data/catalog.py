"""Building type catalog - the palette of buildings a player can place."""

from collections.abc import Iterator
from dataclasses import dataclass
from enum import StrEnum

from core.models import Building


class BuildingKind(StrEnum):
    CPU_CENTER = "CPU Center"
    MEMORY_MALL = "Memory Mall"
    IO_MARKET = "IO Market"


@dataclass(frozen=True)
class BuildingType:
    """Catalog entry. Validated on construction."""

    kind: BuildingKind
    width: int
    height: int
    processing: float

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"{self.kind}: size must be positive, got {self.width}x{self.height}")
        if self.processing < 0:
            raise ValueError(f"{self.kind}: processing must be non-negative, got {self.processing}")

    @property
    def label(self) -> str:
        return f"{self.kind} ({self.width}x{self.height})"


class BuildingCatalog:
    """Lookup of building types by kind."""

    def __init__(self, types: list[BuildingType]) -> None:
        self._types: dict[BuildingKind, BuildingType] = {}
        for building_type in types:
            if building_type.kind in self._types:
                raise ValueError(f"Duplicate catalog entry for {building_type.kind}")
            self._types[building_type.kind] = building_type

    def __iter__(self) -> Iterator[BuildingType]:
        return iter(self._types.values())

    def __len__(self) -> int:
        return len(self._types)

    def __contains__(self, kind: object) -> bool:
        return kind in self._types

    def get(self, kind: BuildingKind) -> BuildingType:
        return self._types[kind]

    def create(self, kind: BuildingKind) -> Building:
        """Instantiate a fresh, unplaced building of the given kind."""
        building_type = self._types[kind]
        return Building(
            kind=str(building_type.kind),
            width=building_type.width,
            height=building_type.height,
            processing=building_type.processing,
        )


DEFAULT_CATALOG = BuildingCatalog(
    [
        BuildingType(kind=BuildingKind.CPU_CENTER, width=2, height=2, processing=10),
        BuildingType(kind=BuildingKind.MEMORY_MALL, width=1, height=2, processing=5),
        BuildingType(kind=BuildingKind.IO_MARKET, width=2, height=1, processing=7),
    ]
)
