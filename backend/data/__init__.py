"""Building catalog and default layout configuration."""

from data.catalog import DEFAULT_CATALOG, BuildingCatalog, BuildingKind, BuildingType
from data.sample_layout import DEFAULT_LAYOUT, LayoutConfig

__all__ = [
    "DEFAULT_CATALOG",
    "DEFAULT_LAYOUT",
    "BuildingCatalog",
    "BuildingKind",
    "BuildingType",
    "LayoutConfig",
]
