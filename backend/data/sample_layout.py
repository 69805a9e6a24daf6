"""Default base layout: grid size and stack zones."""

from dataclasses import dataclass


def _block(x0: int, y0: int, width: int, height: int) -> tuple[tuple[int, int], ...]:
    return tuple((x, y) for y in range(y0, y0 + height) for x in range(x0, x0 + width))


@dataclass(frozen=True)
class LayoutConfig:
    """Grid dimensions and the cells where stacking is allowed."""

    width: int = 10
    height: int = 8
    stack_zones: tuple[tuple[int, int], ...] = _block(2, 2, 3, 3)


DEFAULT_LAYOUT = LayoutConfig()
