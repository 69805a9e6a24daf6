"""Tests for the default layout."""

import dataclasses

import pytest

from data.sample_layout import DEFAULT_LAYOUT, LayoutConfig
from services.session import LayoutSession


def test_default_layout_values() -> None:
    assert (DEFAULT_LAYOUT.width, DEFAULT_LAYOUT.height) == (10, 8)
    assert len(DEFAULT_LAYOUT.stack_zones) == 9
    assert DEFAULT_LAYOUT.stack_zones[0] == (2, 2)
    assert DEFAULT_LAYOUT.stack_zones[-1] == (4, 4)


def test_default_layout_is_immutable() -> None:
    assert isinstance(DEFAULT_LAYOUT.stack_zones, tuple)
    with pytest.raises(dataclasses.FrozenInstanceError):
        DEFAULT_LAYOUT.stack_zones = ()  # type: ignore[misc]


def test_sessions_do_not_share_stack_zones() -> None:
    first = LayoutSession()
    first.grid.stack_zones.append((0, 0))

    second = LayoutSession()

    assert (0, 0) not in second.grid.stack_zones
    assert (0, 0) not in DEFAULT_LAYOUT.stack_zones
    assert LayoutConfig().stack_zones == DEFAULT_LAYOUT.stack_zones
