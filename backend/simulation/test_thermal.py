"""Tests for the grid thermal model: dissipation, map update, diffusion, scoring."""

import numpy as np
import pytest

from core.grid import Grid
from core.models import Building
from simulation.config import ThermalConfig
from simulation.thermal import ThermalMap, ThermalSimulation

AMBIENT = 25.0


def make_grid() -> Grid:
    grid = Grid(10, 8)
    grid.set_stack_zones([(x, y) for y in range(2, 5) for x in range(2, 5)])
    return grid


def cpu() -> Building:
    return Building(kind="CPU Center", width=2, height=2, processing=10)


# -----------------------------------------------------------------------------
# Building-level model
# -----------------------------------------------------------------------------


def test_sav_ratio_matches_geometry() -> None:
    thermal = ThermalSimulation(make_grid())
    assert thermal.calculate_sav_ratio(cpu()) == pytest.approx(4.0)


def test_heat_dissipation_ground() -> None:
    thermal = ThermalSimulation(make_grid())
    # (10 * 0.8) * (0.7 + 0.4)
    assert thermal.calculate_heat_dissipation(cpu()) == pytest.approx(8.8)


def test_heat_dissipation_stacked() -> None:
    thermal = ThermalSimulation(make_grid())
    building = Building(kind="CPU Center", width=2, height=2, processing=10, is_stacked=True, stack_level=1)
    assert thermal.calculate_heat_dissipation(building) == pytest.approx(8 * 0.9)


def test_heat_dissipation_can_go_negative() -> None:
    thermal = ThermalSimulation(make_grid())
    building = Building(kind="CPU Center", width=2, height=2, processing=10, is_stacked=True, stack_level=6)
    assert thermal.calculate_heat_dissipation(building) == pytest.approx(8 * (1.1 - 1.2))


def test_config_validation() -> None:
    with pytest.raises(ValueError):
        ThermalConfig(heat_threshold_c=110.0, max_temperature_c=100.0)
    with pytest.raises(ValueError):
        ThermalConfig(min_dissipation=0.0)
    with pytest.raises(ValueError):
        ThermalConfig(diffusion_fraction=1.5)


# -----------------------------------------------------------------------------
# Map update
# -----------------------------------------------------------------------------


def test_empty_grid_stays_ambient() -> None:
    thermal = ThermalSimulation(make_grid())
    thermal_map = thermal.update_thermal_map()

    assert thermal_map.shape == (8, 10)
    assert np.all(thermal_map.temperature == AMBIENT)
    assert np.all(thermal_map.heat_dissipation == 0.0)


def test_single_building_heat_and_diffusion() -> None:
    grid = make_grid()
    grid.place_building(cpu(), 0, 0, stack_mode=False)
    thermal = ThermalSimulation(grid)

    thermal_map = thermal.update_thermal_map()

    heat = 10 / 8.8
    spread = heat * 0.1
    # Each footprint cell loses the full spread and gets a quarter back from
    # each of its two footprint neighbours.
    for x, y in [(0, 0), (1, 0), (0, 1), (1, 1)]:
        assert thermal_map.temperature_at(x, y) == pytest.approx(AMBIENT + heat - spread / 2)
        assert thermal_map.heat_dissipation[y, x] == pytest.approx(8.8)
    for x, y in [(2, 0), (2, 1), (0, 2), (1, 2)]:
        assert thermal_map.temperature_at(x, y) == pytest.approx(AMBIENT + spread / 4)
    assert thermal_map.temperature_at(2, 2) == AMBIENT
    assert thermal_map.heat_dissipation[2, 2] == 0.0

    # Shares pushed off the top and left edges are lost.
    total_excess = float(np.sum(thermal_map.temperature - AMBIENT))
    assert total_excess == pytest.approx(4 * heat - spread)


def test_interior_building_conserves_heat() -> None:
    grid = make_grid()
    grid.place_building(cpu(), 5, 5, stack_mode=False)
    thermal = ThermalSimulation(grid)

    thermal_map = thermal.update_thermal_map()

    assert float(np.sum(thermal_map.temperature - AMBIENT)) == pytest.approx(4 * 10 / 8.8)


def test_update_recomputes_from_scratch() -> None:
    grid = make_grid()
    grid.place_building(cpu(), 5, 5, stack_mode=False)
    thermal = ThermalSimulation(grid)

    first = thermal.update_thermal_map().temperature.copy()
    second = thermal.update_thermal_map().temperature

    np.testing.assert_allclose(first, second)


def test_last_building_wins_dissipation() -> None:
    grid = make_grid()
    grid.place_building(cpu(), 2, 2, stack_mode=False)
    grid.place_building(cpu(), 2, 2, stack_mode=True)
    thermal = ThermalSimulation(grid)

    thermal_map = thermal.update_thermal_map()

    assert thermal_map.heat_dissipation[2, 2] == pytest.approx(8 * 0.9)


def test_non_positive_dissipation_is_floored() -> None:
    grid = make_grid()
    for _ in range(7):
        assert grid.place_building(cpu(), 2, 2, stack_mode=True)
    assert grid.buildings[-1].stack_level == 6
    thermal = ThermalSimulation(grid)

    thermal_map = thermal.update_thermal_map()

    assert np.all(np.isfinite(thermal_map.temperature))
    assert thermal_map.heat_dissipation[2, 2] == pytest.approx(0.01)
    assert thermal_map.temperature_at(2, 2) > 100.0


def test_thermal_map_copy_is_independent() -> None:
    original = ThermalMap.ambient(3, 2, AMBIENT)
    duplicate = original.copy()
    duplicate.temperature[0, 0] = 99.0
    assert original.temperature_at(0, 0) == AMBIENT


def test_clear_then_update_returns_ambient() -> None:
    grid = make_grid()
    grid.place_building(cpu(), 0, 0, stack_mode=False)
    thermal = ThermalSimulation(grid)
    thermal.update_thermal_map()

    grid.clear()
    thermal_map = thermal.update_thermal_map()

    assert np.all(thermal_map.temperature == AMBIENT)


# -----------------------------------------------------------------------------
# Issues and score
# -----------------------------------------------------------------------------


def test_no_issues_on_cool_grid() -> None:
    grid = make_grid()
    grid.place_building(cpu(), 0, 0, stack_mode=False)
    thermal = ThermalSimulation(grid)
    thermal.update_thermal_map()

    assert thermal.check_thermal_issues() == []


def test_overheated_stack_reports_critical() -> None:
    grid = make_grid()
    for _ in range(7):
        grid.place_building(cpu(), 2, 2, stack_mode=True)
    thermal = ThermalSimulation(grid)
    thermal.update_thermal_map()

    issues = thermal.check_thermal_issues()

    assert issues
    assert {(i.x, i.y) for i in issues} >= {(2, 2), (3, 2), (2, 3), (3, 3)}
    assert all(i.severity == "critical" for i in issues if (i.x, i.y) == (2, 2))
    assert [(i.y, i.x) for i in issues] == sorted((i.y, i.x) for i in issues)


def test_score_on_empty_grid() -> None:
    thermal = ThermalSimulation(make_grid())
    thermal.update_thermal_map()

    efficiency = thermal.get_thermal_efficiency_score()

    assert efficiency.average_temperature == pytest.approx(AMBIENT)
    assert efficiency.score == pytest.approx(100.0)


def test_score_penalises_mean_temperature() -> None:
    grid = make_grid()
    grid.place_building(cpu(), 5, 5, stack_mode=False)
    thermal = ThermalSimulation(grid)
    thermal.update_thermal_map()

    efficiency = thermal.get_thermal_efficiency_score()

    mean_rise = 4 * (10 / 8.8) / 80
    assert efficiency.average_temperature == pytest.approx(AMBIENT + mean_rise)
    assert efficiency.score == pytest.approx(100 - mean_rise * 2)


def test_score_is_floored_at_zero() -> None:
    grid = make_grid()
    for _ in range(9):
        grid.place_building(cpu(), 2, 2, stack_mode=True)
    thermal = ThermalSimulation(grid)
    thermal.update_thermal_map()

    assert thermal.get_thermal_efficiency_score().score == 0.0


def test_report_lists_buildings() -> None:
    grid = make_grid()
    building = cpu()
    grid.place_building(building, 0, 0, stack_mode=False)
    thermal = ThermalSimulation(grid)
    thermal.update_thermal_map()

    report = thermal.build_report()

    assert report.score == pytest.approx(thermal.get_thermal_efficiency_score().score)
    assert not report.has_issues
    assert len(report.buildings) == 1
    summary = report.buildings[0]
    assert summary.building_id == building.id
    assert summary.sav_ratio == pytest.approx(4.0)
    assert summary.heat_dissipation == pytest.approx(8.8)
