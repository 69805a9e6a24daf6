"""Tests for issue classification, scoring and layout goals."""

import numpy as np
import pytest

from analysis.goals import LayoutGoal, evaluate_goal
from analysis.issues import EfficiencyScore, Severity, classify_temperature, efficiency_score, find_thermal_issues
from core.grid import Grid
from core.models import Building


@pytest.mark.parametrize(
    ("temperature", "expected"),
    [
        (25.0, None),
        (85.0, None),
        (85.01, Severity.WARNING),
        (100.0, Severity.WARNING),
        (100.01, Severity.CRITICAL),
    ],
)
def test_classify_temperature(temperature: float, expected: Severity | None) -> None:
    assert classify_temperature(temperature, heat_threshold=85.0, max_temperature=100.0) == expected


def test_issues_are_row_major_with_messages() -> None:
    temperature = np.array(
        [
            [85.0, 85.1],
            [100.0, 100.1],
        ]
    )

    issues = find_thermal_issues(temperature, heat_threshold=85.0, max_temperature=100.0)

    assert [(i.x, i.y, i.severity) for i in issues] == [
        (1, 0, Severity.WARNING),
        (0, 1, Severity.WARNING),
        (1, 1, Severity.CRITICAL),
    ]
    assert issues[0].message == "High temperature of 85.1°C at (1,0)"
    assert issues[2].message == "Critical temperature of 100.1°C at (1,1)"


def test_efficiency_score_bounds() -> None:
    assert efficiency_score(np.full((2, 2), 25.0), ambient=25.0, penalty_per_degree=2.0).score == 100.0
    assert efficiency_score(np.full((2, 2), 35.0), ambient=25.0, penalty_per_degree=2.0).score == pytest.approx(80.0)
    assert efficiency_score(np.full((2, 2), 500.0), ambient=25.0, penalty_per_degree=2.0).score == 0.0


# -----------------------------------------------------------------------------
# Goals
# -----------------------------------------------------------------------------


def _building() -> Building:
    return Building(kind="Memory Mall", width=1, height=1, processing=5)


def test_goal_unmet_on_empty_grid() -> None:
    grid = Grid(10, 8)
    status = evaluate_goal(grid, EfficiencyScore(average_temperature=25.0, score=100.0))

    assert not status.reached
    assert "place at least 5 buildings" in status.unmet
    assert "stack at least 2 buildings" in status.unmet


def test_goal_reached() -> None:
    grid = Grid(6, 6)
    grid.set_stack_zones([(0, 0)])
    buildings = [_building() for _ in range(5)]
    assert grid.place_building(buildings[0], 0, 0, stack_mode=True)
    assert grid.place_building(buildings[1], 0, 0, stack_mode=True)
    for i, building in enumerate(buildings[2:]):
        assert grid.place_building(building, i * 2, 3, stack_mode=False)
    for a, b in zip(buildings, buildings[1:]):
        grid.create_connection(a, b)

    status = evaluate_goal(grid, EfficiencyScore(average_temperature=26.0, score=98.0), LayoutGoal())

    assert status.reached
    assert status.unmet == []


def test_goal_requires_full_connectivity_and_score() -> None:
    grid = Grid(6, 6)
    grid.set_stack_zones([(0, 0)])
    buildings = [_building() for _ in range(5)]
    grid.place_building(buildings[0], 0, 0, stack_mode=True)
    grid.place_building(buildings[1], 0, 0, stack_mode=True)
    for i, building in enumerate(buildings[2:]):
        grid.place_building(building, i * 2, 3, stack_mode=False)
    grid.create_connection(buildings[0], buildings[1])

    status = evaluate_goal(grid, EfficiencyScore(average_temperature=70.0, score=10.0))

    assert not status.reached
    assert status.unmet == ["reach a thermal score of 75", "connect every building"]
