"""Layout goal: a dense, networked base that still runs cool."""

from dataclasses import dataclass, field

from analysis.issues import EfficiencyScore
from core.grid import Grid


@dataclass(frozen=True)
class LayoutGoal:
    min_buildings: int = 5
    min_stacked: int = 2
    min_score: float = 75.0


@dataclass
class GoalStatus:
    """Outcome of a goal evaluation. ``unmet`` lists the failed requirements."""

    reached: bool
    unmet: list[str] = field(default_factory=list)


def evaluate_goal(grid: Grid, efficiency: EfficiencyScore, goal: LayoutGoal | None = None) -> GoalStatus:
    if goal is None:
        goal = LayoutGoal()

    unmet: list[str] = []
    if len(grid.buildings) < goal.min_buildings:
        unmet.append(f"place at least {goal.min_buildings} buildings")

    stacked = sum(1 for b in grid.buildings if b.is_stacked)
    if stacked < goal.min_stacked:
        unmet.append(f"stack at least {goal.min_stacked} buildings")

    if efficiency.score < goal.min_score:
        unmet.append(f"reach a thermal score of {goal.min_score:.0f}")

    if len(grid.connected_building_ids()) < len(grid.buildings):
        unmet.append("connect every building")

    return GoalStatus(reached=not unmet, unmet=unmet)
