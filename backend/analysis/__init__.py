"""Analysis of the thermal state: issues, scoring, reports and goals."""

from analysis.goals import GoalStatus, LayoutGoal, evaluate_goal
from analysis.issues import (
    EfficiencyScore,
    Severity,
    ThermalIssue,
    classify_temperature,
    efficiency_score,
    find_thermal_issues,
)
from analysis.report import BuildingThermalSummary, ThermalReport

__all__ = [
    "BuildingThermalSummary",
    "EfficiencyScore",
    "GoalStatus",
    "LayoutGoal",
    "Severity",
    "ThermalIssue",
    "ThermalReport",
    "classify_temperature",
    "efficiency_score",
    "evaluate_goal",
    "find_thermal_issues",
]
