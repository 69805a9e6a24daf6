"""Thermal issue detection and efficiency scoring over a temperature map."""

from dataclasses import dataclass
from enum import StrEnum

import numpy as np
from numpy.typing import NDArray


class Severity(StrEnum):
    WARNING = "warning"
    CRITICAL = "critical"


@dataclass
class ThermalIssue:
    """A cell running above the warning threshold."""

    x: int
    y: int
    temperature: float
    severity: Severity
    message: str


@dataclass
class EfficiencyScore:
    average_temperature: float
    score: float  # 0-100


def classify_temperature(temperature: float, heat_threshold: float, max_temperature: float) -> Severity | None:
    """Severity for a cell temperature, None at or below the warning threshold."""
    if temperature > max_temperature:
        return Severity.CRITICAL
    if temperature > heat_threshold:
        return Severity.WARNING
    return None


def _issue_message(severity: Severity, temperature: float, x: int, y: int) -> str:
    match severity:
        case Severity.CRITICAL:
            return f"Critical temperature of {temperature:.1f}°C at ({x},{y})"
        case Severity.WARNING:
            return f"High temperature of {temperature:.1f}°C at ({x},{y})"


def find_thermal_issues(
    temperature: NDArray[np.float64],
    heat_threshold: float,
    max_temperature: float,
) -> list[ThermalIssue]:
    """Scan a (height, width) temperature map in row-major order."""
    issues: list[ThermalIssue] = []
    height, width = temperature.shape
    for y in range(height):
        for x in range(width):
            temp = float(temperature[y, x])
            severity = classify_temperature(temp, heat_threshold, max_temperature)
            if severity is None:
                continue
            issues.append(
                ThermalIssue(
                    x=x,
                    y=y,
                    temperature=temp,
                    severity=severity,
                    message=_issue_message(severity, temp, x, y),
                )
            )
    return issues


def efficiency_score(
    temperature: NDArray[np.float64],
    ambient: float,
    penalty_per_degree: float,
) -> EfficiencyScore:
    """Score the map by how far its mean temperature sits above ambient."""
    average = float(np.mean(temperature))
    score = max(0.0, 100.0 - (average - ambient) * penalty_per_degree)
    return EfficiencyScore(average_temperature=average, score=min(score, 100.0))
