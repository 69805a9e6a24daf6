"""Thermal analysis report - plain data for the presentation layer."""

from dataclasses import dataclass, field

from analysis.issues import EfficiencyScore, Severity, ThermalIssue


@dataclass
class BuildingThermalSummary:
    """Per-building geometry and dissipation figures."""

    building_id: str
    kind: str
    x: int
    y: int
    stack_level: int
    sav_ratio: float
    heat_dissipation: float
    heat_output: float


@dataclass
class ThermalReport:
    average_temperature: float
    score: float
    issues: list[ThermalIssue] = field(default_factory=list)
    buildings: list[BuildingThermalSummary] = field(default_factory=list)

    @classmethod
    def from_parts(
        cls,
        efficiency: EfficiencyScore,
        issues: list[ThermalIssue],
        buildings: list[BuildingThermalSummary],
    ) -> "ThermalReport":
        return cls(
            average_temperature=efficiency.average_temperature,
            score=efficiency.score,
            issues=issues,
            buildings=buildings,
        )

    @property
    def critical_issues(self) -> list[ThermalIssue]:
        return [i for i in self.issues if i.severity == Severity.CRITICAL]

    @property
    def has_issues(self) -> bool:
        return bool(self.issues)
