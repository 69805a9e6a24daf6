"""FastAPI entry point - thin layer over the layout session."""

import dataclasses
import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field

from analysis.issues import Severity
from core.models import Building, HeatLevel
from data.catalog import BuildingKind
from services.session import ActionResult, LayoutSession

logging.basicConfig(level=logging.WARNING, format="%(name)s | %(message)s")
logging.getLogger("services.session").setLevel(logging.INFO)
logging.getLogger("simulation.thermal").setLevel(logging.INFO)

app = FastAPI(title="Mars Base Layout API")

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# --- module-level state, initialised at import time ---
session = LayoutSession()


class ActionResponse(BaseModel):
    success: bool
    message: str
    building_id: str | None = None


class BuildingTypeResponse(BaseModel):
    kind: BuildingKind
    width: int
    height: int
    processing: float
    sav_ratio: float


class BuildingResponse(BaseModel):
    id: str
    kind: str
    x: int
    y: int
    width: int
    height: int
    processing: float
    is_stacked: bool
    stack_level: int
    thermal_efficiency: float
    heat_output: float
    heat_level: HeatLevel
    connection_ids: list[str]


class ConnectionResponse(BaseModel):
    id: str
    source_id: str
    target_id: str


class RoverResponse(BaseModel):
    id: str
    source_id: str
    target_id: str
    progress: float


class GridResponse(BaseModel):
    width: int
    height: int
    stack_zones: list[tuple[int, int]]
    buildings: list[BuildingResponse]
    connections: list[ConnectionResponse]
    rovers: list[RoverResponse]


class PlaceRequest(BaseModel):
    kind: BuildingKind
    x: int
    y: int
    stack_mode: bool = False


class StackRequest(BaseModel):
    kind: BuildingKind


class ConnectRequest(BaseModel):
    source_id: str
    target_id: str


class TickRequest(BaseModel):
    frames: int = Field(default=1, ge=1, le=1000)


class ThermalMapResponse(BaseModel):
    width: int
    height: int
    temperature: list[list[float]]
    heat_dissipation: list[list[float]]


class ThermalIssueResponse(BaseModel):
    x: int
    y: int
    temperature: float
    severity: Severity
    message: str


class EfficiencyResponse(BaseModel):
    average_temperature: float
    score: float


class BuildingSummaryResponse(BaseModel):
    building_id: str
    kind: str
    x: int
    y: int
    stack_level: int
    sav_ratio: float
    heat_dissipation: float
    heat_output: float


class ReportResponse(BaseModel):
    average_temperature: float
    score: float
    issues: list[ThermalIssueResponse]
    buildings: list[BuildingSummaryResponse]


class GoalResponse(BaseModel):
    reached: bool
    unmet: list[str]


def _action(result: ActionResult) -> ActionResponse:
    return ActionResponse(**dataclasses.asdict(result))


def _building(building: Building) -> BuildingResponse:
    return BuildingResponse(
        id=building.id,
        kind=building.kind,
        x=building.x,
        y=building.y,
        width=building.width,
        height=building.height,
        processing=building.processing,
        is_stacked=building.is_stacked,
        stack_level=building.stack_level,
        thermal_efficiency=building.thermal_efficiency,
        heat_output=building.heat_output(),
        heat_level=building.heat_level(),
        connection_ids=[c.id for c in building.connections],
    )


@app.get("/catalog")
def get_catalog() -> list[BuildingTypeResponse]:
    responses: list[BuildingTypeResponse] = []
    for building_type in session.catalog:
        sample = session.catalog.create(building_type.kind)
        responses.append(
            BuildingTypeResponse(
                kind=building_type.kind,
                width=building_type.width,
                height=building_type.height,
                processing=building_type.processing,
                sav_ratio=session.thermal.calculate_sav_ratio(sample),
            )
        )
    return responses


@app.get("/grid")
def get_grid() -> GridResponse:
    grid = session.grid
    return GridResponse(
        width=grid.width,
        height=grid.height,
        stack_zones=grid.stack_zones,
        buildings=[_building(b) for b in grid.buildings],
        connections=[
            ConnectionResponse(id=c.id, source_id=c.source.id, target_id=c.target.id) for c in grid.connections
        ],
        rovers=[
            RoverResponse(id=r.id, source_id=r.source_id, target_id=r.target_id, progress=r.progress)
            for r in grid.rovers
        ],
    )


@app.post("/buildings")
def place_building(request: PlaceRequest) -> ActionResponse:
    return _action(session.place(request.kind, request.x, request.y, request.stack_mode))


@app.get("/buildings/{building_id}")
def describe_building(building_id: str) -> ActionResponse:
    return _action(session.describe(building_id))


@app.post("/buildings/{building_id}/stack")
def stack_building(building_id: str, request: StackRequest) -> ActionResponse:
    return _action(session.stack_on(request.kind, building_id))


@app.post("/connections")
def create_connection(request: ConnectRequest) -> ActionResponse:
    return _action(session.connect(request.source_id, request.target_id))


@app.post("/rovers")
def add_rover() -> ActionResponse:
    return _action(session.add_rover())


@app.post("/tick")
def tick(request: TickRequest) -> list[RoverResponse]:
    for _ in range(request.frames):
        session.tick()
    return [
        RoverResponse(id=r.id, source_id=r.source_id, target_id=r.target_id, progress=r.progress)
        for r in session.grid.rovers
    ]


@app.post("/clear")
def clear_grid() -> ActionResponse:
    return _action(session.clear())


@app.get("/thermal/map")
def get_thermal_map() -> ThermalMapResponse:
    snapshot = session.thermal_snapshot()
    height, width = snapshot.shape
    return ThermalMapResponse(
        width=width,
        height=height,
        temperature=snapshot.temperature.tolist(),
        heat_dissipation=snapshot.heat_dissipation.tolist(),
    )


@app.get("/thermal/issues")
def get_thermal_issues() -> list[ThermalIssueResponse]:
    return [ThermalIssueResponse(**dataclasses.asdict(issue)) for issue in session.issues()]


@app.get("/thermal/score")
def get_thermal_score() -> EfficiencyResponse:
    return EfficiencyResponse(**dataclasses.asdict(session.score()))


@app.get("/thermal/report")
def get_thermal_report() -> ReportResponse:
    return ReportResponse(**dataclasses.asdict(session.report()))


@app.get("/goal")
def get_goal() -> GoalResponse:
    return GoalResponse(**dataclasses.asdict(session.goal_status()))
