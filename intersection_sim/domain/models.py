from enum import Enum
from typing import List, Optional
from pydantic import BaseModel, Field

from intersection_sim.domain import config

class VehicleKind(str, Enum):
    CAR = "car"
    TRUCK = "truck"
    BUS = "bus"

class Direction(str, Enum):
    NORTH = "north"
    SOUTH = "south"
    EAST = "east"
    WEST = "west"

class LightAxis(str, Enum):
    NS = "ns"
    EW = "ew"

class LightState(str, Enum):
    GREEN = "green"
    YELLOW = "yellow"
    RED = "red"

class AlgorithmType(str, Enum):
    FIXED = "fixed"
    ADAPTIVE = "adaptive"
    PREDICTIVE = "predictive"

def axis_of(direction: Direction) -> LightAxis:
    if direction in (Direction.NORTH, Direction.SOUTH):
        return LightAxis.NS
    return LightAxis.EW

def opposing(axis: LightAxis) -> LightAxis:
    return LightAxis.EW if axis == LightAxis.NS else LightAxis.NS

class Position(BaseModel):
    x: float
    y: float

class Vehicle(BaseModel):
    id: str  # e.g., "vehicle-12"
    type: VehicleKind
    direction: Direction
    lane: int = Field(ge=0, le=1)
    position: Position
    speed: float
    waiting: bool = False
    created: float  # Simulated seconds at spawn
    wait_started: Optional[float] = Field(default=None, exclude=True)
    total_wait: float = Field(default=0.0, exclude=True)  # Engine bookkeeping, kept out of snapshots

    @property
    def axis(self) -> LightAxis:
        return axis_of(self.direction)

    @property
    def length(self) -> float:
        return config.VEHICLE_LENGTHS[self.type.value]

class TrafficLight(BaseModel):
    axis: LightAxis
    state: LightState
    duration: float
    timeLeft: float
    countdown: float = 0.0

class SimulationStats(BaseModel):
    averageWaitTime: float = 0.0
    throughput: int = 0
    totalVehicles: int = 0
    stoppedVehicles: int = 0

class TrafficCounts(BaseModel):
    nsWaiting: int = 0
    ewWaiting: int = 0
    nsMoving: int = 0
    ewMoving: int = 0

    @classmethod
    def from_vehicles(cls, vehicles: List[Vehicle]) -> "TrafficCounts":
        counts = cls()
        for v in vehicles:
            if v.axis == LightAxis.NS:
                if v.waiting: counts.nsWaiting += 1
                else: counts.nsMoving += 1
            else:
                if v.waiting: counts.ewWaiting += 1
                else: counts.ewMoving += 1
        return counts

    def waiting(self, axis: LightAxis) -> int:
        return self.nsWaiting if axis == LightAxis.NS else self.ewWaiting

    def moving(self, axis: LightAxis) -> int:
        return self.nsMoving if axis == LightAxis.NS else self.ewMoving

# API/Response Models

class SimulationConfig(BaseModel):
    density: int = Field(default=40, ge=0, le=100)
    optimizationEnabled: bool = False
    algorithmType: AlgorithmType = AlgorithmType.ADAPTIVE
    isRunning: bool = True

class ConfigUpdate(BaseModel):
    density: Optional[int] = Field(default=None, ge=0, le=100)
    optimizationEnabled: Optional[bool] = None
    algorithmType: Optional[AlgorithmType] = None
    isRunning: Optional[bool] = None

class SpawnRequest(BaseModel):
    direction: Optional[Direction] = None
    lane: Optional[int] = Field(default=None, ge=0, le=1)
    type: Optional[VehicleKind] = None

class SimulationSnapshot(BaseModel):
    tick: int
    time: float
    config: SimulationConfig
    vehicles: List[Vehicle]
    lights: List[TrafficLight]
    stats: SimulationStats
