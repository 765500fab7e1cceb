from typing import Dict, List
from pydantic import BaseModel, Field
from intersection_sim.domain.models import (
    Vehicle, TrafficLight, LightAxis, LightState, SimulationStats, SimulationConfig
)
from intersection_sim.domain import config

def initial_lights() -> Dict[LightAxis, TrafficLight]:
    # NS starts green; EW waits for the full NS green, yellow and clearance
    return {
        LightAxis.NS: TrafficLight(
            axis=LightAxis.NS,
            state=LightState.GREEN,
            duration=config.BASELINE_GREEN_TIME,
            timeLeft=config.BASELINE_GREEN_TIME,
        ),
        LightAxis.EW: TrafficLight(
            axis=LightAxis.EW,
            state=LightState.RED,
            duration=config.BASELINE_GREEN_TIME,
            timeLeft=config.BASELINE_GREEN_TIME + config.YELLOW_TIME + config.ALL_RED_TIME,
        ),
    }

class SimulationState(BaseModel):
    tick_id: int = 0
    time: float = 0.0
    seconds: int = 0
    config: SimulationConfig = Field(default_factory=SimulationConfig)
    vehicles: List[Vehicle] = []
    lights: Dict[LightAxis, TrafficLight] = Field(default_factory=initial_lights)
    stats: SimulationStats = Field(default_factory=SimulationStats)
