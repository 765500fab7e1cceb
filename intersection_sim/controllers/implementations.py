from typing import Dict, Optional
from intersection_sim.controllers.base import SignalController
from intersection_sim.domain.models import AlgorithmType, LightAxis, SimulationConfig, TrafficCounts, opposing
from intersection_sim.domain import config

def _ratio(own: float, other: float) -> Optional[float]:
    # No demand on the other axis means no pressure to rebalance
    if other <= 0:
        return None
    return own / other

class FixedController(SignalController):
    def pressure_ratio(self, axis: LightAxis, traffic: TrafficCounts) -> Optional[float]:
        return None

class AdaptiveController(SignalController):
    min_green = config.ADAPTIVE_MIN_GREEN
    max_green = config.ADAPTIVE_MAX_GREEN
    shorten_ratio = config.ADAPTIVE_SHORTEN_RATIO
    extend_ratio = config.ADAPTIVE_EXTEND_RATIO
    shorten_step = config.ADAPTIVE_SHORTEN_STEP
    extend_step = config.ADAPTIVE_EXTEND_STEP

    def pressure_ratio(self, axis: LightAxis, traffic: TrafficCounts) -> Optional[float]:
        return _ratio(traffic.waiting(axis), traffic.waiting(opposing(axis)))

class PredictiveController(SignalController):
    min_green = config.PREDICTIVE_MIN_GREEN
    max_green = config.PREDICTIVE_MAX_GREEN
    shorten_ratio = config.PREDICTIVE_SHORTEN_RATIO
    extend_ratio = config.PREDICTIVE_EXTEND_RATIO
    shorten_step = config.PREDICTIVE_SHORTEN_STEP
    extend_step = config.PREDICTIVE_EXTEND_STEP

    @staticmethod
    def traffic_score(axis: LightAxis, traffic: TrafficCounts) -> float:
        # Vehicles still in motion are expected demand, weighted below queued ones
        return (traffic.waiting(axis) * config.PREDICTIVE_WAITING_WEIGHT +
                traffic.moving(axis) * config.PREDICTIVE_MOVING_WEIGHT)

    def pressure_ratio(self, axis: LightAxis, traffic: TrafficCounts) -> Optional[float]:
        return _ratio(self.traffic_score(axis, traffic), self.traffic_score(opposing(axis), traffic))

CONTROLLERS: Dict[AlgorithmType, SignalController] = {
    AlgorithmType.FIXED: FixedController(),
    AlgorithmType.ADAPTIVE: AdaptiveController(),
    AlgorithmType.PREDICTIVE: PredictiveController(),
}

def select_controller(sim_config: SimulationConfig) -> SignalController:
    if not sim_config.optimizationEnabled:
        return CONTROLLERS[AlgorithmType.FIXED]
    return CONTROLLERS[sim_config.algorithmType]
