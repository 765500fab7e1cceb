import logging
import random
from typing import Dict, List, Optional, Tuple
from intersection_sim.domain.geometry import IntersectionLayout
from intersection_sim.domain.models import Direction, LightAxis, LightState, TrafficLight, Vehicle
from intersection_sim.domain import config

logger = logging.getLogger(__name__)

LaneKey = Tuple[Direction, int]

class VehicleSystem:
    """
    Moves vehicles one frame forward and decides who has to stop.

    Decisions are taken against positions captured before the pass, so the
    outcome does not depend on the order in which vehicles are visited.
    """

    def __init__(self, layout: IntersectionLayout, rng: random.Random):
        self.layout = layout
        self.rng = rng

    def update(self, vehicles: List[Vehicle], lights: Dict[LightAxis, TrafficLight],
               dt: float, now: float) -> List[Vehicle]:
        """Advance every vehicle and return the ones that left the map this frame."""
        lanes = self._lane_snapshot(vehicles)
        completed: List[Vehicle] = []

        for v in vehicles:
            blocked = self.blocked_by_light(v, lights[v.axis]) or self.vehicle_ahead(v, lanes) is not None
            self._apply_decision(v, blocked, now)

            if not v.waiting:
                self.layout.advance(v, v.speed * dt)
            self.layout.snap_to_lane(v)

            if self.layout.is_out_of_bounds(v.position):
                completed.append(v)

        for v in completed:
            vehicles.remove(v)
            logger.debug("%s left the map after %.1fs (waited %.1fs)", v.id, now - v.created, v.total_wait)
        return completed

    def _lane_snapshot(self, vehicles: List[Vehicle]) -> Dict[LaneKey, List[Tuple[float, str]]]:
        lanes: Dict[LaneKey, List[Tuple[float, str]]] = {}
        for v in vehicles:
            key = (v.direction, v.lane)
            if key not in lanes:
                lanes[key] = []
            lanes[key].append((self.layout.progress(v.direction, v.position), v.id))
        return lanes

    def can_pass(self, light: TrafficLight) -> bool:
        return light.state in [LightState.GREEN, LightState.YELLOW]

    def is_approaching(self, v: Vehicle) -> bool:
        distance = self.layout.distance_to_entry(v)
        return 0.0 <= distance <= config.APPROACH_ZONE and not self.layout.contains(v.position)

    def blocked_by_light(self, v: Vehicle, light: TrafficLight) -> bool:
        return not self.can_pass(light) and self.is_approaching(v)

    def vehicle_ahead(self, v: Vehicle, lanes: Dict[LaneKey, List[Tuple[float, str]]]) -> Optional[str]:
        """Id of the nearest same-lane vehicle ahead that is closer than the following gap."""
        own = self.layout.progress(v.direction, v.position)
        min_gap = v.length * config.FOLLOWING_FACTOR
        nearest_id = None
        nearest_gap = min_gap
        for progress, other_id in lanes.get((v.direction, v.lane), []):
            if other_id == v.id:
                continue
            gap = progress - own
            if 0 < gap < nearest_gap:
                nearest_gap = gap
                nearest_id = other_id
        return nearest_id

    def _apply_decision(self, v: Vehicle, blocked: bool, now: float):
        if blocked:
            if not v.waiting:
                v.waiting = True
                v.wait_started = now
            v.speed = 0.0
            return

        if v.waiting:
            elapsed = now - (v.wait_started if v.wait_started is not None else v.created)
            if elapsed >= config.WAIT_NOISE_THRESHOLD:
                v.total_wait += elapsed
            v.waiting = False
            v.wait_started = None
            v.speed = self.rng.uniform(config.MIN_SPEED, config.MAX_SPEED)
