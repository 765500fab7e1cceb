import logging
import random
from typing import List, Optional
from intersection_sim.domain.geometry import IntersectionLayout
from intersection_sim.domain.models import Direction, Vehicle, VehicleKind
from intersection_sim.domain import config

logger = logging.getLogger(__name__)

DIRECTIONS = [Direction.NORTH, Direction.SOUTH, Direction.EAST, Direction.WEST]

class VehicleSpawner:
    def __init__(self, layout: IntersectionLayout, rng: random.Random):
        self.layout = layout
        self.rng = rng
        self.next_id = 0

    def try_spawn(self, vehicles: List[Vehicle], density: int, dt: float, now: float) -> Optional[Vehicle]:
        # Per-frame Bernoulli trial, so the expected rate is density/100 vehicles per second
        if self.rng.random() >= (density / 100.0) * dt:
            return None
        return self.spawn(vehicles, now)

    def spawn(self, vehicles: List[Vehicle], now: float,
              direction: Optional[Direction] = None,
              lane: Optional[int] = None,
              kind: Optional[VehicleKind] = None) -> Optional[Vehicle]:
        if len(vehicles) >= config.MAX_VEHICLES:
            return None

        vehicle = self.create_vehicle(now, direction, lane, kind)
        if self._entry_blocked(vehicles, vehicle):
            logger.debug("Entry %s/%d occupied, skipping spawn", vehicle.direction.value, vehicle.lane)
            return None

        vehicles.append(vehicle)
        return vehicle

    def create_vehicle(self, now: float,
                       direction: Optional[Direction] = None,
                       lane: Optional[int] = None,
                       kind: Optional[VehicleKind] = None) -> Vehicle:
        if direction is None:
            direction = self.rng.choice(DIRECTIONS)
        if kind is None:
            kind = self._pick_kind()
        if lane is None:
            lane = self.rng.randint(0, 1)

        vehicle_id = f"vehicle-{self.next_id}"
        self.next_id += 1

        return Vehicle(
            id=vehicle_id,
            type=kind,
            direction=direction,
            lane=lane,
            position=self.layout.spawn_position(direction, lane),
            speed=self.rng.uniform(config.MIN_SPEED, config.MAX_SPEED),
            waiting=False,
            created=now,
        )

    def _pick_kind(self) -> VehicleKind:
        if self.rng.random() < config.CAR_SHARE:
            return VehicleKind.CAR
        return VehicleKind.TRUCK if self.rng.random() < 0.5 else VehicleKind.BUS

    def _entry_blocked(self, vehicles: List[Vehicle], candidate: Vehicle) -> bool:
        start = self.layout.progress(candidate.direction, candidate.position)
        min_gap = candidate.length * config.FOLLOWING_FACTOR
        for v in vehicles:
            if v.direction != candidate.direction or v.lane != candidate.lane:
                continue
            if abs(self.layout.progress(v.direction, v.position) - start) < min_gap:
                return True
        return False
