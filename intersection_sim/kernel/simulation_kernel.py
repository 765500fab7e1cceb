import logging
import math
import random
from typing import List, Optional

from intersection_sim.application.commands import Command
from intersection_sim.controllers.implementations import select_controller
from intersection_sim.domain.geometry import IntersectionLayout
from intersection_sim.domain.models import (
    Direction, SimulationConfig, SimulationSnapshot, SimulationStats, TrafficCounts, TrafficLight,
    Vehicle, VehicleKind, LightAxis
)
from intersection_sim.domain.state import SimulationState
from intersection_sim.domain import config
from intersection_sim.kernel.clock import SimulationClock
from intersection_sim.kernel.command_queue import CommandQueue
from intersection_sim.kernel.snapshot_builder import SnapshotBuilder
from intersection_sim.systems.signal_system import SignalSystem
from intersection_sim.systems.spawn_system import VehicleSpawner
from intersection_sim.systems.statistics import StatisticsAggregator
from intersection_sim.systems.vehicle_system import VehicleSystem

logger = logging.getLogger(__name__)

class SimulationKernel:
    """
    Owns the whole simulation: vehicles, the light pair, statistics windows
    and the random generator. `step()` is the only entry point that mutates it.

    Within every macro tick the passes run in a fixed order:
    spawn -> light transition -> motion -> statistics.
    """

    def __init__(self, seed: int = 42, sim_config: Optional[SimulationConfig] = None):
        self.seed = seed
        self.layout = IntersectionLayout()
        self.state = SimulationState(config=sim_config or SimulationConfig())
        self.command_queue = CommandQueue()
        self.clock = SimulationClock()
        self.signals = SignalSystem()
        self.statistics = StatisticsAggregator()
        self.snapshots = SnapshotBuilder()
        self.initialized = False

    def initialize(self, seed: Optional[int] = None):
        if seed is not None:
            self.seed = seed
        self.rng = random.Random(self.seed)
        self.spawner = VehicleSpawner(self.layout, self.rng)
        self.vehicle_system = VehicleSystem(self.layout, self.rng)

        self.clock.reset()
        self.statistics.reset()
        self.state = SimulationState(config=self.state.config)
        self.initialized = True
        logger.info("Simulation kernel initialized with seed %d", self.seed)

    def reset(self, seed: Optional[int] = None):
        self.initialize(seed)

    def queue_command(self, command: Command):
        self.command_queue.add(command)

    def step(self, dt: float):
        if dt < 0:
            raise ValueError(f"dt must be non-negative, got {dt}")
        if not self.initialized:
            self.initialize()

        # 1. Consume Commands (also while paused)
        commands = self.command_queue.pop_all()
        while commands:
            cmd = commands.popleft()
            cmd.execute(self)

        if not self.state.config.isRunning or dt == 0:
            return

        # 2. Integrate in frames no longer than FRAME_DT
        frames = max(1, math.ceil(dt / config.FRAME_DT - SimulationClock.EPSILON))
        frame_dt = dt / frames
        for _ in range(frames):
            self._run_frame(frame_dt)

    def run_for(self, seconds: float, dt: float = config.FRAME_DT):
        frames = int(round(seconds / dt))
        for _ in range(frames):
            self.step(dt)

    def _run_frame(self, dt: float):
        due = self.clock.tick(dt)
        now = self.clock.time
        self.state.time = now
        self.state.tick_id = self.clock.frame

        # A. Spawning
        self.spawner.try_spawn(self.state.vehicles, self.state.config.density, dt, now)

        # B. Signals
        for _ in range(due):
            self._second_tick()

        # C. Motion
        completed = self.vehicle_system.update(self.state.vehicles, self.state.lights, dt, now)
        for v in completed:
            self.statistics.record_completion(v, now)

        # D. Statistics
        if due:
            self.state.stats = self.statistics.snapshot(self.state.vehicles, now)

    def _second_tick(self):
        self.state.seconds += 1
        traffic = TrafficCounts.from_vehicles(self.state.vehicles)
        controller = select_controller(self.state.config)
        retune = self.state.seconds % config.OPTIMIZATION_INTERVAL == 0
        self.signals.second_tick(self.state.lights, traffic, controller, retune=retune)

    def spawn_vehicle(self, direction: Optional[Direction] = None, lane: Optional[int] = None,
                      kind: Optional[VehicleKind] = None) -> Optional[Vehicle]:
        if not self.initialized:
            self.initialize()
        return self.spawner.spawn(self.state.vehicles, self.clock.time, direction, lane, kind)

    # Getters for API
    def get_state(self) -> SimulationSnapshot:
        return self.snapshots.build(self.state)

    def get_stats(self) -> SimulationStats:
        return self.state.stats.model_copy()

    def get_lights(self) -> List[TrafficLight]:
        return [self.state.lights[axis].model_copy() for axis in (LightAxis.NS, LightAxis.EW)]

    def get_config(self) -> SimulationConfig:
        return self.state.config.model_copy()
