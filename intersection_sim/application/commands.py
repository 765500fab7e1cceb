import logging
from abc import ABC, abstractmethod
from typing import Any, Optional
from intersection_sim.domain.models import ConfigUpdate, Direction, VehicleKind

logger = logging.getLogger(__name__)

class Command(ABC):
    @abstractmethod
    def execute(self, kernel: Any):
        pass

class UpdateConfigCommand(Command):
    def __init__(self, updates: ConfigUpdate):
        self.updates = updates

    def execute(self, kernel: Any):
        current = kernel.state.config
        changes = self.updates.model_dump(exclude_none=True)
        kernel.state.config = current.model_copy(update=changes)
        logger.info("Configuration updated: %s", changes)
        return kernel.state.config

class SetRunningCommand(Command):
    def __init__(self, running: bool):
        self.running = running

    def execute(self, kernel: Any):
        kernel.state.config.isRunning = self.running
        logger.info("Simulation %s", "resumed" if self.running else "paused")

class ResetCommand(Command):
    def __init__(self, seed: Optional[int] = None):
        self.seed = seed

    def execute(self, kernel: Any):
        kernel.reset(seed=self.seed)

class SpawnVehicleCommand(Command):
    def __init__(self, direction: Optional[Direction] = None, lane: Optional[int] = None,
                 kind: Optional[VehicleKind] = None):
        self.direction = direction
        self.lane = lane
        self.kind = kind

    def execute(self, kernel: Any):
        # Force a spawn attempt, bypassing the density trial
        return kernel.spawn_vehicle(self.direction, self.lane, self.kind)
