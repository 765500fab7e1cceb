from collections import deque
from typing import Deque, List
from intersection_sim.domain.models import SimulationStats, Vehicle
from intersection_sim.domain import config

class StatisticsAggregator:
    """Sliding windows of completed waits and completions, summarized once per macro tick."""

    def __init__(self, wait_window: int = config.WAIT_SAMPLE_WINDOW,
                 throughput_window: float = config.THROUGHPUT_WINDOW):
        self.wait_samples: Deque[float] = deque(maxlen=wait_window)
        self.completions: Deque[float] = deque()
        self.throughput_window = throughput_window

    def record_completion(self, vehicle: Vehicle, now: float):
        self.completions.append(now)
        if vehicle.total_wait > 0:
            self.wait_samples.append(vehicle.total_wait)

    def prune(self, now: float):
        cutoff = now - self.throughput_window
        while self.completions and self.completions[0] <= cutoff:
            self.completions.popleft()

    def snapshot(self, vehicles: List[Vehicle], now: float) -> SimulationStats:
        self.prune(now)
        average = sum(self.wait_samples) / len(self.wait_samples) if self.wait_samples else 0.0
        return SimulationStats(
            averageWaitTime=average,
            throughput=len(self.completions),
            totalVehicles=len(vehicles),
            stoppedVehicles=sum(1 for v in vehicles if v.waiting),
        )

    def reset(self):
        self.wait_samples.clear()
        self.completions.clear()
