from abc import ABC, abstractmethod
from typing import Optional
from intersection_sim.domain.models import LightAxis, TrafficCounts
from intersection_sim.domain import config

class SignalController(ABC):
    """
    Timing strategy for the two-axis signal.

    A controller never touches light state. It only answers two questions:
    how long the next green of an axis should be, and how the green that
    is currently running should be retuned.
    """
    baseline: float = config.BASELINE_GREEN_TIME
    min_green: float = config.BASELINE_GREEN_TIME
    max_green: float = config.BASELINE_GREEN_TIME
    shorten_ratio: float = 1.0
    extend_ratio: float = 1.0
    shorten_step: float = 0.0
    extend_step: float = 0.0

    @abstractmethod
    def pressure_ratio(self, axis: LightAxis, traffic: TrafficCounts) -> Optional[float]:
        """Demand on `axis` relative to the opposing axis, or None when undefined."""

    def clamp(self, duration: float) -> float:
        return max(self.min_green, min(self.max_green, float(round(duration))))

    def next_green_duration(self, axis: LightAxis, traffic: TrafficCounts) -> float:
        ratio = self.pressure_ratio(axis, traffic)
        if ratio is None:
            return self.clamp(self.baseline)
        if ratio < self.shorten_ratio or ratio > self.extend_ratio:
            return self.clamp(self.baseline * ratio)
        return self.clamp(self.baseline)

    def retune(self, axis: LightAxis, current: float, traffic: TrafficCounts) -> float:
        ratio = self.pressure_ratio(axis, traffic)
        if ratio is None:
            return self.clamp(current)
        if ratio < self.shorten_ratio:
            return self.clamp(current - self.shorten_step)
        if ratio > self.extend_ratio:
            return self.clamp(current + self.extend_step)
        return self.clamp(current)
