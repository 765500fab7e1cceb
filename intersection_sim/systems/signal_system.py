import logging
from typing import Dict
from intersection_sim.controllers.base import SignalController
from intersection_sim.domain.models import LightAxis, LightState, TrafficCounts, TrafficLight, opposing
from intersection_sim.domain import config

logger = logging.getLogger(__name__)

class SignalSystem:
    """
    Two-axis traffic light state machine, advanced once per macro tick.

    Each light cycles GREEN -> YELLOW -> RED -> GREEN. When an axis leaves
    yellow, the opposing axis is given its next green length by the active
    controller and holds red for the all-red clearance before turning green.
    """

    def second_tick(self, lights: Dict[LightAxis, TrafficLight], traffic: TrafficCounts,
                    controller: SignalController, retune: bool = False):
        for light in lights.values():
            light.timeLeft = max(0.0, light.timeLeft - config.MACRO_TICK)

        for axis in (LightAxis.NS, LightAxis.EW):
            self._advance(lights[axis], lights[opposing(axis)], traffic, controller)

        if retune:
            self._retune_green(lights, traffic, controller)

        self._sync_red(lights)
        self.enforce_mutual_exclusion(lights)
        self._refresh_countdowns(lights)

    def _advance(self, light: TrafficLight, other: TrafficLight,
                 traffic: TrafficCounts, controller: SignalController):
        if light.timeLeft > 0:
            return

        if light.state == LightState.GREEN:
            light.state = LightState.YELLOW
            light.timeLeft = config.YELLOW_TIME
        elif light.state == LightState.YELLOW:
            light.state = LightState.RED
            other.duration = controller.next_green_duration(other.axis, traffic)
            other.timeLeft = config.ALL_RED_TIME
            light.timeLeft = config.ALL_RED_TIME + other.duration + config.YELLOW_TIME + config.ALL_RED_TIME
            logger.debug("%s turned red, %s gets %.0fs green", light.axis.value, other.axis.value, other.duration)
        elif light.state == LightState.RED and other.state == LightState.RED:
            light.state = LightState.GREEN
            light.timeLeft = light.duration

    def _retune_green(self, lights: Dict[LightAxis, TrafficLight], traffic: TrafficCounts,
                      controller: SignalController):
        for light in lights.values():
            if light.state != LightState.GREEN:
                continue
            new_duration = controller.retune(light.axis, light.duration, traffic)
            if new_duration == light.duration:
                continue
            logger.debug("Retuned %s green %.0fs -> %.0fs", light.axis.value, light.duration, new_duration)
            # Shift the running phase so the realized green follows the new duration
            light.timeLeft = max(1.0, light.timeLeft + (new_duration - light.duration))
            light.duration = new_duration

    def _sync_red(self, lights: Dict[LightAxis, TrafficLight]):
        # A red light facing an active axis waits for it to finish, yellow and clearance included
        for axis, light in lights.items():
            other = lights[opposing(axis)]
            if light.state != LightState.RED:
                continue
            if other.state == LightState.GREEN:
                light.timeLeft = other.timeLeft + config.YELLOW_TIME + config.ALL_RED_TIME
            elif other.state == LightState.YELLOW:
                light.timeLeft = other.timeLeft + config.ALL_RED_TIME

    def enforce_mutual_exclusion(self, lights: Dict[LightAxis, TrafficLight]) -> bool:
        ns = lights[LightAxis.NS]
        ew = lights[LightAxis.EW]
        if ns.state != LightState.GREEN or ew.state != LightState.GREEN:
            return False

        keep, drop = (ns, ew) if ns.timeLeft >= ew.timeLeft else (ew, ns)
        logger.warning("Both axes green; keeping %s and forcing %s to red", keep.axis.value, drop.axis.value)
        drop.state = LightState.RED
        drop.timeLeft = keep.timeLeft + config.YELLOW_TIME + config.ALL_RED_TIME
        return True

    def _refresh_countdowns(self, lights: Dict[LightAxis, TrafficLight]):
        for axis, light in lights.items():
            other = lights[opposing(axis)]
            if light.state == LightState.RED and other.state != LightState.GREEN:
                light.countdown = light.timeLeft
            else:
                light.countdown = 0.0
