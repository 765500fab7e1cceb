from intersection_sim.domain import config

class SimulationClock:
    """
    Simulated time in two cadences: the continuous frame delta and a
    fixed macro tick (one simulated second by default).
    """
    EPSILON = 1e-9

    def __init__(self, macro_tick: float = config.MACRO_TICK):
        self.macro_tick = macro_tick
        self.reset()

    def reset(self):
        self.time = 0.0
        self.frame = 0
        self._accumulator = 0.0

    def tick(self, dt: float) -> int:
        """Advance by one frame; returns how many macro ticks fell due within it."""
        self.time += dt
        self.frame += 1
        self._accumulator += dt

        due = 0
        # Summed frame deltas drift a little below whole seconds
        while self._accumulator >= self.macro_tick - self.EPSILON:
            self._accumulator -= self.macro_tick
            due += 1
        return due
