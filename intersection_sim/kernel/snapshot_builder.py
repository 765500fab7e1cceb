from intersection_sim.domain.models import LightAxis, SimulationSnapshot
from intersection_sim.domain.state import SimulationState

class SnapshotBuilder:
    def build(self, state: SimulationState) -> SimulationSnapshot:
        # Deep copies, so a snapshot handed to a renderer never changes under it
        return SimulationSnapshot(
            tick=state.tick_id,
            time=state.time,
            config=state.config.model_copy(),
            vehicles=[v.model_copy(deep=True) for v in state.vehicles],
            lights=[state.lights[axis].model_copy() for axis in (LightAxis.NS, LightAxis.EW)],
            stats=state.stats.model_copy(),
        )
