import json
import logging
import sys
import time
from typing import Any, Dict, List, Optional

from intersection_sim.kernel.simulation_kernel import SimulationKernel
from intersection_sim.domain.models import AlgorithmType, SimulationConfig

logger = logging.getLogger(__name__)

# Fixed timing with optimization off is the baseline every strategy is compared to
SCENARIOS = [
    ("baseline", SimulationConfig(optimizationEnabled=False, algorithmType=AlgorithmType.FIXED)),
    ("fixed", SimulationConfig(optimizationEnabled=True, algorithmType=AlgorithmType.FIXED)),
    ("adaptive", SimulationConfig(optimizationEnabled=True, algorithmType=AlgorithmType.ADAPTIVE)),
    ("predictive", SimulationConfig(optimizationEnabled=True, algorithmType=AlgorithmType.PREDICTIVE)),
]

def run_scenario(sim_config: SimulationConfig, duration_seconds: int, seed: int) -> Dict[str, Any]:
    kernel = SimulationKernel(seed=seed, sim_config=sim_config)
    kernel.initialize()

    samples = []
    for second in range(duration_seconds):
        kernel.step(1.0)
        stats = kernel.get_stats()
        samples.append({
            "second": second + 1,
            "averageWaitTime": stats.averageWaitTime,
            "throughput": stats.throughput,
            "totalVehicles": stats.totalVehicles,
            "stoppedVehicles": stats.stoppedVehicles,
        })

    final = kernel.get_stats()
    return {
        "final": final.model_dump(),
        "completed": len(kernel.statistics.completions),
        "samples": samples,
    }

def run_headless_experiment(output_path: Optional[str] = None, duration_seconds: int = 300,
                            density: int = 40, seed: int = 42) -> List[Dict[str, Any]]:
    results = []

    start_time = time.time()
    for name, scenario in SCENARIOS:
        sim_config = scenario.model_copy(update={"density": density})
        outcome = run_scenario(sim_config, duration_seconds, seed)
        logger.info("%s: avg wait %.1fs, throughput %d/min",
                    name, outcome["final"]["averageWaitTime"], outcome["final"]["throughput"])
        results.append({"scenario": name, "config": sim_config.model_dump(mode="json"), **outcome})

    end_time = time.time()
    logger.info("Experiment finished in %.4fs", end_time - start_time)

    if output_path:
        with open(output_path, 'w') as f:
            json.dump(results, f, indent=2)
    return results

if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(asctime)s - %(levelname)s - %(message)s")
    if len(sys.argv) > 1:
        duration = int(sys.argv[2]) if len(sys.argv) > 2 else 300
        run_headless_experiment(sys.argv[1], duration_seconds=duration)
    else:
        print("Usage: python -m intersection_sim.experiments.run_experiment <output> [seconds]")
