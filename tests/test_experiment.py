import json
import os
import tempfile
import unittest
from intersection_sim.experiments.run_experiment import SCENARIOS, run_headless_experiment

class TestHeadlessExperiment(unittest.TestCase):
    def test_short_run_writes_results(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = os.path.join(tmp, "results.json")
            results = run_headless_experiment(path, duration_seconds=30, density=60, seed=5)

            with open(path) as f:
                written = json.load(f)

        self.assertEqual(written, results)
        self.assertEqual([r["scenario"] for r in results], [name for name, _ in SCENARIOS])
        for result in results:
            self.assertEqual(len(result["samples"]), 30)
            self.assertEqual(result["samples"][-1]["second"], 30)
            self.assertEqual(result["config"]["density"], 60)

        # Fixed timing is what the engine runs with optimization switched off
        by_name = {r["scenario"]: r for r in results}
        self.assertEqual(by_name["baseline"]["final"], by_name["fixed"]["final"])

    def test_scenarios_are_not_mutated(self):
        run_headless_experiment(duration_seconds=1, density=90)
        for _, scenario in SCENARIOS:
            self.assertEqual(scenario.density, 40)

if __name__ == '__main__':
    unittest.main()
