import unittest
from intersection_sim.domain.models import Direction, Position, Vehicle, VehicleKind
from intersection_sim.systems.statistics import StatisticsAggregator

def vehicle(total_wait=0.0, waiting=False):
    return Vehicle(id="v", type=VehicleKind.CAR, direction=Direction.EAST, lane=0,
                   position=Position(x=0, y=315), speed=0.0 if waiting else 50.0,
                   waiting=waiting, created=0.0, total_wait=total_wait)

class TestStatisticsAggregator(unittest.TestCase):
    def setUp(self):
        self.stats = StatisticsAggregator()

    def test_empty_snapshot(self):
        snapshot = self.stats.snapshot([], 10.0)
        self.assertEqual(snapshot.averageWaitTime, 0.0)
        self.assertEqual(snapshot.throughput, 0)
        self.assertEqual(snapshot.totalVehicles, 0)
        self.assertEqual(snapshot.stoppedVehicles, 0)

    def test_throughput_window_slides(self):
        self.stats.record_completion(vehicle(), 0.0)
        self.stats.record_completion(vehicle(), 30.0)
        self.assertEqual(self.stats.snapshot([], 59.0).throughput, 2)
        self.assertEqual(self.stats.snapshot([], 61.0).throughput, 1)
        self.assertEqual(self.stats.snapshot([], 90.0).throughput, 0)

    def test_vehicles_that_never_waited_add_no_sample(self):
        self.stats.record_completion(vehicle(), 5.0)
        snapshot = self.stats.snapshot([], 5.0)
        self.assertEqual(snapshot.throughput, 1)
        self.assertEqual(snapshot.averageWaitTime, 0.0)
        self.assertEqual(len(self.stats.wait_samples), 0)

    def test_average_over_wait_samples(self):
        self.stats.record_completion(vehicle(total_wait=2.0), 5.0)
        self.stats.record_completion(vehicle(), 5.0)
        self.stats.record_completion(vehicle(total_wait=4.0), 6.0)
        self.assertAlmostEqual(self.stats.snapshot([], 6.0).averageWaitTime, 3.0)

    def test_only_latest_samples_are_kept(self):
        for i in range(150):
            self.stats.record_completion(vehicle(total_wait=1.0 if i < 50 else 3.0), float(i) / 10)
        self.assertEqual(len(self.stats.wait_samples), 100)
        self.assertAlmostEqual(self.stats.snapshot([], 15.0).averageWaitTime, 3.0)

    def test_live_counts(self):
        live = [vehicle(), vehicle(waiting=True), vehicle(waiting=True)]
        snapshot = self.stats.snapshot(live, 1.0)
        self.assertEqual(snapshot.totalVehicles, 3)
        self.assertEqual(snapshot.stoppedVehicles, 2)

    def test_reset(self):
        self.stats.record_completion(vehicle(total_wait=2.0), 1.0)
        self.stats.reset()
        self.assertEqual(self.stats.snapshot([], 1.0), StatisticsAggregator().snapshot([], 1.0))

if __name__ == '__main__':
    unittest.main()
