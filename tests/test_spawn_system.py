import random
import unittest
from intersection_sim.domain import config
from intersection_sim.domain.geometry import IntersectionLayout
from intersection_sim.domain.models import Direction, Position, VehicleKind
from intersection_sim.systems.spawn_system import VehicleSpawner

class FixedDraw(random.Random):
    """Random whose uniform draws always return the same value."""

    def __init__(self, value):
        super().__init__(0)
        self.value = value

    def random(self):
        return self.value

class TestVehicleSpawner(unittest.TestCase):
    def setUp(self):
        self.layout = IntersectionLayout()
        self.spawner = VehicleSpawner(self.layout, random.Random(42))

    def test_spawn_probability_scales_with_density_and_dt(self):
        # density 40 over a 0.05s frame is a 2% chance
        vehicles = []
        below = VehicleSpawner(self.layout, FixedDraw(0.019))
        self.assertIsNotNone(below.try_spawn(vehicles, 40, 0.05, 0.0))
        at = VehicleSpawner(self.layout, FixedDraw(0.02))
        self.assertIsNone(at.try_spawn(vehicles, 40, 0.05, 0.0))
        self.assertEqual(len(vehicles), 1)

    def test_zero_density_never_spawns(self):
        vehicles = []
        for i in range(2000):
            self.spawner.try_spawn(vehicles, 0, 0.05, i * 0.05)
        self.assertEqual(vehicles, [])

    def test_full_density_rate(self):
        spawned = 0
        for _ in range(4000):
            # fresh list each frame so the entry guard never interferes
            if self.spawner.try_spawn([], 100, 0.05, 0.0) is not None:
                spawned += 1
        self.assertGreater(spawned, 150)
        self.assertLess(spawned, 250)

    def test_new_vehicle_attributes(self):
        v = self.spawner.spawn([], 3.0, Direction.NORTH, 1, VehicleKind.CAR)
        self.assertEqual(v.position, Position(x=445, y=620))
        self.assertEqual(v.type, VehicleKind.CAR)
        self.assertFalse(v.waiting)
        self.assertEqual(v.created, 3.0)
        self.assertEqual(v.total_wait, 0.0)
        self.assertGreaterEqual(v.speed, config.MIN_SPEED)
        self.assertLessEqual(v.speed, config.MAX_SPEED)

    def test_kind_distribution(self):
        counts = {kind: 0 for kind in VehicleKind}
        for _ in range(5000):
            counts[self.spawner.create_vehicle(0.0).type] += 1
        self.assertAlmostEqual(counts[VehicleKind.CAR] / 5000, config.CAR_SHARE, delta=0.03)
        self.assertGreater(counts[VehicleKind.TRUCK], 0)
        self.assertGreater(counts[VehicleKind.BUS], 0)

    def test_occupied_entry_is_skipped(self):
        vehicles = []
        first = self.spawner.spawn(vehicles, 0.0, Direction.NORTH, 0, VehicleKind.CAR)
        self.assertIsNotNone(first)
        self.assertIsNone(self.spawner.spawn(vehicles, 0.0, Direction.NORTH, 0, VehicleKind.CAR))
        self.assertIsNotNone(self.spawner.spawn(vehicles, 0.0, Direction.NORTH, 1, VehicleKind.CAR))
        self.assertIsNotNone(self.spawner.spawn(vehicles, 0.0, Direction.SOUTH, 0, VehicleKind.CAR))
        self.assertEqual(len(vehicles), 3)

    def test_entry_frees_up_once_vehicle_moves_on(self):
        vehicles = []
        first = self.spawner.spawn(vehicles, 0.0, Direction.EAST, 0, VehicleKind.BUS)
        self.layout.advance(first, 2 * first.length)
        self.assertIsNotNone(self.spawner.spawn(vehicles, 1.0, Direction.EAST, 0, VehicleKind.BUS))

    def test_vehicle_cap(self):
        vehicles = [self.spawner.create_vehicle(0.0) for _ in range(config.MAX_VEHICLES)]
        self.assertIsNone(self.spawner.spawn(vehicles, 0.0, Direction.WEST, 0, VehicleKind.CAR))
        self.assertEqual(len(vehicles), config.MAX_VEHICLES)

    def test_ids_are_unique(self):
        vehicles = []
        ids = set()
        for i in range(500):
            v = self.spawner.try_spawn(vehicles, 100, 0.05, i * 0.05)
            if v is not None:
                self.assertNotIn(v.id, ids)
                ids.add(v.id)
            vehicles[:] = vehicles[-4:]
        self.assertGreater(len(ids), 0)

if __name__ == '__main__':
    unittest.main()
