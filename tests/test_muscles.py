import os
import sys
import unittest

sys.path.append(os.path.dirname(os.path.dirname(__file__)))
from associator import METRIC_KEYS, empty_metrics
from muscles import Muscle, MuscleGroup


class MuscleGroupTestCase(unittest.TestCase):
    def setUp(self) -> None:
        self.chest = Muscle("Chest")
        self.triceps = Muscle("Triceps")
        self.push = MuscleGroup("Push", [self.chest, self.triceps])

    def test_fan_out_to_members(self) -> None:
        metrics = {"totalSets": 4.0, "totalReps": 40.0}
        self.assertTrue(self.push.register_muscles_for_metrics("Bench", "Monday", metrics))
        for entity in (self.push, self.chest, self.triceps):
            self.assertTrue(entity.contains_exercise("Bench", "Monday"))
            self.assertEqual(entity.get_aggregated_exercise_metrics()["totalSets"], 4.0)

    def test_unregister_fan_out(self) -> None:
        self.push.register_muscles_for_metrics("Bench", "Monday", {"totalSets": 4.0})
        self.assertTrue(self.push.unregister_muscles_from_metrics("Bench", "Monday"))
        for entity in (self.push, self.chest, self.triceps):
            self.assertEqual(entity.get_num_associated_exercises(), 0)
        self.assertFalse(self.push.unregister_muscles_from_metrics("Bench", "Monday"))

    def test_group_registry_is_independent(self) -> None:
        self.chest.register_exercise("Fly", "Monday", {"totalSets": 3.0})
        self.assertEqual(self.chest.get_num_associated_exercises(), 1)
        self.assertEqual(self.push.get_num_associated_exercises(), 0)
        self.assertEqual(self.push.get_group_metrics(), empty_metrics())

    def test_shared_muscle_between_groups(self) -> None:
        arms = MuscleGroup("Arms", [self.triceps])
        self.push.register_muscles_for_metrics("Bench", "Monday", {"totalSets": 4.0})
        arms.register_muscles_for_metrics("Dips", "Monday", {"totalSets": 3.0})
        self.assertEqual(self.triceps.get_num_associated_exercises(), 2)
        self.assertEqual(self.triceps.get_aggregated_exercise_metrics()["totalSets"], 7.0)
        self.assertEqual(self.push.get_group_metrics()["totalSets"], 4.0)

    def test_empty_group_metrics(self) -> None:
        group = MuscleGroup("Nothing", None)
        metrics = group.get_group_metrics()
        self.assertEqual(set(metrics), set(METRIC_KEYS))
        self.assertTrue(all(v == 0.0 for v in metrics.values()))
        self.assertFalse(group.register_muscles_for_metrics("X", "Monday", {}))
        self.assertEqual(group.get_muscles(), [])

    def test_none_arguments(self) -> None:
        self.assertFalse(self.push.register_muscles_for_metrics(None, "Monday", {}))
        self.assertFalse(self.push.register_muscles_for_metrics("Bench", None, {}))
        self.assertFalse(self.push.register_muscles_for_metrics("Bench", "Monday", None))
        self.assertEqual(self.chest.get_num_associated_exercises(), 0)

    def test_defaults_and_dedup(self) -> None:
        group = MuscleGroup(None, [self.chest, self.chest, None])
        self.assertEqual(group.name, "Unnamed MuscleGroup")
        self.assertEqual(group.get_muscles(), [self.chest])
        group.get_muscles().append(self.triceps)
        self.assertEqual(len(group.get_muscles()), 1)


if __name__ == "__main__":
    unittest.main()
