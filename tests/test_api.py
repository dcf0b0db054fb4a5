import json
import math
import os
import shutil
import sys
import tempfile
import unittest

from fastapi.testclient import TestClient

sys.path.append(os.path.dirname(os.path.dirname(__file__)))
from rest_api import PlannerAPI


class APITestCase(unittest.TestCase):
    def setUp(self) -> None:
        self.tmpdir = tempfile.mkdtemp()
        self.data_path = os.path.join(self.tmpdir, "plan.json")
        self.settings_path = os.path.join(self.tmpdir, "settings.yaml")
        self.api = PlannerAPI(data_path=self.data_path, settings_path=self.settings_path)
        self.client = TestClient(self.api.app)

    def tearDown(self) -> None:
        shutil.rmtree(self.tmpdir)

    def _add_squat(self) -> None:
        response = self.client.post(
            "/exercises/strength",
            params={
                "name": "Squat",
                "sets": 4,
                "reps": 12,
                "seconds_per_rep": 2.5,
                "rest_time": 2.0,
                "equipment": "Barbell",
                "muscle_group": "Legs",
            },
        )
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json(), {"name": "Squat", "duration": 600.0})

    def test_health(self) -> None:
        response = self.client.get("/health")
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["status"], "ok")

    def test_full_workflow(self) -> None:
        self._add_squat()
        response = self.client.post(
            "/exercises/endurance", params={"name": "Run", "duration": 30.0}
        )
        self.assertEqual(response.json()["duration"], 1800.0)
        response = self.client.post(
            "/exercises/interval",
            params={"name": "Sprints", "time_on": 30, "time_off": 15, "repetitions": 10},
        )
        self.assertEqual(response.json()["duration"], 450.0)

        response = self.client.post(
            "/workouts", params={"name": "Leg Day", "exercises": "Squat|Sprints"}
        )
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["duration"], 1050.0)

        response = self.client.put("/schedule/0", params={"workout": "Leg Day"})
        self.assertEqual(response.json(), {"day": "Monday", "workout": "Leg Day"})

        schedule = self.client.get("/schedule").json()
        self.assertEqual(schedule[0], {"day": "Monday", "workout": "Leg Day"})
        self.assertEqual(schedule[1]["workout"], "Rest Day")

        metrics = self.client.get("/equipment/metrics").json()
        self.assertEqual(metrics["Barbell"]["totalSets"], 4.0)
        self.assertIn("Glutes", self.client.get("/muscles/metrics").json())
        groups = self.client.get("/muscle_groups/metrics").json()
        self.assertEqual(list(groups), ["Legs"])

        day = self.client.get("/schedule/0/metrics").json()
        self.assertEqual(day["totalDuration"], 1050.0)

        workout = self.client.get("/workouts/Leg Day").json()
        self.assertEqual(workout["exercises"], ["Squat", "Sprints"])
        self.assertEqual(self.client.get("/workouts").json(), ["Leg Day"])
        self.assertEqual(len(self.client.get("/exercises").json()), 3)

        response = self.client.delete("/schedule/0")
        self.assertEqual(response.json(), {"status": "cleared"})
        self.assertEqual(self.client.get("/equipment/metrics").json(), {})

        with open(self.data_path, "r", encoding="utf-8") as f:
            saved = json.load(f)
        self.assertEqual(len(saved["exercise_library"]["exercises"]), 3)

    def test_edit_workout_exercises(self) -> None:
        self._add_squat()
        self.client.post("/exercises/endurance", params={"name": "Run", "duration": 20})
        self.client.post("/workouts", params={"name": "Legs", "exercises": "Squat"})
        self.client.put("/schedule/2", params={"workout": "Legs"})

        response = self.client.post("/workouts/Legs/exercises", params={"exercise": "Run"})
        self.assertEqual(response.status_code, 200)
        response = self.client.post("/workouts/Legs/exercises", params={"exercise": "Run"})
        self.assertEqual(response.status_code, 400)
        self.assertIn("Treadmill", self.client.get("/equipment/metrics").json())

        response = self.client.delete("/workouts/Legs/exercises/Run")
        self.assertEqual(response.status_code, 200)
        response = self.client.delete("/workouts/Legs/exercises/Run")
        self.assertEqual(response.status_code, 404)

        response = self.client.delete("/workouts/Legs")
        self.assertEqual(response.status_code, 200)
        self.assertEqual(self.client.get("/schedule").json()[2]["workout"], "Rest Day")

    def test_errors(self) -> None:
        self._add_squat()
        response = self.client.post(
            "/exercises/endurance", params={"name": "Squat", "duration": 10}
        )
        self.assertEqual(response.status_code, 400)
        response = self.client.post(
            "/exercises/endurance",
            params={"name": "Swim", "duration": 10, "equipment": "Pool"},
        )
        self.assertEqual(response.status_code, 400)
        response = self.client.put("/schedule/0", params={"workout": "Missing"})
        self.assertEqual(response.status_code, 404)
        response = self.client.put("/schedule/9", params={"workout": "Missing"})
        self.assertEqual(response.status_code, 400)
        self.assertEqual(self.client.get("/workouts/Missing").status_code, 404)
        self.assertEqual(self.client.delete("/exercises/Missing").status_code, 404)
        self.assertEqual(self.client.get("/schedule/7/metrics").status_code, 400)

    def test_state_reloaded_from_data_file(self) -> None:
        self._add_squat()
        self.client.post("/workouts", params={"name": "Legs", "exercises": "Squat"})
        self.client.put("/schedule/4", params={"workout": "Legs"})

        other = PlannerAPI(data_path=self.data_path, settings_path=self.settings_path)
        client = TestClient(other.app)
        self.assertEqual(client.get("/schedule").json()[4]["workout"], "Legs")
        self.assertEqual(
            client.get("/equipment/metrics").json()["Barbell"]["totalSets"], 4.0
        )

    def test_maximal_exercises_serialize(self) -> None:
        for name in ("A", "B"):
            response = self.client.post(
                "/exercises/interval",
                params={
                    "name": name,
                    "time_on": 1e308,
                    "time_off": 1e308,
                    "repetitions": 1,
                    "equipment": "Treadmill",
                    "muscle_group": "Legs",
                },
            )
            self.assertEqual(response.status_code, 200)
        response = self.client.post("/workouts", params={"name": "Max", "exercises": "A|B"})
        self.assertEqual(response.status_code, 200)
        self.assertTrue(math.isfinite(response.json()["duration"]))
        self.assertEqual(self.client.put("/schedule/0", params={"workout": "Max"}).status_code, 200)

        for path in (
            "/workouts/Max",
            "/schedule/0/metrics",
            "/schedule/0/breakdown",
            "/equipment/metrics",
            "/muscles/metrics",
            "/muscle_groups/metrics",
        ):
            response = self.client.get(path)
            self.assertEqual(response.status_code, 200, path)
        metrics = self.client.get("/equipment/metrics").json()["Treadmill"]
        self.assertTrue(all(math.isfinite(v) for v in metrics.values()))

    def test_day_breakdown(self) -> None:
        self._add_squat()
        self.client.post("/workouts", params={"name": "Legs", "exercises": "Squat"})
        self.client.put("/schedule/3", params={"workout": "Legs"})
        breakdown = self.client.get("/schedule/3/breakdown").json()
        self.assertEqual(breakdown["equipment"]["Barbell"]["totalSets"], 4.0)
        self.assertIn("Hamstrings", breakdown["muscles"])
        self.assertEqual(self.client.get("/schedule/0/breakdown").json()["equipment"], {})
        self.assertEqual(self.client.get("/schedule/8/breakdown").status_code, 400)

    def test_catalog_listing(self) -> None:
        equipment = self.client.get("/equipment").json()
        self.assertEqual(len(equipment), 6)
        groups = self.client.get("/muscle_groups").json()
        self.assertIn("Quadriceps", groups["Legs"])


if __name__ == "__main__":
    unittest.main()
