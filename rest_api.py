from typing import Optional

from fastapi import APIRouter, FastAPI, HTTPException
from loguru import logger

from catalog import Catalog
from config import APP_VERSION
from planner_service import PlannerService
from schedule import day_name
from settings_schema import load_settings


class PlannerAPI:
    """FastAPI front end over a :class:`PlannerService`.

    When ``data_path`` is set the plan is loaded from it on start-up and
    written back after every change.
    """

    def __init__(
        self,
        data_path: Optional[str] = None,
        settings_path: Optional[str] = None,
    ) -> None:
        self.settings = load_settings(settings_path)
        self.data_path = data_path or self.settings.data_path
        self.service = PlannerService(catalog=Catalog())
        self.service.load(self.data_path)
        self.app = FastAPI(title="Workout Planner API", version=APP_VERSION)
        self._setup_routes()

    def _persist(self) -> None:
        self.service.save(self.data_path)

    @staticmethod
    def _error(e: ValueError) -> HTTPException:
        status = 404 if "not found" in str(e) else 400
        return HTTPException(status_code=status, detail=str(e))

    def _setup_routes(self) -> None:
        equipment_router = APIRouter(prefix="/equipment", tags=["Equipment"])
        muscles_router = APIRouter(prefix="/muscles", tags=["Muscles"])
        muscle_groups_router = APIRouter(
            prefix="/muscle_groups", tags=["Muscle Groups"]
        )
        exercises_router = APIRouter(prefix="/exercises", tags=["Exercises"])
        workouts_router = APIRouter(prefix="/workouts", tags=["Workouts"])
        schedule_router = APIRouter(prefix="/schedule", tags=["Schedule"])

        @self.app.get(
            "/health",
            summary="Health check",
            description="Verify the API is up and report the data file.",
        )
        def health():
            return {"status": "ok", "data_path": self.data_path}

        @equipment_router.get("")
        def list_equipment():
            return [
                {
                    "name": eq.name,
                    "type": eq.equipment_type,
                    "weight_based": eq.is_weight_based(),
                }
                for eq in self.service.catalog.get_all_equipment().values()
            ]

        @equipment_router.get("/metrics")
        def equipment_metrics(include_empty: bool = False):
            return self.service.equipment_metrics(include_empty)

        @muscles_router.get("/metrics")
        def muscle_metrics(include_empty: bool = False):
            return self.service.muscle_metrics(include_empty)

        @muscle_groups_router.get("")
        def list_muscle_groups():
            return {
                name: [m.name for m in group.get_muscles()]
                for name, group in self.service.catalog.get_all_muscle_groups().items()
            }

        @muscle_groups_router.get("/metrics")
        def muscle_group_metrics(include_empty: bool = False):
            return self.service.muscle_group_metrics(include_empty)

        @exercises_router.get("")
        def list_exercises():
            return self.service.list_exercises()

        @exercises_router.post("/strength")
        def add_strength_exercise(
            name: str,
            sets: int,
            reps: int,
            seconds_per_rep: float,
            rest_time: float,
            equipment: str = None,
            muscle_group: str = None,
        ):
            try:
                ex = self.service.create_strength_exercise(
                    name, sets, reps, seconds_per_rep, rest_time, equipment, muscle_group
                )
            except ValueError as e:
                raise self._error(e)
            self._persist()
            return {"name": ex.name, "duration": ex.get_duration()}

        @exercises_router.post("/endurance")
        def add_endurance_exercise(
            name: str,
            duration: float,
            equipment: str = None,
            muscle_group: str = None,
        ):
            try:
                ex = self.service.create_endurance_exercise(
                    name, duration, equipment, muscle_group
                )
            except ValueError as e:
                raise self._error(e)
            self._persist()
            return {"name": ex.name, "duration": ex.get_duration()}

        @exercises_router.post("/interval")
        def add_interval_exercise(
            name: str,
            time_on: float,
            time_off: float,
            repetitions: int,
            equipment: str = None,
            muscle_group: str = None,
        ):
            try:
                ex = self.service.create_interval_exercise(
                    name, time_on, time_off, repetitions, equipment, muscle_group
                )
            except ValueError as e:
                raise self._error(e)
            self._persist()
            return {"name": ex.name, "duration": ex.get_duration()}

        @exercises_router.delete("/{name}")
        def delete_exercise(name: str):
            try:
                self.service.delete_exercise(name)
            except ValueError as e:
                raise self._error(e)
            self._persist()
            return {"status": "deleted"}

        @workouts_router.get("")
        def list_workouts():
            return [p.name for p in self.service.workouts.get_all_workouts()]

        @workouts_router.post("")
        def add_workout(name: str, exercises: str = ""):
            names = [n for n in exercises.split("|") if n]
            try:
                workout = self.service.create_workout(name, names)
            except ValueError as e:
                raise self._error(e)
            self._persist()
            return {"name": workout.name, "duration": workout.get_duration()}

        @workouts_router.post("/rest_days")
        def add_rest_day(name: str):
            try:
                self.service.create_rest_day(name)
            except ValueError as e:
                raise self._error(e)
            self._persist()
            return {"status": "added"}

        @workouts_router.get("/{name}")
        def get_workout(name: str):
            try:
                return self.service.describe_workout(name)
            except ValueError as e:
                raise self._error(e)

        @workouts_router.delete("/{name}")
        def delete_workout(name: str):
            try:
                self.service.delete_workout(name)
            except ValueError as e:
                raise self._error(e)
            self._persist()
            return {"status": "deleted"}

        @workouts_router.post("/{name}/exercises")
        def add_workout_exercise(name: str, exercise: str):
            try:
                added = self.service.add_exercise_to_workout(name, exercise)
            except ValueError as e:
                raise self._error(e)
            if not added:
                raise HTTPException(status_code=400, detail="exercise exists")
            self._persist()
            return {"status": "added"}

        @workouts_router.delete("/{name}/exercises/{exercise}")
        def remove_workout_exercise(name: str, exercise: str):
            try:
                removed = self.service.remove_exercise_from_workout(name, exercise)
            except ValueError as e:
                raise self._error(e)
            if not removed:
                raise HTTPException(status_code=404, detail="exercise not found")
            self._persist()
            return {"status": "removed"}

        @schedule_router.get("")
        def get_schedule():
            return [
                {"day": day_name(day), "workout": plan.name}
                for day, plan in enumerate(self.service.schedule.get_weekly_schedule())
            ]

        @schedule_router.get("/summary")
        def get_week_summary():
            return {"summary": self.service.week_summary()}

        @schedule_router.get("/{day}/metrics")
        def get_day_metrics(day: int):
            try:
                return self.service.day_metrics(day)
            except ValueError as e:
                raise self._error(e)

        @schedule_router.get("/{day}/breakdown")
        def get_day_breakdown(day: int):
            try:
                return self.service.day_breakdown(day)
            except ValueError as e:
                raise self._error(e)

        @schedule_router.put("/{day}")
        def schedule_workout(day: int, workout: str):
            try:
                plan = self.service.schedule_workout(day, workout)
            except ValueError as e:
                raise self._error(e)
            self._persist()
            return {"day": day_name(day), "workout": plan.name}

        @schedule_router.delete("/{day}")
        def clear_day(day: int):
            try:
                self.service.clear_day(day)
            except ValueError as e:
                raise self._error(e)
            self._persist()
            return {"status": "cleared"}

        self.app.include_router(equipment_router)
        self.app.include_router(muscles_router)
        self.app.include_router(muscle_groups_router)
        self.app.include_router(exercises_router)
        self.app.include_router(workouts_router)
        self.app.include_router(schedule_router)
        logger.debug("routes registered for data file {}", self.data_path)


api = PlannerAPI()
app = api.app

if __name__ == "__main__":
    import uvicorn

    from logger_setup import setup_logger

    setup_logger(api.settings.log_level, api.settings.log_file)
    uvicorn.run(app)
