from __future__ import annotations

from typing import Dict, Iterable, List, Optional

from loguru import logger

from associator import ExerciseAssociator
from catalog import Catalog, catalog as default_catalog
from equipment import Equipment
from exercises import (
    EnduranceExercise,
    Exercise,
    ExerciseLibrary,
    IntervalExercise,
    StrengthExercise,
)
from muscles import MuscleGroup
from persistence import JsonStore, load_planner, save_planner
from schedule import DAY_NAMES, WeeklySchedule, day_name
from workouts import RestDay, Workout, WorkoutLibrary, WorkoutPlan


class PlannerService:
    """Coordinates the libraries, the schedule and the shared catalog.

    Every edit to a workout that may already be scheduled is bracketed by
    deactivation and reactivation on its scheduled days so that the
    per-day metrics always match the plans on the schedule.
    """

    def __init__(
        self,
        catalog: Catalog | None = None,
        exercises: ExerciseLibrary | None = None,
        workouts: WorkoutLibrary | None = None,
        schedule: WeeklySchedule | None = None,
    ) -> None:
        self.catalog = catalog or default_catalog
        self.exercises = exercises or ExerciseLibrary()
        self.workouts = workouts or WorkoutLibrary()
        self.schedule = schedule or WeeklySchedule()

    # -- lookups -----------------------------------------------------------

    def _equipment(self, name: Optional[str]) -> Optional[Equipment]:
        if name is None:
            return None
        equipment = self.catalog.find_equipment(name)
        if equipment is None:
            raise ValueError(f"unknown equipment: {name}")
        return equipment

    def _muscle_group(self, name: Optional[str]) -> Optional[MuscleGroup]:
        if name is None:
            return None
        group = self.catalog.find_muscle_group(name)
        if group is None:
            raise ValueError(f"unknown muscle group: {name}")
        return group

    def _exercise(self, name: str) -> Exercise:
        exercise = self.exercises.get_exercise(name)
        if exercise is None:
            raise ValueError(f"exercise not found: {name}")
        return exercise

    def _add(self, exercise: Exercise) -> Exercise:
        if not self.exercises.add_exercise(exercise):
            raise ValueError(f"exercise exists: {exercise.name}")
        return exercise

    # -- exercises ---------------------------------------------------------

    def create_strength_exercise(
        self,
        name: str,
        sets: int,
        reps: int,
        seconds_per_rep: float,
        rest_time: float,
        equipment: str | None = None,
        muscle_group: str | None = None,
    ) -> StrengthExercise:
        return self._add(
            StrengthExercise(
                name,
                sets,
                reps,
                seconds_per_rep,
                rest_time,
                self._equipment(equipment),
                self._muscle_group(muscle_group),
            )
        )

    def create_endurance_exercise(
        self,
        name: str,
        duration: float,
        equipment: str | None = None,
        muscle_group: str | None = None,
    ) -> EnduranceExercise:
        return self._add(
            EnduranceExercise(
                name,
                duration,
                self._equipment(equipment),
                self._muscle_group(muscle_group),
            )
        )

    def create_interval_exercise(
        self,
        name: str,
        time_on: float,
        time_off: float,
        repetitions: int,
        equipment: str | None = None,
        muscle_group: str | None = None,
    ) -> IntervalExercise:
        return self._add(
            IntervalExercise(
                name,
                time_on,
                time_off,
                repetitions,
                self._equipment(equipment),
                self._muscle_group(muscle_group),
            )
        )

    def delete_exercise(self, name: str) -> None:
        """Remove an exercise from every workout and then from the library."""
        self._exercise(name)
        for plan in self.workouts.get_all_workouts():
            if isinstance(plan, Workout) and plan.contains_exercise(name):
                self._edit_workout(plan, lambda w: w.remove_exercise(name))
        self.exercises.remove_exercise(name)
        logger.info("exercise {!r} deleted", name)

    # -- workouts ----------------------------------------------------------

    def create_workout(self, name: str, exercise_names: Iterable[str]) -> Workout:
        members = [self._exercise(n) for n in exercise_names]
        workout = Workout(name, members)
        self.workouts.add_workout(workout)
        return workout

    def create_rest_day(self, name: str) -> RestDay:
        rest_day = RestDay(name)
        self.workouts.add_workout(rest_day)
        return rest_day

    def _workout(self, name: str) -> Workout:
        plan = self.workouts.get_workout(name)
        if not isinstance(plan, Workout):
            raise ValueError(f"not a workout: {name}")
        return plan

    def _edit_workout(self, workout: Workout, edit) -> bool:
        days = self.schedule.days_for_plan(workout)
        for day in days:
            workout.deactivate_metrics(DAY_NAMES[day])
        try:
            changed = edit(workout)
        finally:
            for day in days:
                workout.activate_metrics(DAY_NAMES[day])
        return changed

    def add_exercise_to_workout(self, workout_name: str, exercise_name: str) -> bool:
        workout = self._workout(workout_name)
        exercise = self._exercise(exercise_name)
        return self._edit_workout(workout, lambda w: w.add_exercise(exercise))

    def remove_exercise_from_workout(
        self, workout_name: str, exercise_name: str
    ) -> bool:
        workout = self._workout(workout_name)
        return self._edit_workout(workout, lambda w: w.remove_exercise(exercise_name))

    def delete_workout(self, name: str) -> None:
        """Clear every day holding the plan, then drop it from the library."""
        plan = self.workouts.get_workout(name)
        for day in self.schedule.days_for_plan(plan):
            self.schedule.clear_schedule_for_day(day)
        self.workouts.remove_workout(name)
        logger.info("workout {!r} deleted", name)

    # -- schedule ----------------------------------------------------------

    def schedule_workout(self, day: int, workout_name: str) -> WorkoutPlan:
        day_name(day)
        plan = self.workouts.get_workout(workout_name)
        self.schedule.set_schedule_for_day(day, plan)
        return plan

    def clear_day(self, day: int) -> None:
        self.schedule.clear_schedule_for_day(day)

    def week_summary(self) -> str:
        return self.schedule.get_week_summary()

    def day_metrics(self, day: int) -> Dict[str, float]:
        return self.schedule.get_schedule_for_day(day).get_workout_summary()

    def day_breakdown(self, day: int) -> Dict[str, Dict[str, Dict[str, float]]]:
        """Per-entity metrics attributed to one day's context."""
        context = day_name(day)

        def per_context(entities: Dict[str, ExerciseAssociator]):
            return {
                name: entity.get_metrics_for_context(context)
                for name, entity in entities.items()
                if any(ctx == context for _, ctx in entity.get_associated_exercises())
            }

        return {
            "equipment": per_context(self.catalog.get_all_equipment()),
            "muscles": per_context(self.catalog.get_all_muscles()),
            "muscle_groups": per_context(self.catalog.get_all_muscle_groups()),
        }

    # -- reports -----------------------------------------------------------

    @staticmethod
    def _report(
        entities: Dict[str, ExerciseAssociator], include_empty: bool
    ) -> Dict[str, Dict[str, float]]:
        return {
            name: entity.get_aggregated_exercise_metrics()
            for name, entity in entities.items()
            if include_empty or entity.get_num_associated_exercises() > 0
        }

    def equipment_metrics(self, include_empty: bool = False) -> Dict[str, Dict[str, float]]:
        return self._report(self.catalog.get_all_equipment(), include_empty)

    def muscle_metrics(self, include_empty: bool = False) -> Dict[str, Dict[str, float]]:
        return self._report(self.catalog.get_all_muscles(), include_empty)

    def muscle_group_metrics(self, include_empty: bool = False) -> Dict[str, Dict[str, float]]:
        return self._report(self.catalog.get_all_muscle_groups(), include_empty)

    def list_exercises(self) -> List[Dict]:
        return [
            {
                "name": ex.name,
                "type": ex.exercise_type(),
                "equipment": ex.equipment.name if ex.equipment else None,
                "muscle_group": ex.muscle_group.name if ex.muscle_group else None,
                "duration": ex.get_duration(),
                "info": ex.get_info(),
            }
            for ex in self.exercises.get_all_exercises().values()
        ]

    def describe_workout(self, name: str) -> Dict:
        plan = self.workouts.get_workout(name)
        return {
            "name": plan.name,
            "type": "RestDay" if isinstance(plan, RestDay) else "Workout",
            "exercises": [ex.name for ex in plan.get_exercises()],
            "duration": plan.get_duration(),
            "summary": plan.get_workout_summary(),
        }

    # -- persistence -------------------------------------------------------

    def save(self, path: str) -> None:
        save_planner(JsonStore(path), self.exercises, self.workouts, self.schedule)

    def load(self, path: str) -> None:
        """Replace the current state with the contents of ``path``.

        The current schedule is cleared first so no metrics from the old
        state stay attributed to any day.
        """
        self.schedule.clear_all()
        self.catalog.reset_metrics()
        self.exercises, self.workouts, self.schedule = load_planner(
            JsonStore(path), self.catalog
        )
