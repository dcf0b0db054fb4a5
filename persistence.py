"""JSON persistence for the exercise library, workout library and schedule.

Loading is lenient: malformed entries are skipped (or defaulted) with a
warning rather than aborting the whole load. Sections must be restored in
order, exercises first, then workouts, then the schedule, because each stage
resolves names against the objects rebuilt by the previous one.
"""

from __future__ import annotations

import json
import os
from typing import Any, Dict, Optional, Tuple

from loguru import logger

from catalog import Catalog
from exercises import (
    ENDURANCE,
    EXERCISE_KINDS,
    INTERVAL,
    STRENGTH,
    EnduranceExercise,
    Exercise,
    ExerciseLibrary,
    IntervalExercise,
    StrengthExercise,
)
from schedule import DAY_NAMES, WeeklySchedule
from tools import MathTools
from workouts import REST_DAY_NAME, RestDay, Workout, WorkoutLibrary, WorkoutPlan

DEFAULT_SAVE_PATH = "./data/workout-data.json"
DEFAULT_EQUIPMENT = "Bodyweight"

EXERCISE_SECTION = "exercise_library"
WORKOUT_SECTION = "workout_library"
SCHEDULE_SECTION = "weekly_schedule"

WORKOUT_TYPE = "Workout"
REST_DAY_TYPE = "RestDay"


class PersistenceError(RuntimeError):
    """Raised when a save file cannot be written, read or parsed."""


def _info_value(info: Dict[str, Any], key: str, default: float) -> float:
    return MathTools.as_number(info.get(key, default), default)


def exercise_to_json(exercise: Exercise) -> Dict[str, Any]:
    return {
        "name": exercise.name,
        "type": exercise.exercise_type(),
        "equipment": exercise.equipment.name if exercise.equipment else None,
        "muscle_group": exercise.muscle_group.name if exercise.muscle_group else None,
        "info": exercise.get_info(),
    }


def exercise_from_json(entry: Dict[str, Any], catalog: Catalog) -> Optional[Exercise]:
    """Rebuild one exercise, or return ``None`` when its type is unusable."""
    kind = entry.get("type")
    if kind not in EXERCISE_KINDS:
        logger.warning("skipping exercise with unknown type {!r}", kind)
        return None
    name = entry.get("name")
    if not isinstance(name, str):
        name = None
    equipment = catalog.find_equipment(entry.get("equipment"))
    if equipment is None:
        equipment = catalog.find_equipment(DEFAULT_EQUIPMENT)
    muscle_group = catalog.find_muscle_group(entry.get("muscle_group"))
    info = entry.get("info")
    if not isinstance(info, dict):
        info = {}

    if kind == STRENGTH:
        return StrengthExercise(
            name,
            _info_value(info, "sets", 1.0),
            _info_value(info, "reps", 1.0),
            _info_value(info, "time_per_rep", 0.0),
            _info_value(info, "rest_time", 0.0),
            equipment,
            muscle_group,
        )
    if kind == ENDURANCE:
        return EnduranceExercise(
            name, _info_value(info, "duration", 1.0), equipment, muscle_group
        )
    if kind == INTERVAL:
        return IntervalExercise(
            name,
            _info_value(info, "time_on", 1.0),
            _info_value(info, "time_off", 0.0),
            _info_value(info, "repetitions", 1.0),
            equipment,
            muscle_group,
        )
    return None


def exercise_library_to_json(library: ExerciseLibrary) -> Dict[str, Any]:
    return {
        "exercises": [
            exercise_to_json(ex) for ex in library.get_all_exercises().values()
        ]
    }


def exercise_library_from_json(
    data: Optional[Dict[str, Any]], library: ExerciseLibrary, catalog: Catalog
) -> None:
    if not isinstance(catalog, Catalog):
        raise ValueError("Catalog required to rebuild exercises")
    if not isinstance(data, dict):
        return
    entries = data.get("exercises")
    if not isinstance(entries, list):
        return
    for entry in entries:
        if not isinstance(entry, dict):
            logger.warning("skipping malformed exercise entry {!r}", entry)
            continue
        exercise = exercise_from_json(entry, catalog)
        if exercise is None:
            continue
        if not library.add_exercise(exercise):
            logger.warning("skipping duplicate exercise {!r}", exercise.name)


def workout_to_json(plan: WorkoutPlan) -> Dict[str, Any]:
    if isinstance(plan, RestDay):
        return {"name": plan.name, "type": REST_DAY_TYPE}
    return {
        "name": plan.name,
        "type": WORKOUT_TYPE,
        "exercises": [ex.name for ex in plan.get_exercises()],
    }


def workout_library_to_json(library: WorkoutLibrary) -> Dict[str, Any]:
    return {"workouts": [workout_to_json(p) for p in library.get_all_workouts()]}


def workout_library_from_json(
    data: Optional[Dict[str, Any]],
    library: WorkoutLibrary,
    exercises: ExerciseLibrary,
) -> None:
    if not isinstance(exercises, ExerciseLibrary):
        raise ValueError("ExerciseLibrary required to rebuild workouts")
    if not isinstance(data, dict):
        return
    entries = data.get("workouts")
    if not isinstance(entries, list):
        return
    for entry in entries:
        if not isinstance(entry, dict):
            logger.warning("skipping malformed workout entry {!r}", entry)
            continue
        name = entry.get("name")
        kind = entry.get("type")
        if not isinstance(name, str):
            logger.warning("skipping workout without a name")
            continue
        if kind == REST_DAY_TYPE:
            plan: WorkoutPlan = RestDay(name)
        elif kind == WORKOUT_TYPE:
            members = []
            names = entry.get("exercises")
            for ex_name in names if isinstance(names, list) else []:
                exercise = exercises.get_exercise(ex_name) if isinstance(ex_name, str) else None
                if exercise is None:
                    logger.warning(
                        "workout {!r} references unknown exercise {!r}", name, ex_name
                    )
                    continue
                members.append(exercise)
            plan = Workout(name, members)
        else:
            logger.warning("skipping workout {!r} with unknown type {!r}", name, kind)
            continue
        try:
            library.add_workout(plan)
        except ValueError:
            logger.warning("skipping duplicate workout {!r}", name)


def weekly_schedule_to_json(schedule: WeeklySchedule) -> Dict[str, Any]:
    return {
        "schedule": [
            {"day": day, "workout": plan.name}
            for day, plan in enumerate(schedule.get_weekly_schedule())
        ]
    }


def weekly_schedule_from_json(
    data: Optional[Dict[str, Any]],
    schedule: WeeklySchedule,
    workouts: WorkoutLibrary,
) -> None:
    """Place plans on their days, replaying metric activation for each."""
    if not isinstance(workouts, WorkoutLibrary):
        raise ValueError("WorkoutLibrary required to rebuild the schedule")
    if not isinstance(data, dict):
        return
    entries = data.get("schedule")
    if not isinstance(entries, list):
        return
    for entry in entries:
        if not isinstance(entry, dict):
            logger.warning("skipping malformed schedule entry {!r}", entry)
            continue
        day = entry.get("day")
        if isinstance(day, bool) or not isinstance(day, int) or not 0 <= day < len(DAY_NAMES):
            logger.warning("skipping schedule entry with invalid day {!r}", day)
            continue
        name = entry.get("workout")
        if isinstance(name, str) and workouts.contains_workout(name):
            schedule.set_schedule_for_day(day, workouts.get_workout(name))
        else:
            if name is not None and name != REST_DAY_NAME:
                logger.warning("{}: unknown workout {!r}", DAY_NAMES[day], name)
            schedule.clear_schedule_for_day(day)


class JsonStore:
    """Reads and writes the whole planner document as one JSON file."""

    def __init__(self, path: str = DEFAULT_SAVE_PATH) -> None:
        self.path = path

    def save(self, components: Dict[str, Any]) -> None:
        directory = os.path.dirname(self.path)
        try:
            if directory:
                os.makedirs(directory, exist_ok=True)
            with open(self.path, "w", encoding="utf-8") as f:
                json.dump(components, f, indent=4)
        except (OSError, TypeError, ValueError) as e:
            raise PersistenceError(f"unable to write {self.path}: {e}") from e
        logger.info("saved planner data to {}", self.path)

    def load(self) -> Dict[str, Any]:
        if not os.path.exists(self.path):
            return {}
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            raise PersistenceError(f"unable to read {self.path}: {e}") from e
        if not isinstance(data, dict):
            raise PersistenceError(f"unexpected document in {self.path}")
        logger.info("loaded planner data from {}", self.path)
        return data


def save_planner(
    store: JsonStore,
    exercises: ExerciseLibrary,
    workouts: WorkoutLibrary,
    schedule: WeeklySchedule,
) -> None:
    store.save(
        {
            EXERCISE_SECTION: exercise_library_to_json(exercises),
            WORKOUT_SECTION: workout_library_to_json(workouts),
            SCHEDULE_SECTION: weekly_schedule_to_json(schedule),
        }
    )


def load_planner(
    store: JsonStore, catalog: Catalog
) -> Tuple[ExerciseLibrary, WorkoutLibrary, WeeklySchedule]:
    """Rebuild all three stages against ``catalog``'s shared handles."""
    data = store.load()
    exercises = ExerciseLibrary()
    workouts = WorkoutLibrary()
    schedule = WeeklySchedule()
    exercise_library_from_json(data.get(EXERCISE_SECTION), exercises, catalog)
    workout_library_from_json(data.get(WORKOUT_SECTION), workouts, exercises)
    weekly_schedule_from_json(data.get(SCHEDULE_SECTION), schedule, workouts)
    return exercises, workouts, schedule
