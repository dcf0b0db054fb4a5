from __future__ import annotations

from typing import Dict, Iterable, List, Optional

from loguru import logger

from associator import aggregate_metrics
from exercises import Exercise
from tools import MathTools

REST_DAY_NAME = "Rest Day"


class WorkoutPlan:
    """Something that can occupy a day of the weekly schedule."""

    def __init__(self, name: Optional[str]) -> None:
        if name is None:
            raise ValueError("name is required")
        self._name = name

    @property
    def name(self) -> str:
        return self._name

    def get_duration(self) -> float:
        raise NotImplementedError()

    def get_exercises(self) -> List[Exercise]:
        raise NotImplementedError()

    def get_workout_summary(self) -> Dict[str, float]:
        raise NotImplementedError()

    def activate_metrics(self, context: Optional[str]) -> None:
        raise NotImplementedError()

    def deactivate_metrics(self, context: Optional[str]) -> None:
        raise NotImplementedError()

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._name!r})"


class Workout(WorkoutPlan):
    """An ordered sequence of exercises.

    The list holds references to library exercises. Duplicates are allowed;
    order only matters for display.
    """

    def __init__(self, name: Optional[str], exercises: Optional[Iterable[Exercise]]) -> None:
        super().__init__(name)
        if exercises is None:
            raise ValueError("exercises are required")
        items = list(exercises)
        if any(ex is None for ex in items):
            raise ValueError("exercises must not contain None")
        self._exercises: List[Exercise] = items

    def get_duration(self) -> float:
        total = 0.0
        for exercise in self._exercises:
            total = MathTools.cap_finite(total + exercise.get_duration())
        return total

    def get_exercises(self) -> List[Exercise]:
        return list(self._exercises)

    def get_workout_summary(self) -> Dict[str, float]:
        return aggregate_metrics(
            ex.convert_info_to_associator_format() for ex in self._exercises
        )

    def activate_metrics(self, context: Optional[str]) -> None:
        for exercise in self._exercises:
            exercise.activate_metrics(context)

    def deactivate_metrics(self, context: Optional[str]) -> None:
        for exercise in self._exercises:
            exercise.deactivate_metrics(context)

    def contains_exercise(self, exercise_name: str) -> bool:
        return any(ex.name == exercise_name for ex in self._exercises)

    def add_exercise(self, exercise: Optional[Exercise]) -> bool:
        """Append ``exercise`` unless one with the same name is present.

        Callers must deactivate the workout on every scheduled day before
        editing it and reactivate afterwards.
        """
        if exercise is None:
            raise ValueError("exercise is required")
        if self.contains_exercise(exercise.name):
            return False
        self._exercises.append(exercise)
        return True

    def remove_exercise(self, exercise_name: str) -> bool:
        """Drop every exercise called ``exercise_name``."""
        kept = [ex for ex in self._exercises if ex.name != exercise_name]
        if len(kept) == len(self._exercises):
            return False
        self._exercises = kept
        return True


class RestDay(WorkoutPlan):
    """An intentional day off: no exercises, no duration, no metrics."""

    def __init__(self, name: Optional[str] = REST_DAY_NAME) -> None:
        super().__init__(name)

    def get_duration(self) -> float:
        return 0.0

    def get_exercises(self) -> List[Exercise]:
        return []

    def get_workout_summary(self) -> Dict[str, float]:
        return {}

    def activate_metrics(self, context: Optional[str]) -> None:
        pass

    def deactivate_metrics(self, context: Optional[str]) -> None:
        pass


class WorkoutLibrary:
    """Named store of workouts and rest days; names are unique."""

    def __init__(self) -> None:
        self._library: Dict[str, WorkoutPlan] = {}

    def add_workout(self, plan: Optional[WorkoutPlan]) -> None:
        if plan is None:
            raise ValueError("workout is required")
        if self.contains_workout(plan.name):
            raise ValueError("workout exists")
        self._library[plan.name] = plan
        logger.debug("workout {!r} added to library", plan.name)

    def remove_workout(self, name: Optional[str]) -> None:
        if name is None or not self.contains_workout(name):
            raise ValueError("workout not found")
        del self._library[name]

    def get_workout(self, name: Optional[str]) -> WorkoutPlan:
        if name is None or not self.contains_workout(name):
            raise ValueError("workout not found")
        return self._library[name]

    def contains_workout(self, name: Optional[str]) -> bool:
        return name in self._library

    def get_all_workouts(self) -> List[WorkoutPlan]:
        return list(self._library.values())
