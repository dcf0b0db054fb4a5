from __future__ import annotations

from typing import Dict, Optional

from loguru import logger

from equipment import Equipment
from muscles import MuscleGroup
from tools import MathTools

STRENGTH = "Strength"
ENDURANCE = "Endurance"
INTERVAL = "Interval"


class Exercise:
    """Base for the three exercise kinds.

    Exercises are immutable once built. They reference (never own) one
    shared ``Equipment`` and one shared ``MuscleGroup``; either may be
    ``None``, in which case metric activation skips that side.
    """

    KIND = "Unknown Type"
    DEFAULT_NAME = "Unnamed Exercise"

    def __init__(
        self,
        name: Optional[str],
        equipment: Optional[Equipment] = None,
        muscle_group: Optional[MuscleGroup] = None,
    ) -> None:
        self._name = name if isinstance(name, str) and name.strip() else self.DEFAULT_NAME
        self._equipment = equipment
        self._muscle_group = muscle_group

    @property
    def name(self) -> str:
        return self._name

    @property
    def equipment(self) -> Optional[Equipment]:
        return self._equipment

    @property
    def muscle_group(self) -> Optional[MuscleGroup]:
        return self._muscle_group

    def exercise_type(self) -> str:
        return self.KIND

    def get_duration(self) -> float:
        """Return the total duration in seconds."""
        raise NotImplementedError()

    def get_info(self) -> Dict[str, float]:
        """Return the clamped construction parameters."""
        raise NotImplementedError()

    def convert_info_to_associator_format(self) -> Dict[str, float]:
        """Return this exercise's metrics snapshot in canonical keys."""
        raise NotImplementedError()

    def activate_metrics(self, context: Optional[str]) -> None:
        metrics = self.convert_info_to_associator_format()
        if self._equipment is not None:
            self._equipment.register_exercise(self._name, context, dict(metrics))
        if self._muscle_group is not None:
            self._muscle_group.register_muscles_for_metrics(
                self._name, context, dict(metrics)
            )

    def deactivate_metrics(self, context: Optional[str]) -> None:
        if self._equipment is not None:
            self._equipment.unregister_exercise(self._name, context)
        if self._muscle_group is not None:
            self._muscle_group.unregister_muscles_from_metrics(self._name, context)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._name!r}, {self.get_info()!r})"


class StrengthExercise(Exercise):
    """Sets and reps with rest between sets.

    ``seconds_per_rep`` is in seconds and ``rest_time`` in minutes.
    """

    KIND = STRENGTH

    def __init__(
        self,
        name: Optional[str],
        sets: int,
        reps: int,
        seconds_per_rep: float,
        rest_time: float,
        equipment: Optional[Equipment] = None,
        muscle_group: Optional[MuscleGroup] = None,
    ) -> None:
        super().__init__(name, equipment, muscle_group)
        bound = MathTools.CBRT_FLOAT_MAX
        self._sets = self._count(sets, bound)
        self._reps = self._count(reps, bound)
        self._seconds_per_rep = MathTools.clamp(
            MathTools.as_number(seconds_per_rep, 0.0), 0.0, bound
        )
        self._rest_time = MathTools.clamp(
            MathTools.as_number(rest_time, 0.0), 0.0, bound
        )

    @staticmethod
    def _count(value, bound: float) -> int:
        number = MathTools.as_number(value, 1.0)
        if number <= 0:
            return 1
        return max(1, int(min(number, bound)))

    @property
    def sets(self) -> int:
        return self._sets

    @property
    def reps(self) -> int:
        return self._reps

    @property
    def seconds_per_rep(self) -> float:
        return self._seconds_per_rep

    @property
    def rest_time(self) -> float:
        return self._rest_time

    def _rest_seconds(self) -> float:
        return MathTools.cap_finite(
            float(self._sets) * self._rest_time * MathTools.SECONDS_PER_MINUTE
        )

    def get_duration(self) -> float:
        working = float(self._sets) * float(self._reps) * self._seconds_per_rep
        return MathTools.cap_finite(
            MathTools.cap_finite(working) + self._rest_seconds()
        )

    def get_info(self) -> Dict[str, float]:
        return {
            "sets": float(self._sets),
            "reps": float(self._reps),
            "time_per_rep": self._seconds_per_rep,
            "rest_time": self._rest_time,
        }

    def convert_info_to_associator_format(self) -> Dict[str, float]:
        duration = self.get_duration()
        return {
            "totalSets": float(self._sets),
            "totalReps": float(self._reps) * float(self._sets),
            "totalStrengthDuration": duration,
            "totalRestTimeBetween": self._rest_seconds(),
            "totalDuration": duration,
        }


class EnduranceExercise(Exercise):
    """Continuous effort for ``duration`` minutes."""

    KIND = ENDURANCE

    def __init__(
        self,
        name: Optional[str],
        duration: float,
        equipment: Optional[Equipment] = None,
        muscle_group: Optional[MuscleGroup] = None,
    ) -> None:
        super().__init__(name, equipment, muscle_group)
        self._duration = MathTools.clamp(
            MathTools.as_number(duration, MathTools.FLOAT_MIN_NORMAL),
            MathTools.FLOAT_MIN_NORMAL,
            MathTools.FLOAT_MAX / 120,
        )

    @property
    def duration_minutes(self) -> float:
        return self._duration

    def get_duration(self) -> float:
        return self._duration * MathTools.SECONDS_PER_MINUTE

    def get_info(self) -> Dict[str, float]:
        return {"duration": self._duration}

    def convert_info_to_associator_format(self) -> Dict[str, float]:
        duration = self.get_duration()
        return {
            "totalEnduranceDuration": duration,
            "totalDuration": duration,
        }


class IntervalExercise(Exercise):
    """Repeated work/rest intervals, both measured in seconds."""

    KIND = INTERVAL

    def __init__(
        self,
        name: Optional[str],
        time_on: float,
        time_off: float,
        repetitions: int,
        equipment: Optional[Equipment] = None,
        muscle_group: Optional[MuscleGroup] = None,
    ) -> None:
        super().__init__(name, equipment, muscle_group)
        self._repetitions = int(
            MathTools.clamp(
                MathTools.as_number(repetitions, 0.0), 0, MathTools.INT_MAX // 2
            )
        )
        bound = MathTools.FLOAT_MAX / (2 * max(1, self._repetitions))
        self._time_on = MathTools.clamp(
            MathTools.as_number(time_on, MathTools.FLOAT_MIN_NORMAL),
            MathTools.FLOAT_MIN_NORMAL,
            bound,
        )
        self._time_off = MathTools.clamp(
            MathTools.as_number(time_off, 0.0), 0.0, bound
        )

    @property
    def time_on(self) -> float:
        return self._time_on

    @property
    def time_off(self) -> float:
        return self._time_off

    @property
    def repetitions(self) -> int:
        return self._repetitions

    def get_duration(self) -> float:
        return MathTools.cap_finite(
            (self._time_on + self._time_off) * self._repetitions
        )

    def get_info(self) -> Dict[str, float]:
        return {
            "time_on": self._time_on,
            "time_off": self._time_off,
            "repetitions": float(self._repetitions),
        }

    def convert_info_to_associator_format(self) -> Dict[str, float]:
        duration = self.get_duration()
        return {
            "totalIntervalDuration": duration,
            "totalRestTimeBetween": MathTools.cap_finite(
                self._time_off * self._repetitions
            ),
            "totalDuration": duration,
        }


EXERCISE_KINDS = {
    STRENGTH: StrengthExercise,
    ENDURANCE: EnduranceExercise,
    INTERVAL: IntervalExercise,
}


class ExerciseLibrary:
    """Named store of every exercise the user has created."""

    def __init__(self) -> None:
        self._library: Dict[str, Exercise] = {}

    def add_exercise(self, exercise: Optional[Exercise]) -> bool:
        if exercise is None or exercise.name in self._library:
            return False
        self._library[exercise.name] = exercise
        logger.debug("exercise {!r} added to library", exercise.name)
        return True

    def remove_exercise(self, exercise_name: Optional[str]) -> bool:
        if not self.contains_exercise(exercise_name):
            return False
        del self._library[exercise_name]
        return True

    def get_exercise(self, exercise_name: Optional[str]) -> Optional[Exercise]:
        return self._library.get(exercise_name)

    def contains_exercise(self, exercise_name: Optional[str]) -> bool:
        return exercise_name in self._library

    def get_all_exercises(self) -> Dict[str, Exercise]:
        return dict(self._library)
