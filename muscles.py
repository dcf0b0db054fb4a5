from typing import Dict, Iterable, List, Optional

from loguru import logger

from associator import ExerciseAssociator


class Muscle(ExerciseAssociator):
    """A single anatomical muscle shared by every group that contains it."""

    def __init__(self, name: str) -> None:
        super().__init__()
        self._name = name

    @property
    def name(self) -> str:
        return self._name

    def __repr__(self) -> str:
        return f"Muscle({self._name!r})"


class MuscleGroup(ExerciseAssociator):
    """Muscles trained together.

    The group keeps its own registry next to the registries of its member
    muscles. Group totals are never derived from member totals: a
    registration is written to the group and, separately, to each member.
    """

    DEFAULT_NAME = "Unnamed MuscleGroup"

    def __init__(
        self, name: Optional[str], muscles: Optional[Iterable[Muscle]] = None
    ) -> None:
        super().__init__()
        self._name = name if isinstance(name, str) and name.strip() else self.DEFAULT_NAME
        members = [m for m in (muscles or []) if m is not None]
        # dict keeps first-seen order while dropping repeated references
        self._muscles: List[Muscle] = list(dict.fromkeys(members))

    @property
    def name(self) -> str:
        return self._name

    def get_muscles(self) -> List[Muscle]:
        return list(self._muscles)

    def register_muscles_for_metrics(
        self,
        exercise_name: Optional[str],
        context: Optional[str],
        metrics: Optional[Dict[str, float]],
    ) -> bool:
        """Register on the group and on every member muscle.

        Returns the outcome of the group-level registration only.
        """
        if exercise_name is None or context is None or metrics is None:
            return False
        if not self._muscles:
            return False
        registered = self.register_exercise(exercise_name, context, metrics)
        for muscle in self._muscles:
            muscle.register_exercise(exercise_name, context, metrics)
        logger.debug(
            "fan-out {!r}/{!r} to {} muscles of {}",
            exercise_name,
            context,
            len(self._muscles),
            self._name,
        )
        return registered

    def unregister_muscles_from_metrics(
        self, exercise_name: Optional[str], context: Optional[str]
    ) -> bool:
        if exercise_name is None or context is None:
            return False
        if not self._muscles:
            return False
        removed = self.unregister_exercise(exercise_name, context)
        for muscle in self._muscles:
            muscle.unregister_exercise(exercise_name, context)
        return removed

    def get_group_metrics(self) -> Dict[str, float]:
        return self.get_aggregated_exercise_metrics()

    def __repr__(self) -> str:
        return f"MuscleGroup({self._name!r}, {[m.name for m in self._muscles]!r})"
