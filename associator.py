from typing import Dict, Iterable, List, Optional, Tuple

from loguru import logger

from tools import MathTools

METRIC_KEYS: Tuple[str, ...] = (
    "totalSets",
    "totalReps",
    "totalStrengthDuration",
    "totalIntervalDuration",
    "totalEnduranceDuration",
    "totalRestTimeBetween",
    "totalDuration",
)


def empty_metrics() -> Dict[str, float]:
    """Return a mapping of every canonical metric key to ``0.0``."""
    return {key: 0.0 for key in METRIC_KEYS}


def aggregate_metrics(snapshots: Iterable[Dict[str, float]]) -> Dict[str, float]:
    """Sum canonical metric keys across ``snapshots``.

    Keys missing from a snapshot contribute nothing and keys outside the
    canonical vocabulary are ignored, so the result always has exactly the
    seven canonical keys. Every running total is capped at the largest
    finite float.
    """
    totals = empty_metrics()
    for snapshot in snapshots:
        for key in METRIC_KEYS:
            totals[key] = MathTools.cap_finite(
                totals[key] + float(snapshot.get(key, 0.0))
            )
    return totals


class ExerciseAssociator:
    """Capability for entities that track which exercises load them.

    Records are keyed by ``(exercise_name, context)`` where the context is
    normally a weekday name. Invalid or duplicate requests are rejected by
    returning ``False`` instead of raising so that activation cascades can
    continue past a single failed registration.
    """

    def __init__(self) -> None:
        self._records: Dict[Tuple[str, str], Dict[str, float]] = {}

    def register_exercise(
        self,
        exercise_name: Optional[str],
        context: Optional[str],
        metrics: Optional[Dict[str, float]],
    ) -> bool:
        if exercise_name is None or context is None or metrics is None:
            logger.debug(
                "rejected registration on {}: missing argument", self._label()
            )
            return False
        key = (exercise_name, context)
        if key in self._records:
            logger.debug(
                "rejected duplicate {!r}/{!r} on {}",
                exercise_name,
                context,
                self._label(),
            )
            return False
        self._records[key] = dict(metrics)
        return True

    def unregister_exercise(
        self, exercise_name: Optional[str], context: Optional[str]
    ) -> bool:
        if exercise_name is None or context is None:
            return False
        key = (exercise_name, context)
        if key not in self._records:
            return False
        del self._records[key]
        return True

    def contains_exercise(
        self, exercise_name: Optional[str], context: Optional[str]
    ) -> bool:
        if exercise_name is None or context is None:
            return False
        return (exercise_name, context) in self._records

    def get_num_associated_exercises(self) -> int:
        return len(self._records)

    def get_associated_exercises(self) -> List[Tuple[str, str]]:
        """Return the ``(exercise_name, context)`` keys currently stored."""
        return list(self._records)

    def get_aggregated_exercise_metrics(self) -> Dict[str, float]:
        return aggregate_metrics(self._records.values())

    def get_metrics_for_context(self, context: Optional[str]) -> Dict[str, float]:
        """Aggregate only the records registered under ``context``."""
        return aggregate_metrics(
            metrics
            for (_name, ctx), metrics in self._records.items()
            if ctx == context
        )

    def clear_exercises(self) -> None:
        self._records.clear()

    def _label(self) -> str:
        return getattr(self, "name", type(self).__name__)
