from __future__ import annotations

from typing import List, Optional

from loguru import logger

from workouts import RestDay, WorkoutPlan

DAY_NAMES = (
    "Monday",
    "Tuesday",
    "Wednesday",
    "Thursday",
    "Friday",
    "Saturday",
    "Sunday",
)


def day_name(day: int) -> str:
    """Return the weekday name used as the metrics context for ``day``."""
    WeeklySchedule._validate_day(day)
    return DAY_NAMES[day]


class WeeklySchedule:
    """Seven plan slots, Monday (0) through Sunday (6).

    Every assignment deactivates the previous occupant's metrics before the
    new plan is activated, so a day's context never carries metrics from two
    plans at once.
    """

    def __init__(self) -> None:
        self._days: List[WorkoutPlan] = [RestDay() for _ in DAY_NAMES]

    @staticmethod
    def _validate_day(day: int) -> None:
        if isinstance(day, bool) or not isinstance(day, int):
            raise ValueError("day must be an integer")
        if not 0 <= day < len(DAY_NAMES):
            raise ValueError("day must be between 0 and 6")

    def get_schedule_for_day(self, day: int) -> WorkoutPlan:
        self._validate_day(day)
        return self._days[day]

    def set_schedule_for_day(self, day: int, plan: Optional[WorkoutPlan]) -> None:
        self._validate_day(day)
        if plan is None:
            raise ValueError("plan is required")
        context = DAY_NAMES[day]
        self._days[day].deactivate_metrics(context)
        self._days[day] = plan
        plan.activate_metrics(context)
        logger.info("{} scheduled: {}", context, plan.name)

    def clear_schedule_for_day(self, day: int) -> None:
        self._validate_day(day)
        context = DAY_NAMES[day]
        self._days[day].deactivate_metrics(context)
        self._days[day] = RestDay()
        logger.info("{} cleared", context)

    def clear_all(self) -> None:
        for day in range(len(DAY_NAMES)):
            self.clear_schedule_for_day(day)

    def get_weekly_schedule(self) -> List[WorkoutPlan]:
        return list(self._days)

    def days_for_plan(self, plan: WorkoutPlan) -> List[int]:
        """Return the indices of days holding this exact plan instance."""
        return [day for day, current in enumerate(self._days) if current is plan]

    def get_week_summary(self) -> str:
        return "\n".join(
            f"{DAY_NAMES[day]}: {plan.name}" for day, plan in enumerate(self._days)
        )
