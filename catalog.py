from typing import Dict, Optional

from equipment import EQUIPMENT_KINDS, Equipment
from muscles import Muscle, MuscleGroup

MUSCLE_NAMES = (
    "Biceps",
    "Brachialis",
    "Triceps",
    "Forearm",
    "Quadriceps",
    "Hamstrings",
    "Lats",
    "Traps",
    "Lower Back",
    "Chest",
    "Deltoid",
    "Glutes",
    "Calves",
    "Abs",
    "Obliques",
)

MUSCLE_GROUP_MEMBERS = {
    "Upper Body": ("Chest", "Deltoid", "Biceps", "Triceps", "Forearm"),
    "Lower Body": ("Quadriceps", "Hamstrings", "Glutes", "Calves"),
    "Back": ("Lats", "Traps", "Lower Back"),
    "Chest & Shoulders": ("Chest", "Deltoid"),
    "Arms": ("Biceps", "Brachialis", "Triceps", "Forearm"),
    "Legs": ("Quadriceps", "Hamstrings", "Glutes", "Calves"),
    "Core": ("Lower Back", "Abs", "Obliques"),
}


class Catalog:
    """Registry of the shared equipment, muscle and muscle group handles.

    Exercises hold references to these handles, so every exercise naming
    "Dumbbell" reports into the same registry. Build a fresh ``Catalog``
    for isolated state; ``catalog`` below is the process-wide default.
    """

    def __init__(self) -> None:
        self._equipment: Dict[str, Equipment] = {
            name: Equipment(name) for name in EQUIPMENT_KINDS
        }
        self._muscles: Dict[str, Muscle] = {name: Muscle(name) for name in MUSCLE_NAMES}
        self._groups: Dict[str, MuscleGroup] = {
            name: MuscleGroup(name, [self._muscles[m] for m in members])
            for name, members in MUSCLE_GROUP_MEMBERS.items()
        }

    def get_all_equipment(self) -> Dict[str, Equipment]:
        return dict(self._equipment)

    def get_all_muscles(self) -> Dict[str, Muscle]:
        return dict(self._muscles)

    def get_all_muscle_groups(self) -> Dict[str, MuscleGroup]:
        return dict(self._groups)

    def find_equipment(self, name: Optional[str]) -> Optional[Equipment]:
        return self._equipment.get(name)

    def find_muscle(self, name: Optional[str]) -> Optional[Muscle]:
        return self._muscles.get(name)

    def find_muscle_group(self, name: Optional[str]) -> Optional[MuscleGroup]:
        return self._groups.get(name)

    def reset_metrics(self) -> None:
        """Clear every registry held by the catalog's handles."""
        for entity in (
            *self._equipment.values(),
            *self._muscles.values(),
            *self._groups.values(),
        ):
            entity.clear_exercises()


catalog = Catalog()
