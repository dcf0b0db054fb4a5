from typing import Dict, Tuple

from associator import ExerciseAssociator

STRENGTH_EQUIPMENT = "Strength Equipment"
CARDIO_EQUIPMENT = "Cardio Equipment"
BODY_WEIGHT_EQUIPMENT = "Body Weight Equipment"

# name -> (equipment type, weight based)
EQUIPMENT_KINDS: Dict[str, Tuple[str, bool]] = {
    "Barbell": (STRENGTH_EQUIPMENT, True),
    "Dumbbell": (STRENGTH_EQUIPMENT, True),
    "Cable": (STRENGTH_EQUIPMENT, True),
    "Machine": (STRENGTH_EQUIPMENT, True),
    "Treadmill": (CARDIO_EQUIPMENT, False),
    "Bodyweight": (BODY_WEIGHT_EQUIPMENT, False),
}


class Equipment(ExerciseAssociator):
    """A mode of exercising (not a single physical item).

    One instance exists per kind and is shared by every exercise that uses
    it, so its registry accumulates metrics across all of them. Equality is
    identity.
    """

    def __init__(self, name: str) -> None:
        if name not in EQUIPMENT_KINDS:
            raise ValueError(f"unknown equipment: {name}")
        super().__init__()
        self._name = name
        self._equipment_type, self._weight_based = EQUIPMENT_KINDS[name]

    @property
    def name(self) -> str:
        return self._name

    @property
    def equipment_type(self) -> str:
        return self._equipment_type

    def is_weight_based(self) -> bool:
        return self._weight_based

    def __repr__(self) -> str:
        return f"Equipment({self._name!r})"
