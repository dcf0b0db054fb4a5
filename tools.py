import math

import numpy as np


class MathTools:
    """Numeric bounds and clamping helpers for exercise arithmetic."""

    FLOAT_MAX: float = float(np.finfo(np.float64).max)
    FLOAT_MIN_NORMAL: float = float(np.finfo(np.float64).tiny)
    CBRT_FLOAT_MAX: float = float(np.cbrt(np.finfo(np.float64).max))
    INT_MAX: int = int(np.iinfo(np.int32).max)
    SECONDS_PER_MINUTE: int = 60

    @staticmethod
    def clamp(value: float, min_value: float, max_value: float) -> float:
        """Clamp ``value`` to the inclusive range [min_value, max_value]."""
        if min_value > max_value:
            raise ValueError("min_value must not exceed max_value")
        return max(min_value, min(value, max_value))

    @classmethod
    def as_number(cls, value, default: float) -> float:
        """Return ``value`` as a float, or ``default`` for NaN and non-numbers."""
        if isinstance(value, bool):
            return default
        try:
            number = float(value)
        except OverflowError:
            # integers too large for a float
            return cls.FLOAT_MAX if value > 0 else -cls.FLOAT_MAX
        except (TypeError, ValueError):
            return default
        if math.isnan(number):
            return default
        return number

    @classmethod
    def cap_finite(cls, value: float) -> float:
        """Replace an overflowed result with the largest finite float."""
        if math.isinf(value):
            return cls.FLOAT_MAX if value > 0 else 0.0
        return value
