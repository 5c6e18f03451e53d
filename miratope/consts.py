"""Numeric constants shared across the package."""

import math

EPS: float = 1e-7
"""Default tolerance for values that would be zero with infinite precision."""

ZERO: float = 0.0
ONE: float = 1.0
TWO: float = 2.0
THREE: float = 3.0
FOUR: float = 4.0
FIVE: float = 5.0

PI: float = math.pi
TAU: float = math.tau
SQRT_2: float = math.sqrt(2.0)
HALF_SQRT_2: float = SQRT_2 / 2.0
SQRT_3: float = 1.7320508075688772
SQRT_5: float = 2.23606797749979