"""
Pitch and roll derived from the current sample.

The trigonometry is done at most once per sample: results are cached against
the generation number of the sample they were computed from.
"""

import math
from typing import Optional, Tuple
from .constants import CoordinateSystem
from .coordinates import Sample, transform

def to_degrees(radians: float) -> int:
    """Convert radians to whole degrees, rounding towards negative infinity."""
    return math.floor((360 * radians) / (2 * math.pi))

def pitch_roll(x: int, y: int, z: int) -> Tuple[float, float]:
    """
    Rotation compensated pitch and roll for North East Down axis values.

    Returns:
        (pitch, roll) in radians
    """
    roll = math.atan2(y, z)
    denominator = y * math.sin(roll) + z * math.cos(roll)
    if denominator == 0:
        # Only when y == z == 0: the device points straight up or down
        pitch = math.copysign(math.pi / 2, -x) if x != 0 else 0.0
    else:
        pitch = math.atan(-x / denominator)
    return pitch, roll

class PitchRollCalculator:
    """Lazily computes pitch and roll, once per sample generation."""

    def __init__(self):
        self._generation: Optional[int] = None
        self._pitch = 0.0
        self._roll = 0.0

    def _recalculate(self, sample: Sample) -> None:
        x, y, z = transform(sample, CoordinateSystem.NORTH_EAST_DOWN)
        self._pitch, self._roll = pitch_roll(x, y, z)

    def _refresh(self, sample: Sample, generation: int) -> None:
        if generation != self._generation:
            self._recalculate(sample)
            self._generation = generation

    def pitch_radians(self, sample: Sample, generation: int) -> float:
        self._refresh(sample, generation)
        return self._pitch

    def roll_radians(self, sample: Sample, generation: int) -> float:
        self._refresh(sample, generation)
        return self._roll
