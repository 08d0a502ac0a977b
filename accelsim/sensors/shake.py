"""
Shake detection.

A shake is detected by counting zero crossings on each axis: a strong
acceleration one way followed by a strong acceleration the other way. Enough
crossings in quick succession latch the `shaken` flag; a decay timer lets the
count bleed away once the motion stops, so the flag persists briefly after the
device is put down.
"""

from dataclasses import dataclass
from typing import Optional
from accelsim.core.config import GestureThresholds

@dataclass
class ShakeState:
    """
    State carried between ticks by the shake detector.

    `shaken` is set when `count` climbs to the count threshold and cleared
    only when the decay timer has brought `count` back down to 0.
    """
    x: bool = False  # last sign seen per axis, True once a positive swing was recorded
    y: bool = False
    z: bool = False
    count: int = 0
    shaken: bool = False
    timer: int = 0

class ShakeDetector:
    """Per-axis zero crossing detector with a debounce counter."""

    def __init__(self, thresholds: Optional[GestureThresholds] = None):
        self.thresholds = thresholds or GestureThresholds()
        self.state = ShakeState()

    @property
    def shaken(self) -> bool:
        return self.state.shaken

    def _crossed(self, value: int, last_positive: bool) -> bool:
        tolerance = self.thresholds.shake_tolerance
        return (value < -tolerance and last_positive) or (value > tolerance and not last_positive)

    def observe(self, x: int, y: int, z: int) -> bool:
        """
        Feed one tick of raw axis values.

        Args:
            x, y, z: Raw axis values in milli-g

        Returns:
            True if any axis crossed zero on this tick
        """
        state = self.state
        detected = False

        if self._crossed(x, state.x):
            detected = True
            state.x = not state.x
        if self._crossed(y, state.y):
            detected = True
            state.y = not state.y
        if self._crossed(z, state.z):
            detected = True
            state.z = not state.z

        threshold = self.thresholds.shake_count_threshold
        if detected and state.count < threshold:
            state.count += 1
            if state.count == threshold:
                state.shaken = True

        # The decay timer runs whether or not anything crossed this tick
        state.timer += 1
        if state.timer >= self.thresholds.shake_damping:
            state.timer = 0
            if state.count > 0:
                state.count -= 1
                if state.count == 0:
                    state.shaken = False

        return detected
