"""
Gesture stabilisation.

A low pass filter over the instantaneous posture: a new gesture is only
committed after it has been seen on consecutive ticks for the damping window,
and only reported when it differs from the last reported gesture.
"""

from dataclasses import dataclass
from typing import Optional
from accelsim.core.config import GestureThresholds
from .constants import Gesture

@dataclass
class GestureState:
    current: Gesture = Gesture.NONE  # instantaneous, unfiltered gesture
    last: Gesture = Gesture.NONE     # last gesture reported
    sigma: int = 0                   # ticks `current` has been stable

class GestureFilter:
    """Debounces instantaneous gestures into stable gesture changes."""

    def __init__(self, thresholds: Optional[GestureThresholds] = None):
        self.thresholds = thresholds or GestureThresholds()
        self.state = GestureState()

    def update(self, gesture: Gesture) -> Optional[Gesture]:
        """
        Feed one tick's instantaneous gesture.

        Must be called exactly once per tick, after classification.

        Args:
            gesture: The instantaneous classification for this tick

        Returns:
            The newly committed gesture, or None if nothing changed
        """
        state = self.state
        damping = self.thresholds.gesture_damping

        if gesture == state.current:
            if state.sigma < damping:
                state.sigma += 1
        else:
            state.current = Gesture(gesture)
            state.sigma = 0

        if state.current != state.last and state.sigma >= damping:
            state.last = state.current
            return state.last

        return None
