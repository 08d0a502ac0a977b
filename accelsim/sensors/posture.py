"""
Instantaneous posture classification.

Determines the best guess posture of the device from a single sample. The only
history used is the shake detector's latch; smoothing over time is the job of
the gesture filter.
"""

from typing import Optional
from accelsim.core.config import GestureThresholds
from .constants import Gesture, ONE_G

class PostureClassifier:
    """
    Classifies one tick's raw axis values into a gesture code.

    Rules are evaluated in priority order and the first match wins:
    shake, free-fall, shock (3G, 6G, 8G), then the tilt bands for x, y and z.
    Magnitude rules run before tilt because a falling or jolted device can pass
    through tilt-like axis values.
    """

    def __init__(self, thresholds: Optional[GestureThresholds] = None):
        self.thresholds = thresholds or GestureThresholds()

    def classify(self, x: int, y: int, z: int, shaken: bool = False) -> Gesture:
        """
        Classify a sample.

        Args:
            x, y, z: Raw axis values in milli-g
            shaken: Current shake latch from the shake detector

        Returns:
            Gesture code for this tick, Gesture.NONE if no posture matched
        """
        t = self.thresholds

        if shaken:
            return Gesture.SHAKE

        force = x * x + y * y + z * z

        if force < t.freefall_tolerance ** 2:
            return Gesture.FREEFALL

        # 3G is tested first, so it also catches anything above 6G and 8G
        if force > t.shock_3g_tolerance ** 2:
            return Gesture.SHOCK_3G

        if force > t.shock_6g_tolerance ** 2:
            return Gesture.SHOCK_6G

        if force > t.shock_8g_tolerance ** 2:
            return Gesture.SHOCK_8G

        low = -ONE_G + t.tilt_tolerance
        high = ONE_G - t.tilt_tolerance

        if x < low:
            return Gesture.TILT_LEFT
        if x > high:
            return Gesture.TILT_RIGHT
        if y < low:
            return Gesture.TILT_DOWN
        if y > high:
            return Gesture.TILT_UP
        if z < low:
            return Gesture.FACE_UP
        if z > high:
            return Gesture.FACE_DOWN

        return Gesture.NONE
