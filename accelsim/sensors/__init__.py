"""
Accelerometer sensor model.

The classification core: coordinate transforms, shake detection, posture
classification, gesture debouncing and pitch/roll, tied together by the
Accelerometer aggregator.
"""

from .constants import (
    AcceleratorRange, CoordinateSystem, Dimension, Gesture, Rotation,
    ID_ACCELEROMETER, ID_GESTURE, ACCELEROMETER_EVT_DATA_UPDATE
)
from .coordinates import Sample, transform
from .shake import ShakeDetector, ShakeState
from .posture import PostureClassifier
from .gesture import GestureFilter, GestureState
from .pitch_roll import PitchRollCalculator
from .accelerometer import Accelerometer

__all__ = [
    'AcceleratorRange',
    'CoordinateSystem',
    'Dimension',
    'Gesture',
    'Rotation',
    'ID_ACCELEROMETER',
    'ID_GESTURE',
    'ACCELEROMETER_EVT_DATA_UPDATE',
    'Sample',
    'transform',
    'ShakeDetector',
    'ShakeState',
    'PostureClassifier',
    'GestureFilter',
    'GestureState',
    'PitchRollCalculator',
    'Accelerometer',
]
