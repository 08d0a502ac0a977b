"""
Identifiers and enumerations of the modelled accelerometer driver.

Event source ids and values match the device runtime so that events from a
simulated sensor are indistinguishable from those of real hardware.
"""

from enum import IntEnum

# Event bus source ids
ID_ACCELEROMETER = 4
ID_GESTURE = 27

# Value raised by ID_ACCELEROMETER after every new sample
ACCELEROMETER_EVT_DATA_UPDATE = 1

# 1g in milli-g, the centre of the tilt bands
ONE_G = 1000

# Largest magnitude accepted for a single axis sample
SAMPLE_LIMIT = 2 ** 31 - 1

MIN_SAMPLE_RANGE = 1
MAX_SAMPLE_RANGE = 8

class Gesture(IntEnum):
    """Gesture codes raised with ID_GESTURE."""
    NONE = 0
    TILT_UP = 1
    TILT_DOWN = 2
    TILT_LEFT = 3
    TILT_RIGHT = 4
    FACE_UP = 5
    FACE_DOWN = 6
    FREEFALL = 7
    SHOCK_3G = 8
    SHOCK_6G = 9
    SHOCK_8G = 10
    SHAKE = 11

class CoordinateSystem(IntEnum):
    """
    Co-ordinate systems that samples can be read in.

    RAW: unaltered data, as read from the sensor.
    SIMPLE_CARTESIAN: x to the right and y up when the device is held upright
        facing the user, as taught in schools.
    NORTH_EAST_DOWN: the industry North East Down convention.
    """
    RAW = 0
    SIMPLE_CARTESIAN = 1
    NORTH_EAST_DOWN = 2

class Dimension(IntEnum):
    X = 0
    Y = 1
    Z = 2
    STRENGTH = 3

class Rotation(IntEnum):
    PITCH = 0
    ROLL = 1

class AcceleratorRange(IntEnum):
    """Sample ranges the sensor can be configured for, in g."""
    ONE_G = 1
    TWO_G = 2
    FOUR_G = 4
    EIGHT_G = 8
