"""
Hardware abstraction layer for accelsim.

This package isolates the rest of the application from where accelerometer
samples come from: a scripted trajectory, a noise model, or a real sensor.
"""

from .base import BaseHardware, AccelerometerHardware
from .simulated import ScriptedAccelerometer, NoisyAccelerometer

__all__ = [
    'BaseHardware',
    'AccelerometerHardware',
    'ScriptedAccelerometer',
    'NoisyAccelerometer',
]
