"""
Services for accelsim.
"""

from .accelerometer_service import AccelerometerService

__all__ = ['AccelerometerService']
