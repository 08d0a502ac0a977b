"""
accelsim - a behavioural model of a triaxial accelerometer sensor driver.

This package turns a per-tick stream of raw (x, y, z) milli-g samples into the
same motion semantics the device firmware reports, so application code reacts
identically to a simulated and a real device.

Features:
- Coordinate system transforms (RAW, SIMPLE_CARTESIAN, NORTH_EAST_DOWN)
- Posture classification with shake, free-fall and shock detection
- Debounced gesture events delivered over a typed event bus
- Pitch and roll derived from the current sample
"""

__version__ = "1.0.0"
