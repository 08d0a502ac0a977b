"""
Coordinate system transforms for accelerometer samples.

Each axis carries its own rule per coordinate system. Anything that is not
SIMPLE_CARTESIAN or NORTH_EAST_DOWN is read as RAW.
"""

from typing import NamedTuple, Tuple
from .constants import CoordinateSystem

class Sample(NamedTuple):
    """A raw accelerometer reading, in milli-g, in the sensor's own axes."""
    x: int
    y: int
    z: int

def axis_x(sample: Sample, system: CoordinateSystem) -> int:
    if system == CoordinateSystem.SIMPLE_CARTESIAN:
        return -sample.x
    if system == CoordinateSystem.NORTH_EAST_DOWN:
        return sample.y
    return sample.x

def axis_y(sample: Sample, system: CoordinateSystem) -> int:
    if system == CoordinateSystem.SIMPLE_CARTESIAN:
        return -sample.y
    if system == CoordinateSystem.NORTH_EAST_DOWN:
        return -sample.x
    return sample.y

def axis_z(sample: Sample, system: CoordinateSystem) -> int:
    # z is only flipped for NED; SIMPLE_CARTESIAN keeps the raw sign
    if system == CoordinateSystem.NORTH_EAST_DOWN:
        return -sample.z
    return sample.z

def transform(sample: Sample, system: CoordinateSystem = CoordinateSystem.SIMPLE_CARTESIAN) -> Tuple[int, int, int]:
    """
    Map a raw sample into the requested coordinate system.

    Args:
        sample: The raw reading
        system: Target coordinate system

    Returns:
        (x, y, z) in the target system
    """
    return axis_x(sample, system), axis_y(sample, system), axis_z(sample, system)
