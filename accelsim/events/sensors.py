"""
Sensor events for accelsim.

This module defines the events the accelerometer model raises: one data update
per tick, a gesture event whenever a new stable gesture is committed, and a
display refresh request when the sensor is first used.
"""

from typing import Literal, Optional
from accelsim.core.events import BaseEvent, EventType
from accelsim.sensors.constants import (
    ACCELEROMETER_EVT_DATA_UPDATE, Gesture, ID_ACCELEROMETER, ID_GESTURE
)

class AccelerometerDataUpdateEvent(BaseEvent):
    """
    Event published once per tick after a new sample has been processed.
    """
    type: Literal[EventType.ACCELEROMETER_DATA_UPDATE] = EventType.ACCELEROMETER_DATA_UPDATE
    source_id: int = ID_ACCELEROMETER
    value: int = ACCELEROMETER_EVT_DATA_UPDATE
    # Raw sample the update refers to, if known
    x: Optional[int] = None
    y: Optional[int] = None
    z: Optional[int] = None

class GestureEvent(BaseEvent):
    """
    Event published when the gesture filter commits a new stable gesture.
    """
    type: Literal[EventType.GESTURE] = EventType.GESTURE
    source_id: int = ID_GESTURE
    gesture: Gesture

class DisplayRefreshRequestedEvent(BaseEvent):
    """
    Event published when a component asks the display to redraw.

    The accelerometer raises it the first time it is used, and the input API
    raises it when shake handling is first requested.
    """
    type: Literal[EventType.DISPLAY_REFRESH_REQUESTED] = EventType.DISPLAY_REFRESH_REQUESTED
    component: str = "accelerometer"
