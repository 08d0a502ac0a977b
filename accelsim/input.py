"""
User-facing input API over the accelerometer.

These are the calls a program running on the device makes: read acceleration
along an axis or as a combined strength, read pitch or roll in degrees, change
the sample range, and register handlers for gestures.
"""

import math
import structlog
from typing import Awaitable, Callable, Dict, List, Optional
from accelsim.core.bus import EventBus
from accelsim.core.events import BaseEvent, EventType
from accelsim.events.sensors import DisplayRefreshRequestedEvent
from accelsim.sensors.accelerometer import Accelerometer
from accelsim.sensors.constants import Dimension, Gesture, Rotation

GestureHandler = Callable[[Gesture], Awaitable[None]]

class AccelerometerComponent:
    """
    An accelerometer as mounted on a board.

    `use_shake` records that a program asked for shake gestures, which tells
    the display to offer a way to trigger one.
    """

    def __init__(self, accelerometer: Accelerometer):
        self.accelerometer = accelerometer
        self.use_shake = False

class InputApi:
    """Input functions bound to one accelerometer component and event bus."""

    def __init__(self, component: AccelerometerComponent, event_bus: EventBus,
                 name: str = "input"):
        self.component = component
        self.event_bus = event_bus
        self.name = name
        self.logger = structlog.get_logger(api=name)
        self._gesture_handlers: Dict[Gesture, List[Callable[[BaseEvent], Awaitable[None]]]] = {}

        # on_gesture raises refresh requests even on a bus without a sensor service
        event_bus.registry.register_event(
            EventType.DISPLAY_REFRESH_REQUESTED,
            DisplayRefreshRequestedEvent,
            "The display should redraw"
        )
        event_bus.registry.register_producer(name, EventType.DISPLAY_REFRESH_REQUESTED)

    @property
    def accelerometer(self) -> Accelerometer:
        return self.component.accelerometer

    def acceleration(self, dimension: Dimension) -> int:
        """
        Get the acceleration along an axis, or the combined strength, in milli-g.

        Raises:
            ValueError: If `dimension` is not a Dimension
        """
        acc = self.accelerometer
        acc.activate()
        dimension = Dimension(dimension)
        if dimension == Dimension.X:
            return acc.get_x()
        if dimension == Dimension.Y:
            return acc.get_y()
        if dimension == Dimension.Z:
            return acc.get_z()
        return math.floor(math.sqrt(acc.instantaneous_acceleration_squared()))

    def rotation(self, kind: Rotation) -> int:
        """
        Get the pitch or roll of the device, in degrees.

        Raises:
            ValueError: If `kind` is not a Rotation
        """
        acc = self.accelerometer
        acc.activate()
        if Rotation(kind) == Rotation.PITCH:
            return acc.get_pitch()
        return acc.get_roll()

    def set_accelerometer_range(self, sample_range: int) -> None:
        self.accelerometer.set_sample_range(sample_range)

    def on_gesture(self, gesture: Gesture, handler: GestureHandler) -> None:
        """
        Run `handler` every time `gesture` is committed.

        Args:
            gesture: The gesture to listen for
            handler: Coroutine function called with the gesture
        """
        gesture = Gesture(gesture)
        self.accelerometer.activate()

        if gesture == Gesture.SHAKE and not self.component.use_shake:
            self.component.use_shake = True
            self.event_bus.queue(
                DisplayRefreshRequestedEvent(producer_name=self.name, component="shake"),
                self.name
            )

        async def dispatch(event: BaseEvent) -> None:
            if Gesture(event.gesture) == gesture:
                await handler(gesture)

        self._gesture_handlers.setdefault(gesture, []).append(dispatch)
        self.event_bus.subscribe(EventType.GESTURE, dispatch, self.name)
        self.logger.debug("Gesture handler registered", gesture=gesture.name)

    def clear_gesture_handlers(self, gesture: Optional[Gesture] = None) -> None:
        """Remove handlers for one gesture, or for all gestures if None."""
        gestures = [Gesture(gesture)] if gesture is not None else list(self._gesture_handlers)
        for g in gestures:
            for dispatch in self._gesture_handlers.pop(g, []):
                self.event_bus.unsubscribe(EventType.GESTURE, dispatch)
