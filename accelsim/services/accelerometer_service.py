"""
This service drives the accelerometer model and publishes its events to the bus.

Every tick it reads one sample from the hardware, advances the sensor model and
drains the event bus, so gesture and data update events reach subscribers in
the order the sensor raised them.
"""

import asyncio
import math
from typing import Any, Dict, Optional
from accelsim.core.bus import EventBus
from accelsim.core.config import AccelerometerConfig
from accelsim.core.events import EventType
from accelsim.core.registry import ServiceRegistry
from accelsim.core.service import BaseService
from accelsim.events.sensors import (
    AccelerometerDataUpdateEvent, DisplayRefreshRequestedEvent, GestureEvent
)
from accelsim.hardware.base import AccelerometerHardware
from accelsim.sensors.accelerometer import Accelerometer
from accelsim.sensors.constants import CoordinateSystem, Gesture, ID_ACCELEROMETER, ID_GESTURE

class AccelerometerService(BaseService):
    """Service for ticking the simulated accelerometer"""

    PRODUCES_EVENTS = {
        EventType.ACCELEROMETER_DATA_UPDATE: {
            'schema': AccelerometerDataUpdateEvent,
            'description': "A new accelerometer sample was processed",
        },
        EventType.GESTURE: {
            'schema': GestureEvent,
            'description': "A new stable gesture was committed",
        },
        EventType.DISPLAY_REFRESH_REQUESTED: {
            'schema': DisplayRefreshRequestedEvent,
            'description': "The display should redraw",
        },
    }

    def __init__(self,
                 event_bus: EventBus,
                 service_registry: ServiceRegistry,
                 hardware: AccelerometerHardware,
                 name: Optional[str] = None,
                 config: Optional[AccelerometerConfig] = None,
                 max_ticks: Optional[int] = None):
        """
        Initialize the service.

        Args:
            event_bus: The event bus events are queued on
            service_registry: The service registry
            hardware: Where samples are read from
            name: Optional service name
            config: Accelerometer configuration
            max_ticks: Stop the read loop after this many ticks
        """
        config = config or AccelerometerConfig()
        super().__init__(event_bus, service_registry, name, config)
        self.hardware = hardware
        self.max_ticks = max_ticks
        self.ticks = 0
        self.read_task: Optional[asyncio.Task] = None
        self._tick_lock = asyncio.Lock()
        self.accelerometer = Accelerometer(
            event_sink=self._emit,
            request_refresh=self._request_refresh,
            thresholds=config.thresholds,
            sample_range=config.sample_range,
        )

    def _emit(self, event_id: int, value: int) -> None:
        """Translate a raw (source id, value) pair into a typed event."""
        if event_id == ID_GESTURE:
            event = GestureEvent(producer_name=self.name, gesture=Gesture(value))
        elif event_id == ID_ACCELEROMETER:
            x, y, z = self.accelerometer.sample
            event = AccelerometerDataUpdateEvent(producer_name=self.name, value=value, x=x, y=y, z=z)
        else:
            self.logger.warning("Dropping event from unknown source", source_id=event_id, value=value)
            return
        self.event_bus.queue(event, self.name)

    def _request_refresh(self) -> None:
        self.event_bus.queue(DisplayRefreshRequestedEvent(producer_name=self.name), self.name)

    async def start(self):
        """Initialize the hardware and start the read loop"""
        await super().start()
        try:
            await self.hardware.initialize()
            self.read_task = asyncio.create_task(self._read_loop())
            self.logger.info("Accelerometer service started",
                             update_interval=self.config.update_interval)
        except Exception as e:
            self.logger.error(f"Failed to initialize accelerometer: {e}")
            self._running = False
            self.service_registry.set_service_state(self.name, 'error')
            await self.publish_service_state('error', str(e))
            raise

    async def stop(self):
        """Stop the read loop and shut down the hardware"""
        if self.read_task and self.read_task is not asyncio.current_task():
            self.read_task.cancel()
            try:
                await self.read_task
            except asyncio.CancelledError:
                pass
        self.read_task = None
        if self.hardware.is_initialized():
            await self.hardware.shutdown()
        await super().stop()

    async def tick(self) -> None:
        """
        Advance the sensor by one sample and deliver the resulting events.
        """
        x, y, z = await self.hardware.read_sample()
        async with self._tick_lock:
            self.accelerometer.update(x, y, z)
            self.ticks += 1
        await self.event_bus.drain()

    async def _read_loop(self):
        """Tick at the configured interval until stopped or out of ticks"""
        while self._running:
            if self.max_ticks is not None and self.ticks >= self.max_ticks:
                self.logger.info("Tick limit reached", ticks=self.ticks)
                break
            try:
                await self.tick()
            except asyncio.CancelledError:
                raise
            except Exception as e:
                self.logger.error(f"Error in accelerometer read loop: {e}", ticks=self.ticks)
                break
            await asyncio.sleep(self.config.update_interval)

    async def snapshot(self) -> Dict[str, Any]:
        """
        Read a consistent view of the sensor between ticks.

        Returns:
            Axes in simple cartesian coordinates, pitch and roll in degrees,
            the current gestures and the combined strength
        """
        async with self._tick_lock:
            acc = self.accelerometer
            snapshot = {
                'x': acc.get_x(),
                'y': acc.get_y(),
                'z': acc.get_z(),
                'x_raw': acc.get_x(CoordinateSystem.RAW),
                'y_raw': acc.get_y(CoordinateSystem.RAW),
                'z_raw': acc.get_z(CoordinateSystem.RAW),
                'pitch': acc.get_pitch(),
                'roll': acc.get_roll(),
                'strength': math.floor(math.sqrt(acc.instantaneous_acceleration_squared())),
                'current_gesture': acc.current_gesture.name,
                'last_gesture': acc.last_gesture.name,
                'sample_range': acc.sample_range,
                'ticks': self.ticks,
            }
        # Reading activates the sensor; deliver the refresh it may have requested
        await self.event_bus.drain()
        return snapshot

