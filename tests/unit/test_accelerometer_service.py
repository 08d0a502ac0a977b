"""
Unit tests for the AccelerometerService.

These tests drive the service from a scripted sample source, so no timing or
randomness is involved apart from the read loop interval.
"""

import unittest
from unittest.mock import AsyncMock, patch
import sys
import os

sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), '../..')))

from accelsim.core.bus import EventBus
from accelsim.core.config import AccelerometerConfig
from accelsim.core.events import EventType
from accelsim.core.registry import EventRegistry, ServiceRegistry
from accelsim.hardware.simulated import ScriptedAccelerometer
from accelsim.sensors.constants import Gesture
from accelsim.services.accelerometer_service import AccelerometerService

class TestAccelerometerService(unittest.IsolatedAsyncioTestCase):
    """Test cases for the AccelerometerService class."""

    def make_service(self, samples, max_ticks=None, loop=False):
        self.hardware = ScriptedAccelerometer(samples, loop=loop)
        self.service = AccelerometerService(
            self.event_bus,
            self.service_registry,
            self.hardware,
            config=AccelerometerConfig(update_interval=0.001),
            max_ticks=max_ticks,
        )
        return self.service

    def setUp(self):
        """Set up test fixtures before each test method."""
        self.event_registry = EventRegistry()
        self.service_registry = ServiceRegistry()
        self.event_bus = EventBus(self.event_registry)
        self.received = []

        async def record(event):
            self.received.append(event)

        self.event_bus.subscribe(None, record, "test")

    async def asyncTearDown(self):
        if self.service.is_running:
            await self.service.stop()

    def of_type(self, event_type):
        return [e for e in self.received if e.type == event_type]

    async def test_tick_publishes_events_in_order(self):
        """The first tick requests a refresh, then reports the new sample."""
        service = self.make_service([(100, 200, 300)])
        await self.hardware.initialize()
        await service.tick()

        self.assertEqual([e.type for e in self.received],
                         [EventType.DISPLAY_REFRESH_REQUESTED, EventType.ACCELEROMETER_DATA_UPDATE])
        update = self.received[-1]
        self.assertEqual((update.x, update.y, update.z), (100, 200, 300))
        self.assertEqual(update.source_id, 4)
        self.assertEqual(update.value, 1)
        self.assertEqual(update.producer_name, service.name)
        self.assertEqual(service.ticks, 1)
        self.assertEqual(self.event_bus.pending_count, 0)

    async def test_gesture_event_published(self):
        service = self.make_service([(1023, 0, 0)] * 6)
        await self.hardware.initialize()
        for _ in range(6):
            await service.tick()

        gestures = self.of_type(EventType.GESTURE)
        self.assertEqual(len(gestures), 1)
        self.assertEqual(gestures[0].gesture, Gesture.TILT_RIGHT)
        self.assertEqual(gestures[0].source_id, 27)
        # The gesture precedes the data update of the same tick
        self.assertEqual(self.received[-1].type, EventType.ACCELEROMETER_DATA_UPDATE)
        self.assertEqual(self.received[-2].type, EventType.GESTURE)

    async def test_start_stop(self):
        """The read loop stops by itself at the tick limit."""
        service = self.make_service([(0, 0, -1023)], max_ticks=3, loop=True)
        await service.start()
        self.assertTrue(service.is_running)
        self.assertEqual(self.service_registry.get_service_state(service.name), 'running')

        await service.read_task
        self.assertEqual(service.ticks, 3)
        self.assertEqual(len(self.of_type(EventType.ACCELEROMETER_DATA_UPDATE)), 3)

        await service.stop()
        self.assertFalse(service.is_running)
        self.assertFalse(self.hardware.is_initialized())
        states = [e.state for e in self.of_type(EventType.SERVICE_STATE_CHANGED)]
        self.assertEqual(states, ['started', 'stopping', 'stopped'])

    async def test_exhausted_source_ends_read_loop(self):
        service = self.make_service([(0, 0, -1023)] * 3)
        await service.start()
        await service.read_task
        self.assertEqual(service.ticks, 3)
        self.assertTrue(service.is_running)

    async def test_snapshot(self):
        """A sample inside the 1g band with no axis past a tilt edge reads as NONE."""
        service = self.make_service([(300, 300, 800)])
        await self.hardware.initialize()
        await service.tick()

        snapshot = await service.snapshot()
        self.assertEqual((snapshot['x'], snapshot['y'], snapshot['z']), (-300, -300, 800))
        self.assertEqual((snapshot['x_raw'], snapshot['y_raw'], snapshot['z_raw']), (300, 300, 800))
        self.assertEqual(snapshot['strength'], 905)
        self.assertEqual(snapshot['current_gesture'], 'NONE')
        self.assertEqual(snapshot['last_gesture'], 'NONE')
        self.assertEqual(snapshot['sample_range'], 2)
        self.assertEqual(snapshot['ticks'], 1)
        self.assertIn('pitch', snapshot)
        self.assertIn('roll', snapshot)

    async def test_snapshot_of_weak_sample_is_freefall(self):
        """A combined force of 374 mg is below the free-fall tolerance."""
        service = self.make_service([(100, 200, 300)])
        await self.hardware.initialize()
        await service.tick()

        snapshot = await service.snapshot()
        self.assertEqual(snapshot['strength'], 374)
        self.assertEqual(snapshot['current_gesture'], 'FREEFALL')

    async def test_snapshot_before_first_tick_delivers_refresh(self):
        """Reading an idle sensor activates it, and the refresh is delivered at once."""
        service = self.make_service([])
        snapshot = await service.snapshot()

        self.assertEqual(snapshot['ticks'], 0)
        self.assertEqual((snapshot['x_raw'], snapshot['y_raw'], snapshot['z_raw']), (0, 0, -1023))
        self.assertEqual(self.event_bus.pending_count, 0)
        refreshes = self.of_type(EventType.DISPLAY_REFRESH_REQUESTED)
        self.assertEqual(len(refreshes), 1)
        self.assertEqual(refreshes[0].component, "accelerometer")

    async def test_start_fails_when_hardware_fails(self):
        service = self.make_service([])
        with patch.object(self.hardware, '_initialize_impl',
                          AsyncMock(side_effect=OSError("bus fault"))):
            with self.assertRaises(OSError):
                await service.start()

        self.assertFalse(service.is_running)
        self.assertIsNone(service.read_task)
        self.assertEqual(self.service_registry.get_service_state(service.name), 'error')
        states = self.of_type(EventType.SERVICE_STATE_CHANGED)
        self.assertEqual([e.state for e in states], ['started', 'error'])
        self.assertEqual(states[-1].error, "bus fault")

    async def test_start_requires_dependencies(self):
        class DisplayBoundService(AccelerometerService):
            REQUIRED_SERVICES = {"display"}

        self.hardware = ScriptedAccelerometer([])
        self.service = DisplayBoundService(self.event_bus, self.service_registry, self.hardware)
        with self.assertRaises(RuntimeError):
            await self.service.start()
        self.assertFalse(self.service.is_running)

        self.service_registry.set_service_state("display", "running")
        await self.service.start()
        self.assertTrue(self.service.is_running)

    async def test_unknown_source_is_dropped(self):
        service = self.make_service([])
        service._emit(99, 1)
        self.assertEqual(self.event_bus.pending_count, 0)

    def test_registers_produced_events(self):
        service = self.make_service([])
        for event_type in (EventType.GESTURE, EventType.ACCELEROMETER_DATA_UPDATE,
                           EventType.DISPLAY_REFRESH_REQUESTED):
            self.assertIn(service.name,
                          self.event_registry.get_event_flow(event_type)['producers'])

if __name__ == "__main__":
    unittest.main()
