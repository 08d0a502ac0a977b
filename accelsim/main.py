"""
Main entry point for accelsim.

This module wires the event system, the accelerometer service and a simulated
sample source together and runs them. It handles signal management, logging
setup, and system lifecycle.
"""

import asyncio
import logging
import signal
import sys
import structlog
from typing import Optional

from accelsim.core import (
    EventRegistry, ServiceRegistry, EventBus, EventTracer, get_config, ApplicationConfig
)
from accelsim.core.events import BaseEvent, EventType
from accelsim.events.system import ApplicationStartupCompletedEvent
from accelsim.hardware import NoisyAccelerometer
from accelsim.services import AccelerometerService

def setup_logging(level: str = "INFO"):
    """Configure structured logging for the application."""
    structlog.configure(
        processors=[
            structlog.stdlib.add_log_level,
            structlog.stdlib.add_logger_name,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.ConsoleRenderer()
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(
        format="%(message)s",
        level=getattr(logging, level),
        stream=sys.stdout,
    )

class AccelsimApplication:
    """
    Main application class.

    Owns the event system and the accelerometer service, and logs every
    gesture the sensor commits.
    """

    def __init__(self, config: Optional[ApplicationConfig] = None):
        self.logger = structlog.get_logger(app="accelsim")
        self.config = config or get_config()

        self.event_registry = EventRegistry()
        self.service_registry = ServiceRegistry()

        if self.config.event.tracing_enabled:
            self.event_tracer = EventTracer(max_events=self.config.event.max_trace_events)
        else:
            self.event_tracer = None

        self.event_bus = EventBus(self.event_registry, self.event_tracer)
        self.event_registry.register_event(
            EventType.APPLICATION_STARTUP_COMPLETED,
            ApplicationStartupCompletedEvent,
            "All services are running"
        )

        self.hardware = NoisyAccelerometer(self.config.simulator)
        self.accelerometer_service = AccelerometerService(
            event_bus=self.event_bus,
            service_registry=self.service_registry,
            hardware=self.hardware,
            config=self.config.accelerometer,
            max_ticks=self.config.simulator.max_ticks,
        )
        self._running = True

    async def _log_gesture(self, event: BaseEvent) -> None:
        self.logger.info("Gesture", gesture=event.gesture.name)

    async def initialize(self):
        """Start the accelerometer service and announce startup."""
        self.logger.info("Initializing accelsim")

        try:
            self.event_bus.subscribe(EventType.GESTURE, self._log_gesture, "accelsim")
            await self.accelerometer_service.start()

            await self.event_bus.publish(
                ApplicationStartupCompletedEvent(producer_name="accelsim"),
                "accelsim"
            )

            self.logger.info("accelsim initialization complete")

        except Exception as e:
            self.logger.error("Failed to initialize application", error=str(e), exc_info=True)
            raise

    async def run(self):
        """Run until interrupted or until the read loop finishes."""
        try:
            read_task = self.accelerometer_service.read_task
            while self._running:
                if read_task is not None and read_task.done():
                    break
                await asyncio.sleep(0.1)

        except asyncio.CancelledError:
            self.logger.info("Application task cancelled")

        finally:
            await self.shutdown()

    async def shutdown(self):
        """Stop the service and report what happened."""
        if not self.accelerometer_service.is_running:
            return

        self._running = False
        self.logger.info("Shutting down accelsim")
        try:
            await self.accelerometer_service.stop()
        except Exception as e:
            self.logger.error(f"Error stopping accelerometer service: {e}")

        if self.event_tracer:
            self.logger.info("Event stats", **self.event_tracer.get_event_stats())
        self.logger.info("accelsim shutdown complete",
                         ticks=self.accelerometer_service.ticks)

    def handle_signal(self, sig):
        """
        Handle termination signals.

        Args:
            sig: The signal received
        """
        self.logger.info(f"Received signal {sig.name}, shutting down")
        self._running = False

async def main():
    """Application entry point."""
    config = get_config()
    setup_logging(config.log_level.value)

    app = AccelsimApplication(config)

    loop = asyncio.get_running_loop()
    for sig in (signal.SIGINT, signal.SIGTERM):
        loop.add_signal_handler(
            sig, lambda s=sig: app.handle_signal(s))

    await app.initialize()
    await app.run()

def run():
    """Console script entry point."""
    try:
        asyncio.run(main())
    except Exception as e:
        logging.error(f"Fatal error: {e}", exc_info=True)
        sys.exit(1)

if __name__ == "__main__":
    run()
