"""
Service lifecycle for accelsim.

A service declares the events it raises so the bus can validate them, names
the services it needs running first, and reports every lifecycle transition
both to the service registry and on the bus.
"""

import asyncio
import structlog
from typing import Dict, Set, Any, Optional, ClassVar
from .events import EventType
from .registry import ServiceRegistry
from .bus import EventBus

class BaseService:
    """
    Base class for services that run on the event bus.

    Subclasses extend `start` and `stop`: call `super().start()` before
    acquiring resources and `super().stop()` after releasing them.
    """

    # EventType -> {'schema': event class, 'description': text}
    PRODUCES_EVENTS: ClassVar[Dict[EventType, Dict[str, Any]]] = {}

    # Names of services that must be running before this one starts
    REQUIRED_SERVICES: ClassVar[Set[str]] = set()

    def __init__(self,
                 event_bus: EventBus,
                 service_registry: ServiceRegistry,
                 name: Optional[str] = None,
                 config: Optional[Any] = None):
        """
        Args:
            event_bus: Bus the service raises its events on
            service_registry: Registry tracking service states
            name: Service name, the class name by default
            config: Service configuration
        """
        from accelsim.events.system import ServiceStateChangedEvent

        self.event_bus = event_bus
        self.service_registry = service_registry
        self.name = name or self.__class__.__name__
        self.config = config
        self.logger = structlog.get_logger(service=self.name)

        self._running = False
        self._lock = asyncio.Lock()

        registry = event_bus.registry
        registry.register_event(EventType.SERVICE_STATE_CHANGED, ServiceStateChangedEvent,
                                "Service lifecycle state changed")
        for event_type, info in self.PRODUCES_EVENTS.items():
            registry.register_event(event_type, info['schema'], info['description'])
            registry.register_producer(self.name, event_type)

        service_registry.register_service(self.name, self)

    @property
    def is_running(self) -> bool:
        return self._running

    def _check_dependencies(self) -> None:
        missing = [d for d in sorted(self.REQUIRED_SERVICES)
                   if self.service_registry.get_service_state(d) != 'running']
        if missing:
            raise RuntimeError(f"Required services not running: {', '.join(missing)}")

    async def start(self) -> None:
        """
        Mark the service running once its dependencies are up.

        Raises:
            RuntimeError: If a required service is not running
        """
        async with self._lock:
            if self._running:
                self.logger.warning("Service already running")
                return

            self._check_dependencies()
            self._running = True
            await self._set_state('running', 'started')
            self.logger.info("Service started")

    async def stop(self) -> None:
        """Mark the service stopped, announcing the transition on the bus."""
        async with self._lock:
            if not self._running:
                self.logger.warning("Service already stopped")
                return

            await self.publish_service_state('stopping')
            self._running = False
            await self._set_state('stopped', 'stopped')
            self.logger.info("Service stopped")

    async def _set_state(self, registry_state: str, announced: str) -> None:
        self.service_registry.set_service_state(self.name, registry_state)
        await self.publish_service_state(announced)

    async def publish_service_state(self, state: str, error: Optional[str] = None) -> None:
        """
        Announce a lifecycle state on the bus.

        Args:
            state: 'started', 'stopping', 'stopped' or 'error'
            error: Failure description when state is 'error'
        """
        from accelsim.events.system import ServiceStateChangedEvent

        await self.event_bus.publish(
            ServiceStateChangedEvent(producer_name=self.name, service_name=self.name,
                                     state=state, error=error),
            self.name
        )
