"""
Event and service registries for accelsim.

The event registry knows the schema of every event type and who raises and
listens to it; the bus refuses events it cannot validate against it. The
service registry records the lifecycle state of each service so services can
check their dependencies before starting.
"""

import logging
from typing import Dict, Set, Type, Any, Optional
from .events import EventType, BaseEvent

class EventRegistry:
    """Schemas, producers and consumers per event type."""

    def __init__(self):
        self._schemas: Dict[EventType, Type[BaseEvent]] = {}
        self._descriptions: Dict[EventType, str] = {}
        self._producers: Dict[EventType, Set[str]] = {}
        self._consumers: Dict[EventType, Set[str]] = {}
        self._logger = logging.getLogger(__name__)

    def register_event(self, event_type: EventType, event_schema: Type[BaseEvent], description: str):
        """
        Declare the pydantic model events of `event_type` must be instances of.

        Registering the same type again replaces its schema.
        """
        event_type = EventType(event_type)
        self._schemas[event_type] = event_schema
        self._descriptions[event_type] = description
        self._logger.debug(f"Registered event type {event_type.value}: {description}")

    def register_producer(self, service_name: str, event_type: EventType):
        self._producers.setdefault(EventType(event_type), set()).add(service_name)

    def register_consumer(self, service_name: str, event_type: EventType):
        self._consumers.setdefault(EventType(event_type), set()).add(service_name)

    def validate_schema(self, event: BaseEvent) -> bool:
        """
        Check an event against the schema registered for its type.

        Raises:
            ValueError: If no schema is registered for the event type
            TypeError: If the event is not an instance of the registered schema
        """
        event_type = EventType(event.type)
        schema = self._schemas.get(event_type)
        if schema is None:
            raise ValueError(f"Unknown event type: {event_type.value}")
        if not isinstance(event, schema):
            raise TypeError(f"{type(event).__name__} is not a {schema.__name__} "
                            f"for event type {event_type.value}")
        return True

    def get_event_flow(self, event_type: EventType) -> Dict[str, Set[str]]:
        """Producers and consumers known for an event type."""
        event_type = EventType(event_type)
        return {
            'producers': set(self._producers.get(event_type, ())),
            'consumers': set(self._consumers.get(event_type, ())),
        }

class ServiceRegistry:
    """Lifecycle state of every registered service, by name."""

    def __init__(self):
        self._services: Dict[str, Any] = {}
        self._states: Dict[str, str] = {}
        self._logger = logging.getLogger(__name__)

    def register_service(self, service_name: str, service_instance: Any):
        self._services[service_name] = service_instance
        self.set_service_state(service_name, "registered")

    def set_service_state(self, service_name: str, state: str):
        previous = self._states.get(service_name)
        self._states[service_name] = state
        self._logger.debug(f"Service {service_name}: {previous} -> {state}")

    def get_service_state(self, service_name: str) -> Optional[str]:
        return self._states.get(service_name)
