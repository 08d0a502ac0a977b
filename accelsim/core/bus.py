"""
Event bus for accelsim.

This module provides the event bus that delivers events between components.
It handles event validation, tracing, and delivery to subscribers.

The sensor model itself is synchronous, so besides the async `publish` the bus
offers `queue`, which only records an event, and `drain`, which delivers queued
events in the order they were queued.
"""

import asyncio
import logging
from collections import deque
from typing import Deque, Dict, List, Optional, Callable, Awaitable, Set, Tuple
from .events import EventType, BaseEvent
from .registry import EventRegistry
from .tracing import EventTracer

# Type aliases
EventHandler = Callable[[BaseEvent], Awaitable[None]]

class EventBus:
    """
    Central event bus for delivering typed events between components.

    The event bus is responsible for:
    - Validating events against their registered schemas
    - Tracking event producers and consumers
    - Routing events to subscribers
    - Handling errors during event delivery
    - Providing observability through tracing
    """

    def __init__(self, registry: EventRegistry, tracer: Optional[EventTracer] = None):
        """
        Initialize the event bus.

        Args:
            registry: The event registry for validation and tracking
            tracer: Optional event tracer for observability
        """
        self.registry = registry
        self.tracer = tracer
        self.subscribers: Dict[EventType, List[EventHandler]] = {}
        self.wildcard_subscribers: List[EventHandler] = []
        self._pending: Deque[Tuple[BaseEvent, str]] = deque()
        self.logger = logging.getLogger(__name__)

    def queue(self, event: BaseEvent, sender: str) -> None:
        """
        Queue an event for delivery on the next `drain`.

        Safe to call from synchronous code; nothing is delivered until the
        owner of the event loop drains the bus.

        Args:
            event: The event to queue
            sender: Name of the component queueing the event
        """
        self._pending.append((event, sender))

    @property
    def pending_count(self) -> int:
        return len(self._pending)

    async def drain(self) -> int:
        """
        Deliver every queued event, oldest first.

        Events queued by handlers while draining are delivered in the same call.

        Returns:
            Number of events taken off the queue
        """
        delivered = 0
        while self._pending:
            event, sender = self._pending.popleft()
            await self.publish(event, sender)
            delivered += 1
        return delivered

    async def publish(self, event: BaseEvent, sender: str) -> None:
        """
        Publish an event to all subscribers.

        Args:
            event: The event to publish
            sender: Name of the component publishing the event
        """
        if not event.producer_name:
            event.producer_name = sender

        try:
            self.registry.validate_schema(event)
        except (ValueError, TypeError) as e:
            self.logger.error(f"Event validation failed: {e}")
            return

        if self.tracer:
            self.tracer.record_event(event)

        event_type = EventType(event.type)
        specific_subscribers = self.subscribers.get(event_type, [])
        all_subscribers = specific_subscribers + self.wildcard_subscribers

        if not all_subscribers:
            self.logger.debug(f"No subscribers for event type: {event_type}")
            return

        tasks = [asyncio.create_task(self._deliver_event(subscriber, event))
                 for subscriber in all_subscribers]
        results = await asyncio.gather(*tasks, return_exceptions=True)

        for result in results:
            if isinstance(result, Exception):
                self.logger.error(f"Error in event handler: {result}", exc_info=result)

    async def _deliver_event(self, handler: EventHandler, event: BaseEvent) -> None:
        """
        Deliver an event to a single handler with error handling.

        Args:
            handler: The event handler function
            event: The event to deliver
        """
        try:
            await handler(event)
        except asyncio.CancelledError:
            raise
        except Exception as e:
            # Handler failures never reach the publisher
            self.logger.error(f"Error delivering event {event.type} to {handler.__qualname__}: {e}")

    def subscribe(self, event_type: Optional[EventType], handler: EventHandler, service_name: str) -> None:
        """
        Subscribe a handler to events of a specific type, or all events if None.

        Args:
            event_type: The event type to subscribe to, or None for all events
            handler: The handler function to call when events arrive
            service_name: Name of the subscribing component
        """
        if event_type is None:
            self.wildcard_subscribers.append(handler)
            self.logger.debug(f"Service {service_name} subscribed to all events")
        else:
            event_type = EventType(event_type)
            self.subscribers.setdefault(event_type, []).append(handler)
            self.registry.register_consumer(service_name, event_type)
            self.logger.debug(f"Service {service_name} subscribed to {event_type}")

    def unsubscribe(self, event_type: Optional[EventType], handler: EventHandler) -> None:
        """
        Unsubscribe a handler from events of a specific type, or all events if None.

        Args:
            event_type: The event type to unsubscribe from, or None for all events
            handler: The handler function to unsubscribe
        """
        if event_type is None:
            if handler in self.wildcard_subscribers:
                self.wildcard_subscribers.remove(handler)
                self.logger.debug(f"Handler {handler.__qualname__} unsubscribed from all events")
        elif event_type in self.subscribers:
            if handler in self.subscribers[event_type]:
                self.subscribers[event_type].remove(handler)
                if not self.subscribers[event_type]:
                    del self.subscribers[event_type]
                self.logger.debug(f"Handler {handler.__qualname__} unsubscribed from {event_type}")

    def get_subscribers(self, event_type: EventType) -> Set[EventHandler]:
        """
        Get all subscribers for an event type, including wildcard subscribers.
        """
        specific = set(self.subscribers.get(event_type, []))
        wildcards = set(self.wildcard_subscribers)
        return specific.union(wildcards)
