"""
Event tracing for accelsim.

Keeps a bounded buffer of the events that went through the bus so a session can
be inspected after the fact: which gestures were committed, how many data
updates were produced, and by whom.
"""

import time
import logging
from typing import Dict, List, Optional, Any, Deque
from collections import Counter, deque
from .events import BaseEvent, EventType

class EventTracer:
    """
    Records published events in a ring buffer.

    Each record keeps the event type, producer, trace id, the time it was
    recorded and the event payload.
    """

    def __init__(self, max_events: int = 1000):
        """
        Initialize the event tracer.

        Args:
            max_events: Maximum number of events to keep in the buffer
        """
        self.max_events = max_events
        self.events: Deque[Dict[str, Any]] = deque(maxlen=max_events)
        self.logger = logging.getLogger(__name__)

    def record_event(self, event: BaseEvent) -> None:
        """
        Record an event in the trace buffer.

        Args:
            event: The event to record
        """
        self.events.append({
            'timestamp': time.time(),
            'trace_id': event.trace_id,
            'type': EventType(event.type),
            'producer': event.producer_name,
            'event_data': event.model_dump(exclude={'trace_id', 'type', 'producer_name'})
        })
        self.logger.debug(f"Recorded event {event.type} from {event.producer_name}")

    def get_trace(self, trace_id: Optional[str] = None) -> List[Dict[str, Any]]:
        """
        Get all events for a specific trace ID, or every event if None.
        """
        if trace_id is None:
            return list(self.events)
        return [e for e in self.events if e['trace_id'] == trace_id]

    def get_events_by_type(self, event_type: EventType) -> List[Dict[str, Any]]:
        return [e for e in self.events if e['type'] == event_type]

    def get_event_count(self) -> int:
        return len(self.events)

    def clear(self) -> None:
        """Clear all recorded events."""
        self.events.clear()

    def get_event_stats(self) -> Dict[str, Any]:
        """
        Get statistics about recorded events.

        Returns:
            Dictionary with total count and counts per event type and producer
        """
        return {
            'total_events': len(self.events),
            'event_types': dict(Counter(e['type'] for e in self.events)),
            'producers': dict(Counter(e['producer'] for e in self.events)),
        }
