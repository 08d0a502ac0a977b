"""
Core event system for accelsim.

This module defines the base event model and the event type enum that form the
foundation of the typed event system. All events in the system inherit from
BaseEvent.
"""

from pydantic import BaseModel, ConfigDict, Field
from typing import Optional
from enum import Enum
import time
import uuid

class EventType(str, Enum):
    """
    Enum defining all event types in the system.

    Using string-based enum to ensure JSON serialization works properly.
    """
    # Sensor events
    ACCELEROMETER_DATA_UPDATE = "accelerometer_data_update"
    GESTURE = "gesture"

    # Display events
    DISPLAY_REFRESH_REQUESTED = "display_refresh_requested"

    # Application lifecycle events
    APPLICATION_STARTUP_COMPLETED = "application_startup_completed"

    # System events
    SERVICE_STATE_CHANGED = "service_state_changed"

def generate_trace_id() -> str:
    """Generate a unique trace ID for event tracing."""
    return str(uuid.uuid4())

class BaseEvent(BaseModel):
    """
    Base model for all events with common metadata.

    Every event specifies its event type and any additional payload fields
    required for that event.
    """
    model_config = ConfigDict(extra="allow")

    type: EventType
    producer_name: str = ""
    timestamp: float = Field(default_factory=time.time)
    trace_id: Optional[str] = Field(default_factory=generate_trace_id)
