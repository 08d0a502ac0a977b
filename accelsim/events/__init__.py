"""
Event definitions for accelsim.

This package contains all event types used in the system, organized by functional area.
"""

# Re-export core types
from accelsim.core.events import EventType, BaseEvent
