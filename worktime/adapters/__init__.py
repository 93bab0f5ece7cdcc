"""
Adapters layer - Event sources feeding the availability service.
"""

from .memory_event_source import InMemoryEventSource

__all__ = ["InMemoryEventSource"]
