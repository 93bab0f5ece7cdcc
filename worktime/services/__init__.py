"""
Service layer helpers that orchestrate adapters and domain logic.
"""

from .availability import AvailabilityService, EventSourceProtocol

__all__ = ["AvailabilityService", "EventSourceProtocol"]
