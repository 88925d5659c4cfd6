"""Core runtime pieces."""

from crawler.core.events import EventBus, Event, EventHandler, InputEvent, SaveEvent

__all__ = [
    "EventBus",
    "Event",
    "EventHandler",
    "InputEvent",
    "SaveEvent",
]
