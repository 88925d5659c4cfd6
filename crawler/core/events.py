"""
Typed event bus for decoupled notification.

Event types are Enums so subscribers never match on magic strings.
The input dispatcher and the save service publish through a bus when
one is handed to them; nothing in the core requires one.

Usage:
    bus = EventBus()
    bus.subscribe(SaveEvent.SAVE_COMPLETED, on_saved)
    bus.publish(SaveEvent.SAVE_COMPLETED, slot="wizardry_save")
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any, Callable
from weakref import WeakMethod, ref

logger = logging.getLogger(__name__)


class InputEvent(Enum):
    """Input dispatch events."""
    KEY_PRESSED = auto()
    KEY_RELEASED = auto()
    BUTTON_CLICKED = auto()
    INPUT_ENABLED = auto()
    INPUT_DISABLED = auto()


class SaveEvent(Enum):
    """Persistence events."""
    SAVE_STARTED = auto()
    SAVE_COMPLETED = auto()
    SAVE_FAILED = auto()
    LOAD_STARTED = auto()
    LOAD_COMPLETED = auto()
    LOAD_FAILED = auto()
    SAVE_DELETED = auto()
    AUTO_SAVE_TRIGGERED = auto()


@dataclass
class Event:
    """
    Event data container.

    Attributes:
        type: The event type (Enum member)
        data: Event-specific payload
        consumed: Set by a handler to stop propagation
    """
    type: Enum
    data: dict[str, Any] = field(default_factory=dict)
    consumed: bool = False

    def consume(self) -> None:
        self.consumed = True

    def get(self, key: str, default: Any = None) -> Any:
        return self.data.get(key, default)

    def __getitem__(self, key: str) -> Any:
        return self.data[key]


EventHandler = Callable[[Event], None]


@dataclass
class _Subscription:
    priority: int
    target: Any
    one_shot: bool
    weak: bool

    def resolve(self) -> EventHandler | None:
        if self.weak:
            return self.target()
        return self.target


class EventBus:
    """
    Publish/subscribe hub.

    Handlers run highest priority first; equal priorities keep
    subscription order. Weak subscriptions vanish with their owner.
    Events published from inside a handler are queued and delivered
    after the current dispatch finishes.
    """

    def __init__(self):
        self._subscriptions: dict[Enum, list[_Subscription]] = {}
        self._queue: list[Event] = []
        self._dispatching = False

    def subscribe(
        self,
        event_type: Enum,
        handler: EventHandler,
        priority: int = 0,
        one_shot: bool = False,
        weak: bool = True,
    ) -> None:
        """
        Subscribe to an event type.

        Args:
            event_type: The event type to listen for
            handler: Callback taking the Event
            priority: Higher runs first
            one_shot: Drop the handler after its first call
            weak: Hold only a weak reference to the handler
        """
        if weak:
            target = WeakMethod(handler) if hasattr(handler, "__self__") else ref(handler)
        else:
            target = handler

        subs = self._subscriptions.setdefault(event_type, [])
        position = len(subs)
        for i, existing in enumerate(subs):
            if priority > existing.priority:
                position = i
                break
        subs.insert(position, _Subscription(priority, target, one_shot, weak))

    def unsubscribe(self, event_type: Enum, handler: EventHandler) -> None:
        subs = self._subscriptions.get(event_type)
        if not subs:
            return
        self._subscriptions[event_type] = [s for s in subs if s.resolve() != handler]

    def publish(self, event_type: Enum, **data: Any) -> Event:
        """Publish an event and return it (check ``consumed`` afterwards)."""
        event = Event(type=event_type, data=data)
        if self._dispatching:
            self._queue.append(event)
        else:
            self._dispatch(event)
        return event

    def clear(self, event_type: Enum | None = None) -> None:
        if event_type is None:
            self._subscriptions.clear()
        else:
            self._subscriptions.pop(event_type, None)

    def handler_count(self, event_type: Enum) -> int:
        return sum(1 for s in self._subscriptions.get(event_type, []) if s.resolve() is not None)

    def _dispatch(self, event: Event) -> None:
        self._dispatching = True
        try:
            subs = self._subscriptions.get(event.type, [])
            finished: list[_Subscription] = []
            for sub in list(subs):
                handler = sub.resolve()
                if handler is None:
                    finished.append(sub)
                    continue
                try:
                    handler(event)
                except Exception:
                    logger.exception(f"Error in event handler for {event.type}")
                if sub.one_shot:
                    finished.append(sub)
                if event.consumed:
                    break
            for sub in finished:
                if sub in subs:
                    subs.remove(sub)
        finally:
            self._dispatching = False

        while self._queue:
            self._dispatch(self._queue.pop(0))
