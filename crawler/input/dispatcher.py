"""
Input dispatcher - routes key presses and element clicks to handlers.

One dispatcher is created by the application root and passed to every
scene or service that needs input. Game code registers handlers and
gets back an unsubscribe callable; the host feeds raw events in through
``key_down`` / ``key_up`` (see ``PygameInputSource``).

Usage:
    inputs = InputDispatcher(elements=registry)

    unsubscribe = inputs.on_key_press("S", start_game)
    inputs.on_button_click("start-button", start_game)

    # Blocking prompt
    answer = await inputs.wait_for_single_keystroke(["y", "n"])

    unsubscribe()
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Iterable, Optional

from crawler.core.events import EventBus, InputEvent
from crawler.input.elements import ClickEvent, ClickListener, ClickTarget, ElementLocator

logger = logging.getLogger(__name__)


@dataclass
class KeyEvent:
    """A key-down as seen by handlers."""
    key: str
    raw: Any = None


KeyHandler = Callable[[Optional[KeyEvent]], None]
ClickHandler = Callable[[Optional[ClickEvent]], None]
Unsubscribe = Callable[[], None]


@dataclass
class KeyOptions:
    """Options for ``on_key_press``."""
    case_sensitive: bool = False


@dataclass
class InputState:
    """
    Snapshot of the dispatcher registry.

    Returned by ``get_input_state``; every container is a copy, so
    mutating a snapshot never touches live registrations.
    """
    enabled: bool = True
    pressed_keys: set[str] = field(default_factory=set)
    key_handlers: dict[str, list[KeyHandler]] = field(default_factory=dict)
    click_handlers: dict[str, ClickHandler] = field(default_factory=dict)


@dataclass
class _ClickBinding:
    handler: ClickHandler
    target: ClickTarget
    listener: ClickListener


@dataclass
class _KeystrokeWaiter:
    valid_keys: frozenset[str] | None
    future: asyncio.Future

    def accepts(self, key: str) -> bool:
        return self.valid_keys is None or key in self.valid_keys


def normalize_key(key: str, case_sensitive: bool = False) -> str:
    """Lowercase a key identifier unless case-sensitive matching was asked for."""
    return key if case_sensitive else key.lower()


def _noop() -> None:
    pass


class InputDispatcher:
    """
    Registry of key and click handlers behind a global enable gate.

    Key handlers: several per key, invoked in registration order.
    Click handlers: one per element id, the latest registration wins and
    the previous listener is detached from its element.
    """

    def __init__(
        self,
        elements: ElementLocator | None = None,
        event_bus: EventBus | None = None,
    ):
        self.elements = elements
        self.event_bus = event_bus

        self._enabled = True
        self._pressed_keys: set[str] = set()
        self._key_handlers: dict[str, list[KeyHandler]] = {}
        self._click_bindings: dict[str, _ClickBinding] = {}
        self._waiters: list[_KeystrokeWaiter] = []

    # Registration

    def on_key_press(
        self,
        key: str,
        handler: KeyHandler,
        options: KeyOptions | None = None,
    ) -> Unsubscribe:
        """
        Register a handler for a key.

        Args:
            key: Key identifier ("s", "Enter", ...)
            handler: Called with the KeyEvent on every matching key-down
            options: KeyOptions; keys are lowercased unless case_sensitive

        Returns:
            Callable removing exactly this registration
        """
        options = options or KeyOptions()
        normalized = normalize_key(key, options.case_sensitive)
        self._key_handlers.setdefault(normalized, []).append(handler)

        removed = False

        def unsubscribe() -> None:
            nonlocal removed
            if removed:
                return
            removed = True
            handlers = self._key_handlers.get(normalized)
            if not handlers:
                return
            for i, registered in enumerate(handlers):
                if registered is handler:
                    del handlers[i]
                    break
            if not handlers:
                del self._key_handlers[normalized]

        return unsubscribe

    def on_button_click(self, element_id: str, handler: ClickHandler) -> Unsubscribe:
        """
        Register the click handler for an element.

        A missing element is logged and yields a no-op unsubscribe rather
        than an error, so scene setup never has to check for existence.
        """
        target = self.elements.find(element_id) if self.elements is not None else None
        if target is None:
            logger.error(f"Element with id '{element_id}' not found")
            return _noop

        previous = self._click_bindings.get(element_id)
        if previous is not None:
            previous.target.remove_click_listener(previous.listener)

        def listener(event: ClickEvent) -> None:
            if not self._enabled:
                return
            handler(event)
            if self.event_bus:
                self.event_bus.publish(InputEvent.BUTTON_CLICKED, element_id=element_id)

        binding = _ClickBinding(handler=handler, target=target, listener=listener)
        target.add_click_listener(listener)
        self._click_bindings[element_id] = binding

        def unsubscribe() -> None:
            target.remove_click_listener(listener)
            if self._click_bindings.get(element_id) is binding:
                del self._click_bindings[element_id]

        return unsubscribe

    def off_key_press(self, key: str) -> None:
        """Remove every handler registered for a key."""
        self._key_handlers.pop(normalize_key(key), None)

    def clear_all_handlers(self) -> None:
        """Drop all key and click handlers. Gate and pressed keys are untouched."""
        self._key_handlers.clear()
        for binding in self._click_bindings.values():
            binding.target.remove_click_listener(binding.listener)
        self._click_bindings.clear()

    # Queries

    def is_key_pressed(self, key: str) -> bool:
        return normalize_key(key) in self._pressed_keys

    @property
    def enabled(self) -> bool:
        return self._enabled

    def set_input_enabled(self, enabled: bool) -> None:
        """Open or close the global gate for key and click handlers."""
        if enabled == self._enabled:
            return
        self._enabled = enabled
        if self.event_bus:
            self.event_bus.publish(
                InputEvent.INPUT_ENABLED if enabled else InputEvent.INPUT_DISABLED
            )

    def get_input_state(self) -> InputState:
        return InputState(
            enabled=self._enabled,
            pressed_keys=set(self._pressed_keys),
            key_handlers={k: list(v) for k, v in self._key_handlers.items()},
            click_handlers={k: b.handler for k, b in self._click_bindings.items()},
        )

    @property
    def pending_keystroke_waits(self) -> int:
        return len(self._waiters)

    # One-shot waits

    def wait_for_single_keystroke(
        self,
        valid_keys: Iterable[str] | None = None,
    ) -> asyncio.Future:
        """
        Wait for the next qualifying key-down.

        The waiter is registered immediately. The returned future
        resolves with the normalized key; keys outside ``valid_keys`` and
        keys arriving while input is disabled are ignored. Cancelling the
        future deregisters the waiter.

        Must be called with a running event loop.
        """
        loop = asyncio.get_running_loop()
        keys = frozenset(k.lower() for k in valid_keys) if valid_keys is not None else None
        waiter = _KeystrokeWaiter(valid_keys=keys, future=loop.create_future())
        self._waiters.append(waiter)
        waiter.future.add_done_callback(lambda _: self._discard_waiter(waiter))
        return waiter.future

    def _discard_waiter(self, waiter: _KeystrokeWaiter) -> None:
        if waiter in self._waiters:
            self._waiters.remove(waiter)

    # Host entry points

    def key_down(self, key: str, raw: Any = None) -> None:
        """
        Feed a key-down from the host.

        Ignored entirely while input is disabled.
        """
        if not self._enabled:
            return

        normalized = key.lower()
        self._pressed_keys.add(normalized)
        event = KeyEvent(key=normalized, raw=raw)
        # Waits opened by a handler below start with the next key-down
        waiters = list(self._waiters)

        handlers = list(self._key_handlers.get(normalized, []))
        if key != normalized:
            handlers.extend(self._key_handlers.get(key, []))
        for handler in handlers:
            try:
                handler(event)
            except Exception:
                logger.exception(f"Error in key handler for '{normalized}'")

        for waiter in waiters:
            if not self._enabled:
                break
            if not waiter.future.done() and waiter.accepts(normalized):
                waiter.future.set_result(normalized)
                self._discard_waiter(waiter)

        if self.event_bus:
            self.event_bus.publish(InputEvent.KEY_PRESSED, key=normalized)

    def key_up(self, key: str) -> None:
        """Feed a key-up. Always clears the key, even while disabled."""
        normalized = key.lower()
        self._pressed_keys.discard(normalized)
        if self.event_bus:
            self.event_bus.publish(InputEvent.KEY_RELEASED, key=normalized)
