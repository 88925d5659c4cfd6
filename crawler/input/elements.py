"""
Clickable element capability.

The dispatcher only needs two things from the host: find an element by
id, and attach/detach a click listener on it. ``ElementLocator`` and
``ClickTarget`` describe that contract. ``ElementRegistry`` is the
in-process implementation used with pygame, where an element is a
``ButtonState`` rectangle and a click is a hit test.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable, Protocol

from crawler.ui.button import ButtonState, update_hover_state

logger = logging.getLogger(__name__)


@dataclass
class ClickEvent:
    """A click delivered to an element."""
    element_id: str
    x: float = 0
    y: float = 0
    button: int = 1


ClickListener = Callable[[ClickEvent], None]


class ClickTarget(Protocol):
    """Anything that can carry click listeners."""

    def add_click_listener(self, listener: ClickListener) -> None: ...

    def remove_click_listener(self, listener: ClickListener) -> None: ...


class ElementLocator(Protocol):
    """Looks up click targets by identifier."""

    def find(self, element_id: str) -> ClickTarget | None: ...


@dataclass
class ClickableElement:
    """A registered element: its button rectangle plus attached listeners."""
    element_id: str
    button: ButtonState
    listeners: list[ClickListener] = field(default_factory=list)

    def add_click_listener(self, listener: ClickListener) -> None:
        self.listeners.append(listener)

    def remove_click_listener(self, listener: ClickListener) -> None:
        if listener in self.listeners:
            self.listeners.remove(listener)

    def click(self, x: float | None = None, y: float | None = None, button: int = 1) -> None:
        """Fire every listener, in attach order."""
        event = ClickEvent(
            element_id=self.element_id,
            x=self.button.x if x is None else x,
            y=self.button.y if y is None else y,
            button=button,
        )
        for listener in list(self.listeners):
            listener(event)


class ElementRegistry:
    """
    Elements addressable by id, hit-tested in registration order.

    Later registrations sit on top: ``element_at`` checks the most
    recently added element first.
    """

    def __init__(self):
        self._elements: dict[str, ClickableElement] = {}

    def add(self, element_id: str, button: ButtonState) -> ClickableElement:
        """Register (or replace) an element. Listeners on a replaced element are kept."""
        existing = self._elements.get(element_id)
        element = ClickableElement(element_id, button)
        if existing is not None:
            element.listeners = existing.listeners
        self._elements[element_id] = element
        return element

    def remove(self, element_id: str) -> None:
        self._elements.pop(element_id, None)

    def clear(self) -> None:
        self._elements.clear()

    def find(self, element_id: str) -> ClickableElement | None:
        return self._elements.get(element_id)

    def __contains__(self, element_id: str) -> bool:
        return element_id in self._elements

    def __len__(self) -> int:
        return len(self._elements)

    @property
    def buttons(self) -> list[ButtonState]:
        return [e.button for e in self._elements.values()]

    def element_at(self, x: float, y: float) -> ClickableElement | None:
        """Topmost enabled element under the point, if any."""
        for element in reversed(list(self._elements.values())):
            if not element.button.disabled and element.button.contains_point(x, y):
                return element
        return None

    def click_at(self, x: float, y: float, button: int = 1) -> bool:
        """
        Deliver a click at a screen position.

        Returns:
            True if an element was hit
        """
        element = self.element_at(x, y)
        if element is None:
            return False
        logger.debug(f"Click on '{element.element_id}' at ({x}, {y})")
        element.click(x, y, button)
        return True

    def update_hover(self, x: float, y: float) -> None:
        update_hover_state(self.buttons, x, y)
