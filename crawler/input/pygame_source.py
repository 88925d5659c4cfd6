"""
Pygame event source.

Translates raw pygame events into dispatcher calls:
- KEYDOWN / KEYUP -> ``key_down`` / ``key_up`` with the pygame key name
- MOUSEMOTION -> hover state on registered elements
- left MOUSEBUTTONDOWN -> click on the element under the cursor

Usage:
    source = PygameInputSource(dispatcher, elements)
    for event in pygame.event.get():
        source.process_event(event)
"""

from __future__ import annotations

import logging

import pygame

from crawler.input.dispatcher import InputDispatcher
from crawler.input.elements import ElementRegistry

logger = logging.getLogger(__name__)

LEFT_MOUSE_BUTTON = 1


class PygameInputSource:
    """Feeds pygame events into an InputDispatcher."""

    def __init__(
        self,
        dispatcher: InputDispatcher,
        elements: ElementRegistry | None = None,
    ):
        self.dispatcher = dispatcher
        self.elements = elements
        self.mouse_pos: tuple[int, int] = (0, 0)

    @staticmethod
    def key_name(event) -> str:
        """Readable key identifier for a key event ("a", "return", "escape")."""
        return pygame.key.name(event.key)

    def process_event(self, event) -> bool:
        """
        Process a single pygame event.

        Returns:
            True if the event was input this source understands
        """
        if event.type == pygame.KEYDOWN:
            name = self.key_name(event)
            if name:
                self.dispatcher.key_down(name, raw=event)
            return True

        if event.type == pygame.KEYUP:
            name = self.key_name(event)
            if name:
                self.dispatcher.key_up(name)
            return True

        if event.type == pygame.MOUSEMOTION:
            self.mouse_pos = tuple(event.pos)
            if self.elements is not None:
                self.elements.update_hover(*event.pos)
            return True

        if event.type == pygame.MOUSEBUTTONDOWN:
            self.mouse_pos = tuple(event.pos)
            if event.button == LEFT_MOUSE_BUTTON and self.elements is not None:
                self.elements.click_at(event.pos[0], event.pos[1], event.button)
            return True

        return False

    def pump(self) -> int:
        """Drain the pygame queue. Returns the number of events handled."""
        handled = 0
        for event in pygame.event.get():
            if self.process_event(event):
                handled += 1
        return handled
