"""
Per-scene input subscriptions with one-call cleanup.
"""

from __future__ import annotations

import asyncio
from typing import Iterable

from crawler.input.dispatcher import (
    ClickHandler,
    InputDispatcher,
    KeyHandler,
    KeyOptions,
    Unsubscribe,
)


class SceneInputs:
    """
    Records every registration a scene makes so it can all be torn down
    when the scene exits, including pending keystroke prompts.

    Usage:
        with SceneInputs(dispatcher) as inputs:
            inputs.on_key_press("t", go_to_tavern)
            choice = await inputs.wait_for_single_keystroke(["y", "n"])
    """

    def __init__(self, dispatcher: InputDispatcher):
        self.dispatcher = dispatcher
        self._subscriptions: list[Unsubscribe] = []
        self._waits: list[asyncio.Future] = []

    def on_key_press(
        self,
        key: str,
        handler: KeyHandler,
        options: KeyOptions | None = None,
    ) -> Unsubscribe:
        unsubscribe = self.dispatcher.on_key_press(key, handler, options)
        self._subscriptions.append(unsubscribe)
        return unsubscribe

    def on_button_click(self, element_id: str, handler: ClickHandler) -> Unsubscribe:
        unsubscribe = self.dispatcher.on_button_click(element_id, handler)
        self._subscriptions.append(unsubscribe)
        return unsubscribe

    def wait_for_single_keystroke(self, valid_keys: Iterable[str] | None = None) -> asyncio.Future:
        future = self.dispatcher.wait_for_single_keystroke(valid_keys)
        self._waits.append(future)
        return future

    @property
    def subscription_count(self) -> int:
        return len(self._subscriptions)

    def destroy(self) -> None:
        """Unsubscribe everything and cancel unfinished waits."""
        for unsubscribe in self._subscriptions:
            unsubscribe()
        self._subscriptions.clear()
        for future in self._waits:
            if not future.done():
                future.cancel()
        self._waits.clear()

    def __enter__(self) -> SceneInputs:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.destroy()
