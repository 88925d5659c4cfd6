"""
Crawler runtime layer.

Event bus, input dispatch and the button state the input layer reads.

Quick Start:
    from crawler import InputDispatcher, ElementRegistry, ButtonState

    elements = ElementRegistry()
    elements.add("start", ButtonState(x=10, y=10, width=120, height=32, text="Start", key="s"))

    inputs = InputDispatcher(elements=elements)
    inputs.on_key_press("s", start_game)
    inputs.on_button_click("start", start_game)
"""

__version__ = "0.1.0"

from crawler.core import EventBus, Event, InputEvent, SaveEvent
from crawler.input import (
    InputDispatcher,
    InputState,
    KeyEvent,
    KeyOptions,
    ClickEvent,
    ElementRegistry,
    SceneInputs,
)
from crawler.ui import ButtonState

__all__ = [
    "EventBus",
    "Event",
    "InputEvent",
    "SaveEvent",
    "InputDispatcher",
    "InputState",
    "KeyEvent",
    "KeyOptions",
    "ClickEvent",
    "ElementRegistry",
    "SceneInputs",
    "ButtonState",
]
