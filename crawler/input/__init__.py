"""Input handling module."""

from crawler.input.dispatcher import (
    InputDispatcher,
    InputState,
    KeyEvent,
    KeyOptions,
    normalize_key,
)
from crawler.input.elements import (
    ClickEvent,
    ClickTarget,
    ClickableElement,
    ElementLocator,
    ElementRegistry,
)
from crawler.input.scene import SceneInputs

__all__ = [
    "InputDispatcher",
    "InputState",
    "KeyEvent",
    "KeyOptions",
    "normalize_key",
    "ClickEvent",
    "ClickTarget",
    "ClickableElement",
    "ElementLocator",
    "ElementRegistry",
    "SceneInputs",
]
