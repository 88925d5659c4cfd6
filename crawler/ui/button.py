"""
Button state shared between the input layer and whatever draws buttons.

The core never renders a button. It reads ButtonState to hit-test
clicks and to know which keyboard shortcut a button stands for.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Sequence


@dataclass
class ButtonState:
    """
    Plain record describing one clickable, keyboard-bound button.

    Attributes:
        x, y: Top-left corner in screen pixels
        width, height: Size in pixels
        text: Label
        key: Keyboard shortcut wired through the input dispatcher
        disabled: Ignores clicks and never shows hover
        hovered: Mouse is currently over the button
    """
    x: float = 0
    y: float = 0
    width: float = 0
    height: float = 0
    text: str = ""
    key: str = ""
    disabled: bool = False
    hovered: bool = False

    def contains_point(self, px: float, py: float) -> bool:
        """Check if a point lies inside the button rectangle (edges inclusive)."""
        return (
            self.x <= px <= self.x + self.width
            and self.y <= py <= self.y + self.height
        )


def update_hover_state(
    buttons: ButtonState | Iterable[ButtonState],
    mouse_x: float,
    mouse_y: float,
) -> None:
    """Set ``hovered`` on one or more buttons from the mouse position."""
    if isinstance(buttons, ButtonState):
        buttons = [buttons]
    for button in buttons:
        button.hovered = button.contains_point(mouse_x, mouse_y) and not button.disabled


def set_enabled(button: ButtonState, enabled: bool) -> None:
    button.disabled = not enabled
    if button.disabled:
        button.hovered = False


def set_enabled_all(buttons: Iterable[ButtonState], enabled: bool) -> None:
    for button in buttons:
        set_enabled(button, enabled)


def apply_layout(
    buttons: Sequence[ButtonState],
    layouts: Sequence[tuple[float, float, float, float]],
) -> None:
    """
    Copy computed (x, y, width, height) rectangles onto buttons.

    Buttons without a matching layout entry are left untouched.
    """
    for button, rect in zip(buttons, layouts):
        button.x, button.y, button.width, button.height = rect
