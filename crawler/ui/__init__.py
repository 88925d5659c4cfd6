"""UI state consumed by the input layer."""

from crawler.ui.button import (
    ButtonState,
    apply_layout,
    set_enabled,
    set_enabled_all,
    update_hover_state,
)

__all__ = [
    "ButtonState",
    "apply_layout",
    "set_enabled",
    "set_enabled_all",
    "update_hover_state",
]
