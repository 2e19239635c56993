"""Mode state, presentation mapping and the controllers that own them."""

from .mode import VimMode
from .presentation import CURSOR_STYLES, PresentationAdapter, cursor_style_for
from .controller import BaseModeController, ModeController, ToggleModeController

__all__ = [
    "VimMode",
    "CURSOR_STYLES",
    "PresentationAdapter",
    "cursor_style_for",
    "BaseModeController",
    "ModeController",
    "ToggleModeController",
]
