"""Editor handle that renders display options onto a Textual widget."""

from __future__ import annotations

from typing import Any, Optional

from vim_mode.host.editor import (
    CursorStyle,
    DisplayOptions,
    EditorHandle,
    KeyInput,
    RawInputFeed,
    RawInputHandler,
    Subscription,
)

# Textual has no cursor shapes; the style is surfaced in the border subtitle.
_STYLE_GLYPHS = {
    CursorStyle.BLOCK: "█",
    CursorStyle.BLOCK_OUTLINE: "▯",
    CursorStyle.LINE: "▏",
    CursorStyle.LINE_THIN: "│",
    CursorStyle.UNDERLINE: "▁",
    CursorStyle.UNDERLINE_THIN: "_",
}


class TextualEditorHandle(EditorHandle):
    """Bridges ``DisplayOptions`` writes and raw keys to a ``TextArea``.

    ``widget`` only needs ``border_subtitle`` and ``cursor_blink`` attributes,
    so tests can pass a plain object.
    """

    def __init__(self, widget: Any, *, options: Optional[DisplayOptions] = None) -> None:
        self.widget = widget
        self._options = options or DisplayOptions()
        self._input = RawInputFeed()
        self._render(self._options)

    def get_display_options(self) -> DisplayOptions:
        return self._options

    def set_display_options(self, options: DisplayOptions) -> None:
        self._options = options
        self._render(options)

    def on_raw_input(self, handler: RawInputHandler) -> Subscription:
        return self._input.subscribe(handler)

    def feed_key(self, key: KeyInput) -> None:
        self._input.emit(key)

    def _render(self, options: DisplayOptions) -> None:
        glyph = _STYLE_GLYPHS[options.cursor_style]
        self.widget.border_subtitle = f"{glyph} {options.cursor_style.value}"
        self.widget.cursor_blink = options.cursor_blinking != "solid"


__all__ = ["TextualEditorHandle"]
