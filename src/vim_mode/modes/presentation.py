"""Fixed mode to cursor-style mapping and the adapter that applies it."""

from __future__ import annotations

from types import MappingProxyType
from typing import Mapping

from vim_mode.host.editor import CursorStyle, EditorHandle

from .mode import VimMode

CURSOR_STYLES: Mapping[VimMode, CursorStyle] = MappingProxyType(
    {
        VimMode.NORMAL: CursorStyle.BLOCK,
        VimMode.INSERT: CursorStyle.LINE,
        VimMode.VISUAL_SELECT: CursorStyle.UNDERLINE_THIN,
    }
)

_missing = [mode for mode in VimMode if mode not in CURSOR_STYLES]
if _missing:  # pragma: no cover - import-time guard
    raise RuntimeError(f"No cursor style defined for {_missing}")


def cursor_style_for(mode: VimMode) -> CursorStyle:
    return CURSOR_STYLES[VimMode.parse(mode)]


class PresentationAdapter:
    """Writes the cursor style for a mode to the editor in one update."""

    def __init__(self, editor: EditorHandle) -> None:
        self._editor = editor

    def apply(self, mode: VimMode) -> CursorStyle:
        style = cursor_style_for(mode)
        options = self._editor.get_display_options()
        self._editor.set_display_options(options.with_cursor_style(style))
        return style


__all__ = ["CURSOR_STYLES", "PresentationAdapter", "cursor_style_for"]
