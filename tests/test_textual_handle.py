from __future__ import annotations

from dataclasses import dataclass
from typing import List

from vim_mode.adapters.textual import TextualEditorHandle
from vim_mode.config import InputProtocol, VimModeConfig
from vim_mode.contribution import attach_vim_mode
from vim_mode.host import CursorStyle, DisplayOptions, KeyInput
from vim_mode.modes import VimMode


@dataclass
class FakeTextArea:
    border_subtitle: str = ""
    cursor_blink: bool = True


def test_handle_renders_initial_options() -> None:
    widget = FakeTextArea()

    TextualEditorHandle(widget, options=DisplayOptions(cursor_blinking="solid"))

    assert widget.border_subtitle.endswith("line")
    assert widget.cursor_blink is False


def test_contribution_updates_widget_subtitle() -> None:
    widget = FakeTextArea()
    handle = TextualEditorHandle(widget)
    contribution = attach_vim_mode(
        handle, config=VimModeConfig(protocol=InputProtocol.COMMANDS)
    )
    subtitles: List[str] = [widget.border_subtitle]

    contribution.handle_key(KeyInput("v"))
    subtitles.append(widget.border_subtitle)
    contribution.handle_key(KeyInput("ESC"))
    subtitles.append(widget.border_subtitle)

    assert [s.split()[-1] for s in subtitles] == [
        CursorStyle.BLOCK.value,
        CursorStyle.UNDERLINE_THIN.value,
        CursorStyle.BLOCK.value,
    ]


def test_feed_key_drives_toggle_protocol() -> None:
    widget = FakeTextArea()
    handle = TextualEditorHandle(widget)
    contribution = attach_vim_mode(
        handle, config=VimModeConfig(protocol=InputProtocol.TOGGLE)
    )

    handle.feed_key(KeyInput("ESC"))

    assert contribution.get_mode() is VimMode.INSERT
    assert handle.get_display_options().cursor_style is CursorStyle.LINE
    assert widget.border_subtitle.endswith("line")

    contribution.dispose()
    handle.feed_key(KeyInput("ESC"))
    assert contribution.get_mode() is VimMode.INSERT
