from __future__ import annotations

from typing import List

import pytest

from vim_mode.errors import (
    DisposedControllerError,
    InvalidModeError,
    UninitializedControllerError,
)
from vim_mode.host import CursorStyle, DisplayOptions, InMemoryEditor
from vim_mode.modes import (
    CURSOR_STYLES,
    ModeController,
    VimMode,
    cursor_style_for,
)


def make_controller() -> tuple[InMemoryEditor, ModeController]:
    editor = InMemoryEditor()
    return editor, ModeController(editor)


def test_construction_starts_in_normal_with_block_cursor() -> None:
    editor, controller = make_controller()

    assert controller.get_mode() is VimMode.NORMAL
    assert editor.cursor_style is CursorStyle.BLOCK
    assert len(editor.history) == 1


def test_presentation_mapping_covers_every_mode() -> None:
    assert set(CURSOR_STYLES) == set(VimMode)
    assert cursor_style_for(VimMode.NORMAL) is CursorStyle.BLOCK
    assert cursor_style_for(VimMode.INSERT) is CursorStyle.LINE
    assert cursor_style_for(VimMode.VISUAL_SELECT) is CursorStyle.UNDERLINE_THIN


@pytest.mark.parametrize("mode", list(VimMode))
def test_switch_mode_applies_matching_cursor_style(mode: VimMode) -> None:
    editor, controller = make_controller()

    controller.switch_mode(mode)

    assert controller.get_mode() is mode
    assert editor.cursor_style is CURSOR_STYLES[mode]


def test_switch_mode_to_current_mode_reapplies_presentation() -> None:
    editor, controller = make_controller()

    controller.switch_mode(VimMode.INSERT)
    controller.switch_mode(VimMode.INSERT)

    assert controller.get_mode() is VimMode.INSERT
    # construction + two switches, none skipped
    assert [opts.cursor_style for opts in editor.history] == [
        CursorStyle.BLOCK,
        CursorStyle.LINE,
        CursorStyle.LINE,
    ]


def test_presentation_update_preserves_other_display_options() -> None:
    editor = InMemoryEditor(DisplayOptions(cursor_blinking="solid", cursor_width=3))
    controller = ModeController(editor)

    controller.switch_mode(VimMode.VISUAL_SELECT)

    options = editor.get_display_options()
    assert options == DisplayOptions(
        cursor_style=CursorStyle.UNDERLINE_THIN,
        cursor_blinking="solid",
        cursor_width=3,
    )


def test_switch_mode_accepts_mode_names() -> None:
    _, controller = make_controller()

    controller.switch_mode("VisualSelect")
    assert controller.mode is VimMode.VISUAL_SELECT

    controller.switch_mode("insert")
    assert controller.mode is VimMode.INSERT


@pytest.mark.parametrize("bad", ["replace", 2, None, ""])
def test_switch_mode_rejects_unknown_modes(bad: object) -> None:
    editor, controller = make_controller()
    controller.switch_mode(VimMode.INSERT)
    writes = len(editor.history)

    with pytest.raises(InvalidModeError):
        controller.switch_mode(bad)  # type: ignore[arg-type]

    assert controller.get_mode() is VimMode.INSERT
    assert len(editor.history) == writes


def test_mode_is_the_fold_of_switch_calls() -> None:
    editor, controller = make_controller()
    sequence = [
        VimMode.INSERT,
        VimMode.NORMAL,
        VimMode.VISUAL_SELECT,
        VimMode.VISUAL_SELECT,
        VimMode.INSERT,
    ]

    for mode in sequence:
        controller.switch_mode(mode)
        assert editor.cursor_style is CURSOR_STYLES[controller.get_mode()]

    assert controller.get_mode() is sequence[-1]


def test_failed_presentation_keeps_previous_mode() -> None:
    class FlakyEditor(InMemoryEditor):
        fail = False

        def set_display_options(self, options: DisplayOptions) -> None:
            if self.fail:
                raise RuntimeError("renderer unavailable")
            super().set_display_options(options)

    editor = FlakyEditor()
    controller = ModeController(editor)
    editor.fail = True

    with pytest.raises(RuntimeError):
        controller.switch_mode(VimMode.INSERT)

    assert controller.get_mode() is VimMode.NORMAL
    assert editor.cursor_style is CursorStyle.BLOCK


def test_mode_is_visible_to_the_editor_while_presentation_applies() -> None:
    seen: List[VimMode] = []
    controller: ModeController | None = None

    class ObservingEditor(InMemoryEditor):
        def set_display_options(self, options: DisplayOptions) -> None:
            super().set_display_options(options)
            if controller is not None:
                seen.append(controller.get_mode())

    editor = ObservingEditor()
    controller = ModeController(editor)
    controller.switch_mode(VimMode.INSERT)

    assert seen == [VimMode.INSERT]


def test_get_mode_before_construction_completes_fails_fast() -> None:
    class EarlyQuery(ModeController):
        def __init__(self, editor: InMemoryEditor) -> None:
            self.get_mode()
            super().__init__(editor)

    editor = InMemoryEditor()

    with pytest.raises(UninitializedControllerError):
        EarlyQuery(editor)

    assert editor.history == []


def test_dispose_is_idempotent_and_silent() -> None:
    editor, controller = make_controller()
    controller.switch_mode(VimMode.INSERT)
    writes = len(editor.history)

    controller.dispose()
    controller.dispose()

    assert controller.disposed is True
    assert len(editor.history) == writes
    assert controller.get_mode() is VimMode.INSERT


def test_switch_after_dispose_fails_fast() -> None:
    editor, controller = make_controller()
    controller.dispose()

    with pytest.raises(DisposedControllerError):
        controller.switch_mode(VimMode.INSERT)

    assert controller.get_mode() is VimMode.NORMAL
    assert len(editor.history) == 1
