"""Built-in mode-transition commands."""

from __future__ import annotations

from typing import Sequence

from vim_mode.modes.mode import VimMode

from .gate import CommandGate
from .models import CommandDescriptor, KeyBinding, Precondition

ENTER_INSERT = "enter-insert"
ENTER_NORMAL = "enter-normal"
ENTER_VISUAL_SELECT = "enter-visual-select"

DEFAULT_COMMANDS: tuple[CommandDescriptor, ...] = (
    CommandDescriptor(
        id=ENTER_INSERT,
        label="Vim Mode - Insert",
        precondition=Precondition.mode_in(VimMode.NORMAL),
        keybinding=KeyBinding.of("i", "a"),
        target=VimMode.INSERT,
        description="Enter insert mode",
    ),
    CommandDescriptor(
        id=ENTER_NORMAL,
        label="Vim Mode - Normal",
        precondition=Precondition.mode_in(VimMode.VISUAL_SELECT, VimMode.INSERT),
        keybinding=KeyBinding.of("ctrl+c", "ESC"),
        target=VimMode.NORMAL,
        description="Return to normal mode",
    ),
    CommandDescriptor(
        id=ENTER_VISUAL_SELECT,
        label="Vim Mode - Visual",
        precondition=Precondition.mode_in(VimMode.NORMAL),
        keybinding=KeyBinding.of("v"),
        target=VimMode.VISUAL_SELECT,
        description="Enter visual select mode",
    ),
)


def load_default_commands(
    gate: CommandGate,
    *,
    replace: bool = False,
    include: Sequence[str] | None = None,
    exclude: Sequence[str] | None = None,
) -> None:
    """Register the built-in commands, optionally filtered by id."""

    include_set = set(include) if include is not None else None
    exclude_set = set(exclude or ())
    for command in DEFAULT_COMMANDS:
        if include_set is not None and command.id not in include_set:
            continue
        if command.id in exclude_set:
            continue
        gate.register(command, replace=replace)


__all__ = [
    "DEFAULT_COMMANDS",
    "ENTER_INSERT",
    "ENTER_NORMAL",
    "ENTER_VISUAL_SELECT",
    "load_default_commands",
]
