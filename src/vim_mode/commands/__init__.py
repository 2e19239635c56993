"""Command descriptors, preconditions and the gate that enforces them."""

from .models import (
    MODE_CONTEXT_KEY,
    CommandDescriptor,
    KeyBinding,
    KeyStroke,
    Precondition,
)
from .gate import CommandGate, GateResult
from .defaults import (
    DEFAULT_COMMANDS,
    ENTER_INSERT,
    ENTER_NORMAL,
    ENTER_VISUAL_SELECT,
    load_default_commands,
)

__all__ = [
    "MODE_CONTEXT_KEY",
    "CommandDescriptor",
    "KeyBinding",
    "KeyStroke",
    "Precondition",
    "CommandGate",
    "GateResult",
    "DEFAULT_COMMANDS",
    "ENTER_INSERT",
    "ENTER_NORMAL",
    "ENTER_VISUAL_SELECT",
    "load_default_commands",
]
