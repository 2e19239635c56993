"""Exceptions raised when callers break the controller contract."""

from __future__ import annotations

from typing import Iterable, TYPE_CHECKING

if TYPE_CHECKING:
    from vim_mode.commands.models import CommandDescriptor


class VimModeError(RuntimeError):
    """Base class for every error raised by this package."""


class InvalidModeError(VimModeError, ValueError):
    """Raised when a value does not name one of the known modes."""

    def __init__(self, value: object) -> None:
        super().__init__(f"Unknown vim mode {value!r}")
        self.value = value


class UninitializedControllerError(VimModeError):
    """Raised when mode state is queried before the controller exists."""


class DisposedControllerError(VimModeError):
    """Raised when a disposed controller is asked to change mode."""


class InvalidTransitionError(VimModeError):
    """Raised by strict invocation when a command's precondition is false."""

    def __init__(self, command_id: str, mode: object) -> None:
        super().__init__(f"Command '{command_id}' is not enabled in mode {mode!r}")
        self.command_id = command_id
        self.mode = mode


class UnknownCommandError(VimModeError, KeyError):
    """Raised when a command id is not registered with the gate."""

    def __init__(self, command_id: str) -> None:
        super().__init__(f"Command '{command_id}' is not registered")
        self.command_id = command_id

    def __str__(self) -> str:
        return str(self.args[0])


class CommandConflictError(VimModeError):
    """Raised when a new command shares a key with an overlapping command."""

    def __init__(
        self, command: "CommandDescriptor", conflicts: Iterable["CommandDescriptor"]
    ) -> None:
        conflicts_tuple = tuple(conflicts)
        message = (
            f"Command '{command.id}' conflicts with {[c.id for c in conflicts_tuple]}"
        )
        super().__init__(message)
        self.command = command
        self.conflicts = conflicts_tuple


__all__ = [
    "VimModeError",
    "InvalidModeError",
    "UninitializedControllerError",
    "DisposedControllerError",
    "InvalidTransitionError",
    "UnknownCommandError",
    "CommandConflictError",
]
