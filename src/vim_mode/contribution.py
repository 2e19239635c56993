"""Per-editor composition of the mode controller and its command gate."""

from __future__ import annotations

from types import MappingProxyType
from typing import Callable, Mapping, Optional

from vim_mode.commands import CommandGate, GateResult, load_default_commands
from vim_mode.config import InputProtocol, VimModeConfig
from vim_mode.errors import UninitializedControllerError, VimModeError
from vim_mode.host.editor import EditorContribution, EditorHandle, KeyInput
from vim_mode.modes import (
    BaseModeController,
    ModeController,
    ToggleModeController,
    VimMode,
)
from vim_mode.runtime import telemetry


class VimModeContribution(EditorContribution):
    """Wires one controller (and, for commands, one gate) to one editor.

    Nothing is built until the host calls ``before_first_interaction``; every
    mode query made before that raises ``UninitializedControllerError``.
    """

    ID = "editor.contrib.vimmodeController"

    def __init__(
        self, editor: EditorHandle, *, config: Optional[VimModeConfig] = None
    ) -> None:
        self.editor = editor
        self.config = config or VimModeConfig.from_env()
        self._controller: Optional[BaseModeController] = None
        self._gate: Optional[CommandGate] = None
        self._disposed = False

    @property
    def ready(self) -> bool:
        return self._controller is not None and not self._disposed

    @property
    def controller(self) -> BaseModeController:
        if self._controller is None:
            raise UninitializedControllerError(
                "before_first_interaction() has not run for this editor"
            )
        return self._controller

    @property
    def gate(self) -> CommandGate:
        if self._controller is None:
            raise UninitializedControllerError(
                "before_first_interaction() has not run for this editor"
            )
        if self._gate is None:
            raise VimModeError(
                f"No command gate under the '{self.config.protocol.value}' protocol"
            )
        return self._gate

    def before_first_interaction(self) -> None:
        if self._controller is not None or self._disposed:
            return
        if self.config.protocol is InputProtocol.TOGGLE:
            self._controller = ToggleModeController(
                self.editor, toggle_key=self.config.toggle_key
            )
        else:
            controller = ModeController(self.editor)
            gate = CommandGate(controller)
            if self.config.load_defaults:
                load_default_commands(gate)
            self._controller = controller
            self._gate = gate
        telemetry.record_event(
            "contribution.ready",
            level="debug",
            data={"protocol": self.config.protocol.value},
            logger_name="vim_mode.contribution",
        )

    def get_mode(self) -> VimMode:
        return self.controller.get_mode()

    def commands(self) -> Mapping[str, Callable[[], GateResult]]:
        gate = self.gate
        return MappingProxyType(
            {command.id: gate.entry_point(command.id) for command in gate.iter_commands()}
        )

    def handle_key(self, key: KeyInput) -> GateResult:
        return self.gate.handle_key(key)

    def dispose(self) -> None:
        if self._disposed:
            return
        self._disposed = True
        if self._controller is not None:
            self._controller.dispose()


def attach_vim_mode(
    editor: EditorHandle, *, config: Optional[VimModeConfig] = None
) -> VimModeContribution:
    """Create the contribution for ``editor`` and run its first-interaction hook."""

    contribution = VimModeContribution(editor, config=config)
    contribution.before_first_interaction()
    return contribution


__all__ = ["VimModeContribution", "attach_vim_mode"]
