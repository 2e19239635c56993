"""Precondition-gated dispatch of mode-changing commands."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, Iterator, Literal, Optional

from vim_mode.errors import (
    CommandConflictError,
    InvalidTransitionError,
    UnknownCommandError,
)
from vim_mode.host.editor import KeyInput
from vim_mode.modes.controller import ModeController
from vim_mode.modes.mode import VimMode
from vim_mode.runtime import telemetry

from .models import CommandDescriptor


@dataclass(frozen=True, slots=True)
class GateResult:
    """Outcome of a command invocation or key dispatch."""

    consumed: bool
    status: Literal["ok", "refused", "miss"]
    mode: VimMode
    command_id: Optional[str] = None
    message: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.status == "ok"


class CommandGate:
    """Evaluates command preconditions against one controller's mode.

    The gate only reads the mode through ``get_mode()``; the transition itself
    is always performed by the controller. A refused command changes neither
    the mode nor the cursor.
    """

    def __init__(
        self, controller: ModeController, *, logger_name: str | None = None
    ) -> None:
        self._controller = controller
        self._commands: Dict[str, CommandDescriptor] = {}
        self._logger_name = logger_name or "vim_mode.commands"

    @property
    def controller(self) -> ModeController:
        return self._controller

    def __contains__(self, command_id: object) -> bool:
        return command_id in self._commands

    def __len__(self) -> int:
        return len(self._commands)

    def register(
        self, descriptor: CommandDescriptor, *, replace: bool = False
    ) -> CommandDescriptor:
        conflicts = self.detect_conflicts(descriptor)
        if conflicts and not replace:
            raise CommandConflictError(descriptor, conflicts)
        if replace:
            for conflict in conflicts:
                self._commands.pop(conflict.id, None)
        elif descriptor.id in self._commands:
            raise ValueError(f"Command '{descriptor.id}' already registered")
        self._commands[descriptor.id] = descriptor
        return descriptor

    def unregister(self, command_id: str) -> Optional[CommandDescriptor]:
        return self._commands.pop(command_id, None)

    def get(self, command_id: str) -> CommandDescriptor:
        try:
            return self._commands[command_id]
        except KeyError as exc:
            raise UnknownCommandError(command_id) from exc

    def iter_commands(self) -> Iterator[CommandDescriptor]:
        yield from self._commands.values()

    def detect_conflicts(self, descriptor: CommandDescriptor) -> list[CommandDescriptor]:
        tokens = set(descriptor.keybinding.tokens)
        conflicts: list[CommandDescriptor] = []
        for existing in self._commands.values():
            if existing.id == descriptor.id:
                continue
            if tokens.isdisjoint(existing.keybinding.tokens):
                continue
            if descriptor.precondition.overlaps(existing.precondition):
                conflicts.append(existing)
        return conflicts

    def is_enabled(self, command_id: str) -> bool:
        return self.get(command_id).enabled_in(self._controller.get_mode())

    def enabled_commands(self) -> tuple[CommandDescriptor, ...]:
        mode = self._controller.get_mode()
        return tuple(cmd for cmd in self._commands.values() if cmd.enabled_in(mode))

    def invoke(self, command_id: str) -> GateResult:
        """Run ``command_id`` if its precondition holds for the current mode."""

        descriptor = self.get(command_id)
        with telemetry.span(
            "gate::invoke",
            logger_name=self._logger_name,
            component="commands",
            metadata={"command_id": command_id},
        ):
            mode = self._controller.get_mode()
            if not descriptor.enabled_in(mode):
                telemetry.record_event(
                    "command.refused",
                    level="debug",
                    data={"command_id": command_id, "mode": mode.value},
                    logger_name=self._logger_name,
                )
                return GateResult(
                    consumed=False,
                    status="refused",
                    mode=mode,
                    command_id=command_id,
                    message=descriptor.precondition.expression,
                )

            self._controller.switch_mode(descriptor.target)
            current = self._controller.get_mode()
            telemetry.record_event(
                "command.invoked",
                level="debug",
                data={
                    "command_id": command_id,
                    "previous": mode.value,
                    "mode": current.value,
                },
                logger_name=self._logger_name,
            )
            return GateResult(
                consumed=True,
                status="ok",
                mode=current,
                command_id=command_id,
            )

    def execute(self, command_id: str) -> VimMode:
        result = self.invoke(command_id)
        if not result.ok:
            raise InvalidTransitionError(command_id, result.mode)
        return result.mode

    def entry_point(self, command_id: str) -> Callable[[], GateResult]:
        """Closure the host can register as the handler for ``command_id``."""

        self.get(command_id)

        def run() -> GateResult:
            return self.invoke(command_id)

        run.__name__ = f"run_{command_id.replace('-', '_').replace('.', '_')}"
        return run

    def resolve_key(self, key: KeyInput) -> Optional[CommandDescriptor]:
        mode = self._controller.get_mode()
        for descriptor in self._commands.values():
            if descriptor.keybinding.matches(key) and descriptor.enabled_in(mode):
                return descriptor
        return None

    def handle_key(self, key: KeyInput) -> GateResult:
        descriptor = self.resolve_key(key)
        if descriptor is None:
            return GateResult(
                consumed=False, status="miss", mode=self._controller.get_mode()
            )
        return self.invoke(descriptor.id)


__all__ = ["CommandGate", "GateResult"]
