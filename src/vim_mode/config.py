"""Integration settings, read from ``VIM_MODE_*`` environment variables."""

from __future__ import annotations

import os
from dataclasses import dataclass
from enum import Enum
from typing import Mapping, Optional

from vim_mode.host.editor import key_token

ENV_PREFIX = "VIM_MODE_"

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off"}


class InputProtocol(str, Enum):
    """How an integration drives mode changes; exactly one per editor."""

    COMMANDS = "commands"
    TOGGLE = "toggle"


@dataclass(frozen=True, slots=True)
class VimModeConfig:
    protocol: InputProtocol = InputProtocol.COMMANDS
    toggle_key: str = "ESC"
    load_defaults: bool = True

    def __post_init__(self) -> None:
        object.__setattr__(self, "protocol", InputProtocol(self.protocol))
        if not self.toggle_key:
            raise ValueError("toggle_key cannot be empty")
        object.__setattr__(self, "toggle_key", key_token(self.toggle_key))

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "VimModeConfig":
        env = os.environ if environ is None else environ
        protocol = env.get(f"{ENV_PREFIX}PROTOCOL", InputProtocol.COMMANDS.value)
        try:
            parsed = InputProtocol(protocol.strip().lower())
        except ValueError as exc:
            raise ValueError(
                f"{ENV_PREFIX}PROTOCOL must be one of "
                f"{[p.value for p in InputProtocol]}, got {protocol!r}"
            ) from exc
        return cls(
            protocol=parsed,
            toggle_key=env.get(f"{ENV_PREFIX}TOGGLE_KEY", "ESC").strip(),
            load_defaults=_parse_flag(env, "LOAD_DEFAULTS", True),
        )


def _parse_flag(env: Mapping[str, str], name: str, default: bool) -> bool:
    raw = env.get(f"{ENV_PREFIX}{name}")
    if raw is None:
        return default
    value = raw.strip().lower()
    if value in _TRUE:
        return True
    if value in _FALSE:
        return False
    raise ValueError(f"{ENV_PREFIX}{name} must be a boolean flag, got {raw!r}")


__all__ = ["ENV_PREFIX", "InputProtocol", "VimModeConfig"]
