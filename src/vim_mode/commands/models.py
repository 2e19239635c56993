"""Immutable descriptions of mode-changing commands and their gating."""

from __future__ import annotations

from dataclasses import dataclass

from vim_mode.host.editor import KeyInput, normalize_modifiers, split_key_expression
from vim_mode.modes.mode import VimMode

MODE_CONTEXT_KEY = "vimMode"


@dataclass(frozen=True, slots=True)
class KeyStroke:
    """Single key, with modifiers, that activates a command."""

    key: str
    modifiers: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        if not self.key:
            raise ValueError("key cannot be empty")
        object.__setattr__(self, "modifiers", normalize_modifiers(self.modifiers))

    @property
    def token(self) -> str:
        if self.modifiers:
            modifier = "+".join(self.modifiers)
            return f"{modifier}+{self.key}"
        return self.key

    @classmethod
    def parse(cls, expression: str) -> "KeyStroke":
        """Parse ``"ctrl+c"`` style strings; the last segment is the key."""

        key, modifiers = split_key_expression(expression)
        return cls(key, modifiers)

    def matches(self, key: KeyInput) -> bool:
        return key.token == self.token


@dataclass(frozen=True, slots=True)
class KeyBinding:
    """Primary and secondary keystrokes for one command."""

    primary: KeyStroke
    secondary: tuple[KeyStroke, ...] = ()

    @property
    def strokes(self) -> tuple[KeyStroke, ...]:
        return (self.primary, *self.secondary)

    @property
    def tokens(self) -> tuple[str, ...]:
        return tuple(stroke.token for stroke in self.strokes)

    @classmethod
    def of(cls, primary: str, *secondary: str) -> "KeyBinding":
        return cls(
            KeyStroke.parse(primary),
            tuple(KeyStroke.parse(item) for item in secondary),
        )

    def matches(self, key: KeyInput) -> bool:
        return any(stroke.matches(key) for stroke in self.strokes)


@dataclass(frozen=True, slots=True)
class Precondition:
    """Set of modes in which a command may be dispatched."""

    modes: frozenset[VimMode]

    def __post_init__(self) -> None:
        normalized = frozenset(VimMode.parse(mode) for mode in self.modes)
        if not normalized:
            raise ValueError("precondition requires at least one mode")
        object.__setattr__(self, "modes", normalized)

    @classmethod
    def mode_in(cls, *modes: VimMode | str) -> "Precondition":
        return cls(frozenset(VimMode.parse(mode) for mode in modes))

    @classmethod
    def parse(cls, expression: str) -> "Precondition":
        """Parse ``"vimMode == normal || vimMode == insert"``."""

        expr = expression.strip()
        if not expr:
            raise ValueError("expression cannot be empty")
        modes = []
        for clause in expr.split("||"):
            left, sep, right = clause.partition("==")
            if not sep or left.strip() != MODE_CONTEXT_KEY:
                raise ValueError(f"Unsupported precondition clause '{clause.strip()}'")
            modes.append(VimMode.parse(right))
        return cls(frozenset(modes))

    @property
    def expression(self) -> str:
        ordered = [mode for mode in VimMode if mode in self.modes]
        return " || ".join(f"{MODE_CONTEXT_KEY} == {mode.value}" for mode in ordered)

    def evaluate(self, mode: VimMode) -> bool:
        return mode in self.modes

    def overlaps(self, other: "Precondition") -> bool:
        return bool(self.modes & other.modes)


@dataclass(frozen=True, slots=True)
class CommandDescriptor:
    """Static metadata for a command that requests a mode transition."""

    id: str
    label: str
    precondition: Precondition
    keybinding: KeyBinding
    target: VimMode
    alias: str = ""
    description: str = ""

    def __post_init__(self) -> None:
        if not self.id:
            raise ValueError("command id cannot be empty")
        if not self.label:
            raise ValueError("command label cannot be empty")
        object.__setattr__(self, "target", VimMode.parse(self.target))
        if not self.alias:
            object.__setattr__(self, "alias", self.label)

    def enabled_in(self, mode: VimMode) -> bool:
        return self.precondition.evaluate(mode)


__all__ = [
    "MODE_CONTEXT_KEY",
    "KeyStroke",
    "KeyBinding",
    "Precondition",
    "CommandDescriptor",
]
