"""Capabilities the controller consumes from the hosting editor."""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import Callable, Iterable, List, Optional, Tuple


class CursorStyle(str, Enum):
    """Cursor rendering styles a host editor understands."""

    BLOCK = "block"
    BLOCK_OUTLINE = "block-outline"
    LINE = "line"
    LINE_THIN = "line-thin"
    UNDERLINE = "underline"
    UNDERLINE_THIN = "underline-thin"


def normalize_modifiers(modifiers: Iterable[str]) -> tuple[str, ...]:
    values = tuple(m.strip().lower() for m in modifiers if m.strip())
    return tuple(sorted(dict.fromkeys(values)))


def split_key_expression(expression: str) -> tuple[str, tuple[str, ...]]:
    """Split ``"Shift+Ctrl+x"`` into ``("x", ("ctrl", "shift"))``.

    The last segment is the key and keeps its case; ``"ctrl++"`` binds ``+``.
    """

    expr = expression.strip()
    if not expr:
        raise ValueError("key expression cannot be empty")
    if expr == "+" or expr.endswith("++"):
        return "+", normalize_modifiers(expr[:-2].split("+"))
    *modifiers, key = expr.split("+")
    if not key.strip():
        raise ValueError(f"key expression '{expression}' has no key")
    return key.strip(), normalize_modifiers(modifiers)


def key_token(expression: str) -> str:
    """Canonical token for ``expression``, comparable with ``KeyInput.token``."""

    key, modifiers = split_key_expression(expression)
    return "+".join((*modifiers, key))


@dataclass(frozen=True, slots=True)
class DisplayOptions:
    """Raw display options; always replaced as a whole, never field by field."""

    cursor_style: CursorStyle = CursorStyle.LINE
    cursor_blinking: str = "blink"
    cursor_width: int = 0

    def __post_init__(self) -> None:
        object.__setattr__(self, "cursor_style", CursorStyle(self.cursor_style))
        if self.cursor_width < 0:
            raise ValueError("cursor_width cannot be negative")

    def with_cursor_style(self, style: CursorStyle) -> "DisplayOptions":
        return replace(self, cursor_style=style)


@dataclass(frozen=True, slots=True)
class KeyInput:
    """Normalized raw key event delivered by the host."""

    key: str
    modifiers: Tuple[str, ...] = ()
    text: Optional[str] = None

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


RawInputHandler = Callable[[KeyInput], None]


class Subscription:
    """Releases a registration exactly once; later ``dispose`` calls are no-ops."""

    def __init__(self, release: Callable[[], None]) -> None:
        self._release: Optional[Callable[[], None]] = release

    @property
    def active(self) -> bool:
        return self._release is not None

    def dispose(self) -> None:
        release, self._release = self._release, None
        if release is not None:
            release()


class RawInputFeed:
    """Fans raw key events out to subscribers in registration order."""

    def __init__(self) -> None:
        self._handlers: List[RawInputHandler] = []

    def __len__(self) -> int:
        return len(self._handlers)

    def subscribe(self, handler: RawInputHandler) -> Subscription:
        self._handlers.append(handler)

        def release() -> None:
            if handler in self._handlers:
                self._handlers.remove(handler)

        return Subscription(release)

    def emit(self, key: KeyInput) -> None:
        for handler in list(self._handlers):
            handler(key)


class EditorHandle:
    """Per-editor surface the mode controller drives.

    Implementations must make ``set_display_options`` a single atomic update
    of the whole options snapshot.
    """

    def get_display_options(self) -> DisplayOptions:  # pragma: no cover - abstract
        raise NotImplementedError

    def set_display_options(
        self, options: DisplayOptions
    ) -> None:  # pragma: no cover - abstract
        raise NotImplementedError

    def on_raw_input(
        self, handler: RawInputHandler
    ) -> Subscription:  # pragma: no cover - abstract
        raise NotImplementedError


class EditorContribution:
    """Lifecycle hooks the host invokes on each per-editor contribution."""

    def before_first_interaction(self) -> None:  # pragma: no cover - abstract
        raise NotImplementedError

    def dispose(self) -> None:  # pragma: no cover - abstract
        raise NotImplementedError

    def save_view_state(self) -> object | None:
        return None

    def restore_view_state(self, state: object | None) -> None:
        del state


__all__ = [
    "CursorStyle",
    "normalize_modifiers",
    "split_key_expression",
    "key_token",
    "DisplayOptions",
    "KeyInput",
    "RawInputHandler",
    "Subscription",
    "RawInputFeed",
    "EditorHandle",
    "EditorContribution",
]
