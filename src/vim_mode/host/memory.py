"""Headless editor handle used by tests and scripted hosts."""

from __future__ import annotations

from typing import Iterable, List, Optional

from .editor import (
    CursorStyle,
    DisplayOptions,
    EditorHandle,
    KeyInput,
    RawInputFeed,
    RawInputHandler,
    Subscription,
)


class InMemoryEditor(EditorHandle):
    """Keeps display options in memory and records every write."""

    def __init__(
        self, options: Optional[DisplayOptions] = None, *, name: str = "untitled"
    ) -> None:
        self.name = name
        self._options = options or DisplayOptions()
        self._input = RawInputFeed()
        self.history: List[DisplayOptions] = []

    @property
    def cursor_style(self) -> CursorStyle:
        return self._options.cursor_style

    @property
    def listener_count(self) -> int:
        return len(self._input)

    def get_display_options(self) -> DisplayOptions:
        return self._options

    def set_display_options(self, options: DisplayOptions) -> None:
        if not isinstance(options, DisplayOptions):
            raise TypeError("options must be a DisplayOptions instance")
        self._options = options
        self.history.append(options)

    def on_raw_input(self, handler: RawInputHandler) -> Subscription:
        return self._input.subscribe(handler)

    def press(
        self, key: str, *, modifiers: Iterable[str] = (), text: str | None = None
    ) -> KeyInput:
        event = KeyInput(key=key, modifiers=tuple(modifiers), text=text)
        self._input.emit(event)
        return event


__all__ = ["InMemoryEditor"]
