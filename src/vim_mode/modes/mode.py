"""The three editing modes an editor instance can be in."""

from __future__ import annotations

from enum import Enum

from vim_mode.errors import InvalidModeError


class VimMode(str, Enum):
    """Available editing modes."""

    NORMAL = "normal"
    VISUAL_SELECT = "visual_select"
    INSERT = "insert"

    @property
    def label(self) -> str:
        return _LABELS[self]

    @classmethod
    def parse(cls, value: object) -> "VimMode":
        """Resolve ``value`` to a mode or raise ``InvalidModeError``.

        Accepts members, their values (``"visual_select"``) and member names
        in any case, with or without underscores (``"VisualSelect"``).
        """

        if isinstance(value, cls):
            return value
        if not isinstance(value, str):
            raise InvalidModeError(value)
        key = value.strip().lower().replace("-", "_")
        for mode in cls:
            if key in (mode.value, mode.value.replace("_", "")):
                return mode
        raise InvalidModeError(value)


_LABELS = {
    VimMode.NORMAL: "NORMAL",
    VimMode.VISUAL_SELECT: "VISUAL",
    VimMode.INSERT: "INSERT",
}


__all__ = ["VimMode"]
