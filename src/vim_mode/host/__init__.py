"""Host editor capability interfaces and a headless implementation."""

from .editor import (
    CursorStyle,
    DisplayOptions,
    EditorContribution,
    EditorHandle,
    KeyInput,
    RawInputFeed,
    RawInputHandler,
    Subscription,
)
from .memory import InMemoryEditor

__all__ = [
    "CursorStyle",
    "DisplayOptions",
    "EditorContribution",
    "EditorHandle",
    "KeyInput",
    "RawInputFeed",
    "RawInputHandler",
    "Subscription",
    "InMemoryEditor",
]
