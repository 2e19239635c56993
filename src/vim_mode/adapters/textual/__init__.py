"""Textual host integration."""

from .handle import TextualEditorHandle

__all__ = ["TextualEditorHandle"]
