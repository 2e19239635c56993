"""Executable Textual app that hosts the mode controller on a TextArea."""

from __future__ import annotations

import argparse
import dataclasses
from typing import Callable, Mapping, Optional, Sequence, Tuple

try:  # pragma: no cover - imported only when demo is run
    from textual import events
    from textual.app import App, ComposeResult
    from textual.widgets import Footer, Header, Static, TextArea
except ModuleNotFoundError as exc:  # pragma: no cover - friendly error for missing dep
    raise RuntimeError(
        "Install the 'textual' package to use vim_mode.adapters.textual.app"
    ) from exc

from vim_mode.config import InputProtocol, VimModeConfig
from vim_mode.contribution import VimModeContribution
from vim_mode.host.editor import KeyInput
from vim_mode.modes import VimMode

from .handle import TextualEditorHandle

KeyFilter = Callable[[KeyInput], bool]


class ModalTextArea(TextArea):
    """TextArea that lets a filter swallow keys before text is edited."""

    def __init__(self, text: str = "", **kwargs: object) -> None:
        super().__init__(text, **kwargs)  # type: ignore[arg-type]
        self.key_filter: Optional[KeyFilter] = None

    async def on_key(self, event: events.Key) -> None:
        if self.key_filter is None:
            return
        key = normalize_key(event)
        if key is None:
            return
        if self.key_filter(key):
            event.prevent_default()
            event.stop()


class VimModeApp(App[None]):  # pragma: no cover - manual demo
    """Minimal Textual UI showing mode-driven cursor styles."""

    CSS = """
	Screen {
		layout: vertical;
	}

	#editor {
		height: 1fr;
		border: round $accent;
	}

	#status-line {
		height: 1;
		background: $surface-darken-1;
		padding: 0 1;
	}
	"""

    BINDINGS = [
        ("ctrl+q", "quit", "Quit"),
    ]

    def __init__(self, *, config: Optional[VimModeConfig] = None) -> None:
        super().__init__()
        self.config = config or VimModeConfig.from_env()
        self.contribution: VimModeContribution | None = None
        self.handle: TextualEditorHandle | None = None
        self._editor_widget: ModalTextArea | None = None
        self._status_widget: Static | None = None

    def compose(self) -> ComposeResult:
        yield Header(show_clock=True)
        self._editor_widget = ModalTextArea("", id="editor")
        yield self._editor_widget
        self._status_widget = Static("", id="status-line")
        yield self._status_widget
        yield Footer()

    def on_mount(self) -> None:
        assert self._editor_widget is not None
        self.handle = TextualEditorHandle(self._editor_widget)
        self.contribution = VimModeContribution(self.handle, config=self.config)
        self.contribution.before_first_interaction()
        self._editor_widget.key_filter = self._filter_key
        self._editor_widget.focus()
        self._update_status()

    def on_unmount(self) -> None:
        if self.contribution:
            self.contribution.dispose()

    def _filter_key(self, key: KeyInput) -> bool:
        """Return True when the key must not reach the text area."""

        if not self.contribution or not self.handle:
            return False
        if self.config.protocol is InputProtocol.TOGGLE:
            self.handle.feed_key(key)
            swallow = key.token == self.config.toggle_key
        else:
            swallow = self.contribution.handle_key(key).consumed
        self._update_status()
        return swallow or self.contribution.get_mode() is not VimMode.INSERT

    def _update_status(self) -> None:
        if not self._status_widget or not self.contribution:
            return
        mode = self.contribution.get_mode()
        self._status_widget.update(
            f"-- {mode.label} -- ({self.config.protocol.value} protocol)"
        )


def normalize_key(event: events.Key) -> Optional[KeyInput]:
    parsed = _split_key(event)
    if parsed is None:
        return None
    key, text, modifiers = parsed
    return KeyInput(key=key, text=text, modifiers=modifiers)


def _split_key(
    event: events.Key,
) -> Optional[Tuple[str, Optional[str], Tuple[str, ...]]]:
    name = event.key
    if name == "ctrl+q":
        return None
    if name == "escape":
        return ("ESC", None, ())
    if name in {"enter", "return"}:
        return ("ENTER", None, ())
    if name.startswith("ctrl+") and len(name) > len("ctrl+"):
        return (name[len("ctrl+"):], None, ("ctrl",))
    if event.character and event.is_printable:
        return (event.character, event.character, ())
    return (name.upper(), None, ())


def _parse_args(
    argv: Optional[Sequence[str]] = None, *, defaults: Optional[VimModeConfig] = None
) -> argparse.Namespace:
    defaults = defaults or VimModeConfig.from_env()
    parser = argparse.ArgumentParser(description="Run the vim mode Textual demo.")
    parser.add_argument(
        "--protocol",
        choices=[protocol.value for protocol in InputProtocol],
        default=defaults.protocol.value,
        help="Drive modes with gated commands or a raw-key toggle",
    )
    parser.add_argument(
        "--toggle-key",
        default=defaults.toggle_key,
        help="Key token that flips modes under the toggle protocol (default: ESC)",
    )
    return parser.parse_args(argv)


def build_config(
    argv: Optional[Sequence[str]] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> VimModeConfig:
    """Environment settings with any command-line flags layered on top."""

    base = VimModeConfig.from_env(environ)
    args = _parse_args(argv, defaults=base)
    return dataclasses.replace(
        base, protocol=args.protocol, toggle_key=args.toggle_key
    )


def main(argv: Optional[Sequence[str]] = None) -> None:  # pragma: no cover
    VimModeApp(config=build_config(argv)).run()


if __name__ == "__main__":  # pragma: no cover - manual demo
    main()
