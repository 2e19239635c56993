"""Mode controllers: the single owner and mutator of an editor's mode."""

from __future__ import annotations

from typing import List, Optional

from vim_mode.errors import DisposedControllerError, UninitializedControllerError
from vim_mode.host.editor import EditorHandle, KeyInput, Subscription, key_token
from vim_mode.runtime import telemetry

from .mode import VimMode
from .presentation import PresentationAdapter

_TOGGLE_TARGETS = {
    VimMode.NORMAL: VimMode.INSERT,
    VimMode.INSERT: VimMode.NORMAL,
}


class BaseModeController:
    """Holds the mode for one editor and keeps its cursor style in step.

    Construction starts in ``NORMAL`` and applies its presentation before
    returning. Every mode change re-applies presentation synchronously; if
    the editor rejects the update the previous mode is restored.
    """

    _mode: Optional[VimMode] = None

    def __init__(
        self,
        editor: EditorHandle,
        *,
        presentation: Optional[PresentationAdapter] = None,
    ) -> None:
        self._mode = None
        self._disposed = False
        self._subscriptions: List[Subscription] = []
        self.editor = editor
        self._presentation = presentation or PresentationAdapter(editor)
        self._commit(VimMode.NORMAL, source="init")

    @property
    def mode(self) -> VimMode:
        return self.get_mode()

    @property
    def disposed(self) -> bool:
        return self._disposed

    def get_mode(self) -> VimMode:
        if self._mode is None:
            raise UninitializedControllerError(
                "Mode controller queried before construction completed"
            )
        return self._mode

    def dispose(self) -> None:
        if self._disposed:
            return
        self._disposed = True
        subscriptions, self._subscriptions = self._subscriptions, []
        for subscription in subscriptions:
            subscription.dispose()
        telemetry.record_event(
            "controller.dispose",
            level="debug",
            data={"released": len(subscriptions)},
            logger_name="vim_mode.controller",
        )

    def _track(self, subscription: Subscription) -> None:
        self._subscriptions.append(subscription)

    def _commit(self, target: VimMode, *, source: str) -> None:
        if self._disposed:
            raise DisposedControllerError("Mode controller has been disposed")
        previous = self._mode
        self._mode = target
        try:
            style = self._presentation.apply(target)
        except Exception:
            self._mode = previous
            raise
        telemetry.record_event(
            "mode.switch",
            data={
                "mode": target.value,
                "previous": previous.value if previous else None,
                "cursor_style": style.value,
                "source": source,
            },
            logger_name="vim_mode.controller",
        )


class ModeController(BaseModeController):
    """Explicit-target protocol: callers name the mode to switch to."""

    def switch_mode(self, target: VimMode | str) -> None:
        """Set ``target`` and re-apply presentation, even if already current.

        The controller enforces no preconditions; gating belongs to
        ``CommandGate``. Values that are not a mode raise ``InvalidModeError``.
        """

        self._commit(VimMode.parse(target), source="switch")


class ToggleModeController(BaseModeController):
    """Toggle protocol driven by the editor's raw key feed.

    ``toggle_key`` is normalised like ``KeyInput.token`` (``"Shift+Ctrl+x"``
    matches ``ctrl+shift+x``). Every key-down matching it flips ``INSERT`` and ``NORMAL``;
    ``VISUAL_SELECT`` cannot be reached.
    """

    def __init__(
        self,
        editor: EditorHandle,
        *,
        toggle_key: str = "ESC",
        presentation: Optional[PresentationAdapter] = None,
    ) -> None:
        if not toggle_key:
            raise ValueError("toggle_key cannot be empty")
        self.toggle_key = key_token(toggle_key)
        super().__init__(editor, presentation=presentation)
        self._track(editor.on_raw_input(self._on_raw_input))

    def switch_mode(self) -> None:
        self._commit(_TOGGLE_TARGETS[self.get_mode()], source="toggle")

    def _on_raw_input(self, key: KeyInput) -> None:
        if self._disposed or key.token != self.toggle_key:
            return
        self.switch_mode()


__all__ = ["BaseModeController", "ModeController", "ToggleModeController"]
