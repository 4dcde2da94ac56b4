"""Textual host for the interactive secret browser.

The app owns no browsing state. It turns terminal events and fetch
completions into session events, hands them to the ``SessionController`` one
at a time, runs the commands that come back and repaints ``SessionView``.
"""

from __future__ import annotations

import asyncio
import logging
import sys
from collections.abc import Awaitable, Iterable
from typing import Any

from rich.console import RenderableType
from textual import events
from textual.app import App, ComposeResult
from textual.message import Message
from textual.timer import Timer
from textual.widget import Widget

from kds.action_messages import build_actionable_warning
from kds.cli import (
    _configure_color_mode,
    _configure_logging,
    _validate_interactive_tty,
)
from kds.cli import (
    main as _cli_main,
)
from kds.config import get_config_path, load_config
from kds.controller import SessionController
from kds.events import (
    Command,
    FetchCatalog,
    FetchRecord,
    Key,
    Quit,
    Resize,
    SessionEvent,
)
from kds.models import DEFAULT_NAMESPACE, PHASE_FATAL, PHASE_LOADING, UserConfig
from kds.render import render_fatal, render_session
from kds.services.interfaces import AppServices, RecordSource, build_default_app_services
from kds.services.kubernetes_source import build_record_source, resolve_namespace
from kds.themes import TEXTUAL_THEMES, ViewStyle, get_view_style, resolve_theme_name
from kds.ui_constants import APP_CSS, SPINNER_REFRESH_SECONDS, TASK_CANCEL_TIMEOUT_SECONDS

logger = logging.getLogger(__name__)


class FetchCompleted(Message):
    """A background fetch resolved to a session event."""

    def __init__(self, event: SessionEvent) -> None:
        super().__init__()
        self.event = event


def to_session_key(event: events.Key) -> Key:
    """Translate a Textual key event; printable keys are named by their character."""
    if event.is_printable and event.character is not None and len(event.character) == 1:
        return Key(key=event.character, character=event.character)
    return Key(key=event.key, character=event.character)


class SessionView(Widget, can_focus=True):
    """Full-screen widget that draws the session and forwards every key."""

    class KeyPressed(Message):
        """A key press for the session controller."""

        def __init__(self, key: Key) -> None:
            super().__init__()
            self.key = key

    def __init__(self, controller: SessionController, style: ViewStyle, **kwargs: Any) -> None:
        super().__init__(**kwargs)
        self._controller = controller
        self._style = style

    def render(self) -> RenderableType:
        return render_session(self._controller.session, self._style)

    def on_key(self, event: events.Key) -> None:
        # Search input and navigation both live in the session, so no key
        # may reach a binding.
        event.stop()
        event.prevent_default()
        self.post_message(self.KeyPressed(to_session_key(event)))


class SecretBrowser(App):
    """A TUI application to browse Kubernetes secrets."""

    TITLE = "kds"

    CSS = APP_CSS

    ENABLE_COMMAND_PALETTE = False

    def __init__(
        self,
        source: RecordSource | None = None,
        namespace: str = DEFAULT_NAMESPACE,
        config: UserConfig | None = None,
        theme_name: str | None = None,
        services: AppServices | None = None,
    ) -> None:
        super().__init__()
        for textual_theme in TEXTUAL_THEMES.values():
            self.register_theme(textual_theme)
        self._config = config or UserConfig()
        if services is None:
            if source is None:
                raise ValueError("SecretBrowser needs a record source or services")
            services = build_default_app_services(source)
        self._services: AppServices = services
        self._theme_key = resolve_theme_name(theme_name or self._config.theme_name)
        self._style = get_view_style(self._theme_key)
        self.controller = SessionController(namespace)

        # Background task tracking (prevent GC of fire-and-forget tasks)
        self._background_tasks: set[asyncio.Task[None]] = set()
        self._spinner_timer: Timer | None = None
        self._view: SessionView | None = None

    def compose(self) -> ComposeResult:
        self._view = SessionView(self.controller, self._style, id="session")
        yield self._view

    def on_mount(self) -> None:
        """Start the catalog fetch and size the session."""
        self.theme = f"kds-{self._theme_key}"
        if self._config.config_defaulted:
            self.notify(
                build_actionable_warning(
                    "Config file is invalid, using defaults",
                    next_step=f"fix or remove {get_config_path()}",
                ),
                severity="warning",
                timeout=8,
            )
        if self._view is not None:
            self._view.focus()
        self._spinner_timer = self.set_interval(SPINNER_REFRESH_SECONDS, self._animate_spinner)
        self._run_commands(self.controller.start())
        self.apply_session_event(Resize(width=self.size.width, height=self.size.height))
        logger.debug("App mounted: namespace=%s", self.controller.session.namespace)

    async def on_unmount(self) -> None:
        """Stop the spinner and cancel fetches still in flight."""
        timer = self._spinner_timer
        self._spinner_timer = None
        if timer is not None:
            timer.stop()

        pending = [task for task in self._background_tasks if not task.done()]
        for task in pending:
            task.cancel()
        if pending:
            _, still_pending = await asyncio.wait(pending, timeout=TASK_CANCEL_TIMEOUT_SECONDS)
            for task in still_pending:
                logger.debug("Background task did not cancel before shutdown: %r", task)
        self._background_tasks.clear()

    def on_resize(self, event: events.Resize) -> None:
        self.apply_session_event(Resize(width=event.size.width, height=event.size.height))

    def on_session_view_key_pressed(self, message: SessionView.KeyPressed) -> None:
        self.apply_session_event(message.key)

    def on_fetch_completed(self, message: FetchCompleted) -> None:
        self.apply_session_event(message.event)

    def action_help_quit(self) -> None:
        """Ctrl+C is a session key; SessionView has already forwarded it."""

    # ── Dispatch ──────────────────────────────────────────────────────────

    def apply_session_event(self, event: SessionEvent) -> None:
        """Apply one event to the session, run its commands and repaint."""
        commands = self.controller.dispatch(event)
        self._refresh_view()
        self._run_commands(commands)

    def _run_commands(self, commands: Iterable[Command]) -> None:
        fetch = self._services.fetch
        for command in commands:
            if isinstance(command, FetchCatalog):
                self._track_task(self._complete_fetch(fetch.fetch_catalog(command.namespace)))
            elif isinstance(command, FetchRecord):
                self._track_task(
                    self._complete_fetch(fetch.fetch_record(command.namespace, command.name))
                )
            elif isinstance(command, Quit):
                self._quit(command)
            else:
                logger.warning("Ignoring unknown command: %r", command)

    async def _complete_fetch(self, fetch: Awaitable[SessionEvent]) -> None:
        event = await fetch
        self.post_message(FetchCompleted(event))

    def _quit(self, command: Quit) -> None:
        message = render_fatal(command.message, self._style) if command.message else None
        logger.debug("Exiting with return code %d", command.return_code)
        self.exit(return_code=command.return_code, message=message)

    def _refresh_view(self) -> None:
        if self._view is not None:
            self._view.refresh()

    def _animate_spinner(self) -> None:
        session = self.controller.session
        if session.phase == PHASE_FATAL:
            return
        if session.phase == PHASE_LOADING or session.loading_selected:
            self._refresh_view()

    def _track_task(self, coro: Any) -> asyncio.Task[None]:
        """Create an asyncio task and track it to prevent garbage collection."""
        task = asyncio.create_task(coro)
        self._background_tasks.add(task)
        task.add_done_callback(self._background_tasks.discard)
        task.add_done_callback(self._on_task_done)
        return task

    @staticmethod
    def _on_task_done(task: asyncio.Task[None]) -> None:
        """Log unhandled exceptions from background tasks."""
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            logger.error("Unhandled exception in background task: %s", exc, exc_info=exc)


def main() -> int:
    """Main entry point wrapper for CLI/bootstrap logic."""
    return _cli_main(
        load_config_fn=load_config,
        build_source_fn=build_record_source,
        resolve_namespace_fn=resolve_namespace,
        configure_logging_fn=_configure_logging,
        configure_color_mode_fn=_configure_color_mode,
        validate_interactive_tty_fn=_validate_interactive_tty,
        app_factory=SecretBrowser,
    )


if __name__ == "__main__":
    sys.exit(main())
