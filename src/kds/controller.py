"""Session state machine for the interactive secret browser.

The controller owns the session, its catalog and its data cache. The host
feeds it one event at a time through ``dispatch`` and executes whatever
commands come back; nothing else mutates session state.

Phases::

    initializing --resize--> loading --CatalogLoaded--> browsing
         |                      |                          |
         +----------------------+------FatalFailed---------+--> fatal

A catalog that arrives before the first resize is applied immediately and
the first resize then moves straight to ``browsing``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from kds.cache import DataCache
from kds.catalog import Catalog, Scorer
from kds.events import (
    CatalogLoaded,
    Command,
    FatalFailed,
    FetchCatalog,
    FetchRecord,
    ItemFailed,
    ItemLoaded,
    Key,
    Quit,
    Resize,
    SessionEvent,
)
from kds.fuzzy import find_matches
from kds.layout import compute_layout, max_scroll, wrap_record
from kds.models import (
    FOCUS_DETAIL,
    FOCUS_LIST,
    HELP_BAR_HEIGHT,
    PHASE_BROWSING,
    PHASE_FATAL,
    PHASE_INITIALIZING,
    PHASE_LOADING,
    CacheEntry,
    PaneLayout,
    RecordRef,
)

logger = logging.getLogger(__name__)

QUIT_KEYS = frozenset({"ctrl+c", "q", "escape"})
FOCUS_SWITCH_KEY = "tab"
RETRY_KEY = "ctrl+r"

LIST_UP_KEYS = frozenset({"up", "ctrl+p"})
LIST_DOWN_KEYS = frozenset({"down", "ctrl+n"})
PAGE_UP_KEYS = frozenset({"pageup", "ctrl+b"})
PAGE_DOWN_KEYS = frozenset({"pagedown", "ctrl+f"})
START_KEYS = frozenset({"home"})
END_KEYS = frozenset({"end"})
BACKSPACE_KEYS = frozenset({"backspace", "ctrl+h"})
CLEAR_PATTERN_KEYS = frozenset({"ctrl+u"})

# Scrolling keys for the detail pane (vim keys work there: no text input)
DETAIL_UP_KEYS = LIST_UP_KEYS | {"k"}
DETAIL_DOWN_KEYS = LIST_DOWN_KEYS | {"j"}
DETAIL_START_KEYS = START_KEYS | {"g"}
DETAIL_END_KEYS = END_KEYS | {"G"}


def empty_catalog_message(namespace: str) -> str:
    return f"no secrets found in namespace '{namespace}'"


@dataclass(slots=True)
class Session:
    """Everything the renderer needs to draw one frame."""

    namespace: str
    focus: str = FOCUS_LIST  # "list" | "detail"
    width: int = 0
    height: int = 0
    phase: str = PHASE_INITIALIZING
    ready: bool = False
    highlighted: RecordRef | None = None
    loading_selected: bool = False
    fatal_error: str | None = None
    layout: PaneLayout = field(default_factory=PaneLayout)
    catalog: Catalog | None = None
    cache: DataCache = field(default_factory=DataCache)
    detail_lines: list[str] = field(default_factory=list)
    detail_scroll: int = 0

    @property
    def search_active(self) -> bool:
        """Whether typed characters go to the search input."""
        return self.focus == FOCUS_LIST

    @property
    def highlighted_entry(self) -> CacheEntry | None:
        if self.highlighted is None:
            return None
        return self.cache.get(self.highlighted.name)


class SessionController:
    """Single-dispatch state machine driving one browsing session."""

    def __init__(
        self,
        namespace: str,
        scorer: Scorer = find_matches,
        help_bar_height: int = HELP_BAR_HEIGHT,
    ) -> None:
        self.session = Session(namespace=namespace)
        self._scorer = scorer
        self._help_bar_height = help_bar_height
        # Names with a fetch issued and not yet completed
        self._in_flight: set[str] = set()

    @property
    def in_flight(self) -> frozenset[str]:
        return frozenset(self._in_flight)

    def start(self) -> list[Command]:
        """Commands to run once at startup."""
        logger.debug("Session starting for namespace %r", self.session.namespace)
        return [FetchCatalog(namespace=self.session.namespace)]

    def dispatch(self, event: SessionEvent) -> list[Command]:
        """Apply one event and return the follow-up commands."""
        if self.session.phase == PHASE_FATAL:
            return []
        if isinstance(event, Resize):
            return self._on_resize(event)
        if isinstance(event, Key):
            return self._on_key(event)
        if isinstance(event, CatalogLoaded):
            return self._on_catalog_loaded(event)
        if isinstance(event, ItemLoaded):
            return self._on_item_loaded(event)
        if isinstance(event, ItemFailed):
            return self._on_item_failed(event)
        if isinstance(event, FatalFailed):
            return self._on_fatal(event.message)
        logger.warning("Ignoring unknown event: %r", event)
        return []

    # ── Phase handling ────────────────────────────────────────────────────

    def _set_phase(self, phase: str) -> None:
        if phase != self.session.phase:
            logger.debug("Phase %s -> %s", self.session.phase, phase)
            self.session.phase = phase

    def _on_resize(self, event: Resize) -> list[Command]:
        session = self.session
        session.width = max(0, event.width)
        session.height = max(0, event.height)
        session.layout = compute_layout(session.width, session.height, self._help_bar_height)
        if not session.ready:
            session.ready = True
            self._set_phase(PHASE_BROWSING if session.catalog is not None else PHASE_LOADING)
        self._rewrap_highlighted()
        return []

    def _on_catalog_loaded(self, event: CatalogLoaded) -> list[Command]:
        session = self.session
        if session.catalog is not None:
            logger.debug("Ignoring repeated catalog load")
            return []
        if not event.records:
            return self._on_fatal(empty_catalog_message(session.namespace))
        session.catalog = Catalog(event.records, scorer=self._scorer)
        logger.debug("Catalog loaded: %d records", len(event.records))
        if session.phase == PHASE_LOADING:
            self._set_phase(PHASE_BROWSING)
        return self._sync_highlight()

    def _on_fatal(self, message: str) -> list[Command]:
        session = self.session
        logger.warning("Fatal session error: %s", message)
        session.fatal_error = message
        session.loading_selected = False
        self._in_flight.clear()
        self._set_phase(PHASE_FATAL)
        return [Quit(return_code=1, message=message)]

    # ── Fetch completions ─────────────────────────────────────────────────

    def _is_highlighted(self, name: str) -> bool:
        current = self.session.highlighted
        return current is not None and current.name == name

    def _on_item_loaded(self, event: ItemLoaded) -> list[Command]:
        session = self.session
        self._in_flight.discard(event.name)
        session.cache.put(event.name, event.data)
        if not self._is_highlighted(event.name):
            logger.debug("Cached stale result for %r", event.name)
            return []
        session.loading_selected = False
        session.detail_lines = wrap_record(event.name, event.data, session.layout.detail_width)
        session.detail_scroll = 0
        return []

    def _on_item_failed(self, event: ItemFailed) -> list[Command]:
        session = self.session
        self._in_flight.discard(event.name)
        session.cache.put_error(event.name, event.message)
        if not self._is_highlighted(event.name):
            logger.debug("Cached stale failure for %r", event.name)
            return []
        session.loading_selected = False
        session.detail_lines = []
        session.detail_scroll = 0
        return []

    # ── Keys ──────────────────────────────────────────────────────────────

    def _on_key(self, event: Key) -> list[Command]:
        session = self.session
        if session.phase != PHASE_BROWSING:
            return []
        if event.key in QUIT_KEYS:
            logger.debug("Quit requested with %r", event.key)
            return [Quit(return_code=0)]
        if event.key == FOCUS_SWITCH_KEY:
            session.focus = FOCUS_DETAIL if session.focus == FOCUS_LIST else FOCUS_LIST
            return []
        if session.focus == FOCUS_LIST:
            return self._on_list_key(event)
        self._on_detail_key(event)
        return []

    def _on_list_key(self, event: Key) -> list[Command]:
        catalog = self.session.catalog
        if catalog is None:
            return []
        key = event.key
        page = max(1, self.session.layout.list_height)
        if key == RETRY_KEY:
            return self._retry_highlighted()
        if key in LIST_UP_KEYS:
            catalog.move(-1)
        elif key in LIST_DOWN_KEYS:
            catalog.move(1)
        elif key in PAGE_UP_KEYS:
            catalog.move(-page)
        elif key in PAGE_DOWN_KEYS:
            catalog.move(page)
        elif key in START_KEYS:
            catalog.move_to_start()
        elif key in END_KEYS:
            catalog.move_to_end()
        elif key in BACKSPACE_KEYS:
            catalog.set_pattern(catalog.filter_pattern[:-1])
        elif key in CLEAR_PATTERN_KEYS:
            catalog.set_pattern("")
        elif event.is_printable:
            catalog.set_pattern(catalog.filter_pattern + event.character)
        else:
            return []
        return self._sync_highlight()

    def _on_detail_key(self, event: Key) -> None:
        session = self.session
        key = event.key
        rows = session.layout.detail_height
        if key in DETAIL_UP_KEYS:
            offset = session.detail_scroll - 1
        elif key in DETAIL_DOWN_KEYS:
            offset = session.detail_scroll + 1
        elif key in PAGE_UP_KEYS:
            offset = session.detail_scroll - max(1, rows)
        elif key in PAGE_DOWN_KEYS:
            offset = session.detail_scroll + max(1, rows)
        elif key in DETAIL_START_KEYS:
            offset = 0
        elif key in DETAIL_END_KEYS:
            offset = max_scroll(len(session.detail_lines), rows)
        else:
            return
        session.detail_scroll = max(0, min(offset, max_scroll(len(session.detail_lines), rows)))

    # ── Highlight and fetch gating ────────────────────────────────────────

    def _sync_highlight(self) -> list[Command]:
        """Follow the catalog cursor; fetch the new highlight on a cache miss."""
        session = self.session
        current = session.catalog.highlighted if session.catalog is not None else None
        previous = session.highlighted
        if current == previous:
            return []
        session.highlighted = current
        session.detail_scroll = 0
        session.detail_lines = []
        if current is None:
            session.loading_selected = False
            return []

        entry = session.cache.get(current.name)
        if entry is not None:
            logger.debug("Cache hit for %r", current.name)
            session.loading_selected = False
            self._rewrap_highlighted()
            return []
        session.loading_selected = True
        if current.name in self._in_flight:
            return []
        return [self._issue_fetch(current)]

    def _issue_fetch(self, record: RecordRef) -> FetchRecord:
        self._in_flight.add(record.name)
        logger.debug("Fetching %r", record.name)
        return FetchRecord(namespace=record.namespace, name=record.name)

    def _retry_highlighted(self) -> list[Command]:
        session = self.session
        current = session.highlighted
        entry = session.highlighted_entry
        if current is None or entry is None or not entry.failed:
            return []
        if current.name in self._in_flight:
            return []
        session.loading_selected = True
        return [self._issue_fetch(current)]

    def _rewrap_highlighted(self) -> None:
        session = self.session
        entry = session.highlighted_entry
        if session.highlighted is None or entry is None or entry.data is None:
            return
        session.detail_lines = wrap_record(
            session.highlighted.name, entry.data, session.layout.detail_width
        )
        session.detail_scroll = min(
            session.detail_scroll,
            max_scroll(len(session.detail_lines), session.layout.detail_height),
        )


__all__ = [
    "FOCUS_SWITCH_KEY",
    "QUIT_KEYS",
    "RETRY_KEY",
    "Session",
    "SessionController",
    "empty_catalog_message",
]
