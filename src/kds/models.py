"""Data models and constants for the kds secret browser."""

from __future__ import annotations

from dataclasses import dataclass, field

# Application identity: single source of truth for platformdirs config paths
CONFIG_APP_NAME = "kds"

DEFAULT_NAMESPACE = "default"

# Session phases
PHASE_INITIALIZING = "initializing"
PHASE_LOADING = "loading"
PHASE_BROWSING = "browsing"
PHASE_FATAL = "fatal"

# Focusable regions
FOCUS_LIST = "list"
FOCUS_DETAIL = "detail"

# Appended to a field value whose transport encoding could not be decoded
DECODE_FAILED_MARKER = "(decode failed)"

# Decorative overhead of the two-pane layout (in terminal cells)
HELP_BAR_HEIGHT = 1
PANE_BORDER = 1  # per side
PANE_PADDING_VERTICAL = 1  # per side
PANE_PADDING_HORIZONTAL = 2  # per side
SEARCH_INPUT_HEIGHT = 1

REQUEST_TIMEOUT_DEFAULT = 30
REQUEST_TIMEOUT_LIMIT = 300


@dataclass(slots=True, frozen=True)
class RecordRef:
    """A secret listed in a namespace."""

    name: str
    namespace: str


@dataclass(slots=True)
class CacheEntry:
    """Outcome of the latest completed fetch for one secret.

    Exactly one of ``data`` and ``error`` is set.
    """

    data: dict[str, str] | None = None
    error: str | None = None

    @property
    def failed(self) -> bool:
        return self.error is not None


@dataclass(slots=True)
class PaneLayout:
    """Inner dimensions of the list and detail regions."""

    list_width: int = 0
    list_height: int = 0
    detail_width: int = 0
    detail_height: int = 0


@dataclass(slots=True)
class UserConfig:
    """User configuration loaded from config.json."""

    theme_name: str = "default"
    kubeconfig: str = ""  # Empty = kubernetes client default (~/.kube/config)
    namespace: str = ""  # Empty = namespace of the current kubeconfig context
    request_timeout_seconds: int = REQUEST_TIMEOUT_DEFAULT
    config_defaulted: bool = field(default=False, compare=False)
    version: int = 1


__all__ = [
    "CONFIG_APP_NAME",
    "DECODE_FAILED_MARKER",
    "DEFAULT_NAMESPACE",
    "FOCUS_DETAIL",
    "FOCUS_LIST",
    "HELP_BAR_HEIGHT",
    "PANE_BORDER",
    "PANE_PADDING_HORIZONTAL",
    "PANE_PADDING_VERTICAL",
    "PHASE_BROWSING",
    "PHASE_FATAL",
    "PHASE_INITIALIZING",
    "PHASE_LOADING",
    "REQUEST_TIMEOUT_DEFAULT",
    "REQUEST_TIMEOUT_LIMIT",
    "SEARCH_INPUT_HEIGHT",
    "CacheEntry",
    "PaneLayout",
    "RecordRef",
    "UserConfig",
]
