"""Internal UI constants for the SecretBrowser app."""

from __future__ import annotations

APP_CSS = """
Screen {
    background: $background;
    layout: vertical;
    overflow: hidden;
}

SessionView {
    width: 100%;
    height: 100%;
    color: $foreground;
}
"""

# Repaint cadence while a spinner is on screen
SPINNER_REFRESH_SECONDS = 0.1

# How long pending fetches get to cancel during teardown
TASK_CANCEL_TIMEOUT_SECONDS = 0.5


__all__ = [
    "APP_CSS",
    "SPINNER_REFRESH_SECONDS",
    "TASK_CANCEL_TIMEOUT_SECONDS",
]
