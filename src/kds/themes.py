"""Theme system — color palettes, render styles and Textual theme builders."""

from __future__ import annotations

from dataclasses import dataclass

from textual.theme import Theme as TextualTheme

DEFAULT_THEME_NAME = "default"

# Stock kds palette: deep-sky-blue panes, orchid focus ring
DEFAULT_THEME: dict[str, str] = {
    "background": "#000000",
    "panel": "#0b0b0b",
    "text": "#e0e0e0",
    "muted": "#888888",
    "accent": "#00bfff",
    "focus": "#ad58b4",
    "error": "#ff4136",
    "success": "#2ecc40",
}

MONOKAI_THEME: dict[str, str] = {
    "background": "#272822",
    "panel": "#1e1e1e",
    "text": "#f8f8f2",
    "muted": "#75715e",
    "accent": "#66d9ef",
    "focus": "#ae81ff",
    "error": "#f92672",
    "success": "#a6e22e",
}

CATPPUCCIN_MOCHA_THEME: dict[str, str] = {
    "background": "#1e1e2e",
    "panel": "#181825",
    "text": "#cdd6f4",
    "muted": "#6c7086",
    "accent": "#89b4fa",
    "focus": "#cba6f7",
    "error": "#f38ba8",
    "success": "#a6e3a1",
}

THEMES: dict[str, dict[str, str]] = {
    DEFAULT_THEME_NAME: DEFAULT_THEME,
    "monokai": MONOKAI_THEME,
    "catppuccin-mocha": CATPPUCCIN_MOCHA_THEME,
}
THEME_NAMES: list[str] = list(THEMES.keys())


@dataclass(slots=True, frozen=True)
class ViewStyle:
    """Presentation constants handed to the renderer at startup."""

    primary: str
    focused: str
    error: str
    note: str
    text: str
    spinner: str = "dots"
    search_prompt: str = "🔎 "
    search_placeholder: str = "Search for a secret..."

    @classmethod
    def from_palette(cls, colors: dict[str, str]) -> ViewStyle:
        return cls(
            primary=colors["accent"],
            focused=colors["focus"],
            error=colors["error"],
            note=colors["muted"],
            text=colors["text"],
        )


def resolve_theme_name(name: str | None) -> str:
    """Return name if it is a known theme, else the default theme name."""
    if name and name in THEMES:
        return name
    return DEFAULT_THEME_NAME


def get_view_style(name: str | None = None) -> ViewStyle:
    """Build the render style for a theme (unknown names use the default)."""
    return ViewStyle.from_palette(THEMES[resolve_theme_name(name)])


def _build_textual_theme(name: str, colors: dict[str, str]) -> TextualTheme:
    """Convert a palette to a Textual Theme so the screen chrome matches."""
    return TextualTheme(
        name=f"kds-{name}",
        primary=colors["accent"],
        secondary=colors["focus"],
        accent=colors["focus"],
        foreground=colors["text"],
        background=colors["background"],
        surface=colors["panel"],
        panel=colors["panel"],
        error=colors["error"],
        success=colors["success"],
        dark=True,
    )


TEXTUAL_THEMES: dict[str, TextualTheme] = {
    name: _build_textual_theme(name, colors) for name, colors in THEMES.items()
}


__all__ = [
    "CATPPUCCIN_MOCHA_THEME",
    "DEFAULT_THEME",
    "DEFAULT_THEME_NAME",
    "MONOKAI_THEME",
    "TEXTUAL_THEMES",
    "THEMES",
    "THEME_NAMES",
    "ViewStyle",
    "get_view_style",
    "resolve_theme_name",
]
