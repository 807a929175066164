"""
theme.py — Cross-Window Theme Sync
===================================
When the visualizer is embedded in a host page, the host posts
{type: "THEME_CHANGE", theme: "<name>"} messages; the page forwards them
to /api/theme and the renderer picks the matching palette.

ThemeSync only accepts messages between init() and teardown(), mirroring
a window "message" listener being added and removed.
"""

import logging
from typing import Any, Mapping, Optional

log = logging.getLogger(__name__)

DARK_THEMES = frozenset({
    "dark", "synthwave", "halloween", "forest", "black", "luxury",
    "dracula", "business", "night", "coffee", "dim",
})

MESSAGE_TYPE = "THEME_CHANGE"


def is_dark_theme(name: Optional[str]) -> bool:
    if not name:
        return False
    return name in DARK_THEMES or "dark" in name


class ThemeSync:

    def __init__(self, default: str = "dark"):
        self._default:    str           = default
        self._theme:      Optional[str] = None
        self._subscribed: bool          = False

    def init(self, initial: Optional[str] = None) -> None:
        """Start accepting messages; `initial` is the host's current theme, if known."""
        self._subscribed = True
        if initial:
            self._theme = initial

    def teardown(self) -> None:
        self._subscribed = False
        self._theme = None

    def handle_message(self, message: Any) -> bool:
        """Apply a THEME_CHANGE message.  Anything else is ignored (returns False)."""
        if not self._subscribed or not isinstance(message, Mapping):
            return False
        theme = message.get("theme")
        if message.get("type") != MESSAGE_TYPE or not isinstance(theme, str) or not theme:
            return False
        log.debug("Theme changed to %s", theme)
        self._theme = theme
        return True

    @property
    def subscribed(self) -> bool:
        return self._subscribed

    @property
    def theme(self) -> str:
        return self._theme or self._default

    @property
    def is_dark(self) -> bool:
        return is_dark_theme(self.theme)
