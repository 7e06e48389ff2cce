"""Colour themes read from an INI file, with a light and a dark variant."""

from __future__ import annotations

import configparser
import re
from dataclasses import dataclass

DEFAULT_THEME = "dark"

PALETTE_ROLES = (
    "Window",
    "WindowText",
    "Base",
    "AlternateBase",
    "Text",
    "Button",
    "ButtonText",
    "Link",
    "LinkVisited",
    "Highlight",
    "HighlightedText",
    "BrightText",
    "Dark",
    "Light",
    "Midlight",
    "Mid",
    "Shadow",
)

DEFAULT_COLORS = {
    "dark_one": "#282a36",
    "dark_two": "#2B2E3B",
    "dark_three": "#333645",
    "dark_four": "#3C4052",
    "bg_one": "#44475a",
    "bg_two": "#4D5066",
    "bg_three": "#595D75",
    "icon_color": "#c3ccdf",
    "icon_hover": "#dce1ec",
    "icon_pressed": "#ff79c6",
    "icon_active": "#f5f6f9",
    "context_color": "#ff79c6",
    "context_hover": "#FF84D7",
    "context_pressed": "#FF90DD",
    "text_title": "#dce1ec",
    "text_foreground": "#f8f8f2",
    "text_description": "#979EC7",
    "text_active": "#dce1ec",
    "white": "#f5f6f9",
    "pink": "#ff79c6",
    "green": "#00ff7f",
    "red": "#ff5555",
    "yellow": "#f1fa8c",
}

_HEX = re.compile(r"#([0-9a-fA-F]+)")
_NAME = re.compile(r"[A-Za-z]+")


def parse_color(text: str | None) -> str | None:
    """Normalise a colour to ``#rrggbb``; None when it is not a colour.

    ``#rgb``, ``#rrggbb`` and ``#aarrggbb`` are accepted (alpha is dropped);
    a plain colour name is returned in lower case.
    """
    if text is None:
        return None
    text = text.strip()
    match = _HEX.fullmatch(text)
    if match:
        digits = match.group(1).lower()
        if len(digits) == 3:
            return "#" + "".join(d * 2 for d in digits)
        if len(digits) == 6:
            return "#" + digits
        if len(digits) == 8:
            return "#" + digits[2:]
        return None
    if _NAME.fullmatch(text):
        return text.lower()
    return None


@dataclass(frozen=True)
class ColorParams:
    """The colours the menu buttons are painted with."""

    dark_one: str | None
    dark_two: str | None
    dark_three: str | None
    bg_one: str | None
    bg_two: str | None
    bg_three: str | None
    icon_color: str | None
    icon_hover: str | None
    icon_pressed: str | None
    icon_active: str | None
    context_color: str | None
    text_foreground: str | None
    text_active: str | None


class Theme:
    """Colours of the current theme, one INI section per theme name."""

    def __init__(self, path=None) -> None:
        self._themes = configparser.ConfigParser(interpolation=None)
        self._themes.optionxform = str
        if path is not None:
            self._themes.read(path, encoding="utf-8")
        self.current = DEFAULT_THEME

    def _value(self, key: str, default: str | None = None) -> str | None:
        return self._themes.get(self.current, key, fallback=default)

    def toggle(self) -> str:
        """Switch between light and dark and return the new theme name."""
        self.current = "dark" if self.current == "light" else "light"
        return self.current

    def palette(self) -> dict[str, str | None]:
        """The palette roles of the current theme; missing roles are None."""
        return {role: parse_color(self._value(role)) for role in PALETTE_ROLES}

    def color(self, name: str) -> str | None:
        """A named colour of the current theme, falling back to its default."""
        if name not in DEFAULT_COLORS:
            raise KeyError(name)
        return parse_color(self._value(name, DEFAULT_COLORS[name]))

    def color_params(self) -> ColorParams:
        return ColorParams(
            dark_one=self.color("dark_one"),
            dark_two=self.color("dark_two"),
            dark_three=self.color("dark_three"),
            bg_one=self.color("bg_one"),
            bg_two=self.color("bg_two"),
            bg_three=self.color("bg_three"),
            icon_color=self.color("icon_color"),
            icon_hover=self.color("icon_hover"),
            icon_pressed=self.color("icon_pressed"),
            icon_active=self.color("icon_active"),
            context_color=self.color("context_color"),
            text_foreground=self.color("text_foreground"),
            text_active=self.color("text_active"),
        )