"""Application settings read from an INI file, with built-in defaults."""

from __future__ import annotations

import configparser
from typing import NamedTuple


class Size(NamedTuple):
    width: int
    height: int


def _unquote(text: str) -> str:
    text = text.strip()
    if len(text) >= 2 and text[0] == text[-1] == '"':
        return text[1:-1]
    return text


def _to_int(text: str | None, default: int) -> int:
    if text is None:
        return default
    try:
        return int(text.strip())
    except ValueError:
        return 0


def _to_bool(text: str | None, default: bool) -> bool:
    if text is None:
        return default
    return text.strip().lower() not in ("", "0", "false")


class Settings:
    """Values from sections such as ``[Application]`` and ``[Window]``.

    A missing file or key yields the built-in default; a value that is not
    a number where one is expected reads as 0.
    """

    def __init__(self, path=None) -> None:
        self._config = configparser.ConfigParser(interpolation=None)
        self._config.optionxform = str
        if path is not None:
            self._config.read(path, encoding="utf-8")

    def _raw(self, key: str) -> str | None:
        section, option = key.split("/", 1)
        value = self._config.get(section, option, fallback=None)
        return None if value is None else _unquote(value)

    def _text(self, key: str, default: str) -> str:
        value = self._raw(key)
        return default if value is None else value

    def _int(self, key: str, default: int) -> int:
        return _to_int(self._raw(key), default)

    def _size(self, first: str, first_default: int, second: str, second_default: int) -> Size:
        return Size(self._int(first, first_default), self._int(second, second_default))

    @property
    def app_name(self) -> str:
        return self._text("Application/app_name", "DefaultApp")

    @property
    def version(self) -> str:
        return self._text("Application/version", "v1.0.0")

    @property
    def copyright(self) -> str:
        return self._text("Application/copyright", "DefaultCopyright")

    @property
    def year(self) -> int:
        return self._int("Application/year", 2021)

    @property
    def theme_name(self) -> str:
        return self._text("Application/theme_name", "default_theme")

    @property
    def custom_title_bar(self) -> bool:
        return _to_bool(self._raw("Application/custom_title_bar"), True)

    @property
    def startup_size(self) -> Size:
        return self._size("Window/startup_width", 1260, "Window/startup_height", 720)

    @property
    def minimum_size(self) -> Size:
        return self._size("Window/minimum_width", 960, "Window/minimum_height", 540)

    @property
    def left_menu_size(self) -> Size:
        """Minimum width as ``width`` and maximum width as ``height``."""
        return self._size("Menu/left_menu_minimum", 50, "Menu/left_menu_maximum", 240)

    @property
    def left_menu_content_margins(self) -> int:
        return self._int("Menu/left_menu_content_margins", 3)

    @property
    def left_column_size(self) -> Size:
        return self._size(
            "LeftColumn/left_column_minimum", 0, "LeftColumn/left_column_maximum", 240
        )

    @property
    def right_column_size(self) -> Size:
        return self._size(
            "RightColumn/right_column_minimum", 0, "RightColumn/right_column_maximum", 240
        )

    @property
    def time_animation(self) -> int:
        return self._int("Animation/time_animation", 500)

    @property
    def font_family(self) -> str:
        return self._text("Font/font_family", "Roboto")

    @property
    def font_title_size(self) -> int:
        return self._int("Font/font_title_size", 10)

    @property
    def font_text_size(self) -> int:
        return self._int("Font/font_text_size", 9)