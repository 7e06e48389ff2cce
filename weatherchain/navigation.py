"""Navigation state of the main window: menu buttons, pages, title and theme."""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from enum import Enum

from .settings import Settings, Size
from .theme import Theme

_log = logging.getLogger(__name__)

MENU_ICON = ":/icons/menu.svg"
MENU_CLOSE_ICON = ":/icons/arow.svg"
MENU_MINIMUM_WIDTH = 50
MENU_MAXIMUM_WIDTH = 240


class Page(Enum):
    HOME = "home_page"
    ANALYTICS = "page_analytics"
    BLOCKCHAIN = "page_blockchain"
    DATA = "page_data"
    MAP = "map_page"
    PREFERENCES = "page_preferences"


@dataclass
class MenuItem:
    """One button of the left menu."""

    id: str
    icon: str
    text: str
    tooltip: str
    show_top: bool = False
    is_active: bool = False

    @property
    def icon_path(self) -> str:
        return f":/icons/{self.icon}"


DEFAULT_MENUS = (
    MenuItem("btn_home", "home.svg", "Home", "Home page", True, True),
    MenuItem("btn_widgets", "chart.svg", "Show Widgets", "Show widgets", True, False),
    MenuItem("btn_add_user", "table.svg", "Add Users", "Add users", True, False),
    MenuItem("btn_new_file", "table.svg", "New File", "Create new file", True, False),
    MenuItem("btn_save", "map.svg", "Save File", "Save file", True, False),
    MenuItem("btn_settings", "settings.svg", "Settings", "Open settings", False, False),
    MenuItem("btn_info", "info.svg", "Information", "Open informations", False, False),
)

# Button id -> (page to show, or None for the About dialog; title to set).
BUTTON_ACTIONS: dict[str, tuple[Page | None, str]] = {
    "btn_home": (Page.HOME, "Home Page"),
    "btn_widgets": (Page.ANALYTICS, "Analytics"),
    "btn_add_user": (Page.BLOCKCHAIN, "Blockchain History"),
    "btn_new_file": (Page.DATA, "Data History"),
    "btn_save": (Page.MAP, "Map Pages"),
    "btn_info": (None, "About"),
    "btn_settings": (Page.PREFERENCES, "Settings"),
}


class Navigator:
    """Which page is shown, which menu button is active, and the theme."""

    def __init__(self, settings: Settings | None = None, theme: Theme | None = None) -> None:
        self.settings = settings if settings is not None else Settings()
        self.theme = theme if theme is not None else Theme()
        self.window_title = self.settings.app_name
        self.startup_size: Size = self.settings.startup_size
        self.minimum_size: Size = self.settings.minimum_size
        margins = self.settings.left_menu_content_margins
        self.left_menu_frame_width = margins * 2 + self.settings.left_menu_size.width
        self.menu_items = [replace(item) for item in DEFAULT_MENUS]
        self.menu_width = MENU_MINIMUM_WIDTH
        self.menu_expanded = False
        self.menu_icon = MENU_ICON
        self.dialog: str | None = None
        self.title = self.settings.app_name
        self.page = Page.HOME
        self.palette = self.theme.palette()

    @property
    def top_items(self) -> list[MenuItem]:
        return [item for item in self.menu_items if item.show_top]

    @property
    def bottom_items(self) -> list[MenuItem]:
        return [item for item in self.menu_items if not item.show_top]

    @property
    def active_ids(self) -> list[str]:
        return [item.id for item in self.menu_items if item.is_active]

    def select_only_one(self, button_id: str) -> None:
        """Make ``button_id`` the only active menu button."""
        for item in self.menu_items:
            item.is_active = item.id == button_id

    def click(self, button_id: str) -> bool:
        """Handle a menu button; return False for an unknown button."""
        _log.debug("Button %s clicked!", button_id)
        action = BUTTON_ACTIONS.get(button_id)
        if action is None:
            return False
        self.select_only_one(button_id)
        page, title = action
        if page is None:
            self.dialog = "about"
        else:
            self.page = page
        self.title = title
        return True

    def toggle_menu(self) -> int:
        """Expand a collapsed menu or collapse an expanded one; return its width."""
        if self.menu_width == MENU_MINIMUM_WIDTH:
            self.menu_width = MENU_MAXIMUM_WIDTH
            self.menu_expanded = True
            self.menu_icon = MENU_CLOSE_ICON
        else:
            self.menu_width = MENU_MINIMUM_WIDTH
            self.menu_expanded = False
            self.menu_icon = MENU_ICON
        return self.menu_width

    def toggle_theme(self) -> str:
        """Switch theme, reload the palette and return the new theme name."""
        name = self.theme.toggle()
        self.palette = self.theme.palette()
        return name