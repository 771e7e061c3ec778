"""
jframes.py - Theme registry and reusable PyQt6 building blocks

Components:
    TabButton    - A styled checkable button for tab navigation
    TabSwitcher  - A segmented button-style tab switcher container
    MessageBox   - A themed modal message dialog

Helpers:
    get_colors(), set_theme(), register_theme_callback() - theme state
    batch_update()        - defer repaints during multi-step changes
    get_scrollbar_qss()   - consistent scrollbar styling
    get_dropdown_arrow_path() - themed combo box arrow image

Usage Example:
    from jframes import TabSwitcher, get_colors

    switcher = TabSwitcher(["Tasks", "Settings"])
    switcher.set_on_tab_change(lambda name: print(f"Switched to {name}"))
"""

import logging
import os
import tempfile
from contextlib import contextmanager
from dataclasses import dataclass, asdict
from typing import Callable

from PyQt6.QtWidgets import (
    QWidget, QFrame, QLabel, QPushButton, QVBoxLayout, QHBoxLayout,
    QButtonGroup, QDialog
)
from PyQt6.QtCore import Qt
from PyQt6.QtGui import QFont

logger = logging.getLogger(__name__)

# =============================================================================
# THEME DEFINITIONS
# =============================================================================

# Font configuration
FONT_FAMILY = "Inter"
MONO_FONT_FAMILY = "JetBrains Mono"


@dataclass
class Theme:
    """Represents a complete UI theme."""

    name: str              # Internal identifier (e.g., "dark")
    display_name: str      # User-facing name (e.g., "Dark Mode")

    # Core background colors
    bg_dark: str           # Main window background
    bg_medium: str         # Inputs and task rows
    bg_light: str          # Lighter accent/selection background

    # Text colors
    text_primary: str      # Main text color
    text_secondary: str    # Muted/hint text color

    # Component colors
    separator: str         # Borders and dividers
    card_bg: str           # Section card background
    container_bg: str      # Container frame background

    # Semantic colors
    accent: str            # Selected strategy, badges
    danger: str            # Overdue
    warning: str           # Due today
    caution: str           # Due tomorrow
    success: str           # Add button, completed check

    # Scrollbar colors
    scrollbar_track: str
    scrollbar_thumb: str
    scrollbar_thumb_hover: str

    def to_dict(self) -> dict[str, str]:
        """Return color values as dictionary."""
        colors = asdict(self)
        del colors["name"], colors["display_name"]
        return colors


DARK_THEME = Theme(
    name="dark",
    display_name="Dark Mode",
    bg_dark="#0f1115",
    bg_medium="#181b22",
    bg_light="#242a36",
    text_primary="#e6e8ee",
    text_secondary="#8a91a3",
    separator="#2e3442",
    card_bg="#151922",
    container_bg="#12151c",
    accent="#22c55e",
    danger="#dc2626",
    warning="#f97316",
    caution="#f59e0b",
    success="#16a34a",
    scrollbar_track="#151922",
    scrollbar_thumb="#2e3442",
    scrollbar_thumb_hover="#3b4354",
)

LIGHT_THEME = Theme(
    name="light",
    display_name="Light Mode",
    bg_dark="#f4f5f7",
    bg_medium="#ffffff",
    bg_light="#e5e7eb",
    text_primary="#111827",
    text_secondary="#6b7280",
    separator="#d1d5db",
    card_bg="#ffffff",
    container_bg="#eceef2",
    accent="#15803d",
    danger="#dc2626",
    warning="#ea580c",
    caution="#d97706",
    success="#16a34a",
    scrollbar_track="#eceef2",
    scrollbar_thumb="#c4c8d0",
    scrollbar_thumb_hover="#a3a9b5",
)

# Theme registry
THEMES: dict[str, Theme] = {t.name: t for t in (DARK_THEME, LIGHT_THEME)}


# =============================================================================
# MODULE STATE
# =============================================================================

_current_theme: Theme = DARK_THEME
_theme_change_callbacks: list[Callable[[], None]] = []


# =============================================================================
# PUBLIC API
# =============================================================================

def get_current_theme() -> Theme:
    """Get the currently active theme."""
    return _current_theme


def get_colors() -> dict[str, str]:
    """Get current theme colors as dictionary."""
    return _current_theme.to_dict()


def get_available_themes() -> list[tuple[str, str]]:
    """
    Get list of available themes.

    Returns:
        List of (name, display_name) tuples
    """
    return [(t.name, t.display_name) for t in THEMES.values()]


def set_theme(theme_name: str) -> Theme:
    """
    Set the active theme by name.

    Args:
        theme_name: Internal name of theme (e.g., "dark")

    Returns:
        The newly active Theme

    Raises:
        ValueError: If theme_name is not found
    """
    global _current_theme

    if theme_name not in THEMES:
        raise ValueError(f"Unknown theme: {theme_name}")

    _current_theme = THEMES[theme_name]

    # Notify all registered callbacks
    _notify_theme_change()

    return _current_theme


def register_theme_callback(callback: Callable[[], None]):
    """Register a callback to be called when theme changes."""
    if callback not in _theme_change_callbacks:
        _theme_change_callbacks.append(callback)


# =============================================================================
# PRIVATE FUNCTIONS
# =============================================================================

def _notify_theme_change():
    """Call all registered theme change callbacks."""
    for callback in list(_theme_change_callbacks):
        try:
            callback()
        except Exception:
            # Log but don't crash if a callback fails
            logger.exception("Theme callback %r failed", callback)


# =============================================================================
# GUI Utilities
# =============================================================================

# Cache for generated SVG arrow paths
_arrow_svg_cache: dict[str, str] = {}


def get_dropdown_arrow_path(color: str) -> str:
    """
    Get the path to an SVG dropdown arrow file with the specified color.

    Creates the SVG file if it doesn't exist. The path is formatted with
    forward slashes for use in Qt stylesheets.
    """
    if color in _arrow_svg_cache:
        path = _arrow_svg_cache[color]
        if os.path.exists(path):
            return path.replace('\\', '/')

    svg_content = f'''<svg xmlns="http://www.w3.org/2000/svg" width="12" height="8" viewBox="0 0 12 8">
<polygon points="0,0 12,0 6,8" fill="{color}"/>
</svg>'''

    color_safe = color.replace('#', '')
    svg_path = os.path.join(tempfile.gettempdir(), f"whattodonow_arrow_{color_safe}.svg")

    with open(svg_path, 'w') as f:
        f.write(svg_content)

    _arrow_svg_cache[color] = svg_path
    return svg_path.replace('\\', '/')


# Track nested batch_update calls per widget
_update_hold_count: dict[int, int] = {}


@contextmanager
def batch_update(widget: QWidget):
    """
    Context manager to defer painting during multi-step UI changes.

    Only the outermost of nested calls toggles updates on the widget, so
    the final state is rendered in a single repaint.

    Usage:
        with batch_update(task_list):
            task_list.clear()
            for task in tasks:
                task_list.add_task(task)
    """
    widget_id = id(widget)

    prev_count = _update_hold_count.get(widget_id, 0)
    _update_hold_count[widget_id] = prev_count + 1

    if prev_count == 0:
        widget.setUpdatesEnabled(False)

    try:
        yield
    finally:
        current_count = _update_hold_count.get(widget_id, 1) - 1
        if current_count <= 0:
            _update_hold_count.pop(widget_id, None)
            widget.setUpdatesEnabled(True)
            widget.update()
        else:
            _update_hold_count[widget_id] = current_count


# =============================================================================
# Navigation Components
# =============================================================================

class TabButton(QPushButton):
    """
    A styled checkable button for tab navigation.

    Provides theme-aware styling with different appearances for selected
    and unselected states. Designed to work with TabSwitcher but can be
    used independently.
    """

    def __init__(self, text: str, parent=None):
        super().__init__(text, parent)
        self.setCheckable(True)
        self.setFont(QFont(FONT_FAMILY, 11))
        self.setMinimumHeight(32)
        self.setCursor(Qt.CursorShape.PointingHandCursor)
        self._update_style(False)

    def _update_style(self, selected: bool):
        """Update button style based on selection state."""
        colors = get_colors()
        if selected:
            self.setStyleSheet(f"""
                QPushButton {{
                    background-color: {colors['bg_light']};
                    color: {colors['text_primary']};
                    border: none;
                    border-radius: 6px;
                    padding: 6px 16px;
                }}
            """)
        else:
            self.setStyleSheet(f"""
                QPushButton {{
                    background-color: {colors['container_bg']};
                    color: {colors['text_primary']};
                    border: none;
                    border-radius: 6px;
                    padding: 6px 16px;
                }}
                QPushButton:hover {{
                    background-color: {colors['separator']};
                }}
            """)

    def setChecked(self, checked: bool):
        super().setChecked(checked)
        self._update_style(checked)


class TabSwitcher(QFrame):
    """
    A segmented button-style tab switcher container.

    Only one tab is active at a time; a callback is told the new tab name.
    """

    def __init__(self, tabs: list[str], parent=None):
        super().__init__(parent)
        colors = get_colors()

        self.setStyleSheet(f"""
            QFrame {{
                background-color: {colors['container_bg']};
                border-radius: 8px;
            }}
        """)

        layout = QHBoxLayout(self)
        layout.setContentsMargins(4, 4, 4, 4)
        layout.setSpacing(2)

        self.buttons: dict[str, TabButton] = {}
        self.button_group = QButtonGroup(self)
        self.button_group.setExclusive(True)

        for i, tab_name in enumerate(tabs):
            btn = TabButton(tab_name)
            self.buttons[tab_name] = btn
            self.button_group.addButton(btn, i)
            layout.addWidget(btn)

        self.button_group.buttonClicked.connect(self._on_button_clicked)

        if tabs:
            self.buttons[tabs[0]].setChecked(True)

        self._current_tab = tabs[0] if tabs else ""
        self._on_tab_change = None

    def _on_button_clicked(self, button):
        """Handle tab button click."""
        for name, btn in self.buttons.items():
            btn._update_style(btn == button)
            if btn == button:
                self._current_tab = name

        if self._on_tab_change:
            self._on_tab_change(self._current_tab)

    def set_on_tab_change(self, callback):
        """Set the callback for tab changes."""
        self._on_tab_change = callback

    def set_current_tab(self, tab_name: str):
        """Set the current tab by name."""
        if tab_name in self.buttons:
            self.buttons[tab_name].setChecked(True)
            self._current_tab = tab_name
            for name, btn in self.buttons.items():
                btn._update_style(name == tab_name)


# =============================================================================
# Dialog Components
# =============================================================================

class MessageBox(QDialog):
    """Simple message box dialog using PyQt6."""

    def __init__(self, parent: QWidget, title: str, message: str, msg_type: str = "info"):
        super().__init__(parent)
        colors = get_colors()

        self.setWindowTitle(title)
        self.setFixedSize(350, 150)
        self.setModal(True)
        self.setStyleSheet(f"background-color: {colors['bg_dark']};")

        self._build_ui(message, msg_type)

        # Center on parent
        if parent:
            parent_geo = parent.geometry()
            x = parent_geo.x() + (parent_geo.width() - 350) // 2
            y = parent_geo.y() + (parent_geo.height() - 150) // 2
            self.move(x, y)

        self.exec()

    def _build_ui(self, message: str, msg_type: str):
        """Build the dialog UI."""
        colors = get_colors()
        text_color = colors['danger'] if msg_type in ("warning", "error") else colors['text_primary']

        layout = QVBoxLayout(self)
        layout.setContentsMargins(20, 20, 20, 20)

        msg_label = QLabel(message)
        msg_label.setFont(QFont(FONT_FAMILY, 11))
        msg_label.setStyleSheet(f"color: {text_color};")
        msg_label.setWordWrap(True)
        msg_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        layout.addWidget(msg_label)

        layout.addStretch()

        btn_layout = QHBoxLayout()
        btn_layout.addStretch()

        ok_btn = QPushButton("OK")
        ok_btn.setFixedSize(100, 32)
        ok_btn.setFont(QFont(FONT_FAMILY, 11))
        ok_btn.setStyleSheet(f"""
            QPushButton {{
                background-color: {colors['bg_light']};
                color: {colors['text_primary']};
                border: none;
                border-radius: 6px;
            }}
            QPushButton:hover {{
                background-color: {colors['separator']};
            }}
        """)
        ok_btn.clicked.connect(self.accept)
        btn_layout.addWidget(ok_btn)

        btn_layout.addStretch()
        layout.addLayout(btn_layout)


def get_scrollbar_qss(transparent_track: bool = False, width: int = 12) -> str:
    """
    Generate consistent QSS for vertical scrollbar styling.

    Args:
        transparent_track: Use transparent track (True) or opaque theme color (False)
        width: Scrollbar width in pixels
    """
    colors = get_colors()
    track_color = "transparent" if transparent_track else colors["scrollbar_track"]
    border_radius = max(3, width // 3)

    return f"""
        QScrollBar:vertical {{
            background-color: {track_color};
            width: {width}px;
            border-radius: {border_radius}px;
        }}
        QScrollBar::handle:vertical {{
            background-color: {colors['scrollbar_thumb']};
            border-radius: {border_radius}px;
            min-height: 20px;
        }}
        QScrollBar::handle:vertical:hover {{
            background-color: {colors['scrollbar_thumb_hover']};
        }}
        QScrollBar::add-line:vertical, QScrollBar::sub-line:vertical {{
            height: 0px;
        }}
        QScrollBar::add-page:vertical, QScrollBar::sub-page:vertical {{
            background: none;
        }}
    """
