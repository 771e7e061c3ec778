"""whatToDoNow - task list with pluggable scheduling strategies."""

import logging
import sys

from PyQt6.QtWidgets import (
    QApplication, QMainWindow, QWidget, QStackedWidget,
    QVBoxLayout, QStatusBar, QLabel
)
from PyQt6.QtGui import QAction, QFont
from PyQt6.QtCore import Qt

from jframes import (
    TabSwitcher, MessageBox, get_colors, set_theme, FONT_FAMILY,
    MONO_FONT_FAMILY, register_theme_callback
)
from config import ConfigManager
from logging_setup import setup_logging
from models import Task, ValidationError
from scheduling import Strategy, STRATEGY_INFO
from state import BoardState
from storage import LocalStorage, TaskStore
from widgets import (
    TaskInputWidget, StrategyPicker, SortBar, TaskListWidget,
    StrategyInfoWidget, SettingsWidget
)

logger = logging.getLogger(__name__)

NOTICE_MS = 3000


class MainWindow(QMainWindow):
    """Main application window."""

    TAB_NAMES = ["Tasks", "Strategies", "Settings"]

    def __init__(self, state: BoardState, storage: LocalStorage):
        super().__init__()
        self.state = state
        self.storage = storage

        self.setWindowTitle("whatToDoNow")
        self.setMinimumSize(720, 760)

        self._apply_theme()
        self._setup_menu()
        self._setup_central_widget()
        self._setup_status_bar()
        self._refresh_board()

        register_theme_callback(self._on_theme_changed)

    def _apply_theme(self):
        """Apply theme colors to the main window."""
        colors = get_colors()
        self.setStyleSheet(f"""
            QMainWindow {{
                background-color: {colors['bg_dark']};
            }}
        """)

    def _on_theme_changed(self):
        """Handle theme change - restyle everything."""
        self._apply_theme()
        self._style_menu()
        self._style_status_bar()
        self._rebuild_tabs()

    def _setup_menu(self):
        """Set up the menu bar."""
        menubar = self.menuBar()
        file_menu = menubar.addMenu("&File")

        reset_action = QAction("&Reset Order", self)
        reset_action.setShortcut("Ctrl+R")
        reset_action.triggered.connect(self._reset_order)
        file_menu.addAction(reset_action)

        settings_action = QAction("&Settings", self)
        settings_action.triggered.connect(self._show_settings)
        file_menu.addAction(settings_action)

        file_menu.addSeparator()

        exit_action = QAction("E&xit", self)
        exit_action.setShortcut("Ctrl+Q")
        exit_action.triggered.connect(self.close)
        file_menu.addAction(exit_action)

        self._style_menu()

    def _style_menu(self):
        """Apply theme styling to the menu bar."""
        colors = get_colors()
        menubar = self.menuBar()
        menubar.setFont(QFont(FONT_FAMILY, 10))
        menubar.setStyleSheet(f"""
            QMenuBar {{
                background-color: {colors['bg_dark']};
                color: {colors['text_primary']};
                border-bottom: 1px solid {colors['separator']};
                padding: 2px;
            }}
            QMenuBar::item {{
                background-color: transparent;
                padding: 4px 12px;
                border-radius: 4px;
            }}
            QMenuBar::item:selected {{
                background-color: {colors['bg_light']};
            }}
            QMenu {{
                background-color: {colors['card_bg']};
                color: {colors['text_primary']};
                border: 1px solid {colors['separator']};
                border-radius: 6px;
                padding: 4px;
            }}
            QMenu::item {{
                padding: 6px 24px;
                border-radius: 4px;
            }}
            QMenu::item:selected {{
                background-color: {colors['bg_light']};
            }}
            QMenu::separator {{
                height: 1px;
                background-color: {colors['separator']};
                margin: 4px 8px;
            }}
        """)

    def _show_settings(self):
        """Switch to the Settings tab."""
        self.tab_switcher.set_current_tab("Settings")
        self.stack.setCurrentIndex(self.TAB_NAMES.index("Settings"))

    def _setup_central_widget(self):
        """Set up the central widget with TabSwitcher + QStackedWidget."""
        colors = get_colors()

        central = QWidget()
        central.setStyleSheet(f"background-color: {colors['bg_dark']};")
        self.setCentralWidget(central)

        main_layout = QVBoxLayout(central)
        main_layout.setContentsMargins(8, 8, 8, 4)
        main_layout.setSpacing(8)

        self.tab_switcher = TabSwitcher(self.TAB_NAMES)
        self.tab_switcher.set_on_tab_change(self._on_tab_changed)
        main_layout.addWidget(self.tab_switcher)

        self.stack = QStackedWidget()
        self.stack.setStyleSheet("background: transparent;")
        main_layout.addWidget(self.stack, 1)

        self._build_tabs()

    def _build_tabs(self):
        self.stack.addWidget(self._create_tasks_tab())

        self.info_widget = StrategyInfoWidget()
        self.stack.addWidget(self.info_widget)

        self.settings_widget = SettingsWidget()
        self.settings_widget.settings_changed.connect(self._on_settings_changed)
        self.stack.addWidget(self.settings_widget)

    def _rebuild_tabs(self):
        """Recreate every tab so new theme colors are picked up."""
        current_index = self.stack.currentIndex()
        while self.stack.count():
            old = self.stack.widget(0)
            self.stack.removeWidget(old)
            old.deleteLater()
        self._build_tabs()
        self._refresh_board()
        self.stack.setCurrentIndex(current_index)

    def _on_tab_changed(self, tab_name: str):
        """Handle tab switcher selection."""
        self.stack.setCurrentIndex(self.TAB_NAMES.index(tab_name))

    def _create_tasks_tab(self) -> QWidget:
        colors = get_colors()

        tab = QWidget()
        tab.setStyleSheet("background: transparent;")
        layout = QVBoxLayout(tab)
        layout.setContentsMargins(12, 8, 12, 8)
        layout.setSpacing(12)

        title = QLabel(
            f"<span style='color:{colors['accent']}'>what</span>To"
            f"<span style='color:{colors['accent']}'>Do</span>Now"
        )
        title.setFont(QFont(FONT_FAMILY, 24, QFont.Weight.Bold))
        title.setStyleSheet(f"color: {colors['text_primary']}; background: transparent;")
        title.setAlignment(Qt.AlignmentFlag.AlignCenter)
        layout.addWidget(title)

        subtitle = QLabel("Optimize your productivity with O(n log n) scheduling algorithms")
        subtitle.setFont(QFont(MONO_FONT_FAMILY, 10))
        subtitle.setStyleSheet(f"color: {colors['text_secondary']}; background: transparent;")
        subtitle.setAlignment(Qt.AlignmentFlag.AlignCenter)
        layout.addWidget(subtitle)

        self.task_input = TaskInputWidget()
        self.task_input.task_created.connect(self._on_task_created)
        self.task_input.validation_failed.connect(self._on_validation_failed)
        layout.addWidget(self.task_input)

        self.strategy_picker = StrategyPicker()
        self.strategy_picker.strategy_selected.connect(self._on_strategy_selected)
        layout.addWidget(self.strategy_picker)

        self.sort_bar = SortBar()
        self.sort_bar.reset_requested.connect(self._reset_order)
        layout.addWidget(self.sort_bar)

        self.task_list = TaskListWidget()
        self.task_list.task_toggled.connect(self._on_task_toggled)
        layout.addWidget(self.task_list, 1)

        return tab

    def _refresh_board(self):
        """Push the board state into the task widgets."""
        self.task_list.set_tasks(self.state.displayed)
        self.strategy_picker.set_sortable(self.state.can_sort)
        self.strategy_picker.set_selected(self.state.selected)
        self.sort_bar.set_strategy(self.state.selected)

    # ---- board actions ----

    def _on_task_created(self, task: Task):
        try:
            self.state.add_task(task)
        except ValidationError as e:
            self._on_validation_failed(str(e))
            return
        self._refresh_board()
        self.status_bar.showMessage("Task added successfully", NOTICE_MS)

    def _on_validation_failed(self, message: str):
        logger.info("Rejected task input: %s", message)
        self.status_bar.showMessage(message, NOTICE_MS)
        MessageBox(self, "Cannot Add Task", message, "warning")

    def _on_task_toggled(self, task_id: str, completed: bool):
        self.state.set_completed(task_id, completed)
        self._refresh_board()

    def _on_strategy_selected(self, value: str):
        strategy = Strategy(value)
        if self.state.select_strategy(strategy):
            self.status_bar.showMessage(f"Sorted using {STRATEGY_INFO[strategy].name}", NOTICE_MS)
        self._refresh_board()

    def _reset_order(self):
        self.state.reset_order()
        self._refresh_board()
        self.status_bar.showMessage("Sorting reset to default order", NOTICE_MS)

    def _on_settings_changed(self, changes: dict):
        """Handle settings changes."""
        if 'theme' in changes:
            self.status_bar.showMessage(f"Theme changed to {changes['theme']}", NOTICE_MS)

    def _setup_status_bar(self):
        """Set up the status bar."""
        self.status_bar = QStatusBar()
        self.setStatusBar(self.status_bar)
        self._style_status_bar()
        self.status_bar.showMessage("Ready")

    def _style_status_bar(self):
        """Apply theme styling to the status bar."""
        colors = get_colors()
        self.status_bar.setFont(QFont(FONT_FAMILY, 9))
        self.status_bar.setStyleSheet(f"""
            QStatusBar {{
                background-color: {colors['bg_dark']};
                color: {colors['text_secondary']};
                border-top: 1px solid {colors['separator']};
                padding: 2px 8px;
            }}
        """)

    def closeEvent(self, event):
        """Handle window close."""
        self.storage.close()
        event.accept()


def main():
    """Application entry point."""
    manager = ConfigManager()
    config = manager.config
    setup_logging(log_dir=config.log_dir)
    # Config loads before logging exists; repeat its fallback into the log file.
    if manager.load_error:
        logger.warning("%s", manager.load_error)
    logger.info("Starting whatToDoNow (storage=%s)", config.storage_path)

    storage = LocalStorage(config.storage_path)
    state = BoardState(TaskStore(storage))
    state.load()

    app = QApplication(sys.argv)
    app.setApplicationName("whatToDoNow")
    app.setFont(QFont(FONT_FAMILY, 10))

    try:
        set_theme(config.theme)
    except ValueError:
        logger.warning("Unknown theme %r; using dark", config.theme)
        set_theme("dark")

    window = MainWindow(state, storage)
    window.show()

    sys.exit(app.exec())


if __name__ == "__main__":
    main()
