"""Custom PyQt6 widgets for whatToDoNow - themed with jframes."""

import os
import tempfile
from datetime import datetime, timedelta
from typing import Optional

from PyQt6.QtWidgets import (
    QWidget, QVBoxLayout, QHBoxLayout, QGridLayout, QComboBox, QPushButton,
    QLineEdit, QSpinBox, QDateEdit, QLabel, QTextEdit, QCheckBox, QFrame,
    QFileDialog, QScrollArea, QSlider
)
from PyQt6.QtCore import Qt, pyqtSignal, QDate, QEvent
from PyQt6.QtGui import QFont

from jframes import (
    get_colors, get_dropdown_arrow_path, get_scrollbar_qss, batch_update,
    MessageBox, FONT_FAMILY, MONO_FONT_FAMILY, get_available_themes,
    get_current_theme, set_theme
)
from config import get_config, ConfigManager
from forms import (
    DURATION_MIN, DURATION_MAX, DURATION_STEP, TaskFormData
)
from models import (
    MIN_IMPORTANCE, MAX_IMPORTANCE, Task, ValidationError,
    deadline_status, importance_label, now as current_time
)
from scheduling import Strategy, STRATEGY_INFO


def _input_qss(colors: dict) -> str:
    """Common QSS for input fields (QLineEdit, QTextEdit)."""
    return f"""
        background-color: {colors['bg_medium']};
        color: {colors['text_primary']};
        border: 1px solid {colors['separator']};
        border-radius: 6px;
        padding: 4px 8px;
        font-family: {FONT_FAMILY};
        font-size: 12px;
    """


def _combo_qss(colors: dict) -> str:
    """Common QSS for QComboBox with themed dropdown arrow."""
    arrow_path = get_dropdown_arrow_path(colors['text_primary'])
    return f"""
        QComboBox {{
            background-color: {colors['bg_medium']};
            color: {colors['text_primary']};
            border: 1px solid {colors['separator']};
            border-radius: 6px;
            padding: 4px 28px 4px 8px;
            font-family: {FONT_FAMILY};
            font-size: 12px;
        }}
        QComboBox:hover {{
            border-color: {colors['text_secondary']};
        }}
        QComboBox::drop-down {{
            border: none;
            width: 24px;
        }}
        QComboBox::down-arrow {{
            image: url({arrow_path});
            width: 10px;
            height: 7px;
        }}
        QComboBox QAbstractItemView {{
            background-color: {colors['card_bg']};
            color: {colors['text_primary']};
            border: 1px solid {colors['separator']};
            selection-background-color: {colors['bg_light']};
            selection-color: {colors['text_primary']};
            outline: 0;
        }}
    """


def _btn_success(colors: dict) -> str:
    """QSS for primary action buttons."""
    return f"""
        QPushButton {{
            background-color: {colors['success']};
            color: #ffffff;
            border: none;
            border-radius: 6px;
            padding: 6px 14px;
            font-family: {FONT_FAMILY};
            font-size: 12px;
            font-weight: bold;
        }}
        QPushButton:hover {{
            background-color: {colors['accent']};
        }}
    """


def _btn_neutral(colors: dict) -> str:
    """QSS for neutral/secondary buttons."""
    return f"""
        QPushButton {{
            background-color: {colors['bg_light']};
            color: {colors['text_primary']};
            border: none;
            border-radius: 6px;
            padding: 6px 14px;
            font-family: {FONT_FAMILY};
            font-size: 12px;
        }}
        QPushButton:hover {{
            background-color: {colors['separator']};
        }}
        QPushButton:disabled {{
            color: {colors['text_secondary']};
        }}
    """


def _btn_ghost(colors: dict) -> str:
    """QSS for flat text buttons (Reset Order, show completed)."""
    return f"""
        QPushButton {{
            background-color: transparent;
            color: {colors['text_secondary']};
            border: 1px solid transparent;
            border-radius: 12px;
            padding: 4px 12px;
            font-family: {FONT_FAMILY};
            font-size: 11px;
        }}
        QPushButton:hover {{
            color: {colors['text_primary']};
            border-color: {colors['separator']};
            background-color: {colors['bg_medium']};
        }}
    """


def _checkbox_qss(colors: dict) -> str:
    """QSS for themed checkboxes."""
    return f"""
        QCheckBox {{
            color: {colors['text_primary']};
            spacing: 6px;
            font-family: {FONT_FAMILY};
            font-size: 12px;
        }}
        QCheckBox::indicator {{
            width: 16px;
            height: 16px;
            border: 2px solid {colors['separator']};
            border-radius: 4px;
            background-color: {colors['bg_medium']};
        }}
        QCheckBox::indicator:hover {{
            border-color: {colors['text_secondary']};
        }}
        QCheckBox::indicator:checked {{
            background-color: {colors['success']};
            border-color: {colors['success']};
        }}
    """


def _get_spinbox_arrow_paths(color: str) -> tuple[str, str]:
    """Generate up and down arrow SVG images for spinbox buttons.

    Returns (up_path, down_path) with forward slashes for QSS url().
    """
    up_svg = (
        '<svg xmlns="http://www.w3.org/2000/svg" width="10" height="6" viewBox="0 0 10 6">'
        f'<polygon points="5,0 10,6 0,6" fill="{color}"/>'
        '</svg>'
    )
    down_svg = (
        '<svg xmlns="http://www.w3.org/2000/svg" width="10" height="6" viewBox="0 0 10 6">'
        f'<polygon points="5,6 0,0 10,0" fill="{color}"/>'
        '</svg>'
    )
    tmp_dir = tempfile.gettempdir()
    color_safe = color.replace('#', '')
    up_path = os.path.join(tmp_dir, f'whattodonow_spin_up_{color_safe}.svg')
    down_path = os.path.join(tmp_dir, f'whattodonow_spin_down_{color_safe}.svg')

    with open(up_path, 'w') as f:
        f.write(up_svg)
    with open(down_path, 'w') as f:
        f.write(down_svg)

    return up_path.replace('\\', '/'), down_path.replace('\\', '/')


def _spinbox_qss(colors: dict) -> str:
    """QSS for themed spinboxes with visible arrow indicators."""
    up_path, down_path = _get_spinbox_arrow_paths(colors['text_primary'])
    return f"""
        QSpinBox {{
            background-color: {colors['bg_medium']};
            color: {colors['text_primary']};
            border: 1px solid {colors['separator']};
            border-radius: 6px;
            padding: 4px 4px 4px 8px;
            font-family: {FONT_FAMILY};
            font-size: 12px;
        }}
        QSpinBox::up-button, QSpinBox::down-button {{
            background-color: {colors['bg_light']};
            border: none;
            width: 18px;
        }}
        QSpinBox::up-button {{
            border-top-right-radius: 6px;
            border-bottom: 1px solid {colors['separator']};
        }}
        QSpinBox::up-button:hover, QSpinBox::down-button:hover {{
            background-color: {colors['separator']};
        }}
        QSpinBox::down-button {{
            border-bottom-right-radius: 6px;
        }}
        QSpinBox::up-arrow {{
            image: url({up_path});
            width: 10px;
            height: 6px;
        }}
        QSpinBox::down-arrow {{
            image: url({down_path});
            width: 10px;
            height: 6px;
        }}
    """


def _dateedit_qss(colors: dict) -> str:
    """QSS for themed date edits."""
    return f"""
        QDateEdit {{
            background-color: {colors['bg_medium']};
            color: {colors['text_primary']};
            border: 1px solid {colors['separator']};
            border-radius: 6px;
            padding: 4px 8px;
            font-family: {FONT_FAMILY};
            font-size: 12px;
        }}
        QDateEdit::drop-down {{
            border: none;
            width: 20px;
        }}
        QDateEdit QCalendarWidget {{
            background-color: {colors['card_bg']};
            color: {colors['text_primary']};
        }}
    """


def _slider_qss(colors: dict) -> str:
    """QSS for horizontal sliders."""
    return f"""
        QSlider::groove:horizontal {{
            height: 6px;
            background-color: {colors['bg_light']};
            border-radius: 3px;
        }}
        QSlider::sub-page:horizontal {{
            background-color: {colors['accent']};
            border-radius: 3px;
        }}
        QSlider::handle:horizontal {{
            background-color: {colors['text_primary']};
            border: 2px solid {colors['accent']};
            width: 14px;
            margin: -6px 0;
            border-radius: 9px;
        }}
    """


def _badge_qss(background: str, foreground: str = "#ffffff") -> str:
    """QSS for small pill-shaped labels."""
    return f"""
        background-color: {background};
        color: {foreground};
        border-radius: 9px;
        padding: 2px 8px;
        font-family: {FONT_FAMILY};
        font-size: 10px;
    """


def _label(text: str, color: str, size: int = 11, bold: bool = False) -> QLabel:
    label = QLabel(text)
    weight = QFont.Weight.Bold if bold else QFont.Weight.Normal
    label.setFont(QFont(FONT_FAMILY, size, weight))
    label.setStyleSheet(f"color: {color}; background: transparent;")
    return label


def _clear_layout(layout) -> None:
    while layout.count():
        item = layout.takeAt(0)
        if item and item.widget():
            item.widget().deleteLater()


def _status_color(status: str, colors: dict) -> str:
    if status == "Overdue":
        return colors['danger']
    if status == "Due today":
        return colors['warning']
    if status == "Due tomorrow":
        return colors['caution']
    return colors['accent']


class TaskInputWidget(QFrame):
    """Themed form for adding a task.

    Only the title field shows until it receives focus; the rest of the
    form collapses again after a submit or cancel.
    """

    task_created = pyqtSignal(object)  # Task
    validation_failed = pyqtSignal(str)  # message

    def __init__(self, parent=None):
        super().__init__(parent)
        colors = get_colors()
        self._deadline_picked = False

        self.setStyleSheet(f"""
            TaskInputWidget {{
                background-color: {colors['card_bg']};
                border: 1px solid {colors['separator']};
                border-radius: 10px;
            }}
        """)

        layout = QVBoxLayout(self)
        layout.setContentsMargins(14, 12, 14, 12)
        layout.setSpacing(10)

        # ── Title row ──
        title_row = QHBoxLayout()
        plus = _label("+", colors['accent'], 16, bold=True)
        title_row.addWidget(plus)

        self.title_edit = QLineEdit()
        self.title_edit.setPlaceholderText("Add a new task...")
        self.title_edit.setStyleSheet(f"""
            QLineEdit {{
                background: transparent;
                color: {colors['text_primary']};
                border: none;
                font-family: {FONT_FAMILY};
                font-size: 15px;
            }}
        """)
        self.title_edit.setMinimumHeight(32)
        self.title_edit.installEventFilter(self)
        self.title_edit.returnPressed.connect(self._submit)
        title_row.addWidget(self.title_edit, 1)
        layout.addLayout(title_row)

        # ── Details (hidden until the title gets focus) ──
        self.details = QWidget()
        self.details.setStyleSheet("background: transparent;")
        details_layout = QVBoxLayout(self.details)
        details_layout.setContentsMargins(0, 4, 0, 0)
        details_layout.setSpacing(8)

        details_layout.addWidget(_label("Description (optional)", colors['text_primary']))
        self.desc_edit = QTextEdit()
        self.desc_edit.setPlaceholderText("Add details about this task...")
        self.desc_edit.setMaximumHeight(80)
        self.desc_edit.setStyleSheet(f"QTextEdit {{ {_input_qss(colors)} }}")
        details_layout.addWidget(self.desc_edit)

        duration_row = QHBoxLayout()
        duration_row.addWidget(_label("Estimated Duration (minutes):", colors['text_primary']))
        self.duration_spin = QSpinBox()
        self.duration_spin.setRange(DURATION_MIN, DURATION_MAX)
        self.duration_spin.setSingleStep(DURATION_STEP)
        self.duration_spin.setStyleSheet(_spinbox_qss(colors))
        self.duration_spin.setMinimumHeight(30)
        self.duration_spin.editingFinished.connect(self._snap_duration)
        duration_row.addWidget(self.duration_spin)
        duration_row.addStretch()
        details_layout.addLayout(duration_row)

        self.importance_label = _label("", colors['text_primary'])
        details_layout.addWidget(self.importance_label)
        self.importance_slider = QSlider(Qt.Orientation.Horizontal)
        self.importance_slider.setRange(MIN_IMPORTANCE, MAX_IMPORTANCE)
        self.importance_slider.setSingleStep(1)
        self.importance_slider.setPageStep(1)
        self.importance_slider.setStyleSheet(_slider_qss(colors))
        self.importance_slider.valueChanged.connect(self._update_importance_label)
        details_layout.addWidget(self.importance_slider)

        deadline_row = QHBoxLayout()
        deadline_row.addWidget(_label("Deadline:", colors['text_primary']))
        self.date_edit = QDateEdit()
        self.date_edit.setCalendarPopup(True)
        self.date_edit.setDisplayFormat("MMMM d, yyyy")
        self.date_edit.setStyleSheet(_dateedit_qss(colors))
        self.date_edit.setMinimumHeight(30)
        self.date_edit.dateChanged.connect(self._on_date_changed)
        deadline_row.addWidget(self.date_edit)
        deadline_row.addStretch()
        details_layout.addLayout(deadline_row)

        btn_row = QHBoxLayout()
        btn_row.addStretch()

        cancel_btn = QPushButton("Cancel")
        cancel_btn.setStyleSheet(_btn_neutral(colors))
        cancel_btn.setMinimumHeight(32)
        cancel_btn.clicked.connect(self._cancel)
        btn_row.addWidget(cancel_btn)

        add_btn = QPushButton("Add Task")
        add_btn.setStyleSheet(_btn_success(colors))
        add_btn.setMinimumHeight(32)
        add_btn.clicked.connect(self._submit)
        btn_row.addWidget(add_btn)

        details_layout.addLayout(btn_row)
        layout.addWidget(self.details)

        self._reset_fields()
        self.details.setVisible(False)

    def eventFilter(self, obj, event):
        if obj is self.title_edit and event.type() == QEvent.Type.FocusIn:
            self.details.setVisible(True)
        return super().eventFilter(obj, event)

    def form_data(self) -> TaskFormData:
        """Snapshot of the current field values."""
        deadline = None
        if self._deadline_picked:
            qdate = self.date_edit.date()
            # Due at the end of the picked day, local time.
            deadline = datetime(qdate.year(), qdate.month(), qdate.day(), 23, 59).astimezone()
        return TaskFormData(
            title=self.title_edit.text(),
            description=self.desc_edit.toPlainText(),
            duration=self.duration_spin.value(),
            importance=self.importance_slider.value(),
            deadline=deadline,
        )

    def _submit(self):
        try:
            task = self.form_data().to_task()
        except ValidationError as e:
            self.validation_failed.emit(str(e))
            return

        self.task_created.emit(task)
        self._reset_fields()
        self.details.setVisible(False)

    def _cancel(self):
        self.title_edit.clear()
        self.desc_edit.clear()
        self.details.setVisible(False)

    def _reset_fields(self):
        """Restore every field to its default value."""
        config = get_config()
        self.title_edit.clear()
        self.desc_edit.clear()
        self.duration_spin.setValue(config.default_duration)
        self.importance_slider.setValue(config.default_importance)
        self._update_importance_label(config.default_importance)

        tomorrow = current_time() + timedelta(hours=24)
        self.date_edit.blockSignals(True)
        self.date_edit.setMinimumDate(QDate.currentDate())
        self.date_edit.setDate(QDate(tomorrow.year, tomorrow.month, tomorrow.day))
        self.date_edit.blockSignals(False)
        self._deadline_picked = False

    def _snap_duration(self):
        value = self.duration_spin.value()
        snapped = round(value / DURATION_STEP) * DURATION_STEP
        if snapped != value:
            self.duration_spin.setValue(max(DURATION_MIN, min(DURATION_MAX, snapped)))

    def _update_importance_label(self, value: int):
        self.importance_label.setText(f"Importance: {importance_label(value)}")

    def _on_date_changed(self, _date: QDate):
        self._deadline_picked = True


class TaskListItem(QFrame):
    """Themed task card displayed in the task list."""

    toggled = pyqtSignal(str, bool)  # task_id, completed

    def __init__(self, task: Task, position: int, parent=None):
        super().__init__(parent)
        self.task = task
        colors = get_colors()

        self.setStyleSheet(f"""
            TaskListItem {{
                background-color: {colors['bg_medium']};
                border: 1px solid {colors['separator']};
                border-radius: 10px;
            }}
        """)
        self.setMinimumHeight(56)

        layout = QHBoxLayout(self)
        layout.setContentsMargins(12, 10, 12, 10)
        layout.setSpacing(10)

        self.checkbox = QCheckBox()
        self.checkbox.setChecked(task.completed)
        self.checkbox.setStyleSheet(_checkbox_qss(colors))
        self.checkbox.toggled.connect(lambda checked: self.toggled.emit(self.task.id, checked))
        layout.addWidget(self.checkbox, 0, Qt.AlignmentFlag.AlignTop)

        body = QVBoxLayout()
        body.setSpacing(4)

        # Badges: position, duration, deadline status, importance
        badges = QHBoxLayout()
        badges.setSpacing(6)
        status = deadline_status(task)
        for text, bg, fg in (
            (f"#{position}", colors['bg_light'], colors['text_secondary']),
            (f"{task.duration} min", colors['bg_light'], colors['text_primary']),
            (status, _status_color(status, colors), "#ffffff"),
            (importance_label(task.importance), colors['bg_light'], colors['text_primary']),
        ):
            badge = QLabel(text)
            badge.setStyleSheet(_badge_qss(bg, fg))
            badges.addWidget(badge)
        badges.addStretch()
        body.addLayout(badges)

        self.title_label = QLabel(task.title)
        self.title_label.setWordWrap(True)
        self.title_label.setFont(QFont(FONT_FAMILY, 13))
        if task.completed:
            self.title_label.setStyleSheet(
                f"color: {colors['text_secondary']}; text-decoration: line-through; background: transparent;"
            )
        else:
            self.title_label.setStyleSheet(
                f"color: {colors['text_primary']}; background: transparent;"
            )
        body.addWidget(self.title_label)

        if task.description:
            desc = QLabel(task.description)
            desc.setWordWrap(True)
            desc.setFont(QFont(MONO_FONT_FAMILY, 10))
            desc.setStyleSheet(f"color: {colors['text_secondary']}; background: transparent;")
            body.addWidget(desc)

        layout.addLayout(body, 1)


class TaskListWidget(QFrame):
    """Scrollable list of tasks with a show/hide toggle for completed ones."""

    task_toggled = pyqtSignal(str, bool)

    def __init__(self, parent=None):
        super().__init__(parent)
        colors = get_colors()
        self._tasks: list[Task] = []
        self.show_completed = False

        self.setStyleSheet("TaskListWidget { background: transparent; }")

        layout = QVBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.setSpacing(6)

        self.scroll = QScrollArea()
        self.scroll.setWidgetResizable(True)
        self.scroll.setHorizontalScrollBarPolicy(Qt.ScrollBarPolicy.ScrollBarAlwaysOff)
        self.scroll.setStyleSheet(f"""
            QScrollArea {{
                background-color: transparent;
                border: none;
            }}
            {get_scrollbar_qss(transparent_track=True, width=10)}
        """)

        self.container = QWidget()
        self.container.setStyleSheet("background: transparent;")
        self.items_layout = QVBoxLayout(self.container)
        self.items_layout.setContentsMargins(0, 0, 0, 0)
        self.items_layout.setSpacing(6)
        self.items_layout.setAlignment(Qt.AlignmentFlag.AlignTop)
        self.scroll.setWidget(self.container)
        layout.addWidget(self.scroll, 1)

        self.empty_label = _label(
            "Add your first task to get started, then try different scheduling strategies.",
            colors['text_secondary']
        )
        self.empty_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self.empty_label.setWordWrap(True)
        layout.addWidget(self.empty_label)

        self.completed_btn = QPushButton()
        self.completed_btn.setStyleSheet(_btn_ghost(colors))
        self.completed_btn.clicked.connect(self._toggle_completed)
        layout.addWidget(self.completed_btn, 0, Qt.AlignmentFlag.AlignHCenter)

    def set_tasks(self, tasks: list[Task]):
        """Show ``tasks`` in the given order."""
        self._tasks = list(tasks)
        self._refresh()

    def _refresh(self):
        colors = get_colors()
        _clear_layout(self.items_layout)

        completed = [t for t in self._tasks if t.completed]
        visible = self._tasks if self.show_completed else [t for t in self._tasks if not t.completed]

        with batch_update(self.container):
            for position, task in enumerate(visible, start=1):
                item = TaskListItem(task, position)
                item.toggled.connect(self.task_toggled.emit)
                self.items_layout.addWidget(item)

            if self._tasks and not visible:
                done = _label("All tasks completed!", colors['text_secondary'])
                done.setAlignment(Qt.AlignmentFlag.AlignCenter)
                self.items_layout.addWidget(done)

        self.empty_label.setVisible(not self._tasks)
        self.scroll.setVisible(bool(self._tasks))
        self.completed_btn.setVisible(bool(completed))
        verb = "Hide" if self.show_completed else "Show"
        self.completed_btn.setText(f"{verb} completed tasks ({len(completed)})")

    def _toggle_completed(self):
        self.show_completed = not self.show_completed
        self._refresh()


class StrategyPicker(QFrame):
    """Grid of checkable buttons, one per scheduling strategy."""

    strategy_selected = pyqtSignal(str)  # Strategy value

    def __init__(self, parent=None):
        super().__init__(parent)
        colors = get_colors()

        self.setStyleSheet(f"""
            StrategyPicker {{
                background-color: {colors['card_bg']};
                border: 1px solid {colors['separator']};
                border-radius: 10px;
            }}
        """)

        layout = QVBoxLayout(self)
        layout.setContentsMargins(14, 12, 14, 12)
        layout.setSpacing(10)

        header = _label("Choose a Scheduling Strategy", colors['text_primary'], 13, bold=True)
        header.setAlignment(Qt.AlignmentFlag.AlignCenter)
        layout.addWidget(header)

        grid = QGridLayout()
        grid.setSpacing(8)
        self.buttons: dict[Strategy, QPushButton] = {}

        for i, strategy in enumerate(Strategy):
            info = STRATEGY_INFO[strategy]
            btn = QPushButton(f"{info.icon}\n{info.name}")
            btn.setCheckable(True)
            btn.setMinimumHeight(58)
            btn.setToolTip(info.description)
            btn.setCursor(Qt.CursorShape.PointingHandCursor)
            btn.clicked.connect(lambda _checked, s=strategy: self._on_clicked(s))
            self.buttons[strategy] = btn
            grid.addWidget(btn, i // 3, i % 3)

        layout.addLayout(grid)
        self.set_selected(None)

    def _on_clicked(self, strategy: Strategy):
        # Checked state follows the board, not the click.
        self.buttons[strategy].setChecked(False)
        self.strategy_selected.emit(strategy.value)

    def set_selected(self, selected: Optional[Strategy]):
        colors = get_colors()
        for strategy, btn in self.buttons.items():
            active = strategy == selected
            btn.setChecked(active)
            btn.setStyleSheet(f"""
                QPushButton {{
                    background-color: {colors['accent'] if active else colors['bg_medium']};
                    color: {'#ffffff' if active else colors['text_primary']};
                    border: 1px solid {colors['accent'] if active else colors['separator']};
                    border-radius: 8px;
                    padding: 6px;
                    font-family: {FONT_FAMILY};
                    font-size: 11px;
                }}
                QPushButton:hover {{
                    border-color: {colors['accent']};
                }}
                QPushButton:disabled {{
                    color: {colors['text_secondary']};
                    border-color: {colors['bg_light']};
                }}
            """)

    def set_sortable(self, sortable: bool):
        """Enable the buttons only while there is something to sort."""
        for btn in self.buttons.values():
            btn.setEnabled(sortable)


class StrategyInfoWidget(QWidget):
    """Read-only cards explaining every scheduling strategy."""

    def __init__(self, parent=None):
        super().__init__(parent)
        colors = get_colors()
        self.setStyleSheet("background: transparent;")

        outer = QVBoxLayout(self)
        outer.setContentsMargins(12, 12, 12, 12)

        scroll = QScrollArea()
        scroll.setWidgetResizable(True)
        scroll.setHorizontalScrollBarPolicy(Qt.ScrollBarPolicy.ScrollBarAlwaysOff)
        scroll.setStyleSheet(f"""
            QScrollArea {{
                background-color: transparent;
                border: none;
            }}
            {get_scrollbar_qss(transparent_track=True, width=10)}
        """)
        outer.addWidget(scroll)

        container = QWidget()
        container.setStyleSheet("background: transparent;")
        layout = QVBoxLayout(container)
        layout.setSpacing(10)
        layout.setAlignment(Qt.AlignmentFlag.AlignTop)

        heading = _label("Understanding Scheduling Strategies", colors['text_primary'], 15, bold=True)
        layout.addWidget(heading)

        for strategy in Strategy:
            layout.addWidget(self._card(strategy, colors))

        scroll.setWidget(container)

    def _card(self, strategy: Strategy, colors: dict) -> QFrame:
        info = STRATEGY_INFO[strategy]
        card = QFrame()
        card.setStyleSheet(f"""
            QFrame {{
                background-color: {colors['card_bg']};
                border-radius: 8px;
            }}
        """)
        layout = QVBoxLayout(card)
        layout.setContentsMargins(16, 12, 16, 12)
        layout.setSpacing(4)

        layout.addWidget(_label(
            f"{info.icon}  {info.name} ({strategy.value.upper()})", colors['text_primary'], 12, bold=True
        ))
        layout.addWidget(_label(info.description, colors['text_secondary']))

        columns = QHBoxLayout()
        for title, lines, color in (
            ("Best for", info.best_for, colors['success']),
            ("Limitations", info.limitations, colors['danger']),
        ):
            column = QVBoxLayout()
            column.addWidget(_label(title, color, 10, bold=True))
            for line in lines:
                entry = _label(f"• {line}", colors['text_primary'], 10)
                entry.setWordWrap(True)
                column.addWidget(entry)
            column.addStretch()
            columns.addLayout(column, 1)
        layout.addLayout(columns)

        return card


class SettingsWidget(QWidget):
    """Themed widget for application settings."""

    settings_changed = pyqtSignal(dict)

    def __init__(self, parent=None):
        super().__init__(parent)
        self.config = get_config()
        self.config_manager = ConfigManager()
        self._setup_ui()

    def _setup_ui(self):
        """Set up the settings UI with theme styling."""
        colors = get_colors()

        self.setStyleSheet("background: transparent;")

        layout = QVBoxLayout(self)
        layout.setContentsMargins(12, 12, 12, 12)
        layout.setSpacing(12)

        # ── Theme selector ──
        theme_frame, theme_content = self._styled_group("Theme")
        theme_layout = QHBoxLayout(theme_content)
        theme_layout.setContentsMargins(16, 16, 16, 16)
        theme_layout.addWidget(_label("Color theme:", colors['text_primary']))

        self.theme_combo = QComboBox()
        self.theme_combo.setStyleSheet(_combo_qss(colors))
        self.theme_combo.setMinimumHeight(32)
        current_theme = get_current_theme()
        for name, display_name in get_available_themes():
            self.theme_combo.addItem(display_name, name)
            if name == current_theme.name:
                self.theme_combo.setCurrentIndex(self.theme_combo.count() - 1)
        theme_layout.addWidget(self.theme_combo)
        theme_layout.addStretch()
        layout.addWidget(theme_frame)

        # ── New task defaults ──
        defaults_frame, defaults_content = self._styled_group("Task Defaults")
        defaults_layout = QHBoxLayout(defaults_content)
        defaults_layout.setContentsMargins(16, 16, 16, 16)
        defaults_layout.setSpacing(8)

        defaults_layout.addWidget(_label("Duration (minutes):", colors['text_primary']))
        self.default_duration_spin = QSpinBox()
        self.default_duration_spin.setRange(DURATION_MIN, DURATION_MAX)
        self.default_duration_spin.setSingleStep(DURATION_STEP)
        self.default_duration_spin.setValue(self.config.default_duration)
        self.default_duration_spin.setStyleSheet(_spinbox_qss(colors))
        self.default_duration_spin.setMinimumHeight(32)
        defaults_layout.addWidget(self.default_duration_spin)

        defaults_layout.addWidget(_label("Importance:", colors['text_primary']))
        self.default_importance_combo = QComboBox()
        self.default_importance_combo.setStyleSheet(_combo_qss(colors))
        self.default_importance_combo.setMinimumHeight(32)
        for value in range(MIN_IMPORTANCE, MAX_IMPORTANCE + 1):
            self.default_importance_combo.addItem(importance_label(value), value)
        self.default_importance_combo.setCurrentIndex(self.config.default_importance - MIN_IMPORTANCE)
        defaults_layout.addWidget(self.default_importance_combo)
        defaults_layout.addStretch()
        layout.addWidget(defaults_frame)

        # ── Storage path ──
        storage_frame, storage_content = self._styled_group("Storage")
        storage_layout = QHBoxLayout(storage_content)
        storage_layout.setContentsMargins(16, 16, 16, 16)
        storage_layout.addWidget(_label("Task storage file:", colors['text_primary']))

        self.storage_path_edit = QLineEdit()
        self.storage_path_edit.setText(self.config.storage_path)
        self.storage_path_edit.setStyleSheet(_input_qss(colors))
        self.storage_path_edit.setMinimumHeight(30)
        storage_layout.addWidget(self.storage_path_edit, 1)

        browse_btn = QPushButton("Browse...")
        browse_btn.setStyleSheet(_btn_neutral(colors))
        browse_btn.clicked.connect(self._browse_storage)
        storage_layout.addWidget(browse_btn)
        layout.addWidget(storage_frame)

        note_label = _label("Note: Storage path changes require application restart.", colors['text_secondary'], 10)
        layout.addWidget(note_label)

        button_row = QHBoxLayout()
        button_row.addStretch()
        apply_btn = QPushButton("Apply")
        apply_btn.setStyleSheet(_btn_success(colors))
        apply_btn.setMinimumSize(100, 34)
        apply_btn.clicked.connect(self._apply_settings)
        button_row.addWidget(apply_btn)
        layout.addLayout(button_row)

        layout.addStretch()

    def _styled_group(self, title: str) -> tuple[QFrame, QWidget]:
        """Create a themed group container.

        Returns (outer_frame, content_widget) - add outer_frame to parent layout,
        set your layout on content_widget.
        """
        colors = get_colors()

        frame = QFrame()
        frame.setStyleSheet(f"""
            QFrame {{
                background-color: {colors['card_bg']};
                border-radius: 8px;
            }}
        """)

        outer_layout = QVBoxLayout(frame)
        outer_layout.setContentsMargins(0, 0, 0, 0)
        outer_layout.setSpacing(0)

        title_label = QLabel(f"  {title}")
        title_label.setFont(QFont(FONT_FAMILY, 10, QFont.Weight.Bold))
        title_label.setStyleSheet(f"""
            color: {colors['text_secondary']};
            background-color: {colors['bg_light']};
            border-top-left-radius: 8px;
            border-top-right-radius: 8px;
            padding: 6px 10px;
        """)
        outer_layout.addWidget(title_label)

        content = QWidget()
        content.setStyleSheet("background: transparent;")
        outer_layout.addWidget(content)

        return frame, content

    def _browse_storage(self):
        path, _ = QFileDialog.getSaveFileName(
            self,
            "Select Task Storage File",
            self.storage_path_edit.text(),
            "SQLite Database (*.db);;All Files (*)"
        )
        if path:
            self.storage_path_edit.setText(path)

    def _apply_settings(self):
        """Apply and save settings changes."""
        candidates = {
            'theme': self.theme_combo.currentData(),
            'default_duration': self.default_duration_spin.value(),
            'default_importance': self.default_importance_combo.currentData(),
            'storage_path': self.storage_path_edit.text().strip(),
        }
        changes = {k: v for k, v in candidates.items() if v != getattr(self.config, k)}

        if not changes:
            MessageBox(self, "Settings", "No changes to apply.")
            return

        self.config_manager.update(**changes)
        self.settings_changed.emit(changes)

        # Theme last: it rebuilds the window, this widget included.
        if 'storage_path' in changes:
            MessageBox(
                self, "Settings Saved",
                "Settings saved. Restart the application to use the new storage file."
            )
        else:
            MessageBox(self, "Settings Saved", "Settings applied successfully.")
        if 'theme' in changes:
            set_theme(changes['theme'])


class SortBar(QWidget):
    """Badge naming the active strategy, with a reset button."""

    reset_requested = pyqtSignal()

    def __init__(self, parent=None):
        super().__init__(parent)
        colors = get_colors()
        self.setStyleSheet("background: transparent;")

        layout = QHBoxLayout(self)
        layout.setContentsMargins(4, 0, 4, 0)

        self.badge = QLabel()
        self.badge.setStyleSheet(_badge_qss(colors['bg_light'], colors['accent']))
        layout.addWidget(self.badge)
        layout.addStretch()

        reset_btn = QPushButton("Reset Order")
        reset_btn.setStyleSheet(_btn_ghost(colors))
        reset_btn.clicked.connect(self.reset_requested.emit)
        layout.addWidget(reset_btn)

    def set_strategy(self, selected: Optional[Strategy]):
        """Show the bar only while a strategy is applied."""
        self.setVisible(selected is not None)
        if selected is not None:
            self.badge.setText(f"</> {STRATEGY_INFO[selected].name}")
