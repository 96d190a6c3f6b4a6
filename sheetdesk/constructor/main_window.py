# sheetdesk/constructor/main_window.py
"""
Модуль для главного окна SheetDesk.
Вкладки листов, таблица записей с кнопками действий, форма записи
и окно подтверждения удаления.
"""

from typing import Any, List, Optional

from PySide6.QtCore import Qt, QTimer, Signal, Slot
from PySide6.QtGui import QAction, QCloseEvent, QResizeEvent
from PySide6.QtWidgets import (
    QAbstractItemView, QCheckBox, QHBoxLayout, QHeaderView, QLabel,
    QMainWindow, QMessageBox, QProgressBar, QPushButton, QTabBar,
    QTableView, QToolBar, QVBoxLayout, QWidget
)

from sheetdesk.core.app_controller import NOTIFY_ERROR, AppController, AppControllerListener
from sheetdesk.core.controller.record_form import PendingRecordEdit
from sheetdesk.core.controller.table_manager import RenderedTable
from sheetdesk.exceptions import RecordNotFoundError, ValidationError
from sheetdesk.utils.logger import get_logger, is_logging_enabled, set_logging_enabled

from .widgets.confirm_dialog import ConfirmDialog
from .widgets.record_form_dialog import RecordFormDialog
from .widgets.table_model import SheetTableModel
from .widgets.toast import ToastManager

logger = get_logger(__name__)


def qt_scheduler(delay_ms: int, callback):
    """Планировщик модальных окон на QTimer (поток GUI)."""
    QTimer.singleShot(delay_ms, callback)


class MainWindowListener(AppControllerListener):
    """Передаёт события AppController главному окну."""

    def __init__(self, window: "MainWindow"):
        self.window = window

    def sheets_changed(self, sheet_names: List[str], active_sheet: Optional[str]):
        self.window.show_sheets(sheet_names, active_sheet)

    def table_changed(self, table: RenderedTable):
        self.window.show_table(table)

    def form_opened(self, pending: PendingRecordEdit):
        self.window.form_dialog.populate(pending)

    def notify(self, message: str, kind: str):
        # Может вызываться из рабочего потока: сигнал доставит сообщение в поток GUI
        self.window.toast_requested.emit(message, kind)


class MainWindow(QMainWindow):
    """
    Главное окно приложения SheetDesk.
    """
    toast_requested = Signal(str, str)
    busy_changed = Signal(bool)

    def __init__(self, app_controller: AppController, task_runner=None):
        """
        Инициализирует главное окно.

        Args:
            app_controller (AppController): Экземпляр AppController.
            task_runner: QtTaskRunner, на котором выполняются запросы к шлюзу.
        """
        super().__init__()
        self.app_controller = app_controller
        self.task_runner = task_runner
        config = app_controller.config

        # --- Атрибуты окна ---
        self.sheet_tabs: Optional[QTabBar] = None
        self.table_view: Optional[QTableView] = None
        self.table_model = SheetTableModel(self)
        self.add_button: Optional[QPushButton] = None
        self.progress_bar: Optional[QProgressBar] = None
        self.empty_label: Optional[QLabel] = None
        self.logging_checkbox: Optional[QCheckBox] = None
        self.toasts = ToastManager(self, duration_ms=config.toast_duration_ms)
        self.form_dialog = RecordFormDialog(config.close_delay_ms, self)
        self.confirm_dialog = ConfirmDialog(config.close_delay_ms, self)
        self._updating_tabs = False
        self._busy_listener = self.busy_changed.emit
        # ---------------------

        self._setup_ui()
        self._setup_connections()
        self.setWindowTitle("SheetDesk")
        self.resize(1100, 700)

    def _setup_ui(self):
        """Настраивает пользовательский интерфейс."""
        # --- 1. Панель инструментов ---
        self._create_tool_bar()

        # --- 2. Центральный виджет ---
        central_widget = QWidget(self)
        layout = QVBoxLayout(central_widget)

        self.sheet_tabs = QTabBar(central_widget)
        self.sheet_tabs.setExpanding(False)
        layout.addWidget(self.sheet_tabs)

        self.empty_label = QLabel("Нет листов для отображения.", central_widget)
        self.empty_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self.empty_label.hide()
        layout.addWidget(self.empty_label)

        self.table_view = QTableView(central_widget)
        self.table_view.setModel(self.table_model)
        self.table_view.setSelectionBehavior(QAbstractItemView.SelectionBehavior.SelectRows)
        self.table_view.setEditTriggers(QAbstractItemView.EditTrigger.NoEditTriggers)
        self.table_view.setAlternatingRowColors(True)
        self.table_view.horizontalHeader().setSectionResizeMode(QHeaderView.ResizeMode.Interactive)
        self.table_view.horizontalHeader().setStretchLastSection(True)
        layout.addWidget(self.table_view)

        self.setCentralWidget(central_widget)

        # --- 3. Строка состояния ---
        self.progress_bar = QProgressBar(self)
        # Неопределённый индикатор
        self.progress_bar.setRange(0, 0)
        self.progress_bar.setMaximumWidth(160)
        self.progress_bar.setVisible(self.app_controller.busy_state.is_busy)
        self.statusBar().addPermanentWidget(self.progress_bar)

    def _create_tool_bar(self):
        """Создает панель инструментов."""
        tool_bar = QToolBar("Основная", self)
        tool_bar.setMovable(False)
        self.addToolBar(tool_bar)

        self.add_button = QPushButton("Добавить запись", tool_bar)
        tool_bar.addWidget(self.add_button)

        refresh_action = QAction("Обновить", self)
        refresh_action.triggered.connect(self.app_controller.reload_active_sheet)
        tool_bar.addAction(refresh_action)

        tool_bar.addSeparator()
        self.logging_checkbox = QCheckBox("Логирование", tool_bar)
        self.logging_checkbox.setChecked(is_logging_enabled())
        tool_bar.addWidget(self.logging_checkbox)

    def _setup_connections(self):
        """Подключает сигналы окна и контроллера."""
        controller = self.app_controller
        controller.listener = MainWindowListener(self)
        controller.form_modal.attach_view(self.form_dialog)
        controller.confirm_modal.attach_view(self.confirm_dialog)
        controller.busy_state.add_listener(self._busy_listener)

        self.toast_requested.connect(self._show_toast)
        self.busy_changed.connect(self._on_busy_changed)
        if self.task_runner is not None:
            self.task_runner.task_failed.connect(self._on_task_failed)

        self.sheet_tabs.currentChanged.connect(self._on_tab_changed)
        self.add_button.clicked.connect(self._on_add_clicked)
        self.logging_checkbox.toggled.connect(self._on_logging_toggled)

        self.form_dialog.submitted.connect(self._on_form_submitted)
        self.form_dialog.cancel_requested.connect(controller.close_form)
        self.confirm_dialog.confirmed.connect(controller.confirm)
        self.confirm_dialog.cancel_requested.connect(controller.cancel_confirmation)

    # --- Отображение состояния контроллера ---

    def show_sheets(self, sheet_names: List[str], active_sheet: Optional[str]):
        """Перестраивает вкладки листов, не вызывая повторную загрузку."""
        self._updating_tabs = True
        try:
            while self.sheet_tabs.count() > 0:
                self.sheet_tabs.removeTab(0)
            for name in sheet_names:
                self.sheet_tabs.addTab(name)
            if active_sheet in sheet_names:
                self.sheet_tabs.setCurrentIndex(sheet_names.index(active_sheet))
        finally:
            self._updating_tabs = False

        has_sheets = bool(sheet_names)
        self.empty_label.setVisible(not has_sheets)
        self.add_button.setEnabled(has_sheets)
        if not has_sheets:
            self.table_model.clear()

    def show_table(self, table: RenderedTable):
        """Показывает таблицу и ставит кнопки действий в последний столбец."""
        self.table_model.set_table(table)
        actions_column = self.table_model.actions_column
        if actions_column < 0:
            return
        for row, rendered_row in enumerate(table.rows):
            index = self.table_model.index(row, actions_column)
            self.table_view.setIndexWidget(index, self._create_row_actions(rendered_row.row_index))
        self.table_view.resizeColumnsToContents()
        logger.debug(f"Таблица отображена: {len(table.rows)} строк.")

    def _create_row_actions(self, row_index: Any) -> QWidget:
        container = QWidget(self.table_view)
        layout = QHBoxLayout(container)
        layout.setContentsMargins(2, 0, 2, 0)
        edit_button = QPushButton("Редактировать", container)
        edit_button.clicked.connect(lambda checked=False: self._on_edit_clicked(row_index))
        delete_button = QPushButton("Удалить", container)
        delete_button.clicked.connect(lambda checked=False: self.app_controller.request_delete(row_index))
        layout.addWidget(edit_button)
        layout.addWidget(delete_button)
        return container

    # --- Слоты ---

    @Slot(str, str)
    def _show_toast(self, message: str, kind: str):
        self.toasts.show_message(message, kind)

    @Slot(bool)
    def _on_busy_changed(self, busy: bool):
        self.progress_bar.setVisible(busy)

    @Slot(str)
    def _on_task_failed(self, message: str):
        self._show_toast(f"Внутренняя ошибка: {message}", NOTIFY_ERROR)

    def _on_tab_changed(self, index: int):
        if self._updating_tabs or index < 0:
            return
        self.app_controller.select_sheet(self.sheet_tabs.tabText(index))

    def _on_add_clicked(self):
        if self.app_controller.active_sheet is None:
            return
        self.app_controller.open_create_form()

    def _on_edit_clicked(self, row_index: Any):
        try:
            self.app_controller.open_edit_form(row_index)
        except RecordNotFoundError as e:
            logger.warning(str(e))
            self._show_toast(str(e), NOTIFY_ERROR)

    def _on_form_submitted(self, values: list):
        try:
            self.app_controller.submit_form(values)
        except ValidationError as e:
            QMessageBox.warning(self.form_dialog, "Проверка данных", str(e))

    def _on_logging_toggled(self, checked: bool):
        set_logging_enabled(checked)

    # --- События окна ---

    def resizeEvent(self, event: QResizeEvent):
        super().resizeEvent(event)
        self.toasts.reposition()

    def closeEvent(self, event: QCloseEvent):
        """Дожидается рабочих потоков перед закрытием окна."""
        self.app_controller.busy_state.remove_listener(self._busy_listener)
        if self.task_runner is not None:
            self.task_runner.wait_all()
        logger.info("Главное окно закрыто.")
        super().closeEvent(event)
