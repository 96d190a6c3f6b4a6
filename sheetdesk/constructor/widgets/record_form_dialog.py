# sheetdesk/constructor/widgets/record_form_dialog.py
"""
Диалог добавления/редактирования записи.
Поля строятся динамически по заголовкам активного листа.
"""

from typing import List, Optional, Tuple, Union

from PySide6.QtCore import QDate, Signal
from PySide6.QtWidgets import (
    QDateEdit, QDialogButtonBox, QFormLayout, QLabel, QLineEdit,
    QScrollArea, QVBoxLayout, QWidget
)

from sheetdesk.core.controller.record_form import FIELD_DATE, FormField, PendingRecordEdit
from sheetdesk.core.modal_orchestrator import DEFAULT_CLOSE_DELAY_MS
from sheetdesk.utils.logger import get_logger

from .animated_dialog import AnimatedDialog

logger = get_logger(__name__)

# Формат поля даты; совпадает с DATE_INPUT_FORMAT в sheetdesk.core.formatting
QT_DATE_FORMAT = "yyyy-MM-dd"

# Минимальная дата QDateEdit используется как "пустое" значение
EMPTY_DATE = QDate(1752, 9, 14)

FieldEditor = Union[QLineEdit, QDateEdit]


class RecordFormDialog(AnimatedDialog):
    """
    Форма записи.

    Сигналы:
        submitted(list): Значения полей в порядке заголовков.
    """
    submitted = Signal(list)

    def __init__(self, transition_ms: int = DEFAULT_CLOSE_DELAY_MS, parent=None):
        super().__init__(transition_ms, parent)
        self.resize(480, 520)

        # --- Атрибуты диалога ---
        self.form_layout: Optional[QFormLayout] = None
        self.button_box: Optional[QDialogButtonBox] = None
        self._editors: List[Tuple[FormField, FieldEditor]] = []
        # -----------------------

        self._setup_ui()
        self._setup_connections()

    def _setup_ui(self):
        """Создаёт элементы интерфейса."""
        main_layout = QVBoxLayout(self)

        scroll_area = QScrollArea(self)
        scroll_area.setWidgetResizable(True)
        fields_container = QWidget(scroll_area)
        self.form_layout = QFormLayout(fields_container)
        scroll_area.setWidget(fields_container)
        main_layout.addWidget(scroll_area)

        self.button_box = QDialogButtonBox(
            QDialogButtonBox.StandardButton.Save | QDialogButtonBox.StandardButton.Cancel,
            self
        )
        self.button_box.button(QDialogButtonBox.StandardButton.Save).setText("Сохранить")
        self.button_box.button(QDialogButtonBox.StandardButton.Cancel).setText("Отмена")
        main_layout.addWidget(self.button_box)

    def _setup_connections(self):
        """Подключает сигналы к слотам."""
        assert self.button_box is not None
        self.button_box.accepted.connect(self._on_accept)
        self.button_box.rejected.connect(self.cancel_requested)

    # --- Поля ---

    def populate(self, pending: PendingRecordEdit):
        """Перестраивает поля формы для открытой записи."""
        assert self.form_layout is not None
        self.setWindowTitle(pending.title)
        while self.form_layout.rowCount() > 0:
            self.form_layout.removeRow(0)
        self._editors = []

        for form_field in pending.fields:
            editor = self._create_editor(form_field)
            label = QLabel(f"{form_field.header}{' *' if form_field.required else ''}", self)
            label.setBuddy(editor)
            self.form_layout.addRow(label, editor)
            self._editors.append((form_field, editor))
        logger.debug(f"Форма заполнена: {len(self._editors)} полей ({pending.mode}).")

    def _create_editor(self, form_field: FormField) -> FieldEditor:
        if form_field.kind == FIELD_DATE:
            date = QDate.fromString(form_field.value, QT_DATE_FORMAT)
            # Неразобранное значение даты показывается как текст без изменений
            if not form_field.value or date.isValid():
                editor = QDateEdit(self)
                editor.setCalendarPopup(True)
                editor.setDisplayFormat(QT_DATE_FORMAT)
                editor.setMinimumDate(EMPTY_DATE)
                editor.setSpecialValueText(" ")
                self._set_editor_value(editor, form_field.value)
                return editor

        editor = QLineEdit(self)
        self._set_editor_value(editor, form_field.value)
        return editor

    @staticmethod
    def _set_editor_value(editor: FieldEditor, value: str):
        if isinstance(editor, QDateEdit):
            date = QDate.fromString(value, QT_DATE_FORMAT)
            editor.setDate(date if date.isValid() else EMPTY_DATE)
        else:
            editor.setText(value)

    @staticmethod
    def _editor_value(editor: FieldEditor) -> str:
        if isinstance(editor, QDateEdit):
            date = editor.date()
            return "" if date == editor.minimumDate() else date.toString(QT_DATE_FORMAT)
        return editor.text()

    def values(self) -> List[str]:
        """Текущие значения полей в порядке заголовков."""
        return [self._editor_value(editor) for _, editor in self._editors]

    def reset(self):
        """Возвращает поля к исходным значениям."""
        for form_field, editor in self._editors:
            self._set_editor_value(editor, form_field.value)

    def _on_accept(self):
        self.submitted.emit(self.values())
