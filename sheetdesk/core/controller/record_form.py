# sheetdesk/core/controller/record_form.py
"""
Модуль формы записи.
Строит поля формы по заголовкам листа и собирает запрос create/update.
"""

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, List, Mapping, Optional, Sequence, Union

from sheetdesk.core.formatting import is_date_header, to_date_input_value, to_text_input_value
from sheetdesk.core.models import ACTION_CREATE, ACTION_UPDATE, MutationPayload
from sheetdesk.exceptions import ValidationError
from sheetdesk.utils.logger import get_logger

if TYPE_CHECKING:
    from sheetdesk.core.app_controller import AppController

logger = get_logger(__name__)

FIELD_TEXT = "text"
FIELD_DATE = "date"

MODE_CREATE = "create"
MODE_EDIT = "edit"

FormValues = Union[Sequence[Any], Mapping[str, Any]]


@dataclass
class FormField:
    """Поле формы: позиция совпадает с позицией колонки."""
    index: int
    header: str
    kind: str
    value: str = ""
    required: bool = True


@dataclass
class PendingRecordEdit:
    """Состояние открытой формы. Существует только пока форма открыта."""
    mode: str
    row_index: Optional[Any] = None
    fields: List[FormField] = field(default_factory=list)

    @property
    def headers(self) -> List[str]:
        return [form_field.header for form_field in self.fields]

    @property
    def title(self) -> str:
        return "Редактировать запись" if self.mode == MODE_EDIT else "Добавить запись"


class RecordFormController:
    """
    Контроллер формы добавления/редактирования записи.
    """

    def __init__(self, app_controller: "AppController"):
        """
        Args:
            app_controller (AppController): Ссылка на основной контроллер приложения.
        """
        self.app_controller = app_controller
        self.pending: Optional[PendingRecordEdit] = None
        logger.debug("RecordFormController инициализирован.")

    @property
    def date_markers(self) -> List[str]:
        return list(self.app_controller.config.date_markers)

    def render_fields(self, existing_values: Optional[Sequence[Any]] = None) -> List[FormField]:
        """
        Создаёт по одному обязательному полю на каждую колонку.

        Args:
            existing_values (Optional[Sequence[Any]]): Значения существующей строки
                (позиционно по заголовкам) или None для новой записи.
        """
        headers = self.app_controller.table.headers
        values = list(existing_values or [])
        fields: List[FormField] = []
        for index, header in enumerate(headers):
            raw_value = values[index] if index < len(values) else None
            if is_date_header(header, self.date_markers):
                fields.append(FormField(index=index, header=header, kind=FIELD_DATE,
                                        value=to_date_input_value(raw_value)))
            else:
                fields.append(FormField(index=index, header=header, kind=FIELD_TEXT,
                                        value=to_text_input_value(raw_value)))
        return fields

    def open_create(self) -> PendingRecordEdit:
        """Открывает форму новой записи."""
        self.pending = PendingRecordEdit(mode=MODE_CREATE, fields=self.render_fields())
        logger.debug("Форма открыта для новой записи.")
        return self.pending

    def open_edit(self, row_index: Any) -> PendingRecordEdit:
        """
        Открывает форму существующей записи.

        Raises:
            RecordNotFoundError: Если строки нет в загруженных данных.
        """
        table = self.app_controller.table
        row = table.find_row(row_index)
        self.pending = PendingRecordEdit(
            mode=MODE_EDIT,
            row_index=row.row_index,
            fields=self.render_fields(table.aligned_values(row)),
        )
        logger.debug(f"Форма открыта для записи {row.row_index}.")
        return self.pending

    def discard(self):
        """Отбрасывает состояние формы (отмена или успешная отправка)."""
        self.pending = None

    def _ordered_values(self, pending: PendingRecordEdit, values: FormValues) -> List[Any]:
        if isinstance(values, Mapping):
            return [values.get(header, "") for header in pending.headers]
        ordered = list(values)
        if len(ordered) != len(pending.fields):
            raise ValidationError(
                f"Ожидается {len(pending.fields)} значений, получено {len(ordered)}."
            )
        return ordered

    def validate(self, values: FormValues) -> List[str]:
        """Возвращает заголовки обязательных полей, оставленных пустыми."""
        if self.pending is None:
            return []
        ordered = self._ordered_values(self.pending, values)
        return [
            form_field.header
            for form_field, value in zip(self.pending.fields, ordered)
            if form_field.required and (value is None or str(value).strip() == "")
        ]

    def build_payload(self, values: FormValues) -> MutationPayload:
        """
        Собирает запрос: update, если у формы есть индекс строки, иначе create.

        Args:
            values (FormValues): Значения полей по порядку заголовков
                или словарь {заголовок: значение}.

        Raises:
            ValidationError: Если форма не открыта или обязательные поля пусты.
        """
        if self.pending is None:
            raise ValidationError("Форма записи не открыта.")
        missing = self.validate(values)
        if missing:
            raise ValidationError(
                f"Заполните обязательные поля: {', '.join(missing)}", missing_fields=missing
            )

        row_data = self._ordered_values(self.pending, values)
        sheet_name = self.app_controller.active_sheet or ""
        if self.pending.row_index is not None:
            return MutationPayload(action=ACTION_UPDATE, sheet_name=sheet_name,
                                   row_data=row_data, row_index=self.pending.row_index)
        return MutationPayload(action=ACTION_CREATE, sheet_name=sheet_name, row_data=row_data)
