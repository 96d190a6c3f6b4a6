# sheetdesk/core/controller/table_manager.py
"""
Модуль для управления данными активного листа.
Отвечает за загрузку заголовков и строк, отбрасывание устаревших ответов
и подготовку таблицы к отображению.
"""

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, List, Optional

from sheetdesk.core.formatting import format_cell
from sheetdesk.core.models import SheetData, SheetRow
from sheetdesk.exceptions import RecordNotFoundError
from sheetdesk.gateway.client import GatewayResult
from sheetdesk.utils.logger import get_logger

if TYPE_CHECKING:
    from sheetdesk.core.app_controller import AppController

logger = get_logger(__name__)

# Заголовок последней колонки с кнопками действий
ACTIONS_HEADER = "Действия"


@dataclass(frozen=True)
class LoadTicket:
    """Квитанция загрузки: применяется только ответ на последнюю загрузку."""
    generation: int
    sheet_name: str


@dataclass
class RenderedRow:
    """Строка таблицы для отображения."""
    row_index: Any
    cells: List[str]


@dataclass
class RenderedTable:
    """Таблица для отображения: колонки (включая "Действия") и строки."""
    columns: List[str] = field(default_factory=list)
    rows: List[RenderedRow] = field(default_factory=list)

    @property
    def data_column_count(self) -> int:
        """Количество колонок с данными (без колонки действий)."""
        return max(len(self.columns) - 1, 0)


class TableManager:
    """
    Данные активного листа: заголовки и строки, зеркало данных шлюза в памяти.
    """

    def __init__(self, app_controller: "AppController"):
        """
        Args:
            app_controller (AppController): Ссылка на основной контроллер приложения.
        """
        self.app_controller = app_controller
        self.sheet_name: Optional[str] = None
        self.headers: List[str] = []
        self.rows: List[SheetRow] = []
        self._generation = 0
        logger.debug("TableManager инициализирован.")

    # --- Загрузка ---

    def begin_load(self, sheet_name: str) -> LoadTicket:
        """Регистрирует новую загрузку; все более ранние становятся устаревшими."""
        self._generation += 1
        return LoadTicket(generation=self._generation, sheet_name=sheet_name)

    def is_current(self, ticket: LoadTicket) -> bool:
        return ticket.generation == self._generation

    def fetch(self, ticket: LoadTicket) -> GatewayResult:
        """Запрашивает данные листа. Только сеть, состояние не меняется."""
        return self.app_controller.gateway.get_data(ticket.sheet_name)

    def apply_load(self, ticket: LoadTicket, result: GatewayResult) -> bool:
        """
        Применяет ответ шлюза.

        При ошибке заголовки и строки очищаются, чтобы не показывать устаревшие данные.

        Returns:
            bool: False, если ответ устарел и был отброшен.
        """
        if not self.is_current(ticket):
            logger.info(
                f"Ответ для листа '{ticket.sheet_name}' устарел "
                f"(загрузка {ticket.generation}, текущая {self._generation}) и отброшен."
            )
            return False

        self.sheet_name = ticket.sheet_name
        if result.ok and isinstance(result.data, SheetData):
            self.headers = list(result.data.headers)
            self.rows = list(result.data.rows)
            logger.info(
                f"Лист '{ticket.sheet_name}' загружен: {len(self.headers)} колонок, {len(self.rows)} строк."
            )
        else:
            self.clear()
            logger.warning(f"Не удалось загрузить лист '{ticket.sheet_name}'. Таблица очищена.")
        return True

    def load(self, sheet_name: str) -> bool:
        """Загружает лист синхронно. Возвращает True, если данные получены."""
        ticket = self.begin_load(sheet_name)
        result = self.fetch(ticket)
        self.apply_load(ticket, result)
        return result.ok

    def clear(self):
        self.headers = []
        self.rows = []

    # --- Доступ к данным ---

    def find_row(self, row_index: Any) -> SheetRow:
        """
        Возвращает строку по индексу шлюза.

        Индекс сравнивается и как значение, и как строка: индекс может прийти
        числом, а вернуться из представления текстом.

        Raises:
            RecordNotFoundError: Если строки нет в загруженных данных.
        """
        for row in self.rows:
            if row.row_index == row_index or str(row.row_index) == str(row_index):
                return row
        raise RecordNotFoundError(row_index)

    def aligned_values(self, row: SheetRow) -> List[Any]:
        """Значения строки, выровненные по заголовкам (дополнение None или обрезка)."""
        values = list(row.data[:len(self.headers)])
        values.extend([None] * (len(self.headers) - len(values)))
        return values

    def render(self) -> RenderedTable:
        """Готовит таблицу: заголовки + "Действия", ячейки в формате отображения."""
        columns = list(self.headers) + [ACTIONS_HEADER]
        rendered_rows = [
            RenderedRow(row_index=row.row_index, cells=[format_cell(value) for value in self.aligned_values(row)])
            for row in self.rows
        ]
        return RenderedTable(columns=columns, rows=rendered_rows)
