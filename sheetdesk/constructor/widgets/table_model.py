# sheetdesk/constructor/widgets/table_model.py
"""
Модель Qt для отображения данных листа в QTableView.
"""

from typing import Any, Optional

from PySide6.QtCore import QAbstractTableModel, QModelIndex, Qt

from sheetdesk.core.controller.table_manager import RenderedTable


class SheetTableModel(QAbstractTableModel):
    """
    Табличная модель поверх RenderedTable.

    Последний столбец ("Действия") не содержит текста: в него
    главное окно ставит кнопки редактирования и удаления.
    Qt.UserRole возвращает row_index строки.
    """

    def __init__(self, parent=None):
        super().__init__(parent)
        self._table = RenderedTable(columns=[], rows=[])

    @property
    def table(self) -> RenderedTable:
        return self._table

    def set_table(self, table: RenderedTable):
        """Полностью заменяет содержимое модели."""
        self.beginResetModel()
        self._table = table
        self.endResetModel()

    def clear(self):
        self.set_table(RenderedTable(columns=[], rows=[]))

    def rowCount(self, parent: QModelIndex = QModelIndex()) -> int:
        if parent.isValid():
            return 0
        return len(self._table.rows)

    def columnCount(self, parent: QModelIndex = QModelIndex()) -> int:
        if parent.isValid():
            return 0
        return len(self._table.columns)

    def data(self, index: QModelIndex, role: int = Qt.ItemDataRole.DisplayRole) -> Any:
        if not index.isValid():
            return None
        row = self._table.rows[index.row()]
        if role == Qt.ItemDataRole.UserRole:
            return row.row_index
        if role in (Qt.ItemDataRole.DisplayRole, Qt.ItemDataRole.ToolTipRole):
            if index.column() < len(row.cells):
                return row.cells[index.column()]
            return ""
        return None

    def headerData(self, section: int, orientation: Qt.Orientation,
                   role: int = Qt.ItemDataRole.DisplayRole) -> Any:
        if role != Qt.ItemDataRole.DisplayRole:
            return None
        if orientation == Qt.Orientation.Horizontal:
            if 0 <= section < len(self._table.columns):
                return self._table.columns[section]
            return None
        return str(section + 1)

    def flags(self, index: QModelIndex) -> Qt.ItemFlag:
        if not index.isValid():
            return Qt.ItemFlag.NoItemFlags
        return Qt.ItemFlag.ItemIsEnabled | Qt.ItemFlag.ItemIsSelectable

    def row_index_at(self, row: int) -> Optional[Any]:
        """Возвращает row_index строки модели или None вне диапазона."""
        if 0 <= row < len(self._table.rows):
            return self._table.rows[row].row_index
        return None

    @property
    def actions_column(self) -> int:
        """Номер столбца с кнопками действий (-1, если таблица пуста)."""
        return len(self._table.columns) - 1
