# tests/test_table_model.py
"""
Тесты для модели Qt sheetdesk/constructor/widgets/table_model.py.
"""
import pytest

pytest.importorskip("PySide6")

from PySide6.QtCore import QCoreApplication, Qt

from sheetdesk.constructor.widgets.table_model import SheetTableModel
from sheetdesk.core.controller.table_manager import RenderedRow, RenderedTable


@pytest.fixture(scope="module")
def qt_app():
    app = QCoreApplication.instance() or QCoreApplication([])
    yield app


@pytest.fixture
def model(qt_app):
    model = SheetTableModel()
    model.set_table(RenderedTable(
        columns=["Nombre", "Importe", "Действия"],
        rows=[RenderedRow(row_index=2, cells=["Ana", "0"]), RenderedRow(row_index="7", cells=["Luis", "150"])],
    ))
    return model


def test_dimensions_include_actions_column(model):
    assert model.rowCount() == 2
    assert model.columnCount() == 3
    assert model.actions_column == 2
    assert model.headerData(2, Qt.Orientation.Horizontal) == "Действия"


def test_display_and_row_index(model):
    assert model.data(model.index(0, 1)) == "0"
    assert model.data(model.index(0, 2)) == ""
    assert model.data(model.index(1, 0), Qt.ItemDataRole.UserRole) == "7"
    assert model.row_index_at(0) == 2
    assert model.row_index_at(5) is None


def test_clear(model):
    model.clear()
    assert model.rowCount() == 0
    assert model.columnCount() == 0
    assert model.actions_column == -1
