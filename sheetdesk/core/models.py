# sheetdesk/core/models.py
"""
Pydantic-модели данных, которыми клиент обменивается со шлюзом.

Эти модели служат контрактом с удалённым шлюзом: имена полей в JSON
(camelCase) задаются через alias.
"""

from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

# Действия шлюза
ACTION_GET_SHEET_NAMES = "getSheetNames"
ACTION_GET_DATA = "getData"
ACTION_CREATE = "create"
ACTION_UPDATE = "update"
ACTION_DELETE = "delete"


class SheetRow(BaseModel):
    """Строка листа: индекс строки, назначенный шлюзом, и значения ячеек."""
    model_config = ConfigDict(populate_by_name=True)

    row_index: Any = Field(alias="rowIndex")
    data: List[Any] = Field(default_factory=list)


class SheetData(BaseModel):
    """Данные листа: заголовки колонок и строки."""
    headers: List[str] = Field(default_factory=list)
    rows: List[SheetRow] = Field(default_factory=list)

    @field_validator("headers", mode="before")
    @classmethod
    def _headers_as_text(cls, value: Any) -> Any:
        # Заголовок-число или пустая ячейка заголовка приходят не строкой
        if isinstance(value, list):
            return ["" if header is None else str(header) for header in value]
        return value


class MutationResult(BaseModel):
    """Ответ шлюза на create/update/delete."""
    model_config = ConfigDict(extra="allow")

    message: Optional[str] = None

    @field_validator("message", mode="before")
    @classmethod
    def _message_as_text(cls, value: Any) -> Any:
        if value is None or isinstance(value, str):
            return value
        return str(value)


class MutationPayload(BaseModel):
    """Тело POST-запроса на изменение данных."""
    model_config = ConfigDict(populate_by_name=True)

    action: str
    sheet_name: str = Field(alias="sheetName")
    row_data: Optional[List[Any]] = Field(default=None, alias="rowData")
    row_index: Optional[Any] = Field(default=None, alias="rowIndex")

    def to_params(self) -> dict:
        """Словарь для JSON-тела: camelCase, без пустых полей."""
        return self.model_dump(by_alias=True, exclude_none=True)
