# sheetdesk/core/controller/sheet_registry.py
"""
Модуль для управления списком листов.
Загружает имена листов из шлюза и хранит активный лист.
"""

from typing import TYPE_CHECKING, List, Optional

from sheetdesk.gateway.client import GatewayResult
from sheetdesk.utils.logger import get_logger

if TYPE_CHECKING:
    from sheetdesk.core.app_controller import AppController

logger = get_logger(__name__)


class SheetRegistry:
    """
    Реестр листов: порядок как у шлюза, активен ровно один лист.
    """

    def __init__(self, app_controller: "AppController"):
        """
        Args:
            app_controller (AppController): Ссылка на основной контроллер приложения.
        """
        self.app_controller = app_controller
        self._sheet_names: List[str] = []
        self._active_sheet: Optional[str] = None
        logger.debug("SheetRegistry инициализирован.")

    @property
    def sheet_names(self) -> List[str]:
        return list(self._sheet_names)

    @property
    def active_sheet(self) -> Optional[str]:
        return self._active_sheet

    def fetch(self) -> GatewayResult:
        """Запрашивает список листов. Только сеть, состояние не меняется."""
        return self.app_controller.gateway.get_sheet_names()

    def apply(self, result: GatewayResult) -> Optional[str]:
        """
        Применяет ответ шлюза.

        Returns:
            Optional[str]: Имя первого (активного) листа или None, если листов нет
            или запрос завершился ошибкой.
        """
        if not result.ok or not result.data:
            if result.ok:
                logger.warning("Шлюз вернул пустой список листов.")
            self._sheet_names = []
            self._active_sheet = None
            return None

        self._sheet_names = list(result.data)
        self._active_sheet = self._sheet_names[0]
        logger.info(f"Загружено листов: {len(self._sheet_names)}. Активный лист: '{self._active_sheet}'")
        return self._active_sheet

    def load_sheet_names(self) -> Optional[str]:
        """Загружает список листов синхронно и возвращает активный лист."""
        return self.apply(self.fetch())

    def select(self, sheet_name: str):
        """
        Делает лист активным.

        Raises:
            ValueError: Если лист отсутствует в реестре.
        """
        if sheet_name not in self._sheet_names:
            raise ValueError(f"Лист не найден: '{sheet_name}'")
        if sheet_name != self._active_sheet:
            logger.info(f"Активный лист: '{self._active_sheet}' -> '{sheet_name}'")
        self._active_sheet = sheet_name
