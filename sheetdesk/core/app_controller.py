# sheetdesk/core/app_controller.py
"""
Центральный контроллер приложения.

Координирует шлюз, реестр листов, таблицу, форму записи и модальные окна.
Не зависит от Qt: представление подписывается через AppControllerListener,
сетевые вызовы выполняет переданный исполнитель задач.
"""

from typing import Any, List, Optional

from sheetdesk.core.busy_state import BusyState
from sheetdesk.core.controller.record_form import FormValues, PendingRecordEdit, RecordFormController
from sheetdesk.core.controller.sheet_registry import SheetRegistry
from sheetdesk.core.controller.table_manager import LoadTicket, RenderedTable, TableManager
from sheetdesk.core.modal_orchestrator import (
    ConfirmationOrchestrator,
    ModalOrchestrator,
    Scheduler,
    immediate_scheduler,
)
from sheetdesk.core.task_runner import SyncTaskRunner
from sheetdesk.exceptions import ConfigError
from sheetdesk.gateway.client import GatewayClient, GatewayResult
from sheetdesk.utils.config import AppConfig
from sheetdesk.utils.logger import get_logger

logger = get_logger(__name__)

DELETE_CONFIRM_MESSAGE = "Вы уверены, что хотите удалить эту запись? Это действие нельзя отменить."
DEFAULT_SUCCESS_MESSAGE = "Операция выполнена."
DEFAULT_DELETE_MESSAGE = "Запись удалена."

NOTIFY_SUCCESS = "success"
NOTIFY_ERROR = "error"


class AppControllerListener:
    """
    Интерфейс представления. Все методы вызываются в потоке GUI,
    кроме notify(), который может прийти из рабочего потока шлюза.
    """

    def sheets_changed(self, sheet_names: List[str], active_sheet: Optional[str]):
        pass

    def table_changed(self, table: RenderedTable):
        pass

    def form_opened(self, pending: PendingRecordEdit):
        pass

    def notify(self, message: str, kind: str):
        pass


class AppController:
    """
    Центральный контроллер приложения.
    """

    def __init__(
        self,
        config: AppConfig,
        gateway: Optional[GatewayClient] = None,
        runner: Any = None,
        scheduler: Scheduler = immediate_scheduler,
        listener: Optional[AppControllerListener] = None,
    ):
        """
        Args:
            config (AppConfig): Настройки приложения.
            gateway (Optional[GatewayClient]): Клиент шлюза. Если None, создаётся по config.
            runner: Исполнитель задач с методом run(task, on_done). По умолчанию синхронный.
            scheduler (Scheduler): Планировщик отложенных вызовов для модальных окон.
            listener (Optional[AppControllerListener]): Представление.
        """
        self.config = config
        self.listener = listener or AppControllerListener()
        self.runner = runner or SyncTaskRunner()

        if gateway is None:
            gateway = GatewayClient(config.endpoint, timeout=config.timeout_seconds, busy_state=BusyState())
        self.gateway = gateway
        self.gateway.notifier = self._notify

        self.sheets = SheetRegistry(self)
        self.table = TableManager(self)
        self.form = RecordFormController(self)

        self.form_modal = ModalOrchestrator(
            "form",
            scheduler=scheduler,
            open_delay_ms=config.open_delay_ms,
            close_delay_ms=config.close_delay_ms,
            reset_on_close=True,
        )
        self.confirm_modal = ConfirmationOrchestrator(
            "confirm",
            scheduler=scheduler,
            open_delay_ms=config.open_delay_ms,
            close_delay_ms=config.close_delay_ms,
        )
        logger.debug("AppController инициализирован.")

    @property
    def busy_state(self) -> BusyState:
        return self.gateway.busy_state

    @property
    def active_sheet(self) -> Optional[str]:
        return self.sheets.active_sheet

    def shutdown(self):
        """Полное завершение работы контроллера."""
        self.gateway.close()
        logger.info("AppController завершил работу.")

    def _notify(self, message: str, kind: str = NOTIFY_SUCCESS):
        self.listener.notify(message, kind)

    # --- Листы ---

    def start(self) -> bool:
        """
        Загружает список листов и данные первого листа.

        Returns:
            bool: False, если адрес шлюза не настроен.
        """
        try:
            self.config.require_endpoint()
        except ConfigError as e:
            logger.error(str(e))
            self._notify(str(e), NOTIFY_ERROR)
            return False
        self.runner.run(self.sheets.fetch, self._on_sheet_names_loaded)
        return True

    def _on_sheet_names_loaded(self, result: GatewayResult):
        active = self.sheets.apply(result)
        self.listener.sheets_changed(self.sheets.sheet_names, active)
        if active is not None:
            self.load_table(active)

    def select_sheet(self, sheet_name: str):
        """Переключает активный лист и всегда перезагружает его данные."""
        self.sheets.select(sheet_name)
        self.listener.sheets_changed(self.sheets.sheet_names, sheet_name)
        self.load_table(sheet_name)

    # --- Таблица ---

    def load_table(self, sheet_name: str) -> LoadTicket:
        """Запускает загрузку листа. Применится только ответ последней загрузки."""
        ticket = self.table.begin_load(sheet_name)
        self.runner.run(
            lambda: self.table.fetch(ticket),
            lambda result: self._on_table_loaded(ticket, result),
        )
        return ticket

    def reload_active_sheet(self):
        if self.active_sheet is not None:
            self.load_table(self.active_sheet)

    def _on_table_loaded(self, ticket: LoadTicket, result: GatewayResult):
        if self.table.apply_load(ticket, result):
            self.listener.table_changed(self.table.render())

    # --- Форма записи ---

    def open_create_form(self) -> PendingRecordEdit:
        pending = self.form.open_create()
        self.listener.form_opened(pending)
        self.form_modal.open()
        return pending

    def open_edit_form(self, row_index: Any) -> PendingRecordEdit:
        """
        Raises:
            RecordNotFoundError: Если строки нет в загруженных данных.
        """
        pending = self.form.open_edit(row_index)
        self.listener.form_opened(pending)
        self.form_modal.open()
        return pending

    def close_form(self):
        """Закрывает форму; поля сбрасываются после скрытия окна."""
        self.form.discard()
        self.form_modal.close()

    def submit_form(self, values: FormValues):
        """
        Отправляет форму: create или update, затем перезагрузка активного листа.

        Raises:
            ValidationError: Если обязательные поля не заполнены.
        """
        payload = self.form.build_payload(values)
        logger.info(f"Отправка формы: {payload.action} (лист '{payload.sheet_name}')")
        self.runner.run(lambda: self.gateway.mutate(payload), self._on_form_submitted)

    def _on_form_submitted(self, result: GatewayResult):
        if result.value_or_none() is None:
            # Ошибка уже показана шлюзом (или пустой ответ), форма остаётся открытой
            return
        self._notify(result.data.message or DEFAULT_SUCCESS_MESSAGE, NOTIFY_SUCCESS)
        self.close_form()
        self.reload_active_sheet()

    # --- Удаление ---

    def request_delete(self, row_index: Any, message: str = DELETE_CONFIRM_MESSAGE):
        """Открывает окно подтверждения, привязанное к удалению строки row_index."""
        self.confirm_modal.open_confirmation(message, lambda: self._delete(row_index))

    def confirm(self) -> bool:
        """Подтверждение: вызывает последнее привязанное действие и закрывает окно."""
        return self.confirm_modal.confirm()

    def cancel_confirmation(self):
        self.confirm_modal.close()

    def _delete(self, row_index: Any):
        sheet_name = self.active_sheet or ""
        logger.info(f"Удаление записи {row_index} (лист '{sheet_name}')")
        self.runner.run(
            lambda: self.gateway.delete_record(sheet_name, row_index),
            self._on_deleted,
        )

    def _on_deleted(self, result: GatewayResult):
        if result.value_or_none() is None:
            return
        self._notify(result.data.message or DEFAULT_DELETE_MESSAGE, NOTIFY_SUCCESS)
        self.reload_active_sheet()


def create_app_controller(config: AppConfig, **kwargs) -> AppController:
    """Фабрика AppController."""
    return AppController(config, **kwargs)
