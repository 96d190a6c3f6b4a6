# sheetdesk/gateway/client.py
"""
Клиент удалённого шлюза электронной таблицы.

Все чтения и записи идут через один HTTP(S) JSON-эндпоинт. Любая ошибка
(сетевая или ошибка скрипта) логируется, показывается пользователю через
notifier и возвращается как неуспешный GatewayResult - исключения наружу
не выходят.
"""

import json
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional

import httpx
from pydantic import ValidationError as PydanticValidationError

from sheetdesk.core.busy_state import BusyState
from sheetdesk.core.models import (
    ACTION_CREATE,
    ACTION_DELETE,
    ACTION_GET_DATA,
    ACTION_GET_SHEET_NAMES,
    ACTION_UPDATE,
    MutationPayload,
    MutationResult,
    SheetData,
)
from sheetdesk.exceptions import ApplicationError, GatewayError, TransportError
from sheetdesk.utils.logger import get_logger

logger = get_logger(__name__)

# Content-Type тела POST. text/plain не вызывает CORS preflight у Apps Script
POST_CONTENT_TYPE = "text/plain;charset=utf-8"

DEFAULT_TIMEOUT_SECONDS = 30.0

# Тип уведомления: (сообщение, вид) - вид "success" или "error"
Notifier = Callable[[str, str], None]


@dataclass
class GatewayResult:
    """Результат обращения к шлюзу: данные или вид и текст ошибки."""

    ok: bool
    data: Any = None
    error_kind: Optional[str] = None
    message: Optional[str] = None

    @classmethod
    def success(cls, data: Any) -> "GatewayResult":
        return cls(ok=True, data=data)

    @classmethod
    def failure(cls, error_kind: str, message: str) -> "GatewayResult":
        return cls(ok=False, error_kind=error_kind, message=message)

    def value_or_none(self) -> Any:
        """Данные при успехе, None при ошибке."""
        return self.data if self.ok else None


class GatewayClient:
    """
    Клиент шлюза.

    Каждый вызов удерживает BusyState на всё время запроса, поэтому
    индикатор загрузки гаснет при любом исходе.
    """

    def __init__(
        self,
        endpoint: str,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        busy_state: Optional[BusyState] = None,
        notifier: Optional[Notifier] = None,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        """
        Args:
            endpoint (str): Адрес шлюза.
            timeout (float): Таймаут запроса в секундах.
            busy_state (Optional[BusyState]): Общий счётчик занятости. Если None, создаётся свой.
            notifier (Optional[Notifier]): Функция показа уведомлений об ошибках.
            transport (Optional[httpx.BaseTransport]): Транспорт httpx (для тестов).
        """
        self.endpoint = endpoint
        self.busy_state = busy_state or BusyState()
        self.notifier = notifier
        self._http_client = httpx.Client(
            timeout=timeout,
            follow_redirects=True,
            transport=transport,
        )
        logger.debug(f"GatewayClient инициализирован для {endpoint}")

    def close(self):
        """Закрывает HTTP-клиент."""
        self._http_client.close()

    def __enter__(self) -> "GatewayClient":
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()

    # --- Базовый вызов ---

    def call(self, method: str = "GET", params: Optional[Dict[str, Any]] = None) -> GatewayResult:
        """Вызов настроенного шлюза."""
        return self.call_endpoint(self.endpoint, method, params)

    def call_endpoint(self, endpoint: str, method: str = "GET", params: Optional[Dict[str, Any]] = None) -> GatewayResult:
        """
        Выполняет GET или POST к указанному эндпоинту.

        Args:
            endpoint (str): Адрес шлюза.
            method (str): "GET" (params - строка запроса) или "POST" (params - JSON-тело).
            params (Optional[Dict[str, Any]]): Параметры запроса.

        Returns:
            GatewayResult: Поле data ответа или описание ошибки.
        """
        method = method.upper()
        if method not in ("GET", "POST"):
            raise ValueError(f"Неподдерживаемый метод запроса: {method}")
        params = dict(params or {})
        action = params.get("action", "")

        with self.busy_state.hold():
            try:
                data = self._request(endpoint, method, params)
            except GatewayError as e:
                logger.error(f"Ошибка при обращении к шлюзу ({method} {action}): {e.message}")
                self._notify(e.message, "error")
                return GatewayResult.failure(e.kind, e.message)

        logger.debug(f"Ответ шлюза получен ({method} {action}).")
        return GatewayResult.success(data)

    def _request(self, endpoint: str, method: str, params: Dict[str, Any]) -> Any:
        """Отправляет запрос и разбирает конверт ответа. Бросает GatewayError."""
        try:
            if method == "GET":
                response = self._http_client.get(endpoint, params=params)
            else:
                body = json.dumps(params, ensure_ascii=False).encode("utf-8")
                response = self._http_client.post(
                    endpoint,
                    content=body,
                    headers={"Content-Type": POST_CONTENT_TYPE, "Cache-Control": "no-cache"},
                )
        except httpx.TimeoutException as e:
            raise TransportError(f"Ошибка сети: превышено время ожидания ({e})") from e
        except httpx.HTTPError as e:
            raise TransportError(f"Ошибка сети: {e}") from e

        if not response.is_success:
            raise TransportError(f"Ошибка сети: {response.status_code} {response.reason_phrase}")

        try:
            result = response.json()
        except ValueError as e:
            raise TransportError(f"Ошибка сети: некорректный ответ шлюза ({e})") from e

        if not isinstance(result, dict):
            raise TransportError("Ошибка сети: ответ шлюза не является JSON-объектом")

        if result.get("status") == "error":
            raise ApplicationError(f"Ошибка в скрипте: {result.get('message')}")

        return result.get("data")

    def _notify(self, message: str, kind: str):
        if self.notifier is None:
            return
        try:
            self.notifier(message, kind)
        except Exception as e:
            logger.error(f"Ошибка при показе уведомления: {e}", exc_info=True)

    def _invalid_payload(self, action: str, detail: str) -> GatewayResult:
        message = f"Некорректные данные от шлюза ({action}): {detail}"
        logger.error(message)
        self._notify(message, "error")
        return GatewayResult.failure(TransportError.kind, message)

    # --- Операции шлюза ---

    def get_sheet_names(self) -> GatewayResult:
        """Список листов. data - List[str]."""
        result = self.call("GET", {"action": ACTION_GET_SHEET_NAMES})
        if not result.ok:
            return result
        names = result.data
        if not isinstance(names, list):
            return self._invalid_payload(ACTION_GET_SHEET_NAMES, "ожидается список имён листов")
        return GatewayResult.success([str(name) for name in names])

    def get_data(self, sheet_name: str) -> GatewayResult:
        """Данные листа. data - SheetData."""
        result = self.call("GET", {"action": ACTION_GET_DATA, "sheetName": sheet_name})
        if not result.ok:
            return result
        try:
            sheet_data = SheetData.model_validate(result.data)
        except PydanticValidationError as e:
            return self._invalid_payload(ACTION_GET_DATA, str(e))
        return GatewayResult.success(sheet_data)

    def mutate(self, payload: MutationPayload) -> GatewayResult:
        """
        POST изменения. data - MutationResult или None, если шлюз вернул пустой data
        (в этом случае вызывающий код ничего не делает).
        """
        result = self.call("POST", payload.to_params())
        if not result.ok or result.data is None:
            return result
        data = result.data if isinstance(result.data, dict) else {}
        try:
            mutation_result = MutationResult.model_validate(data)
        except PydanticValidationError as e:
            return self._invalid_payload(payload.action, str(e))
        return GatewayResult.success(mutation_result)

    def create_record(self, sheet_name: str, row_data: List[Any]) -> GatewayResult:
        return self.mutate(MutationPayload(action=ACTION_CREATE, sheet_name=sheet_name, row_data=row_data))

    def update_record(self, sheet_name: str, row_index: Any, row_data: List[Any]) -> GatewayResult:
        return self.mutate(
            MutationPayload(action=ACTION_UPDATE, sheet_name=sheet_name, row_data=row_data, row_index=row_index)
        )

    def delete_record(self, sheet_name: str, row_index: Any) -> GatewayResult:
        return self.mutate(MutationPayload(action=ACTION_DELETE, sheet_name=sheet_name, row_index=row_index))
