# tests/conftest.py
"""
Общие фикстуры тестов: поддельный шлюз на httpx.MockTransport,
контроллер с синхронным исполнителем и слушатель, записывающий события.
"""
import json
import sys
from pathlib import Path

import httpx
import pytest

# Добавляем корень проекта в путь поиска модулей
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from sheetdesk.core.app_controller import AppController, AppControllerListener
from sheetdesk.gateway.client import GatewayClient
from sheetdesk.utils.config import AppConfig

ENDPOINT = "https://gateway.test/exec"


class FakeGateway:
    """
    Поддельный шлюз. Отвечает конвертом {status, data} и запоминает запросы.

    error_message - ответ {status: "error"}; http_status - код ответа HTTP;
    on_request - функция, вызываемая во время каждого запроса.
    """

    def __init__(self):
        self.sheets = {
            "Клиенты": {
                "headers": ["Nombre", "Fecha de alta", "Importe"],
                "rows": [
                    {"rowIndex": 2, "data": ["Ana", "2024-01-05T12:00:00.000Z", 0]},
                    {"rowIndex": 3, "data": ["Luis", "", 150]},
                ],
            },
            "Заказы": {
                "headers": ["Номер", "Сумма"],
                "rows": [{"rowIndex": 2, "data": ["A-1", 10]}],
            },
        }
        self.requests = []
        self.error_message = None
        self.http_status = 200
        self.mutation_data = {"message": "Запись сохранена."}
        self.on_request = None

    def handler(self, request: httpx.Request) -> httpx.Response:
        if request.method == "GET":
            params = dict(request.url.params)
        else:
            params = json.loads(request.content.decode("utf-8"))
        self.requests.append((request, params))
        if self.on_request is not None:
            self.on_request(request, params)

        if self.http_status != 200:
            return httpx.Response(self.http_status)
        if self.error_message is not None:
            return httpx.Response(200, json={"status": "error", "message": self.error_message})

        action = params.get("action")
        if action == "getSheetNames":
            data = list(self.sheets)
        elif action == "getData":
            data = self.sheets[params["sheetName"]]
        else:
            data = self.mutation_data
        return httpx.Response(200, json={"status": "success", "data": data})

    @property
    def actions(self):
        return [params.get("action") for _, params in self.requests]

    @property
    def last_params(self):
        return self.requests[-1][1]

    def reset_requests(self):
        self.requests = []


class RecordingListener(AppControllerListener):
    """Слушатель контроллера, записывающий все события."""

    def __init__(self):
        self.sheet_events = []
        self.tables = []
        self.forms = []
        self.notifications = []

    def sheets_changed(self, sheet_names, active_sheet):
        self.sheet_events.append((sheet_names, active_sheet))

    def table_changed(self, table):
        self.tables.append(table)

    def form_opened(self, pending):
        self.forms.append(pending)

    def notify(self, message, kind):
        self.notifications.append((message, kind))


class FakeModalView:
    """Представление модального окна без GUI."""

    def __init__(self):
        self.calls = []
        self.displayed = False
        self.revealed = False
        self.message = None

    def set_displayed(self, displayed):
        self.calls.append(("displayed", displayed))
        self.displayed = displayed

    def set_revealed(self, revealed):
        self.calls.append(("revealed", revealed))
        self.revealed = revealed

    def set_message(self, message):
        self.message = message

    def reset(self):
        self.calls.append(("reset",))


class ManualScheduler:
    """Планировщик, выполняющий отложенные вызовы только по команде теста."""

    def __init__(self):
        self.pending = []

    def __call__(self, delay_ms, callback):
        self.pending.append((delay_ms, callback))

    def run_all(self):
        pending, self.pending = self.pending, []
        for _, callback in pending:
            callback()


@pytest.fixture
def fake_gateway():
    return FakeGateway()


@pytest.fixture
def gateway_client(fake_gateway):
    client = GatewayClient(ENDPOINT, timeout=5, transport=httpx.MockTransport(fake_gateway.handler))
    yield client
    client.close()


@pytest.fixture
def config():
    return AppConfig(endpoint=ENDPOINT)


@pytest.fixture
def listener():
    return RecordingListener()


@pytest.fixture
def app_controller(config, gateway_client, listener):
    controller = AppController(config, gateway=gateway_client, listener=listener)
    yield controller
    controller.shutdown()
