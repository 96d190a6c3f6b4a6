# tests/test_gateway_client.py
"""
Тесты для модуля sheetdesk/gateway/client.py.
"""
import httpx
import pytest
from pydantic import BaseModel

from sheetdesk.core.models import SheetData
from sheetdesk.gateway import client as client_module
from sheetdesk.gateway.client import POST_CONTENT_TYPE, GatewayClient, GatewayResult

from conftest import ENDPOINT


def test_get_sheet_names_sends_action_in_query(gateway_client, fake_gateway):
    """GET передаёт action в строке запроса и возвращает имена листов."""
    result = gateway_client.get_sheet_names()

    assert result.ok
    assert result.data == ["Клиенты", "Заказы"]
    request, params = fake_gateway.requests[0]
    assert request.method == "GET"
    assert params == {"action": "getSheetNames"}


def test_get_data_returns_sheet_data(gateway_client, fake_gateway):
    result = gateway_client.get_data("Клиенты")

    assert result.ok
    assert isinstance(result.data, SheetData)
    assert result.data.headers == ["Nombre", "Fecha de alta", "Importe"]
    assert [row.row_index for row in result.data.rows] == [2, 3]
    assert fake_gateway.last_params == {"action": "getData", "sheetName": "Клиенты"}


def test_post_body_is_plain_text_json(gateway_client, fake_gateway):
    """POST отправляет JSON как text/plain в UTF-8, без пустых полей."""
    result = gateway_client.create_record("Клиенты", ["Ана", "2024-02-01", "5"])

    assert result.ok
    request, params = fake_gateway.requests[0]
    assert request.method == "POST"
    assert request.headers["Content-Type"] == POST_CONTENT_TYPE
    assert "Ана".encode("utf-8") in request.content
    assert params == {"action": "create", "sheetName": "Клиенты", "rowData": ["Ана", "2024-02-01", "5"]}


def test_update_and_delete_payloads(gateway_client, fake_gateway):
    gateway_client.update_record("Клиенты", 2, ["Ana", "", "1"])
    assert fake_gateway.last_params == {
        "action": "update", "sheetName": "Клиенты", "rowData": ["Ana", "", "1"], "rowIndex": 2
    }

    gateway_client.delete_record("Клиенты", 3)
    assert fake_gateway.last_params == {"action": "delete", "sheetName": "Клиенты", "rowIndex": 3}


def test_mutation_message_and_null_data(gateway_client, fake_gateway):
    result = gateway_client.delete_record("Клиенты", 2)
    assert result.ok
    assert result.data.message == "Запись сохранена."

    # Пустой data: успех без результата, вызывающий код ничего не делает
    fake_gateway.mutation_data = None
    result = gateway_client.delete_record("Клиенты", 2)
    assert result.ok
    assert result.data is None
    assert result.value_or_none() is None

    fake_gateway.mutation_data = {}
    result = gateway_client.delete_record("Клиенты", 2)
    assert result.data.message is None


def test_mutation_message_is_coerced_to_text(gateway_client, fake_gateway):
    """Нестроковое сообщение шлюза не прерывает операцию."""
    fake_gateway.mutation_data = {"message": 5}

    result = gateway_client.delete_record("Клиенты", 2)

    assert result.ok
    assert result.data.message == "5"


def test_invalid_mutation_result_is_reported(gateway_client, fake_gateway, monkeypatch):
    """Ошибка разбора ответа на изменение возвращается как неуспешный результат."""
    class StrictResult(BaseModel):
        message: int

    notifications = []
    gateway_client.notifier = lambda message, kind: notifications.append(kind)
    monkeypatch.setattr(client_module, "MutationResult", StrictResult)
    fake_gateway.mutation_data = {"message": "не число"}

    result = gateway_client.create_record("Клиенты", ["Eva", "2024-03-01", "7"])

    assert not result.ok
    assert result.error_kind == "transport"
    assert notifications == ["error"]
    assert not gateway_client.busy_state.is_busy


def test_application_error_is_reported():
    """Конверт status=error превращается в ошибку вида application."""
    notifications = []

    def handler(request):
        return httpx.Response(200, json={"status": "error", "message": "Hoja no encontrada"})

    with GatewayClient(ENDPOINT, notifier=lambda message, kind: notifications.append((message, kind)),
                       transport=httpx.MockTransport(handler)) as client:
        result = client.get_data("Нет такого")

    assert not result.ok
    assert result.error_kind == "application"
    assert result.message == "Ошибка в скрипте: Hoja no encontrada"
    assert result.value_or_none() is None
    assert notifications == [("Ошибка в скрипте: Hoja no encontrada", "error")]


def test_http_error_status_is_transport_error(gateway_client, fake_gateway):
    fake_gateway.http_status = 500

    result = gateway_client.get_sheet_names()

    assert not result.ok
    assert result.error_kind == "transport"
    assert result.message.startswith("Ошибка сети: 500")


@pytest.mark.parametrize("exception", [
    httpx.ConnectError("connection refused"),
    httpx.ReadTimeout("timed out"),
])
def test_network_failure_is_transport_error(exception):
    def handler(request):
        raise exception

    with GatewayClient(ENDPOINT, transport=httpx.MockTransport(handler)) as client:
        result = client.call("GET", {"action": "getSheetNames"})

    assert not result.ok
    assert result.error_kind == "transport"
    assert result.message.startswith("Ошибка сети")


def test_invalid_json_is_transport_error():
    def handler(request):
        return httpx.Response(200, content=b"<html>login</html>")

    with GatewayClient(ENDPOINT, transport=httpx.MockTransport(handler)) as client:
        result = client.call("GET", {"action": "getSheetNames"})

    assert not result.ok
    assert result.error_kind == "transport"


def test_invalid_sheet_data_is_reported():
    def handler(request):
        return httpx.Response(200, json={"status": "success", "data": {"headers": "no", "rows": 5}})

    with GatewayClient(ENDPOINT, transport=httpx.MockTransport(handler)) as client:
        result = client.get_data("Клиенты")

    assert not result.ok
    assert result.error_kind == "transport"


def test_redirect_is_followed():
    """Шлюз отвечает перенаправлением на адрес с результатом."""
    def handler(request):
        if request.url.host == "gateway.test":
            return httpx.Response(302, headers={"Location": "https://content.test/result"})
        return httpx.Response(200, json={"status": "success", "data": ["Лист1"]})

    with GatewayClient(ENDPOINT, transport=httpx.MockTransport(handler)) as client:
        result = client.get_sheet_names()

    assert result.ok
    assert result.data == ["Лист1"]


def test_call_endpoint_uses_given_url():
    seen = []

    def handler(request):
        seen.append(str(request.url))
        return httpx.Response(200, json={"status": "ok", "data": 1})

    with GatewayClient(ENDPOINT, transport=httpx.MockTransport(handler)) as client:
        result = client.call_endpoint("https://other.test/exec", "POST", {"action": "ping"})

    assert result == GatewayResult.success(1)
    assert seen == ["https://other.test/exec"]


def test_busy_state_released_on_success_and_failure(gateway_client, fake_gateway):
    transitions = []
    observed = []
    gateway_client.busy_state.add_listener(transitions.append)
    fake_gateway.on_request = lambda request, params: observed.append(gateway_client.busy_state.is_busy)

    gateway_client.get_sheet_names()
    fake_gateway.error_message = "boom"
    gateway_client.get_sheet_names()

    assert observed == [True, True]
    assert transitions == [True, False, True, False]
    assert not gateway_client.busy_state.is_busy


def test_unsupported_method(gateway_client):
    with pytest.raises(ValueError):
        gateway_client.call("PUT", {"action": "getData"})

