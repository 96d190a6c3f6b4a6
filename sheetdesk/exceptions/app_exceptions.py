# sheetdesk/exceptions/app_exceptions.py
"""
Модуль с пользовательскими исключениями для приложения.
"""


class AppBaseError(Exception):
    """Базовый класс для всех исключений приложения."""
    pass


class ConfigError(AppBaseError):
    """Исключение, связанное с конфигурацией (адрес шлюза, файл настроек)."""
    pass


class GatewayError(AppBaseError):
    """
    Базовое исключение обращения к шлюзу.

    Наружу из GatewayClient не выходит: клиент превращает его в неуспешный
    GatewayResult.
    """

    kind = "gateway"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class TransportError(GatewayError):
    """Сетевая ошибка: неуспешный HTTP-статус, таймаут, нечитаемый ответ."""

    kind = "transport"


class ApplicationError(GatewayError):
    """Шлюз вернул корректный ответ со status == "error"."""

    kind = "application"


class RecordNotFoundError(AppBaseError):
    """Запись с указанным индексом строки отсутствует в загруженных данных."""

    def __init__(self, row_index):
        super().__init__(f"Запись не найдена: {row_index}")
        self.row_index = row_index


class ValidationError(AppBaseError):
    """Исключение, возникающее при валидации данных формы."""

    def __init__(self, message: str, missing_fields=None):
        super().__init__(message)
        self.missing_fields = list(missing_fields or [])
