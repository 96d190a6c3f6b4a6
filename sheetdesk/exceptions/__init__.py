# sheetdesk/exceptions/__init__.py
"""
Пакет пользовательских исключений для приложения.
"""

from .app_exceptions import (
    AppBaseError,
    ConfigError,
    GatewayError,
    TransportError,
    ApplicationError,
    RecordNotFoundError,
    ValidationError,
)

__all__ = [
    "AppBaseError",
    "ConfigError",
    "GatewayError",
    "TransportError",
    "ApplicationError",
    "RecordNotFoundError",
    "ValidationError",
]
