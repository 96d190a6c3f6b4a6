# sheetdesk/gateway/__init__.py
"""
Пакет клиента удалённого шлюза.
"""

from .client import GatewayClient, GatewayResult

__all__ = ["GatewayClient", "GatewayResult"]
