# sheetdesk/core/task_runner.py
"""
Запуск сетевых задач контроллера.

Контроллер передаёт исполнителю задачу (обращение к шлюзу) и обработчик
результата. Синхронный исполнитель выполняет обе части сразу; в GUI
используется исполнитель на QThread (sheetdesk.constructor.widgets.gateway_worker),
который вызывает обработчик в потоке GUI.
"""

from typing import Callable, TypeVar

T = TypeVar("T")


class SyncTaskRunner:
    """Исполнитель без потоков: для CLI и тестов."""

    def run(self, task: Callable[[], T], on_done: Callable[[T], None]):
        on_done(task())
