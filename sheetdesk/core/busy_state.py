# sheetdesk/core/busy_state.py
"""
Счётчик занятости для индикатора загрузки.

Каждый вызов шлюза захватывает состояние на время запроса. Индикатор
показывается при переходе 0 -> 1 и скрывается только при переходе 1 -> 0,
поэтому перекрывающиеся запросы не гасят его раньше времени.
"""

import threading
from contextlib import contextmanager
from typing import Callable, Iterator, List

from sheetdesk.utils.logger import get_logger

logger = get_logger(__name__)

BusyListener = Callable[[bool], None]


class BusyState:
    """Потокобезопасный счётчик незавершённых операций."""

    def __init__(self):
        # RLock: слушатель может снова обратиться к состоянию
        self._lock = threading.RLock()
        self._count = 0
        self._listeners: List[BusyListener] = []

    @property
    def count(self) -> int:
        """Количество незавершённых операций."""
        return self._count

    @property
    def is_busy(self) -> bool:
        return self._count > 0

    def add_listener(self, listener: BusyListener):
        """Регистрирует слушателя изменений (True - занято, False - свободно)."""
        with self._lock:
            self._listeners.append(listener)

    def remove_listener(self, listener: BusyListener):
        with self._lock:
            if listener in self._listeners:
                self._listeners.remove(listener)

    def acquire(self):
        """Отмечает начало операции."""
        with self._lock:
            self._count += 1
            if self._count == 1:
                self._notify(True)

    def release(self):
        """Отмечает завершение операции."""
        with self._lock:
            if self._count == 0:
                raise RuntimeError("BusyState.release() вызван без парного acquire()")
            self._count -= 1
            if self._count == 0:
                self._notify(False)

    @contextmanager
    def hold(self) -> Iterator["BusyState"]:
        """Контекстный менеджер: acquire() на входе, release() на любом выходе."""
        self.acquire()
        try:
            yield self
        finally:
            self.release()

    def _notify(self, busy: bool):
        # Уведомление под блокировкой сохраняет порядок переходов между потоками
        for listener in list(self._listeners):
            try:
                listener(busy)
            except Exception as e:
                logger.error(f"Ошибка в слушателе индикатора загрузки: {e}", exc_info=True)
