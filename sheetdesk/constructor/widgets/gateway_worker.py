# sheetdesk/constructor/widgets/gateway_worker.py
"""
Вспомогательные классы для выполнения запросов к шлюзу в отдельном потоке.
"""

from typing import Any, Callable, Dict

from PySide6.QtCore import QObject, QThread, Signal, Slot

from sheetdesk.utils.logger import get_logger

logger = get_logger(__name__)


class GatewayWorker(QThread):
    """
    Рабочий поток для одного обращения к шлюзу.

    Результат задачи передаётся сигналом completed и обрабатывается
    в потоке GUI.
    """
    completed = Signal(object)
    failed = Signal(str)

    def __init__(self, task: Callable[[], Any], parent=None):
        """
        Args:
            task (Callable[[], Any]): Задача (обычно вызов GatewayClient).
            parent: Родительский объект Qt.
        """
        super().__init__(parent)
        self.task = task

    def run(self):
        """Выполняет задачу в отдельном потоке."""
        logger.debug(f"Запрос к шлюзу в потоке {id(QThread.currentThread())}")
        try:
            result = self.task()
        except Exception as e:
            # GatewayClient сам превращает ошибки шлюза в результат, сюда попадают только сбои кода
            logger.error(f"Ошибка в потоке запроса к шлюзу: {e}", exc_info=True)
            self.failed.emit(str(e))
            return
        self.completed.emit(result)


class QtTaskRunner(QObject):
    """
    Исполнитель задач AppController на QThread.

    Обработчик результата вызывается в потоке GUI: слоты исполнителя
    принадлежат потоку GUI, поэтому сигналы рабочих потоков ставятся в очередь.
    """
    task_failed = Signal(str)

    def __init__(self, parent=None):
        super().__init__(parent)
        self._workers: Dict[GatewayWorker, Callable[[Any], None]] = {}

    @property
    def active_count(self) -> int:
        return len(self._workers)

    def run(self, task: Callable[[], Any], on_done: Callable[[Any], None]):
        worker = GatewayWorker(task)
        # Ссылка на поток хранится до его завершения
        self._workers[worker] = on_done
        worker.completed.connect(self._on_worker_completed)
        worker.failed.connect(self.task_failed)
        worker.finished.connect(self._on_worker_finished)
        worker.start()

    @Slot(object)
    def _on_worker_completed(self, result: Any):
        worker = self.sender()
        on_done = self._workers.get(worker)
        if on_done is not None:
            on_done(result)

    @Slot()
    def _on_worker_finished(self):
        worker = self.sender()
        if worker in self._workers:
            del self._workers[worker]
            worker.deleteLater()

    def wait_all(self, timeout_ms: int = 5000):
        """Ожидает завершения всех потоков (при закрытии окна)."""
        for worker in list(self._workers):
            worker.wait(timeout_ms)
