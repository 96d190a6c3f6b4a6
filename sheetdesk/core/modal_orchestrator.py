# sheetdesk/core/modal_orchestrator.py
"""
Жизненный цикл модальных окон: форма записи и окно подтверждения.

Состояния: CLOSED -> OPENING -> OPEN -> CLOSING -> CLOSED.
Открытие: окно показывается сразу, "видимое" состояние (анимация прозрачности)
включается после короткой задержки, чтобы переход начинался с исходного стиля.
Закрытие: "видимое" состояние снимается сразу, окно скрывается после задержки,
равной длительности анимации.

Представление (view) - любой объект с методами set_displayed(bool) и
set_revealed(bool); необязательные методы: reset(), set_message(str).
"""

from enum import Enum
from typing import Any, Callable, Optional

from sheetdesk.utils.logger import get_logger

logger = get_logger(__name__)

# Планировщик: (задержка в мс, функция)
Scheduler = Callable[[int, Callable[[], None]], None]

DEFAULT_OPEN_DELAY_MS = 10
DEFAULT_CLOSE_DELAY_MS = 300


def immediate_scheduler(delay_ms: int, callback: Callable[[], None]):
    """Планировщик без ожидания, для работы без GUI."""
    callback()


class ModalState(Enum):
    CLOSED = "closed"
    OPENING = "opening"
    OPEN = "open"
    CLOSING = "closing"


class OneShotAction:
    """
    Одноразовая подписка на действие подтверждения.

    bind() заменяет ранее привязанное действие, fire() вызывает текущее
    действие один раз и снимает подписку.
    """

    def __init__(self):
        self._action: Optional[Callable[[], Any]] = None

    @property
    def is_bound(self) -> bool:
        return self._action is not None

    def bind(self, action: Callable[[], Any]):
        if self._action is not None:
            logger.debug("Предыдущее действие подтверждения заменено.")
        self._action = action

    def unbind(self):
        self._action = None

    def fire(self) -> bool:
        """Вызывает привязанное действие. Возвращает False, если привязки нет."""
        action, self._action = self._action, None
        if action is None:
            return False
        action()
        return True


class ModalOrchestrator:
    """Машина состояний одного модального окна."""

    def __init__(
        self,
        name: str,
        scheduler: Scheduler = immediate_scheduler,
        open_delay_ms: int = DEFAULT_OPEN_DELAY_MS,
        close_delay_ms: int = DEFAULT_CLOSE_DELAY_MS,
        reset_on_close: bool = False,
    ):
        """
        Args:
            name (str): Имя окна (для логов).
            scheduler (Scheduler): Отложенный вызов (в GUI - QTimer.singleShot).
            open_delay_ms (int): Задержка перед включением видимого состояния.
            close_delay_ms (int): Задержка перед скрытием; не меньше длительности анимации.
            reset_on_close (bool): Сбрасывать ли поля представления после скрытия.
        """
        self.name = name
        self.scheduler = scheduler
        self.open_delay_ms = open_delay_ms
        self.close_delay_ms = close_delay_ms
        self.reset_on_close = reset_on_close
        self.view: Any = None
        self.state = ModalState.CLOSED
        # Номер перехода: отложенные вызовы устаревших переходов игнорируются
        self._transition = 0

    def attach_view(self, view: Any):
        self.view = view

    @property
    def is_open(self) -> bool:
        """True в состояниях OPENING и OPEN."""
        return self.state in (ModalState.OPENING, ModalState.OPEN)

    def open(self):
        if self.is_open:
            return
        self._transition += 1
        transition = self._transition
        self.state = ModalState.OPENING
        self._call_view("set_displayed", True)
        logger.debug(f"Модальное окно '{self.name}': открытие.")
        self.scheduler(self.open_delay_ms, lambda: self._finish_open(transition))

    def close(self):
        if not self.is_open:
            return
        self._transition += 1
        transition = self._transition
        self.state = ModalState.CLOSING
        self._call_view("set_revealed", False)
        logger.debug(f"Модальное окно '{self.name}': закрытие.")
        self.scheduler(self.close_delay_ms, lambda: self._finish_close(transition))

    def _finish_open(self, transition: int):
        if transition != self._transition:
            return
        self._call_view("set_revealed", True)
        self.state = ModalState.OPEN

    def _finish_close(self, transition: int):
        if transition != self._transition:
            return
        self._call_view("set_displayed", False)
        self.state = ModalState.CLOSED
        if self.reset_on_close:
            self._call_view("reset")

    def _call_view(self, method_name: str, *args):
        if self.view is None:
            return
        method = getattr(self.view, method_name, None)
        if method is not None:
            method(*args)


class ConfirmationOrchestrator(ModalOrchestrator):
    """Окно подтверждения: сообщение и одноразовое действие."""

    def __init__(self, name: str = "confirm", **kwargs):
        super().__init__(name, **kwargs)
        self.message = ""
        self._confirm_action = OneShotAction()

    @property
    def has_pending_action(self) -> bool:
        return self._confirm_action.is_bound

    def open_confirmation(self, message: str, on_confirm: Callable[[], Any]):
        """Показывает окно с сообщением и привязывает действие вместо прежнего."""
        self.message = message
        self._confirm_action.bind(on_confirm)
        self._call_view("set_message", message)
        self.open()

    def confirm(self) -> bool:
        """Вызывает привязанное действие и закрывает окно."""
        fired = self._confirm_action.fire()
        self.close()
        return fired

    def close(self):
        # Отмена или закрытие отбрасывает непотраченное действие
        self._confirm_action.unbind()
        super().close()
