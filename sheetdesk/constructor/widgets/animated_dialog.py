# sheetdesk/constructor/widgets/animated_dialog.py
"""
Базовый диалог с анимацией прозрачности.
Реализует представление для ModalOrchestrator.
"""

from PySide6.QtCore import QPropertyAnimation, Qt, Signal
from PySide6.QtGui import QCloseEvent
from PySide6.QtWidgets import QDialog

from sheetdesk.core.modal_orchestrator import DEFAULT_CLOSE_DELAY_MS
from sheetdesk.utils.logger import get_logger

logger = get_logger(__name__)


class AnimatedDialog(QDialog):
    """
    Диалог, которым управляет ModalOrchestrator.

    set_displayed() показывает/скрывает окно, set_revealed() запускает
    анимацию прозрачности. Закрытие крестиком или Esc не скрывает окно
    напрямую, а испускает cancel_requested: решение принимает контроллер.
    """
    cancel_requested = Signal()

    def __init__(self, transition_ms: int = DEFAULT_CLOSE_DELAY_MS, parent=None):
        """
        Args:
            transition_ms (int): Длительность анимации прозрачности.
            parent: Родительский объект Qt.
        """
        super().__init__(parent)
        self.setWindowModality(Qt.WindowModality.WindowModal)
        self._animation = QPropertyAnimation(self, b"windowOpacity", self)
        self._animation.setDuration(transition_ms)

    # --- Представление для ModalOrchestrator ---

    def set_displayed(self, displayed: bool):
        if displayed:
            self.setWindowOpacity(0.0)
            self.show()
        else:
            self._animation.stop()
            self.hide()

    def set_revealed(self, revealed: bool):
        self._animation.stop()
        self._animation.setStartValue(self.windowOpacity())
        self._animation.setEndValue(1.0 if revealed else 0.0)
        self._animation.start()

    # --- Закрытие пользователем ---

    def reject(self):
        self.cancel_requested.emit()

    def closeEvent(self, event: QCloseEvent):
        event.ignore()
        self.cancel_requested.emit()
