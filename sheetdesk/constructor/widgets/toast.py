# sheetdesk/constructor/widgets/toast.py
"""
Всплывающие уведомления (toast) в правом нижнем углу окна.
"""

from typing import List

from PySide6.QtCore import QPoint, Qt, QTimer
from PySide6.QtWidgets import QLabel, QWidget

TOAST_STYLES = {
    "success": "background-color: #2e7d32; color: white;",
    "error": "background-color: #c62828; color: white;",
}
TOAST_MARGIN = 16
TOAST_SPACING = 8


class Toast(QLabel):
    """Одно уведомление; удаляет себя по истечении таймера."""

    def __init__(self, message: str, kind: str, parent: QWidget):
        super().__init__(message, parent)
        self.kind = kind
        self.setWordWrap(True)
        self.setMaximumWidth(360)
        self.setAttribute(Qt.WidgetAttribute.WA_TransparentForMouseEvents)
        style = TOAST_STYLES.get(kind, TOAST_STYLES["success"])
        self.setStyleSheet(f"QLabel {{ {style} border-radius: 6px; padding: 8px 12px; }}")
        self.adjustSize()


class ToastManager:
    """
    Показывает уведомления поверх окна-владельца.

    Каждое уведомление живёт duration_ms миллисекунд, одновременно
    может быть видно несколько уведомлений.
    """

    def __init__(self, host: QWidget, duration_ms: int = 4000):
        self.host = host
        self.duration_ms = duration_ms
        self._toasts: List[Toast] = []

    @property
    def visible_messages(self) -> List[str]:
        return [toast.text() for toast in self._toasts]

    def show_message(self, message: str, kind: str = "success"):
        toast = Toast(message, kind, self.host)
        self._toasts.append(toast)
        self.reposition()
        toast.show()
        toast.raise_()
        QTimer.singleShot(self.duration_ms, lambda: self._dismiss(toast))

    def _dismiss(self, toast: Toast):
        if toast in self._toasts:
            self._toasts.remove(toast)
            toast.hide()
            toast.deleteLater()
            self.reposition()

    def reposition(self):
        """Раскладывает уведомления снизу вверх, новые ниже."""
        y = self.host.height() - TOAST_MARGIN
        for toast in reversed(self._toasts):
            y -= toast.height()
            toast.move(QPoint(self.host.width() - toast.width() - TOAST_MARGIN, y))
            y -= TOAST_SPACING
