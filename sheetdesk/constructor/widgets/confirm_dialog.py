# sheetdesk/constructor/widgets/confirm_dialog.py
"""
Диалог подтверждения (Да/Отмена).
"""

from PySide6.QtCore import Signal
from PySide6.QtWidgets import QDialogButtonBox, QLabel, QVBoxLayout

from sheetdesk.core.modal_orchestrator import DEFAULT_CLOSE_DELAY_MS

from .animated_dialog import AnimatedDialog


class ConfirmDialog(AnimatedDialog):
    """
    Окно подтверждения. Действие привязывает ConfirmationOrchestrator,
    диалог только сообщает о нажатии OK через confirmed.
    """
    confirmed = Signal()

    def __init__(self, transition_ms: int = DEFAULT_CLOSE_DELAY_MS, parent=None):
        super().__init__(transition_ms, parent)
        self.setWindowTitle("Подтверждение")

        layout = QVBoxLayout(self)
        self.message_label = QLabel(self)
        self.message_label.setWordWrap(True)
        layout.addWidget(self.message_label)

        self.button_box = QDialogButtonBox(
            QDialogButtonBox.StandardButton.Ok | QDialogButtonBox.StandardButton.Cancel,
            self
        )
        self.button_box.button(QDialogButtonBox.StandardButton.Ok).setText("Удалить")
        self.button_box.button(QDialogButtonBox.StandardButton.Cancel).setText("Отмена")
        layout.addWidget(self.button_box)

        self.button_box.accepted.connect(self.confirmed)
        self.button_box.rejected.connect(self.cancel_requested)

    def set_message(self, message: str):
        self.message_label.setText(message)
