# sheetdesk/constructor/gui_app.py
"""
Точка входа для графического интерфейса SheetDesk.
"""

import locale
import sys

from PySide6.QtWidgets import QApplication

from sheetdesk import __version__
from sheetdesk.core.app_controller import create_app_controller
from sheetdesk.utils.config import AppConfig
from sheetdesk.utils.logger import get_logger

from .main_window import MainWindow, qt_scheduler
from .widgets.gateway_worker import QtTaskRunner

logger = get_logger(__name__)


def main(config: AppConfig) -> int:
    """
    Основная функция запуска GUI.

    Args:
        config (AppConfig): Загруженные настройки приложения.

    Returns:
        int: Код завершения приложения.
    """
    logger.info("Запуск графического интерфейса SheetDesk...")

    # Даты в таблице форматируются по локали пользователя
    try:
        locale.setlocale(locale.LC_TIME, "")
    except locale.Error as e:
        logger.warning(f"Не удалось установить локаль: {e}")

    # 1. Создаём QApplication
    app = QApplication.instance() or QApplication(sys.argv)
    app.setApplicationName("SheetDesk")
    app.setApplicationVersion(__version__)

    # 2. Создаём AppController с исполнителем задач на QThread
    task_runner = QtTaskRunner()
    app_controller = create_app_controller(config, runner=task_runner, scheduler=qt_scheduler)

    # 3. Создаём главное окно и загружаем листы
    window = MainWindow(app_controller, task_runner)
    window.show()
    app_controller.start()

    try:
        return_code = app.exec()
    finally:
        app_controller.shutdown()
    logger.info(f"Приложение завершено с кодом: {return_code}")
    return return_code
