# sheetdesk/utils/logger.py
"""
Модуль для настройки и предоставления логгера для всего приложения SheetDesk.
"""

import logging
import sys
from pathlib import Path
from typing import Optional

# --- Настройки логгера ---
# Имя корневого логгера приложения
ROOT_LOGGER_NAME = "sheetdesk"

BASE_LOG_LEVEL = logging.DEBUG

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'

# Уровень логирования для файлового хендлера (может отличаться от консольного)
FILE_LOG_LEVEL = logging.DEBUG

# Уровень логирования для консольного хендлера
CONSOLE_LOG_LEVEL = logging.INFO

# Уровень, при котором не пишется ничего
_DISABLED_LEVEL = logging.CRITICAL + 1

# --- Глобальное состояние логирования ---
_LOGGING_ENABLED = True

# _logger_instance хранит экземпляр корневого логгера приложения
_logger_instance: Optional[logging.Logger] = None

# _log_file_path хранит путь к файлу лога, если он используется
_log_file_path: Optional[str] = None


def setup_logger(log_file_path: Optional[str] = None, force_recreate: bool = False) -> logging.Logger:
    """
    Настраивает и возвращает корневой логгер приложения SheetDesk.

    Вызывается один раз при запуске (main.py). Последующие вызовы
    возвращают уже настроенный логгер.

    Args:
        log_file_path (Optional[str]): Путь к файлу лога. Если None, логирование в файл отключено.
        force_recreate (bool): Если True, заново создает хендлеры, даже если логгер уже настроен.
                              Используется в основном для тестов.

    Returns:
        logging.Logger: Настроенный экземпляр корневого логгера приложения.
    """
    global _logger_instance, _log_file_path

    if _logger_instance is not None and not force_recreate:
        return _logger_instance

    logger = logging.getLogger(ROOT_LOGGER_NAME)
    logger.setLevel(BASE_LOG_LEVEL if _LOGGING_ENABLED else _DISABLED_LEVEL)

    # Очистка существующих хендлеров, чтобы не дублировать сообщения
    if logger.hasHandlers():
        logger.handlers.clear()

    formatter = logging.Formatter(LOG_FORMAT)
    _log_file_path = None

    # --- Файловый хендлер ---
    if log_file_path and _LOGGING_ENABLED:
        try:
            Path(log_file_path).parent.mkdir(parents=True, exist_ok=True)
            file_handler = logging.FileHandler(log_file_path, mode='a', encoding='utf-8')
            file_handler.setLevel(FILE_LOG_LEVEL)
            file_handler.setFormatter(formatter)
            logger.addHandler(file_handler)
            _log_file_path = log_file_path
        except OSError as e:
            # Ошибка файла лога не должна прерывать запуск приложения
            print(f"Ошибка при настройке FileHandler для лога '{log_file_path}': {e}", file=sys.stderr)

    # --- Консольный хендлер ---
    if _LOGGING_ENABLED:
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(CONSOLE_LOG_LEVEL)
        console_handler.setFormatter(formatter)
        logger.addHandler(console_handler)

    _logger_instance = logger

    logger.info("Корневой логгер приложения 'sheetdesk' настроен.")
    if _log_file_path:
        logger.info(f"Логирование в файл включено: {_log_file_path}")

    return logger


def get_logger(module_name: str) -> logging.Logger:
    """
    Возвращает логгер для конкретного модуля.

    Логгер наследует настройки корневого логгера "sheetdesk".

    Args:
        module_name (str): Имя модуля, обычно __name__.

    Returns:
        logging.Logger: Логгер для указанного модуля.
    """
    if module_name == ROOT_LOGGER_NAME or module_name.startswith(f"{ROOT_LOGGER_NAME}."):
        return logging.getLogger(module_name)
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{module_name}")


def get_log_file_path() -> Optional[str]:
    """Возвращает путь к файлу лога или None, если логирование в файл отключено."""
    return _log_file_path


def set_logging_enabled(enabled: bool):
    """
    Включает или отключает логирование для всего приложения.

    Args:
        enabled (bool): True для включения, False для отключения.
    """
    global _LOGGING_ENABLED
    _LOGGING_ENABLED = enabled
    logger_instance = logging.getLogger(ROOT_LOGGER_NAME)
    if enabled:
        logger_instance.setLevel(BASE_LOG_LEVEL)
        for handler in logger_instance.handlers:
            if isinstance(handler, logging.FileHandler):
                handler.setLevel(FILE_LOG_LEVEL)
            else:
                handler.setLevel(CONSOLE_LOG_LEVEL)
        logger_instance.info("Логирование включено.")
    else:
        logger_instance.info("Логирование отключено.")
        for handler in logger_instance.handlers:
            handler.setLevel(_DISABLED_LEVEL)
        logger_instance.setLevel(_DISABLED_LEVEL)


def is_logging_enabled() -> bool:
    """Проверяет, включено ли логирование."""
    return _LOGGING_ENABLED
