# sheetdesk/utils/app_paths.py
"""
Модуль для определения путей к системным каталогам приложения.
Используется для поиска файла настроек и файла лога по умолчанию.
"""
import os
import platform
from pathlib import Path

from sheetdesk.utils.logger import get_logger

logger = get_logger(__name__)

APP_NAME = "SheetDesk"


def get_app_data_directory(app_name: str = APP_NAME, create: bool = True) -> Path:
    """
    Определяет стандартный путь к каталогу данных приложения в зависимости от ОС.

    Args:
        app_name (str): Имя приложения, используется для создания подкаталога.
        create (bool): Создавать ли каталог, если он не существует.

    Returns:
        Path: Путь к каталогу данных приложения.
    """
    system = platform.system()

    if system == "Windows":
        # Roaming, чтобы настройки следовали за пользователем
        app_dir = Path.home() / "AppData" / "Roaming" / app_name

    elif system == "Linux":
        # XDG Base Directory: XDG_CONFIG_HOME или ~/.config
        xdg_config_home = os.environ.get("XDG_CONFIG_HOME")
        base_path = Path(xdg_config_home) if xdg_config_home else Path.home() / ".config"
        app_dir = base_path / app_name.lower()

    elif system == "Darwin":  # macOS
        app_dir = Path.home() / "Library" / "Application Support" / app_name

    else:
        logger.warning(f"Неизвестная ОС ({system}), используем fallback путь.")
        app_dir = Path.home() / f".{app_name.lower()}"

    if create:
        try:
            app_dir.mkdir(parents=True, exist_ok=True)
            logger.debug(f"Каталог данных приложения готов: {app_dir}")
        except OSError as e:
            # Путь возвращается в любом случае, чтение отсутствующего файла обработает вызывающий код
            logger.error(f"Не удалось создать каталог данных приложения '{app_dir}': {e}")

    return app_dir


def get_default_config_path() -> Path:
    """Возвращает путь к config.yaml в каталоге данных приложения."""
    return get_app_data_directory(create=False) / "config.yaml"


def get_default_log_path() -> Path:
    """Возвращает путь к файлу лога по умолчанию."""
    return get_app_data_directory() / "logs" / "sheetdesk.log"
