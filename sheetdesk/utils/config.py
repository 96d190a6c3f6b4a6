# sheetdesk/utils/config.py
"""
Конфигурация приложения SheetDesk.

Порядок применения (последний побеждает): значения по умолчанию, YAML-файл,
переменная окружения SHEETDESK_ENDPOINT, аргументы командной строки.
"""

import os
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional

import yaml
from pydantic import BaseModel, Field
from pydantic import ValidationError as PydanticValidationError

from sheetdesk.exceptions import ConfigError
from sheetdesk.utils.app_paths import get_default_config_path
from sheetdesk.utils.logger import get_logger

logger = get_logger(__name__)

ENDPOINT_ENV_VAR = "SHEETDESK_ENDPOINT"

# Значения-заглушки, которые означают "адрес шлюза ещё не настроен"
PLACEHOLDER_ENDPOINTS = ("URL_DE_TU_WEB_APP_AQUI", "YOUR_WEB_APP_URL_HERE")


class AppConfig(BaseModel):
    """Настройки приложения."""

    endpoint: str = ""
    timeout_seconds: float = 30.0
    # Подстроки в названии колонки (в нижнем регистре), при которых поле формы - дата
    date_markers: List[str] = Field(default_factory=lambda: ["fecha", "date", "дата"])
    # Задержка перед запуском анимации появления модального окна
    open_delay_ms: int = 10
    # Должна быть не меньше длительности анимации исчезновения
    close_delay_ms: int = 300
    toast_duration_ms: int = 4000
    log_file: Optional[str] = None

    @property
    def is_endpoint_configured(self) -> bool:
        """True, если адрес шлюза задан и не является заглушкой."""
        endpoint = self.endpoint.strip()
        return bool(endpoint) and endpoint not in PLACEHOLDER_ENDPOINTS

    def require_endpoint(self) -> str:
        """Возвращает адрес шлюза или бросает ConfigError, если он не настроен."""
        if not self.is_endpoint_configured:
            raise ConfigError(
                "Адрес шлюза не настроен. Укажите endpoint в config.yaml, "
                f"переменной окружения {ENDPOINT_ENV_VAR} или параметре --endpoint."
            )
        return self.endpoint.strip()


def _read_yaml(config_path: Path) -> Dict[str, Any]:
    """Читает YAML-файл настроек. Пустой файл - пустой словарь."""
    try:
        with open(config_path, 'r', encoding='utf-8') as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(f"Ошибка разбора YAML-файла настроек {config_path}: {e}") from e
    except OSError as e:
        raise ConfigError(f"Не удалось прочитать файл настроек {config_path}: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"Некорректный формат файла настроек {config_path}: ожидается словарь.")
    return data


def load_config(
    config_path: Optional[str] = None,
    overrides: Optional[Mapping[str, Any]] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> AppConfig:
    """
    Собирает конфигурацию приложения.

    Args:
        config_path (Optional[str]): Явный путь к YAML-файлу. Если указан и не существует - ConfigError.
            Если None, используется config.yaml в каталоге данных приложения (если он есть).
        overrides (Optional[Mapping[str, Any]]): Значения из командной строки. None-значения игнорируются.
        environ (Optional[Mapping[str, str]]): Окружение (по умолчанию os.environ).

    Returns:
        AppConfig: Итоговая конфигурация.
    """
    environ = os.environ if environ is None else environ
    values: Dict[str, Any] = {}

    if config_path:
        path = Path(config_path)
        if not path.exists():
            raise ConfigError(f"Файл настроек не найден: {path}")
        values.update(_read_yaml(path))
        logger.info(f"Настройки загружены из {path}")
    else:
        default_path = get_default_config_path()
        if default_path.exists():
            values.update(_read_yaml(default_path))
            logger.info(f"Настройки загружены из {default_path}")

    env_endpoint = environ.get(ENDPOINT_ENV_VAR)
    if env_endpoint:
        values["endpoint"] = env_endpoint
        logger.debug(f"Адрес шлюза взят из переменной окружения {ENDPOINT_ENV_VAR}")

    if overrides:
        values.update({key: value for key, value in overrides.items() if value is not None})

    try:
        return AppConfig(**values)
    except PydanticValidationError as e:
        raise ConfigError(f"Некорректные настройки: {e}") from e
