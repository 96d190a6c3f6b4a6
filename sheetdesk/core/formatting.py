# sheetdesk/core/formatting.py
"""
Правила отображения значений ячеек и подготовки значений для полей формы.
"""

import re
from datetime import date, datetime
from typing import Any, Iterable, Optional

from sheetdesk.utils.logger import get_logger

logger = get_logger(__name__)

# Значение, начинающееся так, считается датой-временем ISO 8601
ISO_DATETIME_PREFIX = re.compile(r"^\d{4}-\d{2}-\d{2}T")

DEFAULT_DATE_MARKERS = ("fecha", "date", "дата")

# Формат значения поля даты в форме
DATE_INPUT_FORMAT = "%Y-%m-%d"

# Форматы, которые принимаются при заполнении поля даты из существующей записи
_EXTRA_DATE_FORMATS = ("%Y/%m/%d", "%d.%m.%Y", "%d/%m/%Y")


def parse_iso_datetime(value: str) -> Optional[datetime]:
    """
    Разбирает строку ISO 8601. Суффикс "Z" понимается как UTC.

    Returns:
        Optional[datetime]: Результат или None, если строка не разбирается.
    """
    text = value.strip()
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    try:
        return datetime.fromisoformat(text)
    except ValueError:
        return None


def format_cell(value: Any, date_format: str = "%x") -> str:
    """
    Возвращает текст ячейки для отображения в таблице.

    Строки вида YYYY-MM-DDT... показываются как дата в локальном часовом поясе
    и формате локали. Остальные значения - как есть. Исходное значение не меняется.
    """
    if value is None:
        return ""
    if isinstance(value, str):
        if ISO_DATETIME_PREFIX.match(value):
            parsed = parse_iso_datetime(value)
            if parsed is None:
                logger.debug(f"Значение похоже на дату, но не разбирается: {value!r}")
                return value
            return parsed.astimezone().strftime(date_format)
        return value
    return str(value)


def is_date_header(header: str, markers: Iterable[str] = DEFAULT_DATE_MARKERS) -> bool:
    """True, если название колонки содержит один из маркеров даты."""
    lowered = str(header).lower()
    return any(marker.lower() in lowered for marker in markers)


def _parse_calendar_date(text: str) -> Optional[date]:
    parsed = parse_iso_datetime(text)
    if parsed is not None:
        if parsed.tzinfo is not None:
            # Дата-время с поясом приводится к локальной календарной дате
            parsed = parsed.astimezone()
        return parsed.date()
    for fmt in _EXTRA_DATE_FORMATS:
        try:
            return datetime.strptime(text, fmt).date()
        except ValueError:
            continue
    return None


def to_date_input_value(value: Any) -> str:
    """
    Преобразует существующее значение в формат поля даты (YYYY-MM-DD).

    Время и часовой пояс отбрасываются. Если значение не разбирается,
    пишется предупреждение и возвращается исходное значение. Никогда не бросает.
    """
    if value is None or value == "":
        return ""
    text = value if isinstance(value, str) else str(value)
    parsed = _parse_calendar_date(text.strip())
    if parsed is None:
        logger.warning(f"Не удалось разобрать дату: {value!r}")
        return text
    return parsed.strftime(DATE_INPUT_FORMAT)


def to_text_input_value(value: Any) -> str:
    """Значение текстового поля: None - пустая строка, остальное - str()."""
    if value is None:
        return ""
    return value if isinstance(value, str) else str(value)
