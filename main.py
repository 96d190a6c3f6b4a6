#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
CLI точка входа в SheetDesk.
По умолчанию запускает графический интерфейс; режимы --list-sheets и --dump
работают без GUI через тот же AppController.
"""

import argparse
import sys
from typing import List, Optional

from sheetdesk.core.app_controller import AppController, AppControllerListener, create_app_controller
from sheetdesk.core.task_runner import SyncTaskRunner
from sheetdesk.exceptions import ConfigError
from sheetdesk.utils.config import AppConfig, load_config
from sheetdesk.utils.logger import get_logger, setup_logger

# Получаем логгер для этого модуля
logger = get_logger(__name__)


class ConsoleListener(AppControllerListener):
    """Выводит уведомления контроллера в stderr."""

    def notify(self, message: str, kind: str):
        print(f"[{kind}] {message}", file=sys.stderr)


def create_headless_controller(config: AppConfig) -> AppController:
    """AppController с синхронным исполнителем задач, без GUI."""
    return create_app_controller(config, runner=SyncTaskRunner(), listener=ConsoleListener())


def list_sheets(config: AppConfig) -> int:
    """Печатает названия листов, по одному в строке."""
    app_controller = create_headless_controller(config)
    try:
        result = app_controller.gateway.get_sheet_names()
        if not result.ok:
            return 1
        for name in result.data:
            print(name)
        return 0
    finally:
        app_controller.shutdown()


def dump_sheet(config: AppConfig, sheet_name: str) -> int:
    """Печатает таблицу листа, значения разделены табуляцией."""
    app_controller = create_headless_controller(config)
    try:
        if not app_controller.table.load(sheet_name):
            return 1
        table = app_controller.table.render()
        # Колонка действий в консоли не нужна
        print("\t".join(table.columns[:table.data_column_count]))
        for row in table.rows:
            print("\t".join(row.cells))
        return 0
    finally:
        app_controller.shutdown()


def start_gui(config: AppConfig) -> int:
    """Запуск графического интерфейса."""
    try:
        from sheetdesk.constructor.gui_app import main as gui_main
    except ImportError as e:
        logger.error(f"Не удалось импортировать GUI: {e}")
        print(f"Ошибка: Не удалось импортировать GUI (установлен ли PySide6?): {e}", file=sys.stderr)
        return 1
    return gui_main(config)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="SheetDesk - настольный клиент для редактирования данных таблиц через удалённый шлюз",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Примеры использования:
  python main.py --endpoint https://script.google.com/macros/s/.../exec
  python main.py --config ./config.yaml --list-sheets
  python main.py --dump "Клиенты"
        """
    )

    # Режимы работы
    mode_group = parser.add_mutually_exclusive_group()

    mode_group.add_argument(
        '--gui',
        action='store_true',
        help='Запуск графического интерфейса (режим по умолчанию)'
    )

    mode_group.add_argument(
        '--list-sheets',
        action='store_true',
        help='Вывести список листов и завершить работу'
    )

    mode_group.add_argument(
        '--dump',
        metavar='SHEET',
        help='Вывести содержимое листа и завершить работу'
    )

    # Настройки
    parser.add_argument(
        '--endpoint',
        metavar='URL',
        help='Адрес удалённого шлюза'
    )

    parser.add_argument(
        '--config',
        metavar='FILE',
        help='Путь к YAML-файлу настроек'
    )

    parser.add_argument(
        '--log-file',
        metavar='FILE',
        help='Путь к файлу лога'
    )

    parser.add_argument(
        '--timeout',
        metavar='SECONDS',
        type=float,
        help='Таймаут запроса к шлюзу в секундах'
    )

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Главная функция точки входа. Возвращает код завершения."""
    args = build_parser().parse_args(argv)

    setup_logger(args.log_file)

    try:
        config = load_config(
            args.config,
            overrides={
                "endpoint": args.endpoint,
                "timeout_seconds": args.timeout,
                "log_file": args.log_file,
            },
        )
        if config.log_file and config.log_file != args.log_file:
            setup_logger(config.log_file, force_recreate=True)

        if args.list_sheets:
            config.require_endpoint()
            return list_sheets(config)
        if args.dump:
            config.require_endpoint()
            return dump_sheet(config, args.dump)
        return start_gui(config)

    except ConfigError as e:
        logger.error(str(e))
        print(f"Ошибка конфигурации: {e}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        logger.info("Получен сигнал завершения (Ctrl+C)")
        return 130


if __name__ == "__main__":
    sys.exit(main())
