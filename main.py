# main.py
"""
Главный CLI модуль: загружает дерево команд из конфигурации и запускает
интерактивный режим или пакетную обработку строк.
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from config.app_config import ApplicationConfig
from core.engine import Engine
from core.errors import GrammarError
from core.handlers import static_injector
from core.models import Input, TranslationSet
from core.registry import Registry

DEFAULT_CONFIG = Path(__file__).parent / "config" / "default.yaml"


def setup_logging(verbose: bool = False) -> logging.Logger:
    """Настройка логирования"""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=[logging.StreamHandler(sys.stderr)]
    )
    return logging.getLogger(__name__)


def build_registry(config: ApplicationConfig) -> Registry:
    """Обработчики демонстрационной конфигурации"""
    registry = Registry()

    def show_help(input: Input) -> None:
        for name, command in config.commands.items():
            description = ""
            if command.descriptions:
                items = TranslationSet(d.to_item() for d in command.descriptions)
                _, description = items.get_translation(*input.languages)
            print(f"  {name:<12} {description}")

    def echo(input: Input) -> None:
        for key, value in input.params.items():
            print(f"{key} = {value}")

    registry.register_handler("HelpFn", show_help)
    registry.register_handler("EchoFn", echo)
    registry.register_injector("GreetingNames", static_injector([
        TranslationSet.of("world", "the whole world"),
        TranslationSet.of("me", "yourself"),
    ]))
    return registry


def run_batch(engine: Engine, lines: List[str]) -> None:
    """Выполняет строки по очереди"""
    for line in lines:
        print(f"{engine.prefix}{line}")
        engine.execute_line(line)


def run_complete(engine: Engine, text: str) -> None:
    """Печатает подсказки для строки"""
    suggestions, start, end = engine.matcher(text)
    print(f"replace [{start}:{end}]")
    for suggestion in suggestions:
        print(f"  {suggestion.text}\t{suggestion.description}")


def main(argv: Optional[List[str]] = None) -> int:
    """Главная функция"""
    parser = argparse.ArgumentParser(
        description='Интерактивная командная строка на основе дерева грамматики',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Примеры использования:
  %(prog)s                              # Интерактивный режим
  %(prog)s --config app.yaml            # Своё дерево команд
  %(prog)s --batch "help" "version"     # Пакетная обработка
  %(prog)s --complete "gr"              # Подсказки для строки
        """
    )

    parser.add_argument(
        '--config',
        help='Путь к YAML/JSON файлу конфигурации',
        type=str,
        default=str(DEFAULT_CONFIG)
    )

    parser.add_argument(
        '--batch',
        help='Пакетная обработка строк',
        nargs='+',
        type=str,
        default=None
    )

    parser.add_argument(
        '--complete',
        help='Показать подсказки для строки',
        type=str,
        default=None
    )

    parser.add_argument(
        '--verbose',
        help='Подробный вывод',
        action='store_true'
    )

    args = parser.parse_args(argv)
    logger = setup_logging(args.verbose)

    try:
        config = ApplicationConfig.load(args.config)
        engine = Engine(config, build_registry(config))
    except (GrammarError, OSError) as e:
        logger.error(f"Failed to initialize: {e}")
        print(f"\nОшибка: {e}", file=sys.stderr)
        return 1

    if args.complete is not None:
        run_complete(engine, args.complete)
    elif args.batch:
        run_batch(engine, args.batch)
    else:
        engine.execute()

    return 0


if __name__ == "__main__":
    sys.exit(main())
