"""
Встроенные обработчики и инжекторы.
"""

import sys
from typing import Sequence

from core.models import Input
from core.registry import Injector, InjectorItem
from core import i18n

FUNCTION_NAME_DEFAULT_VERSION = "AcDefaultVersionFn"
FUNCTION_NAME_DEFAULT_EXIT = "AcDefaultExitFn"


def default_handler(input: Input) -> None:
    """Узел найден, но обработчик не привязан"""
    _, description = i18n.translate(i18n.NO_IMPLEMENT, input.languages)
    print(description)


def no_command_handler(input: Input) -> None:
    """Строка не соответствует ни одной команде"""
    _, description = i18n.translate(i18n.NO_COMMAND, input.languages)
    print(f"{description}: {input.full_text}")


def exit_handler(input: Input) -> None:
    """Завершение процесса с кодом 0"""
    sys.exit(0)


def static_injector(items: Sequence[InjectorItem]) -> Injector:
    """Инжектор, всегда возвращающий один и тот же список"""
    statics = list(items)

    def inject(input: Input) -> Sequence[InjectorItem]:
        return statics

    return inject


BUILTIN_HANDLERS = {
    FUNCTION_NAME_DEFAULT_EXIT: exit_handler,
}
