"""
Core module for the command grammar engine.
Tree matching, suggestion generation, dispatch and the handler registry.
"""

__version__ = "1.0.0"
__license__ = "MIT"

from .models import (
    # Enums
    NodeType,

    # Data classes
    TranslatedItem,
    TranslationSet,
    Suggestion,
    Input,
    Params,
)

from .errors import (
    GrammarError,
    ConfigError,
    ConstructionError,
    HandlerNotFoundError,
    InjectorNotFoundError,
    PreferredTranslationMissingError,
    RegistryFrozenError,
)

from .registry import (
    Registry,
    Handler,
    Injector,
)

from .handlers import (
    FUNCTION_NAME_DEFAULT_EXIT,
    FUNCTION_NAME_DEFAULT_VERSION,
    default_handler,
    no_command_handler,
    exit_handler,
    static_injector,
)

from .grammar import (
    GrammarContext,
    GrammarNode,
    GrammarBuilder,
)

from .engine import (
    Engine,
)

__all__ = [
    # Version info
    '__version__',
    '__license__',

    # Models
    'NodeType',
    'TranslatedItem',
    'TranslationSet',
    'Suggestion',
    'Input',
    'Params',

    # Errors
    'GrammarError',
    'ConfigError',
    'ConstructionError',
    'HandlerNotFoundError',
    'InjectorNotFoundError',
    'PreferredTranslationMissingError',
    'RegistryFrozenError',

    # Core components
    'Registry',
    'Handler',
    'Injector',
    'GrammarContext',
    'GrammarNode',
    'GrammarBuilder',
    'Engine',

    # Built-ins
    'FUNCTION_NAME_DEFAULT_EXIT',
    'FUNCTION_NAME_DEFAULT_VERSION',
    'default_handler',
    'no_command_handler',
    'exit_handler',
    'static_injector',
]
