"""
Exceptions raised by the command grammar engine.

Construction errors (missing handler, missing injector, missing preferred
translation) are collected rather than raised: the tree is still built and
the errors are reported by the engine.
"""

from typing import List, Optional

from core.models import DEFAULT_LANGUAGE
from core import i18n


class GrammarError(Exception):
    """Base exception for grammar engine errors."""
    pass


class ConfigError(GrammarError):
    """Exception for malformed application configuration."""
    pass


class RegistryFrozenError(GrammarError):
    """Raised when a handler or injector is registered after the tree is built."""

    def __init__(self, kind: str, name: str):
        self.kind = kind
        self.name = name
        super().__init__(
            f"cannot register {kind} [{name}]: registry is frozen after tree construction"
        )


class ConstructionError(GrammarError):
    """Non-fatal error found while building the grammar tree."""

    message_key = ""

    def __init__(self, command_path: str, languages: Optional[List[str]] = None):
        self.command_path = command_path
        self.display_languages = list(languages or [DEFAULT_LANGUAGE])
        super().__init__(self.render())

    def template_args(self):
        return {"command": self.command_path}

    def render(self, *languages: str) -> str:
        """Localized message, in the given languages or the build languages."""
        _, description = i18n.translate(
            self.message_key,
            list(languages) or self.display_languages,
            self.template_args()
        )
        return description

    def __str__(self) -> str:
        return self.render()


class HandlerNotFoundError(ConstructionError):
    message_key = i18n.ERR_HANDLER_NOT_FOUND

    def __init__(self, command_path: str, handler_name: str,
                 languages: Optional[List[str]] = None):
        self.handler_name = handler_name
        super().__init__(command_path, languages)

    def template_args(self):
        return {"command": self.command_path, "handler": self.handler_name}


class InjectorNotFoundError(ConstructionError):
    message_key = i18n.ERR_INJECTOR_NOT_FOUND

    def __init__(self, command_path: str, injector_name: str,
                 languages: Optional[List[str]] = None):
        self.injector_name = injector_name
        super().__init__(command_path, languages)

    def template_args(self):
        return {"command": self.command_path, "injector": self.injector_name}


class PreferredTranslationMissingError(ConstructionError):
    message_key = i18n.ERR_PREFERRED_TRANSLATION_NOT_CONFIGURED

    def __init__(self, command_path: str, language: str,
                 languages: Optional[List[str]] = None):
        self.language = language
        super().__init__(command_path, languages)

    def template_args(self):
        return {"command": self.command_path, "language": self.language}
