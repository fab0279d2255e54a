"""
Handler and injector registry.

Application code fills a Registry before the engine builds its grammar
tree. Building the tree freezes the registry; any later registration
raises RegistryFrozenError instead of silently diverging from the tree.
"""

import logging
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple, Union

from core.errors import RegistryFrozenError
from core.models import Input, TranslationSet

logger = logging.getLogger(__name__)

Handler = Callable[[Input], Any]
"""Terminal action bound to a grammar node."""

InjectorItem = Union[TranslationSet, Tuple[str, str]]
Injector = Callable[[Input], Sequence[InjectorItem]]
"""Produces runtime suggestions for an option node."""


class Registry:
    """
    Name -> callable lookup tables for handlers and injectors.
    """

    def __init__(self,
                 handlers: Optional[Dict[str, Handler]] = None,
                 injectors: Optional[Dict[str, Injector]] = None):
        self._handlers: Dict[str, Handler] = {}
        self._injectors: Dict[str, Injector] = {}
        self._frozen = False

        for name, handler in (handlers or {}).items():
            self.register_handler(name, handler)
        for name, injector in (injectors or {}).items():
            self.register_injector(name, injector)

    @property
    def frozen(self) -> bool:
        return self._frozen

    def freeze(self) -> None:
        """Forbid further registrations."""
        if not self._frozen:
            logger.debug(
                f"Registry frozen with {len(self._handlers)} handlers "
                f"and {len(self._injectors)} injectors"
            )
        self._frozen = True

    def register_handler(self, name: str, handler: Handler) -> None:
        """
        Register a handler under a configuration name.

        Args:
            name: Name referenced by the `handler` key of a command
            handler: Callable receiving an Input

        Raises:
            RegistryFrozenError: If the grammar tree was already built
        """
        if self._frozen:
            raise RegistryFrozenError("handler", name)
        if not callable(handler):
            raise TypeError(f"handler [{name}] is not callable")
        if name in self._handlers:
            logger.debug(f"Handler [{name}] replaced")
        self._handlers[name] = handler

    def register_injector(self, name: str, injector: Injector) -> None:
        """
        Register an injector under a configuration name.

        Args:
            name: Name referenced by the `examples` key of an option
            injector: Callable receiving an Input and returning suggestions

        Raises:
            RegistryFrozenError: If the grammar tree was already built
        """
        if self._frozen:
            raise RegistryFrozenError("injector", name)
        if not callable(injector):
            raise TypeError(f"injector [{name}] is not callable")
        if name in self._injectors:
            logger.debug(f"Injector [{name}] replaced")
        self._injectors[name] = injector

    def get_handler(self, name: str) -> Optional[Handler]:
        return self._handlers.get(name)

    def get_injector(self, name: str) -> Optional[Injector]:
        return self._injectors.get(name)

    def has_handler(self, name: str) -> bool:
        return name in self._handlers

    def list_handlers(self) -> List[str]:
        return list(self._handlers)

    def list_injectors(self) -> List[str]:
        return list(self._injectors)
