"""
Engine: builds the grammar tree once and serves suggestion queries and
line execution for a REPL front-end.
"""

import logging
import os
from typing import TYPE_CHECKING, Any, Callable, Dict, List, Mapping, Optional, Tuple

from core.errors import ConstructionError
from core.grammar import GrammarBuilder, GrammarContext, GrammarNode
from core.handlers import BUILTIN_HANDLERS, FUNCTION_NAME_DEFAULT_VERSION, exit_handler
from core.models import Input, Suggestion
from core.registry import Handler, Registry
from core.i18n import resolve_languages
from utils.tokenizer import default_tokenizer

if TYPE_CHECKING:
    from config.app_config import ApplicationConfig

logger = logging.getLogger(__name__)

LineReader = Callable[[str], str]


class Engine:
    """
    Command grammar engine.

    Handlers and injectors must be registered in the registry before the
    engine is created; construction freezes the registry.
    """

    def __init__(self,
                 config: "ApplicationConfig",
                 registry: Optional[Registry] = None,
                 environ: Optional[Mapping[str, str]] = None):
        """
        Initialize the engine.

        Args:
            config: Application configuration with the command tree
            registry: Handlers and injectors referenced by the configuration
            environ: Environment used for language detection (os.environ by default)
        """
        self.config = config
        self.registry = registry if registry is not None else Registry()
        self._languages = resolve_languages(
            config.preferred_language,
            os.environ if environ is None else environ,
            config.language_mapping
        )

        builder = GrammarBuilder(
            self.registry, self._languages, config.preferred_language, self._builtins()
        )
        self.root: GrammarNode = builder.build_root(config.commands)
        self.errors: List[ConstructionError] = builder.errors
        self.registry.freeze()

        for error in self.errors:
            logger.warning(f"Grammar construction: {error}")

        if config.debug and self.errors:
            print("Errors/Warnings during initialization:")
            for error in self.errors:
                print(error)

        logger.debug(
            f"Engine initialized with {len(self.root.children)} top-level commands, "
            f"languages={self._languages}"
        )

    def _builtins(self) -> Dict[str, Handler]:
        """
        Built-in handlers of this engine. They are looked up after the
        registry and never stored in it, so a shared registry keeps no
        reference to a particular engine.
        """
        builtins = dict(BUILTIN_HANDLERS)
        builtins[FUNCTION_NAME_DEFAULT_VERSION] = self.version
        return builtins

    @property
    def prefix(self) -> str:
        return self.config.prefix

    def languages(self) -> List[str]:
        return list(self._languages)

    def new_context(self, text: str) -> GrammarContext:
        return GrammarContext(text, self._languages, not self.config.case_sensitive)

    def matcher(self, text: str, cursor: Optional[int] = None) -> Tuple[List[Suggestion], int, int]:
        """
        Suggestions for the text before the cursor.

        Args:
            text: Current line contents
            cursor: Cursor position, end of line by default

        Returns:
            (suggestions, start, end) where [start, end) is the word to replace
        """
        if cursor is None:
            cursor = len(text)
        document = text[:cursor]
        suggestions = self.root.index_suggestions(self.new_context(document))
        start = cursor - len(default_tokenizer.word_before_cursor(document))
        return suggestions, start, cursor

    def execute_line(self, text: str) -> Any:
        """Run one line through the grammar and dispatch it."""
        return self.root.execute(self.new_context(text))

    def execute(self, read_line: Optional[LineReader] = None) -> None:
        """
        REPL loop. Returns only through a handler that exits the process.

        Args:
            read_line: Front-end callable taking the prompt and returning a line;
                       a readline based shell adapter is used by default
        """
        if read_line is None:
            from adapters.shell_adapter import ShellAdapter
            read_line = ShellAdapter(self).read_line

        while True:
            try:
                line = read_line(self.prefix)
            except KeyboardInterrupt:
                print()
                continue
            except EOFError:
                print()
                exit_handler(Input(full_text="", languages=self.languages()))
                return

            try:
                self.execute_line(line)
            except Exception as e:
                logger.error(f"Handler failed for [{line}]: {e}")
                print(f"Error: {e}")

    def version(self, input: Input) -> None:
        """Built-in version handler."""
        print(self.config.copyright)
        print(self.config.version, "released at", self.config.released_at)
