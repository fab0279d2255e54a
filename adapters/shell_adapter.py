"""
Shell adapter for the command grammar engine.
Reads lines with readline and completes them through Engine.matcher.
"""

import atexit
import logging
import os
import readline  # For input history and completion
from typing import Any, Dict, List, Optional

from core.models import Suggestion

logger = logging.getLogger(__name__)


class ShellAdapter:
    """
    Line-editing front-end for an Engine.
    """

    def __init__(self, engine: Any, config: Optional[Dict[str, Any]] = None):
        """
        Initialize shell adapter.

        Args:
            engine: Engine providing matcher() and prefix
            config: Adapter configuration
        """
        default_config = {
            "enable_tab_completion": True,
            "history_file": "~/.grammar_cli_history",
            "history_length": 1000,
            "show_descriptions": True,
        }
        self.config = default_config.copy()
        if config:
            self.config.update(config)

        self.engine = engine
        self._completion_cache: List[str] = []
        self._last_suggestions: List[Suggestion] = []

        self._init_readline()

    def _init_readline(self):
        """Initialize readline for tab completion and history."""
        try:
            readline.parse_and_bind("tab: complete")
            # Only the space separates words in the grammar
            readline.set_completer_delims(" ")
            readline.set_completer(self._readline_completer)
            if self.config["show_descriptions"]:
                readline.set_completion_display_matches_hook(self._display_matches)

            readline.set_history_length(self.config["history_length"])
            history_file = os.path.expanduser(self.config["history_file"])
            if os.path.exists(history_file):
                readline.read_history_file(history_file)
            atexit.register(self._save_history, history_file)

        except (AttributeError, OSError) as e:
            logger.debug(f"readline unavailable, tab completion disabled: {e}")
            self.config["enable_tab_completion"] = False

    def _save_history(self, history_file: str) -> None:
        try:
            readline.write_history_file(history_file)
        except OSError as e:
            logger.debug(f"Failed to save history to {history_file}: {e}")

    def complete(self, line: str) -> List[str]:
        """
        Completion candidates for a line.

        Only suggestions that extend the word under the cursor are
        candidates; the rest are shown as hints by the display hook.
        """
        suggestions, start, end = self.engine.matcher(line)
        self._last_suggestions = suggestions
        word = line[start:end].lower()
        return [
            s.text for s in suggestions
            if not s.error and s.text.lower().startswith(word)
        ]

    def _readline_completer(self, text: str, state: int) -> Optional[str]:
        """
        Readline completer function for tab completion.

        Args:
            text: Word being completed
            state: Completion state

        Returns:
            Completion suggestion or None
        """
        if not self.config["enable_tab_completion"]:
            return None

        if state == 0:
            line = readline.get_line_buffer()[:readline.get_endidx()]
            self._completion_cache = self.complete(line)

        if state < len(self._completion_cache):
            return self._completion_cache[state]

        return None

    def _display_matches(self, substitution: str, matches: List[str], longest: int) -> None:
        print()
        for line in self.format_suggestions(self._last_suggestions):
            print(line)
        print(self.engine.prefix + readline.get_line_buffer(), end="", flush=True)

    @staticmethod
    def format_suggestions(suggestions: List[Suggestion]) -> List[str]:
        if not suggestions:
            return []
        width = max(len(s.text) for s in suggestions)
        return [f"  {s.text.ljust(width)}  {s.description}".rstrip() for s in suggestions]

    def read_line(self, prompt: str) -> str:
        """Read one line; raises EOFError at end of input."""
        return input(prompt)
