# core/grammar.py
"""
Дерево грамматики команд.

Узел-команда сопоставляется с токеном литерально, узел-опция принимает
любой токен и сохраняет его как параметр. Один и тот же обход дерева
используется и для подсказок, и для выполнения.
"""

import logging
from dataclasses import dataclass
from typing import Any, List, Mapping, Optional, Sequence, Tuple

from core.errors import (
    ConstructionError,
    HandlerNotFoundError,
    InjectorNotFoundError,
    PreferredTranslationMissingError,
)
from core.handlers import default_handler, no_command_handler
from core.models import (
    DEFAULT_LANGUAGE,
    Input,
    NodeType,
    Params,
    Suggestion,
    TranslatedItem,
    TranslationSet,
)
from core.registry import Handler, Injector, Registry
from core import i18n
from utils.tokenizer import default_tokenizer

logger = logging.getLogger(__name__)


class GrammarContext:
    """Курсор по токенам одной введённой строки"""

    def __init__(self, text: str, languages: Optional[Sequence[str]] = None,
                 ignore_case: bool = True):
        self.full_text = text
        self.tokens: List[str] = default_tokenizer.tokenize(text)
        self.last_word = self.tokens[-1]
        self.index = 0
        self.params = Params()
        self.ignore_case = ignore_case
        self.languages: List[str] = list(languages or [DEFAULT_LANGUAGE])

    @property
    def current(self) -> str:
        return self.tokens[self.index]

    @property
    def previous(self) -> str:
        return self.tokens[self.index - 1]

    def end(self) -> bool:
        """Курсор стоит на последнем токене"""
        return self.index >= len(self.tokens) - 1

    def next(self) -> 'GrammarContext':
        self.index += 1
        return self

    def consumed_path(self) -> str:
        """Токены до курсора включительно"""
        return " ".join(self.tokens[:self.index + 1])

    def to_input(self) -> Input:
        return Input(params=self.params, full_text=self.full_text, languages=self.languages)


@dataclass(frozen=True)
class GrammarNode:
    """Неизменяемый узел дерева грамматики"""
    display_key: str = ""
    node_type: NodeType = NodeType.COMMAND
    children: Tuple['GrammarNode', ...] = ()
    descriptions: Optional[TranslationSet] = None
    injector: Optional[Injector] = None
    handler: Optional[Handler] = None

    @property
    def is_option(self) -> bool:
        return self.node_type is NodeType.OPTION

    def matched(self, word: str, strict: bool, ignore_case: bool) -> bool:
        """
        Проверяет, подходит ли токен к узлу.

        Опция подходит всегда. Команда в нестрогом режиме сравнивается
        по префиксу (с учётом ignore_case), в строгом - только точным
        совпадением с учётом регистра.
        """
        if self.is_option:
            return True

        if strict:
            return self.display_key == word

        key, prefix = self.display_key, word
        if ignore_case:
            key, prefix = key.lower(), prefix.lower()
        return key.startswith(prefix) or word == ""

    def index_endpoints(self, ctx: GrammarContext) -> List['GrammarNode']:
        """
        Спускается по дереву вдоль токенов контекста.

        Returns:
            Узлы, подходящие к последнему токену; пустой список, если путь
            оборвался раньше
        """
        if self.is_option:
            ctx.params[self.display_key] = ctx.previous

        if ctx.end():
            matched = [
                child for child in self.children
                if child.matched(ctx.last_word, False, ctx.ignore_case)
            ]
            if len(matched) > 1:
                # При неоднозначности команды важнее опций
                return [child for child in matched if not child.is_option]
            return matched

        for child in self.children:
            if child.matched(ctx.current, True, ctx.ignore_case):
                return child.index_endpoints(ctx.next())

        return []

    def index_suggestions(self, ctx: GrammarContext) -> List[Suggestion]:
        endpoints = self.index_endpoints(ctx)
        if not endpoints:
            key, description = i18n.translate(
                i18n.BAD_COMMAND, ctx.languages, {"command": ctx.consumed_path()}
            )
            return [Suggestion(key, description, error=True)]

        suggestions: List[Suggestion] = []
        for node in endpoints:
            suggestions.extend(node.prompts(ctx))
        return suggestions

    def prompts(self, ctx: GrammarContext) -> List[Suggestion]:
        """Подсказки, которые даёт сам узел"""
        key, description = self._translation(ctx.languages)
        if not self.is_option:
            return [Suggestion(self.display_key, description)]

        if self.injector is None:
            return [Suggestion(key, description)]

        suggestions = []
        for item in self.injector(ctx.to_input()):
            if isinstance(item, TranslationSet):
                item_key, item_description = item.get_translation(*ctx.languages)
            else:
                item_key, item_description = item
            suggestions.append(Suggestion(item_key, item_description))
        return suggestions

    def execute(self, ctx: GrammarContext) -> Any:
        """
        Выполняет строку: ровно один конечный узел, строго совпавший
        с последним токеном, иначе вызывается обработчик "нет команды".
        """
        endpoints = self.index_endpoints(ctx)
        if len(endpoints) == 1 and endpoints[0].matched(ctx.last_word, True, ctx.ignore_case):
            target = endpoints[0]
            if target.is_option:
                ctx.params[target.display_key] = ctx.last_word

            handler = target.handler or default_handler
            logger.debug(f"Dispatching [{ctx.full_text}] to {getattr(handler, '__name__', handler)}")
            return handler(ctx.to_input())

        logger.debug(f"No command for [{ctx.full_text}], {len(endpoints)} endpoints matched")
        return no_command_handler(ctx.to_input())

    def find(self, *path: str) -> Optional['GrammarNode']:
        """Дочерний узел по литеральному пути (для отладки и тестов)"""
        node = self
        for key in path:
            node = next((child for child in node.children if child.display_key == key), None)
            if node is None:
                return None
        return node

    def _translation(self, languages: Sequence[str]) -> Tuple[str, str]:
        if self.descriptions is None:
            return "", ""
        return self.descriptions.get_translation(*languages)


class GrammarBuilder:
    """
    Строит дерево грамматики из конфигурации снизу вверх.
    Не найденные обработчики и инжекторы не прерывают построение:
    ошибки накапливаются в self.errors.
    """

    def __init__(self, registry: Registry,
                 languages: Optional[Sequence[str]] = None,
                 preferred_language: str = "",
                 builtins: Optional[Mapping[str, Handler]] = None):
        self.registry = registry
        self.builtins = dict(builtins or {})
        self.languages = list(languages or [DEFAULT_LANGUAGE])
        self.preferred_language = preferred_language
        self.errors: List[ConstructionError] = []

    def build_root(self, commands: Mapping[str, Any]) -> GrammarNode:
        return GrammarNode(children=self.build(commands))

    def build(self, commands: Mapping[str, Any],
              prefixes: Sequence[str] = ()) -> Tuple[GrammarNode, ...]:
        """
        Args:
            commands: Словарь имя -> CommandConfig
            prefixes: Путь родительских команд

        Returns:
            Кортеж дочерних узлов
        """
        return tuple(
            self._build_node(name, cfg, list(prefixes) + [name])
            for name, cfg in commands.items()
        )

    def _build_node(self, name: str, cfg: Any, path: List[str]) -> GrammarNode:
        node_type = cfg.node_type
        command_path = " ".join(path)

        handler = None
        if cfg.handler:
            handler = self.registry.get_handler(cfg.handler) or self.builtins.get(cfg.handler)
            if handler is None:
                self.errors.append(HandlerNotFoundError(command_path, cfg.handler, self.languages))
                handler = default_handler

        injector = None
        if node_type is NodeType.OPTION and cfg.examples:
            injector = self.registry.get_injector(cfg.examples)
            if injector is None:
                self.errors.append(InjectorNotFoundError(command_path, cfg.examples, self.languages))

        descriptions = None
        if injector is None and cfg.descriptions:
            descriptions = TranslationSet(d.to_item() for d in cfg.descriptions)
            if self.preferred_language and self.preferred_language not in descriptions:
                self.errors.append(PreferredTranslationMissingError(
                    command_path, self.preferred_language, self.languages
                ))

        if injector is None and descriptions is None:
            descriptions = TranslationSet([
                TranslatedItem(DEFAULT_LANGUAGE, name, node_type.value)
            ])

        return GrammarNode(
            display_key=name,
            node_type=node_type,
            children=self.build(cfg.commands, path),
            descriptions=descriptions,
            injector=injector,
            handler=handler
        )
