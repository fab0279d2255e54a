from enum import Enum
from dataclasses import dataclass, field
from typing import Optional, List, Dict, Any, Iterable, Iterator, Tuple


DEFAULT_LANGUAGE = "en-US"


class NodeType(Enum):
    """Типы узлов грамматики"""
    COMMAND = "command"  # Литеральный токен
    OPTION = "option"    # Любой токен, сохраняется как параметр

    @classmethod
    def parse(cls, value: Optional[str]) -> 'NodeType':
        """
        Тип узла по значению из конфигурации; пустое значение - команда.

        Raises:
            ValueError: Неизвестный тип
        """
        if isinstance(value, NodeType):
            return value
        if not value:
            return cls.COMMAND
        return cls(value)


@dataclass(frozen=True)
class TranslatedItem:
    """Локализованная пара (ключ, описание) для одного языка"""
    language: str
    display_key: str
    display_description: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {
            "language": self.language,
            "display_key": self.display_key,
            "display_description": self.display_description
        }


class TranslationSet:
    """
    Набор переводов узла: язык -> (ключ, описание).
    Поиск идёт по списку предпочтительных языков, при промахе
    возвращается первый добавленный перевод.
    """

    def __init__(self, items: Optional[Iterable[TranslatedItem]] = None):
        self._translations: Dict[str, TranslatedItem] = {}
        if items is not None:
            self.init(items)

    @classmethod
    def of(cls, key: str, description: str = "",
           language: str = DEFAULT_LANGUAGE) -> 'TranslationSet':
        """Набор из одного перевода"""
        return cls([TranslatedItem(language, key, description)])

    def init(self, items: Iterable[TranslatedItem]) -> None:
        """Заменяет содержимое набора; при повторе языка побеждает последний"""
        self._translations = {}
        for item in items:
            self._translations[item.language] = item

    def get_translation(self, *languages: str) -> Tuple[str, str]:
        """
        Возвращает (ключ, описание) для первого найденного языка.

        Args:
            languages: Языки в порядке предпочтения

        Returns:
            Кортеж (display_key, display_description)
        """
        if not self._translations:
            return "", ""

        for language in languages:
            item = self._translations.get(language)
            if item is not None:
                return item.display_key, item.display_description

        # Ни один язык не найден - берём первый добавленный
        item = next(iter(self._translations.values()))
        return item.display_key, item.display_description

    def languages(self) -> List[str]:
        return list(self._translations)

    def __len__(self) -> int:
        return len(self._translations)

    def __contains__(self, language: object) -> bool:
        return language in self._translations

    def __iter__(self) -> Iterator[TranslatedItem]:
        return iter(self._translations.values())

    def __repr__(self) -> str:
        return f"TranslationSet({list(self._translations.values())!r})"


class Params(dict):
    """Значения опций, собранные при обходе дерева"""

    def set(self, key: str, value: str) -> None:
        self[key] = value


@dataclass
class Suggestion:
    """Вариант автодополнения для фронтенда"""
    text: str
    description: str = ""
    error: bool = False  # "Bad Command": подсказка, а не вариант дополнения

    def to_dict(self) -> Dict[str, Any]:
        return {
            "text": self.text,
            "description": self.description
        }


@dataclass
class Input:
    """Данные, которые получают обработчики и инжекторы"""
    params: Params = field(default_factory=Params)
    full_text: str = ""
    languages: List[str] = field(default_factory=lambda: [DEFAULT_LANGUAGE])

    def to_dict(self) -> Dict[str, Any]:
        return {
            "params": dict(self.params),
            "full_text": self.full_text,
            "languages": list(self.languages)
        }
