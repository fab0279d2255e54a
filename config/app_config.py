# config/app_config.py
"""
Конфигурация приложения: версия, язык, регистр и дерево команд.
Загружается из YAML или JSON файла.
"""

import json
import logging
import os
from dataclasses import dataclass, field, fields
from typing import Any, Dict, List, Optional

import yaml

from core.errors import ConfigError
from core.models import NodeType, TranslatedItem

logger = logging.getLogger(__name__)


@dataclass
class DescriptionConfig:
    """Описание команды на одном языке"""
    language: str = ""
    name: str = ""
    text: str = ""

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'DescriptionConfig':
        if not isinstance(data, dict):
            raise ConfigError(f"description must be a mapping, got {type(data).__name__}")
        # В файлах ключ языка называется lang
        return cls(
            language=str(data.get("lang", data.get("language", "")) or ""),
            name=str(data.get("name", "") or ""),
            text=str(data.get("text", "") or "")
        )

    def to_item(self) -> TranslatedItem:
        return TranslatedItem(self.language, self.name, self.text)

    def to_dict(self) -> Dict[str, Any]:
        return {"lang": self.language, "name": self.name, "text": self.text}


@dataclass
class CommandConfig:
    """Узел дерева команд в конфигурации"""
    type: str = NodeType.COMMAND.value
    handler: str = ""
    examples: str = ""
    descriptions: List[DescriptionConfig] = field(default_factory=list)
    commands: Dict[str, 'CommandConfig'] = field(default_factory=dict)

    @property
    def node_type(self) -> NodeType:
        return NodeType.parse(self.type)

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]], path: str = "") -> 'CommandConfig':
        """
        Создаёт узел из словаря (рекурсивно).

        Args:
            data: Словарь узла; None означает пустую команду
            path: Путь команды, используется в сообщениях об ошибках
        """
        if data is None:
            return cls()
        if not isinstance(data, dict):
            raise ConfigError(f"command [{path}] must be a mapping, got {type(data).__name__}")

        try:
            node_type = NodeType.parse(data.get("type")).value
        except ValueError:
            raise ConfigError(f"command [{path}] has unknown type: {data.get('type')}")

        _warn_unknown_keys(cls, data, path)

        return cls(
            type=node_type,
            handler=str(data.get("handler") or ""),
            examples=str(data.get("examples") or ""),
            descriptions=[
                DescriptionConfig.from_dict(item) for item in data.get("descriptions") or []
            ],
            commands=parse_commands(data.get("commands"), path)
        )

    def to_dict(self) -> Dict[str, Any]:
        result: Dict[str, Any] = {"type": self.type}
        if self.handler:
            result["handler"] = self.handler
        if self.examples:
            result["examples"] = self.examples
        if self.descriptions:
            result["descriptions"] = [d.to_dict() for d in self.descriptions]
        if self.commands:
            result["commands"] = {name: c.to_dict() for name, c in self.commands.items()}
        return result


def parse_commands(data: Optional[Dict[str, Any]], prefix: str = "") -> Dict[str, CommandConfig]:
    """Разбирает словарь дочерних команд"""
    if not data:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"commands of [{prefix}] must be a mapping")

    commands = {}
    for name, value in data.items():
        path = f"{prefix} {name}".strip()
        commands[str(name)] = CommandConfig.from_dict(value, path)
    return commands


@dataclass
class ApplicationConfig:
    """
    Настройки приложения и дерево команд.
    """

    version: str = ""
    copyright: str = ""
    released_at: str = ""
    case_sensitive: bool = False
    cli_prefix: str = ""
    preferred_language: str = ""
    debug: bool = False
    language_mapping: Dict[str, List[str]] = field(default_factory=dict)
    commands: Dict[str, CommandConfig] = field(default_factory=dict)

    @property
    def prefix(self) -> str:
        """Приглашение командной строки, по умолчанию '> '"""
        return self.cli_prefix or "> "

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> 'ApplicationConfig':
        config = cls()
        if not data:
            return config
        if not isinstance(data, dict):
            raise ConfigError(f"configuration must be a mapping, got {type(data).__name__}")

        _warn_unknown_keys(cls, data, "")

        for key in ("version", "copyright", "released_at", "cli_prefix", "preferred_language"):
            if data.get(key) is not None:
                setattr(config, key, str(data[key]))
        for key in ("case_sensitive", "debug"):
            if data.get(key) is None:
                continue
            if not isinstance(data[key], bool):
                raise ConfigError(f"{key} must be a boolean, got {data[key]!r}")
            setattr(config, key, data[key])

        mapping = data.get("language_mapping") or {}
        if not isinstance(mapping, dict):
            raise ConfigError("language_mapping must be a mapping")
        config.language_mapping = {
            str(alias): [str(language) for language in targets or []]
            for alias, targets in mapping.items()
        }

        config.commands = parse_commands(data.get("commands"))
        return config

    @classmethod
    def from_yaml(cls, yaml_path: str) -> 'ApplicationConfig':
        """
        Загружает конфигурацию из YAML файла.
        """
        with open(yaml_path, 'r', encoding='utf-8') as f:
            try:
                yaml_data = yaml.safe_load(f)
            except yaml.YAMLError as e:
                raise ConfigError(f"invalid YAML in {yaml_path}: {e}") from e

        logger.debug(f"Loaded configuration from {yaml_path}")
        return cls.from_dict(yaml_data)

    @classmethod
    def from_json(cls, json_path: str) -> 'ApplicationConfig':
        """
        Загружает конфигурацию из JSON файла.
        """
        with open(json_path, 'r', encoding='utf-8') as f:
            try:
                json_data = json.load(f)
            except json.JSONDecodeError as e:
                raise ConfigError(f"invalid JSON in {json_path}: {e}") from e

        logger.debug(f"Loaded configuration from {json_path}")
        return cls.from_dict(json_data)

    @classmethod
    def load(cls, path: str) -> 'ApplicationConfig':
        """Выбирает формат по расширению файла"""
        if not os.path.exists(path):
            raise ConfigError(f"configuration file not found: {path}")
        if path.lower().endswith(".json"):
            return cls.from_json(path)
        return cls.from_yaml(path)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "version": self.version,
            "copyright": self.copyright,
            "released_at": self.released_at,
            "case_sensitive": self.case_sensitive,
            "cli_prefix": self.cli_prefix,
            "preferred_language": self.preferred_language,
            "debug": self.debug,
            "language_mapping": {k: list(v) for k, v in self.language_mapping.items()},
            "commands": {name: c.to_dict() for name, c in self.commands.items()}
        }


def _warn_unknown_keys(cls: type, data: Dict[str, Any], path: str) -> None:
    known = {f.name for f in fields(cls)}
    for key in data:
        if key not in known:
            where = f" in command [{path}]" if path else ""
            logger.warning(f"Unknown configuration key{where}: {key}")
