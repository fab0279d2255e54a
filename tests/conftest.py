"""
Shared fixtures for the command grammar test suite.
"""

from typing import Dict, List, Tuple

import pytest

from config.app_config import ApplicationConfig
from core.engine import Engine
from core.handlers import static_injector
from core.models import Input, TranslationSet
from core.registry import Registry


class Recorder:
    """Collects (handler name, input) pairs for every handler call."""

    def __init__(self):
        self.calls: List[Tuple[str, Input]] = []

    def handler(self, name: str):
        def handle(input: Input) -> str:
            self.calls.append((name, input))
            return name

        handle.__name__ = name
        return handle

    @property
    def names(self) -> List[str]:
        return [name for name, _ in self.calls]

    @property
    def last(self) -> Input:
        return self.calls[-1][1]


def describe(name: str, text: str, lang: str = "en-US") -> Dict[str, str]:
    return {"lang": lang, "name": name, "text": text}


SAMPLE_CONFIG = {
    "version": "1.2.3",
    "copyright": "Copyright (c) Tests",
    "released_at": "2024-01-01",
    "commands": {
        "help": {
            "descriptions": [describe("help", "Show help information")],
            "commands": {
                "version": {
                    "handler": "v",
                    "descriptions": [
                        describe("version", "Show version information"),
                        describe("version", "Показать версию", "ru-RU"),
                    ],
                },
                "me": {
                    "descriptions": [describe("me", "Show me information")],
                    "commands": {
                        "status": {
                            "type": "option",
                            "examples": "names",
                            "commands": {
                                "info": {
                                    "type": "option",
                                    "handler": "H",
                                    "descriptions": [describe("details", "details of the status")],
                                },
                            },
                        },
                    },
                },
            },
        },
        "exit": {"handler": "AcDefaultExitFn"},
        "about": {"handler": "AcDefaultVersionFn"},
    },
}


@pytest.fixture
def recorder():
    return Recorder()


@pytest.fixture
def registry(recorder):
    registry = Registry()
    registry.register_handler("v", recorder.handler("v"))
    registry.register_handler("H", recorder.handler("H"))
    registry.register_injector("names", static_injector([
        TranslationSet.of("sb", "sb is a sb"),
        TranslationSet.of("me", "me is a me"),
    ]))
    return registry


@pytest.fixture
def config():
    return ApplicationConfig.from_dict(SAMPLE_CONFIG)


@pytest.fixture
def engine(config, registry):
    return Engine(config, registry, environ={})
