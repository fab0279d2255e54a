"""
Tests for the engine: construction, matcher, dispatch, REPL loop and
language resolution.
"""

import logging

import pytest

from config.app_config import ApplicationConfig
from core.engine import Engine
from core.errors import HandlerNotFoundError
from core.i18n import normalize_locale, resolve_languages
from core.registry import Registry


def lines(*items):
    """Line reader that yields items then raises EOFError."""
    iterator = iter(items)

    def read_line(prompt):
        try:
            return next(iterator)
        except StopIteration:
            raise EOFError

    return read_line


class TestEngineConstruction:

    def test_no_errors_for_complete_registry(self, engine):
        assert engine.errors == []

    def test_missing_handlers_are_collected_and_logged(self, caplog):
        config = ApplicationConfig.from_dict({"commands": {"run": {"handler": "RunFn"}}})
        with caplog.at_level(logging.WARNING, logger="core.engine"):
            engine = Engine(config, Registry(), environ={})
        assert [type(e) for e in engine.errors] == [HandlerNotFoundError]
        assert "Handler [RunFn] for command path [run] is not found" in caplog.text

    def test_debug_prints_errors(self, capsys):
        config = ApplicationConfig.from_dict({"debug": True, "commands": {"run": {"handler": "RunFn"}}})
        Engine(config, environ={})
        out = capsys.readouterr().out
        assert out.startswith("Errors/Warnings during initialization:\n")
        assert "Handler [RunFn] for command path [run] is not found" in out

    def test_no_debug_output_without_flag(self, capsys):
        config = ApplicationConfig.from_dict({"commands": {"run": {"handler": "RunFn"}}})
        Engine(config, environ={})
        assert capsys.readouterr().out == ""

    def test_application_can_override_builtins(self, recorder):
        registry = Registry()
        registry.register_handler("AcDefaultVersionFn", recorder.handler("mine"))
        config = ApplicationConfig.from_dict({"commands": {"version": {"handler": "AcDefaultVersionFn"}}})
        engine = Engine(config, registry, environ={})
        engine.execute_line("version")
        assert recorder.names == ["mine"]

    def test_shared_registry_keeps_each_engine_version(self, registry, capsys):
        first = ApplicationConfig.from_dict({
            "version": "1.0", "commands": {"v": {"handler": "AcDefaultVersionFn"}}
        })
        second = ApplicationConfig.from_dict({
            "version": "2.0", "copyright": "Second", "commands": {"v": {"handler": "AcDefaultVersionFn"}}
        })
        Engine(first, registry, environ={})
        engine = Engine(second, registry, environ={})
        assert engine.errors == []
        assert not registry.has_handler("AcDefaultVersionFn")

        engine.execute_line("v")
        assert capsys.readouterr().out == "Second\n2.0 released at \n"

    def test_default_prefix(self, engine):
        assert engine.prefix == "> "


class TestMatcher:

    def test_partial_word(self, engine):
        suggestions, start, end = engine.matcher("help vers")
        assert [s.text for s in suggestions] == ["version"]
        assert (start, end) == (5, 9)

    def test_after_space(self, engine):
        suggestions, start, end = engine.matcher("help ")
        assert sorted(s.text for s in suggestions) == ["me", "version"]
        assert (start, end) == (5, 5)

    def test_bad_command(self, engine):
        suggestions, _, _ = engine.matcher("help xyz")
        assert len(suggestions) == 1
        assert suggestions[0].text == "Bad Command"
        assert suggestions[0].error
        assert not any(s.error for s in engine.matcher("help ")[0])

    def test_cursor_in_middle(self, engine):
        suggestions, start, end = engine.matcher("help version", cursor=7)
        assert [s.text for s in suggestions] == ["version"]
        assert (start, end) == (5, 7)

    def test_text_after_cursor_is_ignored(self, engine):
        suggestions, start, end = engine.matcher("help xyz", cursor=5)
        assert sorted(s.text for s in suggestions) == ["me", "version"]
        assert (start, end) == (5, 5)

    def test_case_sensitive_config(self, registry):
        config = ApplicationConfig.from_dict({"case_sensitive": True, "commands": {"help": {}}})
        engine = Engine(config, registry, environ={})
        assert engine.matcher("HE")[0][0].text == "Bad Command"
        assert engine.matcher("he")[0][0].text == "help"

    def test_injector_values(self, engine):
        suggestions, _, _ = engine.matcher("help me ")
        assert [s.text for s in suggestions] == ["sb", "me"]

    def test_uses_resolved_language(self, config, registry):
        engine = Engine(config, registry, environ={"LANG": "ru_RU.UTF-8"})
        suggestions, _, _ = engine.matcher("help vers")
        assert suggestions[0].description == "Показать версию"


class TestExecuteLine:

    def test_dispatches_to_leaf_handler(self, engine, recorder):
        engine.execute_line("help version")
        assert recorder.names == ["v"]
        assert recorder.last.languages == ["en-US"]

    def test_option_params(self, engine, recorder):
        engine.execute_line("help me sb extra")
        assert recorder.names == ["H"]
        assert recorder.last.params == {"status": "sb", "info": "extra"}

    def test_unknown_line(self, engine, recorder, capsys):
        engine.execute_line("help xyz")
        assert recorder.calls == []
        assert capsys.readouterr().out == "No such command: help xyz\n"

    def test_builtin_version(self, engine, capsys):
        engine.execute_line("about")
        assert capsys.readouterr().out == "Copyright (c) Tests\n1.2.3 released at 2024-01-01\n"

    def test_builtin_exit(self, engine):
        with pytest.raises(SystemExit) as exc_info:
            engine.execute_line("exit")
        assert exc_info.value.code == 0


class TestReplLoop:

    def test_runs_until_exit(self, engine, recorder, capsys):
        with pytest.raises(SystemExit) as exc_info:
            engine.execute(lines("help version", "bogus", "help me sb x", "exit", "help version"))
        assert exc_info.value.code == 0
        assert recorder.names == ["v", "H"]
        assert "No such command: bogus" in capsys.readouterr().out

    def test_end_of_input_exits(self, engine):
        with pytest.raises(SystemExit) as exc_info:
            engine.execute(lines())
        assert exc_info.value.code == 0

    def test_prompt_is_passed_to_front_end(self, engine):
        prompts = []

        def read_line(prompt):
            prompts.append(prompt)
            raise EOFError

        with pytest.raises(SystemExit):
            engine.execute(read_line)
        assert prompts == ["> "]

    def test_failing_handler_does_not_stop_loop(self, config, caplog, capsys):
        registry = Registry()

        def broken(input):
            raise RuntimeError("boom")

        registry.register_handler("v", broken)
        engine = Engine(config, registry, environ={})
        with caplog.at_level(logging.ERROR, logger="core.engine"):
            with pytest.raises(SystemExit):
                engine.execute(lines("help version", "exit"))
        assert "boom" in caplog.text
        assert "Error: boom" in capsys.readouterr().out

    def test_keyboard_interrupt_continues(self, engine, recorder):
        events = iter([KeyboardInterrupt, "help version", "exit"])

        def read_line(prompt):
            item = next(events)
            if item is KeyboardInterrupt:
                raise KeyboardInterrupt
            return item

        with pytest.raises(SystemExit):
            engine.execute(read_line)
        assert recorder.names == ["v"]


class TestLanguages:

    @pytest.mark.parametrize("environ, preferred, expected", [
        ({}, "", ["en-US"]),
        ({}, "ja-JP", ["ja-JP"]),
        ({"LANG": "zh_CN.UTF-8"}, "ja-JP", ["ja-JP"]),
        ({"LANG": "zh_CN.UTF-8"}, "", ["zh-CN", "en-US"]),
        ({"LANG": "de_DE"}, "", ["de-DE", "en-US"]),
        ({"LC_ALL": "fr_FR.UTF-8"}, "", ["fr-FR", "en-US"]),
        ({"LANG": "zh_HK.UTF-8", "LC_ALL": "fr_FR.UTF-8"}, "", ["zh-HK", "en-US"]),
        ({"LANG": "", "LC_ALL": "ru_RU.UTF-8"}, "", ["ru-RU", "en-US"]),
    ])
    def test_precedence(self, environ, preferred, expected):
        assert resolve_languages(preferred, environ) == expected

    def test_mapping_appends_aliases(self):
        mapping = {"zh-CN": ["zh-HK", "zh-TW"]}
        assert resolve_languages("", {"LANG": "zh_HK.UTF-8"}, mapping) == ["zh-HK", "zh-CN", "en-US"]

    def test_mapping_removes_duplicates(self):
        mapping = {"en-US": ["en-GB"]}
        assert resolve_languages("", {"LANG": "en_GB"}, mapping) == ["en-GB", "en-US"]

    def test_normalize_locale(self):
        assert normalize_locale("zh_HK.UTF-8") == "zh-HK"
        assert normalize_locale("en-US") == "en-US"

    def test_engine_reads_process_environment(self, monkeypatch, config, registry):
        monkeypatch.delenv("LC_ALL", raising=False)
        monkeypatch.setenv("LANG", "ko_KR.UTF-8")
        assert Engine(config, registry).languages() == ["ko-KR", "en-US"]

    def test_preferred_language_from_config(self, registry):
        config = ApplicationConfig.from_dict({"preferred_language": "ru-RU"})
        assert Engine(config, registry, environ={"LANG": "de_DE"}).languages() == ["ru-RU"]
