# core/i18n.py
"""
Встроенные локализованные сообщения движка и определение языка интерфейса.
"""

import os
from string import Template
from typing import Dict, List, Mapping, Optional, Tuple

from core.models import DEFAULT_LANGUAGE, TranslatedItem, TranslationSet


BAD_COMMAND = "bad_command"
NO_COMMAND = "no_command"
NO_IMPLEMENT = "no_implement"
ERR_HANDLER_NOT_FOUND = "err_handler_not_found"
ERR_INJECTOR_NOT_FOUND = "err_injector_not_found"
ERR_PREFERRED_TRANSLATION_NOT_CONFIGURED = "err_preferred_translation_not_configured"

_FALLBACKS: Dict[str, List[Tuple[str, str, str]]] = {
    BAD_COMMAND: [
        ("en-US", "Bad Command", "[${command}] is not a valid command"),
        ("zh-CN", "错误命令", "[${command}] 不是一个有效的命令"),
        ("ja-JP", "悪いコマンド", "[${command}] は有効なコマンドではありません"),
        ("fr-FR", "Mauvaise Commande", "[${command}] n'est pas une commande valide"),
        ("de-DE", "Schlechter Befehl", "[${command}] ist kein gültiger Befehl"),
        ("ru-RU", "Плохая Команда", "[${command}] не является допустимой командой"),
    ],
    NO_COMMAND: [
        ("en-US", "No Command", "No such command"),
        ("zh-CN", "无命令", "没有这样的命令"),
        ("ja-JP", "コマンドなし", "そのようなコマンドはありません"),
        ("fr-FR", "Pas de Commande", "Aucune commande de ce type"),
        ("de-DE", "Kein Befehl", "Kein solcher Befehl"),
        ("ru-RU", "Нет Команды", "Нет такой команды"),
    ],
    NO_IMPLEMENT: [
        ("en-US", "No Implement", "This function is not implemented"),
        ("zh-CN", "未实现", "此功能未实现"),
        ("ja-JP", "未実装", "この機能は実装されていません"),
        ("fr-FR", "Non Implémenté", "Cette fonctionnalité n'est pas implémentée"),
        ("de-DE", "Nicht Implementiert", "Diese Funktion ist nicht implementiert"),
        ("ru-RU", "Не Реализовано", "Эта функция не реализована"),
    ],
    ERR_HANDLER_NOT_FOUND: [
        ("en-US", "Handler Not Found",
         "Handler [${handler}] for command path [${command}] is not found"),
        ("zh-CN", "未找到处理程序", "未找到命令路径 [${command}] 的处理程序 [${handler}]"),
        ("ja-JP", "ハンドラが見つかりません",
         "コマンドパス [${command}] のハンドラ [${handler}] が見つかりません"),
        ("fr-FR", "Gestionnaire Introuvable",
         "Le gestionnaire [${handler}] pour le chemin de commande [${command}] n'est pas trouvé"),
        ("de-DE", "Handler Nicht Gefunden",
         "Handler [${handler}] für Befehlspfad [${command}] nicht gefunden"),
        ("ru-RU", "Обработчик Не Найден",
         "Обработчик [${handler}] для пути команды [${command}] не найден"),
    ],
    ERR_INJECTOR_NOT_FOUND: [
        ("en-US", "Injector Not Found",
         "Prompt injector [${injector}] for command path [${command}] is not found"),
        ("zh-CN", "未找到注入器", "未找到命令路径 [${command}] 的提示注入器 [${injector}]"),
        ("ja-JP", "インジェクタが見つかりません",
         "コマンドパス [${command}] のプロンプトインジェクタ [${injector}] が見つかりません"),
        ("fr-FR", "Injecteur Introuvable",
         "Injecteur de prompt [${injector}] pour le chemin de commande [${command}] non trouvé"),
        ("de-DE", "Injektor Nicht Gefunden",
         "Prompt-Injektor [${injector}] für Befehlspfad [${command}] nicht gefunden"),
        ("ru-RU", "Инжектор Не Найден",
         "Инжектор приглашения [${injector}] для пути команды [${command}] не найден"),
    ],
    ERR_PREFERRED_TRANSLATION_NOT_CONFIGURED: [
        ("en-US", "Translation Not Configured",
         "Description for command path [${command}] in preferred language [${language}] is not configured"),
        ("zh-CN", "未配置翻译", "未配置命令路径 [${command}] 在首选语言 [${language}] 的描述"),
        ("ja-JP", "翻訳が未設定",
         "優先言語 [${language}] のコマンドパス [${command}] の説明が構成されていません"),
        ("fr-FR", "Traduction Non Configurée",
         "Description du chemin de commande [${command}] dans la langue préférée [${language}] non configurée"),
        ("de-DE", "Übersetzung Nicht Konfiguriert",
         "Beschreibung des Befehlspfads [${command}] in bevorzugter Sprache [${language}] nicht konfiguriert"),
        ("ru-RU", "Перевод Не Настроен",
         "Описание пути команды [${command}] на предпочитаемом языке [${language}] не настроено"),
    ],
}

I18N_PACKS: Dict[str, TranslationSet] = {
    name: TranslationSet(TranslatedItem(*item) for item in items)
    for name, items in _FALLBACKS.items()
}


def translate(message: str, languages: List[str],
              args: Optional[Mapping[str, str]] = None) -> Tuple[str, str]:
    """
    Локализует встроенное сообщение и подставляет ${...} аргументы.

    Args:
        message: Имя сообщения (BAD_COMMAND, NO_COMMAND, ...)
        languages: Языки в порядке предпочтения
        args: Значения для подстановки в описание

    Returns:
        (заголовок, описание)
    """
    key, description = I18N_PACKS[message].get_translation(*languages)
    if args:
        description = Template(description).safe_substitute(args)
    return key, description


def normalize_locale(value: str) -> str:
    """zh_HK.UTF-8 -> zh-HK"""
    return value.split(".")[0].replace("_", "-")


def resolve_languages(preferred_language: str = "",
                      environ: Optional[Mapping[str, str]] = None,
                      mapping: Optional[Mapping[str, List[str]]] = None) -> List[str]:
    """
    Определяет список языков интерфейса.

    Порядок: язык из конфигурации, затем LANG, затем LC_ALL, затем en-US.
    Язык из конфигурации даёт список из одного элемента, переменные
    окружения дополняются en-US.
    """
    if environ is None:
        environ = os.environ

    if preferred_language:
        languages = [preferred_language]
    elif environ.get("LANG"):
        languages = [normalize_locale(environ["LANG"]), DEFAULT_LANGUAGE]
    elif environ.get("LC_ALL"):
        languages = [normalize_locale(environ["LC_ALL"]), DEFAULT_LANGUAGE]
    else:
        languages = [DEFAULT_LANGUAGE]

    if not mapping:
        return languages

    # Псевдонимы добавляются сразу после языка, на который они отображаются
    expanded: List[str] = []
    for language in languages:
        expanded.append(language)
        for alias, targets in mapping.items():
            if language in targets:
                expanded.append(alias)

    return list(dict.fromkeys(expanded))
