# gatekeeper/services/localization.py
"""
Локализованные строки ответов.

Ключи - точечные пути ("ERRORS.ADMIN_ONLY"), переменные подставляются
в виде {{name}}. Поиск никогда не бросает исключений: при отсутствии
ключа возвращается маркер {MISSING:key}, при отсутствии таблиц языков -
{LANGUAGE_ERROR:key}.
"""
import json
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional

from loguru import logger

EN_STRINGS: Dict[str, Any] = {
    "META": {"LANGUAGE": "English", "CODE": "EN"},
    "ERRORS": {
        "COMMAND_NOT_FOUND": "❓ Command not found. Use {{prefix}}help to see available commands.",
        "OWNER_ONLY": "⛔ Only the bot owner can use this command.",
        "ADMIN_ONLY": "⛔ You don't have permission to use this command.",
        "ONLY_GROUP": "👥 This command can only be used in groups.",
        "ONLY_PRIVATE": "👤 This command can only be used in private chat.",
        "COOLDOWN": "⏳ Please wait {{seconds}}s before using {{prefix}}{{command}} again.",
        "COMMAND_FAILED": "❌ Command {{prefix}}{{command}} failed. Please try again later.",
        "INVALID_SYNTAX": "❌ Usage: {{prefix}}{{command}} {{usage}}",
    },
    "SECURITY": {
        "BLACKLISTED": "🚫 You are blocked from using this bot.",
        "NOT_WHITELISTED": "🔒 This bot is restricted to approved users.",
        "RATE_LIMITED": "⏳ Too many requests. Try again in {{seconds}}s.",
        "EXCESSIVE_CAPS": "⚠️ Please don't shout. Warning {{count}}/{{limit}}.",
        "REPETITIVE_TEXT": "⚠️ Repetitive messages are not allowed. Warning {{count}}/{{limit}}.",
        "FORBIDDEN_CONTENT": "🗑 Links and invites are not allowed. Warning {{count}}/{{limit}}.",
    },
    "COMMON": {
        "PING": "🏓 Pong! {{latency}}ms",
        "HELP_HEADER": "📖 Available commands:",
        "HELP_CATEGORY": "{{category}}:",
        "HELP_FOOTER": "Prefix: {{prefix}}",
        "STATS": (
            "📊 Bot statistics\n"
            "⏰ Uptime: {{uptime}}\n"
            "💬 Commands handled: {{commands}}\n"
            "👥 Users served: {{users}}\n"
            "🛡 Security blocks: {{blocks}}"
        ),
    },
    "ADMIN": {
        "BLOCKED": "🚫 {{target}} has been blocked.",
        "UNBLOCKED": "✅ {{target}} has been unblocked.",
        "NOT_BLOCKED": "ℹ️ {{target}} is not blocked.",
        "SECURITY_REPORT": (
            "🛡 Security report\n"
            "Blacklisted: {{blacklisted}}\n"
            "Whitelisted: {{whitelisted}}\n"
            "Warned users: {{warned}}\n"
            "Active rate windows: {{windows}}"
        ),
        "WARNINGS": "⚠️ {{target}}: {{count}} warning(s), {{requests}} request(s) in the current window\n{{history}}",
        "NO_WARNINGS": "✅ {{target}} has no warnings.",
        "WARNINGS_RESET": "♻️ Warnings of {{target}} have been reset.",
        "COOLDOWNS_RESET": "⏱ Cleared {{count}} cooldown(s) and the rate window of {{target}}.",
        "AUDIT_HEADER": "📜 Last {{count}} command(s):",
        "AUDIT_EMPTY": "📜 No commands executed yet.",
    },
}

RU_STRINGS: Dict[str, Any] = {
    "META": {"LANGUAGE": "Русский", "CODE": "RU"},
    "ERRORS": {
        "COMMAND_NOT_FOUND": "❓ Команда не найдена. Список команд: {{prefix}}help",
        "OWNER_ONLY": "⛔ Эта команда доступна только владельцу бота.",
        "ADMIN_ONLY": "⛔ Недостаточно прав для этой команды.",
        "ONLY_GROUP": "👥 Эта команда работает только в группах.",
        "ONLY_PRIVATE": "👤 Эта команда работает только в личных сообщениях.",
        "COOLDOWN": "⏳ Подождите {{seconds}}с перед повторным вызовом {{prefix}}{{command}}.",
        "COMMAND_FAILED": "❌ Не удалось выполнить {{prefix}}{{command}}. Попробуйте позже.",
        "INVALID_SYNTAX": "❌ Использование: {{prefix}}{{command}} {{usage}}",
    },
    "SECURITY": {
        "BLACKLISTED": "🚫 Вы заблокированы.",
        "NOT_WHITELISTED": "🔒 Бот доступен только одобренным пользователям.",
        "RATE_LIMITED": "⏳ Слишком часто. Подождите ~{{seconds}}с.",
        "EXCESSIVE_CAPS": "⚠️ Не пишите капсом. Предупреждение {{count}}/{{limit}}.",
        "REPETITIVE_TEXT": "⚠️ Повторяющийся текст запрещен. Предупреждение {{count}}/{{limit}}.",
        "FORBIDDEN_CONTENT": "🗑 Ссылки и приглашения запрещены. Предупреждение {{count}}/{{limit}}.",
    },
    "COMMON": {
        "PING": "🏓 Понг! {{latency}}мс",
    },
}

BUILTIN_LANGUAGES: Dict[str, Dict[str, Any]] = {"EN": EN_STRINGS, "RU": RU_STRINGS}


class Localizer:
    """
    Поиск строк по ключу с откатом на язык по умолчанию.
    """

    def __init__(
        self,
        language: str = "EN",
        default_language: str = "EN",
        languages: Optional[Mapping[str, Mapping[str, Any]]] = None,
        languages_dir: Optional[str] = None,
    ):
        self.default_language = default_language.upper()
        self.languages: Dict[str, Mapping[str, Any]] = dict(
            BUILTIN_LANGUAGES if languages is None else languages
        )
        if languages_dir:
            self._load_dir(Path(languages_dir))

        self.language = language.upper()
        if self.language not in self.languages:
            logger.warning(
                f"Язык '{self.language}' не найден, используется '{self.default_language}'"
            )
            self.language = self.default_language

    def _load_dir(self, directory: Path) -> None:
        if not directory.is_dir():
            logger.warning(f"Каталог языков не найден: {directory}")
            return
        for path in sorted(directory.glob("*.json")):
            try:
                with open(path, encoding="utf-8") as f:
                    self.languages[path.stem.upper()] = json.load(f)
                logger.debug(f"Загружен язык {path.stem.upper()}")
            except (OSError, ValueError) as e:
                logger.error(f"Не удалось загрузить язык из {path}: {e}")

    def _resolve(self, key: str, language: str) -> Optional[str]:
        value: Any = self.languages.get(language)
        for part in key.split("."):
            if isinstance(value, Mapping) and part in value:
                value = value[part]
            else:
                return None
        return value if isinstance(value, str) else None

    def lookup(self, key: str, variables: Optional[Mapping[str, Any]] = None) -> str:
        if not self.languages:
            return f"{{LANGUAGE_ERROR:{key}}}"

        value = self._resolve(key, self.language)
        if value is None and self.language != self.default_language:
            value = self._resolve(key, self.default_language)
        if value is None:
            return f"{{MISSING:{key}}}"

        for name, replacement in (variables or {}).items():
            value = value.replace(f"{{{{{name}}}}}", str(replacement))
        return value

    __call__ = lookup

    def available_languages(self) -> List[str]:
        return sorted(self.languages)
