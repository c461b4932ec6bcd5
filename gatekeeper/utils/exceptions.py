# gatekeeper/utils/exceptions.py
"""
Исключения предметной области.

Ошибки регистрации пробрасываются вызывающему коду (старт должен упасть
громко), ошибки хранилища перехватываются владельцем списков и только
логируются.
"""


class GatekeeperError(Exception):
    """Базовое исключение пакета."""


class InvalidCommandError(GatekeeperError):
    """Команда не удовлетворяет контракту (пустое имя, нет обработчика и т.п.)."""


class DuplicateCommandError(GatekeeperError):
    """Имя или алиас команды уже заняты."""

    def __init__(self, name: str, conflict: str, owner: str):
        self.name = name
        self.conflict = conflict
        self.owner = owner
        super().__init__(
            f"Команда '{name}': '{conflict}' уже занято командой '{owner}'"
        )


class StorageError(GatekeeperError):
    """Не удалось прочитать или записать сохраняемый список идентификаторов."""
