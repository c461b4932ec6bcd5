# gatekeeper/services/commands/registry.py
from typing import Dict, Iterable, List, Optional, Tuple

from loguru import logger

from gatekeeper.services.commands.models import Command
from gatekeeper.utils.exceptions import DuplicateCommandError, InvalidCommandError


def validate_command(command: Command) -> None:
    if not command.name or any(ch.isspace() for ch in command.name):
        raise InvalidCommandError(f"Некорректное имя команды: {command.name!r}")
    if not callable(command.handler):
        raise InvalidCommandError(f"Команда '{command.name}': обработчик не вызываемый")
    if command.group_only and command.private_only:
        raise InvalidCommandError(
            f"Команда '{command.name}': group_only и private_only взаимоисключающие"
        )
    if command.cooldown_seconds is not None and command.cooldown_seconds < 0:
        raise InvalidCommandError(f"Команда '{command.name}': отрицательный cooldown")
    for alias in command.aliases:
        if any(ch.isspace() for ch in alias):
            raise InvalidCommandError(f"Команда '{command.name}': некорректный алиас {alias!r}")


class CommandRegistry:
    """
    Зарегистрированные команды и индекс алиасов.

    Пишется только при регистрации (на старте), дальше только читается.
    Повторное имя или пересекающийся алиас отклоняются целиком.
    """

    def __init__(self, commands: Iterable[Command] = ()):
        self._commands: Dict[str, Command] = {}
        self._aliases: Dict[str, str] = {}
        for command in commands:
            self.register(command)

    def _owner_of(self, token: str) -> Optional[str]:
        if token in self._commands:
            return token
        return self._aliases.get(token)

    def register(self, command: Command) -> Command:
        validate_command(command)

        owner = self._owner_of(command.name)
        if owner is not None:
            raise DuplicateCommandError(command.name, command.name, owner)

        for alias in command.aliases:
            if alias == command.name:
                raise DuplicateCommandError(command.name, alias, command.name)
            owner = self._owner_of(alias)
            if owner is not None:
                raise DuplicateCommandError(command.name, alias, owner)

        self._commands[command.name] = command
        for alias in command.aliases:
            self._aliases[alias] = command.name

        logger.debug(f"Зарегистрирована команда: {command.name} ({command.category})")
        return command

    def register_all(self, commands: Iterable[Command]) -> None:
        for command in commands:
            self.register(command)
        logger.info(f"Загружено {len(self._commands)} команд, {len(self._aliases)} алиасов")

    def register_aliases(self, pairs: Iterable[Tuple[str, str]]) -> int:
        """
        Добавляет пользовательские алиасы (alias, command) к существующим командам.

        Пары с неизвестной командой пропускаются. Алиас, совпадающий с
        чужим именем или алиасом, отклоняет весь набор до изменений.

        Returns:
            Число добавленных алиасов
        """
        accepted: Dict[str, str] = {}
        for alias, name in pairs:
            alias, name = alias.strip().lower(), name.strip().lower()
            if name not in self._commands:
                logger.warning(f"Алиас '{alias}' пропущен: команда '{name}' не найдена")
                continue
            if not alias or any(ch.isspace() for ch in alias):
                raise InvalidCommandError(f"Команда '{name}': некорректный алиас {alias!r}")
            if alias in self._commands:
                raise DuplicateCommandError(name, alias, alias)
            owner = self._aliases.get(alias) or accepted.get(alias)
            if owner is not None and owner != name:
                raise DuplicateCommandError(name, alias, owner)
            accepted[alias] = name

        added = 0
        for alias, name in accepted.items():
            if alias not in self._aliases:
                self._aliases[alias] = name
                added += 1
        if added:
            logger.info(f"Добавлено пользовательских алиасов: {added}")
        return added

    def resolve(self, token: str) -> Optional[Command]:
        token = token.lower()
        command = self._commands.get(token)
        if command is not None:
            return command
        canonical = self._aliases.get(token)
        if canonical is None:
            return None
        return self._commands.get(canonical)

    def commands(self, category: Optional[str] = None, include_hidden: bool = False) -> List[Command]:
        return [
            c for c in self._commands.values()
            if (include_hidden or not c.hidden) and (category is None or c.category == category)
        ]

    def categories(self) -> List[str]:
        return sorted({c.category for c in self._commands.values()})

    @property
    def aliases(self) -> Dict[str, str]:
        return dict(self._aliases)

    def __contains__(self, token: str) -> bool:
        return self.resolve(token) is not None

    def __len__(self) -> int:
        return len(self._commands)
