"""The top-level commands of nitrocli."""

import enum
from collections.abc import Callable
from typing import TYPE_CHECKING

from nitrocli.cli.subcommands import clear, close, status
from nitrocli.cli.subcommands import open as open_

if TYPE_CHECKING:
    from nitrocli.operations import DeviceOperations

Handler = Callable[[list[str], 'DeviceOperations'], None]


class Command(enum.Enum):
    """A top-level command for nitrocli."""

    CLEAR = 'clear'
    CLOSE = 'close'
    OPEN = 'open'
    STATUS = 'status'

    def __str__(self) -> str:
        return self.value

    @classmethod
    def parse(cls, name: str) -> 'Command | None':
        """Look up a command by its exact name, None if there is none."""
        try:
            return cls(name)
        except ValueError:
            return None

    @property
    def description(self) -> str:
        return _DESCRIPTIONS[self]

    def execute(self, args: list[str], operations: 'DeviceOperations') -> None:
        """Execute this command with the given arguments."""
        return _HANDLERS[self](args, operations)


_HANDLERS: dict[Command, Handler] = {
    Command.CLEAR: clear.run,
    Command.CLOSE: close.run,
    Command.OPEN: open_.run,
    Command.STATUS: status.run,
}

_DESCRIPTIONS: dict[Command, str] = {
    Command.CLEAR: clear.DESCRIPTION,
    Command.CLOSE: close.DESCRIPTION,
    Command.OPEN: open_.DESCRIPTION,
    Command.STATUS: status.DESCRIPTION,
}
