"""Sub-parser used by the nitrocli commands and its outcome translation."""

import argparse
import enum
import sys
from typing import IO, NoReturn

from nitrocli.errors import ArgparseError
from nitrocli.logging import get_logger

logger = get_logger(__name__)


class ParseOutcome(enum.Enum):
    """Result of running a sub-parser over a command's arguments."""

    SUCCESS = 'success'
    HELP_REQUESTED = 'help_requested'
    FAILURE = 'failure'


class _ParserExit(Exception):
    """Raised in place of SystemExit when a sub-parser wants to stop."""

    def __init__(self, status: int) -> None:
        super().__init__(status)
        self.status = status


class SubcommandParser(argparse.ArgumentParser):
    """Argument parser for a single nitrocli command.

    Unlike a plain ArgumentParser it never terminates the process. Help is
    written to ``stdout``, usage and error messages to ``stderr``, and the
    result is reported as a ParseOutcome.

    Args:
        description: One-line description shown in the help text.
        stdout: Sink for help output (default: the current ``sys.stdout``).
        stderr: Sink for usage errors (default: the current ``sys.stderr``).
    """

    def __init__(
        self,
        description: str,
        *,
        stdout: IO[str] | None = None,
        stderr: IO[str] | None = None,
    ) -> None:
        super().__init__(prog='nitrocli', description=description)
        self._stdout = stdout
        self._stderr = stderr

    @property
    def stdout(self) -> IO[str]:
        return self._stdout if self._stdout is not None else sys.stdout

    @property
    def stderr(self) -> IO[str]:
        return self._stderr if self._stderr is not None else sys.stderr

    def print_help(self, file: IO[str] | None = None) -> None:
        super().print_help(file or self.stdout)

    def print_usage(self, file: IO[str] | None = None) -> None:
        super().print_usage(file or self.stdout)

    def error(self, message: str) -> NoReturn:
        self.print_usage(self.stderr)
        self.exit(2, f'{self.prog}: error: {message}\n')

    def exit(self, status: int = 0, message: str | None = None) -> NoReturn:
        if message:
            self.stderr.write(message)
        raise _ParserExit(status)

    def parse(
        self,
        args: list[str],
        namespace: argparse.Namespace | None = None,
    ) -> ParseOutcome:
        """Parse a command's argument list.

        The first element of ``args`` is the program name to report in usage
        and help messages (e.g. ``nitrocli status``); the remaining elements
        are the arguments to parse into ``namespace``.
        """
        if args:
            self.prog = args[0]
        try:
            self.parse_args(args[1:], namespace)
        except _ParserExit as exc:
            if exc.status == 0:
                return ParseOutcome.HELP_REQUESTED
            return ParseOutcome.FAILURE
        return ParseOutcome.SUCCESS


def handle_parse_outcome(outcome: ParseOutcome) -> bool:
    """Translate a sub-parser outcome into a control decision.

    Returns:
        True if the command should go on with its work, False if help was
        shown and the command is done.

    Raises:
        ArgparseError: If the arguments could not be parsed.
    """
    if outcome is ParseOutcome.HELP_REQUESTED:
        logger.debug('help_shown')
        return False
    if outcome is ParseOutcome.FAILURE:
        raise ArgparseError
    return True


def parse_subcommand_args(
    parser: SubcommandParser,
    args: list[str],
    namespace: argparse.Namespace | None = None,
) -> bool:
    """Run ``parser`` over ``args`` and translate the outcome."""
    return handle_parse_outcome(parser.parse(args, namespace))
