"""Main CLI entry point for nitrocli."""

import argparse
import re
import sys
from pathlib import Path

from nitrocli import __version__
from nitrocli.command import Command
from nitrocli.errors import NitrocliError
from nitrocli.logging import configure_logging, get_logger
from nitrocli.models import CliArgs
from nitrocli.operations import DeviceOperations

logger = get_logger(__name__)

PROG = 'nitrocli'

# Top-level options that consume the following token as their value
_VALUE_OPTION = re.compile(r'(-[vV]*c|--config)')


def argparse_command(value: str) -> Command:
    """Argparse type converting the command word into a Command."""
    command = Command.parse(value)
    if command is None:
        choices = '|'.join(str(c) for c in Command)
        msg = f'unknown command: {value} (choose from {choices})'
        raise argparse.ArgumentTypeError(msg)
    return command


def create_parser() -> argparse.ArgumentParser:
    """Create the top-level argument parser."""
    parser = argparse.ArgumentParser(
        prog=PROG,
        description='Provides access to a Nitrokey device',
    )
    parser.add_argument(
        '-v',
        '--verbose',
        action='store_true',
        help='Enable verbose logging',
    )
    parser.add_argument(
        '-c',
        '--config',
        type=Path,
        help='Path to the nitrocli configuration file',
    )
    parser.add_argument(
        '-V',
        '--version',
        action='version',
        version=f'%(prog)s {__version__}',
    )
    parser.add_argument(
        'command',
        type=argparse_command,
        help='The command to execute (clear|close|open|status)',
    )
    # Only shown in the help text, the tokens after the command word are
    # taken from the command line as given.
    parser.add_argument(
        'arguments',
        nargs=argparse.REMAINDER,
        help='The arguments for the command',
    )
    return parser


def find_command_index(argv: list[str]) -> int:
    """Return the index of the command word in ``argv``.

    Returns ``len(argv)`` if there is no command word.
    """
    takes_value = False
    for index, token in enumerate(argv):
        if takes_value:
            takes_value = False
            continue
        if token == '--':
            return index + 1
        if token.startswith('-') and token != '-':
            takes_value = _VALUE_OPTION.fullmatch(token) is not None
            continue
        return index
    return len(argv)


def parse_args_to_model(argv: list[str] | None = None) -> CliArgs:
    """Parse command line arguments into a typed Pydantic model.

    Only the top-level options and the command word are parsed. The tokens
    after the command word are handed to the command verbatim, preceded by
    the program name to report in its usage messages, e.g.
    ``nitrocli status``.
    """
    if argv is None:
        argv = sys.argv[1:]
    split = find_command_index(argv) + 1
    parser = create_parser()
    raw_args = parser.parse_args(argv[:split])

    return CliArgs(
        command=raw_args.command,
        arguments=[f'{PROG} {raw_args.command}', *argv[split:]],
        verbose=raw_args.verbose,
        config=raw_args.config,
    )


def parse_arguments(argv: list[str] | None = None) -> tuple[Command, list[str]]:
    """Parse the command line and return the command and its arguments."""
    args = parse_args_to_model(argv)
    return args.command, args.arguments


def run_command(args: CliArgs, operations: DeviceOperations) -> None:
    """Dispatch to the handler of the selected command."""
    logger.debug(
        'dispatching_command',
        command=str(args.command),
        _verbose_arguments=args.arguments,
    )
    return args.command.execute(args.arguments, operations)


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the nitrocli CLI."""
    args = parse_args_to_model(argv)

    configure_logging(verbose=args.verbose)

    try:
        run_command(args, DeviceOperations(config_path=args.config))
    except NitrocliError as e:
        logger.debug('command_failed', command=str(args.command), error=str(e))
        sys.stderr.write(f'Error: {e}\n')
        return 1
    return 0


if __name__ == '__main__':
    sys.exit(main())
