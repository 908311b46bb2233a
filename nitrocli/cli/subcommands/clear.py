"""nitrocli clear subcommand."""

from typing import TYPE_CHECKING

from nitrocli.argparse import SubcommandParser, parse_subcommand_args

if TYPE_CHECKING:
    from nitrocli.operations import DeviceOperations

DESCRIPTION = 'Clears the cached passphrase'


def run(args: list[str], operations: 'DeviceOperations') -> None:
    """Clear the passphrase cached when opening the encrypted volume."""
    parser = SubcommandParser(DESCRIPTION)
    if not parse_subcommand_args(parser, args):
        return None
    return operations.clear_cached_passphrase()
