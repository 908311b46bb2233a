"""nitrocli open subcommand."""

from typing import TYPE_CHECKING

from nitrocli.argparse import SubcommandParser, parse_subcommand_args

if TYPE_CHECKING:
    from nitrocli.operations import DeviceOperations

DESCRIPTION = 'Opens the encrypted volume on a Nitrokey Storage'


def run(args: list[str], operations: 'DeviceOperations') -> None:
    """Open the encrypted volume on the Nitrokey."""
    parser = SubcommandParser(DESCRIPTION)
    if not parse_subcommand_args(parser, args):
        return None
    return operations.open_volume()
