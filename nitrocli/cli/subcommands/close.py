"""nitrocli close subcommand."""

from typing import TYPE_CHECKING

from nitrocli.argparse import SubcommandParser, parse_subcommand_args

if TYPE_CHECKING:
    from nitrocli.operations import DeviceOperations

DESCRIPTION = 'Closes the encrypted volume on a Nitrokey Storage'


def run(args: list[str], operations: 'DeviceOperations') -> None:
    """Close the previously opened encrypted volume."""
    parser = SubcommandParser(DESCRIPTION)
    if not parse_subcommand_args(parser, args):
        return None
    return operations.close_volume()
