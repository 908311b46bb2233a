"""nitrocli status subcommand."""

from typing import TYPE_CHECKING

from nitrocli.argparse import SubcommandParser, parse_subcommand_args

if TYPE_CHECKING:
    from nitrocli.operations import DeviceOperations

DESCRIPTION = 'Print the status of the connected Nitrokey Storage'


def run(args: list[str], operations: 'DeviceOperations') -> None:
    """Inquire the status of the Nitrokey."""
    parser = SubcommandParser(DESCRIPTION)
    if not parse_subcommand_args(parser, args):
        return None
    return operations.query_status()
