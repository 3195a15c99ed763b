"""
HELP command - list the builtin commands.
"""

from ..control_flow import LoopSignal
from ..process import Process
from . import register_command

BANNER = "~~~Hacker Shell~~~The following commands are available:"


@register_command('help')
def cmd_help(process: Process) -> LoopSignal:
    """
    Print the banner and one line per builtin

    Usage: help

    Builtins are listed in registration order. Arguments are ignored.
    """
    process.stdout.write(f"{BANNER}\n")
    for name in process.context.builtin_names():
        process.stdout.write(f" {name}\n")
    return LoopSignal.CONTINUE
