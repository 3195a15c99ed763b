"""
EXIT command - leave the shell.
"""

from ..control_flow import LoopSignal
from ..process import Process
from . import register_command


@register_command('exit')
def cmd_exit(process: Process) -> LoopSignal:
    """
    Stop the read-eval loop

    Usage: exit

    Produces no output. Arguments are ignored; the shell always exits
    with status 0.
    """
    return LoopSignal.TERMINATE
