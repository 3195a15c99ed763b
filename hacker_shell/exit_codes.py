"""
Process exit codes used by the shell and by launched children.
"""

# Normal loop termination (exit builtin or end of input)
EXIT_SUCCESS = 0

# Unrecoverable allocation failure, or a child whose exec failed
EXIT_FAILURE = 1
