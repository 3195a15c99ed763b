"""
Built-in shell commands registry.

All built-in commands live in the commands/ directory. Importing this
module loads them and exposes the frozen registry.
"""

from .commands import load_all_commands

# Load all command modules to populate (and freeze) the registry
BUILTINS = load_all_commands()
