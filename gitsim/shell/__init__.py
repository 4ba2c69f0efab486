"""
gitsim shell - Interactive terminal for the git simulator.

Provides a prompt that behaves like a tiny git-enabled terminal.
"""

from .shell import GitSimShell, run_shell

__all__ = ['GitSimShell', 'run_shell']
