"""
Roster Interfaces Layer
=======================

Console output for the roster programs.
"""

from guide_roster.roster.interfaces.console import print_steps, format_row

__all__ = ["print_steps", "format_row"]
