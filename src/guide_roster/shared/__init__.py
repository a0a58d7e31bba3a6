"""
Shared Kernel Module
====================

Generic infrastructure used by the roster module and its entry points.

DO NOT add roster query logic to the shared kernel.
"""
