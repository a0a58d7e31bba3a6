"""
Guide Roster
============

Tour of ORM query features over a guide/student roster.
"""

__version__ = "1.0.0"
