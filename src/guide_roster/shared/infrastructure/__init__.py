"""
Infrastructure Layer
=====================

Low-level technical concerns shared by every program:
- Logging setup
"""
