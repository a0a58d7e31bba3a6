"""
Infrastructure Layer
=====================

Low-level technical concerns:
- Database engine and session lifecycle
"""
