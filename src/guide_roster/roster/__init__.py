"""
Roster Module
=============

Bounded context for guides and the students they look after.

Responsibilities:
- Map Guide and Student onto the guide/student tables
- Demonstrate entity, projection, native, named, aggregate and join queries
- Insert students, with or without a guide
"""
