"""Infrastructure Layer — persistence, cipher adapter and cross-cutting concerns.

Invariants:
    - Infrastructure implements the Protocols in core/repository_protocols.py
    - Library exceptions (SQLAlchemy, cryptography) are mapped to core/errors.py types

Design Decisions:
    - Adapters over raw clients: the service never sees a library exception
"""
