"""Core Layer — pure domain logic, no DB, no async.

Invariants:
    - No module in core/ imports from services/, api/, infrastructure/, models/ or db/
    - Collaborators (cipher, repository) reach core only through Protocols

Design Decisions:
    - Functional core separated from imperative shell
"""
