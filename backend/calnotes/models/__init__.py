"""ORM Models — SQLAlchemy declarative models for all domain entities.

Invariants:
    - All models inherit from Base (db/base.py)
    - Note is the only aggregate; every row is scoped by owner_id

Design Decisions:
    - One file per entity for locality
    - All models imported here so Base.metadata is complete before create_all
"""

from calnotes.models.note import Note  # noqa: F401
