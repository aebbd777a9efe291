"""Services Layer — imperative shell around the pure core.

Invariants:
    - Services own the IO ordering: load, guard, cipher, persist
    - Services never build HTTP responses (routes do)

Design Decisions:
    - One service class per aggregate (NoteService)
"""
