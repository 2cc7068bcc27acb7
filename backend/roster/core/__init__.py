"""Core Layer — pure listing logic, no IO, no async, no DB.

Invariants:
    - No module in core/ imports from services/, api/, infrastructure/, db/ or models/
    - All functions are pure and deterministic

Design Decisions:
    - Query parsing and sort-link generation live here; anything that builds
      SQL lives in services/ because it needs the ORM models
"""
