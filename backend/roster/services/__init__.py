"""Service Layer — turns parsed query state into database queries.

Invariants:
    - Services receive an AsyncSession; they never create engines or sessions
    - Read-only: no service in this package writes to the database
"""
