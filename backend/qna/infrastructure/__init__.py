"""Infrastructure Layer — persistence gateway, session management and logging setup.

Invariants:
    - Infrastructure implements core/ interfaces, never the other way round
    - All driver errors surface as core.errors.DatabaseError
"""
