"""Database Infrastructure — SQLAlchemy declarative base shared by all ORM models.

Invariants:
    - One async engine per process, owned by infrastructure/database.py
"""
