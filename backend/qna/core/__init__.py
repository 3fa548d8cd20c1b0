"""Core Layer — domain entities, error taxonomy and repository interfaces.

Invariants:
    - core/ never imports from infrastructure/, api/ or services/
    - No IO in this package
"""
