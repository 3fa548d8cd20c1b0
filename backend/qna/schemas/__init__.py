"""Pydantic Schemas — request bodies and response payloads for the HTTP API.

Invariants:
    - Schemas validate shape at the system boundary; emptiness rules live in api/validation.py
    - Response payloads mirror core.entities field names (snake_case JSON)

Design Decisions:
    - Separate from models: schemas are API contracts, models are persistence
"""
