"""Pydantic Schemas — the API's request and response contracts.

Invariants:
    - entities.py: flat single-row bodies (create, patch, row responses)
    - views.py: nested assembled shapes returned by GET and association endpoints

Design Decisions:
    - Kept apart from models/: schemas are wire contracts, models are persistence
"""
