"""Core Layer — domain types, records, errors and in-memory joins; no IO, no DB.

Invariants:
    - No module in core/ imports from services/, api/, infrastructure/, or db/
    - Join functions are pure and deterministic
    - repository_protocols.py declares the store seam; implementations live elsewhere

Design Decisions:
    - Functional core separated from imperative shell (ADR: impureim sandwich)
"""
