"""Infrastructure Layer — database access and cross-cutting concerns.

Invariants:
    - Infrastructure implements core protocols; core never imports from here
    - All driver exceptions are mapped to core/errors.py types at this boundary

Design Decisions:
    - Store and CRUD repositories receive the session manager explicitly (ADR: no global config)
"""
