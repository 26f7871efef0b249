"""Services Layer — graph assembly, association mutation, fan-out helpers.

Invariants:
    - Services depend on the EntityStore protocol, never on SQLAlchemy
    - Plans are dispatched through explicit dicts (no auto-discovery)

Design Decisions:
    - Assembler and mutator are plain classes built per request by api/dependencies.py
"""
