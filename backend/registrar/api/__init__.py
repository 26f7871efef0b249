"""API Layer — FastAPI routers, dependencies, and global error handlers.

Invariants:
    - Routes never contain join or validation logic (delegate to services)
    - Every RegistrarError reaches the client through error_handlers.py
"""
