"""API Layer: FastAPI routes, dependencies and error handlers.

Invariants:
    - Routes registered explicitly in main.py (no auto-discovery)
    - Control flow per request: validation gate -> bearer claims -> service -> envelope
"""
