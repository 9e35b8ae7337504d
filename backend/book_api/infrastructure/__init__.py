"""Infrastructure Layer: database sessions, password hashing, logging setup.

Invariants:
    - Infrastructure never imports from services/ or api/
"""
