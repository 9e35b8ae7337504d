"""Book API: REST service for users and authors with JWT authentication.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)
"""
