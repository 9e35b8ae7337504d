"""Core Layer: envelope, validation gate, tokens, errors. No IO, no DB.

Invariants:
    - No module in core/ imports from services/, api/, infrastructure/, or models/
    - All functions are deterministic given their inputs (the clock is a parameter)
"""
