"""Schemas: validation rule sets, typed request payloads and response models.

Invariants:
    - Rule sets run in the validation gate before any payload model is built
    - Response models never include a password field

Design Decisions:
    - Separate from models: schemas are API contracts, models are persistence
"""
