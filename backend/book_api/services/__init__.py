"""Services Layer: one service class per resource, each bound to a request session.

Invariants:
    - Services raise BookApiError subclasses only; store exceptions are translated
    - Services never build response envelopes (routes do)
"""
