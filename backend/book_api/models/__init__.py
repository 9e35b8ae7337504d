"""ORM Models: SQLAlchemy declarative models for all persisted entities.

Invariants:
    - All models inherit from Base (db/base.py)

Design Decisions:
    - One file per entity
    - All models imported here so SQLAlchemy resolves string-based relationship()
      references before any query runs
"""

from book_api.models.user import User  # noqa: F401
from book_api.models.author import Author  # noqa: F401
from book_api.models.book import Book  # noqa: F401
