"""Book ORM: books belong to an author and the user who added them.

Invariants:
    - author_id and user_id cascade on delete at the store level

Design Decisions:
    - No routes expose books yet; the table exists so the schema matches
      the migrations and author deletes exercise the cascade
"""

from sqlalchemy import String, Integer, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column, relationship

from book_api.db.base import Base


class Book(Base):
    __tablename__ = "books"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    genre: Mapped[str] = mapped_column(String(255), nullable=False)
    year: Mapped[int] = mapped_column(Integer, nullable=False)
    author_id: Mapped[int | None] = mapped_column(
        Integer, ForeignKey("authors.id", ondelete="CASCADE"), nullable=True,
    )
    user_id: Mapped[int | None] = mapped_column(
        Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=True,
    )

    author: Mapped["Author"] = relationship("Author", back_populates="books")
