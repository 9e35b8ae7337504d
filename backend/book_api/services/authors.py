"""Author Service: list/get/create/update/delete over the shared authors table.

Invariants:
    - Any authenticated caller may mutate any author (no ownership check)
    - List order is newest-first (created_at desc, id desc as tie-break)
    - Search is a case-insensitive substring match on name, with LIKE
      wildcards in the search term matched literally
    - Update replaces every mutable field; an omitted bio clears it
    - Lookup-then-mutate is two statements; a row deleted in between makes
      the mutation report 404

Design Decisions:
    - Update/delete are single UPDATE ... RETURNING / DELETE statements after
      the existence check, so no ORM identity-map state is involved
"""

import logging
from datetime import datetime, timezone

from sqlalchemy import delete, func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from book_api.core.envelope import Pagination
from book_api.core.errors import NotFoundError
from book_api.infrastructure.database import translate_store_errors
from book_api.models.author import Author
from book_api.schemas.author import AuthorWrite

logger = logging.getLogger(__name__)

_DUPLICATE_EMAIL = "Author with this email already exists"


class AuthorService:
    """Author CRUD over one request-scoped session."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def list_authors(
        self, page: int, limit: int, search: str | None = None,
    ) -> tuple[list[Author], Pagination]:
        """Page through authors, optionally filtered by name."""
        async with translate_store_errors(self.db, "Failed to retrieve authors"):
            base = select(Author)
            if search:
                base = base.where(Author.name.icontains(search, autoescape=True))

            total = await self.db.scalar(
                select(func.count()).select_from(base.subquery()),
            )
            pagination = Pagination.compute(total or 0, page, limit)

            result = await self.db.execute(
                base.order_by(Author.created_at.desc(), Author.id.desc())
                .limit(limit)
                .offset(pagination.offset),
            )
            return list(result.scalars().all()), pagination

    async def get_author(self, author_id: int) -> Author:
        async with translate_store_errors(self.db, "Failed to retrieve author"):
            author = await self.db.get(Author, author_id)
        if author is None:
            raise NotFoundError("Author")
        return author

    async def create_author(self, body: AuthorWrite) -> Author:
        author = Author(name=body.name, email=body.email, bio=body.bio)
        async with translate_store_errors(
            self.db, "Failed to create author", _DUPLICATE_EMAIL,
        ):
            self.db.add(author)
            await self.db.commit()
            await self.db.refresh(author)
        logger.info(f"Author {author.id} created", extra={"resource_id": author.id})
        return author

    async def update_author(self, author_id: int, body: AuthorWrite) -> Author:
        async with translate_store_errors(
            self.db, "Failed to update author", _DUPLICATE_EMAIL,
        ):
            exists = await self.db.scalar(
                select(Author.id).where(Author.id == author_id),
            )
            if exists is None:
                raise NotFoundError("Author")

            result = await self.db.execute(
                update(Author)
                .where(Author.id == author_id)
                .values(
                    name=body.name,
                    email=body.email,
                    bio=body.bio,
                    updated_at=datetime.now(timezone.utc),
                )
                .returning(Author),
                execution_options={"synchronize_session": False},
            )
            author = result.scalar_one_or_none()
            if author is None:
                raise NotFoundError("Author")
            await self.db.commit()
        logger.info(f"Author {author_id} updated", extra={"resource_id": author_id})
        return author

    async def delete_author(self, author_id: int) -> None:
        async with translate_store_errors(self.db, "Failed to delete author"):
            result = await self.db.execute(
                delete(Author).where(Author.id == author_id),
                execution_options={"synchronize_session": False},
            )
            if not result.rowcount:
                raise NotFoundError("Author")
            await self.db.commit()
        logger.info(f"Author {author_id} deleted", extra={"resource_id": author_id})

    async def delete_authors(self, ids: list[int]) -> int:
        """Delete every author in ids. Returns how many rows went away."""
        async with translate_store_errors(self.db, "Failed to delete authors"):
            result = await self.db.execute(
                delete(Author).where(Author.id.in_(ids)),
                execution_options={"synchronize_session": False},
            )
            deleted = result.rowcount or 0
            if deleted == 0:
                raise NotFoundError(
                    "Author", "No authors found with the provided IDs",
                )
            await self.db.commit()
        logger.info(f"Batch deleted {deleted} authors")
        return deleted
