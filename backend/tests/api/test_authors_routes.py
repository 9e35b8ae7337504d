"""Author Routes: listing, CRUD by id, batch delete.

Invariants:
    - List is newest-first with {total, page, limit, pages} pagination
    - Search is case-insensitive on name and treats % and _ literally
    - Duplicate email is 409 and leaves exactly one row
    - Validation runs before authentication and before any store access
"""

from datetime import datetime, timedelta, timezone

import pytest
from sqlalchemy import func, select
from sqlalchemy.exc import OperationalError

from book_api.api.dependencies import get_author_service
from book_api.main import app
from book_api.models.author import Author
from book_api.services.authors import AuthorService

BASE_TIME = datetime(2025, 1, 1, tzinfo=timezone.utc)


@pytest.fixture
async def seed_authors(test_db):
    """25 authors; author_00 is oldest, author_24 newest."""
    authors = [
        Author(
            name=f"author_{i:02d}",
            email=f"author{i}@example.com",
            created_at=BASE_TIME + timedelta(minutes=i),
            updated_at=BASE_TIME + timedelta(minutes=i),
        )
        for i in range(25)
    ]
    test_db.add_all(authors)
    await test_db.commit()
    return authors


class _UnreachableSession:
    """Stands in for a session whose database is down."""

    def __init__(self):
        self.calls = 0

    async def _fail(self, *args, **kwargs):
        self.calls += 1
        raise OperationalError("SELECT 1", {}, Exception("connection refused"))

    execute = scalar = get = commit = _fail

    def add(self, *args, **kwargs):
        self.calls += 1

    async def rollback(self):
        pass


async def _count(test_db) -> int:
    return await test_db.scalar(select(func.count()).select_from(Author))


# --- List ---------------------------------------------------------------------

async def test_second_page_of_25_returns_ranks_11_to_20(client, auth_headers, seed_authors):
    res = await client.get("/authors", params={"page": 2, "limit": 10}, headers=auth_headers)
    assert res.status_code == 200

    body = res.json()
    assert body["pagination"] == {"total": 25, "page": 2, "limit": 10, "pages": 3}
    assert [a["name"] for a in body["data"]] == [f"author_{i:02d}" for i in range(14, 4, -1)]


async def test_list_defaults_to_first_page_of_per_page(client, auth_headers, seed_authors):
    res = await client.get("/authors", headers=auth_headers)
    body = res.json()
    assert body["pagination"] == {"total": 25, "page": 1, "limit": 10, "pages": 3}
    assert body["data"][0]["name"] == "author_24"


async def test_list_page_past_end_is_empty(client, auth_headers, seed_authors):
    res = await client.get("/authors", params={"page": 9}, headers=auth_headers)
    body = res.json()
    assert body["data"] == []
    assert body["pagination"]["total"] == 25


async def test_search_is_case_insensitive_substring(client, auth_headers, test_db):
    test_db.add_all([
        Author(name="Ursula K. Le Guin", email="ursula@example.com"),
        Author(name="Octavia Butler", email="octavia@example.com"),
        Author(name="Ann Leckie", email="ann@example.com"),
    ])
    await test_db.commit()

    res = await client.get("/authors", params={"search": "LE"}, headers=auth_headers)
    names = {a["name"] for a in res.json()["data"]}
    assert names == {"Ursula K. Le Guin", "Octavia Butler", "Ann Leckie"}

    res = await client.get("/authors", params={"search": "guin"}, headers=auth_headers)
    body = res.json()
    assert [a["name"] for a in body["data"]] == ["Ursula K. Le Guin"]
    assert body["pagination"] == {"total": 1, "page": 1, "limit": 10, "pages": 1}


async def test_search_wildcards_are_literal(client, auth_headers, seed_authors):
    res = await client.get("/authors", params={"search": "%"}, headers=auth_headers)
    assert res.json()["pagination"]["total"] == 0


@pytest.mark.parametrize("params", [{"page": 0}, {"limit": 0}, {"limit": 101}, {"page": "two"}])
async def test_bad_paging_params_are_400(client, auth_headers, params):
    res = await client.get("/authors", params=params, headers=auth_headers)
    assert res.status_code == 400
    assert res.json()["success"] is False


async def test_list_requires_bearer(client):
    res = await client.get("/authors")
    assert res.status_code == 401


# --- Get ----------------------------------------------------------------------

async def test_get_author_by_id(client, auth_headers, seed_authors):
    target = seed_authors[3]
    res = await client.get(f"/authors/{target.id}", headers=auth_headers)
    assert res.status_code == 200
    assert res.json()["data"]["email"] == "author3@example.com"


async def test_get_missing_author_is_404(client, auth_headers):
    res = await client.get("/authors/4242", headers=auth_headers)
    assert res.status_code == 404
    assert res.json()["message"] == "Author not found"


# --- Create -------------------------------------------------------------------

async def test_create_author(client, auth_headers, test_db):
    res = await client.post("/authors", headers=auth_headers, json={
        "name": "  Iain Banks ", "email": "Iain@Example.com", "bio": " Culture series ",
    })
    assert res.status_code == 201

    data = res.json()["data"]
    assert data["name"] == "Iain Banks"
    assert data["email"] == "iain@example.com"
    assert data["bio"] == "Culture series"
    assert data["created_at"] and data["updated_at"]
    assert await _count(test_db) == 1


async def test_create_duplicate_email_conflicts_leaving_one_row(client, auth_headers, test_db):
    payload = {"name": "First", "email": "same@example.com"}
    assert (await client.post("/authors", headers=auth_headers, json=payload)).status_code == 201

    res = await client.post("/authors", headers=auth_headers, json={**payload, "name": "Second"})
    assert res.status_code == 409
    assert res.json()["message"] == "Author with this email already exists"
    assert await _count(test_db) == 1


async def test_create_bio_too_long_is_400(client, auth_headers):
    res = await client.post("/authors", headers=auth_headers, json={
        "name": "Verbose", "email": "v@example.com", "bio": "x" * 501,
    })
    assert res.status_code == 400
    assert res.json()["errors"][0]["message"] == "Bio must be less than 500 characters"


async def test_validation_runs_before_authentication(client):
    res = await client.post("/authors", json={"name": "", "email": "bad"})
    assert res.status_code == 400
    assert res.json()["status"] == "error"


async def test_valid_body_without_bearer_is_401(client):
    res = await client.post("/authors", json={"name": "Ok", "email": "ok@example.com"})
    assert res.status_code == 401


# --- Update -------------------------------------------------------------------

async def test_update_replaces_all_fields(client, auth_headers, test_db):
    created = await client.post("/authors", headers=auth_headers, json={
        "name": "Old", "email": "old@example.com", "bio": "old bio",
    })
    author_id = created.json()["data"]["id"]

    res = await client.put(f"/authors/{author_id}", headers=auth_headers, json={
        "name": "New", "email": "new@example.com",
    })
    assert res.status_code == 200
    data = res.json()["data"]
    assert (data["name"], data["email"], data["bio"]) == ("New", "new@example.com", None)

    row = (await test_db.execute(
        select(Author.name, Author.bio).where(Author.id == author_id),
    )).one()
    assert tuple(row) == ("New", None)


async def test_update_missing_author_is_404(client, auth_headers):
    res = await client.put("/authors/999", headers=auth_headers, json={
        "name": "Nobody", "email": "nobody@example.com",
    })
    assert res.status_code == 404


async def test_update_to_taken_email_conflicts(client, auth_headers, seed_authors):
    res = await client.put(f"/authors/{seed_authors[0].id}", headers=auth_headers, json={
        "name": "Clash", "email": "author1@example.com",
    })
    assert res.status_code == 409


# --- Delete -------------------------------------------------------------------

async def test_delete_author(client, auth_headers, seed_authors, test_db):
    res = await client.delete(f"/authors/{seed_authors[0].id}", headers=auth_headers)
    assert res.status_code == 200
    assert res.json()["message"] == "Author deleted successfully"
    assert await _count(test_db) == 24


async def test_delete_missing_author_is_404(client, auth_headers, seed_authors, test_db):
    res = await client.delete("/authors/999", headers=auth_headers)
    assert res.status_code == 404
    assert await _count(test_db) == 25


async def test_batch_delete(client, auth_headers, seed_authors, test_db):
    ids = [a.id for a in seed_authors[:3]] + [9999]
    res = await client.request("DELETE", "/authors", headers=auth_headers, json={"ids": ids})
    assert res.status_code == 200
    body = res.json()
    assert body["message"] == "3 authors deleted successfully"
    assert body["data"] == {"deletedCount": 3}
    assert await _count(test_db) == 22


async def test_batch_delete_matching_nothing_is_404(client, auth_headers, seed_authors):
    res = await client.request("DELETE", "/authors", headers=auth_headers, json={"ids": [9998, 9999]})
    assert res.status_code == 404
    assert res.json()["message"] == "No authors found with the provided IDs"


@pytest.mark.parametrize("payload", [{"ids": []}, {}, {"ids": "1,2"}, {"ids": [1, "x"]}])
async def test_batch_delete_bad_ids_fail_before_store_access(client, auth_headers, payload):
    session = _UnreachableSession()
    app.dependency_overrides[get_author_service] = lambda: AuthorService(session)

    res = await client.request("DELETE", "/authors", headers=auth_headers, json=payload)
    assert res.status_code == 400
    assert res.json()["errors"][0]["message"] == "Invalid or empty IDs array"
    assert session.calls == 0


# --- Store failures -----------------------------------------------------------

async def test_store_failure_is_500_with_underlying_message(client, auth_headers):
    app.dependency_overrides[get_author_service] = lambda: AuthorService(_UnreachableSession())

    res = await client.get("/authors", headers=auth_headers)
    assert res.status_code == 500
    body = res.json()
    assert body["success"] is False
    assert body["message"] == "Failed to retrieve authors"
    assert "connection refused" in body["errors"]


async def test_store_failure_on_create_is_500(client, auth_headers):
    app.dependency_overrides[get_author_service] = lambda: AuthorService(_UnreachableSession())

    res = await client.post("/authors", headers=auth_headers, json={
        "name": "Anyone", "email": "anyone@example.com",
    })
    assert res.status_code == 500
    assert res.json()["message"] == "Failed to create author"


# --- Out-of-range ids ---------------------------------------------------------

@pytest.mark.parametrize("author_id", ["0", "99999999999999999999", str(2**31)])
@pytest.mark.parametrize("method", ["GET", "DELETE"])
async def test_out_of_range_path_id_is_400(client, auth_headers, method, author_id):
    res = await client.request(method, f"/authors/{author_id}", headers=auth_headers)
    assert res.status_code == 400
    assert res.json()["status"] == "error"


async def test_out_of_range_path_id_on_update_is_400(client, auth_headers):
    res = await client.put("/authors/99999999999999999999", headers=auth_headers, json={
        "name": "Big", "email": "big@example.com",
    })
    assert res.status_code == 400


async def test_huge_page_is_400(client, auth_headers):
    res = await client.get("/authors", params={"page": 10**19}, headers=auth_headers)
    assert res.status_code == 400


async def test_largest_id_is_plain_404(client, auth_headers):
    res = await client.get(f"/authors/{2**31 - 1}", headers=auth_headers)
    assert res.status_code == 404


async def test_batch_delete_out_of_range_ids_is_400(client, auth_headers, seed_authors, test_db):
    res = await client.request("DELETE", "/authors", headers=auth_headers, json={"ids": [10**20]})
    assert res.status_code == 400
    assert res.json()["errors"][0]["message"] == "Invalid or empty IDs array"
    assert await _count(test_db) == 25
