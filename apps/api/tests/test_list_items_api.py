"""Owner-scoped list item API tests."""

from __future__ import annotations

import os
import unittest

from fastapi.testclient import TestClient

from bookshelf.core.config import get_settings
from bookshelf.main import create_app
from bookshelf.repositories.base import BookRecord
from bookshelf.repositories.memory import InMemoryStore

STRONG_PASSWORD = "!aBc123"


class _SettingsEnvCase(unittest.TestCase):
    _env_keys = ("BOOKSHELF_BCRYPT_ROUNDS", "BOOKSHELF_EXPOSE_ERROR_STACK")

    def setUp(self) -> None:
        self._old_env = {k: os.environ.get(k) for k in self._env_keys}
        os.environ["BOOKSHELF_BCRYPT_ROUNDS"] = "4"
        os.environ["BOOKSHELF_EXPOSE_ERROR_STACK"] = "true"
        get_settings.cache_clear()

    def tearDown(self) -> None:
        for key, value in self._old_env.items():
            if value is None:
                os.environ.pop(key, None)
            else:
                os.environ[key] = value
        get_settings.cache_clear()


def _seed_book(store: InMemoryStore, book_id: str, title: str = "The Hobbit") -> BookRecord:
    book = BookRecord(
        id=book_id,
        title=title,
        author="J. R. R. Tolkien",
        cover_image_url=f"https://example.test/covers/{book_id}.jpg",
        page_count=310,
        publisher="Allen & Unwin",
        synopsis="There and back again.",
    )
    store.books.records[book.id] = book
    return book


def _register(client: TestClient, username: str) -> tuple[dict, dict[str, str]]:
    response = client.post("/api/auth/register", json={"username": username, "password": STRONG_PASSWORD})
    user = response.json()["user"]
    return user, {"Authorization": f"Bearer {user['token']}"}


class ListItemCrudApiTests(_SettingsEnvCase):
    def test_list_item_crud(self) -> None:
        store = InMemoryStore()
        book = _seed_book(store, "book-1")
        client = TestClient(create_app(store))
        user, headers = _register(client, "crud-reader")

        created = client.post("/api/list-items", headers=headers, json={"bookId": book.id})
        self.assertEqual(created.status_code, 200)
        c_item = created.json()["listItem"]
        self.assertEqual(c_item["ownerId"], user["id"])
        self.assertEqual(c_item["bookId"], book.id)
        self.assertEqual(c_item["rating"], -1)
        self.assertEqual(c_item["notes"], "")
        self.assertIsNotNone(c_item["startDate"])
        self.assertIsNone(c_item["finishDate"])
        self.assertEqual(c_item["book"]["id"], book.id)
        self.assertEqual(c_item["book"]["title"], book.title)
        self.assertEqual(c_item["book"]["coverImageUrl"], book.cover_image_url)

        item_url = f"/api/list-items/{c_item['id']}"

        read = client.get(item_url, headers=headers)
        self.assertEqual(read.status_code, 200)
        self.assertEqual(read.json(), created.json())

        updated = client.put(item_url, headers=headers, json={"notes": "loved the riddles"})
        self.assertEqual(updated.status_code, 200)
        self.assertEqual(updated.json()["listItem"], {**c_item, "notes": "loved the riddles"})

        deleted = client.delete(item_url, headers=headers)
        self.assertEqual(deleted.status_code, 200)
        self.assertEqual(deleted.json(), {"success": True})

        missing = client.get(item_url, headers=headers)
        self.assertEqual(missing.status_code, 404)
        self.assertEqual(missing.json(), {"message": f"No list item was found with the id of {c_item['id']}"})

    def test_update_ignores_identity_fields(self) -> None:
        store = InMemoryStore()
        book = _seed_book(store, "book-1")
        client = TestClient(create_app(store))
        _, headers = _register(client, "patcher")
        item = client.post("/api/list-items", headers=headers, json={"bookId": book.id}).json()["listItem"]

        response = client.put(
            f"/api/list-items/{item['id']}",
            headers=headers,
            json={"id": "hijack", "ownerId": "someone-else", "bookId": "other-book", "rating": 4},
        )

        self.assertEqual(response.status_code, 200)
        updated = response.json()["listItem"]
        self.assertEqual(updated["id"], item["id"])
        self.assertEqual(updated["ownerId"], item["ownerId"])
        self.assertEqual(updated["bookId"], book.id)
        self.assertEqual(updated["rating"], 4)

    def test_finish_date_can_be_set(self) -> None:
        store = InMemoryStore()
        book = _seed_book(store, "book-1")
        client = TestClient(create_app(store))
        _, headers = _register(client, "finisher")
        item = client.post("/api/list-items", headers=headers, json={"bookId": book.id}).json()["listItem"]

        response = client.put(
            f"/api/list-items/{item['id']}",
            headers=headers,
            json={"finishDate": "2024-05-01T12:00:00Z"},
        )

        self.assertEqual(response.status_code, 200)
        self.assertTrue(response.json()["listItem"]["finishDate"].startswith("2024-05-01T12:00:00"))

    def test_out_of_range_rating_is_rejected(self) -> None:
        store = InMemoryStore()
        book = _seed_book(store, "book-1")
        client = TestClient(create_app(store))
        _, headers = _register(client, "rater")
        item = client.post("/api/list-items", headers=headers, json={"bookId": book.id}).json()["listItem"]

        response = client.put(f"/api/list-items/{item['id']}", headers=headers, json={"rating": 9})

        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json(), {"message": "Invalid request payload"})

    def test_list_returns_only_callers_items_with_books(self) -> None:
        store = InMemoryStore()
        first = _seed_book(store, "book-1", title="First")
        second = _seed_book(store, "book-2", title="Second")
        client = TestClient(create_app(store))
        _, owner_headers = _register(client, "owner")
        _, other_headers = _register(client, "other")

        client.post("/api/list-items", headers=owner_headers, json={"bookId": first.id})
        client.post("/api/list-items", headers=owner_headers, json={"bookId": second.id})
        client.post("/api/list-items", headers=other_headers, json={"bookId": first.id})

        response = client.get("/api/list-items", headers=owner_headers)

        self.assertEqual(response.status_code, 200)
        items = response.json()["listItems"]
        self.assertEqual([item["bookId"] for item in items], [first.id, second.id])
        self.assertEqual([item["book"]["title"] for item in items], ["First", "Second"])
        self.assertEqual(store.books.batch_read_count, 1)

    def test_list_for_user_without_items_is_empty(self) -> None:
        client = TestClient(create_app())
        _, headers = _register(client, "empty-shelf")

        response = client.get("/api/list-items", headers=headers)

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json(), {"listItems": []})


class ListItemCreateValidationApiTests(_SettingsEnvCase):
    def test_missing_book_id_returns_400(self) -> None:
        app = create_app()
        client = TestClient(app)
        _, headers = _register(client, "no-book")

        response = client.post("/api/list-items", headers=headers, json={})

        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json(), {"message": "No bookId provided"})
        self.assertEqual(app.state.store.list_items.write_count, 0)

    def test_second_item_for_same_book_is_rejected(self) -> None:
        store = InMemoryStore()
        book = _seed_book(store, "dup-book")
        client = TestClient(create_app(store))
        user, headers = _register(client, "duplicator")

        self.assertEqual(client.post("/api/list-items", headers=headers, json={"bookId": book.id}).status_code, 200)
        duplicate = client.post("/api/list-items", headers=headers, json={"bookId": book.id})

        self.assertEqual(duplicate.status_code, 400)
        self.assertEqual(
            duplicate.json(),
            {"message": f"User {user['id']} already has a list item for the book with the ID {book.id}"},
        )
        self.assertEqual(store.list_items.write_count, 1)

    def test_item_for_unknown_book_embeds_null_book(self) -> None:
        client = TestClient(create_app())
        _, headers = _register(client, "ghost-reader")

        response = client.post("/api/list-items", headers=headers, json={"bookId": "missing-book"})

        self.assertEqual(response.status_code, 200)
        self.assertIsNone(response.json()["listItem"]["book"])


class ListItemOwnershipApiTests(_SettingsEnvCase):
    def test_routes_require_bearer_token(self) -> None:
        app = create_app()
        client = TestClient(app)
        expected = {"code": "credentials_required", "message": "No authorization token was found"}

        calls = [
            ("GET", "/api/list-items", None),
            ("POST", "/api/list-items", {"bookId": "book-1"}),
            ("GET", "/api/list-items/some-id", None),
            ("PUT", "/api/list-items/some-id", {"notes": "x"}),
            ("DELETE", "/api/list-items/some-id", None),
        ]
        for method, url, body in calls:
            with self.subTest(method=method, url=url):
                response = client.request(method, url, json=body)
                self.assertEqual(response.status_code, 401)
                self.assertEqual(response.json(), expected)
        self.assertEqual(app.state.store.list_items.write_count, 0)

    def test_cross_owner_access_returns_403_naming_user_and_item(self) -> None:
        store = InMemoryStore()
        book = _seed_book(store, "book-1")
        client = TestClient(create_app(store))
        _, owner_headers = _register(client, "rightful-owner")
        intruder, intruder_headers = _register(client, "intruder")
        item = client.post("/api/list-items", headers=owner_headers, json={"bookId": book.id}).json()["listItem"]
        writes_before = store.list_items.write_count

        expected = {
            "message": f"User with id {intruder['id']} is not authorized to access the list item {item['id']}",
        }
        url = f"/api/list-items/{item['id']}"
        for method, body in (("GET", None), ("PUT", {"notes": "mine now"}), ("DELETE", None)):
            with self.subTest(method=method):
                response = client.request(method, url, headers=intruder_headers, json=body)
                self.assertEqual(response.status_code, 403)
                self.assertEqual(response.json(), expected)

        self.assertEqual(store.list_items.write_count, writes_before)
        self.assertEqual(store.list_items.records[item["id"]].notes, "")

    def test_missing_item_returns_404_for_every_item_route(self) -> None:
        client = TestClient(create_app())
        _, headers = _register(client, "seeker")

        for method, body in (("GET", None), ("PUT", {"notes": "x"}), ("DELETE", None)):
            with self.subTest(method=method):
                response = client.request(method, "/api/list-items/fake_listitem_id", headers=headers, json=body)
                self.assertEqual(response.status_code, 404)
                self.assertEqual(
                    response.json(),
                    {"message": "No list item was found with the id of fake_listitem_id"},
                )


class BookApiTests(_SettingsEnvCase):
    def test_get_book_returns_book_or_404(self) -> None:
        store = InMemoryStore()
        book = _seed_book(store, "book-9", title="Dune")
        client = TestClient(create_app(store))
        _, headers = _register(client, "browser")

        found = client.get(f"/api/books/{book.id}", headers=headers)
        self.assertEqual(found.status_code, 200)
        self.assertEqual(found.json()["book"]["title"], "Dune")
        self.assertEqual(found.json()["book"]["pageCount"], 310)

        missing = client.get("/api/books/nope", headers=headers)
        self.assertEqual(missing.status_code, 404)
        self.assertEqual(missing.json(), {"message": "No book was found with the id of nope"})

    def test_get_book_requires_bearer_token(self) -> None:
        client = TestClient(create_app())

        response = client.get("/api/books/book-1")

        self.assertEqual(response.status_code, 401)
