from fastapi.testclient import TestClient
from app.main import app
from app.responses import GENERIC_ERROR_MESSAGE

client = TestClient(app)


def _create_author(firstname="Autor", lastname="Integracion"):
    r = client.post("/api/authors", json={"firstname": firstname, "lastname": lastname, "bio": None})
    assert r.status_code == 201
    return r.json()


def test_get_books_returns_list():
    r = client.get("/api/books")
    assert r.status_code == 200
    assert r.json() == []


def test_post_book_with_valid_author_id():
    author = _create_author()

    r = client.post(
        "/api/books",
        json={"title": "Libro 1", "year": 2001, "isbn": "978-3-16-148410-0", "author_id": author["id"]},
    )
    assert r.status_code == 201
    book = r.json()
    assert book["author_id"] == author["id"]
    assert book["isbn"] == "978-3-16-148410-0"

    r2 = client.get(f"/api/books/{book['id']}")
    assert r2.status_code == 200
    assert r2.json() == book


def test_post_book_with_invalid_author_id_returns_400(fake_books):
    r = client.post("/api/books", json={"title": "Libro X", "author_id": 999999999})

    assert r.status_code == 400
    assert "author_id" in r.json()["errors"]
    assert fake_books.total_calls == 0


def test_post_book_without_title_is_rejected(fake_books):
    author = _create_author()

    r = client.post("/api/books", json={"title": "", "author_id": author["id"]})

    assert r.status_code == 400
    assert fake_books.total_calls == 0


def test_get_book_404():
    r = client.get("/api/books/31337")
    assert r.status_code == 404
    assert r.json()["detail"] == "Book not found"


def test_put_book_moves_it_to_another_author():
    ada = _create_author("Ada", "Lovelace")
    grace = _create_author("Grace", "Hopper")
    book = client.post("/api/books", json={"title": "Notes", "author_id": ada["id"]}).json()

    r = client.put(
        f"/api/books/{book['id']}",
        json={"id": book["id"], "title": "Notes (2nd ed.)", "year": 1953, "author_id": grace["id"]},
    )
    assert r.status_code == 204

    assert client.get(f"/api/authors/{ada['id']}/books").json() == []
    moved = client.get(f"/api/authors/{grace['id']}/books").json()
    assert [(b["title"], b["year"]) for b in moved] == [("Notes (2nd ed.)", 1953)]


def test_put_book_with_mismatched_id_is_bad_request(fake_books):
    r = client.put("/api/books/3", json={"id": 4, "title": "Otro", "author_id": 1})

    assert r.status_code == 400
    assert fake_books.total_calls == 0


def test_put_book_when_repository_fails_returns_generic_500(fake_books):
    author = _create_author()
    fake_books.result = False

    r = client.put("/api/books/1", json={"id": 1, "title": "Notes", "author_id": author["id"]})

    assert r.status_code == 500
    assert r.json() == {"detail": GENERIC_ERROR_MESSAGE}
    assert fake_books.calls["update"] == 1


def test_delete_book():
    author = _create_author()
    book = client.post("/api/books", json={"title": "Notes", "author_id": author["id"]}).json()

    r = client.delete(f"/api/books/{book['id']}")
    assert r.status_code == 204
    assert client.get(f"/api/books/{book['id']}").status_code == 404
    assert client.get(f"/api/authors/{author['id']}").json()["books"] == []


def test_out_of_range_book_id_is_404():
    huge = 99999999999999999999

    assert client.get(f"/api/books/{huge}").status_code == 404
    assert client.delete(f"/api/books/{huge}").status_code == 404
