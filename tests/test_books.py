import pytest
from pydantic import ValidationError

from library_api.crud import books, copies
from library_api.errors import ConflictError, DuplicateError, InvalidError, NotFoundError
from library_api.schemas.book import BookCreate, BookUpdate, Genre
from library_api.schemas.book_copy import BookCopyCreate


def test_list_books_empty_database(engine):
    assert books.list_books(engine) == []


def test_create_and_get_book(engine):
    created = books.create_book(
        engine,
        BookCreate(title="Book Three", author="Author C", description="A detailed description here."),
    )
    assert created["id"] > 0
    fetched = books.get_book(engine, created["id"])
    assert fetched["title"] == "Book Three"
    assert fetched["genre"] == "Other"
    assert fetched["description"] == "A detailed description here."


def test_create_book_with_empty_author(engine):
    created = books.create_book(engine, BookCreate(title="Anonymous Tales", author=""))
    assert books.get_book(engine, created["id"])["author"] == ""


def test_duplicate_title_author_genre_rejected(engine):
    payload = BookCreate(title="Unique Title", author="Unique Author", genre=Genre.ROMANCE)
    books.create_book(engine, payload)
    with pytest.raises(DuplicateError):
        books.create_book(engine, payload)
    assert len(books.list_books(engine)) == 1


def test_duplicate_is_a_conflict(engine):
    payload = BookCreate(title="Same", author="Same")
    books.create_book(engine, payload)
    with pytest.raises(ConflictError):
        books.create_book(engine, payload)


@pytest.mark.parametrize(
    "changed",
    [
        {"title": "Other Title"},
        {"author": "Other Author"},
        {"genre": Genre.SCIFI},
    ],
)
def test_changing_one_field_allows_creation(engine, changed):
    base = {"title": "Common Title", "author": "Common Author", "genre": Genre.ROMANCE}
    books.create_book(engine, BookCreate(**base))
    books.create_book(engine, BookCreate(**{**base, **changed}))
    assert len(books.list_books(engine)) == 2


def test_title_length_boundaries():
    assert BookCreate(title="x" * 100).title == "x" * 100
    with pytest.raises(ValidationError):
        BookCreate(title="x" * 101)
    with pytest.raises(ValidationError):
        BookCreate(title="")


@pytest.mark.parametrize("title", [" ", "   ", "\t\n"])
def test_blank_title_rejected(title):
    with pytest.raises(ValidationError):
        BookCreate(title=title)


def test_title_with_surrounding_spaces_kept():
    assert BookCreate(title="  Dune  ").title == "  Dune  "


def test_author_length_boundaries():
    assert BookCreate(title="Long Author", author="a" * 255).author == "a" * 255
    with pytest.raises(ValidationError):
        BookCreate(title="Long Author", author="a" * 256)


def test_unknown_genre_rejected():
    with pytest.raises(ValidationError):
        BookCreate(title="Valid Title", genre="Poetry")


def test_get_missing_book(engine):
    with pytest.raises(NotFoundError):
        books.get_book(engine, 99)


def test_update_book(engine, book):
    books.update_book(
        engine,
        book["id"],
        BookUpdate(id=book["id"], title="Animal Farm", author="George Orwell Updated", genre=Genre.HISTORY),
    )
    fetched = books.get_book(engine, book["id"])
    assert fetched["title"] == "Animal Farm"
    assert fetched["author"] == "George Orwell Updated"
    assert fetched["genre"] == "History"


def test_update_book_without_payload_id_rejected(engine, book):
    with pytest.raises(InvalidError):
        books.update_book(engine, book["id"], BookUpdate(title="No Id Given"))
    assert books.get_book(engine, book["id"])["title"] == "1984"


def test_update_book_mismatched_id(engine, book):
    with pytest.raises(InvalidError):
        books.update_book(engine, book["id"], BookUpdate(id=book["id"] + 1, title="Mismatch"))


def test_update_missing_book(engine):
    with pytest.raises(NotFoundError):
        books.update_book(engine, 999, BookUpdate(id=999, title="Nonexistent Book"))


def test_update_into_existing_triple_is_a_conflict(engine, book):
    other = books.create_book(engine, BookCreate(title="Brave New World", author="Aldous Huxley"))
    with pytest.raises(ConflictError):
        books.update_book(
            engine, other["id"], BookUpdate(id=other["id"], title="1984", author="George Orwell", genre=Genre.SCIFI)
        )


def test_delete_book(engine, book):
    books.delete_book(engine, book["id"])
    with pytest.raises(NotFoundError):
        books.get_book(engine, book["id"])


def test_delete_missing_book(engine):
    with pytest.raises(NotFoundError):
        books.delete_book(engine, 42)


def test_delete_book_with_copies_conflicts(engine, book):
    copies.create_copy(engine, BookCopyCreate(book_id=book["id"], is_available=True))
    with pytest.raises(ConflictError):
        books.delete_book(engine, book["id"])
    assert books.get_book(engine, book["id"])["title"] == "1984"
