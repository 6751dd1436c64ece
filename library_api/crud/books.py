from sqlalchemy import delete, insert, select, update

from ..core.logging import get_logger
from ..errors import ConflictError, DuplicateError, InvalidError, NotFoundError
from ..schemas.book import BookCreate, BookUpdate
from ..tables import book_copies, books
from .unit_of_work import unit_of_work

logger = get_logger(__name__)


def _book_values(book: BookCreate) -> dict:
    return {
        "title": book.title,
        "author": book.author,
        "genre": book.genre.value,
        "description": book.description,
    }


def list_books(engine):
    logger.info("Fetching all the books from the database.")
    with engine.connect() as conn:
        rows = conn.execute(select(books)).mappings().all()
        return [dict(r) for r in rows]


def get_book(engine, book_id: int):
    with engine.connect() as conn:
        row = conn.execute(select(books).where(books.c.id == book_id)).mappings().fetchone()
    if row is None:
        logger.warning("Book %s not found", book_id)
        raise NotFoundError(f"Book id {book_id} not found.")
    return dict(row)


def create_book(engine, book: BookCreate):
    """Insert a book unless one with the same title, author and genre exists."""
    values = _book_values(book)
    duplicate = DuplicateError("A book with the same title, author and genre already exists.")
    with unit_of_work(engine, on_integrity_error=duplicate) as conn:
        existing = conn.execute(
            select(books.c.id).where(
                books.c.title == values["title"],
                books.c.author == values["author"],
                books.c.genre == values["genre"],
            )
        ).first()
        if existing is not None:
            logger.warning(
                "Attempt to add a duplicate book: %s, %s, %s",
                values["title"], values["author"], values["genre"],
            )
            raise duplicate
        res = conn.execute(insert(books).values(**values))
        book_id = res.inserted_primary_key[0]
    logger.info("A new book has been created: %s", book_id)
    return {"id": book_id, **values}


def update_book(engine, book_id: int, book: BookUpdate):
    # uniqueness is only pre-checked on create; the store constraint still applies
    if book.id != book_id:
        raise InvalidError("Mismatched book ID.")
    values = _book_values(book)
    conflict = ConflictError("A book with the same title, author and genre already exists.")
    with unit_of_work(engine, on_integrity_error=conflict) as conn:
        res = conn.execute(update(books).where(books.c.id == book_id).values(**values))
        if res.rowcount == 0:
            logger.warning("Failed to find book to update: %s", book_id)
            raise NotFoundError(f"Book id {book_id} not found.")
    logger.info("Updated book %s", book_id)


def delete_book(engine, book_id: int):
    conflict = ConflictError("Cannot delete book with associated copies.")
    with unit_of_work(engine, on_integrity_error=conflict) as conn:
        row = conn.execute(select(books.c.id).where(books.c.id == book_id)).first()
        if row is None:
            logger.warning("Attempted to delete non-existent book %s", book_id)
            raise NotFoundError(f"Book id {book_id} not found.")
        has_copies = conn.execute(
            select(book_copies.c.id).where(book_copies.c.book_id == book_id).limit(1)
        ).first()
        if has_copies is not None:
            logger.warning("Attempted to delete book %s which still has copies", book_id)
            raise conflict
        conn.execute(delete(books).where(books.c.id == book_id))
    logger.info("Book %s deleted", book_id)
