from sqlalchemy import delete, insert, select, update

from ..core.logging import get_logger
from ..errors import ConflictError, InvalidError, NotFoundError
from ..schemas.book_copy import BookCopyCreate, BookCopyUpdate
from ..tables import book_copies, books, loan_records
from .unit_of_work import unit_of_work

logger = get_logger(__name__)


def _book_exists(conn, book_id: int) -> bool:
    return conn.execute(select(books.c.id).where(books.c.id == book_id)).first() is not None


def list_copies(engine):
    logger.info("Fetching all book copies")
    with engine.connect() as conn:
        rows = conn.execute(select(book_copies)).mappings().all()
        return [dict(r) for r in rows]


def get_copy(engine, copy_id: int):
    with engine.connect() as conn:
        row = conn.execute(select(book_copies).where(book_copies.c.id == copy_id)).mappings().fetchone()
    if row is None:
        logger.warning("Book copy %s not found", copy_id)
        raise NotFoundError(f"Book copy id {copy_id} not found.")
    return dict(row)


def create_copy(engine, copy: BookCopyCreate):
    if copy.id != 0:
        raise InvalidError("Id should not be provided.")
    missing_book = NotFoundError(f"No book found with ID {copy.book_id}")
    with unit_of_work(engine, on_integrity_error=missing_book) as conn:
        if not _book_exists(conn, copy.book_id):
            logger.warning("Attempt to add a copy of non-existent book %s", copy.book_id)
            raise missing_book
        res = conn.execute(
            insert(book_copies).values(book_id=copy.book_id, is_available=copy.is_available)
        )
        copy_id = res.inserted_primary_key[0]
    logger.info("New book copy added with ID: %s", copy_id)
    return {"id": copy_id, "book_id": copy.book_id, "is_available": copy.is_available}


def update_copy(engine, copy_id: int, copy: BookCopyUpdate):
    if copy.id != copy_id:
        raise InvalidError("Mismatched book copy ID in request")
    missing_book = NotFoundError(f"No book found with ID {copy.book_id}")
    with unit_of_work(engine, on_integrity_error=missing_book) as conn:
        existing = conn.execute(select(book_copies.c.id).where(book_copies.c.id == copy_id)).first()
        if existing is None:
            logger.warning("Attempted to update non-existent book copy with ID: %s", copy_id)
            raise NotFoundError(f"Book copy id {copy_id} not found.")
        if not _book_exists(conn, copy.book_id):
            raise missing_book
        conn.execute(
            update(book_copies)
            .where(book_copies.c.id == copy_id)
            .values(book_id=copy.book_id, is_available=copy.is_available)
        )
    logger.info("Book copy with ID: %s updated successfully", copy_id)


def delete_copy(engine, copy_id: int):
    """Delete a copy that no loan, open or closed, has ever referenced."""
    conflict = ConflictError("Cannot delete book copy with loan records.")
    with unit_of_work(engine, on_integrity_error=conflict) as conn:
        existing = conn.execute(select(book_copies.c.id).where(book_copies.c.id == copy_id)).first()
        if existing is None:
            logger.warning("Attempted to delete non-existent book copy with ID: %s", copy_id)
            raise NotFoundError(f"Book copy id {copy_id} not found.")
        has_loans = conn.execute(
            select(loan_records.c.id).where(loan_records.c.copy_id == copy_id).limit(1)
        ).first()
        if has_loans is not None:
            logger.warning("Attempted to delete book copy with ID: %s which has loan records", copy_id)
            raise conflict
        conn.execute(delete(book_copies).where(book_copies.c.id == copy_id))
    logger.info("Book copy with ID: %s deleted", copy_id)
