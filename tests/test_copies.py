import pytest
from pydantic import ValidationError

from library_api.crud import copies, loans
from library_api.errors import ConflictError, InvalidError, NotFoundError
from library_api.schemas.book_copy import BookCopyCreate, BookCopyUpdate


@pytest.mark.parametrize("available", [True, False])
def test_create_copy_echoes_availability(engine, book, available):
    created = copies.create_copy(engine, BookCopyCreate(book_id=book["id"], is_available=available))
    assert created["id"] > 0
    assert created["book_id"] == book["id"]
    assert created["is_available"] is available
    assert copies.get_copy(engine, created["id"])["is_available"] is available


def test_create_copy_for_missing_book(engine):
    with pytest.raises(NotFoundError):
        copies.create_copy(engine, BookCopyCreate(book_id=999, is_available=True))
    assert copies.list_copies(engine) == []


def test_create_copy_with_id_rejected(engine, book):
    with pytest.raises(InvalidError):
        copies.create_copy(engine, BookCopyCreate(id=7, book_id=book["id"], is_available=True))


@pytest.mark.parametrize("payload", [{"book_id": 1}, {"book_id": 1, "is_available": "maybe"}, {"book_id": 1, "is_available": 1}])
def test_availability_must_be_a_boolean(payload):
    with pytest.raises(ValidationError):
        BookCopyCreate(**payload)


def test_list_copies(engine, book):
    copies.create_copy(engine, BookCopyCreate(book_id=book["id"], is_available=True))
    copies.create_copy(engine, BookCopyCreate(book_id=book["id"], is_available=False))
    listed = copies.list_copies(engine)
    assert len(listed) == 2
    assert {c["is_available"] for c in listed} == {True, False}


def test_update_copy(engine, copy):
    copies.update_copy(engine, copy["id"], BookCopyUpdate(id=copy["id"], book_id=copy["book_id"], is_available=False))
    assert copies.get_copy(engine, copy["id"])["is_available"] is False


def test_update_copy_mismatched_id(engine, copy):
    with pytest.raises(InvalidError):
        copies.update_copy(
            engine, copy["id"], BookCopyUpdate(id=copy["id"] + 1, book_id=copy["book_id"], is_available=False)
        )


def test_update_copy_without_payload_id_rejected(engine, copy):
    with pytest.raises(InvalidError):
        copies.update_copy(engine, copy["id"], BookCopyUpdate(book_id=copy["book_id"], is_available=False))
    assert copies.get_copy(engine, copy["id"])["is_available"] is True


def test_update_missing_copy(engine, book):
    with pytest.raises(NotFoundError):
        copies.update_copy(engine, 999, BookCopyUpdate(id=999, book_id=book["id"], is_available=True))


def test_update_copy_to_missing_book(engine, copy):
    with pytest.raises(NotFoundError):
        copies.update_copy(engine, copy["id"], BookCopyUpdate(id=copy["id"], book_id=999, is_available=True))
    assert copies.get_copy(engine, copy["id"])["book_id"] == copy["book_id"]


def test_delete_copy_without_loans(engine, copy):
    copies.delete_copy(engine, copy["id"])
    assert copies.list_copies(engine) == []


def test_delete_missing_copy(engine):
    with pytest.raises(NotFoundError):
        copies.delete_copy(engine, 5)


def test_delete_copy_with_open_loan_conflicts(engine, copy, user, make_loan):
    loans.create_loan(engine, make_loan(copy["id"], user["id"]))
    with pytest.raises(ConflictError):
        copies.delete_copy(engine, copy["id"])


def test_delete_copy_with_closed_loan_conflicts(engine, copy, user, make_loan):
    loan = loans.create_loan(engine, make_loan(copy["id"], user["id"]))
    loans.return_loan(engine, loan["id"])
    with pytest.raises(ConflictError):
        copies.delete_copy(engine, copy["id"])
    assert copies.get_copy(engine, copy["id"])["is_available"] is True
