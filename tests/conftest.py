from datetime import timedelta

import pytest
from fastapi.testclient import TestClient

from library_api.core.clock import utcnow
from library_api.crud import books, copies, users
from library_api.db_connection import get_engine
from library_api.main import create_app
from library_api.schemas.book import BookCreate, Genre
from library_api.schemas.book_copy import BookCopyCreate
from library_api.schemas.loan import LoanCreate
from library_api.schemas.user import UserCreate
from library_api.tables import create_schema


@pytest.fixture
def engine(tmp_path):
    # Each test gets its own sqlite file so no state leaks between tests
    engine = get_engine(f"sqlite:///{tmp_path / 'library_test.db'}")
    create_schema(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def client(engine):
    app = create_app(engine)
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def book(engine):
    return books.create_book(engine, BookCreate(title="1984", author="George Orwell", genre=Genre.SCIFI))


@pytest.fixture
def copy(engine, book):
    return copies.create_copy(engine, BookCopyCreate(book_id=book["id"], is_available=True))


@pytest.fixture
def user(engine):
    return users.create_user(engine, UserCreate(name="John Doe", email="john.doe@example.com"))


@pytest.fixture
def make_loan():
    def _make(copy_id, user_id, days=14, **overrides):
        now = utcnow()
        data = {
            "copy_id": copy_id,
            "user_id": user_id,
            "loan_date": now,
            "expected_return_date": now + timedelta(days=days),
        }
        data.update(overrides)
        return LoanCreate(**data)

    return _make
