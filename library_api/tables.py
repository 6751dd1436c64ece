"""Relational schema for the four library tables."""

from sqlalchemy import (
    Boolean,
    Column,
    DateTime,
    ForeignKey,
    Integer,
    MetaData,
    String,
    Table,
    Text,
    UniqueConstraint,
)


metadata = MetaData()

books = Table(
    "books",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("title", String(100), nullable=False),
    Column("author", String(255), nullable=False, default=""),
    Column("genre", String(20), nullable=False, default="Other"),
    Column("description", Text, nullable=False, default=""),
    UniqueConstraint("title", "author", "genre", name="uq_books_title_author_genre"),
)

book_copies = Table(
    "book_copies",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("book_id", Integer, ForeignKey("books.id", ondelete="CASCADE"), nullable=False, index=True),
    Column("is_available", Boolean, nullable=False),
)

users = Table(
    "users",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("name", String(100), nullable=False),
    Column("email", String(255), nullable=False),
    UniqueConstraint("email", name="uq_users_email"),
)

loan_records = Table(
    "loan_records",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("copy_id", Integer, ForeignKey("book_copies.id", ondelete="RESTRICT"), nullable=False, index=True),
    Column("user_id", Integer, ForeignKey("users.id", ondelete="RESTRICT"), nullable=False, index=True),
    Column("loan_date", DateTime, nullable=False),
    Column("expected_return_date", DateTime, nullable=False),
    Column("actual_return_date", DateTime, nullable=True),
)


def create_schema(engine):
    metadata.create_all(engine)
