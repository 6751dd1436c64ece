"""Loan rule-set.

A loan is open while `actual_return_date` is null. Opening and returning a
loan each touch two tables (the loan and the copy it references) and run in
a single transaction.
"""

from sqlalchemy import delete, insert, select, update

from ..core.clock import utcnow
from ..core.logging import get_logger
from ..errors import InvalidError, NotFoundError
from ..schemas.loan import LoanCreate
from ..tables import book_copies, loan_records, users
from .unit_of_work import unit_of_work

logger = get_logger(__name__)

NOT_AVAILABLE = "The book copy is not available for loan."


def list_loans(engine):
    logger.info("Fetching all loans")
    with engine.connect() as conn:
        rows = conn.execute(select(loan_records)).mappings().all()
        return [dict(r) for r in rows]


def get_loan(engine, loan_id: int):
    logger.info("Fetching loan with ID: %s", loan_id)
    with engine.connect() as conn:
        row = conn.execute(select(loan_records).where(loan_records.c.id == loan_id)).mappings().fetchone()
    if row is None:
        logger.warning("Loan with ID: %s not found", loan_id)
        raise NotFoundError(f"Loan id {loan_id} not found.")
    return dict(row)


def create_loan(engine, loan: LoanCreate):
    """Open a loan and mark its copy unavailable.

    The copy is flipped with a conditional UPDATE, so when two requests race
    for the same copy only one of them sees a row change; the other fails
    exactly like the availability pre-check would have.
    """
    if loan.actual_return_date is not None:
        logger.warning("Actual return date should not be set for a new loan.")
        raise InvalidError("Actual return date should not be set for a new loan.")
    if loan.loan_date > utcnow():
        logger.warning("Loan date %s is in the future", loan.loan_date)
        raise InvalidError("Loan date cannot be in the future.")

    with unit_of_work(engine) as conn:
        user = conn.execute(select(users.c.id).where(users.c.id == loan.user_id)).first()
        if user is None:
            logger.warning("Attempt to loan with a non-existent user ID %s", loan.user_id)
            raise NotFoundError(f"User with ID {loan.user_id} not found.")

        copy = conn.execute(
            select(book_copies.c.is_available).where(book_copies.c.id == loan.copy_id)
        ).first()
        if copy is None or not copy.is_available:
            reason = "missing" if copy is None else "on loan"
            logger.warning("Attempt to loan book copy %s which is %s", loan.copy_id, reason)
            raise InvalidError(NOT_AVAILABLE)

        open_loan = conn.execute(
            select(loan_records.c.id).where(
                loan_records.c.copy_id == loan.copy_id,
                loan_records.c.user_id == loan.user_id,
                loan_records.c.actual_return_date.is_(None),
            )
        ).first()
        if open_loan is not None:
            logger.warning("User %s already has an active loan for copy %s", loan.user_id, loan.copy_id)
            raise InvalidError("You already have an active loan for this book copy.")

        flipped = conn.execute(
            update(book_copies)
            .where(book_copies.c.id == loan.copy_id, book_copies.c.is_available.is_(True))
            .values(is_available=False)
        )
        if flipped.rowcount != 1:
            logger.warning("Book copy %s was taken by a concurrent loan", loan.copy_id)
            raise InvalidError(NOT_AVAILABLE)

        values = {
            "copy_id": loan.copy_id,
            "user_id": loan.user_id,
            "loan_date": loan.loan_date,
            "expected_return_date": loan.expected_return_date,
            "actual_return_date": None,
        }
        res = conn.execute(insert(loan_records).values(**values))
        loan_id = res.inserted_primary_key[0]
    logger.info("New loan added with ID: %s, book copy %s set as unavailable", loan_id, loan.copy_id)
    return {"id": loan_id, **values}


def return_loan(engine, loan_id: int):
    """Close an open loan and make its copy available again."""
    with unit_of_work(engine) as conn:
        loan = conn.execute(
            select(loan_records).where(loan_records.c.id == loan_id)
        ).mappings().fetchone()
        if loan is None:
            logger.warning("Attempted to return non-existent loan with ID: %s", loan_id)
            raise NotFoundError(f"Loan id {loan_id} not found.")
        if loan["actual_return_date"] is not None:
            logger.warning("Attempted to return an already returned loan with ID: %s", loan_id)
            raise InvalidError("Loan has already been returned.")

        conn.execute(
            update(loan_records)
            .where(loan_records.c.id == loan_id)
            .values(actual_return_date=utcnow())
        )
        restored = conn.execute(
            update(book_copies)
            .where(book_copies.c.id == loan["copy_id"])
            .values(is_available=True)
        )
        if restored.rowcount == 0:
            # rolls back the return as well: the loan stays open
            logger.warning("No book copy found with ID: %s", loan["copy_id"])
            raise NotFoundError(f"No book copy found with ID: {loan['copy_id']}")
    logger.info("Loan %s returned, book copy %s available again", loan_id, loan["copy_id"])


def delete_loan(engine, loan_id: int):
    # removing a loan record does not touch the copy's availability
    with unit_of_work(engine) as conn:
        res = conn.execute(delete(loan_records).where(loan_records.c.id == loan_id))
        if res.rowcount == 0:
            logger.warning("Attempted to delete non-existent loan with ID: %s", loan_id)
            raise NotFoundError(f"Loan id {loan_id} not found.")
    logger.info("Loan with ID: %s deleted", loan_id)
