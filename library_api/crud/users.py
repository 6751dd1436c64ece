from sqlalchemy import delete, insert, select, update

from ..core.logging import get_logger
from ..errors import ConflictError, InvalidError, NotFoundError
from ..schemas.user import UserCreate, UserUpdate
from ..tables import users
from .unit_of_work import unit_of_work

logger = get_logger(__name__)


def list_users(engine):
    logger.info("Fetching all users")
    with engine.connect() as conn:
        rows = conn.execute(select(users)).mappings().all()
        return [dict(r) for r in rows]


def get_user(engine, user_id: int):
    logger.info("Fetching user with ID: %s", user_id)
    with engine.connect() as conn:
        row = conn.execute(select(users).where(users.c.id == user_id)).mappings().fetchone()
    if row is None:
        logger.warning("User with ID: %s not found", user_id)
        raise NotFoundError(f"User id {user_id} not found.")
    return dict(row)


def create_user(engine, user: UserCreate):
    taken = ConflictError("A user with the same email already exists.")
    with unit_of_work(engine, on_integrity_error=taken) as conn:
        existing = conn.execute(select(users.c.id).where(users.c.email == user.email)).first()
        if existing is not None:
            logger.warning("Attempt to add a new user with duplicate email: %s", user.email)
            raise taken
        res = conn.execute(insert(users).values(name=user.name, email=user.email))
        user_id = res.inserted_primary_key[0]
    logger.info("New user added with ID: %s", user_id)
    return {"id": user_id, "name": user.name, "email": user.email}


def update_user(engine, user_id: int, user: UserUpdate):
    if user.id != user_id:
        logger.warning("Mismatched ID for user update: %s != %s", user.id, user_id)
        raise InvalidError("Mismatched user ID.")
    taken = ConflictError("A user with the same email already exists.")
    with unit_of_work(engine, on_integrity_error=taken) as conn:
        res = conn.execute(
            update(users).where(users.c.id == user_id).values(name=user.name, email=user.email)
        )
        if res.rowcount == 0:
            logger.warning("Attempted to update non-existent user with ID: %s", user_id)
            raise NotFoundError(f"User id {user_id} not found.")
    logger.info("User with ID: %s updated", user_id)


def delete_user(engine, user_id: int):
    """Delete a user.

    Unlike books and copies there is no check for existing loans here; the
    foreign key on loan_records still refuses the delete and that refusal is
    reported as a conflict.
    """
    conflict = ConflictError("Cannot delete user with loan records.")
    with unit_of_work(engine, on_integrity_error=conflict) as conn:
        res = conn.execute(delete(users).where(users.c.id == user_id))
        if res.rowcount == 0:
            logger.warning("Attempted to delete non-existent user with ID: %s", user_id)
            raise NotFoundError(f"User id {user_id} not found.")
    logger.info("User with ID: %s deleted", user_id)
