"""Transactional scope shared by the rule-sets."""

from contextlib import contextmanager

from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from ..core.logging import get_logger
from ..errors import StoreError

logger = get_logger(__name__)


@contextmanager
def unit_of_work(engine, on_integrity_error=None):
    """Yield a connection inside one transaction; commit on success, roll back on any failure.

    A constraint violation raised by the store is authoritative: when
    `on_integrity_error` is given it is raised in its place, so that a lost
    race reports the same failure kind as the matching pre-check. Any other
    database failure becomes a StoreError and is logged in full.
    """
    with engine.connect() as conn:
        trans = conn.begin()
        try:
            yield conn
            trans.commit()
        except IntegrityError as exc:
            if trans.is_active:
                trans.rollback()
            if on_integrity_error is None:
                logger.exception("Store rejected a write with an unexpected constraint violation")
                raise StoreError("The write could not be completed.") from exc
            logger.warning("Store constraint rejected write: %s", exc.orig)
            raise on_integrity_error from exc
        except SQLAlchemyError as exc:
            if trans.is_active:
                trans.rollback()
            logger.exception("Unexpected store failure")
            raise StoreError("The write could not be completed.") from exc
        except Exception:
            if trans.is_active:
                trans.rollback()
            raise
