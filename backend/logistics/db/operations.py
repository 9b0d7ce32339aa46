"""
Atomic store primitives shared by the services.

``insert_if_absent`` and ``upsert`` compile to the dialect's native
conflict clause so the existence check and the write are one statement.
"""
import functools
import logging
from typing import Any, Dict, Iterable, List
from sqlalchemy import Table
from sqlalchemy.dialects import mysql, postgresql, sqlite
from sqlalchemy.exc import OperationalError, TimeoutError as PoolTimeoutError
from sqlalchemy.orm import Session
from logistics.core.exceptions import ServiceUnavailableError

logger = logging.getLogger(__name__)

_INSERTS = {
    "sqlite": sqlite.insert,
    "postgresql": postgresql.insert,
    "mysql": mysql.insert,
    "mariadb": mysql.insert,
}


def _dialect_insert(db: Session, table: Table):
    name = db.get_bind().dialect.name
    try:
        return _INSERTS[name](table)
    except KeyError:
        raise ValueError(f"Upsert is not supported for dialect '{name}'")


def insert_if_absent(db: Session, table: Table, rows: List[Dict[str, Any]], key: str) -> int:
    """
    Insert rows whose ``key`` is not present yet; existing rows are untouched.

    Returns the number of rows actually inserted.
    """
    if not rows:
        return 0
    stmt = _dialect_insert(db, table).values(rows)
    if db.get_bind().dialect.name in ("mysql", "mariadb"):
        stmt = stmt.prefix_with("IGNORE")
    else:
        stmt = stmt.on_conflict_do_nothing(index_elements=[key])
    return db.execute(stmt).rowcount


def upsert(db: Session, table: Table, values: Dict[str, Any], key: str, update_fields: Iterable[str]) -> None:
    """Insert ``values``, or overwrite ``update_fields`` on the row sharing ``key``."""
    stmt = _dialect_insert(db, table).values(**values)
    if db.get_bind().dialect.name in ("mysql", "mariadb"):
        stmt = stmt.on_duplicate_key_update({f: stmt.inserted[f] for f in update_fields})
    else:
        stmt = stmt.on_conflict_do_update(
            index_elements=[key],
            set_={f: stmt.excluded[f] for f in update_fields},
        )
    db.execute(stmt)


def store_operation(func):
    """
    Convert store outages raised inside a service call to ServiceUnavailableError.

    The wrapped function must receive the session as its ``db`` keyword or as
    its last positional argument. The session is rolled back before raising.
    """
    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except (OperationalError, PoolTimeoutError) as e:
            db = kwargs.get("db")
            if db is None and args and isinstance(args[-1], Session):
                db = args[-1]
            if db is not None:
                db.rollback()
            logger.error(f"{func.__name__} failed, database unavailable: {e}")
            raise ServiceUnavailableError("Database is unavailable, try again later") from e
    return wrapper
