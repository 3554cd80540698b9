from contextlib import contextmanager
from typing import Iterator

from sqlalchemy.orm import Session


@contextmanager
def smart_transaction(session: Session) -> Iterator[Session]:
    """
    Run the block in a transaction that commits on exit and rolls back on error.

    A request session that has not touched the database yet gets a plain
    BEGIN; one that already autobegan (tests, scripts) gets a SAVEPOINT so
    the caller's outer transaction stays usable after a rollback.
    """
    cm = session.begin_nested() if session.in_transaction() else session.begin()
    with cm:
        yield session
