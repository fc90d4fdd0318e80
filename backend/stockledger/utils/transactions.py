import os
import re
import tempfile
from contextlib import contextmanager
from typing import Iterator, Optional

from filelock import FileLock, Timeout
from sqlalchemy.orm import Session

from stockledger.config import settings
from stockledger.services.errors import StockBusyError


def lock_dir() -> str:
    path = settings.LOCK_DIR or os.path.join(tempfile.gettempdir(), "stockledger_locks")
    os.makedirs(path, exist_ok=True)
    return path


@contextmanager
def _file_lock(name: str, timeout: Optional[float]) -> Iterator[None]:
    lock = FileLock(os.path.join(lock_dir(), f"{name}.lock"))
    if timeout is None:
        timeout = settings.LOCK_TIMEOUT_SECONDS
    try:
        with lock.acquire(timeout=timeout):
            yield
    except Timeout:
        raise StockBusyError(f"Could not acquire lock '{name}'; try again") from None


def product_lock(product_id: int, timeout: Optional[float] = None):
    """
    Exclusive critical section for one product's read-validate-write cycle.
    Held across the commit, so a second writer always reads the committed level.
    """
    return _file_lock(f"product_{int(product_id)}", timeout)


def sku_lock(sku: str, timeout: Optional[float] = None):
    safe = re.sub(r"[^A-Za-z0-9_.-]", "_", sku.strip().upper())
    return _file_lock(f"sku_{safe}", timeout)


@contextmanager
def fresh_transaction(session: Session) -> Iterator[Session]:
    """
    Commit whatever the session has open, then run the block in a new
    transaction that commits on exit and rolls back on any exception.

    Usage:
        with product_lock(pid), fresh_transaction(db):
            ... read, validate, write ...
    """
    if session.in_transaction():
        session.commit()
    with session.begin():
        yield session
