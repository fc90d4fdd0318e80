import os
import tempfile

# settings are read at import time, so point them at a scratch dir first
_TMP = tempfile.mkdtemp(prefix="stockledger-tests-")
os.environ["DATABASE_URL"] = f"sqlite:///{os.path.join(_TMP, 'test.db')}"
os.environ["LOCK_DIR"] = os.path.join(_TMP, "locks")
os.environ["SEED_DEMO_DATA"] = "false"
os.environ["LOW_STOCK_SCAN_SECONDS"] = "0"
os.environ.pop("RESET_DB", None)

import pytest

from stockledger.db import SessionLocal, init_db


@pytest.fixture(autouse=True)
def fresh_db():
    init_db(reset=True, seed=False)
    yield


@pytest.fixture
def db():
    s = SessionLocal()
    try:
        yield s
    finally:
        s.close()
