"""Shared pytest configuration — runs the app against a throwaway SQLite file.

Environment variables are set before any ``clinic`` module is imported, so
the cached Settings and the module-level engine pick them up.
"""

import os
import tempfile
from pathlib import Path

_TEST_DB = Path(tempfile.gettempdir()) / f"clinic-tests-{os.getpid()}.db"

os.environ["DATABASE_URL"] = f"sqlite:///{_TEST_DB}"
os.environ["APP_ENV"] = "development"
os.environ["ACCESS_TOKEN_SECRET"] = "test-secret-0123456789abcdef0123456"
os.environ["BCRYPT_ROUNDS"] = "4"

TEST_TOKEN_SECRET = "test-secret-0123456789abcdef0123456"


def pytest_sessionfinish(session, exitstatus):
    _TEST_DB.unlink(missing_ok=True)
