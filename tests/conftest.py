import asyncio
import os
import tempfile

# Configuration is read at import time, so the environment is prepared first.
_db_dir = tempfile.mkdtemp(prefix="warehouse-tests-")
os.environ["APP_ENV"] = "development"
os.environ["DB_TYPE"] = "sqlite"
os.environ["SQLITE_PATH"] = os.path.join(_db_dir, "test.db")
os.environ["ENABLE_SCHEDULER"] = "false"
os.environ["LOG_LEVEL"] = "WARNING"

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

from app.core.db import AsyncSessionLocal, reset_models  # noqa: E402
from main import app  # noqa: E402


@pytest.fixture(autouse=True)
def fresh_database():
    asyncio.run(reset_models())
    yield


@pytest.fixture()
def client():
    with TestClient(app) as c:
        yield c


@pytest.fixture()
def db_call():
    """Run ``fn(session)`` on its own session and event loop, returning its result."""

    def _run(fn):
        async def _wrapper():
            async with AsyncSessionLocal() as session:
                return await fn(session)

        return asyncio.run(_wrapper())

    return _run
