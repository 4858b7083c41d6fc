from __future__ import annotations

import os
import tempfile
from pathlib import Path

# Configuration is read once at import time, so the environment has to be in
# place before anything from the package is imported.
_TMP_DIR = Path(tempfile.mkdtemp(prefix="student-records-tests-"))
os.environ["DATABASE_URL"] = f"sqlite:///{_TMP_DIR / 'test.db'}"
os.environ["SECRET_KEY"] = "test-secret-key-not-for-production"
os.environ["APP_ENV"] = "development"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["ENABLE_RATE_LIMIT"] = "false"
os.environ["LOG_FILE"] = str(_TMP_DIR / "app.log")

import pytest  # noqa: E402

from student_records.infrastructure.db import ENGINE, Base  # noqa: E402
from student_records.infrastructure.db import models  # noqa: E402,F401


@pytest.fixture()
def reset_database():
    Base.metadata.drop_all(bind=ENGINE)
    Base.metadata.create_all(bind=ENGINE)
    yield
    Base.metadata.drop_all(bind=ENGINE)
