from __future__ import annotations

import sys
from pathlib import Path

import pytest

# Make the package importable when running the tests from a checkout
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from attrdefaults.core import config as core_config  # noqa: E402
from attrdefaults.db import session as db_session  # noqa: E402


@pytest.fixture(autouse=True)
def clean_settings(monkeypatch):
    """Every test starts from default settings."""
    for name in ("DEFAULTS_STATE_KEY_PREFIX", "DEFAULTS_SAFE_ONLY", "SESSION_TTL_SECONDS", "APP_ENV"):
        monkeypatch.delenv(name, raising=False)
    core_config.get_settings.cache_clear()
    yield
    core_config.get_settings.cache_clear()


@pytest.fixture()
def temp_db(tmp_path, monkeypatch):
    """Temporary SQLite database with all tables created; engine disposed on teardown."""
    db_file = tmp_path / "test.db"
    monkeypatch.setenv("DATABASE_URL", f"sqlite:///{db_file}")
    core_config.get_settings.cache_clear()
    db_session.reset_engine()

    db_session.create_all()

    yield db_file

    db_session.Base.metadata.drop_all(bind=db_session.get_engine())
    db_session.reset_engine()
