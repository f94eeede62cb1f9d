from __future__ import annotations

import pytest


@pytest.fixture(autouse=True)
def _no_dotenv_in_unit_tests(monkeypatch: pytest.MonkeyPatch):
    """Keep a developer's local `.env` out of unit tests.

    `load_config()` calls `dotenv.load_dotenv()`, which would otherwise leak
    real RAYGUN_* values into tests that expect defaults.
    """

    monkeypatch.setattr("raygun.config.dotenv.load_dotenv", lambda *args, **kwargs: False)
    yield
