import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).resolve().parents[1] / "src"))


@pytest.fixture(autouse=True)
def _isolated_settings(monkeypatch):
    for name in ("CACHE_FACTORY_MAX_ENTRIES", "CACHE_FACTORY_MAX_AGE"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def error_metrics():
    from cache_factory.errors import get_error_metrics, reset_error_metrics

    reset_error_metrics()
    yield get_error_metrics
    reset_error_metrics()
