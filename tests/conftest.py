import sys
from pathlib import Path

import pytest

# Ensure `import feedshift` works when running `pytest` without needing PYTHONPATH hacks.
PROJECT_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(PROJECT_ROOT))


@pytest.fixture(autouse=True)
def _isolate_settings(monkeypatch):
    for name in ("FEEDSHIFT_STRICT", "FEEDSHIFT_MAX_WORKERS", "FEEDSHIFT_CHECK_LITERALS", "LOG_VERBOSITY", "DEBUG"):
        monkeypatch.delenv(name, raising=False)

    from feedshift.config import get_settings

    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
