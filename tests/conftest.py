from __future__ import annotations
import json
import logging
import sys
from pathlib import Path
import pytest

_src = Path(__file__).resolve().parent.parent / "src"
if _src.exists() and str(_src) not in sys.path:
    sys.path.insert(0, str(_src))

from datapkg.config import reset_settings  # noqa: E402


def rejecting_factory(raw: dict):
    raise ValueError("rejected")


@pytest.fixture
def invalid_factory():
    return rejecting_factory


@pytest.fixture(autouse=True)
def _clean_settings(monkeypatch):
    for var in ("DATAPKG_RESOURCE_FACTORY", "DATAPKG_LOG_LEVEL", "DATAPKG_JSON_INDENT"):
        monkeypatch.delenv(var, raising=False)
    reset_settings()
    yield
    reset_settings()


@pytest.fixture
def descriptor_file(tmp_path):
    path = tmp_path / "datapackage.json"
    path.write_text(json.dumps({
        "name": "demo",
        "resources": [
            {"name": "res1", "path": "res1.csv"},
            {"name": "res2", "path": "res2.csv"},
        ],
    }))
    return path


@pytest.fixture(autouse=True)
def _reset_logging():
    yield
    logger = logging.getLogger("datapkg")
    for h in logger.handlers[:]:
        logger.removeHandler(h)
    logger.setLevel(logging.NOTSET)
    logger.propagate = True
