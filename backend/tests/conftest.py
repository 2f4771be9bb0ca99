"""
tests/conftest.py
"""
from __future__ import annotations

import io
from pathlib import Path
from typing import Callable, Generator

import pytest
from fastapi.testclient import TestClient
from PIL import Image

from boganto.config import Settings, get_settings

_ENV_KEYS = (
    "API_BASE_URL",
    "LOCAL_BASE_URL",
    "LOCAL_SITE_URL",
    "PRODUCTION_BASE_URL",
    "SITE_URL",
    "UPLOADS_DIR",
    "MAX_UPLOAD_SIZE",
)


@pytest.fixture(autouse=True)
def _isolated_settings(monkeypatch: pytest.MonkeyPatch) -> Generator[None, None, None]:
    """Every test starts from default settings, whatever the shell exports."""
    for key in _ENV_KEYS:
        monkeypatch.delenv(key, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def settings() -> Settings:
    return Settings(_env_file=None)


@pytest.fixture
def uploads_dir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    target = tmp_path / "uploads"
    monkeypatch.setenv("UPLOADS_DIR", str(target))
    get_settings.cache_clear()
    return target


@pytest.fixture
def client(uploads_dir: Path) -> Generator[TestClient, None, None]:
    from boganto.main import create_app

    with TestClient(create_app()) as test_client:
        yield test_client


@pytest.fixture
def make_image() -> Callable[..., bytes]:
    """Build a small real image in memory (PNG by default)."""

    def _make(fmt: str = "PNG", size: tuple[int, int] = (4, 4)) -> bytes:
        buf = io.BytesIO()
        Image.new("RGB", size, (200, 30, 30)).save(buf, format=fmt)
        return buf.getvalue()

    return _make
