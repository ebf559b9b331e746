import os
import stat

import pytest
from fastapi.testclient import TestClient

from core.config import Settings, get_settings
from main import create_app


@pytest.fixture
def make_compiler(tmp_path):
    """Write a /bin/sh script that stands in for the external compiler."""

    def _make(body: str, name: str = "toy_compiler") -> str:
        path = tmp_path / name
        path.write_text(f"#!/bin/sh\n{body}\n")
        path.chmod(path.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
        return str(path)

    return _make


@pytest.fixture
def bridge_settings(tmp_path, make_compiler):
    static_dir = tmp_path / "public"
    static_dir.mkdir()

    test_settings = Settings()
    test_settings.STATIC_DIR = str(static_dir)
    test_settings.INPUT_FILE = str(tmp_path / "input.txt")
    test_settings.INPUT_FILE_MODE = "shared"
    # echoes its input back by default
    test_settings.COMPILER_PATH = make_compiler("cat")
    return test_settings


@pytest.fixture
def client(bridge_settings):
    app = create_app(bridge_settings)
    app.dependency_overrides[get_settings] = lambda: bridge_settings
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def clean_env(monkeypatch):
    for name in ("PORT", "HOST", "COMPILER_PATH", "INPUT_FILE", "INPUT_FILE_MODE", "STATIC_DIR", "LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)
    return os.environ
