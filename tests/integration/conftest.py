"""Shared fixtures for API tests: an application bound to temporary directories."""

import pytest

from client_compiler.config import Settings
from client_compiler.main import create_app


@pytest.fixture
def settings(tmp_path):
    return Settings(
        _env_file=None,
        upload_dir=str(tmp_path / "uploads"),
        templates_dir=str(tmp_path / "templates"),
        max_upload_size_mb=1,
    )


@pytest.fixture
def app(settings):
    return create_app(settings)
