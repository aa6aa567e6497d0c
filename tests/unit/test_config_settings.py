"""Unit tests for application settings configuration."""

from pathlib import Path

from client_compiler.config import Settings


def test_settings_uses_project_env_file_independent_of_cwd():
    """Settings should always include the project-root .env as an env source."""
    env_files = Settings.model_config.get("env_file")
    assert env_files is not None

    normalized = {str(Path(item)) for item in env_files}
    expected_project_env = str(Path(__file__).resolve().parents[2] / ".env")

    assert expected_project_env in normalized
    assert str(Path(".env")) in normalized


def test_settings_defaults():
    settings = Settings(_env_file=None)

    assert settings.upload_dir == "uploads"
    assert settings.max_upload_size_mb == 32
    assert settings.max_upload_size_bytes == 32 * 1024 * 1024
    assert settings.validation_batch_threshold == 100
    assert settings.validation_workers == 10
    assert settings.preview_size == 5


def test_settings_read_from_environment(monkeypatch):
    monkeypatch.setenv("VALIDATION_WORKERS", "4")
    monkeypatch.setenv("UPLOAD_DIR", "/tmp/client-uploads")

    settings = Settings(_env_file=None)

    assert settings.validation_workers == 4
    assert settings.upload_dir == "/tmp/client-uploads"
