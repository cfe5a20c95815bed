"""Unit tests for data layer settings."""

from pathlib import Path

import workshop_data.config
from workshop_data.config import Settings


def test_settings_uses_project_env_file_independent_of_cwd():
    """Settings should always include the project-root .env as an env source."""
    env_files = Settings.model_config.get("env_file")
    assert env_files is not None

    normalized = {str(Path(item)) for item in env_files}
    expected_project_env = str(Path(workshop_data.config.__file__).resolve().parents[1] / ".env")

    assert expected_project_env in normalized
    assert str(Path(".env")) in normalized


def test_settings_read_backend_from_environment(monkeypatch):
    monkeypatch.setenv("REMOTE_BACKEND", "sqlalchemy")
    monkeypatch.setenv("DEFAULT_FETCH_LIMIT", "250")

    settings = Settings(_env_file=None)

    assert settings.remote_backend == "sqlalchemy"
    assert settings.default_fetch_limit == 250
    assert settings.supabase_schema == "public"
