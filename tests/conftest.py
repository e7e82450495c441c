# tests/conftest.py

from __future__ import annotations

from datetime import datetime, timezone

import pytest

from relnotes.config import Config
from relnotes.models import ReleaseMetadata, ReleaseType

API = "https://app.asana.test/api/1.0"


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch, tmp_path) -> None:
    """Keep real RELNOTES_* variables and config files out of tests."""
    for name in list(Config.model_fields):
        monkeypatch.delenv(f"RELNOTES_{name.upper()}", raising=False)
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("HOME", str(tmp_path))


@pytest.fixture()
def config(tmp_path) -> Config:
    return Config(
        access_token="secret-token",
        api_version="1.0",
        project_id="430541393561890",
        api_base_url="https://app.asana.test/api",
        markdown_api_url="https://api.github.test/markdown",
        output_dir=str(tmp_path / "releases"),
    )


@pytest.fixture()
def metadata() -> ReleaseMetadata:
    return ReleaseMetadata(
        version="1.5.0",
        release_type=ReleaseType.MINOR,
        generated_at=datetime(2024, 3, 1, 12, 30, 0, tzinfo=timezone.utc),
    )
