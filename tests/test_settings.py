from __future__ import annotations

from pathlib import Path

import pytest

from settings import get_settings

ENV_VARS = ["KVDOCS_ROOT", "KVDOCS_HOST", "KVDOCS_PORT", "KVDOCS_CREATE_ROOT", "KVDOCS_LOG_LEVEL"]


@pytest.fixture
def clean_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> pytest.MonkeyPatch:
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
    return monkeypatch


def test_defaults(clean_env, tmp_path):
    s = get_settings()
    assert s.root == tmp_path / "data"
    assert s.host == "localhost"
    assert s.port == 8080
    assert s.create_root is False
    assert s.log_level == "INFO"


def test_env_overrides(clean_env, tmp_path):
    clean_env.setenv("KVDOCS_ROOT", str(tmp_path / "store"))
    clean_env.setenv("KVDOCS_HOST", "0.0.0.0")
    clean_env.setenv("KVDOCS_PORT", "9001")
    clean_env.setenv("KVDOCS_CREATE_ROOT", "yes")
    clean_env.setenv("KVDOCS_LOG_LEVEL", "debug")

    s = get_settings()
    assert s.root == tmp_path / "store"
    assert s.host == "0.0.0.0"
    assert s.port == 9001
    assert s.create_root is True
    assert s.log_level == "DEBUG"


def test_bad_port_is_rejected(clean_env):
    clean_env.setenv("KVDOCS_PORT", "eighty")
    with pytest.raises(ValueError, match="KVDOCS_PORT"):
        get_settings()
