# File: tests/test_config.py
import json
from pathlib import Path

import pytest
from pydantic import ValidationError

from capture_page.config import CaptureConfig, config_from_env, load_config
from capture_page.signer import API_URL, EDGE_URL


def write_file(tmp_path: Path, content: str, suffix: str) -> Path:
    path = tmp_path / f"config{suffix}"
    path.write_text(content, encoding="utf-8")
    return path


@pytest.mark.parametrize(
    "content,suffix,expect_exc",
    [
        ("key: abc\nsecret: xyz\nuse_edge: true", ".yaml", None),
        (json.dumps({"key": "abc", "secret": "xyz", "use_edge": True}), ".json", None),
        ("key: abc\nunknown: 1", ".yaml", ValidationError),
        ("::invalid yaml", ".yml", TypeError),
        ("key: [unclosed", ".yaml", ValueError),
        ("- a\n- b", ".yaml", TypeError),
        ("{not json", ".json", ValueError),
        ("key = 'abc'", ".toml", ValueError),
    ],
)
def test_load_config_variants(tmp_path, content, suffix, expect_exc):
    cfg_path = write_file(tmp_path, content, suffix)
    if expect_exc:
        with pytest.raises(expect_exc):
            load_config(cfg_path)
    else:
        cfg = load_config(cfg_path)
        assert isinstance(cfg, CaptureConfig)
        assert cfg.key.get_secret_value() == "abc"
        assert cfg.secret.get_secret_value() == "xyz"
        assert cfg.use_edge is True


def test_load_config_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_config(tmp_path / "nope.yaml")


def test_defaults():
    cfg = CaptureConfig()
    assert cfg.key.get_secret_value() == ""
    assert cfg.has_credentials is False
    assert cfg.use_edge is False
    assert cfg.timeout is None
    assert cfg.api_url == API_URL
    assert cfg.edge_url == EDGE_URL


def test_secrets_are_masked():
    cfg = CaptureConfig(key="public-key", secret="top-secret")
    assert cfg.has_credentials is True
    assert "top-secret" not in repr(cfg)
    assert "public-key" not in repr(cfg)
    assert "top-secret" not in cfg.model_dump_json()


def test_config_is_frozen():
    cfg = CaptureConfig(key="k", secret="s")
    with pytest.raises(ValidationError):
        cfg.use_edge = True


@pytest.mark.parametrize("timeout", [0, -1])
def test_timeout_must_be_positive(timeout):
    with pytest.raises(ValidationError):
        CaptureConfig(timeout=timeout)


def test_config_from_env():
    env = {
        "CAPTURE_KEY": "env-key",
        "CAPTURE_SECRET": "env-secret",
        "CAPTURE_USE_EDGE": "Yes",
        "CAPTURE_TIMEOUT": "12.5",
    }
    cfg = config_from_env(env)
    assert cfg.key.get_secret_value() == "env-key"
    assert cfg.secret.get_secret_value() == "env-secret"
    assert cfg.use_edge is True
    assert cfg.timeout == 12.5


def test_config_from_env_overrides_and_empty_environment():
    cfg = config_from_env({}, use_edge=True)
    assert cfg.has_credentials is False
    assert cfg.use_edge is True


def test_config_from_os_environ(monkeypatch):
    monkeypatch.setenv("CAPTURE_KEY", "k")
    monkeypatch.setenv("CAPTURE_SECRET", "s")
    monkeypatch.delenv("CAPTURE_USE_EDGE", raising=False)
    monkeypatch.delenv("CAPTURE_TIMEOUT", raising=False)
    cfg = config_from_env()
    assert cfg.has_credentials
    assert cfg.use_edge is False
