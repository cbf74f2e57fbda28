# === FILE: capture_page/config.py ===
"""
Loading and validation of the capture client configuration.

Pydantic describes the schema; credentials are :class:`~pydantic.SecretStr`
so they never show up in ``repr``, logs or the ``config`` CLI command.
Sources: direct construction, a YAML/JSON file (:func:`load_config`) or
environment variables (:func:`config_from_env`).
"""
from __future__ import annotations

import errno
import json
import os
from pathlib import Path
from typing import Any, Mapping, Optional, Union

import yaml
from pydantic import BaseModel, ConfigDict, Field, SecretStr

from capture_page import __version__
from capture_page.signer import API_URL, EDGE_URL

ENV_KEY = "CAPTURE_KEY"
ENV_SECRET = "CAPTURE_SECRET"
ENV_USE_EDGE = "CAPTURE_USE_EDGE"
ENV_TIMEOUT = "CAPTURE_TIMEOUT"

_TRUE_VALUES = frozenset({"1", "true", "yes", "on"})


class CaptureConfig(BaseModel):
    """Credentials and transport settings for one :class:`~capture_page.client.Capture`."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    # Empty credentials are accepted here and rejected when a request is built.
    key: SecretStr = Field(SecretStr(""), description="API key.")
    secret: SecretStr = Field(SecretStr(""), description="API secret used to sign requests.")
    use_edge: bool = Field(False, description="Send requests to the edge host.")
    api_url: str = Field(API_URL, min_length=1, description="Standard capture host.")
    edge_url: str = Field(EDGE_URL, min_length=1, description="Edge capture host.")
    timeout: Optional[float] = Field(
        None, gt=0, description="Total request timeout in seconds (None: aiohttp default)."
    )
    user_agent: str = Field(
        f"capture-page-python/{__version__}", min_length=1, description="User-Agent header."
    )

    @property
    def has_credentials(self) -> bool:
        return bool(self.key.get_secret_value() and self.secret.get_secret_value())


def _read_yaml(path: Path) -> dict[str, Any]:
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as exc:
        raise ValueError(f"Invalid YAML in {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise TypeError(f"Top level of YAML must be a mapping, got {type(data).__name__}")
    return data


def _read_json(path: Path) -> dict[str, Any]:
    try:
        data = json.loads(path.read_text(encoding="utf-8")) or {}
    except json.JSONDecodeError as exc:
        raise ValueError(f"Invalid JSON in {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise TypeError(f"Top level of JSON must be a mapping, got {type(data).__name__}")
    return data


def load_config(path: Union[str, Path]) -> CaptureConfig:
    """
    Read a YAML or JSON file and return a validated CaptureConfig.
    Raises FileNotFoundError if the file does not exist.
    """
    path_obj = Path(path).expanduser().resolve()
    if not path_obj.is_file():
        raise FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), str(path_obj))

    suffix = path_obj.suffix.lower()
    if suffix in (".yaml", ".yml"):
        data = _read_yaml(path_obj)
    elif suffix == ".json":
        data = _read_json(path_obj)
    else:
        raise ValueError(f"Unsupported config format: {suffix}")

    return CaptureConfig(**data)


def config_from_env(environ: Optional[Mapping[str, str]] = None, **overrides: Any) -> CaptureConfig:
    """Build a CaptureConfig from ``CAPTURE_*`` environment variables.

    Keyword *overrides* win over the environment.
    """
    env = os.environ if environ is None else environ
    data: dict[str, Any] = {
        "key": env.get(ENV_KEY, ""),
        "secret": env.get(ENV_SECRET, ""),
        "use_edge": env.get(ENV_USE_EDGE, "").strip().lower() in _TRUE_VALUES,
    }
    if env.get(ENV_TIMEOUT):
        data["timeout"] = env[ENV_TIMEOUT]
    data.update(overrides)
    return CaptureConfig(**data)


__all__ = [
    "CaptureConfig",
    "load_config",
    "config_from_env",
    "ENV_KEY",
    "ENV_SECRET",
    "ENV_USE_EDGE",
    "ENV_TIMEOUT",
]
