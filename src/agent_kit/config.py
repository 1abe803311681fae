"""Configuration defaults, path helpers and the .ak/config.json store."""

from __future__ import annotations

import json
import logging
import os
from importlib.metadata import PackageNotFoundError, version
from pathlib import Path
from typing import Any

from agent_kit.errors import ConfigError
from agent_kit.models import AkConfig, Defaults, Source, Targets

logger = logging.getLogger(__name__)

DIST_NAME = "agent-kit"

# ── Project config file ──
CONFIG_DIR = ".ak"
CONFIG_FILE = "config.json"

DEFAULT_CONFIG = AkConfig(
    version="1.0.0",
    source=Source(repo="github:YOUR_ORG/agent-kit", branch="main", path="content"),
    targets=Targets(claude=True, copilot=True, agents_md=True),
    defaults=Defaults(
        review_tool="codex",
        review_model="gpt-5",
        review_reasoning="high",
        plan_execution_mode="autonomous",
        checkpoint_interval=5,
    ),
)

# Sub-objects merged key-by-key instead of replaced
_NESTED_KEYS = ("source", "targets", "defaults", "overrides")


def package_version() -> str:
    try:
        return version(DIST_NAME)
    except PackageNotFoundError:
        return "0.0.0"


def content_dir() -> Path:
    """Resolve the local content directory used by --local. Respects AGENT_KIT_CONTENT_DIR env var."""
    return Path(os.environ.get("AGENT_KIT_CONTENT_DIR", "content"))


def log_level() -> str:
    return os.environ.get("AGENT_KIT_LOG_LEVEL", "WARNING").upper()


def config_path(working_dir: str | Path | None = None) -> Path:
    return Path(working_dir or Path.cwd()) / CONFIG_DIR / CONFIG_FILE


def load_config(working_dir: str | Path | None = None) -> AkConfig | None:
    """Read .ak/config.json. Returns None when the project has no config yet."""
    path = config_path(working_dir)
    if not path.exists():
        return None
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise ConfigError(f"Invalid config file {path}: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError(f"Invalid config file {path}: expected a JSON object")
    return AkConfig.from_dict(data)


def save_config(config: AkConfig, working_dir: str | Path | None = None) -> Path:
    path = config_path(working_dir)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(config.to_dict(), indent=2), encoding="utf-8")
    logger.debug("Saved config to %s", path)
    return path


def merge_config(base: AkConfig, overrides: dict[str, Any] | AkConfig) -> AkConfig:
    """Merge a partial config over ``base``; later values win.

    Top-level keys are replaced, except source/targets/defaults/overrides which
    are merged one level deeper. ``overrides`` uses the JSON (camelCase) shape.
    """
    if isinstance(overrides, AkConfig):
        overrides = overrides.to_dict()
    merged = base.to_dict()
    for key, value in overrides.items():
        if key in _NESTED_KEYS and isinstance(value, dict):
            merged[key] = {**merged.get(key, {}), **value}
        else:
            merged[key] = value
    return AkConfig.from_dict(merged)
