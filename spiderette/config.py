# spiderette/config.py
"""
Centralized configuration management.

Handles loading defaults, merging in settings from pyproject.toml,
and applying runtime overrides. The result is frozen into CrawlOptions,
which is read (never written) for the rest of the run.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Mapping, MutableMapping, Optional

import tomli

from spiderette.__about__ import __version__

log = logging.getLogger(__name__)

# This is the baseline configuration dictionary.
DEFAULT_CONFIG: dict[str, Any] = {
    # --- Scope & reporting ---
    "internal": False,  # If True, only expand links to the page's own host
    "verbose": False,  # If True, success pages are logged and reported too
    "ignore_redirect": False,
    "ignore_client": False,
    "ignore_server": False,
    # --- Transport ---
    "timeout": 10.0,
    "user_agent": f"spiderette/{__version__}",
    "max_concurrency": 0,  # 0 means no limit on in-flight fetches
}


@dataclass(frozen=True)
class CrawlOptions:
    internal: bool = False
    verbose: bool = False
    ignore_redirect: bool = False
    ignore_client: bool = False
    ignore_server: bool = False
    timeout: float = 10.0
    user_agent: str = DEFAULT_CONFIG["user_agent"]
    max_concurrency: int = 0

    @classmethod
    def from_mapping(cls, config: Mapping[str, Any]) -> "CrawlOptions":
        """Build options from a config dict, ignoring unknown keys."""
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(config) - known)
        if unknown:
            log.warning("Ignoring unknown configuration keys: %s", ", ".join(unknown))
        return cls(**{k: v for k, v in config.items() if k in known})


def _deep_merge_dict(
    base: MutableMapping[str, Any], overrides: Mapping[str, Any]
) -> MutableMapping[str, Any]:
    """Recursively merge dicts."""
    for key, value in overrides.items():
        if isinstance(value, Mapping) and isinstance(base.get(key), MutableMapping):
            base[key] = _deep_merge_dict(base[key], value)
        else:
            base[key] = value
    return base


def load_config(pyproject_path: Path | None = None) -> dict[str, Any]:
    """
    Loads configuration from defaults and merges settings from pyproject.toml.

    1. Starts with DEFAULT_CONFIG.
    2. Looks for `pyproject.toml` (current directory unless a path is given).
    3. If found, merges settings from `[tool.spiderette]` over the defaults.
    """
    config = dict(DEFAULT_CONFIG)

    if pyproject_path is None:
        pyproject_path = Path.cwd() / "pyproject.toml"

    if not pyproject_path.exists():
        log.debug("No pyproject.toml found at %s. Using default config.", pyproject_path)
        return config

    try:
        with pyproject_path.open("rb") as f:
            toml_data = tomli.load(f)
    except (OSError, tomli.TOMLDecodeError) as e:
        log.warning(
            "Failed to load or parse %s: %s. Using default config.",
            pyproject_path,
            e,
        )
        return config

    project_config = toml_data.get("tool", {}).get("spiderette", {})
    if project_config:
        log.info("Loading config from %s", pyproject_path)
        config = dict(_deep_merge_dict(config, project_config))
    else:
        log.debug("No [tool.spiderette] section in %s.", pyproject_path)

    return config


def build_options(
    overrides: Optional[Mapping[str, Any]] = None,
    pyproject_path: Path | None = None,
) -> CrawlOptions:
    """Defaults <- pyproject.toml <- explicit overrides (None values are skipped)."""
    config = load_config(pyproject_path)
    for key, value in (overrides or {}).items():
        if value is None:
            continue
        config[key] = value
        log.info("Applied override - %s set to: %s", key, value)
    return CrawlOptions.from_mapping(config)
