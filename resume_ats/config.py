"""Configuration loading and startup validation."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from .domain.history import DEFAULT_HISTORY_LIMIT
from .domain.industry_keywords import INDUSTRY_KEYWORDS

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = "config/config.yaml"
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")

ENV_LOG_LEVEL = "RESUME_ATS_LOG_LEVEL"
ENV_INDUSTRY = "RESUME_ATS_INDUSTRY"

_REPO_ROOT = Path(__file__).resolve().parents[1]


@dataclass
class ImportConfig:
    """Runtime settings for the command line and tools."""

    history_limit: int = DEFAULT_HISTORY_LIMIT
    default_industry: Optional[str] = None
    log_level: str = "WARNING"
    workspace_dir: str = "."


def load_raw_config(config_path: str = DEFAULT_CONFIG_PATH) -> Dict[str, Any]:
    """Load the raw configuration mapping.

    ``config.yaml`` holds the defaults and a ``config.local.yaml`` next to it
    is deep-merged on top. Any other file name is loaded as-is.

    Raises:
        FileNotFoundError: when no config file exists
        ValueError: when a file does not hold a YAML mapping
    """
    target = _resolve(config_path)

    if target.name == "config.yaml":
        base = _load_yaml(target)
        local = _load_yaml(target.with_name("config.local.yaml"))
        if not target.exists() and not target.with_name("config.local.yaml").exists():
            raise FileNotFoundError(f"Config file not found: {config_path}")
        return _deep_merge(base, local)

    if not target.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")
    return _load_yaml(target)


def load_config(config_path: str = DEFAULT_CONFIG_PATH) -> ImportConfig:
    """Load :class:`ImportConfig` from YAML with environment overrides applied."""
    return config_from_mapping(apply_env_overrides(load_raw_config(config_path)))


def config_from_mapping(raw: Dict[str, Any]) -> ImportConfig:
    defaults = ImportConfig()
    return ImportConfig(
        history_limit=raw.get("history_limit", defaults.history_limit),
        default_industry=raw.get("default_industry") or None,
        log_level=str(raw.get("log_level") or defaults.log_level).upper(),
        workspace_dir=str(raw.get("workspace_dir") or defaults.workspace_dir),
    )


def apply_env_overrides(raw: Dict[str, Any]) -> Dict[str, Any]:
    """Return a copy of *raw* with ``RESUME_ATS_*`` environment values applied."""
    merged = dict(raw)
    log_level = os.environ.get(ENV_LOG_LEVEL, "")
    if log_level:
        merged["log_level"] = log_level
    industry = os.environ.get(ENV_INDUSTRY, "")
    if industry:
        merged["default_industry"] = industry
    return merged


# ---------------------------------------------------------------------------
# Validation
# ---------------------------------------------------------------------------


class Severity(Enum):
    ERROR = "error"
    WARNING = "warning"


@dataclass
class ConfigError:
    """A single configuration issue."""

    field: str
    message: str
    severity: Severity


def validate_config(raw_config: Dict[str, Any], workspace_dir: Optional[str] = None) -> List[ConfigError]:
    """Validate raw configuration and return a list of issues.

    Args:
        raw_config: Raw config dict from YAML
        workspace_dir: Workspace directory to check; defaults to the configured one

    Returns:
        List of ConfigError (empty = valid)
    """
    errors: List[ConfigError] = []

    # --- History limit ---
    history_limit = raw_config.get("history_limit", DEFAULT_HISTORY_LIMIT)
    if not isinstance(history_limit, int) or isinstance(history_limit, bool) or history_limit < 1:
        errors.append(ConfigError(
            field="history_limit",
            message=f"history_limit must be a positive integer, got {history_limit!r}",
            severity=Severity.ERROR,
        ))

    # --- Log level ---
    log_level = raw_config.get("log_level", "WARNING")
    if not isinstance(log_level, str) or log_level.upper() not in LOG_LEVELS:
        errors.append(ConfigError(
            field="log_level",
            message=f"log_level must be one of {', '.join(LOG_LEVELS)}, got {log_level!r}",
            severity=Severity.ERROR,
        ))

    # --- Default industry ---
    industry = raw_config.get("default_industry")
    if industry is not None and not isinstance(industry, str):
        errors.append(ConfigError(
            field="default_industry",
            message=f"default_industry must be a string or null, got {industry!r}",
            severity=Severity.ERROR,
        ))
    elif industry and industry.strip().lower().replace("-", "_").replace(" ", "_") not in INDUSTRY_KEYWORDS:
        errors.append(ConfigError(
            field="default_industry",
            message=f"Unknown industry {industry!r}; expected one of {', '.join(INDUSTRY_KEYWORDS)}",
            severity=Severity.WARNING,
        ))

    # --- Workspace ---
    ws = workspace_dir if workspace_dir is not None else raw_config.get("workspace_dir", ".")
    if not Path(str(ws)).exists():
        errors.append(ConfigError(
            field="workspace_dir",
            message=f"Workspace directory does not exist: {ws}",
            severity=Severity.WARNING,
        ))

    return errors


def has_errors(issues: List[ConfigError]) -> bool:
    """Check if any issues are errors (not just warnings)."""
    return any(e.severity == Severity.ERROR for e in issues)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _resolve(candidate: str) -> Path:
    path = Path(candidate)
    if path.exists() or path.is_absolute():
        return path
    alt = _REPO_ROOT / candidate
    if alt.exists():
        return alt
    return path


def _load_yaml(path: Path) -> Dict[str, Any]:
    if not path.exists():
        return {}
    with open(path, encoding="utf-8") as f:
        try:
            data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML in {path}: {e}") from e
        if not isinstance(data, dict):
            raise ValueError(f"Config file must be a mapping: {path}")
        logger.debug("Loaded config %s", path)
        return data


def _deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    merged = dict(base)
    for key, value in override.items():
        base_value = merged.get(key)
        if isinstance(base_value, dict) and isinstance(value, dict):
            merged[key] = _deep_merge(base_value, value)
        else:
            merged[key] = value
    return merged
