"""Load and merge configuration from .xtentropy.toml, CLI flags, and env vars."""

from __future__ import annotations

import dataclasses
import os
import sys
from pathlib import Path
from typing import Any, Dict, Optional

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

from xtentropy.config.schema import (
    OPERATION_CODES,
    AnnotationConfig,
    EntropyToolConfig,
    OutputConfig,
    ScanConfig,
)

CONFIG_FILENAME = ".xtentropy.toml"


class ConfigError(Exception):
    """Raised when config is malformed or unreadable."""


def find_config_file(evidence_root: Path, override: Optional[str] = None) -> Optional[Path]:
    """Locate the config file. *override* takes precedence."""
    if override:
        p = Path(override)
        if not p.is_file():
            raise ConfigError(f"Config file not found: {override}")
        return p
    candidate = evidence_root / CONFIG_FILENAME
    return candidate if candidate.is_file() else None


def _parse_toml(path: Path) -> Dict[str, Any]:
    try:
        with open(path, "rb") as f:
            return tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as exc:
        raise ConfigError(f"Failed to parse {path}: {exc}") from exc


def _build_section(data: Dict[str, Any], cls: type, section: str):
    """Build a dataclass from a TOML section dict, ignoring unknown keys."""
    valid_fields = {f.name for f in dataclasses.fields(cls)}
    raw = data.get(section, {})
    if not isinstance(raw, dict):
        raise ConfigError(f"[{section}] must be a table")
    filtered = {k: v for k, v in raw.items() if k in valid_fields}
    return cls(**filtered)


def _validate(cfg: EntropyToolConfig) -> None:
    if cfg.scan.operation not in OPERATION_CODES:
        raise ConfigError(f"Unsupported scan.operation: {cfg.scan.operation!r}")
    if cfg.output.format not in ("terminal", "json"):
        raise ConfigError(f"Unsupported output.format: {cfg.output.format!r}")
    if not isinstance(cfg.scan.max_item_bytes, int) or cfg.scan.max_item_bytes < 0:
        raise ConfigError("scan.max_item_bytes must be a non-negative integer")


def _merge_env_overrides(cfg: EntropyToolConfig) -> None:
    """Apply XT_ENTROPY_* environment variable overrides."""
    if val := os.environ.get("XT_ENTROPY_FORMAT"):
        if val in ("terminal", "json"):
            cfg.output.format = val  # type: ignore[assignment]
    if val := os.environ.get("XT_ENTROPY_OPERATION"):
        if val in OPERATION_CODES:
            cfg.scan.operation = val  # type: ignore[assignment]
    if val := os.environ.get("XT_ENTROPY_MAX_ITEM_BYTES"):
        try:
            limit = int(val)
        except ValueError:
            pass
        else:
            if limit >= 0:
                cfg.scan.max_item_bytes = limit


def load_config(
    evidence_root: Path,
    config_override: Optional[str] = None,
) -> EntropyToolConfig:
    """Load, validate, and return an EntropyToolConfig."""
    config_path = find_config_file(evidence_root, config_override)

    if config_path is None:
        cfg = EntropyToolConfig()
    else:
        raw = _parse_toml(config_path)
        cfg = EntropyToolConfig(
            version=raw.get("version", "1.0"),
            scan=_build_section(raw, ScanConfig, "scan"),
            output=_build_section(raw, OutputConfig, "output"),
            annotation=_build_section(raw, AnnotationConfig, "annotation"),
        )
        _validate(cfg)

    _merge_env_overrides(cfg)
    return cfg
