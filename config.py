"""Configuration loading, validation, and env-var resolution."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path

import yaml

from base64codec import ENCODINGS
from checksum import ALGORITHMS
from locales import normalize_locale

log = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = "~/.config/binmod/config.yaml"

DEFAULT_PRECISION = 2
MAX_PRECISION = 10
DEFAULT_FALLBACK_LOCALE = "en-US"

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class ConfigError(Exception):
    """Raised when the config file is missing, malformed, or invalid."""


@dataclass
class MetadataConfig:
    author: str = "Your Name"
    company_name: str = "Your Company"
    description: str = "A command-line toolkit of small system utilities"


@dataclass
class Settings:
    log_level: str = "WARNING"
    precision: int = DEFAULT_PRECISION
    fallback_locale: str = DEFAULT_FALLBACK_LOCALE
    encoding: str = "UTF8"
    algorithm: str = "SHA256"
    metadata: MetadataConfig = field(default_factory=MetadataConfig)


def load(config_path: str | None = None) -> dict:
    """Load and parse the YAML config file.

    An explicit path (argument or $BINMOD_CONFIG) must exist. The default
    path is optional and yields an empty config when absent.
    """
    explicit = config_path or os.environ.get("BINMOD_CONFIG")
    path = Path(explicit or DEFAULT_CONFIG_PATH).expanduser()

    if not path.is_file():
        if explicit:
            raise ConfigError(f"Error: config file not found: {path}")
        log.debug("No config file at %s, using defaults", path)
        return {}

    with open(path) as f:
        try:
            raw = yaml.safe_load(f)
        except yaml.YAMLError as exc:
            raise ConfigError(f"Error: config file '{path}' is not valid YAML: {exc}") from exc

    if raw is None:
        return {}
    if not isinstance(raw, dict):
        raise ConfigError("Error: config file must be a YAML mapping")

    log.debug("Loaded config from %s", path)
    return raw


def resolve_env(config: dict) -> dict:
    """Recursively resolve *_env keys from environment variables.

    For any key ending in '_env', look up the env var named by its value
    and replace with a key without the '_env' suffix.
    E.g. {'author_env': 'BINMOD_AUTHOR'} -> {'author': '<value of $BINMOD_AUTHOR>'}
    """
    resolved = {}
    for key, value in config.items():
        if isinstance(value, dict):
            resolved[key] = resolve_env(value)
        elif isinstance(value, str) and key.endswith("_env"):
            real_key = key.removesuffix("_env")
            env_val = os.environ.get(value)
            if env_val is None:
                raise ConfigError(
                    f"Error: environment variable '{value}' "
                    f"(referenced by '{key}') is not set"
                )
            resolved[real_key] = env_val
        else:
            resolved[key] = value
    return resolved


def _section(raw_config: dict, name: str) -> dict:
    section = raw_config.get(name) or {}
    if not isinstance(section, dict):
        raise ConfigError(f"Error: config section '{name}' must be a mapping")
    return section


def _choice(value, choices, what: str) -> str:
    """Match *value* case-insensitively against *choices*, returning the canonical spelling."""
    for choice in choices:
        if str(value).upper() == choice.upper():
            return choice
    raise ConfigError(
        f"Error: unknown {what} '{value}'. Available: {', '.join(choices)}"
    )


def get_settings(raw_config: dict) -> Settings:
    """Build validated Settings from a raw config mapping."""
    cfg = resolve_env(raw_config)

    level = str(_section(cfg, "logging").get("level", "WARNING")).upper()
    if level not in _LOG_LEVELS:
        raise ConfigError(
            f"Error: unknown log level '{level}'. Available: {', '.join(_LOG_LEVELS)}"
        )

    precision = _section(cfg, "size").get("precision", DEFAULT_PRECISION)
    if isinstance(precision, bool) or not isinstance(precision, int) \
            or not 0 <= precision <= MAX_PRECISION:
        raise ConfigError(
            f"Error: size.precision must be an integer between 0 and {MAX_PRECISION}, "
            f"got {precision!r}"
        )

    fallback_raw = _section(cfg, "locale").get("fallback", DEFAULT_FALLBACK_LOCALE)
    fallback = normalize_locale(fallback_raw if isinstance(fallback_raw, str) else None)
    if fallback is None:
        raise ConfigError(f"Error: locale.fallback '{fallback_raw}' is not a known locale")

    encoding = _choice(_section(cfg, "base64").get("encoding", "UTF8"), ENCODINGS, "encoding")
    algorithm = _choice(_section(cfg, "checksum").get("algorithm", "SHA256"), ALGORITHMS, "algorithm")

    meta_cfg = _section(cfg, "metadata")
    defaults = MetadataConfig()
    metadata = MetadataConfig(
        author=str(meta_cfg.get("author", defaults.author)),
        company_name=str(meta_cfg.get("company_name", defaults.company_name)),
        description=str(meta_cfg.get("description", defaults.description)),
    )

    return Settings(
        log_level=level,
        precision=precision,
        fallback_locale=fallback,
        encoding=encoding,
        algorithm=algorithm,
        metadata=metadata,
    )
