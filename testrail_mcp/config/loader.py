"""Configuration file loading and validation.

Loads a YAML configuration file, expands ``${ENV_VAR}`` placeholders, and
validates the result against :class:`~testrail_mcp.config.schema.AppConfig`.

When no configuration file exists the TestRail connection may be supplied
entirely through ``TESTRAIL_URL``, ``TESTRAIL_USERNAME`` and
``TESTRAIL_API_KEY``.
"""

import logging
import os
import re
from typing import Any, Dict, List, Mapping, Optional

import yaml
from pydantic import ValidationError

from testrail_mcp.config.schema import AppConfig
from testrail_mcp.errors import ConfigurationError

logger = logging.getLogger(__name__)

# Recognised config file extensions.
_YAML_EXTS = frozenset({".yaml", ".yml"})

# ${VAR} or ${VAR:-fallback}
_ENV_VAR_RE = re.compile(r"\$\{(\w+)(?::-([^}]*))?\}")

# Environment variables mapped onto the ``testrail`` section.
ENV_OVERRIDES = {
    "TESTRAIL_URL": "base_url",
    "TESTRAIL_USERNAME": "username",
    "TESTRAIL_API_KEY": "api_key",
}


def expand_env_vars(value: Any, environ: Optional[Mapping[str, str]] = None) -> Any:
    """Recursively expand ``${VAR}`` references in string values.

    An unset variable keeps its placeholder unless a ``:-fallback`` is given.
    Dicts and lists are walked recursively; other leaves are returned as-is.
    """
    env = os.environ if environ is None else environ
    if isinstance(value, str):

        def _sub(m: "re.Match[str]") -> str:
            if m.group(1) in env:
                return env[m.group(1)]
            return m.group(2) if m.group(2) is not None else m.group(0)

        return _ENV_VAR_RE.sub(_sub, value)
    if isinstance(value, dict):
        return {k: expand_env_vars(v, env) for k, v in value.items()}
    if isinstance(value, list):
        return [expand_env_vars(item, env) for item in value]
    return value


def _read_config_file(cfg_fpath: str) -> Dict[str, Any]:
    """Read and parse a YAML config file from *cfg_fpath*.

    Raises :class:`ConfigurationError` on I/O or parse errors.
    """
    ext = os.path.splitext(cfg_fpath)[1].lower()
    if ext not in _YAML_EXTS:
        raise ConfigurationError(
            f"Unsupported config file extension '{ext}'. "
            "Only YAML files (.yaml, .yml) are supported."
        )

    try:
        with open(cfg_fpath, "r", encoding="utf-8") as f:
            raw_data = yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as exc:
        raise ConfigurationError(f"Error reading configuration file: {cfg_fpath}\n  {exc}") from exc

    if raw_data is None:
        return {}
    if not isinstance(raw_data, dict):
        raise ConfigurationError(
            "Top-level configuration content must be a YAML mapping (dictionary)."
        )
    return raw_data


def _apply_env_overrides(raw_data: Dict[str, Any], environ: Mapping[str, str]) -> Dict[str, Any]:
    """Fill missing ``testrail`` keys from the TESTRAIL_* environment variables."""
    section = raw_data.get("testrail")
    if section is None:
        section = {}
    elif not isinstance(section, dict):
        return raw_data
    section = dict(section)
    for env_name, key in ENV_OVERRIDES.items():
        if not section.get(key) and environ.get(env_name):
            section[key] = environ[env_name]
    return {**raw_data, "testrail": section}


def _format_validation_errors(exc: ValidationError) -> str:
    """Format Pydantic validation errors into a readable multi-line string."""
    lines: List[str] = []
    for err in exc.errors():
        loc = " → ".join(str(part) for part in err["loc"])
        lines.append(f"  • {loc}: {err['msg']}")
    return "\n".join(lines)


def validate_config(
    raw_data: Dict[str, Any],
    environ: Optional[Mapping[str, str]] = None,
) -> AppConfig:
    """Expand, apply env overrides and validate an already parsed mapping."""
    env = os.environ if environ is None else environ
    raw_data = expand_env_vars(raw_data, env)
    raw_data = _apply_env_overrides(raw_data, env)

    try:
        return AppConfig.model_validate(raw_data)
    except ValidationError as exc:
        error_summary = _format_validation_errors(exc)
        raise ConfigurationError(
            f"Configuration validation failed ({len(exc.errors())} error(s)):\n{error_summary}"
        ) from exc


# ── Public API ───────────────────────────────────────────────────────────


def load_config(
    cfg_fpath: Optional[str],
    environ: Optional[Mapping[str, str]] = None,
) -> AppConfig:
    """Load and return the validated :class:`AppConfig`.

    Steps:
        1. Read the YAML file (skipped when *cfg_fpath* is ``None``)
        2. Expand ``${VAR}`` environment variable references
        3. Fill the TestRail connection from ``TESTRAIL_*`` variables
        4. Validate against :class:`AppConfig` (all errors reported at once)

    Raises:
        ConfigurationError: On file I/O errors, parse errors, or
            validation failures.
    """
    raw_data: Dict[str, Any] = {}
    if cfg_fpath is not None:
        logger.debug("Loading configuration file: %s", cfg_fpath)
        if not os.path.exists(cfg_fpath):
            raise ConfigurationError(f"Configuration file does not exist: {cfg_fpath}")
        raw_data = _read_config_file(cfg_fpath)
    else:
        logger.debug("No configuration file; using environment variables only.")

    config = validate_config(raw_data, environ)
    logger.info(
        "Configuration loaded (v%s). TestRail: %s, transport: %s",
        config.version,
        config.testrail.base_url,
        config.server.transport,
    )
    return config
