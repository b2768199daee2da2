"""Logging configuration setup.

All logging goes to a timestamped file: in stdio mode stdout carries the
MCP protocol, so nothing may be written there.
"""

import copy
import logging
import logging.config
import os
import re
import sys
from datetime import datetime
from typing import Any, Dict, List, Optional, Set, Tuple

from testrail_mcp.constants import DEFAULT_LOG_LEVEL, LOG_DIR

_VALID_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

# ── Secret redaction filter ──────────────────────────────────────────────

_REDACTED = "***REDACTED***"


class SecretRedactionFilter(logging.Filter):
    """Replaces registered secret values (API keys) in log records."""

    def __init__(self) -> None:
        super().__init__()
        self._secrets: Set[str] = set()
        self._pattern: Optional["re.Pattern[str]"] = None

    def register(self, value: Optional[str]) -> None:
        """Register a secret value for redaction."""
        if value and len(value) >= 4:  # skip trivially short values
            self._secrets.add(value)
            # Longest first so overlapping secrets are fully masked
            escaped = sorted((re.escape(s) for s in self._secrets), key=len, reverse=True)
            self._pattern = re.compile("|".join(escaped))

    def redact(self, text: str) -> str:
        if self._pattern is None:
            return text
        return self._pattern.sub(_REDACTED, text)

    def filter(self, record: logging.LogRecord) -> bool:
        if self._pattern is None:
            return True
        if isinstance(record.msg, str):
            record.msg = self.redact(record.msg)
        if isinstance(record.args, dict):
            record.args = {
                k: self.redact(v) if isinstance(v, str) else v for k, v in record.args.items()
            }
        elif isinstance(record.args, tuple):
            record.args = tuple(self.redact(a) if isinstance(a, str) else a for a in record.args)
        return True


# Module-level singleton; the server registers the API key at startup.
secret_redaction_filter = SecretRedactionFilter()

# Loggers whose level follows the configured level.
APP_LOGGERS: List[str] = [
    "testrail_mcp",
    "testrail_mcp.gateway",
    "testrail_mcp.client",
    "testrail_mcp.tools",
    "testrail_mcp.server",
    "testrail_mcp.config",
    "mcp",
    "uvicorn",
    "uvicorn.error",
    "starlette",
]

BASE_LOG_CFG: Dict[str, Any] = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "simple_file": {
            "format": "%(asctime)s - %(name)30s:%(lineno)-4d - %(levelname)-7s - %(message)s",
            "datefmt": "%Y-%m-%d %H:%M:%S",
        },
    },
    "handlers": {
        "file_handler": {
            "class": "logging.FileHandler",
            "level": "DEBUG",
            "formatter": "simple_file",
            "filename": "temp_log_name.log",
            "encoding": "utf-8",
        },
    },
    "loggers": {
        # Request lines from httpx would repeat every TestRail URL.
        "httpx": {"handlers": ["file_handler"], "propagate": False, "level": "WARNING"},
        "httpcore": {"handlers": ["file_handler"], "propagate": False, "level": "WARNING"},
        "uvicorn.access": {"handlers": ["file_handler"], "propagate": False, "level": "WARNING"},
    },
    "root": {
        "handlers": ["file_handler"],
        "level": "WARNING",
    },
}


def _validate_level(log_lvl_str: Optional[str], quiet: bool) -> str:
    level = (log_lvl_str or DEFAULT_LOG_LEVEL).upper()
    if level not in _VALID_LEVELS:
        if not quiet:
            print(
                f"Warning: invalid log level '{log_lvl_str}'. Using '{DEFAULT_LOG_LEVEL}'.",
                file=sys.stderr,
            )
        level = DEFAULT_LOG_LEVEL
    return level


def build_log_config(log_fpath: str, level: str) -> Dict[str, Any]:
    """Return the ``dictConfig`` mapping for *level* writing to *log_fpath*."""
    log_cfg = copy.deepcopy(BASE_LOG_CFG)
    log_cfg["handlers"]["file_handler"]["filename"] = log_fpath
    for name in APP_LOGGERS:
        log_cfg["loggers"][name] = {
            "handlers": ["file_handler"],
            "propagate": False,
            "level": level,
        }
    if level == "DEBUG":
        log_cfg["loggers"]["uvicorn.access"]["level"] = "INFO"
        log_cfg["root"]["level"] = "DEBUG"
    return log_cfg


def setup_logging(
    log_lvl_str: Optional[str],
    *,
    log_dir: str = LOG_DIR,
    quiet: bool = False,
) -> Tuple[str, str]:
    """
    Set up the logging system.

    Args:
        log_lvl_str: The desired log level string (e.g., 'debug', 'info').
        log_dir: Directory for the timestamped log file.
        quiet: If *True*, do not write status lines to stderr.

    Returns:
        A tuple of (log_file_path, validated_log_level).
    """
    level = _validate_level(log_lvl_str, quiet)

    ts = datetime.now().strftime("%Y%m%d_%H%M%S")
    os.makedirs(log_dir, exist_ok=True)
    log_fpath = os.path.join(log_dir, f"testrail_mcp_{ts}_{level}.log")

    logging.config.dictConfig(build_log_config(log_fpath, level))
    for handler in logging.root.handlers:
        handler.addFilter(secret_redaction_filter)
    for name in APP_LOGGERS:
        for handler in logging.getLogger(name).handlers:
            if secret_redaction_filter not in handler.filters:
                handler.addFilter(secret_redaction_filter)

    if not quiet:
        print(f"Logging initialized. Level: {level}, log file: {log_fpath}", file=sys.stderr)
    return log_fpath, level
