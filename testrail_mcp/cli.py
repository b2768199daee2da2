"""CLI argument parsing and main entry point.

Usage::

    testrail-mcp                         # stdio, config from ./config.yaml or TESTRAIL_* env
    testrail-mcp --transport sse --port 9000
    testrail-mcp --config /etc/testrail-mcp.yaml --log-level debug
"""

import argparse
import asyncio
import logging
import os
import signal
import sys
from typing import List, Optional

import uvicorn

from testrail_mcp.config import AppConfig, load_config
from testrail_mcp.constants import SERVER_NAME, SERVER_VERSION
from testrail_mcp.display.logging_config import setup_logging
from testrail_mcp.errors import ConfigurationError

module_logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "TESTRAIL_MCP_CONFIG"

# Config file discovery order (first match wins)
_CONFIG_SEARCH_ORDER = ("config.yaml", "config.yml")

uvicorn_svr_inst: Optional[uvicorn.Server] = None


def _find_config_file(cli_path: Optional[str] = None) -> Optional[str]:
    """Locate the config file.

    ``--config`` wins, then ``$TESTRAIL_MCP_CONFIG``, then config.yaml /
    config.yml in the working directory.  ``None`` means environment
    variables only.
    """
    if cli_path:
        return os.path.abspath(cli_path)
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        return os.path.abspath(env_path)
    for name in _CONFIG_SEARCH_ORDER:
        candidate = os.path.join(os.getcwd(), name)
        if os.path.isfile(candidate):
            return candidate
    return None


def _apply_cli_overrides(config: AppConfig, args: argparse.Namespace) -> AppConfig:
    """Command-line transport/host/port take precedence over the file."""
    updates = {
        key: value
        for key, value in (
            ("transport", args.transport),
            ("host", args.host),
            ("port", args.port),
        )
        if value is not None
    }
    if not updates:
        return config
    server = config.server.model_validate({**config.server.model_dump(), **updates})
    return config.model_copy(update={"server": server})


async def _serve_sse(config: AppConfig, log_lvl: str) -> None:
    """Run the SSE transport under uvicorn until interrupted."""
    global uvicorn_svr_inst

    # Import app here to avoid circular imports at module level
    from testrail_mcp.server.app import create_app

    application = create_app(config)
    uvicorn_cfg = uvicorn.Config(
        app=application,
        host=config.server.host,
        port=config.server.port,
        log_config=None,
        log_level=log_lvl.lower() if log_lvl == "DEBUG" else "warning",
    )
    uvicorn_svr_inst = uvicorn.Server(uvicorn_cfg)

    module_logger.info(
        "Preparing to start Uvicorn server: http://%s:%s",
        config.server.host,
        config.server.port,
    )
    try:
        await uvicorn_svr_inst.serve()
    except Exception as e_serve:
        module_logger.exception("Unexpected error while running Uvicorn server: %s", e_serve)
        raise
    finally:
        module_logger.info("%s has shut down or is shutting down.", SERVER_NAME)


async def main_async(config: AppConfig, log_lvl: str) -> None:
    """Start the configured transport."""
    if config.server.transport == "sse":
        await _serve_sse(config, log_lvl)
    else:
        from testrail_mcp.server.transport import run_stdio

        await run_stdio(config)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="testrail-mcp",
        description=f"Start {SERVER_NAME} v{SERVER_VERSION}",
    )
    parser.add_argument(
        "--config",
        type=str,
        default=None,
        help=f"Path to a YAML config file (default: ${CONFIG_ENV_VAR} or ./config.yaml)",
    )
    parser.add_argument(
        "--transport",
        type=str,
        default=None,
        choices=["stdio", "sse"],
        help="MCP transport (default: from config, else stdio)",
    )
    parser.add_argument("--host", type=str, default=None, help="SSE host address")
    parser.add_argument("--port", type=int, default=None, help="SSE port")
    parser.add_argument(
        "--log-level",
        type=str,
        default="info",
        choices=["debug", "info", "warning", "error", "critical"],
        help="Set file logging level (default: info)",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {SERVER_VERSION}")
    return parser


def main(argv: Optional[List[str]] = None) -> None:
    """Program entry point: parse arguments and start the async main."""
    args = _build_parser().parse_args(argv)

    _log_fpath, cfg_log_lvl = setup_logging(args.log_level)
    module_logger.info(
        "---- %s v%s starting (file log level: %s) ----",
        SERVER_NAME,
        SERVER_VERSION,
        cfg_log_lvl,
    )

    cfg_fpath = _find_config_file(args.config)
    module_logger.info("Configuration file path resolved to: %s", cfg_fpath or "<environment>")
    try:
        config = _apply_cli_overrides(load_config(cfg_fpath), args)
    except ConfigurationError as e_cfg:
        module_logger.error("Configuration error: %s", e_cfg)
        print(f"Configuration error: {e_cfg}", file=sys.stderr)
        sys.exit(1)

    if config.server.transport == "sse":
        # The first Ctrl+C triggers a graceful shutdown, the second forces an exit.
        _force_exit_count = 0

        def _sigint_handler(sig: int, frame: object) -> None:
            nonlocal _force_exit_count
            _force_exit_count += 1
            if _force_exit_count >= 2:
                module_logger.info("Force exit requested (double Ctrl+C).")
                os._exit(1)
            module_logger.info("Ctrl+C received, shutting down...")
            if uvicorn_svr_inst is not None:
                uvicorn_svr_inst.should_exit = True

        signal.signal(signal.SIGINT, _sigint_handler)

    try:
        asyncio.run(main_async(config, cfg_log_lvl))
    except KeyboardInterrupt:
        module_logger.info("%s main program interrupted by KeyboardInterrupt.", SERVER_NAME)
    except Exception as e_fatal:
        module_logger.exception(
            "%s main program encountered an uncaught fatal error: %s",
            SERVER_NAME,
            e_fatal,
        )
        sys.exit(1)
    finally:
        module_logger.info("%s application finished.", SERVER_NAME)


if __name__ == "__main__":
    main()
