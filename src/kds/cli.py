"""CLI/bootstrap helpers for the kds secret browser."""

from __future__ import annotations

import argparse
import logging
import logging.handlers
import os
import sys
from collections.abc import Callable
from pathlib import Path
from typing import Any

from kubernetes.config.config_exception import ConfigException
from platformdirs import user_config_dir
from rich.console import Console
from rich.text import Text

from kds import __version__
from kds.action_messages import build_kubeconfig_error, build_secret_fetch_error
from kds.config import load_config
from kds.decoding import decode_value
from kds.models import CONFIG_APP_NAME, DECODE_FAILED_MARKER, UserConfig
from kds.services.interfaces import RecordSource
from kds.services.kubernetes_source import (
    build_record_source,
    describe_source_error,
    resolve_namespace,
)
from kds.themes import THEME_NAMES, get_view_style

logger = logging.getLogger(__name__)


def _print_record_directly(
    source: RecordSource,
    name: str,
    namespace: str,
    *,
    theme_name: str | None = None,
    console: Console | None = None,
) -> int:
    """Print one secret's decoded fields to stdout and return the exit code."""
    try:
        raw_fields = source.get_record(namespace, name)
    except Exception as exc:
        logger.debug("Direct fetch of %r failed", name, exc_info=True)
        print(
            build_secret_fetch_error(name, namespace, describe_source_error(exc)),
            file=sys.stderr,
        )
        return 1

    style = get_view_style(theme_name)
    console = console or Console(highlight=False, soft_wrap=True)
    console.print(
        Text(f"Data for secret '{name}' in namespace '{namespace}'", style=f"bold {style.primary}")
    )
    for key in sorted(raw_fields):
        text, ok = decode_value(raw_fields[key])
        line = Text(f"  {key}: {text}")
        if not ok:
            line.append(f" {DECODE_FAILED_MARKER}", style=style.note)
        console.print(line)
    return 0


def _configure_logging(debug: bool) -> None:
    """Configure logging. When debug=True, logs to file at DEBUG level."""
    if not debug:
        # Default: suppress all logging (TUI captures stderr)
        logging.disable(logging.CRITICAL)
        return

    log_dir = Path(user_config_dir(CONFIG_APP_NAME))
    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = log_dir / "debug.log"

    handler = logging.handlers.RotatingFileHandler(
        log_file,
        maxBytes=5 * 1024 * 1024,
        backupCount=3,
        encoding="utf-8",
    )
    handler.setFormatter(
        logging.Formatter(
            "%(asctime)s %(name)s %(levelname)s %(message)s",
            datefmt="%H:%M:%S",
        )
    )
    logging.root.addHandler(handler)
    logging.root.setLevel(logging.DEBUG)


def _configure_color_mode(color_mode: str) -> None:
    """Configure environment hints for terminal color behavior."""
    if color_mode == "never":
        os.environ["NO_COLOR"] = "1"
        os.environ.pop("FORCE_COLOR", None)
        return
    if color_mode == "always":
        os.environ["FORCE_COLOR"] = "1"
        os.environ.pop("NO_COLOR", None)
        return
    # auto
    os.environ.pop("FORCE_COLOR", None)


def _validate_interactive_tty() -> bool:
    """Return True when stdin/stdout are interactive terminals."""
    return bool(sys.stdin.isatty() and sys.stdout.isatty())


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="kds",
        description=(
            "Browse, fuzzy-find and view Kubernetes secrets in a terminal UI, "
            "or print one secret's decoded data."
        ),
    )
    parser.add_argument(
        "secret_name",
        nargs="?",
        default=None,
        metavar="secret-name",
        help="Print this secret's decoded data and exit (no TUI)",
    )
    parser.add_argument(
        "-n",
        "--namespace",
        type=str,
        default=None,
        help="Namespace to browse (overrides config and the kubeconfig context)",
    )
    parser.add_argument(
        "--kubeconfig",
        type=str,
        default=None,
        help="Path to kubeconfig (default: config value or ~/.kube/config)",
    )
    parser.add_argument(
        "--theme",
        choices=THEME_NAMES,
        default=None,
        help="Color theme (default: config value or 'default')",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging to file (~/.config/kds/debug.log)",
    )
    parser.add_argument(
        "--color",
        choices=["auto", "always", "never"],
        default="auto",
        help="Color output mode for terminal UI (default: auto)",
    )
    parser.add_argument(
        "--no-color",
        action="store_true",
        help="Disable terminal colors (equivalent to --color never)",
    )
    parser.add_argument(
        "--version",
        action="store_true",
        help="Print the version of kds and exit",
    )
    return parser


def main(
    argv: list[str] | None = None,
    *,
    load_config_fn: Callable[[], UserConfig] = load_config,
    build_source_fn: Callable[[str | None, int], RecordSource] = build_record_source,
    resolve_namespace_fn: Callable[[str | None], str] = resolve_namespace,
    configure_logging_fn: Callable[[bool], None] = _configure_logging,
    configure_color_mode_fn: Callable[[str], None] = _configure_color_mode,
    validate_interactive_tty_fn: Callable[[], bool] = _validate_interactive_tty,
    app_factory: Callable[..., Any] | None = None,
) -> int:
    """Main entry point. Returns exit code."""
    args = _build_parser().parse_args(argv)
    if args.version:
        print(f"kds Version: {__version__}")
        return 0

    color_mode = "never" if args.no_color else args.color
    configure_color_mode_fn(color_mode)
    configure_logging_fn(args.debug)
    logger.debug("kds %s starting", __version__)

    config = load_config_fn()
    theme_name = args.theme or config.theme_name
    kubeconfig = args.kubeconfig or config.kubeconfig or None

    try:
        source = build_source_fn(kubeconfig, config.request_timeout_seconds)
        namespace = args.namespace or config.namespace or resolve_namespace_fn(kubeconfig)
    except (ConfigException, OSError, ValueError) as exc:
        logger.debug("Kubeconfig %r could not be loaded", kubeconfig, exc_info=True)
        print(build_kubeconfig_error(kubeconfig, describe_source_error(exc)), file=sys.stderr)
        return 1
    logger.debug("Using namespace %r (kubeconfig=%r)", namespace, kubeconfig)

    if args.secret_name:
        return _print_record_directly(source, args.secret_name, namespace, theme_name=theme_name)

    if not validate_interactive_tty_fn():
        print(
            "Error: kds requires an interactive TTY for the full UI.",
            file=sys.stderr,
        )
        print("Next steps:", file=sys.stderr)
        print("  - Run kds directly in a terminal session", file=sys.stderr)
        print("  - Use kds <secret-name> for non-interactive output", file=sys.stderr)
        print("  - Use --help for command documentation", file=sys.stderr)
        return 2

    if app_factory is None:
        from kds.app import SecretBrowser as _SecretBrowser

        app_factory = _SecretBrowser

    app = app_factory(
        source=source,
        namespace=namespace,
        config=config,
        theme_name=theme_name,
    )
    app.run()
    return app.return_code or 0


__all__ = [
    "_configure_color_mode",
    "_configure_logging",
    "_print_record_directly",
    "_validate_interactive_tty",
    "main",
]
