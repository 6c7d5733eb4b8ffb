"""Command-line entry point for namefmt.

Installed as the ``namefmt`` console script; supports shell auto-completion
via ``argcomplete``.
"""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import Any, Iterable, Mapping, Optional

import argcomplete

from common.base.logging import get_logger, setup_logging
from namefmt.config import NamingConfig, resolve_config, write_default_config
from namefmt.engine import run, write_plan_report
from namefmt.errors import NamefmtError

log = get_logger("cli")

EXIT_OK = 0
EXIT_FAILURES = 1
EXIT_FATAL = 2
EXIT_INTERRUPTED = 130

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="namefmt",
        description="Format filenames according to configuration (dry-run unless --inplace).",
    )
    parser.add_argument(
        "path",
        nargs="?",
        default=".",
        help="Directory or file to process (defaults to the current directory).",
    )
    parser.add_argument(
        "--inplace",
        "-i",
        action="store_true",
        help="Actually perform renames (default: preview only).",
    )
    parser.add_argument(
        "--config",
        "-c",
        help="Override config file location (TOML, or YAML when ending in .yaml/.yml).",
    )
    parser.add_argument(
        "--timestamp",
        action="store_true",
        help="Prefix YYYY_MM_DD__ (file modification date) to every filename.",
    )
    parser.add_argument(
        "--report",
        help="Write a CSV of every processed file and its outcome to this path.",
    )
    parser.add_argument(
        "--no-progress",
        action="store_true",
        help="Disable the progress bar while walking.",
    )
    parser.add_argument(
        "--log-level",
        choices=LOG_LEVELS,
        help="Set logging verbosity (default: config value or INFO).",
    )
    parser.add_argument(
        "--init-config",
        action="store_true",
        help="Write the default configuration to the config path and exit.",
    )
    parser.add_argument(
        "--show-config",
        action="store_true",
        help="Print the resolved configuration as JSON and exit.",
    )
    return parser


def _configure_logging(logging_cfg: Mapping[str, Any], level_override: Optional[str]) -> None:
    setup_logging(
        level=level_override or logging_cfg.get("level"),
        use_rich=logging_cfg.get("use_rich"),
        log_dir=logging_cfg.get("log_dir"),
        file_prefix=logging_cfg.get("file_prefix"),
    )


def _resolve(args: argparse.Namespace) -> NamingConfig:
    config = resolve_config(args.config, timestamp=args.timestamp)
    if config.logging:
        _configure_logging(config.logging, args.log_level)
    return config


def cli_namefmt(argv: Optional[Iterable[str]] = None) -> int:
    parser = build_parser()
    argcomplete.autocomplete(parser)
    args = parser.parse_args(list(argv) if argv is not None else None)

    _configure_logging({}, args.log_level)
    log.debug(f"Arguments: {args}")

    try:
        if args.init_config:
            write_default_config(args.config)
            return EXIT_OK

        config = _resolve(args)
        if args.show_config:
            print(json.dumps(config.as_dict(), indent=2))
            return EXIT_OK

        result = run(
            Path(args.path),
            config,
            dry_run=not args.inplace,
            show_progress=not args.no_progress and sys.stderr.isatty(),
            record_plans=bool(args.report),
        )
        if args.report:
            try:
                write_plan_report(result, args.report)
            except OSError as exc:
                log.error(f"❌ Could not write report {args.report}: {exc}")
                return EXIT_FAILURES
    except NamefmtError as exc:
        log.error(f"❌ {exc}")
        return EXIT_FATAL
    except KeyboardInterrupt:
        log.warning("⚠️ Operation cancelled by user.")
        return EXIT_INTERRUPTED

    if result.exit_code != EXIT_OK:
        log.error(f"❌ {result.summary.failed} rename(s) failed.")
        return EXIT_FAILURES
    return EXIT_OK


def main() -> None:
    raise SystemExit(cli_namefmt())


if __name__ == "__main__":
    main()
