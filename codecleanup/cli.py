"""Command-line entry point for the code cleanup gate."""

from __future__ import annotations

import argparse
import json
from pathlib import Path
from typing import List, Optional

from .config import DEFAULT_CONFIG_FILENAME, DEFAULT_SOURCE_DIR, CheckConfig, load_config_file
from .errors import ConfigurationError
from .logging import init_logging
from .result import RunResult, format_summary_table
from .runner import run_scan


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Scan a Java source tree for code cleanup violations",
    )
    parser.add_argument(
        "--project-dir",
        default=".",
        help="Project base directory (defaults to the current directory).",
    )
    parser.add_argument(
        "--source-dir",
        "-s",
        default=None,
        help=f"Directory to scan (defaults to <project-dir>/{DEFAULT_SOURCE_DIR}).",
    )
    parser.add_argument(
        "--config",
        default=None,
        help=f"YAML config file (defaults to <project-dir>/{DEFAULT_CONFIG_FILENAME} when present).",
    )
    parser.add_argument(
        "--check-unused-imports",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Report imports whose name is never used (default: on).",
    )
    parser.add_argument(
        "--max-line-length",
        type=int,
        default=None,
        help="Report lines of at least this many characters (-1 disables, the default).",
    )
    parser.add_argument(
        "--check-newline-at-end",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Report files without a trailing newline (default: on).",
    )
    parser.add_argument(
        "--check-todos",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Report lines containing TODO (default: on).",
    )
    parser.add_argument(
        "--max-method-parameters",
        type=int,
        default=None,
        help="Report methods with more parameters than this (-1 disables, the default).",
    )
    parser.add_argument(
        "--jobs",
        "-j",
        type=int,
        default=1,
        help="Number of files to check in parallel.",
    )
    parser.add_argument(
        "--out",
        "--output",
        dest="output_path",
        type=str,
        default=None,
        help="Path to write the JSON report (e.g., build/cleanup.json).",
    )
    parser.add_argument(
        "--log-format",
        choices=["auto", "pretty", "json"],
        default="auto",
        help="Log output style.",
    )
    return parser


def resolve_settings(args: argparse.Namespace) -> tuple[Path, CheckConfig]:
    """Merge defaults, the config file and command-line flags, in that order."""

    project_dir = Path(args.project_dir)
    config_path = Path(args.config) if args.config else project_dir / DEFAULT_CONFIG_FILENAME
    if args.config and not config_path.exists():
        raise ConfigurationError(f"Config file not found: {config_path}")
    data = load_config_file(config_path)

    # A source_dir from the config file is relative to the project directory.
    if args.source_dir:
        root = Path(args.source_dir)
    else:
        root = project_dir / str(data.get("source_dir") or DEFAULT_SOURCE_DIR)

    config = CheckConfig.from_mapping(data).with_overrides(
        check_unused_imports=args.check_unused_imports,
        max_line_length=args.max_line_length,
        check_newline_at_end=args.check_newline_at_end,
        check_todos=args.check_todos,
        max_method_parameters=args.max_method_parameters,
    )
    return root, config


def write_output(result: RunResult, output_path: Optional[str]) -> None:
    print(format_summary_table(result))

    if output_path:
        payload = json.dumps(result.to_dict(), indent=2)
        output_file = Path(output_path)
        output_file.parent.mkdir(parents=True, exist_ok=True)
        output_file.write_text(payload, encoding="utf-8")
        print(f"\nReport written to {output_path}")


def main(argv: List[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        root, config = resolve_settings(args)
    except ConfigurationError as exc:
        parser.error(str(exc))
    if args.jobs < 1:
        parser.error("--jobs must be at least 1")

    log = init_logging(args.log_format)
    result = run_scan(root, config, log=log, jobs=args.jobs)
    write_output(result, args.output_path)
    return result.exit_code()


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
