from __future__ import annotations

import argparse
import json
import logging
import platform
import sys
from dataclasses import replace
from pathlib import Path

from code_assistant import __version__
from code_assistant.analyzer import AnalysisError, FileAnalyzer
from code_assistant.config import (
    ConfigError,
    config_to_dict,
    default_config,
    default_config_path,
    load_config,
    save_config,
)
from code_assistant.models import LOG_LEVELS, OUTPUT_FORMATS, AppConfig
from code_assistant.reader import read_file
from code_assistant.reporting import render, write_report

PROG = "code-assistant"

_LOG = logging.getLogger(__name__)

_LEVELS = {
    "error": logging.ERROR,
    "warn": logging.WARNING,
    "info": logging.INFO,
    "debug": logging.DEBUG,
}

EXAMPLES = f"""examples:
  {PROG} analyze .
  {PROG} analyze src/ -r
  {PROG} analyze src/ -r --format json --output report.json
  {PROG} read package.json --lines 20
"""


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog=PROG,
        description="Local command line assistant that flags hard-coded secrets and code smells",
        epilog=EXAMPLES,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("--config", default=None, help="Path to the JSON preference file")
    parser.add_argument("--log-level", choices=LOG_LEVELS, default=None)
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("init", help="Write the configuration file")

    config_parser = subparsers.add_parser("config", help="Show current configuration")
    config_parser.add_argument("-p", "--path", action="store_true", help="Show configuration file path only")
    config_parser.add_argument("--json", action="store_true", help="Print the configuration as JSON")

    analyze_parser = subparsers.add_parser("analyze", help="Analyze files for secrets and potential issues")
    analyze_parser.add_argument("path")
    analyze_parser.add_argument("-r", "--recursive", action="store_true", help="Recursively analyze directory")
    analyze_parser.add_argument("-f", "--format", choices=OUTPUT_FORMATS, default=None)
    analyze_parser.add_argument("--max-files", type=int, default=50)
    analyze_parser.add_argument("--secrets-only", action="store_true", help="Skip complexity analysis")
    analyze_parser.add_argument("--include-hidden", action="store_true")
    analyze_parser.add_argument("--jobs", type=int, default=1, help="Files analyzed in parallel")
    analyze_parser.add_argument("-o", "--output", default=None, help="Write the report to a file")

    read_parser = subparsers.add_parser("read", help="Read and display a file safely")
    read_parser.add_argument("file")
    read_parser.add_argument("-l", "--lines", type=int, default=None, help="Show only first N lines")
    read_parser.add_argument("-s", "--stats", action="store_true", help="Show file statistics")

    subparsers.add_parser("version", help="Show version information")

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    config_path = Path(args.config) if args.config else default_config_path()
    config_problem = None
    try:
        config = load_config(config_path)
    except ConfigError as exc:
        config = default_config()
        config_problem = str(exc)

    _configure_logging(args.log_level or config.general.log_level)
    if config_problem:
        _LOG.warning("Failed to load config, using defaults: %s", config_problem)

    if args.command == "init":
        try:
            saved = save_config(config, config_path)
        except ConfigError as exc:
            print(f"Error: {exc}", file=sys.stderr)
            return 1
        print(json.dumps({"status": "initialized", "config_path": str(saved.resolve())}, indent=2))
        return 0

    if args.command == "config":
        if args.path:
            print(config_path)
        elif args.json:
            print(json.dumps(config_to_dict(config), indent=2))
        else:
            print(_describe_config(config))
        return 0

    if args.command == "analyze":
        return _run_analyze(args, config)

    if args.command == "read":
        return _run_read(args, config)

    if args.command == "version":
        print("Local Code Assistant")
        print(f"Version: {__version__}")
        print(f"Python: {platform.python_version()}")
        print(f"Platform: {sys.platform}")
        return 0

    parser.error(f"Unsupported command: {args.command}")
    return 2


def _run_analyze(args: argparse.Namespace, config: AppConfig) -> int:
    settings = config.analysis
    if args.secrets_only:
        settings = replace(settings, enable_complexity_analysis=False)

    analyzer = FileAnalyzer(settings)
    try:
        reports = analyzer.analyze_path(
            args.path,
            recursive=args.recursive,
            include_hidden=args.include_hidden,
            max_files=args.max_files,
            jobs=max(1, args.jobs),
        )
    except AnalysisError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    _LOG.info("Analyzed %d files", len(reports))
    if not reports:
        print("No files found to analyze")
        return 0

    text = render(reports, args.format or config.general.output_format)
    if args.output:
        out = write_report(args.output, text)
        print(json.dumps({"status": "written", "report": str(out.resolve()), "files": len(reports)}, indent=2))
    else:
        print(text)
    return 0


def _run_read(args: argparse.Namespace, config: AppConfig) -> int:
    result = read_file(args.file, max_file_size=config.analysis.max_file_size)
    if not result.success:
        print(f"Error: {result.error}", file=sys.stderr)
        for warning in result.warnings:
            print(f"Warning: {warning}", file=sys.stderr)
        return 1

    content = result.output or ""
    lines = content.split("\n")
    if args.stats:
        print(f"File: {args.file}")
        print(f"Size: {len(content.encode('utf-8')) / 1024:.2f} KB")
        print(f"Lines: {len(lines)}")
        print("")

    if args.lines is not None:
        print("\n".join(lines[: args.lines]))
        remaining = len(lines) - args.lines
        if remaining > 0:
            print(f"... {remaining} more lines")
    else:
        print(content)
    return 0


def _describe_config(config: AppConfig) -> str:
    def flag(value: bool) -> str:
        return "on" if value else "off"

    lines = [
        "Current Configuration:",
        "",
        "Analysis:",
        f"  Secret Detection: {flag(config.analysis.enable_secret_detection)}",
        f"  Complexity Analysis: {flag(config.analysis.enable_complexity_analysis)}",
        f"  Max File Size: {config.analysis.max_file_size / 1024 / 1024:.0f}MB",
        "",
        "General:",
        f"  Log Level: {config.general.log_level}",
        f"  Output Format: {config.general.output_format}",
        "",
        "LLM:",
        f"  Provider: {config.llm.provider}",
    ]
    if config.llm.provider != "none":
        lines.append(f"  Endpoint: {config.llm.endpoint}")
        lines.append(f"  Model: {config.llm.model}")
    return "\n".join(lines)


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=_LEVELS.get(level, logging.INFO),
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


if __name__ == "__main__":
    raise SystemExit(main())
