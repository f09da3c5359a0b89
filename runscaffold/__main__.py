from __future__ import annotations

import argparse
import logging
import sys
from datetime import datetime
from pathlib import Path

from runscaffold.config import ConfigError, build_products, build_run, load_config
from runscaffold.errors import ScaffoldError
from runscaffold.io.dirs import make_log_dirs
from runscaffold.obs.logging import LogSettings, build_logger, log_event
from runscaffold.pipeline.product_level import create_product_level
from runscaffold.pipeline.result import ScaffoldResult
from runscaffold.pipeline.top_level import create_top_level, resolve_bam_basecall_path

EXIT_OK = 0
EXIT_CONFIG_ERROR = 2
EXIT_SCAFFOLD_ERROR = 3
EXIT_DIRECTORY_ERROR = 4

LEVELS = ("top", "product", "all")


def parse_args(argv: list[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Analysis run folder scaffolding")
    subparsers = parser.add_subparsers(dest="command", required=True)

    scaffold_parser = subparsers.add_parser("scaffold", help="Create the analysis folder tree")
    scaffold_parser.add_argument("--config", required=True, help="Path to run config YAML")
    scaffold_parser.add_argument("--level", choices=LEVELS, default="all", help="Scaffolding level")
    scaffold_parser.add_argument("--timestamp", help="Suffix for a new BAM_basecalls directory")
    scaffold_parser.add_argument("--log-level", default="INFO", help="Logging level")

    log_parser = subparsers.add_parser("log-dirs", help="Create named log directories")
    log_parser.add_argument("--analysis-path", required=True, help="Analysis directory")
    log_parser.add_argument("--name", action="append", required=True, help="Log directory name")
    log_parser.add_argument("--log-level", default="INFO", help="Logging level")

    return parser.parse_args(argv)


def generate_timestamp() -> str:
    return datetime.now().strftime("%Y%m%d-%H%M%S")


def _log_result(logger: logging.Logger, stage: str, result: ScaffoldResult) -> None:
    for message in result.msgs:
        log_event(logger, logging.INFO, "scaffold_info", message, stage=stage)
    for error in result.errors:
        log_event(logger, logging.ERROR, "directory_error", error, stage=stage)


def _run_log_dirs(args: argparse.Namespace) -> int:
    logger = build_logger(LogSettings(level=args.log_level.upper(), id_run=None, log_file=None, jsonl=True))
    result = make_log_dirs(Path(args.analysis_path), args.name)
    for error in result.errors:
        log_event(logger, logging.ERROR, "directory_error", error)
    if result.errors:
        return EXIT_DIRECTORY_ERROR
    log_event(logger, logging.INFO, "log_dirs_created", "Log directories created", dirs=result.dirs)
    return EXIT_OK


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv if argv is not None else sys.argv[1:])
    if args.command == "log-dirs":
        return _run_log_dirs(args)
    if args.command != "scaffold":
        raise ValueError(f"Unsupported command: {args.command}")

    logger = build_logger(LogSettings(level=args.log_level.upper(), id_run=None, log_file=None, jsonl=True))

    try:
        loaded = load_config(Path(args.config))
    except ConfigError as exc:
        log_event(logger, logging.ERROR, "config_invalid", str(exc))
        return EXIT_CONFIG_ERROR

    config = loaded.config
    logger = build_logger(
        LogSettings(
            level=args.log_level.upper(),
            id_run=config.run.id_run,
            log_file=config.obs.log_file,
            jsonl=config.obs.log_jsonl,
        )
    )

    run = build_run(config, args.timestamp or generate_timestamp())
    products = build_products(config)
    results: list[tuple[str, ScaffoldResult]] = []

    try:
        if args.level in ("top", "all"):
            results.append(("top", create_top_level(run, logger=logger)))
        if args.level in ("product", "all") and all(result.ok for _, result in results):
            resolve_bam_basecall_path(run)
            results.append(("product", create_product_level(run, products, logger=logger)))
    except (ScaffoldError, OSError) as exc:
        log_event(logger, logging.ERROR, "scaffold_failed", str(exc), exc_type=type(exc).__name__)
        return EXIT_SCAFFOLD_ERROR

    for stage, result in results:
        _log_result(logger, stage, result)

    exit_code = EXIT_OK if all(result.ok for _, result in results) else EXIT_DIRECTORY_ERROR
    log_event(
        logger,
        logging.INFO,
        "scaffold_complete",
        "Scaffolding complete",
        exit_code=exit_code,
        analysis_path=run.analysis_path,
    )
    return exit_code


if __name__ == "__main__":
    raise SystemExit(main())
