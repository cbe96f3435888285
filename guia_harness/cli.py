"""
Command-line entry for the documentation checks and harness utilities.
"""
import argparse
from pathlib import Path
from typing import List, Optional, Sequence

from guia_harness.browser.driver_factory import probe_drivers
from guia_harness.config_manager import Config, load_config
from guia_harness.docs.links import LinkChecker
from guia_harness.docs.references import ReferenceChecker
from guia_harness.docs.terminology import TerminologyChecker
from guia_harness.models.findings import CheckReport
from guia_harness.server.mock_geolocation import MockGeolocationServer
from guia_harness.utils.logger import get_logger, setup_logger

logger = get_logger("cli")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="guia-harness",
        description="Documentation checks and browser test utilities.",
    )
    parser.add_argument("--config", "-c", help="Path to a YAML configuration file.")
    parser.add_argument("--root", help="Repository root to scan (overrides docs.root).")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging.")

    subparsers = parser.add_subparsers(dest="command", required=True)
    subparsers.add_parser("links", help="Check internal markdown links.")
    subparsers.add_parser("references", help="Check file references in markdown prose.")

    terminology = subparsers.add_parser("terminology", help="Check terminology consistency.")
    terminology.add_argument("--all", "-a", action="store_true", help="Check all markdown files in docs/.")
    terminology.add_argument("files", nargs="*", type=Path, help="Markdown files to check.")

    server = subparsers.add_parser("mock-server", help="Serve mock network geolocation.")
    server.add_argument("--host", help="Bind address.")
    server.add_argument("--port", type=int, help="Bind port.")

    subparsers.add_parser("drivers", help="Report which browsers can start.")
    return parser


def _report(report: CheckReport, limit: int) -> int:
    logger.info(
        f"{report.checker}: {report.files_scanned} files, {report.total} checked, "
        f"{report.broken} problem(s)"
    )
    if report.checker == "links":
        logger.info(f"Success rate: {report.get_success_rate():.1f}%")
    if report.excluded:
        logger.info(f"Excluded patterns: {report.excluded}")

    for finding in report.findings[:limit]:
        logger.error(finding.format())
    if report.broken > limit:
        logger.error(f"... and {report.broken - limit} more")

    if report.passed:
        logger.success(f"✅ All {report.checker} checks passed")
    return report.exit_code


def _run_terminology(args: argparse.Namespace, config: Config) -> int:
    checker = TerminologyChecker(config.docs)
    if args.all:
        files: List[Path] = checker.discover()
        logger.info(f"Found {len(files)} files to check")
    else:
        files = list(args.files)

    if not files:
        logger.warning("No files specified. Use --all to check all docs or provide file paths.")
        return 1
    return _report(checker.check_files(files), config.docs.report_limit)


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Main entry point for the CLI."""
    args = build_parser().parse_args(argv)
    config = load_config(args.config)

    setup_logger(
        log_level="DEBUG" if args.verbose else config.logging.level,
        log_file=config.logging.file,
        rotation=config.logging.rotation,
        retention=config.logging.retention,
    )

    if args.root:
        config = config.model_copy(
            update={"docs": config.docs.model_copy(update={"root": args.root})}
        )

    if args.command == "links":
        return _report(LinkChecker(config.docs).run(), config.docs.report_limit)
    if args.command == "references":
        return _report(ReferenceChecker(config.docs).run(), config.docs.report_limit)
    if args.command == "terminology":
        return _run_terminology(args, config)
    if args.command == "mock-server":
        updates = {k: v for k, v in (("host", args.host), ("port", args.port)) if v is not None}
        MockGeolocationServer(config.mock_server.model_copy(update=updates)).serve_forever()
        return 0
    if args.command == "drivers":
        available = probe_drivers(config.browser)
        return 0 if any(available.values()) else 1
    return 2


if __name__ == "__main__":
    raise SystemExit(main())
