"""CLI entry point for the example test orchestrator."""

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path
from typing import Any

from example_orchestrator.backends.loading import create_backend
from example_orchestrator.builder import BuildCoordinator, BuildReport
from example_orchestrator.catalog import discover_test_descriptors
from example_orchestrator.config import DEFAULT_TARGET, RunConfig
from example_orchestrator.errors import OrchestratorError
from example_orchestrator.models.result import BatchSummary
from example_orchestrator.scheduler import Scheduler

STATUS_SYMBOLS = {
    True: "✓",
    False: "✗",
}


def log_results_summary(log: logging.Logger, summary: BatchSummary) -> None:
    """Log a formatted summary of the batch with per-test results."""
    log.info("=" * 80)
    log.info("Test run summary:")
    log.info("=" * 80)

    for outcome in sorted(summary.outcomes, key=lambda o: o.descriptor):
        log.info(
            "%s %s: %s (%.2fs)",
            STATUS_SYMBOLS[outcome.passed],
            outcome.descriptor.label,
            outcome.reason,
            outcome.duration,
        )
        if outcome.message:
            log.info("  Message: %s", outcome.message)
        log.info("  Log: %s", outcome.log_path)

    log.info("Total build time: %.2fs", summary.total_build_time)
    log.info("Total test time: %.2fs", summary.total_run_time)
    log.info("Passed tests: %d", summary.passed_count)
    log.info("Failed tests: %d", summary.failed_count)
    if summary.skipped_count:
        log.info("Skipped tests: %d", summary.skipped_count)


def format_output(summary: BatchSummary) -> dict[str, Any]:
    """Format the batch summary for JSON output."""
    results = [
        {
            "name": outcome.descriptor.name,
            "build_mode": outcome.descriptor.build_mode,
            "passed": outcome.passed,
            "reason": outcome.reason,
            "duration": outcome.duration,
            "exit_code": outcome.exit_code,
            "message": outcome.message,
            "log_path": str(outcome.log_path),
        }
        for outcome in sorted(summary.outcomes, key=lambda o: o.descriptor)
    ]

    return {
        "total": len(results),
        "passed": summary.passed_count,
        "failed": summary.failed_count,
        "skipped": summary.skipped_count,
        "build_time": summary.total_build_time,
        "run_time": summary.total_run_time,
        "results": results,
    }


async def run(config: RunConfig, backend_config_json: str = "{}") -> int:
    """Build and test every example, returning the exit code."""
    log = logging.getLogger("example_orchestrator")

    log.info("Loading backend: %s", config.service)
    backend = create_backend(config.service, backend_config_json)

    descriptors = discover_test_descriptors(config.project_path, config.examples_dir)
    if not descriptors:
        log.info("No examples found in %s", config.project_path)
        print(json.dumps(format_output(BatchSummary())))
        return 0

    if config.skip_build:
        log.info("Skipping build phase")
        report = BuildReport(built=descriptors)
    else:
        report = await BuildCoordinator(config=config).build_all(descriptors)

    summary = await Scheduler(config=config, backend=backend).run_all(
        report.built,
        build_failures=report.failed,
        build_time=report.duration,
    )

    log_results_summary(log, summary)
    print(json.dumps(format_output(summary), indent=2))

    return 1 if summary.has_failures else 0


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        description="Build firmware examples and run them on a test backend"
    )
    parser.add_argument(
        "-p",
        "--project-path",
        type=Path,
        required=True,
        help="Path to the firmware project",
    )
    parser.add_argument(
        "-o",
        "--output-directory",
        type=Path,
        required=True,
        help="Directory where serial logs are stored",
    )
    parser.add_argument(
        "-c",
        "--continue-on-error",
        action="store_true",
        help="Keep building and running after a failure",
    )
    parser.add_argument(
        "-n",
        "--skip-build",
        action="store_true",
        help="Run previously built artifacts without building",
    )
    parser.add_argument(
        "-j",
        "--parallelism",
        type=int,
        default=0,
        help="Number of tests run at once (0 means one per CPU)",
    )
    parser.add_argument(
        "-s",
        "--service",
        default="simulate",
        help="Backend key (flash, emulate, simulate)",
    )
    parser.add_argument(
        "-t",
        "--timeout",
        type=float,
        default=5.0,
        help=(
            "Per-test timeout in seconds "
            "(the simulate backend receives it in milliseconds)"
        ),
    )
    parser.add_argument(
        "--backend-config",
        default="{}",
        help="JSON configuration for the backend",
    )
    parser.add_argument(
        "--target",
        default=DEFAULT_TARGET,
        help="Target triple the examples are compiled for",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )
    return parser.parse_args(argv)


def main() -> None:
    """CLI entry point."""
    args = parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )
    log = logging.getLogger("example_orchestrator")

    try:
        config = RunConfig.build(
            project_path=args.project_path,
            output_dir=args.output_directory,
            service=args.service,
            timeout=args.timeout,
            continue_on_error=args.continue_on_error,
            skip_build=args.skip_build,
            parallelism=args.parallelism,
            target=args.target,
        )
        exit_code = asyncio.run(run(config, args.backend_config))
    except OrchestratorError as e:
        log.error("%s", e)
        exit_code = 2

    sys.exit(exit_code)


if __name__ == "__main__":  # pragma: no cover
    main()
