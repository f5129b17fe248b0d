"""
Command-line interface for JUnit report aggregation.
"""

import logging
import sys
from pathlib import Path
from typing import Optional

import click

from .config import ConfigurationError, ReportConfig, load_config, validate_config
from .exceptions import ReportError
from .reader import read_report_tree
from .reporting import ConsoleReporter, JSONReporter, ReportGenerator

logger = logging.getLogger(__name__)


def _make_reporter(config: ReportConfig) -> ReportGenerator:
    if config.report_format == "json":
        return JSONReporter(compact=config.compact_json)
    return ConsoleReporter()


@click.command()
@click.argument(
    "project_dir",
    required=False,
    type=click.Path(exists=True, file_okay=False),
)
@click.option(
    "--config",
    type=click.Path(exists=True),
    help="Path to configuration file (YAML)",
)
@click.option(
    "--pattern",
    type=str,
    help="Glob pattern locating report files (overrides config)",
)
@click.option(
    "--report-format",
    type=click.Choice(["console", "json"]),
    help="Report format (overrides config)",
)
@click.option(
    "--sort-by",
    type=str,
    help="Suite ordering: 'time', 'time asc' or 'time desc' (overrides config)",
)
@click.option(
    "--compact",
    is_flag=True,
    help="Do not pretty print JSON output",
)
@click.option(
    "--workers",
    type=click.IntRange(min=1),
    help="Number of parser threads (overrides config)",
)
@click.option(
    "--on-error",
    type=click.Choice(["fail", "skip"]),
    help="Abort on the first unreadable report file, or skip it with a warning",
)
@click.option(
    "--no-progress",
    is_flag=True,
    help="Never draw the live progress summary",
)
@click.option(
    "--output",
    type=click.Path(),
    help="Output file for report (default: stdout)",
)
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"]),
    default="WARNING",
    help="Logging level",
)
def main(
    project_dir: Optional[str],
    config: Optional[str],
    pattern: Optional[str],
    report_format: Optional[str],
    sort_by: Optional[str],
    compact: bool,
    workers: Optional[int],
    on_error: Optional[str],
    no_progress: bool,
    output: Optional[str],
    log_level: str,
) -> None:
    """
    JUnit Report - Aggregate JUnit XML test reports of a project.

    Examples:

      # Report on every file under */test-reports of the current directory
      junit-report

      # Use a configuration file and a specific project directory
      junit-report --config junit.yaml path/to/project

      # JSON output, fastest suites first
      junit-report --report-format json --sort-by "time asc" --output report.json
    """
    logging.basicConfig(
        level=getattr(logging, log_level),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
    )

    try:
        report_config = load_config(config)

        if pattern:
            report_config.report_dir_pattern = pattern
        if report_format:
            report_config.report_format = report_format
        if sort_by is not None:
            report_config.sort_by = sort_by or None
        if compact:
            report_config.compact_json = True
        if workers:
            report_config.workers = workers
        if on_error:
            report_config.on_error = on_error
        if no_progress:
            report_config.progress = False

        errors = validate_config(report_config)
        if errors:
            click.echo("Configuration errors:", err=True)
            for error in errors:
                click.echo(f"  - {error}", err=True)
            sys.exit(1)

        report = read_report_tree(
            Path(project_dir) if project_dir else Path.cwd(),
            report_config.report_dir_pattern,
            workers=report_config.workers,
            on_error=report_config.error_policy,
            sort_by=report_config.sorting,
            progress=report_config.progress,
        )

        rendered = _make_reporter(report_config).generate(report)

        if output:
            output_path = Path(output)
            output_path.parent.mkdir(parents=True, exist_ok=True)
            output_path.write_text(rendered)
            click.echo(f"Report written to: {output}")
        else:
            click.echo(rendered)

        for file_error in report.errors:
            click.echo(f"Warning: {file_error.error}", err=True)

        logger.info(
            "Report complete: %d tests, %d failures, %d errors, %d skipped",
            report.summary.tests,
            report.summary.failures,
            report.summary.errors,
            report.summary.skipped,
        )

        sys.exit(0 if report.success else 1)

    except ConfigurationError as e:
        logger.error("Configuration error: %s", e)
        click.echo(f"Configuration error: {e}", err=True)
        sys.exit(1)
    except ReportError as e:
        logger.error("Report error: %s", e)
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)
    except FileNotFoundError as e:
        logger.error("File not found: %s", e)
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)
    except Exception as e:
        logger.exception("Unexpected error: %s", e)
        click.echo(f"Unexpected error: {e}", err=True)
        sys.exit(1)


if __name__ == "__main__":
    main()
