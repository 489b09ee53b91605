"""CLI command implementations for phantom-batch."""

from __future__ import annotations

import time
from pathlib import Path
from typing import TYPE_CHECKING, Any, NoReturn

import click
from click.core import ParameterSource

from src.core.config_loader import load_config, save_config_file
from src.core.context import BatchContext
from src.core.errors import InputValidationError, PhantomError
from src.core.formatters import OUTPUT_FORMATS, format_results
from src.core.statistics import calculate_statistics
from src.services.batch_processor import BatchProcessor
from src.services.health_check_processor import HttpHealthCheckProcessor
from src.utils.logger import configure_logging, get_logger
from src.utils.progress import ClickProgressBar, ProgressTracker
from src.utils.validators import parse_duration, split_item_keys

if TYPE_CHECKING:
    from src.models.batch_config import BatchConfig
    from src.models.config import Config
    from src.services.protocols import ProgressSink

logger = get_logger(__name__)


def _fail(click_ctx: click.Context, exc: PhantomError) -> NoReturn:
    click.echo(f"[ERROR] {exc}", err=True)
    click_ctx.exit(exc.exit_code)


def _setup_logging(config: Config) -> None:
    configure_logging(
        config.log_level,
        log_format=config.log_format,
        log_file=config.log_file or None,
        max_size_mb=config.log_max_size,
        max_backups=config.log_max_backups,
    )


def _progress_sink(config: Config, total: int) -> ProgressSink:
    """Pick a bar for interactive terminals, structured log lines otherwise."""
    if config.log_format == "json" or not click.get_text_stream("stderr").isatty():
        return ProgressTracker(total=total)
    return ClickProgressBar(total=total)


def _print_dry_run(items: list[str], batch_config: BatchConfig) -> None:
    click.echo("=== Dry run ===")
    click.echo(f"Services: {len(items)}")
    click.echo(f"Max concurrency: {batch_config.max_concurrency}")
    click.echo(f"Retry attempts: {batch_config.retry_attempts}")
    click.echo(f"Retry delay: {batch_config.retry_delay}s")
    click.echo("\nServices to process:")
    for number, item in enumerate(items, start=1):
        click.echo(f"  {number}. {item}")
    click.echo("\nNo work was executed.")


@click.command()
@click.option("--config-file", type=click.Path(dir_okay=False), default=None, help="YAML config file")
@click.option("--profile", "profile_name", default="default", show_default=True, help="Profile in the config file")
@click.option("--services", multiple=True, help="Service names, comma-separated (repeatable)")
@click.option("--concurrency", type=int, default=None, help="Maximum concurrent services")
@click.option("--retry-count", type=int, default=None, help="Retries after the first attempt")
@click.option("--retry-delay", default=None, help="Delay between attempts, e.g. 2s or 500ms")
@click.option("--progress/--no-progress", default=True, help="Show a progress bar")
@click.option("--dry-run", is_flag=True, help="Show the plan without running it")
@click.option("--timeout", default=None, help="Deadline for the whole batch, e.g. 5m")
@click.option(
    "--endpoint-template",
    default=None,
    envvar="PHANTOM_ECS_ENDPOINT_TEMPLATE",
    help="Health check URL with a {service} placeholder",
)
@click.option("--request-timeout", default=10.0, type=float, show_default=True, help="Per-request timeout in seconds")
@click.option("--output-format", type=click.Choice(OUTPUT_FORMATS), default=None, help="Output format")
@click.pass_context
def batch(
    click_ctx: click.Context,
    config_file: str | None,
    profile_name: str,
    services: tuple[str, ...],
    concurrency: int | None,
    retry_count: int | None,
    retry_delay: str | None,
    progress: bool,
    dry_run: bool,
    timeout: str | None,
    endpoint_template: str | None,
    request_timeout: float,
    output_format: str | None,
) -> None:
    """Run a health check across many services in parallel."""
    overrides: dict[str, Any] = {
        "batch_max_concurrency": concurrency,
        "batch_retry_attempts": retry_count,
        "batch_retry_delay": retry_delay,
        "output_format": output_format,
    }
    if click_ctx.get_parameter_source("progress") == ParameterSource.COMMANDLINE:
        overrides["batch_show_progress"] = progress

    try:
        config = load_config(config_file, profile_name, overrides)
        _setup_logging(config)

        items = split_item_keys(services)
        if not items:
            msg = "no services given; pass them with --services"
            raise InputValidationError(msg)

        batch_config = config.batch_config()
        logger.info("batch_targets", service_count=len(items), services=", ".join(items))

        if dry_run:
            _print_dry_run(items, batch_config)
            return

        if not endpoint_template:
            msg = "--endpoint-template is required unless --dry-run is set"
            raise InputValidationError(msg)
        try:
            processor = HttpHealthCheckProcessor(endpoint_template, timeout=request_timeout)
            deadline = parse_duration(timeout) if timeout else None
        except ValueError as exc:
            raise InputValidationError(str(exc)) from exc

        sink = _progress_sink(config, len(items)) if batch_config.show_progress else None
        batch_processor = BatchProcessor(batch_config, processor, progress=sink)

        start = time.monotonic()
        results = batch_processor.process_all(items, BatchContext(timeout=deadline))
        elapsed = time.monotonic() - start
    except PhantomError as exc:
        _fail(click_ctx, exc)

    stats = calculate_statistics(results)
    click.echo(format_results(results, stats, config.output_format))

    logger.info(
        "batch_summary",
        elapsed_seconds=round(elapsed, 3),
        total=stats.total,
        successful=stats.successful,
        failed=stats.failed,
        average_duration_seconds=round(stats.average_duration_seconds, 3),
    )

    if stats.failed > 0:
        click_ctx.exit(1)


@click.command()
@click.argument("path", type=click.Path(dir_okay=False))
@click.option("--profile", "profile_name", default="default", show_default=True, help="Profile name to write")
@click.option("--force", is_flag=True, help="Overwrite an existing file")
@click.pass_context
def init_config(click_ctx: click.Context, path: str, profile_name: str, force: bool) -> None:
    """Write the effective configuration to a YAML profile file."""
    if Path(path).exists() and not force:
        click.echo(f"[ERROR] {path} already exists (use --force to overwrite)", err=True)
        click_ctx.exit(1)

    try:
        config = load_config()
        save_config_file(config, path, profile=profile_name)
    except PhantomError as exc:
        _fail(click_ctx, exc)

    click.echo(f"[SUCCESS] Wrote configuration to {path}")
