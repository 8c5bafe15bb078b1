"""CLI entry point for watch-submit."""

import functools
from pathlib import Path

import click
from loguru import logger
from pydantic import ValidationError

from .automation import check_webdriver, run_automation
from .config import WatchConfig
from .errors import WatchSetupError
from .loop import WatchLoop
from .notifier import ChangeNotifier

log = logger.bind(stage="cli")


@click.command()
@click.argument("path", type=click.Path(path_type=Path))
@click.option(
    "--skip-preflight",
    is_flag=True,
    help="Don't probe the WebDriver server before watching.",
)
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging.")
def main(path: Path, skip_preflight: bool, verbose: bool) -> None:
    """Watch PATH and paste its contents into the demo page on every change."""
    # Pass CLI flags as kwargs to avoid env pollution
    try:
        config = WatchConfig(verbose=verbose)
    except ValidationError as e:
        raise click.ClickException(f"Invalid configuration: {e}") from e
    config.setup_logging()

    log.info(f"Watching file: {path}")
    notifier = ChangeNotifier(path)
    try:
        notifier.start()
    except WatchSetupError as e:
        raise click.ClickException(str(e)) from e

    if not skip_preflight:
        check_webdriver(config)

    loop = WatchLoop(
        path,
        notifier.channel,
        automation=functools.partial(run_automation, config=config),
        settle_delay=config.settle_delay,
    )

    log.info("Watcher started. Waiting for file changes... (Press Ctrl+C to exit)")
    try:
        loop.run()
    except KeyboardInterrupt:
        log.info("Interrupted, stopping watcher")
    finally:
        notifier.stop()

    stats = loop.stats
    log.info(
        f"Handled {stats.attempts} changes: "
        f"{stats.completed} completed, {stats.failed} failed"
    )
