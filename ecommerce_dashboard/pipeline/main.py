"""CLI entry point for the e-commerce dashboard.

Loads configuration, runs the orchestrator over the simulated data source
and prints the transcript.
"""

import asyncio
import sys
from pathlib import Path
from typing import Optional

import click
from rich.console import Console

from ecommerce_dashboard.fetcher.data_source import SimulatedDataSource
from ecommerce_dashboard.models.config import LOG_LEVELS, ConfigManager, DashboardConfig
from ecommerce_dashboard.models.data_models import DashboardResult
from ecommerce_dashboard.pipeline.orchestrator import DashboardOrchestrator
from ecommerce_dashboard.pipeline.output import TranscriptReporter


console = Console(highlight=False)


@click.command()
@click.option(
    "--config",
    "-c",
    type=click.Path(dir_okay=False, path_type=Path),
    default="config/dashboard.yaml",
    help="Path to configuration YAML file (ignored if missing)",
)
@click.option(
    "--retries",
    "-r",
    type=int,
    help="Retries after the first failed attempt (overrides config)",
)
@click.option(
    "--delay",
    "-d",
    type=float,
    help="Delay between retries in seconds (overrides config)",
)
@click.option(
    "--log-level",
    "-l",
    type=click.Choice(LOG_LEVELS, case_sensitive=False),
    help="Structured log level (overrides config)",
)
@click.version_option(version="1.0.0", prog_name="ecommerce-dashboard")
def main(
    config: Path,
    retries: Optional[int],
    delay: Optional[float],
    log_level: Optional[str],
) -> None:
    """
    E-commerce Dashboard - Resilient loading of catalog, reviews and sales.

    Fetches the product catalog, then every product's reviews concurrently,
    then the sales report, retrying each call on failure. Failed parts are
    reported and left empty; the run always finishes with a summary.

    Examples:

        # Run with default configuration
        $ python -m ecommerce_dashboard.pipeline.main

        # Five retries, half a second apart
        $ python -m ecommerce_dashboard.pipeline.main --retries 5 --delay 0.5
    """
    try:
        cli_overrides = {}
        if retries is not None:
            cli_overrides["max_retries"] = retries
        if delay is not None:
            cli_overrides["retry_delay"] = delay
        if log_level is not None:
            cli_overrides["log_level"] = log_level.upper()

        config_manager = ConfigManager(config)
        dashboard_config = config_manager.load_config(cli_overrides)

        asyncio.run(_run_dashboard(dashboard_config))

        sys.exit(0)

    except KeyboardInterrupt:
        console.print("\n[yellow]Dashboard interrupted by user[/yellow]")
        sys.exit(130)  # Standard exit code for SIGINT
    except Exception as e:
        console.print(f"\n[red]Error:[/red] {e}", style="bold red")
        sys.exit(1)


async def _run_dashboard(config: DashboardConfig) -> DashboardResult:
    """Run the orchestrator against the simulated data source."""
    orchestrator = DashboardOrchestrator(
        config,
        SimulatedDataSource(),
        reporter=TranscriptReporter(console)
    )
    return await orchestrator.run()


if __name__ == "__main__":
    main()
