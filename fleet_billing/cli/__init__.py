"""Fleet Billing CLI.

This module provides a command-line interface for the fleet billing engine.
It includes commands for summarizing tripsheets, calculating invoices and
driver salaries, and validating tripsheet files.
"""

from pathlib import Path
from typing import Optional

import click

from fleet_billing import __version__
from fleet_billing.cli.commands.bill import bill
from fleet_billing.cli.commands.salary import salary
from fleet_billing.cli.commands.summarize import summarize
from fleet_billing.cli.commands.validate import validate
from fleet_billing.config.logging_config import LoggingConfig, configure_logging
from fleet_billing.utils.logging_utils import LogContext, generate_correlation_id


@click.group(
    help="Fleet Billing CLI - Aggregate tripsheets, bill vehicles and pay drivers"
)
@click.version_option(version=__version__)
@click.option("--debug", is_flag=True, default=False, help="Show full stack traces")
@click.option(
    "--log-level",
    type=click.Choice(
        ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"], case_sensitive=False
    ),
    default=None,
    help="Log level (default: WARNING, or DEBUG with --debug)",
)
@click.option(
    "--log-format",
    type=click.Choice(["standard", "json"]),
    default="standard",
    show_default=True,
    help="Log output format",
)
@click.option(
    "--log-file",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Also write logs to this rotating file",
)
@click.pass_context
def cli(
    ctx: click.Context,
    debug: bool,
    log_level: Optional[str],
    log_format: str,
    log_file: Optional[Path],
):
    """Fleet Billing CLI main entry point."""
    ctx.ensure_object(dict)
    ctx.obj["debug"] = debug

    level = log_level or ("DEBUG" if debug else "WARNING")
    configure_logging(
        LoggingConfig(log_level=level, log_format=log_format, log_file=log_file)
    )

    # Every log record of this run carries the same correlation id
    ctx.with_resource(LogContext(correlation_id=generate_correlation_id()))


cli.add_command(summarize)
cli.add_command(bill)
cli.add_command(salary)
cli.add_command(validate)


def main():
    """Main entry point for the CLI."""
    cli()


if __name__ == "__main__":
    main()
