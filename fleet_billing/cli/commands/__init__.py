"""CLI commands."""

from fleet_billing.cli.commands.bill import bill
from fleet_billing.cli.commands.salary import salary
from fleet_billing.cli.commands.summarize import summarize
from fleet_billing.cli.commands.validate import validate

__all__ = ["bill", "salary", "summarize", "validate"]
