"""CLI commands."""

from src.cli.commands.monthly_report import monthly_report
from src.cli.commands.project_cost import project_cost
from src.cli.commands.validate import validate_data
from src.cli.commands.week import show_week

__all__ = ["monthly_report", "project_cost", "show_week", "validate_data"]
