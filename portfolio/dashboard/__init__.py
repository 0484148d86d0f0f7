"""
Dashboard — facade, markdown report and display formatting.

- PortfolioDashboard: store + selection + derived views behind one object
- generate_dashboard_report: markdown summary of every panel
- format_currency / format_percentage: total display formatters
"""
from portfolio.dashboard.dashboard import PortfolioDashboard
from portfolio.dashboard.formatting import format_currency, format_percentage
from portfolio.dashboard.report import generate_dashboard_report

__all__ = [
    "PortfolioDashboard",
    "format_currency",
    "format_percentage",
    "generate_dashboard_report",
]
