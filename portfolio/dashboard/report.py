"""
Dashboard report generator — markdown-formatted portfolio summaries.
"""
from datetime import datetime
from typing import Optional

from portfolio.dashboard.dashboard import PortfolioDashboard
from portfolio.dashboard.formatting import format_currency, format_percentage
from portfolio.series.generator import RandomSource


def generate_dashboard_report(
    dashboard: PortfolioDashboard,
    window: str = "1M",
    rng: RandomSource = None,
    now: Optional[datetime] = None,
) -> str:
    """
    Generate a markdown dashboard summary.

    Includes: KPI cards, sector distribution, sector trends, top movers,
    holdings table, and the selected holding's series.
    """
    views = dashboard.views(window, rng=rng, now=now)
    summary = views["summary"]

    lines = []
    lines.append("# Portfolio Dashboard")
    lines.append("")

    if not views["holdings"]:
        lines.append("No holdings in portfolio.")
        return "\n".join(lines)

    lines.append(
        f"**Total Value**: {format_currency(summary['total_value'])} | "
        f"**Day's Change**: {format_currency(summary['day_change'])} "
        f"({format_percentage(summary['day_change_percent'])}) | "
        f"**Total Return**: {format_currency(summary['total_return'])} "
        f"({format_percentage(summary['total_return_percent'])}) | "
        f"**Active Holdings**: {summary['active_holdings']} | "
        f"**Average Value**: {format_currency(summary['average_value'])}"
    )
    lines.append("")

    # Sector distribution
    lines.append("## Sector Distribution")
    lines.append("")
    lines.append("| Sector | Value | Weight | Avg Change |")
    lines.append("|--------|------:|-------:|-----------:|")
    for sector, value in views["distribution"].items():
        lines.append(
            f"| {sector} | {format_currency(value)} | "
            f"{views['weights'][sector]:.1f}% | "
            f"{format_percentage(views['trends'][sector])} |"
        )
    lines.append("")

    # Top movers
    lines.append("## Top Movers")
    lines.append("")
    for h in views["movers"]:
        lines.append(f"- **{h['symbol']}** {format_percentage(h['change_percent'])}")
    lines.append("")

    # Holdings
    lines.append("## Holdings")
    lines.append("")
    lines.append("| Symbol | Name | Sector | Price | Change | Shares | Value |")
    lines.append("|--------|------|--------|------:|-------:|-------:|------:|")
    for h in views["holdings"]:
        lines.append(
            f"| {h['symbol']} | {h['name']} | {h['sector']} | "
            f"{format_currency(h['price'])} | {format_percentage(h['change_percent'])} | "
            f"{h['shares']} | {format_currency(h['price'] * h['shares'])} |"
        )
    lines.append("")

    # Selected holding chart
    selected = views["selected"]
    if selected:
        chart = views["chart"]
        lines.append(f"## {selected['symbol']} ({chart['window']})")
        lines.append("")
        lines.append("| Label | Price |")
        lines.append("|-------|------:|")
        for label, price in zip(chart["labels"], chart["prices"]):
            lines.append(f"| {label} | {format_currency(price)} |")
        lines.append("")

    return "\n".join(lines)
