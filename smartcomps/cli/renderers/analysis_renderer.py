"""Rich renderer for session analyses.

Transforms SDK Analysis output into formatted Rich tables. Performs no
calculation; every figure comes from the SDK and is formatted with the
shared helpers so that the numbers match exported reports.
"""

from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from smartcomps.sdk.formatting import format_currency, format_delta, format_percent
from smartcomps.sdk.schemas import Analysis
from smartcomps.sdk.session import SessionState

SEVERITY_STYLES = {
    "danger": "red",
    "warning": "yellow",
    "info": "cyan",
    "good": "green",
}


def render_analysis(
    console: Console,
    state: SessionState,
    analysis: Analysis,
    precision: int = 1,
    symbol: str = "¥",
) -> None:
    """Render a full analysis: headline, comparison, competitors, advice, flows.

    Args:
        console: Rich Console instance
        state: Session state the analysis was computed from
        analysis: SDK output from evaluate()
        precision: Decimal places for percentages
        symbol: Currency symbol
    """
    _render_headline(console, analysis, precision, symbol)
    _render_comparison(console, state, analysis, precision, symbol)
    if state.competitors.entries:
        _render_competitors(console, state, analysis, symbol)
    _render_suggestion(console, analysis, symbol)
    _render_advisories(console, analysis)
    _render_flows(console, analysis, symbol)


def _render_headline(console: Console, analysis: Analysis, precision: int, symbol: str) -> None:
    stats = analysis.stats
    table = Table(show_header=False, box=None, padding=(0, 2))
    table.add_column("key", style="dim")
    table.add_column("value", justify="right")
    table.add_row("Total increase", f"[bold]{format_percent(stats.total_increase_pct, precision)}[/bold]")
    table.add_row("Total gap", format_currency(stats.total_gap, symbol))
    table.add_row("Cash increase", format_percent(stats.cash_increase_pct, precision))
    table.add_row("Monthly increase", format_percent(stats.monthly_increase_pct, precision))
    table.add_row("Offer equity share", format_percent(analysis.offer_stock_ratio, precision))
    console.print(Panel(table, title="Summary", border_style="dim"))


def _render_comparison(
    console: Console, state: SessionState, analysis: Analysis, precision: int, symbol: str
) -> None:
    table = Table(title="Current vs Offer", box=box.ROUNDED)
    table.add_column("Item")
    table.add_column("Current", justify="right")
    table.add_column("Offer", justify="right", style="bold")
    table.add_column("Delta", justify="right")

    current, offer = state.current, state.offer
    rows = [
        ("Base monthly", current.base_monthly, offer.base_monthly),
        ("Months", None, None),
        ("Annual base", analysis.current.base_total, analysis.offer.base_total),
        ("Allowance (annual)", analysis.current.allowance_total, analysis.offer.allowance_total),
        ("Performance bonus", current.performance_bonus, offer.performance_bonus),
        ("Sign-on bonus", current.sign_on_bonus, offer.sign_on_bonus),
        ("Other cash", current.other, offer.other),
        ("Cash total", analysis.current.cash_total, analysis.offer.cash_total),
        ("Stock (annual)", current.stock_value, offer.stock_value),
    ]
    for label, cur, off in rows:
        if label == "Months":
            table.add_row(label, f"{current.months:g}", f"{offer.months:g}", "")
            continue
        table.add_row(label, format_currency(cur, symbol), format_currency(off, symbol), format_delta(off - cur, symbol))

    table.add_section()
    table.add_row(
        "[bold]Total package[/bold]",
        format_currency(analysis.current.total_package, symbol),
        format_currency(analysis.offer.total_package, symbol),
        format_percent(analysis.stats.total_increase_pct, precision),
    )
    console.print(table)


def _render_competitors(console: Console, state: SessionState, analysis: Analysis, symbol: str) -> None:
    bench = analysis.benchmark
    table = Table(title="Competitors", box=box.ROUNDED)
    table.add_column("ID", justify="right", style="dim")
    table.add_column("Name")
    table.add_column("Cash total", justify="right")
    table.add_column("Total package", justify="right")

    for entry in state.competitors.entries:
        pkg = bench.per_competitor_aggregates[entry.id]
        name = entry.name
        if entry.id == bench.max_competitor_id:
            name = f"[bold]{name}[/bold] (max)"
        table.add_row(
            str(entry.id),
            name,
            format_currency(pkg.cash_total, symbol),
            format_currency(pkg.total_package, symbol),
        )
    console.print(table)


def _render_suggestion(console: Console, analysis: Analysis, symbol: str) -> None:
    s = analysis.suggestion
    table = Table(show_header=False, box=None, padding=(0, 2))
    table.add_column("key", style="dim")
    table.add_column("value", justify="right")
    table.add_row("Target total", f"[bold]{format_currency(s.total, symbol)}[/bold]")
    table.add_row("Cash part", format_currency(s.cash_total, symbol))
    table.add_row("Stock part", format_currency(s.stock, symbol))
    table.add_row("Suggested base", f"{format_currency(s.base_monthly, symbol)} x {s.months:g}")
    basis = "strongest competitor" if s.is_based_on_competitor else "current package"
    table.add_row("Based on", basis)
    console.print(Panel(table, title="Suggested Offer", border_style="magenta"))


def _render_advisories(console: Console, analysis: Analysis) -> None:
    if not analysis.advisories:
        console.print(Panel("No specific risks detected.", title="Advice", border_style="dim"))
        return

    lines = []
    for tip in analysis.advisories:
        style = SEVERITY_STYLES.get(tip.severity, "white")
        lines.append(f"[{style}]{tip.severity.upper():<8}[/{style}] {tip.message}")
    console.print(Panel("\n".join(lines), title="Advice", border_style="yellow"))


def _render_flows(console: Console, analysis: Analysis, symbol: str) -> None:
    if not analysis.flow_stats.active_months:
        return

    rec = analysis.reconciliation
    table = Table(show_header=False, box=None, padding=(0, 2))
    table.add_column("key", style="dim")
    table.add_column("value", justify="right")
    table.add_row("Average flow", format_currency(analysis.flow_stats.average, symbol))
    table.add_row("Active months", str(analysis.flow_stats.active_months))
    table.add_row("Pre-tax (flat estimate)", f"≈ {format_currency(analysis.estimated_pre_tax_flat, symbol)}")
    table.add_row("Pre-tax (bracket solver)", f"≈ {format_currency(analysis.estimated_gross_bisection, symbol)}")
    table.add_row("Monthly deductions", format_currency(analysis.deductions.total, symbol))
    table.add_row("Implied variable pay", format_currency(rec.implied_variable, symbol))
    table.add_row("Declared variable pay", format_currency(rec.declared_variable, symbol))

    status_style = "green" if rec.status == "match" else "red"
    table.add_row("Reconciliation", f"[{status_style}]{rec.status}[/{status_style}] ({format_delta(rec.variance, symbol)})")
    console.print(Panel(table, title="Bank Flow Check", border_style="dim"))
