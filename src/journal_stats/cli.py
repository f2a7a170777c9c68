"""CLI entry point for the journal statistics engine."""

from __future__ import annotations

import click

from .core.enums import ExecutionFilter, PresetRange
from .core.errors import JournalStatsError


def _load(config: str | None, trades_path: str):
    from .core.config import load_settings
    from .io.loader import load_trades
    from .observability.logger import get_logger, setup_logging

    try:
        settings = load_settings(config_path=config)
        setup_logging(
            level=settings.observability.log_level,
            format=settings.observability.log_format,
        )
        trades = load_trades(trades_path)
    except JournalStatsError as exc:
        raise click.ClickException(str(exc)) from exc
    get_logger(__name__).debug("trades_loaded", path=trades_path, count=len(trades))
    return settings, trades


@click.group()
def main() -> None:
    """Trading journal performance statistics."""


@main.command()
@click.argument("trades_path", metavar="TRADES", type=click.Path(exists=True, dir_okay=False))
@click.option("--balance", type=float, default=None, help="Current account balance")
@click.option("--year", type=int, default=None, help="Calendar-year view")
@click.option("--start", type=click.DateTime(formats=["%Y-%m-%d"]), default=None,
              help="Start date (YYYY-MM-DD)")
@click.option("--end", type=click.DateTime(formats=["%Y-%m-%d"]), default=None,
              help="End date (YYYY-MM-DD)")
@click.option("--preset", type=click.Choice([p.value for p in PresetRange]), default=None,
              help="Preset date range ending today")
@click.option("--market", default=None, help="Single market (default: all)")
@click.option("--execution", type=click.Choice([e.value for e in ExecutionFilter]),
              default=ExecutionFilter.EXECUTED.value, help="Execution filter")
@click.option("--config", default=None, help="Config file path")
@click.option("--format", "fmt", type=click.Choice(["json", "table"]), default="table")
def report(
    trades_path: str,
    balance: float | None,
    year: int | None,
    start,
    end,
    preset: str | None,
    market: str | None,
    execution: str,
    config: str | None,
    fmt: str,
) -> None:
    """Print the dashboard statistics of one view."""
    from .io.export import stats_to_json
    from .stats.periods import preset_range
    from .stats.reconciler import FilteredViewReconciler, TradeFilter

    ranged = start is not None or end is not None
    if sum([year is not None, ranged, preset is not None]) > 1:
        raise click.UsageError("Use only one of --year, --start/--end and --preset.")
    if ranged and (start is None or end is None):
        raise click.UsageError("--start and --end must be given together.")

    settings, trades = _load(config, trades_path)

    try:
        if year is not None:
            trade_filter = TradeFilter.yearly(year, market=market, execution=execution)
        elif ranged:
            trade_filter = TradeFilter.date_range(
                start.date(), end.date(), market=market, execution=execution
            )
        elif preset is not None:
            period = preset_range(preset)
            trade_filter = TradeFilter.date_range(
                period.start, period.end, market=market, execution=execution
            )
        else:
            trade_filter = TradeFilter(market=market, execution=ExecutionFilter(execution))
    except JournalStatsError as exc:
        raise click.UsageError(str(exc)) from exc

    if balance is None:
        balance = settings.default_account_balance

    stats = FilteredViewReconciler(settings.analytics).compute(
        trades, account_balance=balance, trade_filter=trade_filter
    )

    if fmt == "json":
        click.echo(stats_to_json(stats))
    else:
        _print_dashboard(stats)


@main.command()
@click.argument("trades_path", metavar="TRADES", type=click.Path(exists=True, dir_okay=False))
@click.option("--year", type=int, required=True, help="Calendar year")
@click.option("--execution", type=click.Choice([e.value for e in ExecutionFilter]),
              default=ExecutionFilter.EXECUTED.value, help="Execution filter")
@click.option("--config", default=None, help="Config file path")
@click.option("--csv", "as_csv", is_flag=True, help="Emit CSV instead of a table")
def months(trades_path: str, year: int, execution: str, config: str | None, as_csv: bool) -> None:
    """Print the month-by-month table of one year."""
    from .io.export import StatsExporter
    from .stats.monthly import MONTHS, MonthlyProfit, best_and_worst_month, monthly, monthly_profit
    from .stats.reconciler import TradeFilter

    _, trades = _load(config, trades_path)
    trade_filter = TradeFilter.yearly(year, execution=execution)
    view = trade_filter.apply(trades)
    include = trade_filter.include_non_executed
    stats = monthly(view, year=year, include_non_executed=include)
    profits = monthly_profit(view, year=year, include_non_executed=include)

    if as_csv:
        click.echo(StatsExporter().monthly_to_csv(stats, profits), nl=False)
        return

    if not stats and not profits:
        click.echo(f"No trades in {year}.")
        return

    click.echo(f"\n{'=' * 70}")
    click.echo(f"MONTHLY PERFORMANCE {year}")
    click.echo(f"{'=' * 70}")
    click.echo(
        f"  {'Month':<11} {'W':>4} {'L':>4} {'BE':>4} {'WinRate':>8} "
        f"{'w/ BE':>8} {'Profit':>12}"
    )
    click.echo(f"  {'-' * 58}")
    for month in MONTHS:
        if month not in stats and month not in profits:
            continue
        m = stats.get(month)
        profit = profits.get(month, MonthlyProfit()).profit
        if m is None:
            click.echo(f"  {month:<11} {'':>4} {'':>4} {'':>4} {'':>8} {'':>8} {profit:>+12.2f}")
            continue
        click.echo(
            f"  {month:<11} {m.wins:>4} {m.losses:>4} {m.break_even:>4} "
            f"{m.win_rate:>7.1f}% {m.win_rate_with_be:>7.1f}% {profit:>+12.2f}"
        )

    best_worst = best_and_worst_month(profits, stats)
    click.echo(f"\n  Best month:   {best_worst.best or '-'}")
    click.echo(f"  Worst month:  {best_worst.worst or '-'}")
    click.echo(f"\n{'=' * 70}\n")


def _print_dashboard(stats) -> None:
    """Print a formatted dashboard summary."""
    from .stats.categories import sort_buckets
    from .stats.self_assessment import CONFIDENCE_LABELS, MIND_STATE_LABELS

    ov = stats.overview
    dd = stats.drawdown
    macro = stats.macro
    f = stats.trade_filter.to_dict()

    click.echo(f"\n{'=' * 70}")
    click.echo("DASHBOARD")
    click.echo(f"{'=' * 70}")
    click.echo(f"  Period:          {f['startDate'] or '-'} .. {f['endDate'] or '-'}")
    click.echo(f"  Market:          {f['market']}")
    click.echo(f"  Execution:       {f['execution']}")
    click.echo(f"  Trades:          {stats.trade_count}")
    click.echo(f"  Wins / Losses:   {ov.wins} / {ov.losses}  (BE {ov.be_wins}W {ov.be_losses}L)")
    click.echo(f"  Win Rate:        {ov.win_rate:.2f}%  (with BE {ov.win_rate_with_be:.2f}%)")
    click.echo(f"  Total Profit:    {ov.total_profit:+.2f}")
    click.echo(f"  Avg P&L %:       {ov.average_pnl_percentage:+.2f}%")
    click.echo(f"  Max Drawdown:    {dd.max_drawdown_pct:.2f}%")
    click.echo(f"  Avg Drawdown:    {dd.average_drawdown_pct:.2f}%")
    click.echo(f"  Streak:          {stats.streaks.current_streak:+d} "
               f"(best {stats.streaks.max_winning_streak}, "
               f"worst {stats.streaks.max_losing_streak})")

    pf = "inf" if macro.profit_factor == float("inf") else f"{macro.profit_factor:.2f}"
    click.echo(f"\n  Profit Factor:   {pf}")
    click.echo(f"  Consistency:     {macro.consistency_score:.1f}% of months, "
               f"{macro.consistency_score_with_be:.1f}% of days (with BE)")
    click.echo(f"  Sharpe:          {macro.sharpe_ratio:.4f}")
    click.echo(f"  TQI:             {macro.trade_quality_index:.4f}")
    click.echo(f"  Multiple R:      {macro.multiple_r:+.2f}")
    click.echo(f"  Trades / Month:  {stats.average_monthly_trades:.1f}")

    lh = stats.launch_hour
    hl = stats.local_hl_be
    click.echo(f"\n  Launch Hour:     {lh.total} trades, {lh.wins}W {lh.losses}L "
               f"(BE {lh.be_wins}W {lh.be_losses}L)")
    click.echo(f"  Local H/L + BE:  {hl.be_wins}W {hl.be_losses}L")
    for title, scale, labels in (
        ("Confidence:", stats.confidence, CONFIDENCE_LABELS),
        ("Mind State:", stats.mind_state, MIND_STATE_LABELS),
    ):
        if scale.total:
            label = labels[round(scale.average)]
            click.echo(f"  {title:<16} {scale.average:.2f} ({label}, {scale.total} rated)")

    if stats.market:
        click.echo(f"\n  By Market:")
        click.echo(f"    {'Market':<16} {'Total':>6} {'W':>4} {'L':>4} {'WinRate':>8}")
        click.echo(f"    {'-' * 42}")
        for label, bucket in sort_buckets(stats.market):
            click.echo(
                f"    {label:<16} {bucket.total:>6} {bucket.wins:>4} "
                f"{bucket.losses:>4} {bucket.win_rate:>7.1f}%"
            )

    click.echo(f"\n{'=' * 70}\n")
