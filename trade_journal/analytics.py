"""
Dashboard analytics.

Turns one user's ordered daily results into the summary the dashboard shows:
headline KPIs, risk metrics and the daily / cumulative P/L chart series.

Everything here is a pure function of its input. Callers (the dashboard
route, the CLI) are responsible for fetching the entries for one user,
filtered to the requested range and sorted ascending by date.
"""
import datetime
import logging
import math
from decimal import Decimal
from typing import Any, Iterable, List, Mapping, NamedTuple, Optional, Sequence, Union

import numpy as np

from schemas.dashboard import (
    KPI,
    ChartPoint,
    Charts,
    DashboardSummary,
    DateRange,
    Metrics,
)

logger = logging.getLogger(__name__)

TRADING_DAYS_PER_YEAR = 252

DateLike = Union[datetime.date, datetime.datetime, str]


class DailyResult(NamedTuple):
    """One day's results as the engine sees them: already coerced to clean types."""

    date: datetime.date
    profit_loss: float = 0.0
    trades_count: int = 0


# --- Ingestion: default-if-absent policy ---
#
# profit_loss  -> 0.0 when missing, null, non-numeric or non-finite
# trades_count -> 0   when missing, null, non-numeric, non-finite or negative
# Decimal values (what Numeric columns return) are converted to float.
# Aggregates that overflow to inf/nan are reported as 0.0.


def _coerce_float(value: Any) -> float:
    if value is None or isinstance(value, bool):
        return 0.0
    try:
        number = float(value)
    except (TypeError, ValueError, ArithmeticError):
        return 0.0
    if not math.isfinite(number):
        return 0.0
    return number


def _coerce_int(value: Any) -> int:
    number = int(_coerce_float(value))
    return number if number > 0 else 0


def _finite(value: float) -> float:
    return value if math.isfinite(value) else 0.0


def _coerce_date(value: DateLike) -> datetime.date:
    if isinstance(value, datetime.datetime):
        return value.date()
    if isinstance(value, datetime.date):
        return value
    return datetime.date.fromisoformat(str(value)[:10])


def _field(record: Any, *names: str) -> Any:
    for name in names:
        if isinstance(record, Mapping):
            if name in record:
                return record[name]
        elif hasattr(record, name):
            return getattr(record, name)
    return None


def to_daily_result(record: Any) -> DailyResult:
    """
    Convert an ORM row, a mapping or a ``DailyResult`` into a ``DailyResult``.

    The date is the natural key of the series and is required; the numeric
    fields fall back to zero instead of raising.
    """
    if isinstance(record, DailyResult):
        return record
    raw_date = _field(record, "trade_date", "date")
    if raw_date is None:
        raise ValueError(f"Daily record has no date: {record!r}")
    return DailyResult(
        date=_coerce_date(raw_date),
        profit_loss=_coerce_float(_field(record, "profit_loss", "profitLoss")),
        trades_count=_coerce_int(_field(record, "trades_count", "tradesCount")),
    )


def _iso(value: Optional[DateLike]) -> Optional[str]:
    if value is None:
        return None
    return _coerce_date(value).isoformat()


# --- Statistics ---


def compute_sharpe_ratio(values: Sequence[float]) -> float:
    """
    Approximate annualized Sharpe ratio of a daily P/L series.

    Uses raw currency P/L as the return series (not P/L over capital), the
    sample standard deviation and the 252 trading-day convention. Returns 0
    with fewer than two points or when the series is flat.
    """
    if len(values) < 2:
        return 0.0
    series = np.asarray(values, dtype=float)
    mean = float(series.mean())
    std_dev = float(series.std(ddof=1))
    if not std_dev > 0 or not math.isfinite(std_dev):
        return 0.0
    return _finite((mean / std_dev) * math.sqrt(TRADING_DAYS_PER_YEAR))


def compute_max_drawdown(equity: Sequence[float]) -> float:
    """
    Largest percentage decline of the equity curve from its running peak.

    Points where the running peak is exactly zero are skipped. The result is
    zero or negative, e.g. ``-12.5`` for a 12.5% drawdown.
    """
    if not equity:
        return 0.0

    peak = equity[0]
    max_drawdown = 0.0
    for value in equity:
        if value > peak:
            peak = value
        if peak != 0:
            drawdown = _finite((value - peak) / peak * 100)
            if drawdown < max_drawdown:
                max_drawdown = drawdown
    return max_drawdown


# --- Summary ---


def empty_summary(
    date_from: Optional[DateLike] = None, date_to: Optional[DateLike] = None
) -> DashboardSummary:
    """All-zero summary; the range echoes whatever bounds were requested."""
    return DashboardSummary(range=DateRange(date_from=_iso(date_from), date_to=_iso(date_to)))


def build_dashboard_summary(
    entries: Iterable[Any],
    date_from: Optional[DateLike] = None,
    date_to: Optional[DateLike] = None,
) -> DashboardSummary:
    """
    Aggregate one user's daily entries into a ``DashboardSummary``.

    ``entries`` must already be restricted to ``[date_from, date_to]`` and
    sorted ascending by date with no duplicate dates; they are neither sorted
    nor de-duplicated here. When a bound is not given, the reported range uses
    the first or last entry's date instead.
    """
    results: List[DailyResult] = [to_daily_result(entry) for entry in entries]
    if not results:
        return empty_summary(date_from, date_to)

    daily: List[ChartPoint] = []
    cumulative: List[ChartPoint] = []
    pl_values: List[float] = []

    running_total = 0.0
    total_trades = 0

    win_days = 0
    loss_days = 0
    win_sum = 0.0
    loss_sum = 0.0  # Negative or zero
    largest_win = 0.0
    largest_loss = 0.0

    for result in results:
        day = result.date.isoformat()
        pl = result.profit_loss

        daily.append(ChartPoint(date=day, value=pl))
        running_total += pl
        cumulative.append(ChartPoint(date=day, value=_finite(running_total)))
        total_trades += result.trades_count
        pl_values.append(pl)

        # Flat days count towards totals and charts but not wins or losses
        if pl > 0:
            win_days += 1
            win_sum += pl
            largest_win = max(largest_win, pl)
        elif pl < 0:
            loss_days += 1
            loss_sum += pl
            largest_loss = min(largest_loss, pl)

    total_pl = _finite(running_total)
    avg_win = _finite(win_sum / win_days) if win_days > 0 else 0.0
    avg_loss = _finite(loss_sum / loss_days) if loss_days > 0 else 0.0

    days_with_result = win_days + loss_days
    win_rate = (win_days / days_with_result) * 100 if days_with_result > 0 else 0.0

    gross_loss = abs(loss_sum)
    profit_factor = _finite(win_sum / gross_loss) if gross_loss > 0 else 0.0

    sharpe_ratio = compute_sharpe_ratio(pl_values)
    max_drawdown = compute_max_drawdown([point.value for point in cumulative])

    logger.debug(
        "Summarized %d days: total_pl=%.2f win_days=%d loss_days=%d",
        len(results),
        total_pl,
        win_days,
        loss_days,
    )

    return DashboardSummary(
        kpi=KPI(
            total_pl=total_pl,
            win_rate=win_rate,
            total_trades=total_trades,
            profit_factor=profit_factor,
            avg_win=avg_win,
            avg_loss=avg_loss,
        ),
        metrics=Metrics(
            sharpe_ratio=sharpe_ratio,
            max_drawdown=max_drawdown,
            avg_win=avg_win,
            avg_loss=avg_loss,
            largest_win=largest_win,
            largest_loss=largest_loss,
        ),
        charts=Charts(daily=daily, cumulative=cumulative),
        range=DateRange(
            date_from=_iso(date_from) or results[0].date.isoformat(),
            date_to=_iso(date_to) or results[-1].date.isoformat(),
        ),
    )
