"""
Portfolio arithmetic shared by the portfolio, report and export services.

Functions here take asset-like objects (anything with ``quantity``,
``acquisition_price``, ``current_price``, ``acquisition_date`` and, where a
breakdown is needed, ``category_id``/``category``) and never touch the
database, so they can be exercised with plain objects in tests.
"""
import math
from collections import OrderedDict
from datetime import date, datetime, time, timedelta, timezone
from typing import Iterable, List, Optional, Sequence, Tuple

from app.core.constants import (
    DAILY_STEP_MAX_SPAN_DAYS,
    DEFAULT_CATEGORY_COLOR,
    PERFORMANCE_TOP_N,
    THREE_DAY_STEP_MAX_SPAN_DAYS,
    TREND_PERIOD_DAYS,
    TrendPeriodEnum,
)
from app.schemas.portfolio import AssetPerformance, CategoryBreakdown, PortfolioSummary
from app.schemas.report import (
    CategorySummaryEntry,
    MonthlyAnalysisEntry,
    SummaryTotals,
    TrendPoint,
)
from app.utils.dates import as_utc


def percent(part: float, whole: float) -> float:
    return part / whole * 100 if whole else 0.0


def current_value(asset) -> float:
    return asset.quantity * asset.current_price


def acquisition_value(asset) -> float:
    return asset.quantity * asset.acquisition_price


def calculate_totals(assets: Iterable) -> Tuple[float, float]:
    """(total current value, total acquisition value)"""
    total_value = 0.0
    total_acquisition_value = 0.0
    for asset in assets:
        total_value += current_value(asset)
        total_acquisition_value += acquisition_value(asset)
    return total_value, total_acquisition_value


def calculate_category_breakdown(assets: Sequence) -> List[CategoryBreakdown]:
    """Per-category values, largest first."""
    total_value, _ = calculate_totals(assets)
    groups: "OrderedDict[str, dict]" = OrderedDict()
    for asset in assets:
        category = getattr(asset, "category", None)
        group = groups.setdefault(
            asset.category_id,
            {
                "category_id": asset.category_id,
                "category_name": category.name if category else asset.category_id,
                "color": category.color if category else DEFAULT_CATEGORY_COLOR,
                "value": 0.0,
                "acquisition_value": 0.0,
                "asset_count": 0,
            },
        )
        group["value"] += current_value(asset)
        group["acquisition_value"] += acquisition_value(asset)
        group["asset_count"] += 1

    breakdown = []
    for group in groups.values():
        gain_loss = group["value"] - group["acquisition_value"]
        breakdown.append(
            CategoryBreakdown(
                **group,
                gain_loss=gain_loss,
                gain_loss_percent=percent(gain_loss, group["acquisition_value"]),
                percentage=percent(group["value"], total_value),
            )
        )
    breakdown.sort(key=lambda c: c.value, reverse=True)
    return breakdown


def calculate_portfolio_summary(assets: Sequence, now: datetime) -> PortfolioSummary:
    total_value, total_acquisition_value = calculate_totals(assets)
    total_gain_loss = total_value - total_acquisition_value
    return PortfolioSummary(
        total_value=total_value,
        total_acquisition_value=total_acquisition_value,
        total_gain_loss=total_gain_loss,
        total_gain_loss_percent=percent(total_gain_loss, total_acquisition_value),
        asset_count=len(assets),
        categories=calculate_category_breakdown(assets),
        updated_at=now,
    )


def calculate_category_summary(assets: Sequence) -> Tuple[SummaryTotals, List[CategorySummaryEntry]]:
    total_value, total_acquisition_value = calculate_totals(assets)
    totals = SummaryTotals(
        total_value=total_value,
        total_gain_loss=total_value - total_acquisition_value,
        total_gain_loss_percent=percent(total_value - total_acquisition_value, total_acquisition_value),
        asset_count=len(assets),
    )
    entries = [
        CategorySummaryEntry(
            category_id=c.category_id,
            name=c.category_name,
            total_value=c.value,
            total_gain_loss=c.gain_loss,
            asset_count=c.asset_count,
            percentage=c.percentage,
            gain_loss_percent=c.gain_loss_percent,
        )
        for c in calculate_category_breakdown(assets)
    ]
    return totals, entries


def calculate_asset_performance(assets: Iterable) -> List[AssetPerformance]:
    """Per-asset gain/loss, best performer first."""
    performance = []
    for asset in assets:
        value = current_value(asset)
        cost = acquisition_value(asset)
        category = getattr(asset, "category", None)
        performance.append(
            AssetPerformance(
                asset_id=asset.id,
                asset_name=asset.name,
                category=category.name if category else asset.category_id,
                current_value=value,
                gain_loss=value - cost,
                gain_loss_percent=percent(value - cost, cost),
            )
        )
    performance.sort(key=lambda p: p.gain_loss_percent, reverse=True)
    return performance


def best_and_worst(
    performance: List[AssetPerformance], top_n: int = PERFORMANCE_TOP_N
) -> Tuple[List[AssetPerformance], List[AssetPerformance]]:
    """Expects a list sorted best first; the worst list starts with the worst asset."""
    best = performance[:top_n]
    worst = list(reversed(performance[-top_n:])) if performance else []
    return best, worst


def resolve_trend_range(
    period: TrendPeriodEnum,
    assets: Sequence,
    now: datetime,
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
) -> Tuple[datetime, datetime]:
    if period == TrendPeriodEnum.CUSTOM:
        if start_date and end_date:
            return _start_of_day(start_date), _start_of_day(end_date)
        period = TrendPeriodEnum.THREE_MONTHS

    if period == TrendPeriodEnum.ALL:
        if assets:
            return min(as_utc(a.acquisition_date) for a in assets), now
        period = TrendPeriodEnum.ONE_YEAR

    return now - timedelta(days=TREND_PERIOD_DAYS[period]), now


def step_days_for_span(span_days: int) -> int:
    if span_days <= DAILY_STEP_MAX_SPAN_DAYS:
        return 1
    if span_days <= THREE_DAY_STEP_MAX_SPAN_DAYS:
        return 3
    return 7


def span_in_days(start: datetime, end: datetime) -> int:
    return max(0, math.ceil((end - start) / timedelta(days=1)))


def estimate_price(asset, at: datetime, now: datetime) -> float:
    """Linear interpolation from acquisition price (at acquisition) to current price (at now)."""
    acquired = as_utc(asset.acquisition_date)
    if now == acquired:
        progress = 1.0
    else:
        progress = (at - acquired) / (now - acquired)
        progress = min(1.0, max(0.0, progress))
    return asset.acquisition_price + (asset.current_price - asset.acquisition_price) * progress


def build_trend_points(
    assets: Sequence, start: datetime, end: datetime, now: datetime
) -> Tuple[List[TrendPoint], int]:
    """Sample the estimated portfolio value from start to end; returns (points, step in days)."""
    step_days = step_days_for_span(span_in_days(start, end))
    step = timedelta(days=step_days)
    points = []

    sample = start
    while sample <= end:
        held = [a for a in assets if as_utc(a.acquisition_date) <= sample]
        if held:
            total_value = 0.0
            total_cost = 0.0
            for asset in held:
                total_value += asset.quantity * estimate_price(asset, sample, now)
                total_cost += acquisition_value(asset)
            points.append(
                TrendPoint(
                    date=sample.date().isoformat(),
                    total_value=total_value,
                    total_gain_loss=total_value - total_cost,
                    gain_loss_percent=percent(total_value - total_cost, total_cost),
                    asset_count=len(held),
                )
            )
        sample += step

    return points, step_days


def build_monthly_analysis(assets: Sequence, now: datetime) -> List[MonthlyAnalysisEntry]:
    """Month-by-month current value of the assets held by each month end."""
    if not assets:
        return []

    earliest = min(as_utc(a.acquisition_date) for a in assets)
    year, month = earliest.year, earliest.month
    entries: List[MonthlyAnalysisEntry] = []
    previous: Optional[float] = None

    while (year, month) <= (now.year, now.month):
        next_year, next_month = (year + 1, 1) if month == 12 else (year, month + 1)
        month_end = datetime(next_year, next_month, 1, tzinfo=timezone.utc)

        held = [a for a in assets if as_utc(a.acquisition_date) < month_end]
        value = sum(current_value(a) for a in held)
        change = value - previous if previous is not None else 0.0
        entries.append(
            MonthlyAnalysisEntry(
                month=f"{year:04d}-{month:02d}",
                value=value,
                change=change,
                change_percent=percent(change, previous) if previous is not None else 0.0,
                asset_count=len(held),
            )
        )
        previous = value
        year, month = next_year, next_month

    return entries


def month_bounds(year: int, month: int) -> Tuple[datetime, datetime]:
    """[first instant of the month, first instant of the next month) in UTC."""
    start = datetime(year, month, 1, tzinfo=timezone.utc)
    end = datetime(year + 1, 1, 1, tzinfo=timezone.utc) if month == 12 else datetime(year, month + 1, 1, tzinfo=timezone.utc)
    return start, end


def _start_of_day(value: date) -> datetime:
    return datetime.combine(value, time.min, tzinfo=timezone.utc)
