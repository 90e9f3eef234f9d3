from datetime import date, datetime, timedelta, timezone
from types import SimpleNamespace

import pytest

from app.core.constants import TrendPeriodEnum
from app.services import analytics

NOW = datetime(2024, 6, 15, 12, 0, tzinfo=timezone.utc)


def make_asset(id=1, quantity=1.0, acquisition_price=100.0, current_price=100.0,
               acquisition_date=datetime(2024, 1, 1, tzinfo=timezone.utc), category_id="stocks", name=None):
    category = SimpleNamespace(name=category_id.title(), color="#3B82F6")
    return SimpleNamespace(
        id=id,
        name=name or f"Asset {id}",
        quantity=quantity,
        acquisition_price=acquisition_price,
        current_price=current_price,
        acquisition_date=acquisition_date,
        category_id=category_id,
        category=category,
    )


class TestPercent:
    def test_zero_denominator(self):
        assert analytics.percent(10, 0) == 0.0

    def test_ratio(self):
        assert analytics.percent(25, 200) == 12.5


class TestPortfolioSummary:
    def test_example_portfolio(self):
        assets = [
            make_asset(1, quantity=10, acquisition_price=100, current_price=120, category_id="stocks"),
            make_asset(2, quantity=5, acquisition_price=200, current_price=240, category_id="crypto"),
        ]
        summary = analytics.calculate_portfolio_summary(assets, NOW)
        assert summary.total_value == 2400
        assert summary.total_acquisition_value == 2000
        assert summary.total_gain_loss == 400
        assert summary.total_gain_loss_percent == pytest.approx(20)
        assert sum(c.percentage for c in summary.categories) == pytest.approx(100)

    def test_empty_portfolio(self):
        summary = analytics.calculate_portfolio_summary([], NOW)
        assert summary.total_value == 0
        assert summary.total_gain_loss_percent == 0
        assert summary.categories == []

    def test_zero_valued_assets(self):
        summary = analytics.calculate_portfolio_summary([make_asset(current_price=0)], NOW)
        assert summary.total_value == 0
        assert summary.categories[0].percentage == 0
        assert summary.total_gain_loss_percent == -100

    def test_category_grouping(self):
        assets = [
            make_asset(1, current_price=50, category_id="cash"),
            make_asset(2, current_price=300, category_id="stocks"),
            make_asset(3, current_price=150, category_id="cash"),
        ]
        breakdown = analytics.calculate_category_breakdown(assets)
        assert [c.category_id for c in breakdown] == ["stocks", "cash"]
        cash = breakdown[1]
        assert cash.value == 200
        assert cash.asset_count == 2
        assert cash.percentage == pytest.approx(40)
        assert sum(c.percentage for c in breakdown) == pytest.approx(100)


class TestPerformance:
    def test_best_and_worst(self):
        assets = [make_asset(i, current_price=100 + i) for i in range(8)]
        best, worst = analytics.best_and_worst(analytics.calculate_asset_performance(assets))
        assert [p.asset_id for p in best] == [7, 6, 5, 4, 3]
        assert [p.asset_id for p in worst] == [0, 1, 2, 3, 4]

    def test_fewer_assets_than_top_n(self):
        assets = [make_asset(1, current_price=90), make_asset(2, current_price=110)]
        best, worst = analytics.best_and_worst(analytics.calculate_asset_performance(assets))
        assert [p.asset_id for p in best] == [2, 1]
        assert [p.asset_id for p in worst] == [1, 2]

    def test_empty(self):
        assert analytics.best_and_worst([]) == ([], [])


class TestTrendRange:
    def test_fixed_periods(self):
        for period, days in [("1M", 30), ("3M", 90), ("6M", 180), ("1Y", 365)]:
            start, end = analytics.resolve_trend_range(TrendPeriodEnum(period), [], NOW)
            assert end == NOW
            assert NOW - start == timedelta(days=days)

    def test_all_uses_earliest_acquisition(self):
        assets = [
            make_asset(1, acquisition_date=datetime(2023, 5, 1, tzinfo=timezone.utc)),
            make_asset(2, acquisition_date=datetime(2022, 3, 1)),
        ]
        start, _ = analytics.resolve_trend_range(TrendPeriodEnum.ALL, assets, NOW)
        assert start == datetime(2022, 3, 1, tzinfo=timezone.utc)

    def test_all_without_assets_falls_back_to_one_year(self):
        start, _ = analytics.resolve_trend_range(TrendPeriodEnum.ALL, [], NOW)
        assert NOW - start == timedelta(days=365)

    def test_custom_without_dates_falls_back_to_three_months(self):
        start, _ = analytics.resolve_trend_range(TrendPeriodEnum.CUSTOM, [], NOW, start_date=date(2024, 1, 1))
        assert NOW - start == timedelta(days=90)

    def test_custom_dates(self):
        start, end = analytics.resolve_trend_range(
            TrendPeriodEnum.CUSTOM, [], NOW, start_date=date(2024, 1, 1), end_date=date(2024, 2, 1)
        )
        assert start == datetime(2024, 1, 1, tzinfo=timezone.utc)
        assert end == datetime(2024, 2, 1, tzinfo=timezone.utc)


class TestTrendPoints:
    @pytest.mark.parametrize("span,step", [(0, 1), (60, 1), (61, 3), (180, 3), (181, 7), (3650, 7)])
    def test_step_by_span(self, span, step):
        assert analytics.step_days_for_span(span) == step

    def test_partial_day_rounds_up(self):
        start = datetime(2024, 1, 1, tzinfo=timezone.utc)
        assert analytics.span_in_days(start, start + timedelta(days=60, hours=1)) == 61

    def test_interpolation_endpoints(self):
        acquired = datetime(2024, 1, 1, tzinfo=timezone.utc)
        asset = make_asset(acquisition_price=100, current_price=200, acquisition_date=acquired)
        assert analytics.estimate_price(asset, acquired, NOW) == 100
        assert analytics.estimate_price(asset, NOW, NOW) == 200
        midpoint = acquired + (NOW - acquired) / 2
        assert analytics.estimate_price(asset, midpoint, NOW) == pytest.approx(150)

    def test_interpolation_is_clamped(self):
        acquired = datetime(2024, 1, 1, tzinfo=timezone.utc)
        asset = make_asset(acquisition_price=100, current_price=200, acquisition_date=acquired)
        assert analytics.estimate_price(asset, NOW + timedelta(days=30), NOW) == 200
        assert analytics.estimate_price(asset, acquired - timedelta(days=30), NOW) == 100

    def test_acquired_now_uses_current_price(self):
        asset = make_asset(acquisition_price=100, current_price=200, acquisition_date=NOW)
        assert analytics.estimate_price(asset, NOW, NOW) == 200

    def test_points_include_only_held_assets(self):
        start = datetime(2024, 6, 1, tzinfo=timezone.utc)
        assets = [
            make_asset(1, acquisition_date=datetime(2024, 6, 3, tzinfo=timezone.utc)),
            make_asset(2, acquisition_date=datetime(2024, 6, 5, tzinfo=timezone.utc)),
        ]
        points, step = analytics.build_trend_points(assets, start, start + timedelta(days=6), NOW)
        assert step == 1
        assert [p.date for p in points] == ["2024-06-03", "2024-06-04", "2024-06-05", "2024-06-06", "2024-06-07"]
        assert [p.asset_count for p in points] == [1, 1, 2, 2, 2]

    def test_last_point_matches_current_value(self):
        assets = [make_asset(1, quantity=2, acquisition_price=100, current_price=130)]
        points, _ = analytics.build_trend_points(assets, NOW - timedelta(days=10), NOW, NOW)
        assert points[-1].total_value == pytest.approx(260)
        assert points[-1].total_gain_loss == pytest.approx(60)
        assert points[-1].gain_loss_percent == pytest.approx(30)

    def test_weekly_sampling(self):
        assets = [make_asset(1, acquisition_date=datetime(2020, 1, 1, tzinfo=timezone.utc))]
        start = NOW - timedelta(days=365)
        points, step = analytics.build_trend_points(assets, start, NOW, NOW)
        assert step == 7
        assert len(points) == 53


class TestMonthlyAnalysis:
    def test_empty(self):
        assert analytics.build_monthly_analysis([], NOW) == []

    def test_buckets_and_changes(self):
        assets = [
            make_asset(1, current_price=100, acquisition_date=datetime(2024, 3, 31, 23, tzinfo=timezone.utc)),
            make_asset(2, current_price=50, acquisition_date=datetime(2024, 5, 1, tzinfo=timezone.utc)),
        ]
        entries = analytics.build_monthly_analysis(assets, NOW)
        assert [e.month for e in entries] == ["2024-03", "2024-04", "2024-05", "2024-06"]
        assert [e.value for e in entries] == [100, 100, 150, 150]
        assert [e.change for e in entries] == [0, 0, 50, 0]
        assert entries[2].change_percent == pytest.approx(50)
        assert [e.asset_count for e in entries] == [1, 1, 2, 2]

    def test_changes_chain_to_total_difference(self):
        assets = [
            make_asset(i, current_price=10 * i, acquisition_date=datetime(2023, i, 10, tzinfo=timezone.utc))
            for i in range(1, 10)
        ]
        entries = analytics.build_monthly_analysis(assets, NOW)
        assert sum(e.change for e in entries) == pytest.approx(entries[-1].value - entries[0].value)

    def test_year_rollover(self):
        assets = [make_asset(1, acquisition_date=datetime(2023, 11, 15, tzinfo=timezone.utc))]
        entries = analytics.build_monthly_analysis(assets, datetime(2024, 1, 2, tzinfo=timezone.utc))
        assert [e.month for e in entries] == ["2023-11", "2023-12", "2024-01"]


class TestMonthBounds:
    def test_december(self):
        start, end = analytics.month_bounds(2024, 12)
        assert start == datetime(2024, 12, 1, tzinfo=timezone.utc)
        assert end == datetime(2025, 1, 1, tzinfo=timezone.utc)
