import logging
from datetime import date, datetime, timezone
from typing import List, Optional

from sqlalchemy.orm import Session

from app.core.constants import MAX_REPORT_YEAR, MIN_REPORT_YEAR, TrendPeriodEnum
from app.core.exceptions import ValidationError
from app.crud.asset import asset as crud_asset
from app.crud.portfolio_snapshot import portfolio_snapshot as crud_portfolio_snapshot
from app.models.user import User
from app.schemas.report import (
    MonthlyAnalysisEntry,
    MonthlyReport,
    ReportSummary,
    TrendReport,
    YearlyMonthEntry,
    YearlyReport,
)
from app.services import analytics
from app.utils.dates import as_utc, utc_now

logger = logging.getLogger(__name__)


class ReportService:
    def get_monthly_report(self, db: Session, *, user: User, year: int, month: Optional[int]) -> MonthlyReport:
        if month is None:
            raise ValidationError("Month is required")

        start, end = analytics.month_bounds(year, month)
        assets = crud_asset.get_all_by_user(db, user_id=user.id)
        asset_performance = analytics.calculate_asset_performance(assets)

        snapshot = crud_portfolio_snapshot.get_latest_in_range(db, user_id=user.id, from_date=start, before=end)
        if snapshot:
            return MonthlyReport(
                year=year,
                month=month,
                total_value=snapshot.total_value,
                total_gain_loss=snapshot.total_gain_loss,
                total_gain_loss_percent=snapshot.total_gain_loss_percent,
                from_snapshot=True,
                snapshot_date=snapshot.snapshot_date,
                asset_performance=asset_performance,
            )

        summary = analytics.calculate_portfolio_summary(assets, utc_now())
        return MonthlyReport(
            year=year,
            month=month,
            total_value=summary.total_value,
            total_gain_loss=summary.total_gain_loss,
            total_gain_loss_percent=summary.total_gain_loss_percent,
            from_snapshot=False,
            category_breakdown=summary.categories,
            asset_performance=asset_performance,
        )

    def get_yearly_report(self, db: Session, *, user: User, year: int) -> YearlyReport:
        start = datetime(year, 1, 1, tzinfo=timezone.utc)
        end = datetime(year + 1, 1, 1, tzinfo=timezone.utc)
        snapshots = [
            s for s in crud_portfolio_snapshot.get_multi_by_user_in_range(
                db, user_id=user.id, from_date=start, to_date=end
            )
            if as_utc(s.snapshot_date) < end
        ]

        last_by_month = {}
        for snapshot in snapshots:
            last_by_month[as_utc(snapshot.snapshot_date).month] = snapshot

        monthly_data = []
        for month in range(1, 13):
            snapshot = last_by_month.get(month)
            monthly_data.append(
                YearlyMonthEntry(
                    month=month,
                    total_value=snapshot.total_value if snapshot else 0.0,
                    gain_loss=snapshot.total_gain_loss if snapshot else 0.0,
                    gain_loss_percent=snapshot.total_gain_loss_percent if snapshot else 0.0,
                )
            )

        assets = crud_asset.get_all_by_user(db, user_id=user.id)
        best, worst = analytics.best_and_worst(analytics.calculate_asset_performance(assets))
        last = snapshots[-1] if snapshots else None

        return YearlyReport(
            year=year,
            total_value=last.total_value if last else 0.0,
            total_gain_loss=last.total_gain_loss if last else 0.0,
            total_gain_loss_percent=last.total_gain_loss_percent if last else 0.0,
            monthly_data=monthly_data,
            best_performing_assets=best,
            worst_performing_assets=worst,
        )

    def get_summary(self, db: Session, *, user: User) -> ReportSummary:
        assets = crud_asset.get_all_by_user(db, user_id=user.id)
        totals, categories = analytics.calculate_category_summary(assets)
        return ReportSummary(summary=totals, category_summary=categories, last_updated=utc_now())

    def get_trends(
        self,
        db: Session,
        *,
        user: User,
        period: TrendPeriodEnum = TrendPeriodEnum.THREE_MONTHS,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> TrendReport:
        for name, value in (("startDate", start_date), ("endDate", end_date)):
            if value and not MIN_REPORT_YEAR <= value.year <= MAX_REPORT_YEAR:
                raise ValidationError(
                    f"{name} must be between {MIN_REPORT_YEAR} and {MAX_REPORT_YEAR}",
                    details={name: value.isoformat()},
                )
        if start_date and end_date and start_date > end_date:
            raise ValidationError(
                "Start date must be on or before end date",
                details={"startDate": start_date.isoformat(), "endDate": end_date.isoformat()},
            )

        now = utc_now()
        assets = crud_asset.get_all_by_user(db, user_id=user.id)
        start, end = analytics.resolve_trend_range(period, assets, now, start_date, end_date)
        points, step_days = analytics.build_trend_points(assets, start, end, now)

        return TrendReport(
            period=period,
            start_date=start.date(),
            end_date=end.date(),
            step_days=step_days,
            points=points,
            category_performance=analytics.calculate_category_breakdown(assets),
        )

    def get_monthly_analysis(self, db: Session, *, user: User) -> List[MonthlyAnalysisEntry]:
        assets = crud_asset.get_all_by_user(db, user_id=user.id)
        return analytics.build_monthly_analysis(assets, utc_now())


report_service = ReportService()
