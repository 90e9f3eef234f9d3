import calendar
import logging
from datetime import datetime, timedelta, timezone
from typing import List

from sqlalchemy.orm import Session

from app.core.constants import HistoryPeriodEnum
from app.crud.asset import asset as crud_asset
from app.crud.portfolio_snapshot import portfolio_snapshot as crud_portfolio_snapshot
from app.crud.user import user as crud_user
from app.models.portfolio_snapshot import PortfolioSnapshot
from app.models.user import User
from app.schemas.portfolio import PortfolioPerformance, PortfolioSummary
from app.schemas.portfolio_snapshot import PortfolioSnapshotCreate, PortfolioSnapshotSchema
from app.services import analytics
from app.utils.dates import utc_now

logger = logging.getLogger(__name__)

HISTORY_ALL_START = datetime(2000, 1, 1, tzinfo=timezone.utc)

HISTORY_PERIOD_MONTHS = {
    HistoryPeriodEnum.ONE_MONTH: 1,
    HistoryPeriodEnum.THREE_MONTHS: 3,
    HistoryPeriodEnum.SIX_MONTHS: 6,
    HistoryPeriodEnum.ONE_YEAR: 12,
}


def _months_before(value: datetime, months: int) -> datetime:
    month_index = value.year * 12 + value.month - 1 - months
    year, month = divmod(month_index, 12)
    day = min(value.day, calendar.monthrange(year, month + 1)[1])
    return value.replace(year=year, month=month + 1, day=day)


def history_start(period: HistoryPeriodEnum, now: datetime) -> datetime:
    if period == HistoryPeriodEnum.ALL:
        return HISTORY_ALL_START
    if period == HistoryPeriodEnum.ONE_WEEK:
        return now - timedelta(days=7)
    return _months_before(now, HISTORY_PERIOD_MONTHS[period])


class PortfolioService:
    def get_summary(self, db: Session, *, user: User) -> PortfolioSummary:
        assets = crud_asset.get_all_by_user(db, user_id=user.id)
        return analytics.calculate_portfolio_summary(assets, utc_now())

    def get_history(
        self, db: Session, *, user: User, period: HistoryPeriodEnum = HistoryPeriodEnum.ONE_YEAR
    ) -> List[PortfolioSnapshotSchema]:
        now = utc_now()
        snapshots = crud_portfolio_snapshot.get_multi_by_user_in_range(
            db, user_id=user.id, from_date=history_start(period, now), to_date=now
        )
        return [PortfolioSnapshotSchema.model_validate(s) for s in snapshots]

    def _take_snapshot(self, db: Session, *, user_id: int, commit: bool = True) -> PortfolioSnapshot:
        assets = crud_asset.get_all_by_user(db, user_id=user_id)
        total_value, total_acquisition_value = analytics.calculate_totals(assets)
        total_gain_loss = total_value - total_acquisition_value
        return crud_portfolio_snapshot.create(
            db,
            obj_in=PortfolioSnapshotCreate(
                user_id=user_id,
                snapshot_date=utc_now(),
                total_value=total_value,
                total_gain_loss=total_gain_loss,
                total_gain_loss_percent=analytics.percent(total_gain_loss, total_acquisition_value),
            ),
            commit=commit,
        )

    def create_snapshot(self, db: Session, *, user: User) -> PortfolioSnapshotSchema:
        snapshot = self._take_snapshot(db, user_id=user.id)
        logger.info(f"Portfolio snapshot {snapshot.id} created for user {user.id}")
        return PortfolioSnapshotSchema.model_validate(snapshot)

    def get_performance(self, db: Session, *, user: User) -> PortfolioPerformance:
        assets = crud_asset.get_all_by_user(db, user_id=user.id)
        performance = analytics.calculate_asset_performance(assets)
        best, worst = analytics.best_and_worst(performance)
        return PortfolioPerformance(best_performing=best, worst_performing=worst, all=performance)

    def create_daily_snapshots(self, db: Session) -> int:
        """Snapshot every user's portfolio; a failure for one user does not stop the rest."""
        created = 0
        for user_id in crud_user.get_all_ids(db):
            try:
                self._take_snapshot(db, user_id=user_id)
                created += 1
            except Exception as e:
                db.rollback()
                logger.error(f"Error creating portfolio snapshot for user {user_id}: {e}", exc_info=True)
        return created


portfolio_service = PortfolioService()
