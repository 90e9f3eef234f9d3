from datetime import datetime
from typing import List, Optional
from sqlalchemy.orm import Session
from sqlalchemy import and_, desc
from app.models.portfolio_snapshot import PortfolioSnapshot
from app.crud.base import CRUDBase
from app.schemas.portfolio_snapshot import PortfolioSnapshotCreate


class CRUDPortfolioSnapshot(CRUDBase[PortfolioSnapshot, PortfolioSnapshotCreate, PortfolioSnapshotCreate]):
    def get_multi_by_user_in_range(
        self,
        db: Session,
        user_id: int,
        from_date: datetime,
        to_date: datetime,
    ) -> List[PortfolioSnapshot]:
        """Snapshots with from_date <= snapshot_date <= to_date, oldest first."""
        return db.query(PortfolioSnapshot).filter(
            and_(
                PortfolioSnapshot.user_id == user_id,
                PortfolioSnapshot.snapshot_date >= from_date,
                PortfolioSnapshot.snapshot_date <= to_date
            )
        ).order_by(PortfolioSnapshot.snapshot_date.asc(), PortfolioSnapshot.id.asc()).all()

    def get_latest_in_range(
        self,
        db: Session,
        user_id: int,
        from_date: datetime,
        before: datetime
    ) -> Optional[PortfolioSnapshot]:
        """Most recent snapshot with from_date <= snapshot_date < before."""
        return db.query(PortfolioSnapshot).filter(
            and_(
                PortfolioSnapshot.user_id == user_id,
                PortfolioSnapshot.snapshot_date >= from_date,
                PortfolioSnapshot.snapshot_date < before
            )
        ).order_by(desc(PortfolioSnapshot.snapshot_date), desc(PortfolioSnapshot.id)).first()

    def get_latest_by_user(
        self,
        db: Session,
        user_id: int
    ) -> Optional[PortfolioSnapshot]:
        return db.query(PortfolioSnapshot).filter(
            PortfolioSnapshot.user_id == user_id
        ).order_by(desc(PortfolioSnapshot.snapshot_date)).first()


portfolio_snapshot = CRUDPortfolioSnapshot(PortfolioSnapshot)
