from datetime import datetime
from typing import List
from sqlalchemy.orm import Session
from app.core.constants import PriceSourceEnum
from app.crud.base import CRUDBase
from app.models.price_history import PriceHistory


class CRUDPriceHistory(CRUDBase[PriceHistory, dict, dict]):
    def record(
        self, db: Session, *, asset_id: int, price: float, date: datetime,
        source: PriceSourceEnum = PriceSourceEnum.MANUAL, commit: bool = True
    ) -> PriceHistory:
        return self.create(
            db,
            obj_in={"asset_id": asset_id, "price": price, "date": date, "source": source},
            commit=commit,
        )

    def get_recent_by_asset(self, db: Session, *, asset_id: int, limit: int = 10) -> List[PriceHistory]:
        return db.query(PriceHistory).filter(
            PriceHistory.asset_id == asset_id
        ).order_by(PriceHistory.date.desc(), PriceHistory.id.desc()).limit(limit).all()


price_history = CRUDPriceHistory(PriceHistory)
