from typing import Optional
from datetime import datetime

from app.schemas.base import CamelModel


class PortfolioSnapshotSchema(CamelModel):
    id: int
    user_id: int
    snapshot_date: datetime
    total_value: float
    total_gain_loss: float
    total_gain_loss_percent: float
    created_at: Optional[datetime] = None


class PortfolioSnapshotCreate(CamelModel):
    user_id: int
    snapshot_date: datetime
    total_value: float = 0.0
    total_gain_loss: float = 0.0
    total_gain_loss_percent: float = 0.0
