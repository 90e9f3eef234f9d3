from pydantic import Field
from datetime import datetime
from typing import Optional

from app.core.constants import PriceSourceEnum
from app.schemas.base import CamelModel

class PriceHistory(CamelModel):
    id: int
    asset_id: int
    price: float
    date: datetime
    source: PriceSourceEnum
    created_at: Optional[datetime] = None

class AssetPriceUpdate(CamelModel):
    current_price: float = Field(..., ge=0)
    source: PriceSourceEnum = PriceSourceEnum.MANUAL
