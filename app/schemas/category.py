from typing import Optional
from datetime import datetime

from app.schemas.base import CamelModel

class AssetCategoryBase(CamelModel):
    id: str
    name: str
    description: Optional[str] = None
    color: str
    icon: Optional[str] = None

class AssetCategory(AssetCategoryBase):
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

class AssetCategoryWithCount(AssetCategory):
    """Category with the number of assets filed under it, across all users."""
    asset_count: int = 0
