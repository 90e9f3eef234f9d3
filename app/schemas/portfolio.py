from typing import List
from datetime import datetime

from app.schemas.base import CamelModel


class CategoryBreakdown(CamelModel):
    category_id: str
    category_name: str
    color: str
    value: float
    acquisition_value: float
    gain_loss: float
    gain_loss_percent: float
    percentage: float
    asset_count: int


class PortfolioSummary(CamelModel):
    total_value: float
    total_acquisition_value: float
    total_gain_loss: float
    total_gain_loss_percent: float
    asset_count: int
    categories: List[CategoryBreakdown]
    updated_at: datetime


class AssetPerformance(CamelModel):
    asset_id: int
    asset_name: str
    category: str
    current_value: float
    gain_loss: float
    gain_loss_percent: float


class PortfolioPerformance(CamelModel):
    best_performing: List[AssetPerformance]
    worst_performing: List[AssetPerformance]
    all: List[AssetPerformance]
