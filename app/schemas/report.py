from typing import List, Optional
from datetime import date, datetime

from app.core.constants import TrendPeriodEnum
from app.schemas.base import CamelModel
from app.schemas.portfolio import AssetPerformance, CategoryBreakdown


class MonthlyReport(CamelModel):
    year: int
    month: int
    total_value: float
    total_gain_loss: float
    total_gain_loss_percent: float
    from_snapshot: bool
    snapshot_date: Optional[datetime] = None
    category_breakdown: List[CategoryBreakdown] = []
    asset_performance: List[AssetPerformance]


class YearlyMonthEntry(CamelModel):
    month: int
    total_value: float
    gain_loss: float
    gain_loss_percent: float


class YearlyReport(CamelModel):
    year: int
    total_value: float
    total_gain_loss: float
    total_gain_loss_percent: float
    monthly_data: List[YearlyMonthEntry]
    best_performing_assets: List[AssetPerformance]
    worst_performing_assets: List[AssetPerformance]


class SummaryTotals(CamelModel):
    total_value: float
    total_gain_loss: float
    total_gain_loss_percent: float
    asset_count: int


class CategorySummaryEntry(CamelModel):
    category_id: str
    name: str
    total_value: float
    total_gain_loss: float
    asset_count: int
    percentage: float
    gain_loss_percent: float


class ReportSummary(CamelModel):
    summary: SummaryTotals
    category_summary: List[CategorySummaryEntry]
    last_updated: datetime


class TrendPoint(CamelModel):
    date: str
    total_value: float
    total_gain_loss: float
    gain_loss_percent: float
    asset_count: int


class TrendReport(CamelModel):
    """Estimated value-over-time series; prices are interpolated, not recorded."""
    period: TrendPeriodEnum
    start_date: date
    end_date: date
    step_days: int
    estimated: bool = True
    points: List[TrendPoint]
    category_performance: List[CategoryBreakdown]


class MonthlyAnalysisEntry(CamelModel):
    month: str
    value: float
    change: float
    change_percent: float
    asset_count: int
