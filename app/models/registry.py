"""Imports every model so Base.metadata and the mapper registry are complete."""
from app.core.database import Base
from app.models.asset import Asset
from app.models.asset_category import AssetCategory
from app.models.portfolio_snapshot import PortfolioSnapshot
from app.models.price_history import PriceHistory
from app.models.user import User
from app.models.user_session import UserSession

__all__ = [
    "Base",
    "Asset",
    "AssetCategory",
    "PortfolioSnapshot",
    "PriceHistory",
    "User",
    "UserSession",
]
