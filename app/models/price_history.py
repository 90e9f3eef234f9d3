from sqlalchemy import Column, Integer, DateTime, ForeignKey, Float, Enum
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from app.core.database import Base
from app.core.constants import PriceSourceEnum

class PriceHistory(Base):
    __tablename__ = "price_history"

    id = Column(Integer, primary_key=True, index=True)
    asset_id = Column(Integer, ForeignKey("assets.id", ondelete="CASCADE"), nullable=False, index=True)
    price = Column(Float, nullable=False)
    date = Column(DateTime(timezone=True), nullable=False, index=True)
    source = Column(Enum(PriceSourceEnum), nullable=False, default=PriceSourceEnum.MANUAL)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    asset = relationship("Asset", back_populates="price_history")
