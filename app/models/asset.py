from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, Float, Text
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from app.core.database import Base

class Asset(Base):
    __tablename__ = "assets"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    category_id = Column(String(50), ForeignKey("asset_categories.id"), nullable=False, index=True)
    name = Column(String(200), nullable=False, index=True)
    symbol = Column(String(20), nullable=True)
    quantity = Column(Float, nullable=False)
    acquisition_price = Column(Float, nullable=False)
    current_price = Column(Float, nullable=False)
    acquisition_date = Column(DateTime(timezone=True), nullable=False)
    currency = Column(String(3), nullable=False, default="JPY")
    notes = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    user = relationship("User", back_populates="assets")
    category = relationship("AssetCategory", back_populates="assets")
    price_history = relationship(
        "PriceHistory",
        back_populates="asset",
        cascade="all, delete-orphan",
        order_by="PriceHistory.date.desc()"
    )
