from sqlalchemy import Column, String, DateTime
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from app.core.constants import DEFAULT_CATEGORY_COLOR
from app.core.database import Base

class AssetCategory(Base):
    __tablename__ = "asset_categories"

    id = Column(String(50), primary_key=True)  # slug, e.g. "stocks"
    name = Column(String(100), nullable=False)
    description = Column(String(500), nullable=True)
    color = Column(String(7), nullable=False, default=DEFAULT_CATEGORY_COLOR)
    icon = Column(String(50), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    assets = relationship("Asset", back_populates="category")
