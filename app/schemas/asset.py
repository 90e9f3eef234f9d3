from pydantic import Field, field_validator, model_validator
from typing import List, Optional
from datetime import date, datetime, timezone

from app.core.config import settings
from app.schemas.base import CamelModel
from app.schemas.category import AssetCategoryBase
from app.schemas.price_history import PriceHistory


def _coerce_datetime(value):
    """Accept ISO dates as well as datetimes."""
    if isinstance(value, str) and len(value) == 10:
        value = date.fromisoformat(value)
    if isinstance(value, date) and not isinstance(value, datetime):
        value = datetime(value.year, value.month, value.day)
    return value


def _to_utc(value: Optional[datetime]) -> Optional[datetime]:
    """Naive values are taken as UTC; offset values are converted to UTC."""
    if value is None:
        return value
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


class AssetBase(CamelModel):
    category_id: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1, max_length=200)
    symbol: Optional[str] = Field(None, max_length=20)
    quantity: float = Field(..., gt=0)
    acquisition_price: float = Field(..., gt=0)
    acquisition_date: datetime
    currency: str = Field(default_factory=lambda: settings.DEFAULT_CURRENCY, pattern=r"^[A-Za-z]{3}$")
    notes: Optional[str] = Field(None, max_length=1000)

    @field_validator("acquisition_date", mode="before")
    def coerce_acquisition_date(cls, v):
        return _coerce_datetime(v)

    @field_validator("acquisition_date")
    def acquisition_date_to_utc(cls, v):
        return _to_utc(v)

    @field_validator("currency")
    def upper_currency(cls, v):
        return v.upper()


class AssetCreate(AssetBase):
    current_price: Optional[float] = Field(None, ge=0)

    @model_validator(mode="after")
    def default_current_price(self):
        if self.current_price is None:
            self.current_price = self.acquisition_price
        return self


class AssetUpdate(CamelModel):
    category_id: Optional[str] = Field(None, min_length=1)
    name: Optional[str] = Field(None, min_length=1, max_length=200)
    symbol: Optional[str] = Field(None, max_length=20)
    quantity: Optional[float] = Field(None, gt=0)
    acquisition_price: Optional[float] = Field(None, gt=0)
    current_price: Optional[float] = Field(None, ge=0)
    acquisition_date: Optional[datetime] = None
    currency: Optional[str] = Field(None, pattern=r"^[A-Za-z]{3}$")
    notes: Optional[str] = Field(None, max_length=1000)

    @field_validator("acquisition_date", mode="before")
    def coerce_acquisition_date(cls, v):
        if v is None:
            return v
        return _coerce_datetime(v)

    @field_validator("acquisition_date")
    def acquisition_date_to_utc(cls, v):
        return _to_utc(v)

    @field_validator("currency")
    def upper_currency(cls, v):
        return v.upper() if v else v


class Asset(CamelModel):
    """Asset as returned by the API, with values derived from quantity and prices."""
    id: int
    user_id: int
    category_id: str
    name: str
    symbol: Optional[str] = None
    quantity: float
    acquisition_price: float
    current_price: float
    acquisition_date: datetime
    currency: str
    notes: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    category: Optional[AssetCategoryBase] = None

    current_value: float = 0.0
    acquisition_value: float = 0.0
    gain_loss: float = 0.0
    gain_loss_percent: float = 0.0

    @model_validator(mode="after")
    def compute_values(self):
        self.current_value = self.quantity * self.current_price
        self.acquisition_value = self.quantity * self.acquisition_price
        self.gain_loss = self.current_value - self.acquisition_value
        self.gain_loss_percent = (
            self.gain_loss / self.acquisition_value * 100 if self.acquisition_value else 0.0
        )
        return self


class AssetDetail(Asset):
    price_history: List[PriceHistory] = []
