from enum import Enum


class ErrorCode(str, Enum):
    VALIDATION_ERROR = "VALIDATION_ERROR"
    AUTHENTICATION_ERROR = "AUTHENTICATION_ERROR"
    UNAUTHORIZED = "UNAUTHORIZED"
    FORBIDDEN = "FORBIDDEN"
    NOT_FOUND = "NOT_FOUND"
    METHOD_NOT_ALLOWED = "METHOD_NOT_ALLOWED"
    CONFLICT = "CONFLICT"
    DUPLICATE_EMAIL = "DUPLICATE_EMAIL"
    DUPLICATE_ERROR = "DUPLICATE_ERROR"
    INTERNAL_ERROR = "INTERNAL_ERROR"

class PriceSourceEnum(str, Enum):
    MANUAL = "manual"
    API = "api"

class AssetSortEnum(str, Enum):
    NAME = "name"
    ACQUISITION_DATE = "acquisitionDate"
    CURRENT_VALUE = "currentValue"
    GAIN_LOSS = "gainLoss"

class SortOrderEnum(str, Enum):
    ASC = "asc"
    DESC = "desc"

class HistoryPeriodEnum(str, Enum):
    ONE_WEEK = "1w"
    ONE_MONTH = "1m"
    THREE_MONTHS = "3m"
    SIX_MONTHS = "6m"
    ONE_YEAR = "1y"
    ALL = "all"

class TrendPeriodEnum(str, Enum):
    ONE_MONTH = "1M"
    THREE_MONTHS = "3M"
    SIX_MONTHS = "6M"
    ONE_YEAR = "1Y"
    ALL = "ALL"
    CUSTOM = "CUSTOM"

TREND_PERIOD_DAYS = {
    TrendPeriodEnum.ONE_MONTH: 30,
    TrendPeriodEnum.THREE_MONTHS: 90,
    TrendPeriodEnum.SIX_MONTHS: 180,
    TrendPeriodEnum.ONE_YEAR: 365,
}

# Years accepted by the report endpoints.
MIN_REPORT_YEAR = 2000
MAX_REPORT_YEAR = 2099

# Sampling step of the trend series, by span of the requested range.
DAILY_STEP_MAX_SPAN_DAYS = 60
THREE_DAY_STEP_MAX_SPAN_DAYS = 180

PERFORMANCE_TOP_N = 5
ASSET_DETAIL_PRICE_HISTORY_LIMIT = 10

DEFAULT_CATEGORY_COLOR = "#3B82F6"

DEFAULT_CATEGORIES = [
    {
        "id": "cash",
        "name": "Cash & Deposits",
        "description": "Cash, savings and time deposits",
        "color": "#10B981",
        "icon": "cash",
    },
    {
        "id": "stocks",
        "name": "Stocks",
        "description": "Domestic and foreign equities",
        "color": "#3B82F6",
        "icon": "trending-up",
    },
    {
        "id": "bonds",
        "name": "Bonds",
        "description": "Government, corporate and foreign bonds",
        "color": "#8B5CF6",
        "icon": "file-text",
    },
    {
        "id": "funds",
        "name": "Funds & ETFs",
        "description": "Mutual funds, ETFs and REITs",
        "color": "#F59E0B",
        "icon": "pie-chart",
    },
    {
        "id": "real-estate",
        "name": "Real Estate",
        "description": "Homes, land and investment property",
        "color": "#EF4444",
        "icon": "home",
    },
    {
        "id": "crypto",
        "name": "Crypto Assets",
        "description": "Bitcoin, Ethereum and other crypto assets",
        "color": "#F97316",
        "icon": "zap",
    },
    {
        "id": "commodities",
        "name": "Commodities",
        "description": "Gold, silver, oil and other commodities",
        "color": "#84CC16",
        "icon": "star",
    },
    {
        "id": "others",
        "name": "Others",
        "description": "Other investments and assets",
        "color": "#6B7280",
        "icon": "more-horizontal",
    },
]
