import logging

from sqlalchemy.orm import Session

from app.core.constants import DEFAULT_CATEGORIES
from app.core.database import SessionLocal
from app.crud.asset_category import asset_category as crud_asset_category
from app.models import registry  # noqa: F401

logger = logging.getLogger(__name__)


def seed_categories(db: Session) -> int:
    """Insert or refresh the default asset categories. Safe to run repeatedly."""
    for data in DEFAULT_CATEGORIES:
        crud_asset_category.upsert(db, data=dict(data), commit=False)
    db.commit()
    logger.info(f"Seeded {len(DEFAULT_CATEGORIES)} asset categories")
    return len(DEFAULT_CATEGORIES)


if __name__ == "__main__":
    from app.core.logging import configure_logging

    configure_logging()
    db = SessionLocal()
    try:
        seed_categories(db)
    finally:
        db.close()
