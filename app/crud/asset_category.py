from typing import Any, Dict, List, Optional, Tuple
from sqlalchemy.orm import Session
from sqlalchemy import func
from app.crud.base import CRUDBase
from app.models.asset import Asset
from app.models.asset_category import AssetCategory


class CRUDAssetCategory(CRUDBase[AssetCategory, dict, dict]):
    def _with_counts(self, db: Session):
        return db.query(AssetCategory, func.count(Asset.id)).outerjoin(
            Asset, Asset.category_id == AssetCategory.id
        ).group_by(AssetCategory.id)

    def get_multi_with_counts(self, db: Session) -> List[Tuple[AssetCategory, int]]:
        return self._with_counts(db).order_by(AssetCategory.name.asc()).all()

    def get_with_count(self, db: Session, *, category_id: str) -> Optional[Tuple[AssetCategory, int]]:
        return self._with_counts(db).filter(AssetCategory.id == category_id).first()

    def upsert(self, db: Session, *, data: Dict[str, Any], commit: bool = True) -> AssetCategory:
        category = self.get(db, data["id"])
        if category:
            return self.update(db, db_obj=category, obj_in=data, commit=commit)
        return self.create(db, obj_in=data, commit=commit)


asset_category = CRUDAssetCategory(AssetCategory)
