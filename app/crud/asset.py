from typing import List, Optional, Tuple
from sqlalchemy.orm import Session, joinedload, selectinload
from sqlalchemy import or_
from app.core.constants import AssetSortEnum, SortOrderEnum
from app.crud.base import CRUDBase
from app.models.asset import Asset
from app.schemas.asset import AssetCreate, AssetUpdate

SORT_COLUMNS = {
    AssetSortEnum.NAME: Asset.name,
    AssetSortEnum.ACQUISITION_DATE: Asset.acquisition_date,
    AssetSortEnum.CURRENT_VALUE: Asset.quantity * Asset.current_price,
    AssetSortEnum.GAIN_LOSS: Asset.quantity * (Asset.current_price - Asset.acquisition_price),
}


class CRUDAsset(CRUDBase[Asset, AssetCreate, AssetUpdate]):
    def get_by_user_and_id(self, db: Session, *, user_id: int, asset_id: int) -> Optional[Asset]:
        return db.query(Asset).options(joinedload(Asset.category)).filter(
            Asset.id == asset_id,
            Asset.user_id == user_id,
        ).first()

    def get_all_by_user(self, db: Session, *, user_id: int) -> List[Asset]:
        return db.query(Asset).options(joinedload(Asset.category)).filter(
            Asset.user_id == user_id
        ).order_by(Asset.id).all()

    def get_multi_filtered(
        self,
        db: Session,
        *,
        user_id: int,
        category_id: Optional[str] = None,
        search: Optional[str] = None,
        sort: AssetSortEnum = AssetSortEnum.NAME,
        order: SortOrderEnum = SortOrderEnum.ASC,
        skip: int = 0,
        limit: int = 20,
    ) -> Tuple[List[Asset], int]:
        """Page of a user's assets and the total match count.

        Derived sort keys are ordered as SQL expressions, so the order holds across pages.
        """
        query = db.query(Asset).filter(Asset.user_id == user_id)
        if category_id:
            query = query.filter(Asset.category_id == category_id)
        if search:
            pattern = f"%{search}%"
            query = query.filter(or_(Asset.name.ilike(pattern), Asset.symbol.ilike(pattern)))

        total = query.count()

        sort_column = SORT_COLUMNS[sort]
        if order == SortOrderEnum.DESC:
            query = query.order_by(sort_column.desc(), Asset.id.desc())
        else:
            query = query.order_by(sort_column.asc(), Asset.id.asc())

        items = query.options(selectinload(Asset.category)).offset(skip).limit(limit).all()
        return items, total


asset = CRUDAsset(Asset)
