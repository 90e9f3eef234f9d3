import logging
import math
from typing import List, Optional

from sqlalchemy.orm import Session

from app.core.constants import ASSET_DETAIL_PRICE_HISTORY_LIMIT, AssetSortEnum, SortOrderEnum
from app.core.exceptions import NotFoundError
from app.crud.asset import asset as crud_asset
from app.crud.asset_category import asset_category as crud_asset_category
from app.crud.price_history import price_history as crud_price_history
from app.models.asset import Asset as AssetModel
from app.models.user import User
from app.schemas.asset import Asset, AssetCreate, AssetDetail, AssetUpdate
from app.schemas.price_history import AssetPriceUpdate, PriceHistory
from app.schemas.response import PaginatedData, Pagination
from app.utils.dates import utc_now

logger = logging.getLogger(__name__)

NULLABLE_FIELDS = {"symbol", "notes"}


class AssetService:
    def _get_owned(self, db: Session, *, user: User, asset_id: int) -> AssetModel:
        asset = crud_asset.get_by_user_and_id(db, user_id=user.id, asset_id=asset_id)
        if not asset:
            raise NotFoundError("Asset not found")
        return asset

    def _ensure_category(self, db: Session, category_id: str) -> None:
        if not crud_asset_category.get(db, category_id):
            raise NotFoundError("Category not found")

    def list_assets(
        self,
        db: Session,
        *,
        user: User,
        category_id: Optional[str] = None,
        search: Optional[str] = None,
        page: int = 1,
        limit: int = 20,
        sort: AssetSortEnum = AssetSortEnum.NAME,
        order: SortOrderEnum = SortOrderEnum.ASC,
    ) -> PaginatedData[Asset]:
        items, total = crud_asset.get_multi_filtered(
            db,
            user_id=user.id,
            category_id=category_id,
            search=search,
            sort=sort,
            order=order,
            skip=(page - 1) * limit,
            limit=limit,
        )
        return PaginatedData[Asset](
            items=[Asset.model_validate(a) for a in items],
            pagination=Pagination(page=page, limit=limit, total=total, pages=math.ceil(total / limit)),
        )

    def get_asset(self, db: Session, *, user: User, asset_id: int) -> AssetDetail:
        asset = self._get_owned(db, user=user, asset_id=asset_id)
        history = crud_price_history.get_recent_by_asset(
            db, asset_id=asset.id, limit=ASSET_DETAIL_PRICE_HISTORY_LIMIT
        )
        return AssetDetail(
            **Asset.model_validate(asset).model_dump(),
            price_history=[PriceHistory.model_validate(h) for h in history],
        )

    def create_asset(self, db: Session, *, user: User, asset_in: AssetCreate) -> Asset:
        self._ensure_category(db, asset_in.category_id)
        asset = crud_asset.create(db, obj_in={**asset_in.model_dump(), "user_id": user.id})
        logger.info(f"User {user.id} created asset {asset.id}")
        return Asset.model_validate(asset)

    def update_asset(self, db: Session, *, user: User, asset_id: int, asset_in: AssetUpdate) -> Asset:
        asset = self._get_owned(db, user=user, asset_id=asset_id)
        update_data = {
            field: value
            for field, value in asset_in.model_dump(exclude_unset=True).items()
            if value is not None or field in NULLABLE_FIELDS
        }
        if "category_id" in update_data:
            self._ensure_category(db, update_data["category_id"])
        asset = crud_asset.update(db, db_obj=asset, obj_in=update_data)
        return Asset.model_validate(asset)

    def delete_asset(self, db: Session, *, user: User, asset_id: int) -> None:
        asset = self._get_owned(db, user=user, asset_id=asset_id)
        crud_asset.delete(db, id=asset.id)
        logger.info(f"User {user.id} deleted asset {asset_id}")

    def update_price(self, db: Session, *, user: User, asset_id: int, price_in: AssetPriceUpdate) -> Asset:
        asset = self._get_owned(db, user=user, asset_id=asset_id)
        crud_price_history.record(
            db,
            asset_id=asset.id,
            price=price_in.current_price,
            date=utc_now(),
            source=price_in.source,
            commit=False,
        )
        asset = crud_asset.update(db, db_obj=asset, obj_in={"current_price": price_in.current_price})
        return Asset.model_validate(asset)

    def get_price_history(self, db: Session, *, user: User, asset_id: int, limit: int = 100) -> List[PriceHistory]:
        asset = self._get_owned(db, user=user, asset_id=asset_id)
        history = crud_price_history.get_recent_by_asset(db, asset_id=asset.id, limit=limit)
        return [PriceHistory.model_validate(h) for h in history]


asset_service = AssetService()
