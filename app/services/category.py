from typing import List

from sqlalchemy.orm import Session

from app.core.exceptions import NotFoundError
from app.crud.asset_category import asset_category as crud_asset_category
from app.schemas.category import AssetCategoryWithCount


class CategoryService:
    def _to_schema(self, category, asset_count: int) -> AssetCategoryWithCount:
        schema = AssetCategoryWithCount.model_validate(category)
        schema.asset_count = asset_count
        return schema

    def list_categories(self, db: Session) -> List[AssetCategoryWithCount]:
        return [self._to_schema(c, count) for c, count in crud_asset_category.get_multi_with_counts(db)]

    def get_category(self, db: Session, *, category_id: str) -> AssetCategoryWithCount:
        row = crud_asset_category.get_with_count(db, category_id=category_id)
        if not row:
            raise NotFoundError("Category not found")
        category, count = row
        return self._to_schema(category, count)


category_service = CategoryService()
