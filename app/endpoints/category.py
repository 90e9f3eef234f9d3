from typing import List
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.schemas.category import AssetCategoryWithCount
from app.schemas.response import APIResponse
from app.services.category import category_service

router = APIRouter()

@router.get("", response_model=APIResponse[List[AssetCategoryWithCount]])
def list_categories(db: Session = Depends(get_db)):
    """All asset categories ordered by name, with asset counts."""
    return APIResponse(data=category_service.list_categories(db))

@router.get("/{category_id}", response_model=APIResponse[AssetCategoryWithCount])
def get_category(category_id: str, db: Session = Depends(get_db)):
    return APIResponse(data=category_service.get_category(db, category_id=category_id))
