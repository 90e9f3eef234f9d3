from typing import List, Optional
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from app.core.constants import AssetSortEnum, SortOrderEnum
from app.core.database import get_db
from app.models.user import User
from app.schemas.asset import Asset, AssetCreate, AssetDetail, AssetUpdate
from app.schemas.price_history import AssetPriceUpdate, PriceHistory
from app.schemas.response import APIResponse, PaginatedData
from app.services.asset import asset_service
from app.utils import deps

router = APIRouter()

@router.get("", response_model=APIResponse[PaginatedData[Asset]])
def list_assets(
    category_id: Optional[str] = Query(None, alias="categoryId"),
    search: Optional[str] = Query(None),
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100),
    sort: AssetSortEnum = Query(AssetSortEnum.NAME),
    order: SortOrderEnum = Query(SortOrderEnum.ASC),
    db: Session = Depends(get_db),
    current_user: User = Depends(deps.get_current_user)
):
    """Paginated list of the current user's assets."""
    assets = asset_service.list_assets(
        db,
        user=current_user,
        category_id=category_id,
        search=search,
        page=page,
        limit=limit,
        sort=sort,
        order=order,
    )
    return APIResponse(data=assets)

@router.post("", response_model=APIResponse[Asset], status_code=status.HTTP_201_CREATED)
def create_asset(
    asset_in: AssetCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(deps.get_current_user)
):
    asset = asset_service.create_asset(db, user=current_user, asset_in=asset_in)
    return APIResponse(message="Asset created successfully", data=asset)

@router.get("/{asset_id}", response_model=APIResponse[AssetDetail])
def get_asset(
    asset_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(deps.get_current_user)
):
    """Asset with its category and most recent price history."""
    return APIResponse(data=asset_service.get_asset(db, user=current_user, asset_id=asset_id))

@router.put("/{asset_id}", response_model=APIResponse[Asset])
def update_asset(
    asset_id: int,
    asset_in: AssetUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(deps.get_current_user)
):
    asset = asset_service.update_asset(db, user=current_user, asset_id=asset_id, asset_in=asset_in)
    return APIResponse(message="Asset updated successfully", data=asset)

@router.delete("/{asset_id}", response_model=APIResponse[None])
def delete_asset(
    asset_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(deps.get_current_user)
):
    asset_service.delete_asset(db, user=current_user, asset_id=asset_id)
    return APIResponse(message="Asset deleted successfully")

@router.patch("/{asset_id}/price", response_model=APIResponse[Asset])
def update_asset_price(
    asset_id: int,
    price_in: AssetPriceUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(deps.get_current_user)
):
    """Set the current price and record it in the price history."""
    asset = asset_service.update_price(db, user=current_user, asset_id=asset_id, price_in=price_in)
    return APIResponse(message="Price updated successfully", data=asset)

@router.get("/{asset_id}/price-history", response_model=APIResponse[List[PriceHistory]])
def get_asset_price_history(
    asset_id: int,
    limit: int = Query(100, ge=1, le=1000),
    db: Session = Depends(get_db),
    current_user: User = Depends(deps.get_current_user)
):
    history = asset_service.get_price_history(db, user=current_user, asset_id=asset_id, limit=limit)
    return APIResponse(data=history)
