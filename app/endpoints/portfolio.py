from typing import List
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from app.core.constants import HistoryPeriodEnum
from app.core.database import get_db
from app.models.user import User
from app.schemas.portfolio import PortfolioPerformance, PortfolioSummary
from app.schemas.portfolio_snapshot import PortfolioSnapshotSchema
from app.schemas.response import APIResponse
from app.services.portfolio import portfolio_service
from app.utils import deps

router = APIRouter()

@router.get("/summary", response_model=APIResponse[PortfolioSummary])
def get_portfolio_summary(
    db: Session = Depends(get_db),
    current_user: User = Depends(deps.get_current_user)
):
    """Current totals and the per-category breakdown."""
    return APIResponse(data=portfolio_service.get_summary(db, user=current_user))

@router.get("/history", response_model=APIResponse[List[PortfolioSnapshotSchema]])
def get_portfolio_history(
    period: HistoryPeriodEnum = Query(HistoryPeriodEnum.ONE_YEAR),
    db: Session = Depends(get_db),
    current_user: User = Depends(deps.get_current_user)
):
    return APIResponse(data=portfolio_service.get_history(db, user=current_user, period=period))

@router.post("/snapshot", response_model=APIResponse[PortfolioSnapshotSchema], status_code=status.HTTP_201_CREATED)
def create_portfolio_snapshot(
    db: Session = Depends(get_db),
    current_user: User = Depends(deps.get_current_user)
):
    snapshot = portfolio_service.create_snapshot(db, user=current_user)
    return APIResponse(message="Portfolio snapshot created", data=snapshot)

@router.get("/performance", response_model=APIResponse[PortfolioPerformance])
def get_portfolio_performance(
    db: Session = Depends(get_db),
    current_user: User = Depends(deps.get_current_user)
):
    """Best and worst assets by gain/loss percentage."""
    return APIResponse(data=portfolio_service.get_performance(db, user=current_user))
