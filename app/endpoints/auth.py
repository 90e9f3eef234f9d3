from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.models.user import User as UserModel
from app.schemas.response import APIResponse
from app.schemas.token import AuthResponse, LoginRequest, VerifyResponse
from app.schemas.user import User, UserCreate
from app.services.auth import auth_service
from app.utils import deps

router = APIRouter()

@router.post("/register", response_model=APIResponse[AuthResponse], status_code=status.HTTP_201_CREATED)
def register(
    user_in: UserCreate,
    db: Session = Depends(get_db)
):
    """Create an account and return it together with a session token."""
    auth_data = auth_service.register(db=db, user_in=user_in)
    return APIResponse(message="User registered successfully", data=auth_data)

@router.post("/login", response_model=APIResponse[AuthResponse])
def login(
    request: LoginRequest,
    db: Session = Depends(get_db)
):
    """Log in; any earlier session of the user stops working."""
    auth_data = auth_service.login(db=db, credentials=request)
    return APIResponse(message="Login successful", data=auth_data)

@router.post("/logout", response_model=APIResponse[None])
def logout(
    db: Session = Depends(get_db),
    current_user: UserModel = Depends(deps.get_current_user)
):
    auth_service.logout(db=db, user=current_user)
    return APIResponse(message="Logged out successfully")

@router.get("/me", response_model=APIResponse[User])
def read_current_user(current_user: UserModel = Depends(deps.get_current_user)):
    return APIResponse(data=User.model_validate(current_user))

@router.post("/verify", response_model=APIResponse[VerifyResponse])
def verify_token(current_user: UserModel = Depends(deps.get_current_user)):
    """Confirm the presented token still maps to a live session."""
    return APIResponse(data=auth_service.verify(current_user))
