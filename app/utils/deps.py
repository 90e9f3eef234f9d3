from typing import Optional
from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from jose import JWTError
from pydantic import ValidationError
from sqlalchemy.orm import Session
from app.core.database import get_db
from app.core.exceptions import AuthenticationError
from app.core.security import decode_access_token, hash_session_token
from app.crud.user import user as user_crud
from app.crud.user_session import user_session as user_session_crud
from app.models.user import User
from app.schemas.token import TokenPayload
from app.utils.dates import utc_now

http_bearer = HTTPBearer(auto_error=False)

def get_current_user(
    db: Session = Depends(get_db),
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(http_bearer)
) -> User:
    """Resolve the bearer token to a user with a live session."""
    if credentials is None or not credentials.credentials.strip():
        raise AuthenticationError("Authentication required")

    token = credentials.credentials
    try:
        token_data = TokenPayload(**decode_access_token(token))
    except (JWTError, ValidationError):
        raise AuthenticationError("Invalid token")

    user = user_crud.get(db, id=token_data.user_id)
    if not user:
        raise AuthenticationError("User not found")

    session = user_session_crud.get_valid(
        db, user_id=user.id, token_hash=hash_session_token(token), now=utc_now()
    )
    if not session:
        raise AuthenticationError("Session is invalid or expired")
    return user
