import logging

from sqlalchemy.orm import Session

from app.core.constants import ErrorCode
from app.core.exceptions import AuthenticationError, DuplicateError
from app.core.security import (
    create_access_token,
    get_password_hash,
    hash_session_token,
    verify_password,
)
from app.crud.user import user as crud_user
from app.crud.user_session import user_session as crud_user_session
from app.models.user import User
from app.schemas.token import AuthResponse, LoginRequest, VerifyResponse
from app.schemas.user import User as UserSchema, UserCreate

logger = logging.getLogger(__name__)


class AuthService:
    def _issue_token(self, db: Session, *, user: User) -> str:
        """Sign a token and store its session row. Caller commits."""
        token, expires_at = create_access_token(user_id=user.id, email=user.email)
        crud_user_session.create_for_user(
            db,
            user_id=user.id,
            token_hash=hash_session_token(token),
            expires_at=expires_at,
            commit=False,
        )
        return token

    def register(self, db: Session, *, user_in: UserCreate) -> AuthResponse:
        email = user_in.email.lower()
        if crud_user.get_by_email(db, email=email):
            raise DuplicateError("This email address is already registered", code=ErrorCode.DUPLICATE_EMAIL)

        user = crud_user.create_with_password(
            db,
            email=email,
            name=user_in.name,
            hashed_password=get_password_hash(user_in.password),
            commit=False,
        )
        token = self._issue_token(db, user=user)
        db.commit()
        db.refresh(user)

        logger.info(f"Registered user {user.id}")
        return AuthResponse(user=UserSchema.model_validate(user), token=token)

    def login(self, db: Session, *, credentials: LoginRequest) -> AuthResponse:
        user = crud_user.get_by_email(db, email=credentials.email.lower())
        if not user or not verify_password(credentials.password, user.hashed_password):
            raise AuthenticationError("Invalid email or password")

        # Single-session policy: prior sessions go away in the same transaction.
        crud_user_session.delete_by_user(db, user_id=user.id, commit=False)
        token = self._issue_token(db, user=user)
        db.commit()

        logger.info(f"User {user.id} logged in")
        return AuthResponse(user=UserSchema.model_validate(user), token=token)

    def logout(self, db: Session, *, user: User) -> None:
        crud_user_session.delete_by_user(db, user_id=user.id)
        logger.info(f"User {user.id} logged out")

    def verify(self, user: User) -> VerifyResponse:
        return VerifyResponse(valid=True, user=UserSchema.model_validate(user))


auth_service = AuthService()
