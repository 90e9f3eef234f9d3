from datetime import datetime
from typing import Optional
from sqlalchemy.orm import Session
from app.crud.base import CRUDBase
from app.models.user_session import UserSession


class CRUDUserSession(CRUDBase[UserSession, dict, dict]):
    def create_for_user(
        self, db: Session, *, user_id: int, token_hash: str, expires_at: datetime, commit: bool = True
    ) -> UserSession:
        return self.create(
            db,
            obj_in={"user_id": user_id, "token_hash": token_hash, "expires_at": expires_at},
            commit=commit,
        )

    def get_valid(self, db: Session, *, user_id: int, token_hash: str, now: datetime) -> Optional[UserSession]:
        return db.query(UserSession).filter(
            UserSession.user_id == user_id,
            UserSession.token_hash == token_hash,
            UserSession.expires_at > now,
        ).first()

    def delete_by_user(self, db: Session, *, user_id: int, commit: bool = True) -> int:
        deleted = db.query(UserSession).filter(UserSession.user_id == user_id).delete(synchronize_session=False)
        if commit:
            db.commit()
        return deleted


user_session = CRUDUserSession(UserSession)
