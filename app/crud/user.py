from typing import Optional
from sqlalchemy.orm import Session
from app.crud.base import CRUDBase
from app.models.user import User
from app.schemas.user import UserCreate


class CRUDUser(CRUDBase[User, UserCreate, UserCreate]):
    def get_by_email(self, db: Session, *, email: str) -> Optional[User]:
        return db.query(User).filter(User.email == email).first()

    def create_with_password(self, db: Session, *, email: str, name: str, hashed_password: str, commit: bool = True) -> User:
        return self.create(
            db,
            obj_in={"email": email, "name": name, "hashed_password": hashed_password},
            commit=commit,
        )

    def get_all_ids(self, db: Session) -> list[int]:
        return [row.id for row in db.query(User.id).order_by(User.id).all()]


user = CRUDUser(User)
