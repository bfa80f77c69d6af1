"""
Credential store: persistence of user records.

The unique index on ``users.email`` is the authority for email uniqueness.
An insert that violates it is reported as ``DuplicateEmail`` exactly like the
application-level pre-check, so a lost race still reads as "email in use".
"""
from typing import Optional
import logging

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from .errors import DuplicateEmail, InternalFailure
from .models import User

logger = logging.getLogger(__name__)


class UserStore:
    def __init__(self, db: Session):
        self.db = db

    def find_by_email(self, email: str) -> Optional[User]:
        try:
            return self.db.query(User).filter(User.email == email).first()
        except SQLAlchemyError as e:
            logger.error(f"User lookup by email failed: {e}")
            raise InternalFailure(detail=str(e)) from e

    def find_by_id(self, user_id: str) -> Optional[User]:
        try:
            return self.db.get(User, user_id)
        except SQLAlchemyError as e:
            logger.error(f"User lookup by id failed: {e}")
            raise InternalFailure(detail=str(e)) from e

    def create(self, name: str, email: str, password_hash: str, role: str = "user") -> User:
        user = User(name=name, email=email, password=password_hash, role=role)
        try:
            self.db.add(user)
            self.db.commit()
            self.db.refresh(user)
        except IntegrityError as e:
            self.db.rollback()
            logger.info(f"Insert rejected by unique email index: email={email}")
            raise DuplicateEmail() from e
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"User insert failed: {e}")
            raise InternalFailure(detail=str(e)) from e
        return user
