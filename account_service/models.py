from sqlalchemy import Column, String, Enum
from .db import Base
import uuid

ROLES = ("user", "admin")


class User(Base):
    __tablename__ = "users"
    id = Column(String, primary_key=True, default=lambda: str(uuid.uuid4()))
    name = Column(String, nullable=False)
    email = Column(String, unique=True, index=True, nullable=False)
    # Salted hash only, see PasswordHasher
    password = Column(String, nullable=False)
    role = Column(Enum(*ROLES, name="user_role", validate_strings=True), default="user", nullable=False)
