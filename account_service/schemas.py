from pydantic import BaseModel, Field, field_validator

from typing import Literal, Optional
import re

EMAIL_PATTERN = re.compile(r"^\S+@\S+\.\S+$")


class UserCreate(BaseModel):
    name: str = Field(min_length=1)
    email: str
    password: str = Field(min_length=6)

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("Name is required")
        return value

    @field_validator("email")
    @classmethod
    def email_matches_pattern(cls, value: str) -> str:
        if not EMAIL_PATTERN.match(value):
            raise ValueError("Please use a valid email address")
        return value


class UserLogin(BaseModel):
    email: str
    password: str


class UserOut(BaseModel):
    id: str
    name: str
    email: str
    role: Literal["user", "admin"]

    class Config:
        from_attributes = True


class AuthResponse(BaseModel):
    token: str
    user: UserOut


class ErrorResponse(BaseModel):
    message: str
    error: Optional[str] = None
