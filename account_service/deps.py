from fastapi import Depends, Request
from sqlalchemy.orm import Session

from .auth import PasswordHasher, TokenIssuer
from .db import get_db
from .service import AccountService
from .store import UserStore


def get_password_hasher(request: Request) -> PasswordHasher:
    return request.app.state.hasher


def get_token_issuer(request: Request) -> TokenIssuer:
    return request.app.state.tokens


def get_user_store(db: Session = Depends(get_db)) -> UserStore:
    return UserStore(db)


def get_account_service(
    store: UserStore = Depends(get_user_store),
    hasher: PasswordHasher = Depends(get_password_hasher),
    tokens: TokenIssuer = Depends(get_token_issuer),
) -> AccountService:
    return AccountService(store, hasher, tokens)
