"""
Account orchestration: registration, login and profile retrieval.
"""
from dataclasses import dataclass
import logging

from .auth import PasswordHasher, TokenIssuer
from .errors import DuplicateEmail, InvalidCredentials, NotFound
from .schemas import UserOut
from .store import UserStore

logger = logging.getLogger(__name__)


@dataclass
class AuthResult:
    token: str
    user: UserOut


class AccountService:
    def __init__(self, store: UserStore, hasher: PasswordHasher, tokens: TokenIssuer):
        self.store = store
        self.hasher = hasher
        self.tokens = tokens

    def register(self, name: str, email: str, password: str) -> AuthResult:
        """
        Create a user with the default role and issue a token for it.

        The email pre-check only avoids needless hashing; the store's unique
        index still rejects a concurrent duplicate with DuplicateEmail.
        """
        if self.store.find_by_email(email) is not None:
            logger.info(f"[Register] Email already in use: email={email}")
            raise DuplicateEmail()

        password_hash = self.hasher.hash(password)
        user = self.store.create(name=name, email=email, password_hash=password_hash)
        logger.info(f"[Register] New user: user_id={user.id}, email={user.email}")

        token = self.tokens.issue(user.id)
        return AuthResult(token=token, user=UserOut.model_validate(user))

    def login(self, email: str, password: str) -> AuthResult:
        user = self.store.find_by_email(email)
        if not user or not self.hasher.verify(password, user.password):
            # Same failure whether the account exists or not
            logger.info(f"[Login] Failed login: email={email}")
            raise InvalidCredentials()

        logger.info(f"[Login] Successful login: user_id={user.id}, email={user.email}")
        token = self.tokens.issue(user.id)
        return AuthResult(token=token, user=UserOut.model_validate(user))

    def get_profile(self, user_id: str) -> UserOut:
        user = self.store.find_by_id(user_id)
        if user is None:
            raise NotFound()
        return UserOut.model_validate(user)
