from passlib.context import CryptContext
from datetime import datetime, timedelta, timezone
import jwt
import logging

from .config import Settings
from .errors import TokenExpired, TokenMalformed, TokenSignatureInvalid

logger = logging.getLogger(__name__)


class PasswordHasher:
    """Salted, deliberately slow one-way password hashing."""

    def __init__(self, rounds: int = 29000):
        # Use pbkdf2_sha256 to avoid external bcrypt backend issues in some environments
        self.context = CryptContext(
            schemes=["pbkdf2_sha256"],
            deprecated="auto",
            pbkdf2_sha256__rounds=rounds,
        )

    def hash(self, password: str) -> str:
        return self.context.hash(password)

    def verify(self, plain_password: str, hashed_password: str) -> bool:
        if not hashed_password:
            return False
        try:
            return self.context.verify(plain_password, hashed_password)
        except (ValueError, TypeError):
            # Stored value is not a recognizable hash
            return False


class TokenIssuer:
    """
    Issues and verifies signed bearer tokens carrying a user id.

    The secret is fixed for the lifetime of the issuer; there is no key
    rotation and no revocation list.
    """

    def __init__(self, secret: str, algorithm: str = "HS256", expire_minutes: int = 60):
        self.secret = secret
        self.algorithm = algorithm
        self.expire_minutes = expire_minutes

    @classmethod
    def from_settings(cls, settings: Settings) -> "TokenIssuer":
        return cls(
            secret=settings.JWT_SECRET,
            algorithm=settings.JWT_ALGORITHM,
            expire_minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES,
        )

    def issue(self, user_id: str) -> str:
        now = datetime.now(timezone.utc)
        payload = {
            "sub": str(user_id),
            "iat": now,
            "exp": now + timedelta(minutes=self.expire_minutes),
        }
        return jwt.encode(payload, self.secret, algorithm=self.algorithm)

    def verify(self, token: str) -> str:
        """
        Verify signature and expiry, returning the user id.

        Raises:
            TokenExpired: the token is past its expiry
            TokenSignatureInvalid: the signature does not match the secret
            TokenMalformed: the token cannot be decoded or carries no subject
        """
        try:
            payload = jwt.decode(
                token,
                self.secret,
                algorithms=[self.algorithm],
                options={"require": ["exp", "sub"]},
            )
        except jwt.ExpiredSignatureError as exc:
            raise TokenExpired() from exc
        except jwt.InvalidSignatureError as exc:
            raise TokenSignatureInvalid() from exc
        except jwt.InvalidTokenError as exc:
            raise TokenMalformed(detail=str(exc)) from exc

        user_id = payload.get("sub")
        if not isinstance(user_id, str) or not user_id:
            raise TokenMalformed(detail="missing subject")
        return user_id
