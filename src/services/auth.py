"""Authentication service for JWT and password handling."""

import logging
from collections.abc import Callable
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from functools import lru_cache

from jose import JOSEError, jwt
from passlib.context import CryptContext
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from src.config import get_settings
from src.models.user import User
from src.services.errors import (
    BadSignature,
    DuplicateIdentity,
    Expired,
    InvalidCredentials,
    MalformedToken,
    Unauthenticated,
    UnknownPrincipal,
)

logger = logging.getLogger(__name__)

# Password hashing context
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


def verify_password(plain_password: str, hashed_password: str | None) -> bool:
    """Verify a password against its hash.

    A hash that cannot be parsed counts as a mismatch.
    """
    if not hashed_password:
        return False
    try:
        return pwd_context.verify(plain_password, hashed_password)
    except (ValueError, TypeError):
        logger.warning("Stored password hash could not be parsed")
        return False


def get_password_hash(password: str) -> str:
    """Hash a password."""
    return pwd_context.hash(password)


@dataclass(frozen=True)
class AuthenticatedIdentity:
    """The caller of a single request, resolved from a verified token."""

    user_id: int
    username: str


class TokenService:
    """Mints and verifies stateless bearer tokens.

    Tokens are JWTs carrying ``sub`` (username), ``iat`` and ``exp``. The
    secret is fixed for the lifetime of the instance; changing it invalidates
    every token issued before.
    """

    def __init__(
        self,
        secret: str,
        algorithm: str = "HS256",
        expiration_minutes: int = 1440,
        clock: Callable[[], datetime] | None = None,
    ):
        self._secret = secret
        self._algorithm = algorithm
        self.ttl = timedelta(minutes=expiration_minutes)
        self._clock = clock or (lambda: datetime.now(UTC))

    def issue(self, username: str) -> str:
        """Create a signed token for ``username`` expiring after the configured TTL."""
        issued_at = self._clock()
        claims = {
            "sub": username,
            "iat": issued_at,
            "exp": issued_at + self.ttl,
        }
        return jwt.encode(claims, self._secret, algorithm=self._algorithm)

    def verify(self, token: str) -> str:
        """Validate ``token`` and return the username it was issued for.

        Raises:
            MalformedToken: not a JWT, or ``sub``/``exp`` missing or mistyped.
            BadSignature: signature or algorithm does not match this server.
            Expired: the current time is at or past ``exp``.
        """
        try:
            claims = jwt.get_unverified_claims(token)
        except JOSEError as e:
            raise MalformedToken() from e

        username = claims.get("sub")
        expires_at = claims.get("exp")
        if not isinstance(username, str) or not username:
            raise MalformedToken()
        if isinstance(expires_at, bool) or not isinstance(expires_at, int | float):
            raise MalformedToken()

        # Signature first, so a tampered token never reports as merely expired
        try:
            jwt.decode(
                token,
                self._secret,
                algorithms=[self._algorithm],
                options={"verify_exp": False},
            )
        except JOSEError as e:
            raise BadSignature() from e

        if self._clock().timestamp() >= expires_at:
            raise Expired()

        return username


@lru_cache
def get_token_service() -> TokenService:
    """Get the process-wide token service built from settings."""
    settings = get_settings()
    return TokenService(
        secret=settings.jwt_secret,
        algorithm=settings.jwt_algorithm,
        expiration_minutes=settings.jwt_expiration_minutes,
    )


def get_user_by_username(db: Session, username: str) -> User | None:
    """Get a user by username."""
    return db.query(User).filter(User.username == username).first()


def get_user_by_email(db: Session, email: str) -> User | None:
    """Get a user by email."""
    return db.query(User).filter(User.email == email).first()


def authenticate_user(db: Session, username: str, password: str) -> User:
    """Check a username/password pair.

    Unknown usernames and wrong passwords raise the same ``InvalidCredentials``.
    """
    user = get_user_by_username(db, username)
    if not user:
        # Keep timing similar to a real verify
        pwd_context.dummy_verify()
        raise InvalidCredentials()
    if not verify_password(password, user.password_hash):
        raise InvalidCredentials()
    return user


def login_user(
    db: Session, token_service: TokenService, username: str, password: str
) -> tuple[User, str]:
    """Authenticate and mint a token. Logs the outcome either way."""
    try:
        user = authenticate_user(db, username, password)
    except InvalidCredentials:
        logger.warning(f"Failed login attempt for user: {username!r}")
        raise
    logger.info(f"Successful login for user: {username!r}")
    return user, token_service.issue(user.username)


def resolve_identity(
    db: Session, token_service: TokenService, token: str | None
) -> AuthenticatedIdentity:
    """Turn a bearer token into the caller's identity.

    Raises ``Unauthenticated`` without a token, an ``InvalidToken`` subtype when
    verification fails and ``UnknownPrincipal`` if the user has been removed.
    """
    if not token:
        raise Unauthenticated()

    username = token_service.verify(token)

    user = get_user_by_username(db, username)
    if user is None:
        logger.warning(f"Token presented for unknown user: {username}")
        raise UnknownPrincipal()

    return AuthenticatedIdentity(user_id=user.id, username=user.username)


def create_user(db: Session, username: str, email: str, password: str) -> User:
    """Create a new user.

    Raises ``DuplicateIdentity`` if the username or email is taken.
    """
    if get_user_by_username(db, username):
        raise DuplicateIdentity(f"Username already exists: {username}")
    if get_user_by_email(db, email):
        raise DuplicateIdentity(f"Email already exists: {email}")

    user = User(username=username, email=email, password_hash=get_password_hash(password))
    db.add(user)
    try:
        db.commit()
    except IntegrityError:
        # Lost a race with a concurrent registration
        db.rollback()
        raise DuplicateIdentity("Username or email already exists") from None
    db.refresh(user)
    logger.info(f"Registered user: {username}")
    return user
