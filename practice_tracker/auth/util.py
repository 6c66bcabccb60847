import uuid
from datetime import datetime, timedelta, timezone
from typing import Union

import jwt
from passlib.context import CryptContext

from practice_tracker.config import Config, Settings
from practice_tracker.errors import InvalidTokenException


def build_password_context(rounds: int) -> CryptContext:
    return CryptContext(schemes=["bcrypt"], bcrypt__rounds=rounds)


passwd_context = build_password_context(Config.BCRYPT_ROUNDS)


def generate_password_hash(password: str) -> str:
    return passwd_context.hash(password)


def verify_password(password: str, password_hash: str) -> bool:
    try:
        return passwd_context.verify(password, password_hash)
    except ValueError:
        # unrecognised or corrupted hash
        return False


class TokenIssuer:
    """Issues and verifies signed, time-limited bearer tokens.

    Verification is stateless: the token is trusted until it expires and
    nothing is looked up in the database. A token therefore cannot be
    revoked server-side; a client "logs out" by discarding it.
    """

    def __init__(self, secret: str, algorithm: str, expiry: timedelta):
        self.secret = secret
        self.algorithm = algorithm
        self.expiry = expiry

    @classmethod
    def from_settings(cls, settings: Settings) -> "TokenIssuer":
        return cls(
            secret=settings.JWT_SECRET,
            algorithm=settings.JWT_ALGORITHM,
            expiry=timedelta(seconds=settings.JWT_ACCESS_TOKEN_EXPIRY),
        )

    def issue(self, user_id: Union[uuid.UUID, str]) -> str:
        now = datetime.now(timezone.utc)
        payload = {
            "sub": str(user_id),
            "iat": now,
            "exp": now + self.expiry,
            "jti": str(uuid.uuid4()),
        }

        return jwt.encode(payload=payload, key=self.secret, algorithm=self.algorithm)

    def verify(self, token: str) -> str:
        """Return the user id embedded in ``token``.

        Raises InvalidTokenException for a bad signature, a malformed token
        or an expired one.
        """
        try:
            token_data = jwt.decode(
                jwt=token,
                key=self.secret,
                algorithms=[self.algorithm],
                options={"require": ["exp", "sub"]},
            )
        except jwt.ExpiredSignatureError:
            raise InvalidTokenException(detail="Token has expired")
        except jwt.PyJWTError:
            raise InvalidTokenException(detail="Invalid token")

        return token_data["sub"]


token_issuer = TokenIssuer.from_settings(Config)
