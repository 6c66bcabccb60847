from fastapi import Depends, Request

from practice_tracker.errors import AuthenticationException

from .service import UserService
from .util import TokenIssuer, token_issuer


def get_token_issuer() -> TokenIssuer:
    return token_issuer


def get_user_service() -> UserService:
    return UserService()


class TokenFromHeader:
    """Dependency gating a route behind a bearer token.

    Accepts either the raw token or ``Bearer <token>`` in the header. The
    resolved user id is stored on ``request.state.user_id`` and returned.
    """

    def __init__(self, header_name: str = "Authorization"):
        self.header_name = header_name

    async def __call__(
        self, request: Request, issuer: TokenIssuer = Depends(get_token_issuer)
    ) -> str:
        raw = request.headers.get(self.header_name)
        token = raw.strip() if raw else ""
        if token[:7].lower() == "bearer ":
            token = token[7:].strip()

        if not token:
            raise AuthenticationException(detail="Access denied. No token provided")

        user_id = issuer.verify(token)
        request.state.user_id = user_id
        return user_id


require_user_id = TokenFromHeader()
