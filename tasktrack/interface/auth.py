"""Bearer token verification for the API."""

import logging

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from itsdangerous import BadSignature, SignatureExpired, URLSafeTimedSerializer

from tasktrack.core.config import constants
from tasktrack.core.errors import Unauthenticated


logger = logging.getLogger(__name__)

bearer_scheme = HTTPBearer(auto_error=False)


class TokenVerifier:
    """Issue and verify signed bearer tokens carrying a user id."""

    def __init__(self, secret_key: str, *, max_age_seconds: int) -> None:
        self._serializer = URLSafeTimedSerializer(secret_key, salt=constants.TOKEN_SALT)
        self.max_age_seconds = max_age_seconds

    def issue(self, user_id: str) -> str:
        """Sign a token for the given user id."""
        if not user_id:
            msg = "user_id is required"
            raise ValueError(msg)
        return self._serializer.dumps({"sub": user_id})

    def verify(self, token: str | None) -> str:
        """Return the user id carried by a valid token.

        Raises:
            Unauthenticated: If the token is missing, malformed, expired or tampered with
        """
        if not token:
            raise Unauthenticated("No token provided")

        try:
            payload = self._serializer.loads(token, max_age=self.max_age_seconds)
        except SignatureExpired as err:
            logger.warning("auth_token_expired")
            raise Unauthenticated("Token expired") from err
        except BadSignature as err:
            logger.warning("auth_token_invalid")
            raise Unauthenticated("Invalid token") from err

        user_id = payload.get("sub") if isinstance(payload, dict) else None
        if not isinstance(user_id, str) or not user_id:
            logger.warning("auth_token_missing_subject")
            raise Unauthenticated("Invalid token")
        return user_id


def get_token_verifier(request: Request) -> TokenVerifier:
    return request.app.state.verifier


async def get_current_user_id(
    request: Request,
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    verifier: TokenVerifier = Depends(get_token_verifier),
) -> str:
    """Resolve the authenticated user before any route logic runs."""
    if credentials is None:
        logger.warning("auth_missing_bearer", extra={"path": request.url.path})
        raise Unauthenticated("No token provided")
    return verifier.verify(credentials.credentials)
