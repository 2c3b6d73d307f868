import hmac
import logging
from typing import Annotated

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from app.exceptions import AuthError
from settings import settings

logger = logging.getLogger(__name__)

# auto_error is off so that a missing header can be accepted when no admin token is configured.
security = HTTPBearer(auto_error=False)


async def require_admin(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
) -> None:
    """
    FastAPI dependency guarding the admin endpoints.

    When ADMIN_API_TOKEN is unset the admin endpoints stay open; the admin password then only
    gates the console view on the client side.

    Raises:
        AuthError: If a token is configured and the request does not carry it
    """
    expected = settings.admin.api_token
    if not expected:
        return

    provided = credentials.credentials if credentials else ""
    if not hmac.compare_digest(provided.encode(), expected.encode()):
        logger.warning("Rejected admin request with a missing or invalid bearer token")
        raise AuthError("Invalid admin token.")
