import hmac
import logging

from settings import settings

logger = logging.getLogger(__name__)


class AdminGate:
    """
    Password check that unlocks the admin console view.

    This only switches local view state. It does not authorize API calls; the server-side
    boundary is the optional ADMIN_API_TOKEN bearer token.
    """

    def __init__(self, password: str | None = None) -> None:
        self._password = password if password is not None else settings.admin.password

    def check(self, candidate: str) -> bool:
        if not self._password:
            logger.warning("Admin login attempted but no ADMIN_PASSWORD is configured")
            return False
        return hmac.compare_digest(candidate.encode(), self._password.encode())
