"""
Shared-secret admin login.
"""

from __future__ import annotations

import hmac
import logging

logger = logging.getLogger(__name__)


class AdminAuthenticator:
    """Checks submitted passwords against the configured admin secret."""

    def __init__(self, secret: str):
        self._secret = secret.encode("utf-8", "surrogatepass")

    def verify(self, password: str) -> bool:
        submitted = password.encode("utf-8", "surrogatepass")
        matched = hmac.compare_digest(submitted, self._secret)
        if not matched:
            logger.warning("Rejected admin login attempt")
        return matched
