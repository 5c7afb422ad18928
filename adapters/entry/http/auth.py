from __future__ import annotations

import hmac
import logging
from typing import Optional

from fastapi import Header, Request

from core.domain.exceptions import UnauthorizedError

API_KEY_HEADER = "X-API-Key"

logger = logging.getLogger(__name__)


class ApiKeyGate:
    """
    Decides whether a request to a protected route may proceed.

    Two modes, fixed at construction:
    - no key configured: every request passes (development only)
    - key configured: the X-API-Key header must match, compared in constant time
    """

    def __init__(self, api_key: Optional[str]) -> None:
        self._api_key = api_key or None

    @property
    def enabled(self) -> bool:
        return self._api_key is not None

    def check(self, presented: Optional[str]) -> None:
        """
        Raises:
            UnauthorizedError: "API key required" when the header is missing,
                "Invalid API key" when it does not match.
        """
        if self._api_key is None:
            return
        if presented is None:
            logger.warning("API key required but not provided")
            raise UnauthorizedError("API key required")
        if not hmac.compare_digest(presented.encode("utf-8"), self._api_key.encode("utf-8")):
            logger.warning("Invalid API key provided")
            raise UnauthorizedError("Invalid API key")


async def require_api_key(
    request: Request,
    x_api_key: Optional[str] = Header(default=None, alias=API_KEY_HEADER),
) -> None:
    """
    Route dependency for mutating endpoints.
    """
    gate: ApiKeyGate = request.app.state.api_key_gate
    gate.check(x_api_key)
