"""
Vendor REST endpoints, called through the browser context's request API
so the signed-in session cookies are sent along.
"""

import json
import re
from typing import Any, Optional

from playwright.async_api import APIRequestContext, APIResponse
from pydantic import BaseModel

from hellobooks_e2e.error_handling import ApiResponseError
from hellobooks_e2e.monitoring.logger import get_logger

logger = get_logger(__name__)

DELETE_OK_STATUSES = (200, 204)
SUCCESS_BODY_PATTERN = re.compile(r"success|deleted|ok")

_VENDOR_ID_PATTERNS = (
    re.compile(r"vendor-info/([^/?#]+)", re.IGNORECASE),
    re.compile(r"edit-vendor/([^/?#]+)", re.IGNORECASE),
)


def extract_vendor_id(url: str) -> Optional[str]:
    """Vendor id from a ``/vendor-info/{id}`` or ``/edit-vendor/{id}`` URL."""
    for pattern in _VENDOR_ID_PATTERNS:
        match = pattern.search(url)
        if match:
            return match.group(1)
    return None


class ApiResponse(BaseModel):
    """Status and decoded body of one API call."""

    url: str
    status: int
    body: Any = None

    @property
    def body_text(self) -> str:
        if self.body is None:
            return ""
        if isinstance(self.body, str):
            return self.body
        return json.dumps(self.body)

    def indicates_success(self) -> bool:
        """
        True when the body mentions success.

        An empty body also counts, unlike a plain match on the text, so a
        bare 204 from the delete endpoint passes.
        """
        text = self.body_text.lower()
        if not text:
            return True
        return bool(SUCCESS_BODY_PATTERN.search(text))

    def expect_status(self, *statuses: int) -> "ApiResponse":
        """
        Return self when the status is one of ``statuses``.

        Raises:
            ApiResponseError: If the endpoint answered with anything else
        """
        if self.status not in statuses:
            raise ApiResponseError(
                f"Expected status {' or '.join(map(str, statuses))}, got {self.status}",
                url=self.url,
                status=self.status,
                body=self.body,
            )
        return self


class VendorsApi:
    """Thin client for ``/api/vendors``."""

    def __init__(self, request: APIRequestContext, base_url: str) -> None:
        self.request = request
        self.base_url = base_url.rstrip("/")

    def vendor_url(self, vendor_id: str) -> str:
        return f"{self.base_url}/api/vendors/{vendor_id}"

    @staticmethod
    async def _decode(response: APIResponse) -> Any:
        # JSON first, raw text when the body is not JSON
        try:
            return await response.json()
        except (ValueError, UnicodeDecodeError):
            return await response.text()

    async def _send(self, method: str, vendor_id: str) -> ApiResponse:
        url = self.vendor_url(vendor_id)
        response = await self.request.fetch(url, method=method)
        result = ApiResponse(
            url=url,
            status=response.status,
            body=await self._decode(response),
        )
        logger.info(
            f"{method} {url} -> {result.status}",
            extra={"url": url, "status": result.status},
        )
        return result

    async def delete(self, vendor_id: str) -> ApiResponse:
        return await self._send("DELETE", vendor_id)

    async def get(self, vendor_id: str) -> ApiResponse:
        return await self._send("GET", vendor_id)
