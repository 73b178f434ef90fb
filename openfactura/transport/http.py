"""HTTP transport for the Open Factura API using httpx.

Features:
- API key and JSON content-type default headers
- Per-request header merging (e.g. Idempotency-Key)
- Status code to exception mapping (401, 404, 429, 5xx, other)
- Timeout configured from settings (default 30 seconds)

No retries are performed here; callers retry emissions safely by reusing
their idempotency key.

HTTPX client reference:
https://www.python-httpx.org/advanced/clients/
"""

import logging
from typing import Any

import httpx

from openfactura.shared.config import Settings
from openfactura.shared.errors import (
    ApiError,
    AuthenticationError,
    NotFoundError,
    RateLimitError,
    ServerError,
    parse_body,
)
from openfactura.transport.base import Transport

logger = logging.getLogger(__name__)

# Non-JSON error bodies longer than this are cut in exception messages
MAX_MESSAGE_BODY = 200


def extract_error_message(body: str) -> str | None:
    """Pull a short message out of an error response body.

    Handles the {"error": {"message", "code"}} envelope, then common
    top-level keys, then non-JSON text.

    Args:
        body: Raw response text

    Returns:
        Message text, or None for an empty body
    """
    if not body:
        return None

    data = parse_body(body)
    if data is None:
        return f"{body[:MAX_MESSAGE_BODY]}..." if len(body) > MAX_MESSAGE_BODY else body

    error_obj = data.get("error")
    if isinstance(error_obj, dict) and error_obj.get("message"):
        message = error_obj["message"]
        code = error_obj.get("code")
        return f"[{code}] {message}" if code else message

    message = data.get("message") or data.get("error") or data.get("detail")
    if isinstance(message, dict):
        message = message.get("message") or message.get("error")
    return str(message) if message else None


class HttpTransport(Transport):
    """httpx-based transport bound to one Open Factura environment."""

    def __init__(self, settings: Settings, client: httpx.Client | None = None) -> None:
        """Initialize transport.

        Args:
            settings: Client settings (API key, environment, timeout)
            client: Pre-built httpx client, mainly for tests (httpx.MockTransport)

        Raises:
            ConfigurationError: If the API key is not configured
        """
        settings.validate_credentials()
        self.settings = settings
        self._client = client or httpx.Client(
            base_url=settings.base_url,
            timeout=settings.timeout,
        )
        self._default_headers = {
            "Content-Type": "application/json",
            "apikey": settings.api_key or "",
        }
        logger.info(f"HTTP transport initialized for {settings.base_url}")

    def get(
        self,
        path: str,
        query: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
    ) -> Any:
        return self._request("GET", path, params=query or None, headers=headers)

    def post(
        self,
        path: str,
        body: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
    ) -> Any:
        return self._request("POST", path, json=body, headers=headers)

    def close(self) -> None:
        """Close the underlying httpx client."""
        self._client.close()

    def __enter__(self) -> "HttpTransport":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def _request(
        self,
        method: str,
        path: str,
        headers: dict[str, str] | None = None,
        **kwargs: Any,
    ) -> Any:
        merged_headers = {**self._default_headers, **(headers or {})}
        logger.info(f"[OpenFactura] {method} {path}")
        if kwargs.get("params"):
            logger.debug(f"[OpenFactura] Query: {kwargs['params']}")
        if headers:
            logger.debug(f"[OpenFactura] Headers: {sorted(headers)}")

        try:
            response = self._client.request(method, path, headers=merged_headers, **kwargs)
        except httpx.TimeoutException as e:
            raise ApiError(f"Request timeout: {e}") from e
        except httpx.HTTPError as e:
            raise ApiError(f"Request failed: {e}") from e

        return self._handle_response(response)

    def _handle_response(self, response: httpx.Response) -> Any:
        """Return the parsed body for 2xx responses, raise otherwise."""
        status = response.status_code
        body = response.text

        if 200 <= status < 300:
            return self._parse_body(response)

        message = extract_error_message(body)
        request = response.request
        logger.warning(f"[OpenFactura] {request.method} {request.url.path} -> {status}")

        if status == 401:
            raise AuthenticationError(
                message or "Authentication failed. Please check your API key.",
                response_body=body,
            )
        if status == 404:
            raise NotFoundError(message or "Resource not found", response_body=body)
        if status == 429:
            raise RateLimitError(message or "Rate limit exceeded", response_body=body)
        if 500 <= status < 600:
            raise ServerError(
                message or f"Server error: {body}",
                status_code=status,
                response_body=body,
            )

        base_message = f"API request failed with status {status}"
        if message:
            base_message = f"{base_message}: {message}"
        raise ApiError(base_message, status_code=status, response_body=body)

    @staticmethod
    def _parse_body(response: httpx.Response) -> Any:
        if not response.content:
            return ""
        try:
            return response.json()
        except ValueError:
            return response.text
