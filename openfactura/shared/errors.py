"""Exception hierarchy for the Open Factura client.

Two families share the OpenFacturaError root:
- Local failures (ValidationError, ConfigurationError) raised before any
  network activity.
- Transport failures (ApiError and its status-specific subclasses) carrying
  the HTTP status code and the raw response body.

Document rejections reported by the API live in
openfactura.resources.document_error.
"""

import json
from typing import Any

# Raw bodies longer than this are cut when rendered into error messages
MAX_BODY_PREVIEW = 500


class OpenFacturaError(Exception):
    """Base error for everything raised by this library."""


class ConfigurationError(OpenFacturaError):
    """Settings cannot be used to reach the API (e.g. missing API key)."""


class ValidationError(OpenFacturaError):
    """A value object is missing required fields.

    Attributes:
        errors: Offending field names keyed by object kind,
            e.g. {"receiver": ["business_activity", "contact"]}
    """

    def __init__(self, message: str, errors: dict[str, list[str]] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.errors = errors or {}


def parse_body(body: Any) -> dict[str, Any] | None:
    """Interpret a response body as a JSON object.

    Args:
        body: Parsed dict or raw JSON string

    Returns:
        The body as a dict, or None if it is neither a dict nor a JSON object string
    """
    if isinstance(body, dict):
        return body
    if isinstance(body, (str, bytes)) and body:
        try:
            parsed = json.loads(body)
        except ValueError:
            return None
        return parsed if isinstance(parsed, dict) else None
    return None


def error_envelope(body: Any) -> dict[str, Any] | None:
    """Extract the {"error": {...}} envelope from a response body.

    Args:
        body: Parsed dict or raw JSON string

    Returns:
        The outer body when its "error" key holds an object, otherwise None
    """
    data = parse_body(body)
    if data is None or not isinstance(data.get("error"), dict):
        return None
    return data


def format_details(details: list[Any]) -> str:
    """Render envelope details as a bulleted "field: issue" list."""
    lines = []
    for detail in details:
        if isinstance(detail, dict) and detail.get("field") and detail.get("issue"):
            lines.append(f"{detail['field']}: {detail['issue']}")
        else:
            lines.append(str(detail))
    return "\n  - ".join(lines)


class ApiError(OpenFacturaError):
    """The API answered with a non-2xx status or could not be reached.

    Attributes:
        status_code: HTTP status code, None for connection failures
        response_body: Parsed or raw body returned by the API
    """

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        response_body: Any = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.response_body = response_body

    def __str__(self) -> str:
        base_message = super().__str__()
        if not self.response_body:
            return base_message

        details = self.extract_error_details()
        if details:
            return f"{base_message}\n{details}"

        if isinstance(self.response_body, str):
            body = self.response_body
            if len(body) > MAX_BODY_PREVIEW:
                body = f"{body[:MAX_BODY_PREVIEW]}..."
            return f"{base_message}\nResponse: {body}"
        return base_message

    def extract_error_details(self) -> str | None:
        """Format the error information found in the response body.

        Handles the Open Factura envelope
        {"error": {"message": ..., "code": ..., "details": [...]}} and falls
        back to common top-level keys (message, error, detail, details).

        Returns:
            Human readable description, or None if nothing useful was found
        """
        data = parse_body(self.response_body)
        if data is None:
            return None

        error_obj = data.get("error")
        if isinstance(error_obj, dict):
            message = error_obj.get("message")
            code = error_obj.get("code")
            details = error_obj.get("details") or []

            if isinstance(details, list) and details:
                parts = []
                if message:
                    parts.append(f"[{code}] {message}" if code else message)
                parts.append(f"Details:\n  - {format_details(details)}")
                return "\n".join(parts)

            if message:
                return f"[{code}] {message}" if code else message

        message = data.get("message") or data.get("error") or data.get("detail")
        if isinstance(message, dict):
            message = message.get("message") or message.get("error")

        details = data.get("details")
        if isinstance(details, list) and details:
            rendered = ", ".join(str(d) for d in details)
            if message:
                return f"Error: {message}\nDetails: {rendered}"
            return f"Details: {rendered}"

        if message:
            return f"Error: {message}"

        relevant = [
            key
            for key in data
            if any(word in key.lower() for word in ("error", "message", "detail", "validation", "field"))
        ]
        if relevant:
            info = ", ".join(f"{key}: {data[key]}" for key in relevant)
            return f"Error details: {info}"
        return None


class AuthenticationError(ApiError):
    """HTTP 401: the API key was rejected."""

    def __init__(
        self,
        message: str = "Authentication failed. Please check your API key.",
        response_body: Any = None,
    ) -> None:
        super().__init__(message, status_code=401, response_body=response_body)


class NotFoundError(ApiError):
    """HTTP 404: the requested resource does not exist."""

    def __init__(self, message: str = "Resource not found", response_body: Any = None) -> None:
        super().__init__(message, status_code=404, response_body=response_body)


class RateLimitError(ApiError):
    """HTTP 429: too many requests."""

    def __init__(self, message: str = "Rate limit exceeded", response_body: Any = None) -> None:
        super().__init__(message, status_code=429, response_body=response_body)


class ServerError(ApiError):
    """HTTP 5xx: the API failed to process the request."""

    def __init__(
        self,
        message: str = "Internal server error",
        status_code: int = 500,
        response_body: Any = None,
    ) -> None:
        super().__init__(message, status_code=status_code, response_body=response_body)
