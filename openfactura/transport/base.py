"""Abstract transport used by the document and organization operations.

Operations only need two calls: get and post, each returning the parsed
response body or raising ApiError (or a status-specific subclass). Keeping
the interface this small lets tests substitute a stub transport.
"""

from abc import ABC, abstractmethod
from typing import Any


class Transport(ABC):
    """Interface for sending requests to the Open Factura API."""

    @abstractmethod
    def get(
        self,
        path: str,
        query: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
    ) -> Any:
        """Perform a GET request.

        Args:
            path: API path, e.g. "/v2/dte/organization"
            query: Query string parameters
            headers: Extra headers merged over the defaults

        Returns:
            Parsed JSON body, or the raw text when the body is not JSON

        Raises:
            ApiError: On non-2xx responses or connection failures
        """
        pass

    @abstractmethod
    def post(
        self,
        path: str,
        body: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
    ) -> Any:
        """Perform a POST request with a JSON body.

        Args:
            path: API path, e.g. "/v2/dte/document"
            body: JSON-serializable request body
            headers: Extra headers merged over the defaults

        Returns:
            Parsed JSON body, or the raw text when the body is not JSON

        Raises:
            ApiError: On non-2xx responses or connection failures
        """
        pass
