"""Factory for creating configured Open Factura clients.

Settings are passed explicitly. Several clients (e.g. sandbox and production)
may coexist, and any client accepts an injected Transport.

Example:
    >>> settings = Settings(api_key="...", environment="sandbox")
    >>> client = create_client(settings)
    >>> issuer = client.organizations.current_as_issuer()
    >>> result = client.documents.emit(dte, issuer)
"""

import logging

from openfactura.dsl.documents import Documents
from openfactura.dsl.organizations import Organizations
from openfactura.shared.config import Settings, get_settings
from openfactura.transport.base import Transport
from openfactura.transport.http import HttpTransport

logger = logging.getLogger(__name__)


class OpenFactura:
    """Entry point exposing document and organization operations.

    The HTTP transport is created on first use, so a client can be built
    before the API key is available.
    """

    def __init__(self, settings: Settings, transport: Transport | None = None) -> None:
        self.settings = settings
        self._transport = transport
        self._documents: Documents | None = None
        self._organizations: Organizations | None = None

    @property
    def transport(self) -> Transport:
        if self._transport is None:
            self._transport = HttpTransport(self.settings)
        return self._transport

    @property
    def documents(self) -> Documents:
        if self._documents is None:
            self._documents = Documents(self.transport)
        return self._documents

    @property
    def organizations(self) -> Organizations:
        if self._organizations is None:
            self._organizations = Organizations(self.transport)
        return self._organizations

    def close(self) -> None:
        """Close the HTTP transport if one was opened."""
        if isinstance(self._transport, HttpTransport):
            self._transport.close()


def create_client(
    settings: Settings | None = None,
    transport: Transport | None = None,
) -> OpenFactura:
    """Create a client from settings.

    Args:
        settings: Client settings; read from the environment when omitted
        transport: Transport to use instead of the default HttpTransport

    Returns:
        Configured OpenFactura client
    """
    settings = settings or get_settings()
    logger.info(f"Created Open Factura client for {settings.environment} ({settings.base_url})")
    return OpenFactura(settings, transport=transport)
