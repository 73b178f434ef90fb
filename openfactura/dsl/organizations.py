"""Organization operations: issuer lookup and available folios."""

import logging
from typing import Any

from openfactura.dsl.issuer import Issuer
from openfactura.resources.organization import Organization
from openfactura.transport.base import Transport

logger = logging.getLogger(__name__)

ORGANIZATION_PATH = "/v2/dte/organization"


class Organizations:
    """Operations on the organization owning the API key."""

    def __init__(self, transport: Transport) -> None:
        self._transport = transport

    def current(self, extra_fields: str | None = None) -> Organization:
        """Get the current organization.

        Args:
            extra_fields: Additional fields to include (e.g. "logo")

        Returns:
            Organization with contributor information

        Raises:
            ApiError: If the request fails
        """
        query: dict[str, Any] = {}
        if extra_fields:
            query["extra_fields"] = extra_fields
        payload = self._transport.get(ORGANIZATION_PATH, query=query)
        return Organization.from_payload(payload if isinstance(payload, dict) else {})

    def current_as_issuer(self, extra_fields: str | None = None) -> Issuer:
        """Get the current organization as an Issuer ready for a DTE."""
        organization = self.current(extra_fields=extra_fields)
        return self.build_issuer(organization)

    def documents(self) -> Any:
        """Get authorized document types with their available folios.

        Returns:
            Raw API payload, e.g. {"rut": ..., "documentos": [...]}
        """
        return self._transport.get(f"{ORGANIZATION_PATH}/document")

    @staticmethod
    def build_issuer(organization: Organization) -> Issuer:
        """Derive an Issuer from an organization's primary activity.

        Raises:
            TypeError: If organization is not an Organization
        """
        if not isinstance(organization, Organization):
            raise TypeError("organization must be an Organization object")
        issuer = organization.to_issuer()
        logger.debug(f"Issuer built for {issuer.tax_id} (acteco {issuer.economic_activity_code})")
        return issuer
