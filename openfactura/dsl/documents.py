"""Electronic document operations: emission and lookup by token."""

import logging
import uuid
from typing import Any

from openfactura.dsl.dte import Dte
from openfactura.dsl.issuer import Issuer
from openfactura.dsl.results import OperationResult
from openfactura.resources.document_error import DocumentError
from openfactura.resources.document_query_response import (
    DocumentQueryResponse,
    QueryResponseRegistry,
)
from openfactura.resources.document_response import DocumentResponse
from openfactura.shared.errors import ApiError, ValidationError, error_envelope
from openfactura.transport.base import Transport

logger = logging.getLogger(__name__)

DOCUMENT_PATH = "/v2/dte/document"


def generate_idempotency_key() -> str:
    """Generate a fresh idempotency key (UUID4 string)."""
    return str(uuid.uuid4())


class Documents:
    """Operations on electronic documents (DTE)."""

    def __init__(self, transport: Transport) -> None:
        self._transport = transport

    def emit(
        self,
        dte: Dte,
        issuer: Issuer,
        response: list[str] | None = None,
        custom: dict[str, Any] | None = None,
        iva_exceptional: list[str] | None = None,
        send_email: dict[str, Any] | None = None,
        idempotency_key: str | None = None,
    ) -> OperationResult[DocumentResponse]:
        """Emit a DTE.

        When dte has no issuer, the given issuer is attached to it in place.
        The document is serialized before any request is made, so local
        validation failures never reach the network.

        Args:
            dte: Document to emit
            issuer: Issuer used when the document has none attached
            response: Response types to request (default ["TOKEN"]), e.g.
                ["PDF", "XML", "FOLIO", "TIMBRE", "LOGO", "RESOLUCION"]
            custom: Custom fields (informationNote, paymentNote)
            iva_exceptional: IVA exceptional types (e.g. ["ARTESANO"])
            send_email: Email sending configuration
            idempotency_key: Key for safe retries, generated when omitted

        Returns:
            OperationResult with a DocumentResponse, or a DomainError of kind
            validation, transport or rejection

        Raises:
            TypeError: If dte or issuer have the wrong type
        """
        if not isinstance(dte, Dte):
            raise TypeError("dte must be a Dte object")
        if not isinstance(issuer, Issuer):
            raise TypeError("issuer must be an Issuer object")

        idempotency_key = idempotency_key or generate_idempotency_key()
        if dte.issuer is None:
            dte.issuer = issuer

        try:
            body = self._build_emission_body(
                dte,
                response=response or ["TOKEN"],
                custom=custom,
                iva_exceptional=iva_exceptional,
                send_email=send_email,
            )
        except ValidationError as e:
            logger.warning(f"DTE not sent, local validation failed: {e}")
            return OperationResult[DocumentResponse].failed(e)

        logger.info(f"Emitting DTE type {dte.type} (idempotency key {idempotency_key})")
        try:
            payload = self._transport.post(
                DOCUMENT_PATH,
                body=body,
                headers={"Idempotency-Key": idempotency_key},
            )
        except ApiError as e:
            envelope = error_envelope(e.response_body)
            if envelope is None:
                logger.error(f"DTE emission failed: {e.message}")
                return OperationResult[DocumentResponse].failed(e)
            rejection = DocumentError(envelope, status_code=e.status_code)
            logger.warning(f"DTE rejected by API: {rejection}")
            return OperationResult[DocumentResponse].failed(rejection)

        document_response = DocumentResponse.from_payload(
            payload if isinstance(payload, dict) else {}
        )
        document_response.idempotency_key = idempotency_key
        return OperationResult[DocumentResponse].ok(document_response)

    def find_by_token(
        self, token: str, value: str = "json"
    ) -> OperationResult[DocumentQueryResponse]:
        """Query a previously emitted document.

        Args:
            token: Token returned by emit
            value: One of status, xml, json, pdf, cedible (any case)

        Returns:
            OperationResult with the DocumentQueryResponse variant for value,
            or a DomainError of kind transport

        Raises:
            ValueError: If token is empty or value is not supported
        """
        if not token:
            raise ValueError("token is required")
        query_type = str(value).lower()
        QueryResponseRegistry.get_variant_class(query_type)

        try:
            payload = self._transport.get(f"{DOCUMENT_PATH}/{token}/{query_type}")
        except ApiError as e:
            logger.error(f"Document query {query_type} for {token} failed: {e.message}")
            return OperationResult[DocumentQueryResponse].failed(e)

        query_response = DocumentQueryResponse.from_payload(token, query_type, payload)
        return OperationResult[DocumentQueryResponse].ok(query_response)

    @staticmethod
    def _build_emission_body(
        dte: Dte,
        response: list[str],
        custom: dict[str, Any] | None,
        iva_exceptional: list[str] | None,
        send_email: dict[str, Any] | None,
    ) -> dict[str, Any]:
        body: dict[str, Any] = {"dte": dte.to_wire(), "response": response}
        if custom is not None:
            body["custom"] = custom
        if iva_exceptional is not None:
            body["ivaExceptional"] = iva_exceptional
        if send_email is not None:
            body["sendEmail"] = send_email
        return body
