"""Response models for document queries (GET /v2/dte/document/{token}/{value}).

The same endpoint returns five payload shapes depending on the requested
value, so each shape gets its own model:

- json: full document record -> JsonQueryResponse.document
- status: bare status string -> StatusQueryResponse.status (+ minimal document)
- pdf / xml / cedible: {"<value>": "<base64>", "folio": ...} -> content field

DocumentQueryResponse.from_payload picks the model through
QueryResponseRegistry, following the registry pattern used for pluggable
implementations.
"""

import logging
from collections.abc import Mapping
from typing import Any, ClassVar, Literal

from pydantic import BaseModel, ConfigDict

from openfactura.resources.document import Document
from openfactura.resources.encoding import decode_binary, decode_latin1_text
from openfactura.shared.attributes import pick

logger = logging.getLogger(__name__)


class DocumentQueryResponse(BaseModel):
    """Common base for query responses.

    Attributes:
        token: Token the query was made with
        query_type: Normalized (lowercase) query value
    """

    model_config = ConfigDict(coerce_numbers_to_str=True)

    token: str
    query_type: str

    @classmethod
    def from_payload(cls, token: str, query_type: str, payload: Any) -> "DocumentQueryResponse":
        """Decode a query payload into the model for its query type.

        Args:
            token: Document token
            query_type: One of json, status, pdf, xml, cedible (any case)
            payload: Parsed API response (mapping or string)

        Returns:
            Variant instance matching query_type

        Raises:
            ValueError: If query_type is not supported
        """
        normalized = str(query_type).lower()
        variant = QueryResponseRegistry.get_variant_class(normalized)
        return variant.decode(token, payload)

    @classmethod
    def decode(cls, token: str, payload: Any) -> "DocumentQueryResponse":
        raise NotImplementedError

    @property
    def has_document(self) -> bool:
        """True for json and status queries, which carry a Document."""
        return getattr(self, "document", None) is not None

    def content(self) -> Any:
        """Return the field relevant to this query type."""
        raise NotImplementedError

    def decode_pdf(self) -> bytes | None:
        return decode_binary(getattr(self, "pdf", None))

    def decode_xml(self) -> str | None:
        return decode_latin1_text(getattr(self, "xml", None))

    def decode_cedible(self) -> bytes | None:
        return decode_binary(getattr(self, "cedible", None))

    def to_dict(self) -> dict[str, Any]:
        return self.model_dump(exclude_none=True)


class JsonQueryResponse(DocumentQueryResponse):
    """Full document record."""

    query_type: Literal["json"] = "json"
    document: Document
    folio: Any = None

    @classmethod
    def decode(cls, token: str, payload: Any) -> "JsonQueryResponse":
        document = Document.from_payload(payload, token=token)
        return cls(token=token, document=document, folio=document.folio)

    def content(self) -> Document:
        return self.document


class StatusQueryResponse(DocumentQueryResponse):
    """SII status string: Aceptado, Pendiente, Rechazado, Aceptado con Reparo."""

    query_type: Literal["status"] = "status"
    status: str
    document: Document

    @classmethod
    def decode(cls, token: str, payload: Any) -> "StatusQueryResponse":
        status = payload if isinstance(payload, str) else str(payload)
        return cls(token=token, status=status, document=Document(id=token, status=status))

    def content(self) -> str:
        return self.status


class _ContentQueryResponse(DocumentQueryResponse):
    """Base64 content stored under a key named like the query type."""

    content_field: ClassVar[str]

    folio: Any = None

    @classmethod
    def decode(cls, token: str, payload: Any) -> "DocumentQueryResponse":
        field = cls.content_field
        if isinstance(payload, Mapping):
            content = pick(payload, field, field.upper())
            folio = pick(payload, "folio", "FOLIO")
        else:
            logger.debug(f"Query '{field}' for {token} returned raw content")
            content = payload
            folio = None
        return cls(token=token, folio=folio, **{field: content})

    def content(self) -> str | None:
        return getattr(self, self.content_field)


class PdfQueryResponse(_ContentQueryResponse):
    content_field: ClassVar[str] = "pdf"

    query_type: Literal["pdf"] = "pdf"
    pdf: str | None = None


class XmlQueryResponse(_ContentQueryResponse):
    content_field: ClassVar[str] = "xml"

    query_type: Literal["xml"] = "xml"
    xml: str | None = None


class CedibleQueryResponse(_ContentQueryResponse):
    content_field: ClassVar[str] = "cedible"

    query_type: Literal["cedible"] = "cedible"
    cedible: str | None = None


class QueryResponseRegistry:
    """Registry of query types and the models that decode them."""

    _variants: dict[str, type[DocumentQueryResponse]] = {
        "status": StatusQueryResponse,
        "xml": XmlQueryResponse,
        "json": JsonQueryResponse,
        "pdf": PdfQueryResponse,
        "cedible": CedibleQueryResponse,
    }

    @classmethod
    def get_variant_class(cls, query_type: str) -> type[DocumentQueryResponse]:
        """Get the response model for a query type.

        Raises:
            ValueError: If query_type is not registered
        """
        if query_type not in cls._variants:
            available = ", ".join(cls._variants.keys())
            raise ValueError(f"value must be one of: {available}. Got: '{query_type}'")
        return cls._variants[query_type]

    @classmethod
    def list_query_types(cls) -> list[str]:
        return list(cls._variants.keys())
