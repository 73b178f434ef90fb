"""Response model for document emission (POST /v2/dte/document)."""

from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict

from openfactura.resources.encoding import decode_binary, decode_latin1_text
from openfactura.shared.attributes import pick


class DocumentResponse(BaseModel):
    """Result of a successful emission call.

    Which fields are populated depends on the response types requested
    (TOKEN, FOLIO, RESOLUCION, XML, PDF, TIMBRE, LOGO).

    Attributes:
        token: Document token used for later queries
        folio: Folio assigned by the API
        resolution: SII resolution, {"fecha": ..., "numero": ...}
        xml: Base64 XML (ISO-8859-1)
        pdf: Base64 PDF
        stamp: Base64 stamp (timbre) image
        logo: Base64 logo image
        warning: Non-fatal warning reported by the API
        idempotency_key: Key sent with the request, attached after decoding
    """

    model_config = ConfigDict(coerce_numbers_to_str=True)

    token: str | None = None
    folio: int | None = None
    resolution: Any = None
    xml: str | None = None
    pdf: str | None = None
    stamp: str | None = None
    logo: str | None = None
    warning: str | None = None
    idempotency_key: str | None = None

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any] | None) -> "DocumentResponse":
        """Decode an emission payload.

        Uppercase API keys take precedence over lowercase spellings.
        """
        data = payload or {}
        return cls(
            token=pick(data, "TOKEN", "token"),
            folio=pick(data, "FOLIO", "folio"),
            resolution=pick(data, "RESOLUCION", "resolucion", "resolution"),
            xml=pick(data, "XML", "xml"),
            pdf=pick(data, "PDF", "pdf"),
            stamp=pick(data, "TIMBRE", "timbre", "stamp"),
            logo=pick(data, "LOGO", "logo"),
            warning=pick(data, "WARNING", "warning"),
            idempotency_key=pick(data, "idempotency_key"),
        )

    @property
    def success(self) -> bool:
        """True when the API returned a token."""
        return self.token is not None

    def decode_xml(self) -> str | None:
        return decode_latin1_text(self.xml)

    def decode_pdf(self) -> bytes | None:
        return decode_binary(self.pdf)

    def decode_stamp(self) -> bytes | None:
        return decode_binary(self.stamp)

    def decode_timbre(self) -> bytes | None:
        """Alias of decode_stamp()."""
        return self.decode_stamp()

    def decode_logo(self) -> bytes | None:
        return decode_binary(self.logo)

    def to_dict(self) -> dict[str, Any]:
        return self.model_dump(exclude_none=True)
