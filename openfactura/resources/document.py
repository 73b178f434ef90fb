"""Read model for a previously emitted document."""

from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, model_validator

from openfactura.shared.attributes import pick


class Document(BaseModel):
    """Electronic document as reported by the query endpoints.

    Attributes:
        id: API identifier
        dte_id: Document identifier, falls back to id
        type: DTE type code
        status: SII status (e.g. "Aceptado")
        folio: Folio number
        issuer_rut: Issuer tax id
        receiver_rut: Receiver tax id
        amount: Total amount
        tax_amount: Tax (IVA) amount
        created_at: Creation or emission timestamp
        updated_at: Last update timestamp
    """

    model_config = ConfigDict(coerce_numbers_to_str=True)

    id: Any = None
    dte_id: Any = None
    type: Any = None
    status: str | None = None
    folio: Any = None
    issuer_rut: str | None = None
    receiver_rut: str | None = None
    amount: Any = None
    tax_amount: Any = None
    created_at: Any = None
    updated_at: Any = None

    @model_validator(mode="after")
    def _default_dte_id(self) -> "Document":
        if self.dte_id is None:
            self.dte_id = self.id
        return self

    @classmethod
    def from_payload(cls, payload: Any, token: str | None = None) -> "Document":
        """Map a document record, tolerating English and Spanish key spellings.

        Args:
            payload: Record returned by the API; non-mappings decode to an empty document
            token: Query token, used as dte_id when the record has none
        """
        data: Mapping[str, Any] = payload if isinstance(payload, Mapping) else {}
        return cls(
            id=pick(data, "id"),
            dte_id=pick(data, "dte_id", "token", default=token),
            type=pick(data, "type", "tipo_dte"),
            status=pick(data, "status", "estado"),
            folio=pick(data, "folio"),
            issuer_rut=pick(data, "issuer_rut", "rut_emisor"),
            receiver_rut=pick(data, "receiver_rut", "rut_receptor"),
            amount=pick(data, "amount", "monto_total"),
            tax_amount=pick(data, "tax_amount", "iva"),
            created_at=pick(data, "created_at", "fecha_emision"),
            updated_at=pick(data, "updated_at"),
        )

    def to_dict(self) -> dict[str, Any]:
        return self.model_dump(exclude_none=True)
