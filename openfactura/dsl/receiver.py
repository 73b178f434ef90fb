"""Receiver (Receptor) value object."""

from typing import Any, ClassVar

from pydantic import AliasChoices, Field

from openfactura.dsl.base import WireModel
from openfactura.shared.attributes import truncate


class Receiver(WireModel):
    """Counterparty of the document.

    All six attributes are required on the wire. Accepts the legacy key
    'rut' for tax_id.
    """

    object_kind: ClassVar[str] = "receiver"
    object_label: ClassVar[str] = "Receiver"
    required_fields: ClassVar[tuple[str, ...]] = (
        "tax_id",
        "business_name",
        "business_activity",
        "contact",
        "address",
        "commune",
    )
    wire_names: ClassVar[dict[str, str]] = {
        "tax_id": "RUTRecep",
        "business_name": "RznSocRecep",
        "business_activity": "GiroRecep",
        "contact": "Contacto",
        "address": "DirRecep",
        "commune": "CmnaRecep",
    }

    tax_id: str | None = Field(None, validation_alias=AliasChoices("tax_id", "rut"))
    business_name: str | None = None
    business_activity: str | None = None
    contact: str | None = None
    address: str | None = None
    commune: str | None = None

    def _render(self) -> dict[str, Any]:
        return {
            "RUTRecep": self.tax_id,
            "RznSocRecep": truncate(self.business_name, 100),
            "GiroRecep": truncate(self.business_activity, 40),
            "Contacto": self.contact,
            "DirRecep": self.address,
            "CmnaRecep": self.commune,
        }
