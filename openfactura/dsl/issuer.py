"""Issuer (Emisor) value object."""

from typing import Any, ClassVar

from pydantic import AliasChoices, Field

from openfactura.dsl.base import WireModel
from openfactura.shared.attributes import compact, truncate


class Issuer(WireModel):
    """Entity issuing the document.

    Usually built from the organization lookup (see
    Organizations.current_as_issuer) and attached to a Dte by emit.
    branch_code and phone are optional.
    """

    object_kind: ClassVar[str] = "issuer"
    object_label: ClassVar[str] = "Issuer"
    required_fields: ClassVar[tuple[str, ...]] = (
        "tax_id",
        "business_name",
        "business_activity",
        "economic_activity_code",
        "address",
        "commune",
    )
    wire_names: ClassVar[dict[str, str]] = {
        "tax_id": "RUTEmisor",
        "business_name": "RznSoc",
        "business_activity": "GiroEmis",
        "economic_activity_code": "Acteco",
        "address": "DirOrigen",
        "commune": "CmnaOrigen",
        "branch_code": "CdgSIISucur",
    }

    tax_id: str | None = Field(None, validation_alias=AliasChoices("tax_id", "rut"))
    business_name: str | None = None
    business_activity: str | None = None
    economic_activity_code: str | int | None = None
    address: str | None = None
    commune: str | None = None
    branch_code: str | int | None = Field(
        None, validation_alias=AliasChoices("branch_code", "sii_branch_code")
    )
    phone: str | None = None

    def _render(self) -> dict[str, Any]:
        return compact(
            {
                "RUTEmisor": self.tax_id,
                "RznSoc": truncate(self.business_name, 100),
                "GiroEmis": truncate(self.business_activity, 80),
                "Acteco": str(self.economic_activity_code),
                "DirOrigen": self.address,
                "CmnaOrigen": self.commune,
                "CdgSIISucur": None if self.branch_code is None else str(self.branch_code),
                "Telefono": self.phone or None,
            }
        )
