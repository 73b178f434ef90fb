"""Organization (contributor) read model from GET /v2/dte/organization."""

from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from openfactura.dsl.issuer import Issuer
from openfactura.shared.attributes import compact, pick


class Organization(BaseModel):
    """Issuer metadata registered for the API key.

    The API answers with camelCase keys (razonSocial, cdgSIISucur,
    glosaDescriptiva, ...); snake_case spellings are accepted as fallback.
    Activities keep the API shape:
    {"giro", "actividadEconomica", "codigoActividadEconomica", "actividadPrincipal"}.
    """

    model_config = ConfigDict(coerce_numbers_to_str=True)

    tax_id: str | None = None
    business_name: str | None = None
    email: str | None = None
    phone: str | None = None
    address: str | None = None
    branch_code: str | None = None
    descriptive_activity: str | None = None
    regional_address: str | None = None
    resolution: dict[str, Any] = Field(default_factory=dict)
    trade_name: str | None = None
    website: str | None = None
    branches: list[Any] = Field(default_factory=list)
    activities: list[dict[str, Any]] = Field(default_factory=list)
    commune: str | None = None
    city: str | None = None

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any] | None) -> "Organization":
        data = payload or {}
        branch_code = pick(data, "cdgSIISucur", "cdg_sii_sucur", "codigo_sii_sucursal")
        return cls(
            tax_id=pick(data, "rut"),
            business_name=pick(data, "razonSocial", "razon_social"),
            email=pick(data, "email"),
            phone=pick(data, "telefono"),
            address=pick(data, "direccion"),
            branch_code=None if branch_code is None else str(branch_code),
            descriptive_activity=pick(data, "glosaDescriptiva", "glosa_descriptiva"),
            regional_address=pick(data, "direccionRegional", "direccion_regional"),
            resolution=pick(data, "resolucion", default={}),
            trade_name=pick(data, "nombreFantasia", "nombre_fantasia"),
            website=pick(data, "web", "website"),
            branches=pick(data, "sucursales", default=[]),
            activities=pick(data, "actividades", default=[]),
            commune=pick(data, "comuna"),
            city=pick(data, "ciudad"),
        )

    def primary_activity(self) -> dict[str, Any] | None:
        """First activity flagged actividadPrincipal, else the first activity."""
        for activity in self.activities:
            if activity.get("actividadPrincipal") is True:
                return activity
        return self.activities[0] if self.activities else None

    def to_issuer_hash(self) -> dict[str, Any]:
        """Issuer-shaped attributes derived from the primary activity.

        Falls back to the descriptive activity text when the organization
        has no activities.
        """
        activity = self.primary_activity() or {}
        business_activity = pick(activity, "giro") or self.descriptive_activity
        code = pick(activity, "codigoActividadEconomica", "codigo_actividad_economica")

        issuer = {
            "tax_id": self.tax_id,
            "business_name": self.business_name,
            "business_activity": business_activity,
            "economic_activity_code": code,
            "address": self.address,
            "commune": self.commune,
            "branch_code": self.branch_code,
            "phone": self.phone,
        }
        return compact(issuer)

    def to_issuer(self) -> Issuer:
        return Issuer.from_input(self.to_issuer_hash())

    def to_dict(self) -> dict[str, Any]:
        return self.model_dump(exclude_none=True)
