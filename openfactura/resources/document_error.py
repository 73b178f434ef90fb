"""Document rejection error reported by the emission endpoint.

The API rejects documents with an envelope of the form
{"error": {"code": "OF-01", "message": "...", "details": [{"field", "issue"}]}}.
Documents.emit upgrades transport errors carrying that envelope into a
DocumentError.
"""

from collections.abc import Mapping
from typing import Any

from openfactura.shared.attributes import compact
from openfactura.shared.errors import OpenFacturaError

ERROR_CODES: dict[str, str] = {
    "OF-01": "Faltan datos obligatorios",
    "OF-02": "Faltan campos obligatorios en el dte",
    "OF-03": "Validación de Permisos",
    "OF-04": "Validación de Firma electrónica",
    "OF-05": "Tipo Dte no soportado",
    "OF-06": "Validación Idempotencia",
    "OF-07": "Validación de Folios",
    "OF-08": "Validación de Esquema",
    "OF-09": "Validación de Relaciones",
    "OF-10": "Validación de Campos",
    "OF-11": "Validación de PDF",
    "OF-12": "Generación XML",
    "OF-13": "Error en DB",
    "OF-20": "Datos de entrada incorrectos",
    "OF-21": "Base de datos no disponible intente más tarde",
    "OF-22": "Problema al procesar los datos",
    "OF-23": (
        "DTE no soportado. Se bloquea envio de RVD(ex RCOF) y la emisión de boletas, "
        "ya sea por que el usuario se encuentra emitiendo con el SII, el usuario solicito "
        "la baja o se esta corrigiendo el folio siguiente del DTE (bloqueo temporal)"
    ),
}


def error_description(code: str | None) -> str:
    """Describe a known error code."""
    if code in ERROR_CODES:
        return ERROR_CODES[code]
    return f"Unknown error code: {code}"


class DocumentError(OpenFacturaError):
    """The API rejected the document.

    Attributes:
        code: API error code (e.g. "OF-01")
        message: API message, or the code description when the API sent none
        details: List of {"field": ..., "issue": ...} dicts
        status_code: HTTP status of the rejecting response, if known
    """

    def __init__(
        self,
        payload: Mapping[str, Any] | None = None,
        status_code: int | None = None,
    ) -> None:
        payload = payload or {}
        error_data = payload.get("error")
        if not isinstance(error_data, Mapping):
            error_data = payload

        self.code: str | None = error_data.get("code")
        self.message: str = error_data.get("message") or error_description(self.code)
        self.details: list[dict[str, Any]] = self._normalize_details(error_data.get("details"))
        self.status_code = status_code
        super().__init__(self.message)

    @staticmethod
    def _normalize_details(details: Any) -> list[dict[str, Any]]:
        if not isinstance(details, list):
            return []
        normalized = []
        for detail in details:
            if not isinstance(detail, Mapping):
                continue
            entry = {"field": detail.get("field"), "issue": detail.get("issue")}
            normalized.append(compact(entry))
        return normalized

    @property
    def has_details(self) -> bool:
        return bool(self.details)

    def error_description(self) -> str:
        return error_description(self.code)

    def details_for_field(self, field_name: str) -> list[dict[str, Any]]:
        """Details whose field matches field_name exactly."""
        return [detail for detail in self.details if detail.get("field") == str(field_name)]

    def error_fields(self) -> list[str]:
        """Unique field names with errors, in first-seen order."""
        fields = [detail["field"] for detail in self.details if detail.get("field")]
        return list(dict.fromkeys(fields))

    def to_dict(self) -> dict[str, Any]:
        data = {
            "message": self.message,
            "code": self.code,
            "description": self.error_description(),
            "details": self.details,
        }
        return compact(data)

    def __str__(self) -> str:
        if self.code:
            return f"[{self.code}] {self.message}"
        return self.message or "Document error"
