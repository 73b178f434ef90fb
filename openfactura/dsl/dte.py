"""DTE (electronic tax document) aggregate.

Composes the value objects into the document sent to POST /v2/dte/document.
Type and emission date are checked eagerly, on construction and on every
reassignment; the value objects are checked when the wire payload is built.
"""

import re
from collections.abc import Iterable, Mapping
from datetime import date
from typing import Any

from openfactura.dsl.dte_item import DteItem
from openfactura.dsl.issuer import Issuer
from openfactura.dsl.receiver import Receiver
from openfactura.dsl.totals import Totals

DTE_TYPE_NAMES: dict[int, str] = {
    33: "Factura Electrónica",
    34: "Factura No Afecta o Exenta Electrónica",
    43: "Liquidación-Factura Electrónica",
    46: "Factura de Compra Electrónica",
    52: "Guía de Despacho Electrónica",
    56: "Nota de Débito Electrónica",
    61: "Nota de Crédito Electrónica",
    110: "Factura de Exportación Electrónica",
    111: "Nota de Débito de Exportación Electrónica",
    112: "Nota de Crédito de Exportación Electrónica",
}
VALID_DTE_TYPES: tuple[int, ...] = tuple(DTE_TYPE_NAMES)

MIN_EMISSION_DATE = date(2003, 4, 1)
MAX_EMISSION_DATE = date(2050, 12, 31)

_DATE_FORMAT = re.compile(r"\d{4}-\d{2}-\d{2}")


def validate_dte_type(value: Any) -> int:
    """Check a DTE type code against the supported set.

    Raises:
        ValueError: If value is None or not a supported code
    """
    if value is None:
        raise ValueError("type is required")
    if isinstance(value, bool) or value not in VALID_DTE_TYPES:
        valid = ", ".join(str(code) for code in VALID_DTE_TYPES)
        raise ValueError(f"Invalid DTE type: {value}. Valid types are: {valid}")
    return int(value)


def validate_emission_date(value: str | date) -> str:
    """Check an emission date and normalize it to YYYY-MM-DD.

    Args:
        value: ISO date string or datetime.date

    Returns:
        The date as a YYYY-MM-DD string

    Raises:
        ValueError: With a distinct message for bad format, impossible
            calendar date, or a date outside 2003-04-01..2050-12-31
    """
    date_string = value.strftime("%Y-%m-%d") if isinstance(value, date) else str(value)

    if not _DATE_FORMAT.fullmatch(date_string):
        raise ValueError(
            f"Invalid emission_date format: {date_string}. Expected format: YYYY-MM-DD"
        )

    try:
        parsed = date.fromisoformat(date_string)
    except ValueError as e:
        raise ValueError(f"Invalid emission_date: {date_string}. {e}") from e

    if parsed < MIN_EMISSION_DATE:
        raise ValueError(
            f"Invalid emission_date: {date_string}. "
            f"Date must be >= {MIN_EMISSION_DATE.isoformat()}"
        )
    if parsed > MAX_EMISSION_DATE:
        raise ValueError(
            f"Invalid emission_date: {date_string}. "
            f"Date must be <= {MAX_EMISSION_DATE.isoformat()}"
        )
    return date_string


class Dte:
    """Electronic tax document ready to be emitted.

    The Dte owns its receiver, totals and items. The issuer may be shared;
    Documents.emit attaches one in place when none is set.
    """

    def __init__(
        self,
        type: int,
        receiver: Receiver | Mapping[str, Any] | None = None,
        items: Iterable[DteItem | Mapping[str, Any]] | None = None,
        totals: Totals | Mapping[str, Any] | None = None,
        emission_date: str | date | None = None,
        folio: int | None = None,
        issuer: Issuer | Mapping[str, Any] | None = None,
        purchase_transaction_type: int | None = None,
        sale_transaction_type: int | None = None,
        payment_form: int | None = None,
    ) -> None:
        self.type = type
        self.folio = folio if folio is not None else 0
        self.emission_date = emission_date if emission_date is not None else date.today()
        self.purchase_transaction_type = purchase_transaction_type
        self.sale_transaction_type = sale_transaction_type
        self.payment_form = payment_form

        self.receiver = Receiver.from_input(receiver if receiver is not None else {})
        self.items = [DteItem.from_input(item) for item in (items or [])]
        self.totals = Totals.from_input(totals if totals is not None else {})
        self.issuer = Issuer.from_input(issuer) if issuer is not None else None

    @classmethod
    def from_input(cls, value: "Dte | Mapping[str, Any]") -> "Dte":
        """Build a Dte from a mapping of attributes, or return a Dte unchanged.

        Raises:
            TypeError: If value is neither a Dte nor a mapping
        """
        if isinstance(value, cls):
            return value
        if not isinstance(value, Mapping):
            raise TypeError(f"dte must be a Dte or a mapping, got {type(value).__name__}")
        return cls(
            type=value.get("type"),  # type: ignore[arg-type]
            receiver=value.get("receiver"),
            items=value.get("items"),
            totals=value.get("totals"),
            emission_date=value.get("emission_date"),
            folio=value.get("folio"),
            issuer=value.get("issuer"),
            purchase_transaction_type=value.get("purchase_transaction_type"),
            sale_transaction_type=value.get("sale_transaction_type"),
            payment_form=value.get("payment_form"),
        )

    @property
    def type(self) -> int:
        return self._type

    @type.setter
    def type(self, value: int) -> None:
        self._type = validate_dte_type(value)

    @property
    def emission_date(self) -> str:
        return self._emission_date

    @emission_date.setter
    def emission_date(self, value: str | date) -> None:
        self._emission_date = validate_emission_date(value)

    @property
    def type_name(self) -> str:
        return DTE_TYPE_NAMES[self._type]

    def to_wire(self) -> dict[str, Any]:
        """Assemble the document in API format.

        Returns:
            {"Encabezado": {"IdDoc", "Receptor", "Totales"[, "Emisor"]}, "Detalle": [...]}

        Raises:
            ValidationError: Propagated from any value object with blank
                required fields
        """
        id_doc: dict[str, Any] = {
            "TipoDTE": self._type,
            "Folio": self.folio,
            "FchEmis": self._emission_date,
        }
        if self.purchase_transaction_type is not None:
            id_doc["TpoTranCompra"] = self.purchase_transaction_type
        if self.sale_transaction_type is not None:
            id_doc["TpoTranVenta"] = self.sale_transaction_type
        if self.payment_form is not None:
            id_doc["FmaPago"] = self.payment_form

        header: dict[str, Any] = {
            "IdDoc": id_doc,
            "Receptor": self.receiver.to_wire(),
            "Totales": self.totals.to_wire(),
        }
        if self.issuer is not None:
            header["Emisor"] = self.issuer.to_wire()

        return {
            "Encabezado": header,
            "Detalle": [item.to_wire() for item in self.items],
        }

    def to_hash(self) -> dict[str, Any]:
        """Alias of to_wire()."""
        return self.to_wire()

    def __repr__(self) -> str:
        return (
            f"Dte(type={self._type}, folio={self.folio}, "
            f"emission_date={self._emission_date!r}, items={len(self.items)})"
        )
