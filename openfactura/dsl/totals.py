"""Totals (Totales) value object."""

from decimal import Decimal, InvalidOperation
from typing import Any, ClassVar

from openfactura.dsl.base import NumberLike, WireModel
from openfactura.shared.errors import ValidationError


class Totals(WireModel):
    """Monetary summary of the document.

    Only total_amount is required, so exempt documents (no net amount or
    tax) validate. Amounts are sent as whole pesos; the tax rate is sent as
    a string.
    """

    object_kind: ClassVar[str] = "totals"
    object_label: ClassVar[str] = "Totals"
    required_fields: ClassVar[tuple[str, ...]] = ("total_amount",)
    wire_names: ClassVar[dict[str, str]] = {
        "total_amount": "MntTotal",
        "net_amount": "MntNeto",
        "tax_amount": "IVA",
        "exempt_amount": "MntExe",
        "tax_rate": "TasaIVA",
        "period_amount": "MontoPeriodo",
        "amount_to_pay": "VlrPagar",
    }

    # Semantic name -> wire name for the integer amounts, in wire order
    amount_fields: ClassVar[tuple[tuple[str, str], ...]] = (
        ("total_amount", "MntTotal"),
        ("net_amount", "MntNeto"),
        ("tax_amount", "IVA"),
        ("exempt_amount", "MntExe"),
    )
    payment_fields: ClassVar[tuple[tuple[str, str], ...]] = (
        ("period_amount", "MontoPeriodo"),
        ("amount_to_pay", "VlrPagar"),
    )

    total_amount: NumberLike = None
    net_amount: NumberLike = None
    tax_amount: NumberLike = None
    exempt_amount: NumberLike = None
    tax_rate: NumberLike = None
    period_amount: NumberLike = None
    amount_to_pay: NumberLike = None

    def _render(self) -> dict[str, Any]:
        totals: dict[str, Any] = {}
        invalid: list[str] = []

        def add_amount(name: str, wire_name: str) -> None:
            value = getattr(self, name)
            if value is None or (isinstance(value, str) and not value.strip()):
                return
            try:
                totals[wire_name] = int(Decimal(str(value).strip()))
            except (InvalidOperation, ValueError, OverflowError):
                invalid.append(name)

        for name, wire_name in self.amount_fields:
            add_amount(name, wire_name)
        if self.tax_rate is not None and str(self.tax_rate).strip():
            totals["TasaIVA"] = str(self.tax_rate).strip()
        for name, wire_name in self.payment_fields:
            add_amount(name, wire_name)

        if invalid:
            raise ValidationError(
                f"Totals validation failed: Invalid numeric fields: {', '.join(invalid)}",
                errors={self.object_kind: invalid},
            )
        return totals
