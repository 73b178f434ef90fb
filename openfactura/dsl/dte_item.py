"""DTE line item (Detalle) value object."""

from typing import Any, ClassVar

from openfactura.dsl.base import NumberLike, WireModel
from openfactura.shared.attributes import compact


class DteItem(WireModel):
    """One invoice line.

    line_number, name, quantity and price are required; zero is a valid
    quantity or price. amount and description are sent only when set, and
    IndExe only when the line is exempt.
    """

    object_kind: ClassVar[str] = "dte_item"
    object_label: ClassVar[str] = "DteItem"
    required_fields: ClassVar[tuple[str, ...]] = ("line_number", "name", "quantity", "price")
    wire_names: ClassVar[dict[str, str]] = {
        "line_number": "NroLinDet",
        "name": "NmbItem",
        "quantity": "QtyItem",
        "price": "PrcItem",
        "amount": "MontoItem",
    }

    line_number: NumberLike = None
    name: str | None = None
    quantity: NumberLike = None
    price: NumberLike = None
    amount: NumberLike = None
    description: str | None = None
    exempt: bool | None = None

    def _render(self) -> dict[str, Any]:
        item = compact(
            {
                "NroLinDet": self.line_number,
                "NmbItem": self.name,
                "QtyItem": self.quantity,
                "PrcItem": self.price,
                "MontoItem": self.amount,
            }
        )
        if self.description:
            item["DscItem"] = self.description
        if self.exempt:
            item["IndExe"] = 1
        return item
