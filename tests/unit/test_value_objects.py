"""Unit tests for the DTE value objects.

Tests cover:
- Construction from keyword arguments and mappings (including legacy keys)
- Wire rendering and abbreviation mapping
- Omission of absent optional fields
- Required-field validation (None, empty and whitespace strings, zero)
"""

from typing import Any

import pytest

from openfactura.dsl.dte_item import DteItem
from openfactura.dsl.issuer import Issuer
from openfactura.dsl.receiver import Receiver
from openfactura.dsl.totals import Totals
from openfactura.shared.errors import ValidationError


@pytest.fixture
def receiver_data() -> dict[str, Any]:
    return {
        "tax_id": "76430498-5",
        "business_name": "HOSTY SPA",
        "business_activity": "ACTIVIDADES DE CONSULTORIA",
        "contact": "Juan Pérez",
        "address": "ARTURO PRAT 527",
        "commune": "Curicó",
    }


@pytest.fixture
def issuer_data() -> dict[str, Any]:
    return {
        "tax_id": "76795561-8",
        "business_name": "HAULMER SPA",
        "business_activity": "VENTA AL POR MENOR",
        "economic_activity_code": 479100,
        "address": "ARTURO PRAT 527",
        "commune": "Curicó",
    }


class TestReceiver:
    """Test Receiver construction and wire rendering."""

    def test_to_wire_maps_all_fields(self, receiver_data: dict[str, Any]) -> None:
        """Should map semantic names to the API abbreviations."""
        receiver = Receiver(**receiver_data)

        assert receiver.to_wire() == {
            "RUTRecep": "76430498-5",
            "RznSocRecep": "HOSTY SPA",
            "GiroRecep": "ACTIVIDADES DE CONSULTORIA",
            "Contacto": "Juan Pérez",
            "DirRecep": "ARTURO PRAT 527",
            "CmnaRecep": "Curicó",
        }

    def test_from_input_mapping_ignores_unknown_keys(
        self, receiver_data: dict[str, Any]
    ) -> None:
        """Should build from a JSON-style mapping and drop unknown keys."""
        receiver = Receiver.from_input({**receiver_data, "unexpected": "value"})

        assert receiver.tax_id == "76430498-5"
        assert not hasattr(receiver, "unexpected")

    def test_from_input_returns_same_instance(self, receiver_data: dict[str, Any]) -> None:
        """Should pass existing value objects through unchanged."""
        receiver = Receiver(**receiver_data)
        assert Receiver.from_input(receiver) is receiver

    def test_from_input_rejects_other_types(self) -> None:
        """Should raise TypeError for anything that is not a mapping."""
        with pytest.raises(TypeError, match="Receiver must be a Receiver or a mapping"):
            Receiver.from_input(["76430498-5"])  # type: ignore[arg-type]

    def test_accepts_legacy_rut_key(self, receiver_data: dict[str, Any]) -> None:
        """The legacy 'rut' key should populate tax_id."""
        data = dict(receiver_data)
        data["rut"] = data.pop("tax_id")

        assert Receiver.from_input(data).tax_id == "76430498-5"

    def test_truncates_business_fields(self, receiver_data: dict[str, Any]) -> None:
        """Business name is cut to 100 chars and activity to 40."""
        receiver = Receiver(
            **{**receiver_data, "business_name": "N" * 150, "business_activity": "G" * 60}
        )
        wire = receiver.to_wire()

        assert len(wire["RznSocRecep"]) == 100
        assert len(wire["GiroRecep"]) == 40

    def test_missing_fields_raise_validation_error(self) -> None:
        """Should list every missing field and key them under 'receiver'."""
        receiver = Receiver(tax_id="76430498-5", business_name="HOSTY SPA")

        with pytest.raises(ValidationError) as exc_info:
            receiver.to_wire()

        error = exc_info.value
        assert "Receiver validation failed" in str(error)
        for field in ("business_activity", "contact", "address", "commune"):
            assert field in str(error)
        assert error.errors == {
            "receiver": ["business_activity", "contact", "address", "commune"]
        }

    @pytest.mark.parametrize("blank", [None, "", "   ", "\t\n"])
    def test_blank_value_is_missing(self, receiver_data: dict[str, Any], blank: Any) -> None:
        """None and whitespace-only strings count as missing."""
        receiver = Receiver(**{**receiver_data, "contact": blank})

        with pytest.raises(ValidationError) as exc_info:
            receiver.to_wire()

        assert exc_info.value.errors == {"receiver": ["contact"]}

    def test_message_annotates_wire_names(self) -> None:
        """Missing fields are annotated with their wire names."""
        with pytest.raises(ValidationError, match=r"commune \(CmnaRecep\)"):
            Receiver().to_wire()

    def test_to_hash_is_alias(self, receiver_data: dict[str, Any]) -> None:
        receiver = Receiver(**receiver_data)
        assert receiver.to_hash() == receiver.to_wire()


class TestDteItem:
    """Test DteItem construction and wire rendering."""

    def test_to_wire_minimal(self) -> None:
        """Should render required fields only when optionals are absent."""
        item = DteItem(line_number=1, name="Producto", quantity=1, price=2000)

        assert item.to_wire() == {
            "NroLinDet": 1,
            "NmbItem": "Producto",
            "QtyItem": 1,
            "PrcItem": 2000,
        }

    def test_to_wire_with_optionals(self) -> None:
        """Should include amount and description when present."""
        item = DteItem(
            line_number=1,
            name="Producto",
            quantity=2,
            price=1000,
            amount=2000,
            description="Descripción",
        )
        wire = item.to_wire()

        assert wire["MontoItem"] == 2000
        assert wire["DscItem"] == "Descripción"

    def test_exempt_true_sets_ind_exe(self) -> None:
        item = DteItem(line_number=1, name="Producto", quantity=1, price=2000, exempt=True)
        assert item.to_wire()["IndExe"] == 1

    @pytest.mark.parametrize("exempt", [False, None])
    def test_exempt_false_omits_ind_exe(self, exempt: bool | None) -> None:
        """IndExe is omitted entirely unless the line is exempt."""
        item = DteItem(line_number=1, name="Producto", quantity=1, price=2000, exempt=exempt)
        assert "IndExe" not in item.to_wire()

    def test_zero_quantity_and_price_are_valid(self) -> None:
        """Zero must not be treated as missing."""
        item = DteItem(line_number=1, name="Producto", quantity=0, price=0)
        wire = item.to_wire()

        assert wire["QtyItem"] == 0
        assert wire["PrcItem"] == 0

    def test_missing_quantity_and_price(self) -> None:
        """Should raise with both missing fields under 'dte_item'."""
        item = DteItem(line_number=1, name="Producto")

        with pytest.raises(ValidationError) as exc_info:
            item.to_wire()

        assert "DteItem validation failed" in str(exc_info.value)
        assert exc_info.value.errors == {"dte_item": ["quantity", "price"]}

    def test_empty_name_is_missing(self) -> None:
        item = DteItem(line_number=1, name="", quantity=1, price=2000)

        with pytest.raises(ValidationError, match="name"):
            item.to_wire()

    def test_whitespace_numeric_string_is_missing(self) -> None:
        """Whitespace strings in numeric fields fail on the wire, not on construction."""
        item = DteItem(line_number=1, name="Producto", quantity="  ", price=100)

        with pytest.raises(ValidationError) as exc_info:
            item.to_wire()

        assert exc_info.value.errors == {"dte_item": ["quantity"]}

    def test_amount_is_optional(self) -> None:
        """amount is not part of the required set."""
        item = DteItem(line_number=1, name="Producto", quantity=1, price=100)
        assert "MontoItem" not in item.to_wire()


class TestIssuer:
    """Test Issuer construction and wire rendering."""

    def test_to_wire_maps_all_fields(self, issuer_data: dict[str, Any]) -> None:
        """Should stringify the activity code and include optionals when set."""
        issuer = Issuer(**issuer_data, branch_code="81303347", phone="+56912345678")

        assert issuer.to_wire() == {
            "RUTEmisor": "76795561-8",
            "RznSoc": "HAULMER SPA",
            "GiroEmis": "VENTA AL POR MENOR",
            "Acteco": "479100",
            "DirOrigen": "ARTURO PRAT 527",
            "CmnaOrigen": "Curicó",
            "CdgSIISucur": "81303347",
            "Telefono": "+56912345678",
        }

    def test_optional_fields_omitted(self, issuer_data: dict[str, Any]) -> None:
        """Branch code and phone are omitted when absent."""
        wire = Issuer(**issuer_data).to_wire()

        assert "CdgSIISucur" not in wire
        assert "Telefono" not in wire

    def test_accepts_legacy_keys(self, issuer_data: dict[str, Any]) -> None:
        """'rut' and 'sii_branch_code' map to tax_id and branch_code."""
        data = dict(issuer_data)
        data["rut"] = data.pop("tax_id")
        data["sii_branch_code"] = "81303347"

        issuer = Issuer.from_input(data)

        assert issuer.tax_id == "76795561-8"
        assert issuer.branch_code == "81303347"

    def test_truncates_business_fields(self, issuer_data: dict[str, Any]) -> None:
        """Business name is cut to 100 chars and activity to 80."""
        issuer = Issuer(
            **{**issuer_data, "business_name": "N" * 120, "business_activity": "G" * 90}
        )
        wire = issuer.to_wire()

        assert len(wire["RznSoc"]) == 100
        assert len(wire["GiroEmis"]) == 80

    def test_missing_economic_activity_code(self, issuer_data: dict[str, Any]) -> None:
        """Should raise when the activity code is missing."""
        issuer = Issuer(**{**issuer_data, "economic_activity_code": None})

        with pytest.raises(ValidationError) as exc_info:
            issuer.to_wire()

        assert "Issuer validation failed" in str(exc_info.value)
        assert "economic_activity_code (Acteco)" in str(exc_info.value)
        assert exc_info.value.errors == {"issuer": ["economic_activity_code"]}


class TestTotals:
    """Test Totals construction and wire rendering."""

    def test_only_populated_fields_rendered(self) -> None:
        """Should render only the fields that were provided."""
        totals = Totals(total_amount=1190, net_amount=1000, tax_amount=190, tax_rate="19")

        assert totals.to_wire() == {
            "MntTotal": 1190,
            "MntNeto": 1000,
            "IVA": 190,
            "TasaIVA": "19",
        }

    def test_all_fields(self) -> None:
        totals = Totals(
            total_amount=1190,
            net_amount=1000,
            tax_amount=190,
            exempt_amount=0,
            tax_rate=19,
            period_amount=1190,
            amount_to_pay=1190,
        )

        assert totals.to_wire() == {
            "MntTotal": 1190,
            "MntNeto": 1000,
            "IVA": 190,
            "MntExe": 0,
            "TasaIVA": "19",
            "MontoPeriodo": 1190,
            "VlrPagar": 1190,
        }

    def test_numeric_strings_coerced_to_integers(self) -> None:
        """Amounts from JSON/form sources are sent as whole pesos."""
        totals = Totals(total_amount="1190", net_amount="1000.0")
        wire = totals.to_wire()

        assert wire["MntTotal"] == 1190
        assert wire["MntNeto"] == 1000

    def test_zero_total_is_valid(self) -> None:
        assert Totals(total_amount=0).to_wire() == {"MntTotal": 0}

    def test_exempt_document_needs_only_total(self) -> None:
        """Net and tax amounts are optional."""
        assert Totals(total_amount=5000, exempt_amount=5000).to_wire() == {
            "MntTotal": 5000,
            "MntExe": 5000,
        }

    def test_missing_total_amount(self) -> None:
        """Should raise with the wire-annotated field name."""
        with pytest.raises(ValidationError) as exc_info:
            Totals(net_amount=1000).to_wire()

        assert "Totals validation failed" in str(exc_info.value)
        assert "total_amount (MntTotal)" in str(exc_info.value)
        assert exc_info.value.errors == {"totals": ["total_amount"]}

    def test_non_numeric_amount(self) -> None:
        """Non-numeric amounts are reported as invalid."""
        with pytest.raises(ValidationError) as exc_info:
            Totals(total_amount=1000, tax_amount="abc").to_wire()

        assert "Invalid numeric fields" in str(exc_info.value)
        assert exc_info.value.errors == {"totals": ["tax_amount"]}


class TestNumericText:
    """Test numeric input for text attributes."""

    def test_receiver_numeric_contact(self, receiver_data: dict[str, Any]) -> None:
        """A phone number given as an integer is kept as text."""
        receiver = Receiver(**{**receiver_data, "contact": 56912345678})

        assert receiver.contact == "56912345678"
        assert receiver.to_wire()["Contacto"] == "56912345678"

    def test_issuer_numeric_phone(self, issuer_data: dict[str, Any]) -> None:
        issuer = Issuer.from_input({**issuer_data, "phone": 912345678})

        assert issuer.to_wire()["Telefono"] == "912345678"

    def test_activity_code_keeps_integer(self, issuer_data: dict[str, Any]) -> None:
        assert Issuer(**issuer_data).economic_activity_code == 479100

    def test_numeric_amounts_stay_numeric(self) -> None:
        item = DteItem(line_number=1, name="Producto", quantity=2, price=1000)
        assert item.to_wire()["QtyItem"] == 2
