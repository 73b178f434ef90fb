"""Unit tests for organization operations."""

from unittest.mock import MagicMock

import pytest

from openfactura.dsl.issuer import Issuer
from openfactura.dsl.organizations import ORGANIZATION_PATH, Organizations
from openfactura.resources.organization import Organization
from openfactura.shared.errors import AuthenticationError
from openfactura.transport.base import Transport


@pytest.fixture
def transport() -> MagicMock:
    mock = MagicMock(spec=Transport)
    mock.get.return_value = {
        "rut": "76795561-8",
        "razonSocial": "HAULMER SPA",
        "direccion": "ARTURO PRAT 527",
        "comuna": "Curicó",
        "actividades": [
            {
                "giro": "VENTA AL POR MENOR",
                "codigoActividadEconomica": 479100,
                "actividadPrincipal": True,
            }
        ],
    }
    return mock


@pytest.fixture
def organizations(transport: MagicMock) -> Organizations:
    return Organizations(transport)


class TestCurrent:
    """Test current organization lookup."""

    def test_current(self, organizations: Organizations, transport: MagicMock) -> None:
        organization = organizations.current()

        transport.get.assert_called_once_with(ORGANIZATION_PATH, query={})
        assert isinstance(organization, Organization)
        assert organization.tax_id == "76795561-8"

    def test_extra_fields(self, organizations: Organizations, transport: MagicMock) -> None:
        organizations.current(extra_fields="logo")

        transport.get.assert_called_once_with(ORGANIZATION_PATH, query={"extra_fields": "logo"})

    def test_non_mapping_payload(self, organizations: Organizations, transport: MagicMock) -> None:
        transport.get.return_value = ""
        assert organizations.current().tax_id is None

    def test_errors_propagate(self, organizations: Organizations, transport: MagicMock) -> None:
        """Organization lookups raise transport errors directly."""
        transport.get.side_effect = AuthenticationError()

        with pytest.raises(AuthenticationError):
            organizations.current()


class TestIssuer:
    """Test issuer derivation."""

    def test_current_as_issuer(self, organizations: Organizations) -> None:
        issuer = organizations.current_as_issuer()

        assert isinstance(issuer, Issuer)
        assert issuer.business_activity == "VENTA AL POR MENOR"
        assert issuer.to_wire()["Acteco"] == "479100"

    def test_build_issuer_type_check(self) -> None:
        with pytest.raises(TypeError, match="organization must be an Organization object"):
            Organizations.build_issuer({"rut": "76795561-8"})  # type: ignore[arg-type]


def test_documents_returns_raw_payload(
    organizations: Organizations, transport: MagicMock
) -> None:
    """Test that available folios are returned as sent by the API."""
    payload = {"rut": "76795561-8", "documentos": [{"tipo": 33, "disponibles": 100}]}
    transport.get.return_value = payload

    assert organizations.documents() == payload
    transport.get.assert_called_once_with(f"{ORGANIZATION_PATH}/document")


def test_current_with_numeric_phone(
    organizations: Organizations, transport: MagicMock
) -> None:
    """Test that numeric contact values do not break the lookup."""
    transport.get.return_value = {**transport.get.return_value, "telefono": 56912345678}

    assert organizations.current().phone == "56912345678"
