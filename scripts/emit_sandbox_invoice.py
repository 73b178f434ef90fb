#!/usr/bin/env python3
"""Emit a sample invoice against the configured environment.

Usage:
    OPENFACTURA_API_KEY=... python -m scripts.emit_sandbox_invoice
    OPENFACTURA_API_KEY=... python -m scripts.emit_sandbox_invoice --status <token>

The issuer is taken from the organization owning the API key.
"""

import argparse
import logging
import sys
from datetime import date

from openfactura.dsl.dte import Dte
from openfactura.factory import create_client
from openfactura.shared.config import get_settings
from openfactura.shared.errors import ConfigurationError

logger = logging.getLogger(__name__)


def build_invoice() -> Dte:
    return Dte.from_input(
        {
            "type": 33,
            "emission_date": date.today(),
            "receiver": {
                "tax_id": "76430498-5",
                "business_name": "HOSTY SPA",
                "business_activity": "ACTIVIDADES DE CONSULTORIA DE INFORMATICA",
                "contact": "Ventas",
                "address": "ARTURO PRAT 527 3 pis OF 1",
                "commune": "Curicó",
            },
            "items": [
                {"line_number": 1, "name": "Servicio de consultoría", "quantity": 1,
                 "price": 1000, "amount": 1000},
            ],
            "totals": {
                "total_amount": 1190,
                "net_amount": 1000,
                "tax_amount": 190,
                "tax_rate": "19",
            },
        }
    )


def main() -> int:
    parser = argparse.ArgumentParser(description="Emit a sample DTE (type 33)")
    parser.add_argument("--status", metavar="TOKEN", help="Only query the status of a token")
    args = parser.parse_args()

    settings = get_settings()
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    client = create_client(settings)
    try:
        if args.status:
            result = client.documents.find_by_token(args.status, "status")
            if not result.success:
                logger.error(f"Status query failed: {result.error.message}")  # type: ignore[union-attr]
                return 1
            logger.info(f"Status: {result.value.content()}")  # type: ignore[union-attr]
            return 0

        issuer = client.organizations.current_as_issuer()
        result = client.documents.emit(build_invoice(), issuer, response=["TOKEN", "FOLIO"])
        if not result.success:
            logger.error(f"Emission failed ({result.error.kind}): {result.error.message}")  # type: ignore[union-attr]
            return 1

        response = result.value
        logger.info(f"Emitted folio {response.folio} with token {response.token}")  # type: ignore[union-attr]
        return 0
    except ConfigurationError as e:
        logger.error(str(e))
        return 2
    finally:
        client.close()


if __name__ == "__main__":
    sys.exit(main())
