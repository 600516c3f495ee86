"""Names of the top-level collections of the persisted document."""
from __future__ import annotations

PAISES = "paises"
VENDEDORES = "vendedores"
CUSTOMERS = "customers"
FINCAS = "fincas"
CARGUERAS = "cargueras"
CONSIGNATARIOS = "consignatarios"
DAES = "daes"
MARCACIONES = "marcaciones"
PROVINCIAS = "provincias"
INVOICES = "invoices"
PRODUCTOS = "productos"
VARIEDADES = "variedades"
CREDIT_NOTES = "creditNotes"
DEBIT_NOTES = "debitNotes"
PAYMENTS = "payments"
INVENTORY = "inventory"

COLLECTIONS = (
    PAISES,
    VENDEDORES,
    CUSTOMERS,
    FINCAS,
    CARGUERAS,
    CONSIGNATARIOS,
    DAES,
    MARCACIONES,
    PROVINCIAS,
    INVOICES,
    PRODUCTOS,
    VARIEDADES,
    CREDIT_NOTES,
    DEBIT_NOTES,
    PAYMENTS,
    INVENTORY,
)


def empty_app_data() -> dict[str, list[dict]]:
    return {name: [] for name in COLLECTIONS}


def is_known_collection(name: str) -> bool:
    return name in COLLECTIONS
