"""Lookup of entity services by collection name and URL slug."""

from __future__ import annotations

from flowers_api.services import (
    cargueras,
    consignatarios,
    credit_notes,
    customers,
    daes,
    debit_notes,
    fincas,
    inventory,
    invoices,
    marcaciones,
    paises,
    payments,
    productos,
    provincias,
    variedades,
    vendedores,
)
from flowers_api.services.entity_service import EntityService

# URL slug -> service for the plain CRUD endpoints
REFERENCE_SERVICES: dict[str, EntityService] = {
    "paises": paises.service,
    "vendedores": vendedores.service,
    "customers": customers.service,
    "fincas": fincas.service,
    "cargueras": cargueras.service,
    "consignatarios": consignatarios.service,
    "daes": daes.service,
    "marcaciones": marcaciones.service,
    "provincias": provincias.service,
    "productos": productos.service,
    "variedades": variedades.service,
    "credit-notes": credit_notes.service,
    "debit-notes": debit_notes.service,
    "inventory": inventory.service,
}

SERVICES_BY_COLLECTION: dict[str, EntityService] = {
    svc.collection: svc
    for svc in (*REFERENCE_SERVICES.values(), invoices.service, payments.service)
}
