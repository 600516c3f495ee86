from __future__ import annotations

from fastapi import APIRouter, Query

from flowers_api.services.statements import build_account_statement, build_farm_statement, get_accounts_payable

router = APIRouter(tags=["statements"])


@router.get("/customers/{customer_id}/statement")
def customer_statement(customer_id: str, invoice_id: list[str] | None = Query(None)):
    return build_account_statement(customer_id, invoice_id).as_dict()


@router.get("/fincas/{farm_id}/statement")
def farm_statement(farm_id: str):
    return build_farm_statement(farm_id).as_dict()


@router.get("/accounts-payable")
def accounts_payable(q: str = ""):
    return [line.as_dict() for line in get_accounts_payable(q)]
