"""
Account statements and accounts payable.

Customer statements value invoices at their sale price; farm statements and
accounts payable value purchase invoices at their purchase price. In both
cases balance = value + debits - credits - payments, and lines are ordered by
flight date.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Any, Callable, Iterable, Mapping, Optional

from flowers_api.core.errors import NotFound
from flowers_api.core.utils import as_number, parse_calendar_date
from flowers_api.domain.invoice import invoice_purchase_total, invoice_subtotal
from flowers_api.services import credit_notes, customers, debit_notes, fincas, invoices, payments

PURCHASE_TYPES = ("purchase", "both")


@dataclass
class StatementLine:
    invoice: dict
    subtotal: float
    credits: float
    debits: float
    paid: float

    @property
    def total(self) -> float:
        return self.subtotal + self.debits

    @property
    def balance(self) -> float:
        return self.total - self.credits - self.paid

    def as_dict(self) -> dict:
        return {
            "invoiceId": self.invoice.get("id"),
            "invoiceNumber": self.invoice.get("invoiceNumber"),
            "flightDate": self.invoice.get("flightDate"),
            "status": self.invoice.get("status"),
            "subtotal": round(self.subtotal, 2),
            "total": round(self.total, 2),
            "credits": round(self.credits, 2),
            "debits": round(self.debits, 2),
            "payments": round(self.paid, 2),
            "balance": round(self.balance, 2),
        }


@dataclass
class AccountStatement:
    """Statement of one party: a customer (sales) or a farm (purchases)."""

    party: dict
    party_type: str = "customer"
    lines: list[StatementLine] = field(default_factory=list)

    @property
    def total_balance(self) -> float:
        return sum(line.balance for line in self.lines)

    @property
    def total_credits(self) -> float:
        return sum(line.credits for line in self.lines)

    @property
    def total_debits(self) -> float:
        return sum(line.debits for line in self.lines)

    @property
    def total_payments(self) -> float:
        return sum(line.paid for line in self.lines)

    @property
    def urgent_payment(self) -> float:
        """Outstanding balance of overdue invoices."""
        return sum(line.balance for line in self.lines if line.invoice.get("status") == "Overdue")

    def as_dict(self) -> dict:
        return {
            self.party_type: self.party,
            "lines": [line.as_dict() for line in self.lines],
            "totalBalance": round(self.total_balance, 2),
            "totalCredits": round(self.total_credits, 2),
            "totalDebits": round(self.total_debits, 2),
            "totalPayments": round(self.total_payments, 2),
            "urgentPayment": round(self.urgent_payment, 2),
        }


@dataclass
class PayableLine:
    invoice: dict
    farm: Optional[dict]
    balance: float

    def as_dict(self) -> dict:
        return {
            "invoiceId": self.invoice.get("id"),
            "invoiceNumber": self.invoice.get("invoiceNumber"),
            "flightDate": self.invoice.get("flightDate"),
            "status": self.invoice.get("status"),
            "type": self.invoice.get("type"),
            "farm": self.farm,
            "balance": round(self.balance, 2),
        }


def _flight_date_key(invoice: Mapping[str, Any]) -> tuple:
    try:
        flight = parse_calendar_date(invoice.get("flightDate"))
    except ValueError:
        flight = None
    # undated invoices go last
    return (flight is None, flight or date.min)


def _sum_amounts(records: Iterable[dict], invoice_id: str) -> float:
    return sum(as_number(r.get("amount")) for r in records if str(r.get("invoiceId")) == invoice_id)


class _Adjustments:
    """Credit notes, debit notes and payments loaded once per statement."""

    def __init__(self) -> None:
        self.credits = credit_notes.get_credit_notes()
        self.debits = debit_notes.get_debit_notes()
        self.payments = payments.get_payments()

    def line(self, invoice: dict, value: Callable[[Mapping[str, Any]], float]) -> StatementLine:
        invoice_id = str(invoice.get("id"))
        return StatementLine(
            invoice=invoice,
            subtotal=value(invoice),
            credits=_sum_amounts(self.credits, invoice_id),
            debits=_sum_amounts(self.debits, invoice_id),
            paid=_sum_amounts(self.payments, invoice_id),
        )


def _is_purchase(invoice: Mapping[str, Any]) -> bool:
    return invoice.get("type") in PURCHASE_TYPES


def build_account_statement(customer_id: str, invoice_ids: Optional[Iterable[str]] = None) -> AccountStatement:
    """
    Statement for one customer. When ``invoice_ids`` is given only those
    invoices (of that customer) are included.
    """
    customer = customers.get_customer_by_id(customer_id)
    if customer is None:
        raise NotFound(f"Customer {customer_id} not found")
    wanted = {str(i) for i in invoice_ids} if invoice_ids is not None else None
    selected = [
        inv
        for inv in invoices.get_invoices_for_customer(customer_id)
        if wanted is None or str(inv.get("id")) in wanted
    ]
    adjustments = _Adjustments()
    lines = [adjustments.line(inv, invoice_subtotal) for inv in sorted(selected, key=_flight_date_key)]
    return AccountStatement(party=customer, party_type="customer", lines=lines)


def build_farm_statement(farm_id: str) -> AccountStatement:
    """Statement of the purchase invoices of one farm, valued at purchase price."""
    farm = fincas.get_finca_by_id(farm_id)
    if farm is None:
        raise NotFound(f"Farm {farm_id} not found")
    selected = [
        inv
        for inv in invoices.get_invoices()
        if _is_purchase(inv) and str(inv.get("farmId")) == str(farm_id)
    ]
    adjustments = _Adjustments()
    lines = [adjustments.line(inv, invoice_purchase_total) for inv in sorted(selected, key=_flight_date_key)]
    return AccountStatement(party=farm, party_type="farm", lines=lines)


def get_accounts_payable(search: str = "") -> list[PayableLine]:
    """
    Purchase invoices with the balance owed to each farm. ``search`` matches
    (case-insensitively) the invoice number, farm name, status or flight date.
    """
    farms = {str(f.get("id")): f for f in fincas.get_fincas()}
    adjustments = _Adjustments()
    term = (search or "").strip().lower()
    result = []
    for invoice in sorted((inv for inv in invoices.get_invoices() if _is_purchase(inv)), key=_flight_date_key):
        farm = farms.get(str(invoice.get("farmId")))
        if term:
            haystack = [
                invoice.get("invoiceNumber"),
                (farm or {}).get("name"),
                invoice.get("status"),
                invoice.get("flightDate"),
            ]
            if not any(term in str(value).lower() for value in haystack if value):
                continue
        line = adjustments.line(invoice, invoice_purchase_total)
        result.append(PayableLine(invoice=invoice, farm=farm, balance=line.balance))
    return result
