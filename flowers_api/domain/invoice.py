"""
Invoice aggregate: invoice -> items -> bunches.

Stored invoices are plain dicts. For editing they are turned into an
``InvoiceDraft`` where every item and bunch gets a fresh identifier (list
rows in the form are keyed by id, and a previous draft may still be mounted).
The stored identifier is kept in ``original_id`` so that a save can still
correlate draft rows with stored rows; it is never written back.

The numeric helpers reproduce the totals shown on invoices and statements:
stems = bunches * stemsPerBunch, FOB = stems * salePrice, cost = stems *
purchasePrice. Non-numeric values count as 0.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Any, Callable, Iterable, Mapping

from flowers_api.core.utils import as_number, new_uid, parse_calendar_date

DATE_FIELDS = ("farmDepartureDate", "flightDate")
SHADOW_ID_FIELD = "originalId"

IdFactory = Callable[[], str]


def _scalars(record: Mapping[str, Any], *skip: str) -> dict:
    return {k: v for k, v in record.items() if k not in skip}


# ---------------------------------------------------------------------------
# drafts
# ---------------------------------------------------------------------------


@dataclass
class BunchDraft:
    id: str
    original_id: str | None = None
    fields: dict = field(default_factory=dict)

    @classmethod
    def from_record(cls, record: Mapping[str, Any], id_factory: IdFactory = new_uid) -> "BunchDraft":
        original = record.get("id")
        return cls(
            id=id_factory(),
            original_id=str(original) if original not in (None, "") else None,
            fields=_scalars(record, "id", SHADOW_ID_FIELD),
        )

    def to_record(self) -> dict:
        return {"id": self.id, **self.fields}

    def to_form(self) -> dict:
        return {**self.to_record(), SHADOW_ID_FIELD: self.original_id}


@dataclass
class ItemDraft:
    id: str
    original_id: str | None = None
    number_of_bunches: Any = None
    bunches: list[BunchDraft] = field(default_factory=list)
    fields: dict = field(default_factory=dict)

    @classmethod
    def from_record(cls, record: Mapping[str, Any], id_factory: IdFactory = new_uid) -> "ItemDraft":
        original = record.get("id")
        return cls(
            id=id_factory(),
            original_id=str(original) if original not in (None, "") else None,
            # kept verbatim, never coerced
            number_of_bunches=record.get("numberOfBunches"),
            bunches=[BunchDraft.from_record(b, id_factory) for b in (record.get("bunches") or [])],
            fields=_scalars(record, "id", SHADOW_ID_FIELD, "numberOfBunches", "bunches"),
        )

    def to_record(self) -> dict:
        record = {"id": self.id, **self.fields}
        if self.number_of_bunches is not None:
            record["numberOfBunches"] = self.number_of_bunches
        record["bunches"] = [b.to_record() for b in self.bunches]
        return record

    def to_form(self) -> dict:
        record = self.to_record()
        record["bunches"] = [b.to_form() for b in self.bunches]
        record[SHADOW_ID_FIELD] = self.original_id
        return record


@dataclass
class InvoiceDraft:
    """Editable copy of a stored invoice. ``id`` is the stored invoice id."""

    id: str
    farm_departure_date: date
    flight_date: date
    items: list[ItemDraft] = field(default_factory=list)
    header: dict = field(default_factory=dict)

    def to_record(self) -> dict:
        """Storable invoice record (shadow ids dropped, dates as ISO strings)."""
        return {
            "id": self.id,
            **self.header,
            "farmDepartureDate": self.farm_departure_date.isoformat(),
            "flightDate": self.flight_date.isoformat(),
            "items": [item.to_record() for item in self.items],
        }

    def to_form(self) -> dict:
        record = self.to_record()
        record["items"] = [item.to_form() for item in self.items]
        return record

    def draft_ids(self) -> list[str]:
        ids = []
        for item in self.items:
            ids.append(item.id)
            ids.extend(b.id for b in item.bunches)
        return ids


def _date_or(value: Any, default: date) -> date:
    try:
        return parse_calendar_date(value) or default
    except ValueError:
        # unparseable dates are treated like missing ones
        return default


def build_edit_draft(
    record: Mapping[str, Any],
    *,
    today: date | None = None,
    id_factory: IdFactory = new_uid,
) -> InvoiceDraft:
    """
    Turn a stored invoice into an edit draft.

    Missing header dates become ``today`` (evaluated at call time when not
    given). Items and bunches get fresh ids; the stored ids move to
    ``original_id``. ``record`` is not modified.
    """
    current = today or date.today()
    departure = _date_or(record.get("farmDepartureDate"), current)
    flight = _date_or(record.get("flightDate"), current)
    return InvoiceDraft(
        id=str(record.get("id") or ""),
        farm_departure_date=departure,
        flight_date=flight,
        items=[ItemDraft.from_record(item, id_factory) for item in (record.get("items") or [])],
        header=_scalars(record, "id", "items", *DATE_FIELDS),
    )


def strip_shadow_ids(record: Mapping[str, Any]) -> dict:
    """Drop ``originalId`` from a submitted invoice's items and bunches."""
    cleaned = dict(record)
    if "items" in cleaned:
        items = []
        for item in cleaned.get("items") or []:
            item = _scalars(item, SHADOW_ID_FIELD)
            if "bunches" in item:
                item["bunches"] = [_scalars(b, SHADOW_ID_FIELD) for b in item.get("bunches") or []]
            items.append(item)
        cleaned["items"] = items
    return cleaned


# ---------------------------------------------------------------------------
# numeric derivations
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class LineTotals:
    boxes: float = 0.0
    bunches: float = 0.0
    stems: float = 0.0
    fob: float = 0.0
    cost: float = 0.0

    def __add__(self, other: "LineTotals") -> "LineTotals":
        return LineTotals(
            boxes=self.boxes + other.boxes,
            bunches=self.bunches + other.bunches,
            stems=self.stems + other.stems,
            fob=self.fob + other.fob,
            cost=self.cost + other.cost,
        )

    def as_dict(self) -> dict:
        return {
            "totalBoxes": self.boxes,
            "totalBunches": self.bunches,
            "totalStems": self.stems,
            "totalFob": round(self.fob, 2),
            "totalCost": round(self.cost, 2),
        }


def bunch_totals(bunch: Mapping[str, Any]) -> LineTotals:
    count = as_number(bunch.get("bunches"))
    stems = count * as_number(bunch.get("stemsPerBunch"))
    return LineTotals(
        bunches=count,
        stems=stems,
        fob=stems * as_number(bunch.get("salePrice")),
        cost=stems * as_number(bunch.get("purchasePrice")),
    )


def item_boxes(item: Mapping[str, Any]) -> float:
    if item.get("boxCount") not in (None, ""):
        return as_number(item.get("boxCount"))
    return as_number(item.get("boxNumber"))


def item_totals(item: Mapping[str, Any]) -> LineTotals:
    totals = LineTotals(boxes=item_boxes(item))
    for bunch in item.get("bunches") or []:
        totals = totals + bunch_totals(bunch)
    return totals


def invoice_totals(invoice: Mapping[str, Any]) -> LineTotals:
    totals = LineTotals()
    for item in invoice.get("items") or []:
        totals = totals + item_totals(item)
    return totals


def invoice_subtotal(invoice: Mapping[str, Any]) -> float:
    """Sale (FOB) value of all bunches of the invoice."""
    return invoice_totals(invoice).fob


def invoice_purchase_total(invoice: Mapping[str, Any]) -> float:
    """Purchase value owed to the farm: stems * purchasePrice over all bunches."""
    return invoice_totals(invoice).cost


def _amounts(records: Iterable[Mapping[str, Any]]) -> float:
    return sum(as_number(r.get("amount")) for r in records)


def invoice_balance(
    invoice: Mapping[str, Any],
    *,
    credit_notes: Iterable[Mapping[str, Any]] = (),
    debit_notes: Iterable[Mapping[str, Any]] = (),
    payments: Iterable[Mapping[str, Any]] = (),
    purchase: bool = False,
) -> float:
    """value + debits - credits - payments; value is the purchase total when ``purchase``."""
    value = invoice_purchase_total(invoice) if purchase else invoice_subtotal(invoice)
    return value + _amounts(debit_notes) - _amounts(credit_notes) - _amounts(payments)
