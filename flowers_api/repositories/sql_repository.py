"""Document store backed by SQLAlchemy: one row per record, atomic per record."""
from __future__ import annotations

import secrets
from datetime import datetime, timezone
from typing import Any, Mapping

from sqlalchemy import delete, func, select
from sqlalchemy.exc import SQLAlchemyError

from flowers_api.core.errors import NotFound, StorageUnavailable
from flowers_api.core.logs import logger
from flowers_api.db.models import Document
from flowers_api.db.session import get_session

LOG = logger(__name__)


def _new_doc_id() -> str:
    return secrets.token_urlsafe(15)


def _to_record(entity: Document) -> dict:
    return {"id": entity.doc_id, **(entity.data or {})}


class SQLRepository:
    """CRUD helpers wrapping the SQLAlchemy session."""

    # -------------------------- whole document --------------------------
    def read_all(self) -> dict[str, list[dict]]:
        try:
            with get_session() as session:
                stmt = select(Document).order_by(Document.collection, Document.position)
                rows = session.execute(stmt).scalars().all()
        except SQLAlchemyError as exc:
            LOG.error("Error reading document store: %s", exc)
            raise StorageUnavailable("Could not read from document store.") from exc
        data: dict[str, list[dict]] = {}
        for row in rows:
            data.setdefault(row.collection, []).append(_to_record(row))
        return data

    def write_all(self, data: Mapping[str, Any]) -> None:
        """
        Make the store match ``data``. Rows whose content and position are
        unchanged are left untouched (timestamps included); rows missing from
        ``data`` are deleted.
        """
        now = datetime.now(timezone.utc)
        try:
            with get_session() as session:
                existing = {(row.collection, row.doc_id): row for row in session.execute(select(Document)).scalars()}
                seen = set()
                for collection, records in data.items():
                    for position, record in enumerate(records or []):
                        key = (collection, str(record.get("id") or _new_doc_id()))
                        fields = {k: v for k, v in record.items() if k != "id"}
                        seen.add(key)
                        row = existing.get(key)
                        if row is None:
                            row = Document(
                                collection=collection,
                                doc_id=key[1],
                                position=position,
                                data=fields,
                                created_at=now,
                                updated_at=now,
                            )
                            existing[key] = row
                            session.add(row)
                        elif row.position != position or row.data != fields:
                            row.position = position
                            row.data = fields
                            row.updated_at = now
                for key, row in existing.items():
                    if key not in seen:
                        session.delete(row)
                session.commit()
        except SQLAlchemyError as exc:
            LOG.error("Error writing document store: %s", exc)
            raise StorageUnavailable("Could not write to document store.") from exc

    # -------------------------- records --------------------------
    def list(self, collection: str) -> list[dict]:
        try:
            with get_session() as session:
                stmt = select(Document).where(Document.collection == collection).order_by(Document.position)
                return [_to_record(row) for row in session.execute(stmt).scalars().all()]
        except SQLAlchemyError as exc:
            LOG.error("Error listing %s: %s", collection, exc)
            raise StorageUnavailable("Could not read from document store.") from exc

    def get(self, collection: str, entity_id: str) -> dict | None:
        try:
            with get_session() as session:
                entity = session.get(Document, (collection, str(entity_id)))
                return _to_record(entity) if entity else None
        except SQLAlchemyError as exc:
            LOG.error("Error reading %s/%s: %s", collection, entity_id, exc)
            raise StorageUnavailable("Could not read from document store.") from exc

    def add(self, collection: str, fields: Mapping[str, Any]) -> str:
        now = datetime.now(timezone.utc)
        doc_id = _new_doc_id()
        data = {k: v for k, v in fields.items() if k != "id"}
        try:
            with get_session() as session:
                last = session.execute(
                    select(func.max(Document.position)).where(Document.collection == collection)
                ).scalar()
                entity = Document(
                    collection=collection,
                    doc_id=doc_id,
                    position=(last + 1) if last is not None else 0,
                    data=data,
                    created_at=now,
                    updated_at=now,
                )
                session.add(entity)
                session.commit()
        except SQLAlchemyError as exc:
            LOG.error("Error adding to %s: %s", collection, exc)
            raise StorageUnavailable("Could not write to document store.") from exc
        return doc_id

    def update(self, collection: str, entity_id: str, fields: Mapping[str, Any]) -> None:
        try:
            with get_session() as session:
                entity = session.get(Document, (collection, str(entity_id)))
                if not entity:
                    raise NotFound(f"{collection} record {entity_id} not found")
                merged = dict(entity.data or {})
                merged.update({k: v for k, v in fields.items() if k != "id"})
                # reassign so the JSON column is flagged dirty
                entity.data = merged
                entity.updated_at = datetime.now(timezone.utc)
                session.commit()
        except SQLAlchemyError as exc:
            LOG.error("Error updating %s/%s: %s", collection, entity_id, exc)
            raise StorageUnavailable("Could not write to document store.") from exc

    def delete(self, collection: str, entity_id: str) -> None:
        try:
            with get_session() as session:
                session.execute(
                    delete(Document).where(Document.collection == collection, Document.doc_id == str(entity_id))
                )
                session.commit()
        except SQLAlchemyError as exc:
            LOG.error("Error deleting %s/%s: %s", collection, entity_id, exc)
            raise StorageUnavailable("Could not write to document store.") from exc
