"""
CRUD operations for the workshop resource collections.

Documents are untyped JSON objects. The store-assigned ``id`` is never kept
in the stored fields; it is only merged into the outbound representation.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone

from workshop_api.store import DocumentStore

ID_FIELD = "id"
CREATED_AT_FIELD = "createdAt"


@dataclass(frozen=True)
class Resource:
    collection: str
    label: str
    stamp_created_at: bool = False


ATTENDEES = Resource("attendees", "Attendee", stamp_created_at=True)
SPEAKERS = Resource("speakers", "Speaker")
SESSIONS = Resource("sessions", "Session")


def _stored_fields(body: dict) -> dict:
    return {key: value for key, value in body.items() if key != ID_FIELD}


def _with_id(fields: dict, doc_id: str) -> dict:
    return {**fields, ID_FIELD: doc_id}


class ResourceService:
    """List/create/update/delete for one resource collection."""

    def __init__(self, store: DocumentStore, resource: Resource):
        self.store = store
        self.resource = resource
        self.collection = store.collection(resource.collection)

    def list(self) -> list[dict]:
        # Materialised in full so an enumeration failure never yields a
        # partial listing.
        return [
            _with_id(fields, doc_id)
            for doc_id, fields in self.store.list_all(self.collection)
        ]

    def count(self) -> int:
        return sum(1 for _ in self.store.list_all(self.collection))

    def create(self, body: dict) -> dict:
        fields = _stored_fields(body)
        if self.resource.stamp_created_at:
            fields[CREATED_AT_FIELD] = datetime.now(timezone.utc)
        doc_id = self.store.add(self.collection, fields)
        return _with_id(fields, doc_id)

    def update(self, doc_id: str, body: dict) -> dict:
        """Replace the whole document at ``doc_id``, creating it if absent."""
        fields = _stored_fields(body)
        self.store.set(self.collection, doc_id, fields)
        return _with_id(fields, doc_id)

    def delete(self, doc_id: str) -> dict:
        # No existence check: deleting an unknown id reports success.
        self.store.delete(self.collection, doc_id)
        return {"message": f"{self.resource.label} deleted"}
