"""
Document store abstraction for Firestore and an in-memory test implementation.
"""

from __future__ import annotations

import copy
import logging
import uuid
from dataclasses import dataclass, field
from typing import Any, Dict, Generator, Optional, Protocol

import firebase_admin
from firebase_admin import credentials, firestore
from google.api_core import exceptions
from google.auth import exceptions as auth_exceptions

from workshop_api.config import ADC, Settings
from workshop_api.errors import StoreUnavailable, StoreWriteError

logger = logging.getLogger(__name__)

WORKSHOPS_COLLECTION = "workshops"

_CLIENT_ERRORS = (exceptions.GoogleAPIError, auth_exceptions.GoogleAuthError)

# One-shot listing of (id, fields); closing it releases the underlying stream.
DocumentStream = Generator[tuple[str, dict], None, None]


@dataclass(frozen=True)
class CollectionHandle:
    """Reference to a collection by its path segments."""

    segments: tuple[str, ...]

    @property
    def name(self) -> str:
        return self.segments[-1]

    @property
    def path(self) -> str:
        return "/".join(self.segments)


class DocumentStore(Protocol):
    """Defines the operations the API needs from the document database."""

    def collection(self, name: str) -> CollectionHandle:
        ...

    def subcollection(self, parent_id: str, name: str) -> CollectionHandle:
        ...

    def list_all(self, collection: CollectionHandle) -> DocumentStream:
        ...

    def add(self, collection: CollectionHandle, fields: dict) -> str:
        ...

    def set(self, collection: CollectionHandle, doc_id: str, fields: dict) -> None:
        ...

    def delete(self, collection: CollectionHandle, doc_id: str) -> None:
        ...

    def close(self) -> None:
        ...


class _CollectionLookup:
    def collection(self, name: str) -> CollectionHandle:
        return CollectionHandle((name,))

    def subcollection(self, parent_id: str, name: str) -> CollectionHandle:
        return CollectionHandle((WORKSHOPS_COLLECTION, parent_id, name))


@dataclass
class InMemoryDocumentStore(_CollectionLookup):
    """Simple in-memory document store for development and tests."""

    collections: Dict[str, Dict[str, dict]] = field(default_factory=dict)
    fail_reads: Optional[str] = None
    fail_writes: Optional[str] = None

    def list_all(self, collection: CollectionHandle) -> DocumentStream:
        if self.fail_reads:
            raise StoreUnavailable(self.fail_reads)
        documents = self.collections.get(collection.path, {})
        for doc_id, fields in list(documents.items()):
            yield doc_id, copy.deepcopy(fields)

    def add(self, collection: CollectionHandle, fields: dict) -> str:
        self._check_writable()
        doc_id = uuid.uuid4().hex
        self.collections.setdefault(collection.path, {})[doc_id] = copy.deepcopy(
            fields
        )
        return doc_id

    def set(self, collection: CollectionHandle, doc_id: str, fields: dict) -> None:
        self._check_writable()
        self.collections.setdefault(collection.path, {})[doc_id] = copy.deepcopy(
            fields
        )

    def delete(self, collection: CollectionHandle, doc_id: str) -> None:
        self._check_writable()
        self.collections.get(collection.path, {}).pop(doc_id, None)

    def get(self, collection: CollectionHandle, doc_id: str) -> Optional[dict]:
        fields = self.collections.get(collection.path, {}).get(doc_id)
        return copy.deepcopy(fields) if fields is not None else None

    def reset(self) -> None:
        """Clear all stored data (useful in tests)."""
        self.collections.clear()
        self.fail_reads = None
        self.fail_writes = None

    def close(self) -> None:
        pass

    def _check_writable(self) -> None:
        if self.fail_writes:
            raise StoreWriteError(self.fail_writes)


@dataclass
class FirestoreDocumentStore(_CollectionLookup):
    """
    Firestore-backed store built through firebase-admin.

    ``credentials_source`` is a service account file path, or ``ADC`` to use
    Application Default Credentials (Cloud Run, gcloud auth).
    """

    project_id: Optional[str] = None
    database_id: Optional[str] = None
    credentials_source: str = ADC
    client: Any = None

    def __post_init__(self):
        self._app = None
        if self.client is not None:
            return

        if self.credentials_source == ADC:
            logger.info("Using Application Default Credentials (ADC)")
            credential = credentials.ApplicationDefault()
        else:
            logger.info("Using service account file: %s", self.credentials_source)
            credential = credentials.Certificate(self.credentials_source)

        options = {"projectId": self.project_id} if self.project_id else None
        self._app = firebase_admin.initialize_app(
            credential, options, name=f"workshop-api-{uuid.uuid4().hex}"
        )
        if self.database_id:
            logger.info("Connecting to specific database: %s", self.database_id)
        self.client = firestore.client(app=self._app, database_id=self.database_id)

    def _ref(self, collection: CollectionHandle):
        return self.client.collection(*collection.segments)

    def list_all(self, collection: CollectionHandle) -> DocumentStream:
        try:
            for snapshot in self._ref(collection).stream():
                yield snapshot.id, snapshot.to_dict() or {}
        except _CLIENT_ERRORS as exc:
            logger.error("Listing %s failed: %s", collection.path, exc)
            raise StoreUnavailable(str(exc)) from exc

    def add(self, collection: CollectionHandle, fields: dict) -> str:
        try:
            _, doc_ref = self._ref(collection).add(fields)
        except _CLIENT_ERRORS as exc:
            logger.error("Adding to %s failed: %s", collection.path, exc)
            raise StoreWriteError(str(exc)) from exc
        return doc_ref.id

    def set(self, collection: CollectionHandle, doc_id: str, fields: dict) -> None:
        try:
            self._ref(collection).document(doc_id).set(fields)
        except _CLIENT_ERRORS as exc:
            logger.error("Writing %s/%s failed: %s", collection.path, doc_id, exc)
            raise StoreWriteError(str(exc)) from exc

    def delete(self, collection: CollectionHandle, doc_id: str) -> None:
        # Firestore reports success for ids that do not exist.
        try:
            self._ref(collection).document(doc_id).delete()
        except _CLIENT_ERRORS as exc:
            logger.error("Deleting %s/%s failed: %s", collection.path, doc_id, exc)
            raise StoreWriteError(str(exc)) from exc

    def close(self) -> None:
        if self.client is not None:
            self.client.close()
        if self._app is not None:
            firebase_admin.delete_app(self._app)
            self._app = None


def build_document_store(settings: Settings) -> DocumentStore:
    """
    Return the store selected by settings.

    Credential or initialisation errors propagate: the service does not start
    without a store.
    """
    if settings.use_in_memory_backends:
        logger.warning("Using in-memory document store; data is not persisted")
        return InMemoryDocumentStore()
    if settings.k_service:
        logger.info("Running on Cloud Run service %s", settings.k_service)
    return FirestoreDocumentStore(
        project_id=settings.firebase_project_id,
        database_id=settings.database_id,
        credentials_source=settings.credentials_source,
    )
