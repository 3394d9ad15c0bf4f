"""
Check Firestore connectivity with the current environment.

Prints the configured project and credentials, verifies the service account
file, then reads at most one document from a collection.

Usage:
    workshop-diagnose [--collection sessions]
"""

from __future__ import annotations

import argparse
import glob
import logging
import os
import sys
from contextlib import closing
from typing import Optional

from google.auth import exceptions as auth_exceptions

from workshop_api.config import ADC, Settings, get_settings
from workshop_api.errors import StoreError
from workshop_api.server import configure_logging
from workshop_api.store import DocumentStore, build_document_store

logger = logging.getLogger(__name__)


def check_credentials_file(path: str, search_dir: str = ".") -> bool:
    """Report whether the service account file exists, with suggestions."""
    print(f"Absolute path: {os.path.abspath(path)}")
    if os.path.isfile(path):
        print(f"File exists: {path}")
        return True
    print(f"FILE NOT FOUND: {path}")
    candidates = sorted(glob.glob(os.path.join(search_dir, "service*.json")))
    if candidates:
        print(f"Did you mean one of these? {candidates}")
    return False


def probe_collection(store: DocumentStore, name: str) -> Optional[str]:
    """Return the id of the first document in ``name``, or None if empty."""
    with closing(store.list_all(store.collection(name))) as documents:
        first = next(documents, None)
    return first[0] if first is not None else None


def run(settings: Settings, collection: str) -> int:
    print(f"FIREBASE_PROJECT_ID: {settings.firebase_project_id or ''}")
    print(f"FIREBASE_SERVICE_ACCOUNT_PATH: {settings.firebase_service_account_path or ''}")

    if settings.credentials_source != ADC:
        if not check_credentials_file(settings.credentials_source):
            return 1

    logger.info("Attempting to initialize Firestore client...")
    try:
        store = build_document_store(settings)
    except (ValueError, OSError, auth_exceptions.GoogleAuthError) as exc:
        logger.error("Failed to initialize Firestore: %s", exc)
        return 1
    logger.info("Firestore client initialized")

    try:
        logger.info("Listing 1 document from '%s' collection...", collection)
        doc_id = probe_collection(store, collection)
    except StoreError as exc:
        logger.error("Query failed: %s", exc.message)
        return 1
    finally:
        store.close()

    if doc_id is None:
        logger.info("Connection successful! Collection is empty.")
    else:
        logger.info("Connection successful! Found document ID: %s", doc_id)
    return 0


def main(argv: Optional[list[str]] = None) -> int:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[1])
    parser.add_argument(
        "--collection",
        default="sessions",
        help="Collection to read one document from (default: sessions).",
    )
    args = parser.parse_args(argv)

    settings = get_settings()
    configure_logging(settings.log_level)
    logger.info("--- Diagnostic Start ---")
    status = run(settings, args.collection)
    logger.info("--- Diagnostic End ---")
    return status


if __name__ == "__main__":
    sys.exit(main())
