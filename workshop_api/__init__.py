"""
Workshop registration API.

This package provides a FastAPI application exposing attendee, speaker and
session documents kept in Firestore, plus a shared-secret admin login, so the
workshop front-end can run against a single small service on Cloud Run.
"""
