"""
Pydantic schemas for the fixed-shape requests and responses.

Attendee, speaker and session documents are free-form JSON objects and have
no schema here.
"""

from __future__ import annotations

from pydantic import BaseModel, StrictStr


class AdminLoginRequest(BaseModel):
    password: StrictStr = ""


class MessageResponse(BaseModel):
    message: str


class CountResponse(BaseModel):
    count: int


class HealthResponse(BaseModel):
    status: str


class ApiInfoResponse(BaseModel):
    message: str
    version: str
    endpoints: dict[str, dict[str, str]]
