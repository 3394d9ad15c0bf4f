"""
HTTP routes for the workshop API.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends
from pydantic import ValidationError

from workshop_api.auth import AdminAuthenticator
from workshop_api.dependencies import (
    get_authenticator,
    get_document_store,
    read_document,
)
from workshop_api.errors import InvalidBody, Unauthorized
from workshop_api.resources import (
    ATTENDEES,
    SESSIONS,
    SPEAKERS,
    Resource,
    ResourceService,
)
from workshop_api.schemas import (
    AdminLoginRequest,
    ApiInfoResponse,
    CountResponse,
    MessageResponse,
)
from workshop_api.store import DocumentStore

API_VERSION = "1.0.0"

router = APIRouter()


@router.get("", response_model=ApiInfoResponse)
def api_info():
    return ApiInfoResponse(
        message="Workshop API",
        version=API_VERSION,
        endpoints={
            "attendees": {
                "GET": "/api/attendees",
                "POST": "/api/attendees",
                "GET_count": "/api/attendees/count",
            },
            "speakers": {
                "GET": "/api/speakers",
                "POST": "/api/speakers",
                "PUT": "/api/speakers/{id}",
                "DELETE": "/api/speakers/{id}",
            },
            "sessions": {
                "GET": "/api/sessions",
                "POST": "/api/sessions",
                "PUT": "/api/sessions/{id}",
                "DELETE": "/api/sessions/{id}",
            },
            "admin": {
                "POST": "/api/admin/login",
            },
        },
    )


def _service(resource: Resource):
    def dependency(store: DocumentStore = Depends(get_document_store)):
        return ResourceService(store, resource)

    return dependency


# Attendees: registration only, no update or delete.


@router.get("/attendees")
def list_attendees(service: ResourceService = Depends(_service(ATTENDEES))):
    return service.list()


@router.post("/attendees", status_code=201)
def register_attendee(
    body: dict = Depends(read_document),
    service: ResourceService = Depends(_service(ATTENDEES)),
):
    return service.create(body)


@router.get("/attendees/count", response_model=CountResponse)
def count_attendees(service: ResourceService = Depends(_service(ATTENDEES))):
    return CountResponse(count=service.count())


def build_resource_router(resource: Resource) -> APIRouter:
    """
    Routes for a fully editable resource: list, create, replace, delete.
    """
    resource_router = APIRouter(prefix=f"/{resource.collection}")
    get_service = _service(resource)

    @resource_router.get("")
    def list_documents(service: ResourceService = Depends(get_service)):
        return service.list()

    @resource_router.post("", status_code=201)
    def create_document(
        body: dict = Depends(read_document),
        service: ResourceService = Depends(get_service),
    ):
        return service.create(body)

    @resource_router.put("/{doc_id}")
    def replace_document(
        doc_id: str,
        body: dict = Depends(read_document),
        service: ResourceService = Depends(get_service),
    ):
        return service.update(doc_id, body)

    @resource_router.delete("/{doc_id}", response_model=MessageResponse)
    def delete_document(
        doc_id: str, service: ResourceService = Depends(get_service)
    ):
        return service.delete(doc_id)

    return resource_router


router.include_router(build_resource_router(SPEAKERS))
router.include_router(build_resource_router(SESSIONS))


admin_router = APIRouter(prefix="/admin")


@admin_router.post("/login", response_model=MessageResponse)
def admin_login(
    body: dict = Depends(read_document),
    authenticator: AdminAuthenticator = Depends(get_authenticator),
):
    try:
        payload = AdminLoginRequest.model_validate(body)
    except ValidationError as exc:
        raise InvalidBody() from exc
    if not authenticator.verify(payload.password):
        raise Unauthorized()
    return MessageResponse(message="Login successful")


router.include_router(admin_router)
