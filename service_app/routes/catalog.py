"""Mock user and service catalog endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Request, status

from service_app import catalog
from service_app.models import MockService, ServiceDetail, ServiceList, UserList
from service_app.payloads import read_request_payload

router = APIRouter(prefix="/api")


@router.get("/users", response_model=UserList)
def list_users() -> UserList:
    return catalog.list_users()


@router.get("/services", response_model=ServiceList)
def list_services() -> ServiceList:
    return catalog.list_services()


@router.get("/services/{service_id}", response_model=ServiceDetail)
def get_service(service_id: str) -> ServiceDetail:
    return catalog.describe_service(service_id)


@router.post("/services", response_model=MockService, status_code=status.HTTP_201_CREATED)
async def create_service(request: Request) -> MockService:
    # Presence is checked before typing: a falsy value of any JSON type
    # counts as a missing field.
    payload = await read_request_payload(request)
    return catalog.create_service_draft(payload)
