from fastapi import APIRouter, Depends, HTTPException, status
from app.database.supabase_client import get_supabase
from app.modules.approvals.request_service import RequestService
from app.modules.approvals.schemas import RequestStatus
from app.core.dependencies import require_permission, scoped_user_id, display_name
from app.core.notifications import Notifier, get_notifier
from supabase import Client
from pydantic import BaseModel
from typing import List, Optional, Dict, Type


def build_request_router(
    prefix: str,
    resource: str,
    service_class: Type[RequestService],
    create_schema: Type[BaseModel],
    update_schema: Type[BaseModel],
    response_schema: Type[BaseModel],
) -> APIRouter:
    """CRUD routes for one request table. Teachers only reach their own requests."""
    router = APIRouter(prefix=prefix, tags=[resource])

    def get_service(
        supabase: Client = Depends(get_supabase),
        notifier: Notifier = Depends(get_notifier)
    ) -> RequestService:
        return service_class(supabase, notifier)

    @router.get("", response_model=List[response_schema])
    async def list_requests(
        user_id: Optional[str] = None,
        status: Optional[RequestStatus] = None,
        profile: Dict = Depends(require_permission(f"{resource}:read")),
        service: RequestService = Depends(get_service)
    ):
        return service.list_requests(user_id=scoped_user_id(profile, user_id), status=status)

    @router.get("/{request_id}", response_model=response_schema)
    async def get_request(
        request_id: str,
        profile: Dict = Depends(require_permission(f"{resource}:read")),
        service: RequestService = Depends(get_service)
    ):
        request = service.get_request(request_id)
        if profile.get("role") == "teacher" and request.user_id != profile["id"]:
            raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Request not accessible")
        return request

    @router.post("", response_model=response_schema, status_code=201)
    async def create_request(
        request_data: create_schema,
        profile: Dict = Depends(require_permission(f"{resource}:create")),
        service: RequestService = Depends(get_service)
    ):
        return service.create_request(request_data, profile["id"], display_name(profile))

    @router.put("/{request_id}", response_model=response_schema)
    async def update_request(
        request_id: str,
        request_data: update_schema,
        profile: Dict = Depends(require_permission(f"{resource}:update")),
        service: RequestService = Depends(get_service)
    ):
        return service.update_request(request_id, request_data, profile)

    @router.delete("/{request_id}", status_code=204)
    async def delete_request(
        request_id: str,
        profile: Dict = Depends(require_permission(f"{resource}:delete")),
        service: RequestService = Depends(get_service)
    ):
        service.delete_request(request_id, profile)
        return None

    return router
