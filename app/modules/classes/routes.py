from fastapi import APIRouter, Depends
from app.database.supabase_client import get_supabase
from app.modules.classes.schemas import ClassCreate, ClassUpdate, ClassResponse
from app.modules.classes.service import ClassService
from app.core.dependencies import require_permission
from app.core.notifications import Notifier, get_notifier
from supabase import Client
from typing import List, Optional, Dict

router = APIRouter(prefix="/classes", tags=["classes"])


def get_class_service(
    supabase: Client = Depends(get_supabase),
    notifier: Notifier = Depends(get_notifier)
) -> ClassService:
    return ClassService(supabase, notifier)


@router.get("", response_model=List[ClassResponse])
async def list_classes(
    department_id: Optional[str] = None,
    profile: Dict = Depends(require_permission("classes:read")),
    service: ClassService = Depends(get_class_service)
):
    """List classes, optionally for one department ("all" for every department)"""
    if department_id:
        return service.get_classes_by_department(department_id)
    return service.get_classes()


@router.get("/{class_id}", response_model=ClassResponse)
async def get_class(
    class_id: str,
    profile: Dict = Depends(require_permission("classes:read")),
    service: ClassService = Depends(get_class_service)
):
    return service.get_class(class_id)


@router.post("", response_model=ClassResponse, status_code=201)
async def add_class(
    class_data: ClassCreate,
    profile: Dict = Depends(require_permission("classes:create")),
    service: ClassService = Depends(get_class_service)
):
    return service.add_class(class_data)


@router.put("/{class_id}", response_model=ClassResponse)
async def update_class(
    class_id: str,
    class_data: ClassUpdate,
    profile: Dict = Depends(require_permission("classes:update")),
    service: ClassService = Depends(get_class_service)
):
    return service.update_class(class_id, class_data)


@router.delete("/{class_id}", status_code=204)
async def delete_class(
    class_id: str,
    profile: Dict = Depends(require_permission("classes:delete")),
    service: ClassService = Depends(get_class_service)
):
    service.delete_class(class_id)
    return None
