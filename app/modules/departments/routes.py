from fastapi import APIRouter, Depends
from app.database.supabase_client import get_supabase
from app.modules.departments.schemas import DepartmentCreate, DepartmentUpdate, DepartmentResponse
from app.modules.departments.service import DepartmentService
from app.core.dependencies import require_permission
from app.core.notifications import Notifier, get_notifier
from supabase import Client
from typing import List, Dict

router = APIRouter(prefix="/departments", tags=["departments"])


def get_department_service(
    supabase: Client = Depends(get_supabase),
    notifier: Notifier = Depends(get_notifier)
) -> DepartmentService:
    return DepartmentService(supabase, notifier)


@router.get("", response_model=List[DepartmentResponse])
async def list_departments(
    profile: Dict = Depends(require_permission("departments:read")),
    service: DepartmentService = Depends(get_department_service)
):
    return service.list_departments()


@router.get("/{department_id}", response_model=DepartmentResponse)
async def get_department(
    department_id: str,
    profile: Dict = Depends(require_permission("departments:read")),
    service: DepartmentService = Depends(get_department_service)
):
    return service.get_department(department_id)


@router.post("", response_model=DepartmentResponse, status_code=201)
async def create_department(
    department_data: DepartmentCreate,
    profile: Dict = Depends(require_permission("departments:create")),
    service: DepartmentService = Depends(get_department_service)
):
    return service.create_department(department_data)


@router.put("/{department_id}", response_model=DepartmentResponse)
async def update_department(
    department_id: str,
    department_data: DepartmentUpdate,
    profile: Dict = Depends(require_permission("departments:update")),
    service: DepartmentService = Depends(get_department_service)
):
    return service.update_department(department_id, department_data)


@router.delete("/{department_id}", status_code=204)
async def delete_department(
    department_id: str,
    profile: Dict = Depends(require_permission("departments:delete")),
    service: DepartmentService = Depends(get_department_service)
):
    service.delete_department(department_id)
    return None
