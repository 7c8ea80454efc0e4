from typing import Optional, Literal
import datetime as dt
from app.core.schemas import CamelModel
from app.modules.approvals.workflow import Decision

RequestStatus = Literal["pending", "approved", "rejected", "cancelled"]
RequestType = Literal["equipment", "printing", "room"]


class RequestBase(CamelModel):
    """Fields a requester fills in on every request type"""
    class_id: Optional[str] = None
    class_name: Optional[str] = None  # looked up from classes when only class_id is given
    date: dt.date
    notes: Optional[str] = None
    signature: Optional[str] = None


class RequestUpdateBase(CamelModel):
    class_id: Optional[str] = None
    class_name: Optional[str] = None
    date: Optional[dt.date] = None
    notes: Optional[str] = None
    signature: Optional[str] = None


class RequestResponseBase(CamelModel):
    id: str
    user_id: str
    user_name: str
    class_id: Optional[str] = None
    class_name: str
    date: dt.date
    notes: Optional[str] = None
    signature: Optional[str] = None
    status: RequestStatus
    supervisor_approval_timestamp: Optional[dt.datetime] = None
    supervisor_approval_user_id: Optional[str] = None
    supervisor_approval_user_name: Optional[str] = None
    supervisor_approval_notes: Optional[str] = None
    admin_approval_timestamp: Optional[dt.datetime] = None
    admin_approval_user_id: Optional[str] = None
    admin_approval_user_name: Optional[str] = None
    admin_approval_notes: Optional[str] = None
    created_at: Optional[dt.datetime] = None
    updated_at: Optional[dt.datetime] = None


class ApprovalDecision(CamelModel):
    decision: Decision
    notes: Optional[str] = None


class StatusUpdate(CamelModel):
    status: RequestStatus
    notes: Optional[str] = None


class PendingRequest(CamelModel):
    id: str
    request_type: RequestType
    user_name: str
    class_name: str
    date: dt.date
    stage: str
    status: RequestStatus
