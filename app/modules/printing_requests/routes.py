from app.modules.approvals.request_routes import build_request_router
from app.modules.printing_requests.schemas import (
    PrintingRequestCreate, PrintingRequestUpdate, PrintingRequestResponse
)
from app.modules.printing_requests.service import PrintingRequestService

router = build_request_router(
    prefix="/printing-requests",
    resource="printing_requests",
    service_class=PrintingRequestService,
    create_schema=PrintingRequestCreate,
    update_schema=PrintingRequestUpdate,
    response_schema=PrintingRequestResponse,
)
