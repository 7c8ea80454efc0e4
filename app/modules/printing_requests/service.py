from app.modules.approvals.request_service import RequestService
from app.modules.printing_requests.schemas import PrintingRequestResponse


class PrintingRequestService(RequestService):
    table = "printing_requests"
    label = "printing request"
    response_model = PrintingRequestResponse
