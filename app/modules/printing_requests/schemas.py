from typing import Optional
from pydantic import Field
from app.modules.approvals.schemas import RequestBase, RequestUpdateBase, RequestResponseBase


class PrintingRequestCreate(RequestBase):
    document_name: str = Field(min_length=1)
    page_count: int = Field(ge=1)
    copies: int = Field(default=1, ge=1)
    color_print: Optional[bool] = False
    double_sided: Optional[bool] = False
    pdf_file_name: Optional[str] = None


class PrintingRequestUpdate(RequestUpdateBase):
    document_name: Optional[str] = Field(default=None, min_length=1)
    page_count: Optional[int] = Field(default=None, ge=1)
    copies: Optional[int] = Field(default=None, ge=1)
    color_print: Optional[bool] = None
    double_sided: Optional[bool] = None
    pdf_file_name: Optional[str] = None


class PrintingRequestResponse(RequestResponseBase):
    document_name: str
    page_count: int
    copies: int
    color_print: Optional[bool] = None
    double_sided: Optional[bool] = None
    pdf_file_name: Optional[str] = None
