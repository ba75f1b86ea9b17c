from fastapi import APIRouter
from pydantic import BaseModel, Field

from bms.core.modules.counter.models import DocumentType
from bms.web.deps import AppDep
from bms.web.openapi import ErrorResponse

router: APIRouter = APIRouter(tags=["sequences"])


class NextNumberResponse(BaseModel):
    document_type: DocumentType
    value: str | int = Field(..., description="Formatted number for invoices and bills, raw integer for products and kits")


class CurrentSequenceResponse(BaseModel):
    document_type: DocumentType
    fiscal_year: str | None = Field(..., description="Fiscal year of the counter, null for lifetime sequences")
    value: int = Field(..., description="Last issued value, 0 if nothing was issued yet", ge=0)


@router.post(
    "/sequences/{document_type}/next",
    summary="Allocate next number",
    description="Allocate the next number for a document type without creating a document.",
    operation_id="allocateNextNumber",
    responses={
        200: {"description": "Allocated number"},
        503: {"model": ErrorResponse, "description": "Allocation failed, safe to retry"},
    },
)
async def allocate_next_number(document_type: DocumentType, app: AppDep) -> NextNumberResponse:
    value = await app.next_number(document_type)
    return NextNumberResponse(document_type=document_type, value=value)


@router.get(
    "/sequences/{document_type}/current",
    summary="Get current sequence",
    description="Last value issued for a document type in the current fiscal year (or lifetime for products and kits).",
    operation_id="getCurrentSequence",
)
async def get_current_sequence(document_type: DocumentType, app: AppDep) -> CurrentSequenceResponse:
    scope, value = await app.current_sequence(document_type)
    return CurrentSequenceResponse(document_type=document_type, fiscal_year=scope.year, value=value)
