from uuid import UUID

from fastapi import APIRouter

from bms.core.modules.invoice.models import Invoice, InvoiceData
from bms.web.deps import AppDep
from bms.web.openapi import ErrorResponse

router: APIRouter = APIRouter(tags=["invoices"])


@router.post(
    "/invoices",
    summary="Record supplier invoice",
    description="Create an invoice numbered INV/<fiscal year>/<sequence>. Nothing is stored if numbering fails.",
    operation_id="createInvoice",
    status_code=201,
    responses={
        201: {"description": "Invoice created"},
        400: {"model": ErrorResponse, "description": "Invalid invoice data"},
        503: {"model": ErrorResponse, "description": "Number allocation failed, safe to retry"},
    },
)
async def create_invoice(data: InvoiceData, app: AppDep) -> Invoice:
    return await app.create_invoice(data)


@router.get(
    "/invoices/{invoice_id}",
    summary="Get invoice",
    operation_id="getInvoice",
    responses={404: {"model": ErrorResponse, "description": "Invoice not found"}},
)
async def get_invoice(invoice_id: UUID, app: AppDep) -> Invoice:
    return await app.get_invoice(invoice_id)
