from uuid import UUID

from fastapi import APIRouter

from bms.core.modules.bill.models import Bill, BillData
from bms.web.deps import AppDep
from bms.web.openapi import ErrorResponse

router: APIRouter = APIRouter(tags=["bills"])


@router.post(
    "/bills",
    summary="Issue customer bill",
    description="Create a bill numbered BILL/<fiscal year>/<sequence>. Nothing is stored if numbering fails.",
    operation_id="createBill",
    status_code=201,
    responses={
        201: {"description": "Bill created"},
        400: {"model": ErrorResponse, "description": "Totals do not add up"},
        503: {"model": ErrorResponse, "description": "Number allocation failed, safe to retry"},
    },
)
async def create_bill(data: BillData, app: AppDep) -> Bill:
    return await app.create_bill(data)


@router.get(
    "/bills/{bill_id}",
    summary="Get bill",
    operation_id="getBill",
    responses={404: {"model": ErrorResponse, "description": "Bill not found"}},
)
async def get_bill(bill_id: UUID, app: AppDep) -> Bill:
    return await app.get_bill(bill_id)
