from fastapi import APIRouter

from bms.core.modules.kit.models import Kit, KitData
from bms.web.deps import AppDep
from bms.web.openapi import ErrorResponse

router: APIRouter = APIRouter(tags=["kits"])


@router.post(
    "/kits",
    summary="Create kit",
    description="Bundle existing products into a kit. Without a price the kit costs the sum of its components.",
    operation_id="createKit",
    status_code=201,
    responses={
        201: {"description": "Kit created"},
        400: {"model": ErrorResponse, "description": "Duplicate name or component"},
        404: {"model": ErrorResponse, "description": "Component product not found"},
        503: {"model": ErrorResponse, "description": "Id allocation failed, safe to retry"},
    },
)
async def create_kit(data: KitData, app: AppDep) -> Kit:
    return await app.create_kit(data)


@router.get(
    "/kits/{kit_id}",
    summary="Get kit",
    operation_id="getKit",
    responses={404: {"model": ErrorResponse, "description": "Kit not found"}},
)
async def get_kit(kit_id: int, app: AppDep) -> Kit:
    return await app.get_kit(kit_id)
