from fastapi import APIRouter

from bms.core.modules.product.models import Product, ProductData
from bms.web.deps import AppDep
from bms.web.openapi import ErrorResponse

router: APIRouter = APIRouter(tags=["products"])


@router.post(
    "/products",
    summary="Create product",
    description="Create a catalog product. product_id and sku are assigned by the server.",
    operation_id="createProduct",
    status_code=201,
    responses={
        201: {"description": "Product created"},
        503: {"model": ErrorResponse, "description": "Id allocation failed, safe to retry"},
    },
)
async def create_product(data: ProductData, app: AppDep) -> Product:
    return await app.create_product(data)


@router.get(
    "/products/{product_id}",
    summary="Get product",
    operation_id="getProduct",
    responses={404: {"model": ErrorResponse, "description": "Product not found"}},
)
async def get_product(product_id: int, app: AppDep) -> Product:
    return await app.get_product(product_id)
