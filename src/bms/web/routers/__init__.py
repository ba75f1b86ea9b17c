from bms.web.routers.bills import router as bills_router
from bms.web.routers.invoices import router as invoices_router
from bms.web.routers.kits import router as kits_router
from bms.web.routers.products import router as products_router
from bms.web.routers.sequences import router as sequences_router

__all__ = [
    "bills_router",
    "invoices_router",
    "kits_router",
    "products_router",
    "sequences_router",
]
