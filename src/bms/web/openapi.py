from typing import Any

from fastapi import FastAPI
from fastapi.openapi.utils import get_openapi
from pydantic import BaseModel, Field

from bms.core.modules.counter.models import DocumentType


def set_custom_openapi(app: FastAPI) -> None:
    def custom_openapi() -> dict[str, Any]:
        if app.openapi_schema:
            return app.openapi_schema

        openapi_schema = get_openapi(
            title="BMS API",
            version="0.1.0",
            summary="Invoices, bills, products and kits with sequential document numbers",
            routes=app.routes,
        )
        openapi_schema["info"]["x-document-types"] = [t.value for t in DocumentType]

        app.openapi_schema = openapi_schema
        return app.openapi_schema

    app.openapi = custom_openapi  # type: ignore[method-assign]


class ErrorResponse(BaseModel):
    """Standard error response format."""

    message: str = Field(..., description="Human-readable error message")
    type: str = Field(..., description="Machine-readable error type")

    model_config = {
        "json_schema_extra": {
            "examples": [
                {"message": "Invoice not found: 5f0c...", "type": "not_found"},
                {"message": "Failed to allocate the next invoice number after 3 attempts", "type": "sequence_exhausted"},
                {"message": "Storage is temporarily unavailable.", "type": "store_unavailable"},
            ]
        }
    }
