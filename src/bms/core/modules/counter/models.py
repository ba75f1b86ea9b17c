"""Counters behind sequential document numbers."""

from enum import StrEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class DocumentType(StrEnum):
    """Types of documents that receive sequential numbers."""

    INVOICE = "invoice"
    BILL = "bill"
    PRODUCT = "product"
    KIT = "kit"

    @property
    def is_year_scoped(self) -> bool:
        """Invoice and bill numbers restart every fiscal year, catalog ids never do."""
        return self in (DocumentType.INVOICE, DocumentType.BILL)


class ScopeKey(BaseModel):
    """Identity of one counter: document type plus fiscal year for year-scoped types."""

    type: DocumentType
    year: str | None = None  # Fiscal year label such as "2024-25", None for lifetime sequences

    model_config = ConfigDict(frozen=True)

    def to_filter(self) -> dict[str, Any]:
        # year=None is stored explicitly so lifetime counters fall under the null-year partial index
        return {"type": self.type.value, "year": self.year}


class Counter(BaseModel):
    """Persisted counter document.

    Unique on (type, year) among documents with a string year, and unique on
    type among documents whose year is null.
    """

    type: DocumentType
    year: str | None = None
    seq: int = Field(default=0, ge=0)  # Last value issued; the next allocation returns seq + 1
