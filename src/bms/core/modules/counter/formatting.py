"""Human-readable document numbers and catalog SKUs."""

import re

from bms.core.modules.counter.models import DocumentType

NUMBER_PREFIXES = {
    DocumentType.INVOICE: "INV",
    DocumentType.BILL: "BILL",
}
NUMBER_WIDTH = 6

_NON_ALNUM_RE = re.compile(r"[^A-Z0-9]")


def format_document_number(document_type: DocumentType, value: int, fiscal_year: str | None) -> str | int:
    """Format an allocated value.

    Invoices and bills become "INV/2024-25/000042" style strings. Padding only
    widens, so values beyond six digits are kept whole. Products and kits use
    the raw integer as their catalog identifier.
    """
    prefix = NUMBER_PREFIXES.get(document_type)
    if prefix is None:
        return value
    if fiscal_year is None:
        raise ValueError(f"Fiscal year is required to format a {document_type} number")
    return f"{prefix}/{fiscal_year}/{value:0{NUMBER_WIDTH}d}"


def _code(text: str | None, length: int) -> str:
    if not text:
        return "X" * length
    return _NON_ALNUM_RE.sub("X", text.upper()).ljust(length, "X")[:length]


def product_sku(product_id: int, category: str | None, brand: str | None) -> str:
    """SKU like "EL-SO-00042" built from category, brand and the product id."""
    return f"{_code(category, 2)}-{_code(brand, 2)}-{product_id:05d}"


def kit_sku(kit_id: int, name: str) -> str:
    """SKU like "KIT-STA-0007" built from the kit name and kit id."""
    return f"KIT-{_code(name, 3)}-{kit_id:04d}"
