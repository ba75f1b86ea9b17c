"""Tests for document number and SKU formatting."""

import pytest

from bms.core.modules.counter.formatting import format_document_number, kit_sku, product_sku
from bms.core.modules.counter.models import DocumentType


class TestFormatDocumentNumber:
    """Tests for format_document_number function."""

    def test_invoice_number_is_zero_padded(self):
        assert format_document_number(DocumentType.INVOICE, 42, "2024-25") == "INV/2024-25/000042"

    def test_bill_number_uses_bill_prefix(self):
        assert format_document_number(DocumentType.BILL, 7, "2025-26") == "BILL/2025-26/000007"

    def test_padding_never_truncates(self):
        assert format_document_number(DocumentType.INVOICE, 1234567, "2024-25") == "INV/2024-25/1234567"
        assert format_document_number(DocumentType.INVOICE, 999999, "2024-25") == "INV/2024-25/999999"

    @pytest.mark.parametrize("document_type", [DocumentType.PRODUCT, DocumentType.KIT])
    def test_catalog_types_return_raw_integer(self, document_type):
        assert format_document_number(document_type, 17, None) == 17

    def test_year_scoped_number_without_year_is_rejected(self):
        with pytest.raises(ValueError, match="Fiscal year"):
            format_document_number(DocumentType.INVOICE, 1, None)


class TestProductSku:
    """Tests for product_sku function."""

    def test_category_and_brand_codes(self):
        assert product_sku(42, "Electrical", "Sony") == "EL-SO-00042"

    def test_non_alphanumerics_become_x(self):
        assert product_sku(1, "a-b", "3m") == "AX-3M-00001"

    def test_missing_or_short_values_are_padded(self):
        assert product_sku(5, None, "") == "XX-XX-00005"
        assert product_sku(5, "q", None) == "QX-XX-00005"

    def test_large_id_is_not_truncated(self):
        assert product_sku(123456, "ab", "cd") == "AB-CD-123456"


class TestKitSku:
    """Tests for kit_sku function."""

    def test_name_code_and_padding(self):
        assert kit_sku(7, "Starter pack") == "KIT-STA-0007"

    def test_short_name_padded_with_x(self):
        assert kit_sku(12, "ab") == "KIT-ABX-0012"

    def test_non_alphanumerics_become_x(self):
        assert kit_sku(1, "A/B kit") == "KIT-AXB-0001"
        assert "/" not in kit_sku(3, "///")
