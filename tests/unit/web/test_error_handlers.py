"""Tests for HTTP error mapping."""

import json

import pytest

from bms.errors import ConflictError, NotFoundError, SequenceExhaustedError, StoreUnavailableError, ValidationError
from bms.web.error_handlers import general_exception_handler, store_unavailable_handler, user_error_handler


def body(response):
    return json.loads(response.body)


class TestUserErrorHandler:
    """Tests for user_error_handler."""

    @pytest.mark.asyncio
    async def test_exhaustion_is_retryable_and_distinct_from_validation(self):
        exhausted = await user_error_handler(None, SequenceExhaustedError("invoice", 3))
        invalid = await user_error_handler(None, ValidationError("bad amount"))

        assert exhausted.status_code == 503
        assert body(exhausted) == {
            "message": "Failed to allocate the next invoice number after 3 attempts",
            "type": "sequence_exhausted",
        }
        assert invalid.status_code == 400
        assert body(invalid)["type"] == "validation_error"

    @pytest.mark.asyncio
    async def test_not_found(self):
        response = await user_error_handler(None, NotFoundError("Kit not found: 4"))
        assert response.status_code == 404
        assert body(response) == {"message": "Kit not found: 4", "type": "not_found"}

    @pytest.mark.asyncio
    async def test_duplicate_key_conflict_is_409(self):
        response = await user_error_handler(None, ConflictError("SKU or product id conflict. Please try again."))
        assert response.status_code == 409
        assert body(response) == {"message": "SKU or product id conflict. Please try again.", "type": "conflict"}


class TestStoreUnavailableHandler:
    @pytest.mark.asyncio
    async def test_details_are_not_leaked(self):
        try:
            raise StoreUnavailableError("Counter store failed for invoice") from ConnectionError("10.0.0.5:27017")
        except StoreUnavailableError as e:
            response = await store_unavailable_handler(None, e)

        assert response.status_code == 503
        assert body(response) == {"message": "Storage is temporarily unavailable.", "type": "store_unavailable"}


@pytest.mark.asyncio
async def test_unexpected_error_is_500():
    try:
        raise RuntimeError("boom")
    except RuntimeError as e:
        response = await general_exception_handler(None, e)
    assert response.status_code == 500
    assert body(response)["type"] == "internal_server_error"
