"""Fixtures wiring document services to mocked collections and a fake core."""

from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import pytest

from bms.errors import SequenceExhaustedError


@pytest.fixture
def collection():
    coll = AsyncMock()
    coll.find_one.return_value = None
    return coll


@pytest.fixture
def database(collection):
    db = MagicMock()
    db.get_collection.return_value = collection
    return db


@pytest.fixture
def counter(allocator):
    """Counter service stand-in backed by the in-memory allocator."""
    return SimpleNamespace(
        allocate=AsyncMock(side_effect=allocator.allocate),
        generate_formatted_number=AsyncMock(side_effect=allocator.generate_formatted_number),
    )


@pytest.fixture
def exhausted_counter():
    return SimpleNamespace(
        allocate=AsyncMock(side_effect=SequenceExhaustedError("product", 3)),
        generate_formatted_number=AsyncMock(side_effect=SequenceExhaustedError("invoice", 3)),
    )


@pytest.fixture
def core(counter):
    return SimpleNamespace(services=SimpleNamespace(counter=counter, product=SimpleNamespace()))
