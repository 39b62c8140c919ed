"""
Pytest configuration and shared fixtures for the bill pipeline tests.
"""
import pytest
from typing import AsyncGenerator
from unittest.mock import AsyncMock, MagicMock
from httpx import ASGITransport, AsyncClient

from billed.bills.dependencies import DraftRegistry, get_bill_store, get_draft_registry
from billed.bills.schemas import RawBill, StagedFile
from billed.config import Settings
from billed.store.base import BillStore
from main import app


@pytest.fixture
def test_settings() -> Settings:
    """Create test settings with overridden values."""
    return Settings(
        ENV="test",
        PORT=8000,
        API_URL="http://store.test",
        API_TOKEN="test-token",
        API_TIMEOUT=5,
        USER_EMAIL="a@a",
    )


@pytest.fixture
def bills_fixture() -> list[dict]:
    """Bills as the store delivers them, deliberately not in date order."""
    return [
        {
            "id": "47qAXb6fIm2zOKkLzMro",
            "vat": "80",
            "fileUrl": "https://test.storage.tld/v0/b/billable/preview-facture-free-201801-pdf-1.jpg",
            "status": "pending",
            "type": "Hôtel et logement",
            "commentary": "séminaire billed",
            "name": "encore",
            "fileName": "preview-facture-free-201801-pdf-1.jpg",
            "date": "2004-04-04",
            "amount": 400,
            "commentAdmin": "ok",
            "email": "a@a",
            "pct": 20,
        },
        {
            "id": "BeKy5Mo4jkmdfPGYpTxZ",
            "vat": "",
            "amount": 100,
            "name": "test1",
            "fileName": "1592770761.jpeg",
            "commentary": "plop",
            "pct": 20,
            "type": "Transports",
            "email": "a@a",
            "fileUrl": "https://test.storage.tld/v0/b/billable/1592770761.jpeg",
            "date": "2001-01-01",
            "status": "refused",
            "commentAdmin": "en fait non",
        },
        {
            "id": "UIUZtnPQvnbFnB0ozvJh",
            "name": "test3",
            "email": "a@a",
            "type": "Services en ligne",
            "vat": "60",
            "pct": 20,
            "commentAdmin": "bon bah d'accord",
            "amount": 300,
            "status": "accepted",
            "date": "2003-03-03",
            "commentary": "",
            "fileName": "facture-client-php-exportee.png",
            "fileUrl": "https://test.storage.tld/v0/b/billable/facture-client-php-exportee.png",
        },
        {
            "id": "qcCK3SzECmaZAGRrHjaC",
            "status": "refused",
            "pct": 20,
            "amount": 200,
            "email": "a@a",
            "name": "test2",
            "vat": "40",
            "fileName": "preview-facture-free-201801-pdf-1.jpg",
            "date": "2002-02-02",
            "commentAdmin": "pas la bonne facture",
            "commentary": "test2",
            "type": "Restaurants et bars",
            "fileUrl": "https://test.storage.tld/v0/b/billable/preview-facture-free-201801-pdf-1.jpg",
        },
    ]


@pytest.fixture
def mock_store(bills_fixture: list[dict]) -> AsyncMock:
    """BillStore double answering like the REST store."""
    store = AsyncMock(spec=BillStore)
    store.list.return_value = [RawBill.model_validate(doc) for doc in bills_fixture]
    store.create.return_value = StagedFile(fileUrl="fileUrl", key="key")
    store.update.side_effect = lambda payload: RawBill.model_validate(
        {"id": payload.id, **payload.to_store_body()}
    )
    return store


@pytest.fixture
def navigate() -> MagicMock:
    return MagicMock()


@pytest.fixture
def draft_registry() -> DraftRegistry:
    return DraftRegistry()


@pytest.fixture
async def client(mock_store: AsyncMock, draft_registry: DraftRegistry) -> AsyncGenerator[AsyncClient, None]:
    """
    Create a test client for the FastAPI application.
    Overrides the bill store and draft registry dependencies.
    """
    app.dependency_overrides[get_bill_store] = lambda: mock_store
    app.dependency_overrides[get_draft_registry] = lambda: draft_registry

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()
