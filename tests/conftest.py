"""Shared fixtures: filesystem processor and an in-process fake MongoDB."""
from __future__ import annotations

import pytest

from toolbox_mcp_server.config import DocumentStoreConfig
from toolbox_mcp_server.primitives import document_store_catalog, filesystem_catalog
from toolbox_mcp_server.request_processor import RequestProcessor
from toolbox_mcp_server.session import DocumentStoreSession, FilesystemSession

from .fakes import FakeClient, FakeDatabase, make_client_factory


@pytest.fixture
def orders_db() -> FakeDatabase:
    return FakeDatabase(
        {
            "orders": [
                {"_id": 1, "status": "open", "total": 30},
                {"_id": 2, "status": "closed", "total": 10},
                {"_id": 3, "status": "open", "total": 20},
                {"_id": 4, "status": "open", "total": 50},
                {"_id": 5, "status": "closed", "total": 40},
            ],
            "customers": [{"_id": "c1", "name": "Ada"}],
        }
    )


@pytest.fixture
def fake_client(orders_db: FakeDatabase) -> FakeClient:
    return FakeClient(orders_db)


@pytest.fixture
async def doc_session(fake_client: FakeClient):
    config = DocumentStoreConfig(database="shop")
    session = DocumentStoreSession(config, client_factory=make_client_factory(fake_client))
    async with session:
        yield session


@pytest.fixture
def doc_processor(doc_session: DocumentStoreSession) -> RequestProcessor:
    return RequestProcessor(document_store_catalog, doc_session)


@pytest.fixture
def fs_processor() -> RequestProcessor:
    return RequestProcessor(filesystem_catalog, FilesystemSession())
