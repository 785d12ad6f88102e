"""Shared pytest fixtures for all test suites."""

import os
import tempfile

# Point settings at throwaway locations before the application is imported
_TEST_ROOT = tempfile.mkdtemp(prefix="catalog-tests-")
os.environ.setdefault("DATABASE_URL", f"sqlite+aiosqlite:///{_TEST_ROOT}/catalog.db")
os.environ.setdefault("UPLOAD_DIR", os.path.join(_TEST_ROOT, "uploads"))

from collections.abc import AsyncGenerator

import pytest
import pytest_asyncio

from catalog_service.config.rules import load_classification_rules
from catalog_service.core.category_manager import CategoryManager
from catalog_service.core.document_manager import DocumentManager
from catalog_service.core.knowledge.classifier import Classifier
from catalog_service.core.knowledge.extraction import TextExtractor
from catalog_service.core.search_manager import SearchManager
from catalog_service.infrastructure.database.client import DatabaseClient
from catalog_service.infrastructure.storage.file_store import FileStore


@pytest.fixture(scope="session")
def rules():
    """Default classification rule tables."""
    return load_classification_rules()


@pytest.fixture(scope="session")
def classifier(rules):
    return Classifier(rules)


@pytest.fixture
def file_store(tmp_path):
    """File store rooted in a per-test directory."""
    return FileStore(tmp_path / "uploads")


@pytest_asyncio.fixture
async def db_client(tmp_path) -> AsyncGenerator[DatabaseClient, None]:
    """Database client on a fresh SQLite file per test."""
    client = DatabaseClient(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}")
    await client.initialize()
    yield client
    await client.close()


@pytest.fixture
def doc_manager(db_client, file_store, classifier):
    return DocumentManager(
        db_client,
        file_store,
        TextExtractor(),
        classifier,
        max_upload_size=1024 * 1024,
    )


@pytest.fixture
def search_manager(db_client):
    return SearchManager(db_client)


@pytest.fixture
def category_manager(db_client):
    return CategoryManager(db_client)


@pytest.fixture
def ingest_text(doc_manager):
    """Ingest a text file built from keyword arguments."""

    async def _ingest(content: str, file_name: str = "notes.txt", **fields):
        data = content.encode("utf-8")
        return await doc_manager.ingest(data, file_name, len(data), **fields)

    return _ingest
