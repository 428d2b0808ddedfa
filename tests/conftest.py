import json

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from langchain_core.messages import AIMessage

from app.core.config import REQUIRED_VARS
from app.core.services import Services
from app.rag import SearchHit

SETTINGS_ENV = {
    "AZURE_OPENAI_ENDPOINT": "https://example.openai.azure.com",
    "AZURE_OPENAI_KEY": "openai-key",
    "AZURE_OPENAI_CHAT_DEPLOYMENT": "gpt-4o",
    "AZURE_OPENAI_EMBEDDING_DEPLOYMENT": "text-embedding-3-small",
    "AZURE_SEARCH_ENDPOINT": "https://example.search.windows.net",
    "AZURE_SEARCH_KEY": "search-key",
    "AZURE_SEARCH_INDEX": "machine-pdfs",
    "AZURE_BLOB_CONN_STR": "UseDevelopmentStorage=true",
    "AZURE_BLOB_CONTAINER": "manuals",
}

CATALOG = {
    "excavator": [
        {"manufacturer": "Acme", "models": ["X100", "X200Pro"]},
        {"manufacturer": "Bolt", "models": ["B-7", "PRO-9"], "country": "JP"},
    ],
    "crane": [
        {"manufacturer": "Acme", "models": ["C1"]},
    ],
    "bulldozer": [],
}


class FakeChatModel:
    """Returns canned answers and records every call."""

    def __init__(self, *answers, error: Exception = None):
        self.answers = list(answers)
        self.error = error
        self.calls = []

    async def ainvoke(self, messages, **kwargs):
        self.calls.append((messages, kwargs))
        if self.error is not None:
            raise self.error
        return AIMessage(content=self.answers.pop(0))


class FakeSearcher:
    def __init__(self, hits=None, error: Exception = None):
        self.hits = hits or []
        self.error = error
        self.calls = []
        self.closed = False

    async def search(self, query, filter_expression=None, top_k=5):
        self.calls.append((query, filter_expression, top_k))
        if self.error is not None:
            raise self.error
        return self.hits

    async def close(self):
        self.closed = True


class FakeBlobStore:
    def __init__(self, files=None):
        self.files = files or {}
        self.reads = []
        self.closed = False

    async def read_file(self, name):
        self.reads.append(name)
        if name not in self.files:
            raise FileNotFoundError(name)
        return self.files[name]

    async def list_files(self, prefix=""):
        return [name for name in self.files if name.startswith(prefix)]

    def get_sas_url(self, name):
        return f"https://example.invalid/{name}?sig=fake"

    async def close(self):
        self.closed = True


@pytest.fixture
def hits():
    return [
        SearchHit(id="doc-1", path="pdf/a.pdf", json_path="output_json/a.json", score=12.5),
        SearchHit(id="doc-2", md_path="output_md/b.md", score=3.0),
    ]


@pytest.fixture
def blob_store():
    return FakeBlobStore({"output_json/model_list.json": json.dumps(CATALOG)})


@pytest_asyncio.fixture
async def make_client():
    """Build an HTTP client over the app wired to the given fakes."""
    clients = []

    async def _make(searcher=None, llm=None, blob_store=None):
        from app.main import create_app

        services = Services(
            blob_store=blob_store or FakeBlobStore(),
            searcher=searcher or FakeSearcher(),
            llm=llm or FakeChatModel(),
        )
        client = AsyncClient(transport=ASGITransport(app=create_app(services)), base_url="http://test")
        clients.append(client)
        return client

    yield _make

    for client in clients:
        await client.aclose()


@pytest.fixture
def env(monkeypatch, tmp_path):
    """A complete settings environment, with no .env file in the working directory."""
    monkeypatch.chdir(tmp_path)
    for name in ("PORT", "ENV", "HOST", "MACHINE_CATALOG_BLOB", "MAX_BLOB_BYTES", *REQUIRED_VARS):
        monkeypatch.delenv(name, raising=False)
    for name, value in SETTINGS_ENV.items():
        monkeypatch.setenv(name, value)
    return monkeypatch


@pytest.fixture
def services(blob_store, hits):
    return Services(
        blob_store=blob_store,
        searcher=FakeSearcher(hits),
        llm=FakeChatModel("The X200Pro digs deepest.", "excavator"),
    )
