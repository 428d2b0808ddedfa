"""
Service handles shared by request handlers.

Clients are built once at startup and handed to the routes through FastAPI
dependencies, so tests can swap in doubles.
"""

from fastapi import Request
from langchain_core.language_models import BaseChatModel
from langchain_openai import AzureChatOpenAI

from app.catalog import DEFAULT_CATALOG_BLOB, MachineListResolver
from app.core.config import Settings
from app.langgraph.graph import ChatGraph
from app.rag import AzureAISearcher
from app.storage import BlobStorageManager


class Services:
    def __init__(
        self,
        blob_store: BlobStorageManager,
        searcher: AzureAISearcher,
        llm: BaseChatModel,
        catalog_blob: str = DEFAULT_CATALOG_BLOB,
    ):
        self.blob_store = blob_store
        self.searcher = searcher
        self.llm = llm
        self.chat = ChatGraph(searcher, llm)
        self.machines = MachineListResolver(blob_store, llm, catalog_blob)

    async def aclose(self) -> None:
        await self.searcher.close()
        await self.blob_store.close()


def build_services(settings: Settings) -> Services:
    llm = AzureChatOpenAI(
        azure_endpoint=settings.AZURE_OPENAI_ENDPOINT,
        api_key=settings.AZURE_OPENAI_KEY.get_secret_value(),
        azure_deployment=settings.AZURE_OPENAI_CHAT_DEPLOYMENT,
        api_version=settings.AZURE_OPENAI_API_VERSION,
    )
    blob_store = BlobStorageManager.from_connection_string(
        settings.AZURE_BLOB_CONN_STR.get_secret_value(),
        settings.AZURE_BLOB_CONTAINER,
        max_bytes=settings.MAX_BLOB_BYTES,
    )
    return Services(
        blob_store=blob_store,
        searcher=AzureAISearcher.from_settings(settings),
        llm=llm,
        catalog_blob=settings.MACHINE_CATALOG_BLOB,
    )


def get_services(request: Request) -> Services:
    return request.app.state.services
