"""
Search operations using Azure AI Search.
"""

from typing import List, Optional

from azure.core.credentials import AzureKeyCredential
from azure.search.documents.aio import SearchClient
from langchain_core.embeddings import Embeddings
from langchain_openai import AzureOpenAIEmbeddings

from app.core.config import Settings
from app.core.logger import get_logger
from app.rag.models import SearchHit

logger = get_logger(__name__)

HIT_FIELDS = ("id", "path", "json_path", "md_path", "original_path")


class AzureAISearcher:
    def __init__(self, search_client: SearchClient, embeddings: Optional[Embeddings] = None):
        self._search_client = search_client
        self._embeddings = embeddings

    @classmethod
    def from_settings(cls, settings: Settings) -> "AzureAISearcher":
        search_client = SearchClient(
            endpoint=settings.AZURE_SEARCH_ENDPOINT,
            index_name=settings.AZURE_SEARCH_INDEX,
            credential=AzureKeyCredential(settings.AZURE_SEARCH_KEY.get_secret_value()),
        )
        embeddings = AzureOpenAIEmbeddings(
            azure_endpoint=settings.AZURE_OPENAI_ENDPOINT,
            api_key=settings.AZURE_OPENAI_KEY.get_secret_value(),
            azure_deployment=settings.AZURE_OPENAI_EMBEDDING_DEPLOYMENT,
            api_version=settings.AZURE_OPENAI_API_VERSION,
        )
        return cls(search_client, embeddings)

    async def embed(self, text: str) -> List[float]:
        """Embed ``text`` with the embedding deployment. Not used by ``search``."""
        if self._embeddings is None:
            raise RuntimeError("No embedding model configured")
        return await self._embeddings.aembed_query(text)

    async def search(
        self,
        query: str,
        filter_expression: Optional[str] = None,
        top_k: int = 5,
    ) -> List[SearchHit]:
        """Full-text search, no vectors involved. Hits keep the index order."""
        if top_k < 1:
            raise ValueError(f"top_k must be at least 1, got {top_k}")
        results = await self._search_client.search(
            search_text=query,
            filter=filter_expression,
            top=top_k,
        )
        hits = [
            SearchHit(
                **{field: doc.get(field) for field in HIT_FIELDS},
                score=doc.get("@search.score"),
            )
            async for doc in results
        ]
        logger.debug(f"search returned {len(hits)} hits for {query!r}")
        return hits

    async def close(self) -> None:
        await self._search_client.close()
