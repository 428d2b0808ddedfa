import json
from typing import List, Optional, TypedDict

from langchain_core.language_models import BaseChatModel
from langgraph.graph import START, StateGraph
from langgraph.graph.state import CompiledStateGraph

from app.core.logger import get_logger
from app.langgraph.prompts import CHAT_PROMPT
from app.rag import AzureAISearcher, SearchHit

logger = get_logger(__name__)


class State(TypedDict):
    question: str
    context: List[SearchHit]
    answer: str


def serialize_hits(hits: List[SearchHit]) -> str:
    """Render search hits as the indented JSON block handed to the model."""
    return json.dumps(
        [hit.model_dump(exclude_none=True) for hit in hits],
        indent=2,
        ensure_ascii=False,
    )


class ChatGraph:
    """One retrieval step followed by one generation step."""

    def __init__(self, searcher: AzureAISearcher, llm: BaseChatModel):
        self._searcher = searcher
        self._llm = llm
        self._graph: Optional[CompiledStateGraph] = None

    async def _retrieve(self, state: State):
        results = await self._searcher.search(state["question"])
        return {"context": results}

    async def _generate(self, state: State):
        messages = CHAT_PROMPT.invoke({
            "question": state["question"],
            "context": serialize_hits(state["context"]),
        }).to_messages()
        response = await self._llm.ainvoke(messages)
        answer = response.content if isinstance(response.content, str) else ""
        return {"answer": answer}

    def _create_graph(self) -> CompiledStateGraph:
        graph_builder = StateGraph(State).add_sequence([self._retrieve, self._generate])
        graph_builder.add_edge(START, "_retrieve")
        return graph_builder.compile()

    async def multi_step_chat(self, question: str) -> str:
        if self._graph is None:
            self._graph = self._create_graph()
        logger.debug(f"chat question: {question!r}")
        response = await self._graph.ainvoke({"question": question})
        return response.get("answer") or ""
