"""
Category resolution over the machine catalog.

The catalog is a JSON object stored in blob storage, keyed by category name,
each value a list of ``{"manufacturer": ..., "models": [...]}`` entries. A
free-text vehicle type is mapped onto one of the keys by the chat model, then
the entries of that category are filtered by manufacturer and model keyword.
"""

from typing import Dict, List, Optional

from langchain_core.language_models import BaseChatModel

from app.core.logger import get_logger
from app.langgraph.prompts import CATEGORY_PROMPT
from app.rag.models import MachineCatalog, MachineEntry, MachineListResult
from app.storage import BlobStorageManager

logger = get_logger(__name__)

DEFAULT_CATALOG_BLOB = "output_json/model_list.json"


def filter_entries(
    entries: List[MachineEntry],
    manufacturer: Optional[str] = None,
    model_keyword: Optional[str] = None,
) -> List[MachineEntry]:
    """Filter catalog entries.

    ``manufacturer`` must match exactly. ``model_keyword`` is a case-insensitive
    substring; when given, only the matching model names are kept and entries
    without any match are dropped.
    """
    results = []
    for entry in entries:
        if manufacturer and entry.manufacturer != manufacturer:
            continue

        if model_keyword:
            keyword = model_keyword.lower()
            models = [m for m in entry.models if keyword in m.lower()]
            if not models:
                continue
            results.append(MachineEntry(manufacturer=entry.manufacturer, models=models))
        else:
            results.append(entry)
    return results


class MachineListResolver:
    def __init__(
        self,
        blob_store: BlobStorageManager,
        llm: BaseChatModel,
        catalog_blob: str = DEFAULT_CATALOG_BLOB,
    ):
        self._blob_store = blob_store
        self._llm = llm
        self._catalog_blob = catalog_blob

    async def load_catalog(self) -> Dict[str, List[MachineEntry]]:
        content = await self._blob_store.read_file(self._catalog_blob)
        return MachineCatalog.validate_json(content)

    async def resolve_category(self, vehicle_type: str, categories: List[str]) -> str:
        """Ask the model to pick one of ``categories``. Returns the stripped answer."""
        messages = CATEGORY_PROMPT.invoke({
            "categories": ", ".join(categories),
            "vehicle_type": vehicle_type,
        }).to_messages()
        response = await self._llm.ainvoke(messages, temperature=0, max_tokens=50)
        content = response.content if isinstance(response.content, str) else ""
        return content.strip()

    async def get_machine_list(
        self,
        vehicle_type: str,
        manufacturer: Optional[str] = None,
        model_keyword: Optional[str] = None,
    ) -> MachineListResult:
        catalog = await self.load_catalog()
        answer = await self.resolve_category(vehicle_type, list(catalog))

        if answer not in catalog:
            logger.warning(f"model answer {answer!r} for {vehicle_type!r} is not a catalog category")
            return MachineListResult(vehicle_type=vehicle_type, answer=answer)

        logger.info(f"resolved {vehicle_type!r} to category {answer!r}")
        return MachineListResult(
            vehicle_type=vehicle_type,
            answer=answer,
            category=answer,
            entries=filter_entries(catalog[answer], manufacturer, model_keyword),
        )
