"""
Data models for search results and the machine catalog.
"""

from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, computed_field


class SearchHit(BaseModel):
    """One document returned by the search index."""
    model_config = ConfigDict(allow_inf_nan=False)

    id: str = Field(..., description="Document key in the search index")
    path: Optional[str] = Field(None, description="Blob path of the source document")
    json_path: Optional[str] = Field(None, description="Blob path of the extracted JSON")
    md_path: Optional[str] = Field(None, description="Blob path of the extracted markdown")
    original_path: Optional[str] = Field(None, description="Path of the original upload")
    score: Optional[float] = Field(None, description="Relevance score from the search service")


class MachineEntry(BaseModel):
    """A manufacturer and its model names within one catalog category."""
    model_config = ConfigDict(extra="allow")

    manufacturer: str
    models: List[str] = Field(default_factory=list)


MachineCatalog = TypeAdapter(Dict[str, List[MachineEntry]])


class MachineListResult(BaseModel):
    """Outcome of a category lookup.

    ``category`` is ``None`` when the model answer is not one of the catalog
    keys, which keeps an unrecognised answer apart from a category that simply
    has no matching entries.
    """
    vehicle_type: str
    answer: str
    category: Optional[str] = None
    entries: List[MachineEntry] = Field(default_factory=list)

    @computed_field
    @property
    def resolved(self) -> bool:
        return self.category is not None
