"""
Search and catalog models for the chat backend.
"""
from app.rag.models import MachineCatalog, MachineEntry, MachineListResult, SearchHit
from app.rag.searcher import AzureAISearcher

__all__ = [
    'AzureAISearcher',
    'SearchHit',
    'MachineEntry',
    'MachineCatalog',
    'MachineListResult',
]
