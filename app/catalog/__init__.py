"""
Machine catalog lookup.
"""
from app.catalog.machine_list import DEFAULT_CATALOG_BLOB, MachineListResolver, filter_entries

__all__ = [
    'DEFAULT_CATALOG_BLOB',
    'MachineListResolver',
    'filter_entries',
]
