"""
Object store access for the chat backend.
"""
from app.storage.blob_store import BlobStorageManager, BlobTooLargeError

__all__ = [
    'BlobStorageManager',
    'BlobTooLargeError',
]
