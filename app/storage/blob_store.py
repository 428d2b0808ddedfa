"""
Blob operations using Azure Blob Storage.
"""

from datetime import datetime, timedelta, timezone
from typing import List, Optional

from azure.storage.blob import BlobSasPermissions, generate_blob_sas
from azure.storage.blob.aio import ContainerClient

from app.core.logger import get_logger

logger = get_logger(__name__)

SAS_TTL = timedelta(hours=1)


class BlobTooLargeError(ValueError):
    """Raised when a blob exceeds the configured read limit."""

    def __init__(self, name: str, size: int, limit: int):
        super().__init__(f"Blob '{name}' is {size} bytes, limit is {limit}")
        self.name = name
        self.size = size
        self.limit = limit


class BlobStorageManager:
    def __init__(self, container_client: ContainerClient, max_bytes: Optional[int] = None):
        self._container = container_client
        self._max_bytes = max_bytes

    @classmethod
    def from_connection_string(
        cls, connection: str, container: str, max_bytes: Optional[int] = None
    ) -> "BlobStorageManager":
        container_client = ContainerClient.from_connection_string(connection, container_name=container)
        return cls(container_client, max_bytes=max_bytes)

    async def list_files(self, prefix: str = "") -> List[str]:
        """List blob names under ``prefix``. An empty prefix lists the whole container."""
        return [
            blob.name
            async for blob in self._container.list_blobs(name_starts_with=prefix or None)
        ]

    async def read_file(self, name: str) -> str:
        """Download a blob and decode it as UTF-8."""
        blob = self._container.get_blob_client(name)
        if self._max_bytes is not None:
            properties = await blob.get_blob_properties()
            if properties.size > self._max_bytes:
                raise BlobTooLargeError(name, properties.size, self._max_bytes)
        stream = await blob.download_blob()
        data = await stream.readall()
        logger.debug(f"read {len(data)} bytes from {name}")
        return data.decode("utf-8")

    def get_sas_url(self, name: str) -> str:
        """Signed read-only URL for ``name``, valid for one hour from now."""
        account_key = getattr(self._container.credential, "account_key", None)
        if not account_key:
            raise ValueError("Connection string has no account key to sign with")
        sas = generate_blob_sas(
            account_name=self._container.account_name,
            container_name=self._container.container_name,
            blob_name=name,
            account_key=account_key,
            permission=BlobSasPermissions(read=True),
            expiry=datetime.now(timezone.utc) + SAS_TTL,
        )
        return f"{self._container.get_blob_client(name).url}?{sas}"

    async def close(self) -> None:
        await self._container.close()
