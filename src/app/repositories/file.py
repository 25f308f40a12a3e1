"""Stored file metadata and the chunked blob store behind it."""

from collections.abc import AsyncIterator
from typing import Protocol
from uuid import UUID

from sqlmodel import select

from src.app.models import StoredFile, StoredFileChunk
from src.app.repositories.base import BaseRepository


class BlobStore(Protocol):
    """Storage backend for uploaded bytes.

    put() persists the content with its metadata row. get_metadata() never
    touches content. stream() yields content in order.
    """

    async def put(self, file: StoredFile, content: bytes) -> StoredFile: ...

    async def get_metadata(self, file_id: UUID) -> StoredFile | None: ...

    def stream(self, file: StoredFile) -> AsyncIterator[bytes]: ...


class StoredFileRepository(BaseRepository[StoredFile]):
    """Database-backed BlobStore: metadata row plus fixed-size chunks."""

    model = StoredFile

    async def put(self, file: StoredFile, content: bytes) -> StoredFile:
        file.size = len(content)
        self.session.add(file)
        await self.session.flush()

        chunk_size = file.chunk_size
        for n, offset in enumerate(range(0, len(content), chunk_size)):
            self.session.add(
                StoredFileChunk(file_id=file.id, n=n, data=content[offset : offset + chunk_size])
            )
        await self.session.flush()
        return file

    async def get_metadata(self, file_id: UUID) -> StoredFile | None:
        return await self.get_by_id(file_id)

    async def stream(self, file: StoredFile) -> AsyncIterator[bytes]:
        """Yield chunks one query at a time so large files are never fully loaded."""
        n = 0
        while True:
            result = await self.session.execute(
                select(StoredFileChunk.data).where(
                    StoredFileChunk.file_id == file.id,
                    StoredFileChunk.n == n,
                )
            )
            data = result.scalar_one_or_none()
            if data is None:
                return
            yield data
            n += 1
