"""
Preview store: maps an opaque preview id to a stored (prompt, source) pair.

Two backends:
- MemoryPreviewStore: a plain dict, lost on restart (the default)
- SupabasePreviewStore: rows in a Supabase table
"""
from typing import Dict, Optional
from datetime import datetime, timezone
import logging
import uuid

from supabase import create_client

from config import settings
from models.generation import PreviewRecord

logger = logging.getLogger(__name__)


class PreviewStoreError(Exception):
    """Raised when a preview cannot be persisted."""


def new_preview_id() -> str:
    return str(uuid.uuid4())


class PreviewStore:
    """
    Interface shared by the store backends. Ids are generated by the store
    and never reused.
    """

    async def create(self, prompt: str, source_text: str) -> str:
        raise NotImplementedError

    async def read(self, preview_id: str) -> Optional[PreviewRecord]:
        raise NotImplementedError

    async def delete(self, preview_id: str) -> bool:
        raise NotImplementedError


class MemoryPreviewStore(PreviewStore):
    def __init__(self):
        self._records: Dict[str, PreviewRecord] = {}

    async def create(self, prompt: str, source_text: str) -> str:
        logger.debug(f"Saving preview, prompt length: {len(prompt)}, source length: {len(source_text)}")
        preview_id = new_preview_id()
        self._records[preview_id] = PreviewRecord(
            id=preview_id,
            prompt=prompt,
            source_text=source_text,
            created_at=datetime.now(timezone.utc),
        )
        logger.info(f"Preview saved with ID: {preview_id}")
        return preview_id

    async def read(self, preview_id: str) -> Optional[PreviewRecord]:
        record = self._records.get(preview_id)
        if record is None:
            logger.warning(f"Preview not found with ID: {preview_id}")
        return record

    async def delete(self, preview_id: str) -> bool:
        if self._records.pop(preview_id, None) is None:
            logger.warning(f"Preview not found for deletion, ID: {preview_id}")
            return False
        logger.info(f"Deleted preview {preview_id}")
        return True

    def __len__(self) -> int:
        return len(self._records)


class SupabasePreviewStore(PreviewStore):
    """
    Stores previews as rows of `table` with columns
    id, prompt, source_text, created_at.
    """

    def __init__(self, supabase_client, table: str = settings.PREVIEW_TABLE):
        self.supabase = supabase_client
        self.table = table

    async def create(self, prompt: str, source_text: str) -> str:
        preview_id = new_preview_id()
        data = {
            "id": preview_id,
            "prompt": prompt,
            "source_text": source_text,
            "created_at": datetime.now(timezone.utc).isoformat(),
        }
        try:
            response = self.supabase.table(self.table).insert(data).execute()
        except Exception as e:
            logger.error(f"Error creating preview: {str(e)}", exc_info=True)
            raise PreviewStoreError(f"Could not save preview: {str(e)}") from e

        if not response.data:
            raise PreviewStoreError("Could not save preview: empty insert response")
        logger.info(f"Preview saved with ID: {preview_id}")
        return preview_id

    async def read(self, preview_id: str) -> Optional[PreviewRecord]:
        try:
            response = self.supabase.table(self.table).select("*").eq("id", preview_id).limit(1).execute()
        except Exception as e:
            logger.error(f"Error getting preview {preview_id}: {str(e)}")
            return None

        if not response.data:
            logger.warning(f"Preview not found with ID: {preview_id}")
            return None
        return PreviewRecord.model_validate(response.data[0])

    async def delete(self, preview_id: str) -> bool:
        try:
            response = self.supabase.table(self.table).delete().eq("id", preview_id).execute()
        except Exception as e:
            logger.error(f"Error deleting preview {preview_id}: {str(e)}")
            return False

        if response.data:
            logger.info(f"Deleted preview {preview_id}")
            return True
        return False


def create_preview_store(backend: str = settings.PREVIEW_STORE_BACKEND) -> PreviewStore:
    """Build the store selected by configuration."""
    if backend == "supabase":
        if not settings.SUPABASE_URL:
            raise ValueError("SUPABASE_URL environment variable is required")
        if not settings.SUPABASE_SERVICE_KEY:
            raise ValueError("SUPABASE_SERVICE_KEY environment variable is required")
        client = create_client(settings.SUPABASE_URL, settings.SUPABASE_SERVICE_KEY)
        logger.info(f"Using Supabase preview store (table '{settings.PREVIEW_TABLE}')")
        return SupabasePreviewStore(client)

    if backend != "memory":
        logger.warning(f"Unknown preview store backend '{backend}', using memory")
    return MemoryPreviewStore()


# Global store instance - created on first use
preview_store = None


def get_preview_store() -> PreviewStore:
    """Get or create the preview store"""
    global preview_store
    if preview_store is None:
        preview_store = create_preview_store()
    return preview_store
