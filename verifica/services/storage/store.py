import logging
from typing import Optional

from pydantic import ValidationError

from verifica.core.errors import PersistenceError
from verifica.core.models import Verdict, VerificationRecord
from verifica.services.storage.client import SupabaseClient, SupabaseError

logger = logging.getLogger(__name__)


class VerificationStore:
    """Inserts one immutable verification row per request."""

    def __init__(self, client: SupabaseClient, table: str):
        self.client = client
        self.table = table

    async def save(
        self,
        content: Optional[str],
        url: Optional[str],
        verdict: Verdict,
        image_url: Optional[str] = None,
    ) -> VerificationRecord:
        row = {
            "content": content,
            "url": url,
            "classification": verdict.classification,
            "score": verdict.score,
            "explanation": verdict.explanation,
            "sources": [source.model_dump() for source in verdict.sources],
            "criteria": [criterion.model_dump() for criterion in verdict.criteria],
            "image_url": image_url,
        }

        try:
            saved = await self.client.insert(self.table, row)
        except SupabaseError as e:
            logger.error(f"Database error: {e}")
            raise PersistenceError() from e

        if not saved.get("id"):
            logger.error(f"Database returned a row without id: {saved}")
            raise PersistenceError()

        try:
            record = VerificationRecord.model_validate(saved)
        except ValidationError as e:
            logger.error(f"Stored row does not look like a verification: {e}")
            raise PersistenceError() from e

        logger.info(f"Verification saved successfully: {record.id}")
        return record
