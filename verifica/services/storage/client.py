import asyncio
import logging
from typing import Any, Dict, Optional
from urllib.parse import quote

import aiohttp

from verifica.core.config import Config
from verifica.core.errors import ConfigurationError

logger = logging.getLogger(__name__)


class SupabaseError(Exception):
    """A Supabase REST call failed (transport error or non-2xx status)."""

    def __init__(self, message: str, status: Optional[int] = None):
        self.status = status
        super().__init__(message)


class SupabaseClient:
    """
    Minimal async client for the two Supabase services the pipeline needs:
    the PostgREST row store and Storage buckets.
    """

    def __init__(self, settings: Config):
        self.base_url = (settings.SUPABASE_URL or "").rstrip("/")
        self.api_key = settings.SUPABASE_SERVICE_ROLE_KEY
        self.timeout = settings.STORAGE_TIMEOUT

    def _headers(self, **extra: str) -> Dict[str, str]:
        if not self.base_url or not self.api_key:
            raise ConfigurationError("Configuração do banco de dados não encontrada")
        headers = {
            "apikey": self.api_key,
            "Authorization": f"Bearer {self.api_key}",
        }
        headers.update(extra)
        return headers

    async def _post(self, url: str, headers: Dict[str, str], **kwargs: Any) -> Any:
        try:
            async with aiohttp.ClientSession(timeout=aiohttp.ClientTimeout(total=self.timeout)) as session:
                async with session.post(url, headers=headers, **kwargs) as resp:
                    if resp.status >= 300:
                        text = await resp.text()
                        raise SupabaseError(f"HTTP {resp.status}: {text[:200]}", status=resp.status)
                    if resp.content_type == "application/json":
                        return await resp.json()
                    return await resp.text()
        except asyncio.TimeoutError as e:
            raise SupabaseError(f"timed out after {self.timeout}s") from e
        except aiohttp.ClientError as e:
            raise SupabaseError(str(e)) from e

    async def upload(self, bucket: str, name: str, data: bytes, content_type: Optional[str] = None) -> None:
        url = f"{self.base_url}/storage/v1/object/{bucket}/{quote(name)}"
        headers = self._headers(**{
            "Content-Type": content_type or "application/octet-stream",
            "x-upsert": "false",
        })
        await self._post(url, headers, data=data)
        logger.info(f"Uploaded {name} to bucket {bucket}")

    def get_public_url(self, bucket: str, name: str) -> str:
        return f"{self.base_url}/storage/v1/object/public/{bucket}/{quote(name)}"

    async def insert(self, table: str, record: Dict[str, Any]) -> Dict[str, Any]:
        url = f"{self.base_url}/rest/v1/{table}"
        headers = self._headers(**{
            "Content-Type": "application/json",
            "Prefer": "return=representation",
        })
        rows = await self._post(url, headers, json=record)
        if isinstance(rows, list) and rows and isinstance(rows[0], dict):
            return rows[0]
        if isinstance(rows, dict):
            return rows
        raise SupabaseError(f"insert into {table} returned no row")
