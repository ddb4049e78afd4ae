# verifica/services/search/tools.py
import asyncio
import logging
from typing import Any, Dict, List, Optional

import aiohttp

from verifica.core.config import Config
from verifica.core.models import SearchResult

log = logging.getLogger(__name__)


class WebSearchTool:
    """
    Raw web search against one provider; returns a status dict.

    ``{"status": "success", "results": [SearchResult, ...]}`` on success,
    ``{"status": "error", "reason": "..."}`` otherwise. Never raises.
    """

    name = "web"

    def __init__(self, api_key: Optional[str], base_url: str, timeout: float, max_results: int):
        self.api_key = api_key
        self.base_url = base_url
        self.timeout = timeout
        self.max_results = max_results

    def _request(self, query: str) -> Dict[str, Any]:
        """Returns the ``params`` and ``headers`` for a query."""
        raise NotImplementedError

    def _parse(self, data: Dict[str, Any]) -> List[SearchResult]:
        raise NotImplementedError

    async def _search(self, query: str) -> Dict[str, Any]:
        if not self.api_key:
            return {"status": "error", "reason": f"{self.name} API key missing"}

        request = self._request(query)
        try:
            async with aiohttp.ClientSession(timeout=aiohttp.ClientTimeout(total=self.timeout)) as session:
                async with session.get(self.base_url, params=request["params"], headers=request.get("headers")) as resp:
                    if resp.status != 200:
                        text = await resp.text()
                        log.warning(f"{self.name} search failed with status {resp.status}: {text[:200]}")
                        return {"status": "error", "reason": f"HTTP {resp.status}"}
                    data = await resp.json()
        except asyncio.TimeoutError:
            log.warning(f"{self.name} search timed out after {self.timeout}s")
            return {"status": "error", "reason": "timeout"}
        except (aiohttp.ClientError, ValueError) as e:
            log.warning(f"{self.name} search error: {e}")
            return {"status": "error", "reason": str(e)}

        results = self._parse(data if isinstance(data, dict) else {})[: self.max_results]
        if not results:
            return {"status": "error", "reason": "no results"}
        return {"status": "success", "query": query, "results": results}


class BraveSearchTool(WebSearchTool):
    """Brave Web Search API (primary provider)."""

    name = "brave"

    def __init__(self, settings: Config):
        super().__init__(
            api_key=settings.BRAVE_API_KEY,
            base_url=settings.BRAVE_SEARCH_URL,
            timeout=settings.SEARCH_TIMEOUT,
            max_results=settings.SEARCH_MAX_RESULTS,
        )

    def _request(self, query: str) -> Dict[str, Any]:
        return {
            "params": {"q": query, "count": 5},
            "headers": {"X-Subscription-Token": self.api_key, "Accept": "application/json"},
        }

    def _parse(self, data: Dict[str, Any]) -> List[SearchResult]:
        items = (data.get("web") or {}).get("results") or []
        return [
            SearchResult(
                title=item.get("title") or "",
                snippet=item.get("description") or "",
                source_url=item.get("url") or "",
            )
            for item in items
            if isinstance(item, dict)
        ]


class GoogleSearchTool(WebSearchTool):
    """Google Custom Search JSON API (fallback provider)."""

    name = "google"

    def __init__(self, settings: Config):
        super().__init__(
            api_key=settings.google_search_key,
            base_url=settings.GOOGLE_SEARCH_URL,
            timeout=settings.SEARCH_TIMEOUT,
            max_results=settings.SEARCH_MAX_RESULTS,
        )
        self.cse_id = settings.GOOGLE_CSE_ID

    def _request(self, query: str) -> Dict[str, Any]:
        return {
            "params": {"key": self.api_key, "cx": self.cse_id, "q": query, "num": self.max_results},
        }

    def _parse(self, data: Dict[str, Any]) -> List[SearchResult]:
        items = data.get("items") or []
        return [
            SearchResult(
                title=item.get("title") or "",
                snippet=item.get("snippet") or "",
                source_url=item.get("link") or "",
            )
            for item in items
            if isinstance(item, dict)
        ]
