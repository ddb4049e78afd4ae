# verifica/services/search/agent.py
import logging
from typing import List, Optional, Sequence

from verifica.core.config import Config
from verifica.core.models import SearchResult
from verifica.services.search.tools import BraveSearchTool, GoogleSearchTool, WebSearchTool

log = logging.getLogger(__name__)


def format_evidence(query: str, results: List[SearchResult]) -> str:
    """Numbered title/snippet/source block, ready to drop into the judge prompt."""
    summary = f'Resultados da busca para "{query}":\n\n'
    for index, result in enumerate(results, start=1):
        summary += f"{index}. {result.title}\n{result.snippet}\nFonte: {result.source_url}\n\n"
    return summary


def no_evidence(query: str) -> str:
    return f"Não foi possível realizar busca web para: {query}"


class EvidenceGatherer:
    """
    Best-effort web evidence for time-sensitive claims.

    Tries each provider in order and formats the first successful result set.
    If every provider fails the placeholder text is returned instead; this
    never raises.
    """

    def __init__(self, settings: Config, providers: Optional[Sequence[WebSearchTool]] = None):
        if providers is None:
            providers = (BraveSearchTool(settings), GoogleSearchTool(settings))
        self.providers = list(providers)

    async def run(self, query: str) -> str:
        log.info(f"EvidenceGatherer searching for: {query[:60]}...")

        for provider in self.providers:
            result = await provider._search(query)
            if result["status"] == "success":
                log.info(f"{provider.name} returned {len(result['results'])} results")
                return format_evidence(query, result["results"])
            log.warning(f"{provider.name} search unavailable: {result.get('reason', 'unknown')}")

        log.error("All search providers failed; continuing without evidence")
        return no_evidence(query)
