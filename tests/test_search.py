from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from verifica.core.models import SearchResult
from verifica.services.search.agent import EvidenceGatherer, format_evidence, no_evidence
from verifica.services.search.tools import BraveSearchTool, GoogleSearchTool


def _provider(name, result):
    provider = MagicMock()
    provider.name = name
    provider._search = AsyncMock(return_value=result)
    return provider


RESULTS = [
    SearchResult(title="Dólar fecha a R$ 5,80", snippet="Moeda subiu 1,2% nesta terça.", source_url="https://a.example/1"),
    SearchResult(title="Câmbio hoje", snippet="Cotação comercial em alta.", source_url="https://b.example/2"),
]


def test_brave_parse(settings):
    tool = BraveSearchTool(settings)
    data = {"web": {"results": [
        {"title": "T1", "description": "D1", "url": "https://one.example"},
        {"title": "T2", "description": "D2", "url": "https://two.example"},
    ]}}

    assert tool._parse(data) == [
        SearchResult(title="T1", snippet="D1", source_url="https://one.example"),
        SearchResult(title="T2", snippet="D2", source_url="https://two.example"),
    ]
    assert tool._parse({}) == []


def test_google_parse_and_request(settings):
    tool = GoogleSearchTool(settings)
    data = {"items": [{"title": "G1", "snippet": "S1", "link": "https://g.example"}]}

    assert tool._parse(data) == [SearchResult(title="G1", snippet="S1", source_url="https://g.example")]
    params = tool._request("dólar hoje")["params"]
    assert params == {"key": "test-google-key", "cx": settings.GOOGLE_CSE_ID, "q": "dólar hoje", "num": 3}


def test_google_key_falls_back_to_gemini_key(settings):
    settings.GOOGLE_SEARCH_API_KEY = None
    assert GoogleSearchTool(settings).api_key == "test-gemini-key"


@pytest.mark.asyncio
async def test_missing_key_skips_network(settings):
    settings.BRAVE_API_KEY = None
    tool = BraveSearchTool(settings)

    with patch("verifica.services.search.tools.aiohttp.ClientSession") as session:
        result = await tool._search("dólar hoje")

    assert result["status"] == "error"
    session.assert_not_called()


def test_format_evidence():
    text = format_evidence("dólar hoje", RESULTS)

    assert text.startswith('Resultados da busca para "dólar hoje":\n\n')
    assert "1. Dólar fecha a R$ 5,80\nMoeda subiu 1,2% nesta terça.\nFonte: https://a.example/1\n\n" in text
    assert "2. Câmbio hoje" in text


@pytest.mark.asyncio
async def test_primary_success_skips_secondary(settings):
    primary = _provider("brave", {"status": "success", "results": RESULTS})
    secondary = _provider("google", {"status": "success", "results": []})

    evidence = await EvidenceGatherer(settings, providers=[primary, secondary]).run("dólar hoje")

    assert "Dólar fecha a R$ 5,80" in evidence
    secondary._search.assert_not_awaited()


@pytest.mark.asyncio
async def test_primary_failure_falls_back_to_secondary(settings):
    primary = _provider("brave", {"status": "error", "reason": "HTTP 429"})
    secondary = _provider("google", {"status": "success", "results": RESULTS[1:]})

    evidence = await EvidenceGatherer(settings, providers=[primary, secondary]).run("dólar hoje")

    primary._search.assert_awaited_once_with("dólar hoje")
    secondary._search.assert_awaited_once_with("dólar hoje")
    assert "1. Câmbio hoje" in evidence


@pytest.mark.asyncio
async def test_both_failures_return_placeholder(settings):
    primary = _provider("brave", {"status": "error", "reason": "HTTP 500"})
    secondary = _provider("google", {"status": "error", "reason": "timeout"})

    evidence = await EvidenceGatherer(settings, providers=[primary, secondary]).run("dólar hoje")

    assert evidence == no_evidence("dólar hoje")
    assert evidence == "Não foi possível realizar busca web para: dólar hoje"


def test_default_providers_order(settings):
    gatherer = EvidenceGatherer(settings)
    assert [p.name for p in gatherer.providers] == ["brave", "google"]


def _session_returning(response):
    session = MagicMock()
    session.get.return_value.__aenter__.return_value = response
    factory = MagicMock()
    factory.return_value.__aenter__.return_value = session
    return factory, session


@pytest.mark.asyncio
async def test_non_200_status_is_error(settings):
    response = MagicMock(status=503)
    response.text = AsyncMock(return_value="Service Unavailable")
    factory, session = _session_returning(response)

    with patch("verifica.services.search.tools.aiohttp.ClientSession", factory):
        result = await BraveSearchTool(settings)._search("dólar hoje")

    assert result == {"status": "error", "reason": "HTTP 503"}
    _, kwargs = session.get.call_args
    assert kwargs["params"] == {"q": "dólar hoje", "count": 5}
    assert kwargs["headers"]["X-Subscription-Token"] == "test-brave-key"


@pytest.mark.asyncio
async def test_success_is_capped_to_max_results(settings):
    response = MagicMock(status=200)
    response.json = AsyncMock(return_value={"web": {"results": [
        {"title": f"T{i}", "description": "d", "url": f"https://{i}.example"} for i in range(5)
    ]}})
    factory, _ = _session_returning(response)

    with patch("verifica.services.search.tools.aiohttp.ClientSession", factory):
        result = await BraveSearchTool(settings)._search("dólar hoje")

    assert result["status"] == "success"
    assert [r.title for r in result["results"]] == ["T0", "T1", "T2"]


@pytest.mark.asyncio
async def test_empty_result_set_is_error(settings):
    response = MagicMock(status=200)
    response.json = AsyncMock(return_value={"items": []})
    factory, _ = _session_returning(response)

    with patch("verifica.services.search.tools.aiohttp.ClientSession", factory):
        result = await GoogleSearchTool(settings)._search("dólar hoje")

    assert result == {"status": "error", "reason": "no results"}
