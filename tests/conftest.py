"""Pytest configuration and fixtures."""

from unittest.mock import AsyncMock, MagicMock

import pytest

from verifica.core.config import Config
from factories import judge_reply, record_from


@pytest.fixture
def settings():
    """Settings with fake credentials for every collaborator."""
    return Config(
        GEMINI_API_KEY="test-gemini-key",
        BRAVE_API_KEY="test-brave-key",
        GOOGLE_SEARCH_API_KEY="test-google-key",
        SUPABASE_URL="https://example.supabase.co",
        SUPABASE_SERVICE_ROLE_KEY="test-service-role",
    )


@pytest.fixture
def fake_judge():
    judge = MagicMock()
    judge.run = AsyncMock(return_value=judge_reply())
    return judge


@pytest.fixture
def fake_gatherer():
    gatherer = MagicMock()
    gatherer.run = AsyncMock(
        return_value='Resultados da busca para "x":\n\n1. Título\nTrecho\nFonte: https://example.com\n\n'
    )
    return gatherer


@pytest.fixture
def fake_archiver():
    archiver = MagicMock()
    archiver.run = AsyncMock(
        return_value="https://example.supabase.co/storage/v1/object/public/verification-images/verification_1.png"
    )
    return archiver


@pytest.fixture
def fake_store():
    store = MagicMock()

    async def save(content, url, verdict, image_url=None):
        return record_from(content, url, verdict, image_url)

    store.save = AsyncMock(side_effect=save)
    return store
