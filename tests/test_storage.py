import re
from unittest.mock import AsyncMock

import pytest

from verifica.core.errors import ConfigurationError, PersistenceError
from verifica.core.models import ImageUpload, Verdict, VerificationRecord
from verifica.services.storage.archiver import ImageArchiver, image_object_name
from verifica.services.storage.client import SupabaseClient, SupabaseError
from verifica.services.storage.store import VerificationStore


VERDICT = Verdict(
    classification="partial",
    score=50,
    explanation="Informações parciais.",
    criteria=[{"name": "Verificação em tempo real", "status": True}],
    sources=[{"url": "https://example.com"}, {"title": "sem link"}],
)


def _client(settings, **insert):
    client = SupabaseClient(settings)
    client.insert = AsyncMock(**insert)
    client.upload = AsyncMock()
    return client


@pytest.mark.asyncio
async def test_save_inserts_row_and_returns_record(settings):
    row = {
        "id": "6f1c2a9e-0000-0000-0000-000000000001",
        "content": "texto",
        "url": None,
        "classification": "partial",
        "score": 50,
        "explanation": "Informações parciais.",
        "sources": [{"url": "https://example.com"}, {"title": "sem link", "url": ""}],
        "criteria": [{"name": "Verificação em tempo real", "status": True}],
        "image_url": None,
        "created_at": "2024-05-01T12:00:00+00:00",
    }
    client = _client(settings, return_value=row)

    record = await VerificationStore(client, "news_verifications").save("texto", None, VERDICT)

    table, inserted = client.insert.await_args.args
    assert table == "news_verifications"
    assert inserted["classification"] == "partial"
    assert inserted["sources"] == [{"url": "https://example.com"}, {"url": "#", "title": "sem link"}]
    assert inserted["image_url"] is None
    assert "id" not in inserted

    assert record.id == row["id"]
    assert [s.url for s in record.sources] == ["https://example.com", "#"]
    assert record.created_at is not None


@pytest.mark.asyncio
async def test_save_failure_is_persistence_error(settings):
    client = _client(settings, side_effect=SupabaseError("HTTP 500: boom", status=500))

    with pytest.raises(PersistenceError) as exc:
        await VerificationStore(client, "news_verifications").save("texto", None, VERDICT)

    assert exc.value.message == "Erro ao salvar verificação"


@pytest.mark.asyncio
async def test_row_without_id_is_persistence_error(settings):
    client = _client(settings, return_value={"classification": "partial", "score": 50})

    with pytest.raises(PersistenceError):
        await VerificationStore(client, "news_verifications").save("texto", None, VERDICT)


@pytest.mark.asyncio
async def test_archive_returns_public_url(settings):
    client = _client(settings)
    image = ImageUpload(data=b"\x89PNG...", filename="print.jpg", content_type="image/jpeg")

    url = await ImageArchiver(client, "verification-images").run(image)

    bucket, name, data = client.upload.await_args.args
    assert bucket == "verification-images"
    assert data == b"\x89PNG..."
    assert client.upload.await_args.kwargs["content_type"] == "image/jpeg"
    assert url == f"https://example.supabase.co/storage/v1/object/public/verification-images/{name}"


@pytest.mark.asyncio
async def test_archive_failure_returns_none(settings):
    client = _client(settings)
    client.upload.side_effect = SupabaseError("HTTP 413: too large", status=413)

    url = await ImageArchiver(client, "verification-images").run(ImageUpload(data=b"img"))

    assert url is None


def test_image_object_name():
    assert re.fullmatch(r"verification_\d{13}_[0-9a-f]{8}\.png", image_object_name(ImageUpload(data=b"x")))
    assert image_object_name(ImageUpload(data=b"x", filename="Foto.JPEG")).endswith(".jpeg")
    assert image_object_name(ImageUpload(data=b"x", filename="arquivo")).endswith(".png")


def test_client_requires_credentials(settings):
    settings.SUPABASE_SERVICE_ROLE_KEY = None

    with pytest.raises(ConfigurationError):
        SupabaseClient(settings)._headers()


def test_client_headers_and_urls(settings):
    client = SupabaseClient(settings)

    headers = client._headers(Prefer="return=representation")
    assert headers["apikey"] == "test-service-role"
    assert headers["Authorization"] == "Bearer test-service-role"
    assert headers["Prefer"] == "return=representation"
    assert client.get_public_url("verification-images", "a b.png") == (
        "https://example.supabase.co/storage/v1/object/public/verification-images/a%20b.png"
    )


@pytest.mark.asyncio
async def test_insert_posts_to_rest_endpoint(settings):
    client = SupabaseClient(settings)
    client._post = AsyncMock(return_value=[{"id": 7, "score": 50}])

    row = await client.insert("news_verifications", {"score": 50})

    url, headers = client._post.await_args.args
    assert url == "https://example.supabase.co/rest/v1/news_verifications"
    assert headers["Content-Type"] == "application/json"
    assert client._post.await_args.kwargs == {"json": {"score": 50}}
    assert row == {"id": 7, "score": 50}


@pytest.mark.asyncio
async def test_insert_without_rows_raises(settings):
    client = SupabaseClient(settings)
    client._post = AsyncMock(return_value=[])

    with pytest.raises(SupabaseError):
        await client.insert("news_verifications", {"score": 50})


def test_record_id_is_stringified():
    record = VerificationRecord(id=7, classification="false", score=10)
    assert record.id == "7"
