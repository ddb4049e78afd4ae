# verifica/api/v1/endpoints.py
import json
import logging
from functools import lru_cache
from typing import Optional

from fastapi import APIRouter, Depends, Request, Response
from fastapi.responses import JSONResponse
from starlette.datastructures import UploadFile

from verifica.core.config import config
from verifica.core.errors import InvalidRequest, VerificationError
from verifica.core.models import ErrorResponse, ImageUpload, VerificationRequest, VerifyResponse
from verifica.services.orchestrator import VerificationPipeline

logger = logging.getLogger(__name__)
logger.setLevel(logging.INFO)

router = APIRouter(prefix=config.API_PREFIX, tags=["v1"])

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Headers": "authorization, x-client-info, apikey, content-type",
}


@lru_cache
def get_pipeline() -> VerificationPipeline:
    return VerificationPipeline(config)


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse(error=message).model_dump(),
        headers=CORS_HEADERS,
    )


async def _read_image(value) -> Optional[ImageUpload]:
    if not isinstance(value, UploadFile):
        return None
    data = await value.read()
    if not data:
        return None
    return ImageUpload(data=data, filename=value.filename, content_type=value.content_type)


async def parse_verification_request(request: Request) -> VerificationRequest:
    """Builds the request from either a JSON body or multipart form data."""
    content_type = request.headers.get("content-type", "")

    if "multipart/form-data" in content_type:
        form = await request.form()
        content = form.get("content")
        url = form.get("url")
        return VerificationRequest(
            content=content if isinstance(content, str) else None,
            url=url if isinstance(url, str) else None,
            image=await _read_image(form.get("imageFile")),
        )

    try:
        body = await request.json()
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise InvalidRequest("Corpo da requisição inválido") from e
    if not isinstance(body, dict):
        raise InvalidRequest("Corpo da requisição inválido")

    content = body.get("content")
    url = body.get("url")
    return VerificationRequest(
        content=content if isinstance(content, str) else None,
        url=url if isinstance(url, str) else None,
    )


@router.options("/verify-news")
async def verify_news_preflight() -> Response:
    return Response(status_code=200, headers=CORS_HEADERS)


@router.post(
    "/verify-news",
    response_model=VerifyResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def verify_news(request: Request, pipeline: VerificationPipeline = Depends(get_pipeline)):
    """
    Main endpoint: fact-check text, a URL and/or an image.
    Accepts ``application/json`` or ``multipart/form-data``.
    """
    try:
        verification_request = await parse_verification_request(request)
        record = await pipeline.run(verification_request)
    except VerificationError as e:
        logger.error(f"Verification failed ({e.status_code}): {e.message}")
        return _error(e.status_code, e.message)
    except Exception as e:
        logger.error(f"Error in verify-news: {str(e)}", exc_info=True)
        return _error(500, "Erro interno do servidor")

    return JSONResponse(
        content=VerifyResponse(verification=record).model_dump(mode="json"),
        headers=CORS_HEADERS,
    )
