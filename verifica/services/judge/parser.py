"""
Turns the judge's raw reply into a ``Verdict``.

Extraction strategies are tried in order; the first one whose candidate
decodes wins. Anything that cannot be decoded becomes the conservative
fallback verdict, never an error.
"""
import json
import logging
import re
from typing import Callable, Optional, Sequence

from pydantic import ValidationError

from verifica.core.errors import AnalysisUnparseable
from verifica.core.models import Criterion, Verdict

logger = logging.getLogger(__name__)

_FENCED_BLOCK = re.compile(r"```(?:json)?\s*\n(.*?)\n?```", re.DOTALL | re.IGNORECASE)
_BRACED_BLOCK = re.compile(r"\{.*\}", re.DOTALL)


def fallback_verdict() -> Verdict:
    return Verdict(
        classification="false",
        score=20,
        explanation=(
            "Não foi possível analisar esta informação adequadamente. Conteúdo pode ser spam, "
            "desinformação ou não possui substância informativa verificável."
        ),
        criteria=[
            Criterion(name="Análise automatizada", status=False),
            Criterion(name="Conteúdo verificável", status=False),
        ],
        sources=[],
    )


def extract_fenced_block(text: str) -> Optional[str]:
    match = _FENCED_BLOCK.search(text)
    return match.group(1) if match else None


def extract_braced_block(text: str) -> Optional[str]:
    match = _BRACED_BLOCK.search(text)
    return match.group(0) if match else None


EXTRACTION_STRATEGIES: Sequence[Callable[[str], Optional[str]]] = (
    extract_fenced_block,
    extract_braced_block,
)


def decode_verdict(candidate: str) -> Verdict:
    try:
        data = json.loads(candidate)
    except json.JSONDecodeError as e:
        raise AnalysisUnparseable(f"invalid JSON: {e}") from e
    if not isinstance(data, dict):
        raise AnalysisUnparseable(f"expected a JSON object, got {type(data).__name__}")
    try:
        return Verdict.model_validate(data)
    except ValidationError as e:
        raise AnalysisUnparseable(f"unexpected verdict shape: {e}") from e


def score_band(score: int) -> str:
    if score <= 30:
        return "false"
    if score <= 70:
        return "partial"
    return "verified"


def parse_verdict(raw_text: str) -> Verdict:
    for strategy in EXTRACTION_STRATEGIES:
        candidate = strategy(raw_text or "")
        if candidate is None:
            continue
        try:
            verdict = decode_verdict(candidate)
        except AnalysisUnparseable as e:
            logger.warning(f"{strategy.__name__} matched but did not decode: {e}")
            continue

        if score_band(verdict.score) != verdict.classification:
            # Trusted as reported; the bands are guidance for the judge only.
            logger.warning(
                f"Judge classification '{verdict.classification}' disagrees with score {verdict.score}"
            )
        return verdict

    logger.error("Error parsing judge response; using fallback verdict")
    return fallback_verdict()
