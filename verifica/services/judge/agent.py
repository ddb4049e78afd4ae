# verifica/services/judge/agent.py
import asyncio
import logging
from typing import Any

from verifica.core.errors import MalformedUpstreamResponse, UpstreamUnavailable
from verifica.services.llm_wrapper import LLMWrapper

log = logging.getLogger(__name__)


def _message_text(message: Any) -> str:
    """Plain text of a chat model reply, whether content is a string or a list of parts."""
    content = getattr(message, "content", None)
    if isinstance(content, str):
        return content
    if isinstance(content, list):
        parts = []
        for part in content:
            if isinstance(part, str):
                parts.append(part)
            elif isinstance(part, dict) and part.get("type", "text") == "text":
                parts.append(part.get("text", ""))
        return "".join(parts)
    return ""


class VerdictJudge:
    """
    Single-shot call to the judge model. No retries.

    Raises ``UpstreamUnavailable`` when the call itself fails or times out and
    ``MalformedUpstreamResponse`` when it succeeds without any output.
    """

    def __init__(self, llm_wrapper: LLMWrapper):
        self.llm_wrapper = llm_wrapper
        self.timeout = llm_wrapper.timeout

    async def run(self, prompt: str) -> str:
        llm = self.llm_wrapper.get_llm()
        log.info(f"Calling judge model {self.llm_wrapper.model_name}...")

        try:
            response = await asyncio.wait_for(llm.ainvoke(prompt), timeout=self.timeout)
        except asyncio.TimeoutError as e:
            log.error(f"Judge call timed out after {self.timeout}s")
            raise UpstreamUnavailable("Erro na API do Google: tempo limite excedido") from e
        except Exception as e:
            log.error(f"Judge call failed: {e}")
            raise UpstreamUnavailable(f"Erro na API do Google: {e}") from e

        text = _message_text(response)
        if not text.strip():
            log.error(f"Judge returned no candidate output: {response!r}")
            raise MalformedUpstreamResponse()

        log.info(f"Raw judge response: {text[:200]}...")
        return text
