import logging
from typing import Optional
from langchain_google_genai import ChatGoogleGenerativeAI

from verifica.core.config import Config
from verifica.core.errors import ConfigurationError

logger = logging.getLogger(__name__)


class LLMWrapper:
    """
    Centralized LLM Wrapper for the judge model.

    Standardizes model configuration. The client is built on first use so a
    missing credential surfaces as a request error rather than an import error.
    """

    def __init__(self, settings: Config):
        self.model_name = settings.LLM_MODEL_NAME
        self.temperature = settings.LLM_TEMPERATURE
        self.top_k = settings.LLM_TOP_K
        self.top_p = settings.LLM_TOP_P
        self.max_tokens = settings.LLM_MAX_TOKEN
        self.timeout = settings.JUDGE_TIMEOUT
        self.api_key = settings.GEMINI_API_KEY
        self.llm: Optional[ChatGoogleGenerativeAI] = None

    def get_llm(self) -> ChatGoogleGenerativeAI:
        """Returns the underlying LLM instance."""
        if not self.api_key:
            logger.error("GEMINI_API_KEY is not set in the environment variables.")
            raise ConfigurationError()

        if self.llm is None:
            self.llm = ChatGoogleGenerativeAI(
                model=self.model_name,
                temperature=self.temperature,
                top_k=self.top_k,
                top_p=self.top_p,
                max_output_tokens=self.max_tokens,
                response_mime_type="application/json",
                timeout=self.timeout,
                max_retries=0,
                google_api_key=self.api_key,
            )
        return self.llm
