import os
from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Optional
from dotenv import load_dotenv


load_dotenv()  # Load environment variables from a .env file if present

class Config(BaseSettings):
    """
    Application configuration settings.
    Reads from environment variables by default.
    """
    PROJECT_NAME: str = "Verifica Noticias Backend"
    VERSION: str = "1.0.0"
    API_PREFIX: str = "/api/v1"
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

    # Judge (Gemini)
    GEMINI_API_KEY: Optional[str] = os.getenv("GEMINI_API_KEY") or os.getenv("GOOGLE_API_KEY")
    LLM_MODEL_NAME: str = os.getenv("LLM_MODEL_NAME", "gemini-1.5-flash")
    LLM_TEMPERATURE: float = float(os.getenv("LLM_TEMPERATURE", "0.1"))
    LLM_TOP_K: int = 32
    LLM_TOP_P: float = 1.0
    LLM_MAX_TOKEN: int = int(os.getenv("LLM_MAX_TOKEN", "2048"))
    JUDGE_TIMEOUT: float = 30  # seconds

    # Search providers
    BRAVE_API_KEY: Optional[str] = os.getenv("BRAVE_API_KEY")
    BRAVE_SEARCH_URL: str = "https://api.search.brave.com/res/v1/web/search"
    GOOGLE_SEARCH_API_KEY: Optional[str] = os.getenv("GOOGLE_SEARCH_API_KEY")
    GOOGLE_CSE_ID: str = os.getenv("GOOGLE_CSE_ID", "017576662512468239146:omuauf_lfve")
    GOOGLE_SEARCH_URL: str = "https://www.googleapis.com/customsearch/v1"
    SEARCH_TIMEOUT: float = 10  # seconds
    SEARCH_MAX_RESULTS: int = 3

    # Supabase (row store + object storage)
    SUPABASE_URL: Optional[str] = os.getenv("SUPABASE_URL")
    SUPABASE_SERVICE_ROLE_KEY: Optional[str] = os.getenv("SUPABASE_SERVICE_ROLE_KEY")
    STORAGE_TIMEOUT: float = 15  # seconds
    VERIFICATIONS_TABLE: str = "news_verifications"
    IMAGES_BUCKET: str = "verification-images"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    @property
    def google_search_key(self) -> Optional[str]:
        """Custom Search shares the Gemini key unless a dedicated one is set."""
        return self.GOOGLE_SEARCH_API_KEY or self.GEMINI_API_KEY

    @property
    def supabase_configured(self) -> bool:
        return bool(self.SUPABASE_URL and self.SUPABASE_SERVICE_ROLE_KEY)


config = Config()
