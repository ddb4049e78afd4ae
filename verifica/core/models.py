from datetime import datetime
from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import Optional, List, Any, Literal


Classification = Literal["verified", "false", "partial"]


class ImageUpload(BaseModel):
    data: bytes = Field(..., description="Raw image bytes as uploaded.")
    filename: Optional[str] = Field(None, description="Original filename, if the client sent one.")
    content_type: Optional[str] = Field(None, description="MIME type of the upload.")


class VerificationRequest(BaseModel):
    content: Optional[str] = Field(None, description="Free text to fact-check.")
    url: Optional[str] = Field(None, description="URL whose content or source should be assessed.")
    image: Optional[ImageUpload] = Field(None, description="Optional image submitted with the request.")

    @field_validator("content", "url", mode="before")
    @classmethod
    def _empty_as_missing(cls, value: Any) -> Any:
        if value == "":
            return None
        return value

    def is_empty(self) -> bool:
        return not self.content and not self.url and self.image is None


class SearchResult(BaseModel):
    title: str = ""
    snippet: str = ""
    source_url: str = ""


class Criterion(BaseModel):
    name: str = ""
    status: bool = False

    @field_validator("name", mode="before")
    @classmethod
    def _missing_name(cls, value: Any) -> Any:
        return "" if value is None else value

    @field_validator("status", mode="before")
    @classmethod
    def _missing_status(cls, value: Any) -> Any:
        return False if value is None else value


def _coerce_criteria(value: Any) -> Any:
    if value is None:
        return []
    if not isinstance(value, list):
        return value
    return [item for item in value if isinstance(item, dict)]


class Source(BaseModel):
    model_config = ConfigDict(extra="allow")

    url: str = Field("#", description="Source link; '#' when the judge gave none.")

    @field_validator("url", mode="before")
    @classmethod
    def _default_url(cls, value: Any) -> Any:
        if value is None or (isinstance(value, str) and not value.strip()):
            return "#"
        return value


def _coerce_sources(value: Any) -> Any:
    if not isinstance(value, list):
        return value
    return [{"url": item} if isinstance(item, str) else item for item in value]


class Verdict(BaseModel):
    """Structured judgement for one request, as produced by the judge."""

    classification: Classification = Field(..., description="verified | false | partial")
    score: int = Field(..., ge=0, le=100, description="Veracity score (0-100).")
    explanation: str = Field("", description="Explanation of the classification.")
    criteria: List[Criterion] = Field(default_factory=list)
    sources: List[Source] = Field(default_factory=list)

    @field_validator("classification", mode="before")
    @classmethod
    def _normalize_classification(cls, value: Any) -> Any:
        return value.strip().lower() if isinstance(value, str) else value

    @field_validator("score", mode="before")
    @classmethod
    def _clamp_score(cls, value: Any) -> Any:
        if isinstance(value, (int, float)) or (isinstance(value, str) and value.strip()):
            try:
                return max(0, min(100, int(round(float(value)))))
            except (ValueError, OverflowError):
                return value
        return value

    @field_validator("criteria", mode="before")
    @classmethod
    def _lenient_criteria(cls, value: Any) -> Any:
        return _coerce_criteria(value)

    @field_validator("sources", mode="before")
    @classmethod
    def _string_sources(cls, value: Any) -> Any:
        return [] if value is None else _coerce_sources(value)


class VerificationRecord(BaseModel):
    """A persisted verdict, as returned by the store."""

    model_config = ConfigDict(extra="allow")

    id: str
    content: Optional[str] = None
    url: Optional[str] = None
    classification: Classification
    score: int
    explanation: str = ""
    sources: List[Source] = Field(default_factory=list)
    criteria: List[Criterion] = Field(default_factory=list)
    image_url: Optional[str] = None
    created_at: Optional[datetime] = None

    @field_validator("criteria", mode="before")
    @classmethod
    def _lenient_criteria(cls, value: Any) -> Any:
        return _coerce_criteria(value)

    @field_validator("id", mode="before")
    @classmethod
    def _stringify_id(cls, value: Any) -> Any:
        return str(value) if value is not None else value

    @field_validator("sources", mode="before")
    @classmethod
    def _string_sources(cls, value: Any) -> Any:
        return [] if value is None else _coerce_sources(value)


class VerifyResponse(BaseModel):
    success: bool = True
    verification: VerificationRecord


class ErrorResponse(BaseModel):
    success: bool = False
    error: str
