"""
Error taxonomy for the verification pipeline.

Fatal errors carry the HTTP status and the caller-facing message the API
returns in its ``{"success": false, "error": ...}`` envelope.
"""
from typing import Optional


class VerificationError(Exception):
    """Base class for failures that abort a verification request."""

    status_code: int = 500
    default_message: str = "Erro interno do servidor"

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class InvalidRequest(VerificationError):
    status_code = 400
    default_message = "Por favor, forneça texto, URL ou imagem para verificar"


class ConfigurationError(VerificationError):
    default_message = "Configuração da API não encontrada"


class UpstreamUnavailable(VerificationError):
    default_message = "Erro na API do Google"


class MalformedUpstreamResponse(VerificationError):
    default_message = "Resposta inválida da API do Google"


class PersistenceError(VerificationError):
    default_message = "Erro ao salvar verificação"


class AnalysisUnparseable(Exception):
    """The judge replied, but not with a decodable verdict. Always recovered."""
