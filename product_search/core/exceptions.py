"""
Hierarquia de exceções do sistema.
Todas as exceções herdam de ProductSearchError para facilitar tratamento.
"""

from typing import Any, Optional


class ProductSearchError(Exception):
    """
    Exceção base do sistema.
    Todas as exceções customizadas herdam desta classe.
    """

    def __init__(
        self,
        message: str,
        *,
        details: Optional[dict[str, Any]] = None,
        cause: Optional[Exception] = None,
    ):
        super().__init__(message)
        self.message = message
        self.details = details or {}
        self.cause = cause

    def __str__(self) -> str:
        base = self.message
        if self.details:
            base += f" | Details: {self.details}"
        if self.cause:
            base += f" | Caused by: {self.cause}"
        return base

    def to_dict(self) -> dict[str, Any]:
        """Serializa exceção para dicionário."""
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "details": self.details,
            "cause": str(self.cause) if self.cause else None,
        }


# EXCEÇÕES DE PROVEDORES

class ProviderError(ProductSearchError):
    """
    Falha do provedor upstream (rede, autenticação, cota).
    Única falha fatal para uma requisição de busca.
    """

    def __init__(
        self,
        message: str,
        *,
        provider: Optional[str] = None,
        status_code: Optional[int] = None,
        **kwargs,
    ):
        details = kwargs.pop("details", {})
        if provider:
            details["provider"] = provider
        if status_code:
            details["status_code"] = status_code
        super().__init__(message, details=details, **kwargs)
        self.provider = provider
        self.status_code = status_code


class ProviderAuthError(ProviderError):
    """Chave de API inválida ou sem permissão."""

    def __init__(self, message: str = "Chave de API inválida", **kwargs):
        super().__init__(message, **kwargs)


class RateLimitError(ProviderError):
    """Erro de rate limit / cota excedida."""

    def __init__(
        self,
        message: str = "Rate limit excedido",
        *,
        retry_after: Optional[int] = None,
        **kwargs,
    ):
        details = kwargs.pop("details", {})
        if retry_after:
            details["retry_after_seconds"] = retry_after
        super().__init__(message, details=details, **kwargs)
        self.retry_after = retry_after


class NetworkError(ProviderError):
    """Erro de rede (timeout, conexão recusada, etc)."""

    def __init__(self, message: str = "Erro de conexão com o provedor", **kwargs):
        super().__init__(message, **kwargs)


class ProviderResponseError(ProviderError):
    """Resposta do provedor sem o conteúdo esperado."""

    def __init__(
        self,
        message: str,
        *,
        raw_data: Optional[str] = None,
        **kwargs,
    ):
        details = kwargs.pop("details", {})
        if raw_data:
            # Limita tamanho para não poluir logs
            details["raw_data"] = raw_data[:200]
        super().__init__(message, details=details, **kwargs)


# EXCEÇÕES DE RESOLUÇÃO DE IMAGENS

class PageFetchError(ProductSearchError):
    """Erro ao baixar a página de um produto."""

    def __init__(
        self,
        message: str,
        *,
        url: Optional[str] = None,
        status_code: Optional[int] = None,
        **kwargs,
    ):
        details = kwargs.pop("details", {})
        if url:
            details["url"] = url
        if status_code:
            details["status_code"] = status_code
        super().__init__(message, details=details, **kwargs)
        self.url = url
        self.status_code = status_code


# EXCEÇÕES DE CONFIGURAÇÃO

class ConfigurationError(ProductSearchError):
    """Configuração ausente ou inválida."""

    def __init__(
        self,
        message: str,
        *,
        setting: Optional[str] = None,
        **kwargs,
    ):
        details = kwargs.pop("details", {})
        if setting:
            details["setting"] = setting
        super().__init__(message, details=details, **kwargs)
