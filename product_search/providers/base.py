"""
Classe base para provedores de busca.
Centraliza chamada HTTP, mapeamento de erros e retry.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Optional

import httpx
from tenacity import (
    AsyncRetrying,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from config.logging_config import LoggerMixin
from config.providers import ProviderConfig, get_provider_config
from config.settings import Settings, get_settings
from product_search.core.constants import RETRY_STATUS_CODES
from product_search.core.exceptions import (
    NetworkError,
    ProviderAuthError,
    ProviderError,
    ProviderResponseError,
    RateLimitError,
)


# =============================================================================
# PARÂMETROS E RESULTADO DE PROVEDORES LLM
# =============================================================================

@dataclass
class LlmSearchParams:
    """Parâmetros de uma chamada a um modelo de linguagem."""

    system_prompt: str
    user_prompt: str
    max_tokens: int = 8192
    temperature: float = 0.2
    model_override: Optional[str] = None


@dataclass
class LlmSearchResult:
    """Resposta de um modelo de linguagem."""

    content: str
    model: str
    tokens_used: int = 0
    images: list[str] = field(default_factory=list)
    citations: list[str] = field(default_factory=list)


def _error_message(response: httpx.Response) -> str:
    """Extrai a mensagem de erro do corpo da resposta, se houver."""
    try:
        data = response.json()
    except ValueError:
        return response.text[:200] or response.reason_phrase

    if isinstance(data, dict):
        error = data.get("error")
        if isinstance(error, dict) and error.get("message"):
            return str(error["message"])
        if isinstance(error, str):
            return error
    return response.reason_phrase


def _retry_after(response: httpx.Response) -> Optional[int]:
    value = response.headers.get("retry-after", "")
    return int(value) if value.isdigit() else None


class BaseProvider(ABC, LoggerMixin):
    """
    Classe base abstrata para provedores.
    Subclasses definem provider_id, base_url e timeout.
    """

    provider_id: str = ""

    def __init__(
        self,
        settings: Optional[Settings] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Inicializa o provedor.

        Args:
            settings: Configurações (padrão: singleton global)
            transport: Transporte httpx alternativo (usado em testes)
        """
        self.settings = settings or get_settings()
        self._transport = transport
        self.retry_wait = wait_exponential(multiplier=1, min=2, max=10)

    @property
    def config(self) -> ProviderConfig:
        """Configuração estática do provedor."""
        return get_provider_config(self.provider_id)

    @property
    def api_key(self) -> str:
        return self.settings.get_api_key(self.provider_id)

    @property
    @abstractmethod
    def base_url(self) -> str:
        """URL base da API."""
        pass

    @property
    @abstractmethod
    def timeout(self) -> float:
        """Timeout das chamadas em segundos."""
        pass

    def ensure_configured(self) -> None:
        """
        Verifica se há chave de API.

        Raises:
            ProviderAuthError: Se a chave não estiver configurada
        """
        if not self.api_key:
            raise ProviderAuthError(
                f"Chave de API não configurada para {self.config.display_name}",
                provider=self.provider_id,
            )

    async def _request(
        self,
        method: str,
        path: str,
        *,
        params: Optional[dict[str, Any]] = None,
        json: Optional[dict[str, Any]] = None,
        headers: Optional[dict[str, str]] = None,
    ) -> dict[str, Any]:
        """
        Faz a requisição com retry para rate limit e erros de rede.

        Returns:
            Corpo JSON da resposta

        Raises:
            ProviderError: Após esgotar as tentativas ou em erro não recuperável
        """
        async for attempt in AsyncRetrying(
            stop=stop_after_attempt(self.settings.max_retries),
            wait=self.retry_wait,
            retry=retry_if_exception_type((RateLimitError, NetworkError)),
            reraise=True,
        ):
            with attempt:
                attempt_number = attempt.retry_state.attempt_number
                if attempt_number > 1:
                    self.logger.warning(
                        "Repetindo chamada ao provedor",
                        provider=self.provider_id,
                        attempt=attempt_number,
                    )
                return await self._send(method, path, params=params, json=json, headers=headers)

        raise ProviderError("Tentativas esgotadas", provider=self.provider_id)

    async def _send(
        self,
        method: str,
        path: str,
        *,
        params: Optional[dict[str, Any]] = None,
        json: Optional[dict[str, Any]] = None,
        headers: Optional[dict[str, str]] = None,
    ) -> dict[str, Any]:
        """Uma tentativa de requisição, com erros mapeados para ProviderError."""
        try:
            async with httpx.AsyncClient(
                base_url=self.base_url,
                timeout=self.timeout,
                transport=self._transport,
            ) as client:
                response = await client.request(
                    method,
                    path,
                    params=params,
                    json=json,
                    headers=headers,
                )
        except httpx.TimeoutException as e:
            raise NetworkError(
                "Timeout na chamada ao provedor",
                provider=self.provider_id,
                cause=e,
            ) from e
        except httpx.HTTPError as e:
            raise NetworkError(
                f"Erro de conexão com o provedor: {e.__class__.__name__}",
                provider=self.provider_id,
                cause=e,
            ) from e

        status = response.status_code
        if status >= 400:
            message = _error_message(response)
            self.logger.error(
                "Erro na API do provedor",
                provider=self.provider_id,
                status=status,
                message=message,
            )

            if status in (401, 403):
                raise ProviderAuthError(
                    f"Acesso negado pelo provedor: {message}",
                    provider=self.provider_id,
                    status_code=status,
                )
            if status == 429:
                raise RateLimitError(
                    provider=self.provider_id,
                    status_code=status,
                    retry_after=_retry_after(response),
                )
            if status in RETRY_STATUS_CODES:
                raise NetworkError(
                    f"Provedor indisponível: {message}",
                    provider=self.provider_id,
                    status_code=status,
                )
            raise ProviderError(
                f"Erro do provedor: {message}",
                provider=self.provider_id,
                status_code=status,
            )

        try:
            data = response.json()
        except ValueError as e:
            raise ProviderResponseError(
                "Resposta do provedor não é JSON",
                provider=self.provider_id,
                raw_data=response.text,
                cause=e,
            ) from e

        if not isinstance(data, dict):
            raise ProviderResponseError(
                "Resposta do provedor em formato inesperado",
                provider=self.provider_id,
                raw_data=response.text,
            )
        return data


class BaseLLMProvider(BaseProvider):
    """Provedor que devolve texto livre gerado por modelo."""

    @abstractmethod
    async def search(self, params: LlmSearchParams) -> LlmSearchResult:
        """
        Executa a busca no modelo.

        Args:
            params: Prompts e parâmetros de geração

        Returns:
            LlmSearchResult com o texto do modelo

        Raises:
            ProviderError: Em falha do provedor
        """
        pass
