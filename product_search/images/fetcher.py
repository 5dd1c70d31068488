"""
Download de páginas de produto.
"""

from typing import Optional, Protocol

import httpx

from config.logging_config import LoggerMixin
from product_search.core.constants import PAGE_FETCH_HEADERS
from product_search.core.exceptions import PageFetchError


class PageFetcher(Protocol):
    """Interface de quem baixa o HTML de uma página."""

    async def fetch(self, url: str, timeout: float, max_redirects: int) -> str:
        ...


class HttpxPageFetcher(LoggerMixin):
    """
    Baixa páginas com httpx.
    Segue redirecionamentos até o limite e identifica o bot no User-Agent.
    """

    def __init__(
        self,
        user_agent: str = "ProductSearchBot/1.0",
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Inicializa o fetcher.

        Args:
            user_agent: User-Agent enviado nas requisições
            transport: Transporte httpx alternativo (usado em testes)
        """
        self.user_agent = user_agent
        self._transport = transport

    async def fetch(self, url: str, timeout: float, max_redirects: int) -> str:
        """
        Baixa o HTML da página.

        Args:
            url: URL da página
            timeout: Timeout total em segundos
            max_redirects: Máximo de redirecionamentos

        Returns:
            HTML da página

        Raises:
            PageFetchError: Status >= 400 ou erro de transporte
        """
        headers = {**PAGE_FETCH_HEADERS, "User-Agent": self.user_agent}

        try:
            async with httpx.AsyncClient(
                timeout=timeout,
                follow_redirects=True,
                max_redirects=max_redirects,
                headers=headers,
                transport=self._transport,
            ) as client:
                response = await client.get(url)
        except httpx.HTTPError as e:
            raise PageFetchError(
                f"Falha ao baixar página: {e.__class__.__name__}",
                url=url,
                cause=e,
            ) from e

        if response.status_code >= 400:
            raise PageFetchError(
                f"Página retornou status {response.status_code}",
                url=url,
                status_code=response.status_code,
            )

        return response.text
