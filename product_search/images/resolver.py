"""
Resolução de imagens de produtos a partir da página de origem.
"""

import asyncio
from typing import Optional
from urllib.parse import urlsplit

from config.logging_config import LoggerMixin
from product_search.core.models import ImageResolution, Product
from product_search.images.cache import ImageCache, get_image_cache
from product_search.images.fetcher import HttpxPageFetcher, PageFetcher
from product_search.images.html import extract_image_from_html


def _is_http_url(url: Optional[str]) -> bool:
    if not url:
        return False
    try:
        parts = urlsplit(url)
    except ValueError:
        return False
    return parts.scheme in ("http", "https") and bool(parts.netloc)


def merge_images(existing: Optional[list[str]], products: list[Product]) -> list[str]:
    """
    Junta imagens do provedor e dos produtos sem repetição.

    Mantém a ordem da primeira ocorrência: provedor primeiro.
    """
    images = list(existing or []) + [p.image_url for p in products if p.image_url]
    return list(dict.fromkeys(img for img in images if img))


class ImageResolver(LoggerMixin):
    """
    Preenche image_url de produtos sem imagem.
    Baixa a página de origem e lê og:image, twitter:image ou JSON-LD.
    """

    def __init__(
        self,
        fetcher: Optional[PageFetcher] = None,
        cache: Optional[ImageCache] = None,
        limit: int = 5,
        timeout: float = 5.0,
        max_redirects: int = 5,
    ):
        """
        Inicializa o resolvedor.

        Args:
            fetcher: Quem baixa as páginas (padrão: httpx)
            cache: Cache de resultados (padrão: instância global)
            limit: Quantos produtos do topo da lista resolver
            timeout: Timeout por página em segundos
            max_redirects: Máximo de redirecionamentos por página
        """
        self.fetcher = fetcher or HttpxPageFetcher()
        self.cache = cache if cache is not None else get_image_cache()
        self.limit = limit
        self.timeout = timeout
        self.max_redirects = max_redirects

    async def resolve(
        self,
        products: list[Product],
        existing_images: Optional[list[str]] = None,
    ) -> ImageResolution:
        """
        Resolve imagens dos primeiros produtos.

        Args:
            products: Produtos já filtrados e limitados
            existing_images: Imagens devolvidas pelo provedor

        Returns:
            ImageResolution com produtos enriquecidos e lista única de imagens
        """
        window = products[: self.limit]
        pending = [
            p.source_url
            for p in window
            if not p.image_url and p.source_url and p.source_url not in self.cache
        ]
        pending = list(dict.fromkeys(pending))

        if pending:
            self.logger.debug("Resolvendo imagens", urls=len(pending))
            await asyncio.gather(*(self._resolve_url(url) for url in pending))

        resolved: list[Product] = []
        for index, product in enumerate(products):
            if index < self.limit and not product.image_url and product.source_url:
                _, image = self.cache.lookup(product.source_url)
                if image:
                    product = product.model_copy(update={"image_url": image})
            resolved.append(product)

        return ImageResolution(
            products=resolved,
            images=merge_images(existing_images, resolved),
        )

    async def _resolve_url(self, page_url: str) -> None:
        """Baixa e extrai a imagem de uma página, registrando no cache."""
        try:
            html = await self.fetcher.fetch(page_url, self.timeout, self.max_redirects)
            image = extract_image_from_html(html, page_url)
        except Exception as e:
            self.logger.warning(
                "Falha ao resolver imagem da página",
                url=page_url,
                error=str(e),
                error_type=e.__class__.__name__,
            )
            self.cache.store(page_url, None)
            return

        if not _is_http_url(image):
            image = None

        self.cache.store(page_url, image)
        self.logger.debug("Imagem resolvida", url=page_url, image=image)
