"""
Classificador de URLs de origem.
Distingue páginas de detalhe de produto de páginas de busca/categoria.
"""

from typing import Optional
from urllib.parse import SplitResult, urlsplit

from config.logging_config import LoggerMixin
from product_search.core.constants import PRODUCT_URL_PATTERNS, SEARCH_URL_PATTERNS
from product_search.core.models import Product, UrlFilterResult
from product_search.core.types import UrlKind


def _split(url: Optional[str]) -> Optional[SplitResult]:
    """Quebra a URL em partes; None se não tiver esquema ou host."""
    if not url:
        return None
    try:
        parts = urlsplit(url.strip())
    except ValueError:
        return None
    if not parts.scheme or not parts.netloc:
        return None
    return parts


def is_search_url(url: Optional[str]) -> bool:
    """
    Verifica se a URL parece uma página de busca ou categoria.

    URLs vazias ou impossíveis de interpretar contam como busca.
    """
    parts = _split(url)
    if parts is None:
        return True

    full_url = url.strip().lower()
    path = parts.path.lower()
    query = f"?{parts.query.lower()}" if parts.query else ""

    for pattern in SEARCH_URL_PATTERNS:
        if pattern.search(full_url) or pattern.search(path) or (query and pattern.search(query)):
            return True
    return False


def is_product_url(url: Optional[str]) -> bool:
    """
    Verifica se a URL parece a página de detalhe de um produto.

    Sem assinatura conhecida, aceita caminhos com 2 ou mais segmentos.
    """
    parts = _split(url)
    if parts is None or is_search_url(url):
        return False

    for pattern in PRODUCT_URL_PATTERNS:
        if pattern.search(url) or pattern.search(parts.path):
            return True

    segments = [s for s in parts.path.split("/") if s]
    return len(segments) >= 2


def classify(url: Optional[str]) -> UrlKind:
    """Classifica a URL: produto ou busca."""
    return UrlKind.PRODUCT if is_product_url(url) else UrlKind.SEARCH


class UrlClassifier(LoggerMixin):
    """Filtra produtos cuja origem é uma página de busca/categoria."""

    def filter_products_by_url(self, products: list[Product]) -> UrlFilterResult:
        """
        Remove produtos com URL de busca.

        Produtos sem URL são mantidos.

        Args:
            products: Produtos normalizados

        Returns:
            UrlFilterResult com produtos mantidos e URLs removidas
        """
        result = UrlFilterResult()

        for product in products:
            url = product.source_url
            if not url:
                result.valid_products.append(product)
                continue

            if is_search_url(url):
                result.invalid_urls.append(url)
                self.logger.debug(
                    "URL de busca removida",
                    url=url,
                    product=product.name[:50],
                )
                continue

            result.valid_products.append(product)

        if result.invalid_count:
            self.logger.info(
                "Produtos com URL de busca/categoria filtrados",
                filtered=result.invalid_count,
                remaining=len(result.valid_products),
            )

        return result
