"""
Provedor SerpApi (Google Shopping).
Devolve itens já estruturados, adaptados para registros de produto.
"""

from dataclasses import dataclass, field
from typing import Any, Optional

from product_search.core.constants import KNOWN_BRANDS
from product_search.core.exceptions import ProviderResponseError
from product_search.core.types import SortBy
from product_search.providers.base import BaseProvider

SORT_BY_CODES: dict[str, int] = {
    "price_low": 1,
    "price_high": 2,
    "review": 3,
}

# Mensagem da SerpApi quando o Google não encontra resultados
NO_RESULTS_MARKER = "hasn't returned any results"


@dataclass
class ShoppingSearchParams:
    """Parâmetros de uma busca no Google Shopping."""

    query: str
    country: str = "br"
    language: str = "pt"
    num: int = 20
    location: Optional[str] = None
    min_price: Optional[float] = None
    max_price: Optional[float] = None
    sort_by: Optional[SortBy] = None
    free_shipping: bool = False
    on_sale: bool = False


@dataclass
class ShoppingSearchResult:
    """Resultado bruto da busca e registros adaptados."""

    records: list[dict[str, Any]] = field(default_factory=list)
    raw_results: list[dict[str, Any]] = field(default_factory=list)
    search_url: Optional[str] = None


def extract_brand(title: str) -> str:
    """
    Deduz a marca pelo título.

    Procura marcas conhecidas; sem match, usa a primeira palavra.
    """
    lowered = title.lower()
    for brand in KNOWN_BRANDS:
        if brand.lower() in lowered:
            return brand
    words = title.split()
    return words[0] if words else "N/A"


def adapt_shopping_result(item: dict[str, Any], country: str = "br") -> dict[str, Any]:
    """
    Converte um item do Google Shopping em registro de produto.

    Args:
        item: Item de shopping_results
        country: País da busca (define a moeda)

    Returns:
        Registro ainda não validado
    """
    title = item.get("title") or ""
    source_name = item.get("source") or ""
    extensions = [e for e in item.get("extensions") or [] if isinstance(e, str)]
    extracted_price = item.get("extracted_price") or None

    description = ". ".join(extensions) if extensions else f"{title} - {source_name}"

    return {
        "name": title,
        "description": description[:500],
        "brand": extract_brand(title),
        "category": "Shopping",
        "price": {
            "value": extracted_price,
            "min": extracted_price,
            "max": item.get("extracted_old_price") or extracted_price,
            "currency": "BRL" if country == "br" else "USD",
        },
        "source": {
            "name": source_name,
            "url": item.get("link") or item.get("product_link") or None,
        },
        "image_url": item.get("thumbnail"),
        "specs": extensions,
        "rating": item.get("rating"),
        "availability": item.get("delivery") or "Verificar no site",
    }


class SerpApiProvider(BaseProvider):
    """Cliente da SerpApi para o motor google_shopping."""

    provider_id = "serpapi"

    @property
    def base_url(self) -> str:
        return self.settings.serpapi_base_url

    @property
    def timeout(self) -> float:
        return self.settings.serpapi_timeout

    def build_query_params(self, params: ShoppingSearchParams) -> dict[str, Any]:
        """Monta os parâmetros da requisição (sem a chave de API)."""
        query: dict[str, Any] = {
            "engine": "google_shopping",
            "q": params.query,
            "gl": params.country,
            "hl": params.language,
            "num": params.num,
        }

        if params.location:
            query["location"] = params.location

        # Filtros de preço não funcionam no Google Shopping Brasil
        if params.country != "br":
            if params.min_price is not None:
                query["min_price"] = params.min_price
            if params.max_price is not None:
                query["max_price"] = params.max_price
        elif params.min_price is not None or params.max_price is not None:
            self.logger.warning(
                "Filtros de preço não suportados nesta região, ignorando",
                country=params.country,
                min_price=params.min_price,
                max_price=params.max_price,
            )

        if params.sort_by in SORT_BY_CODES:
            query["sort_by"] = SORT_BY_CODES[params.sort_by]
        if params.free_shipping:
            query["free_shipping"] = 1
        if params.on_sale:
            query["on_sale"] = 1

        return query

    async def search(self, params: ShoppingSearchParams) -> ShoppingSearchResult:
        """
        Busca produtos no Google Shopping.

        Args:
            params: Parâmetros da busca

        Returns:
            ShoppingSearchResult com registros adaptados

        Raises:
            ProviderError: Em falha da API ou erro reportado pela SerpApi
        """
        self.ensure_configured()
        query = self.build_query_params(params)

        self.logger.debug("Chamando SerpApi", params=query)

        data = await self._request(
            "GET",
            "/search",
            params={**query, "api_key": self.api_key},
        )

        error = data.get("error")
        if error and NO_RESULTS_MARKER not in str(error):
            raise ProviderResponseError(
                f"Erro da SerpApi: {error}",
                provider=self.provider_id,
            )

        raw_results = [r for r in data.get("shopping_results") or [] if isinstance(r, dict)]
        search_url = (data.get("search_metadata") or {}).get("google_shopping_url")

        self.logger.info(
            "Busca na SerpApi concluída",
            results=len(raw_results),
            search_url=search_url,
        )

        return ShoppingSearchResult(
            records=[adapt_shopping_result(item, params.country) for item in raw_results],
            raw_results=raw_results,
            search_url=search_url,
        )
