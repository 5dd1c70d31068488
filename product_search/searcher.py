"""
ProductSearcher: orquestrador principal do sistema.
Coordena provedores, pipeline e resolução de imagens para uma busca completa.
"""

import time
from typing import Optional

import httpx

from config.logging_config import LoggerMixin
from config.providers import get_provider_config
from config.settings import Settings, get_settings
from product_search.core.models import (
    SearchMeta,
    SearchOptions,
    SearchRequest,
    SearchResponse,
)
from product_search.images import HttpxPageFetcher, ImageResolver
from product_search.images.resolver import merge_images
from product_search.pipeline import ProcessingPipeline
from product_search.providers import (
    PROVIDER_REGISTRY,
    BaseLLMProvider,
    BaseProvider,
    LlmSearchParams,
    SerpApiProvider,
    ShoppingSearchParams,
    build_search_prompt,
    is_likely_product_query,
)

OFFLINE_MODEL_LABEL = "offline"


class ProductSearcher(LoggerMixin):
    """
    Orquestrador de buscas de produtos.

    Responsabilidades:
    - Escolher o provedor (com fallback quando a SerpApi não está configurada)
    - Processar a resposta pelo pipeline
    - Resolver imagens dos primeiros produtos
    - Montar a resposta com diagnósticos
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        pipeline: Optional[ProcessingPipeline] = None,
        image_resolver: Optional[ImageResolver] = None,
        providers: Optional[dict[str, BaseProvider]] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Inicializa o buscador.

        Args:
            settings: Configurações (padrão: singleton global)
            pipeline: Pipeline de processamento
            image_resolver: Resolvedor de imagens
            providers: Instâncias de provedores já criadas, por ID
            transport: Transporte httpx repassado aos provedores criados aqui
        """
        self.settings = settings or get_settings()
        self.pipeline = pipeline or ProcessingPipeline()
        self.image_resolver = image_resolver or ImageResolver(
            fetcher=HttpxPageFetcher(user_agent=self.settings.user_agent),
            limit=self.settings.image_resolve_limit,
            timeout=self.settings.page_fetch_timeout,
            max_redirects=self.settings.page_fetch_max_redirects,
        )
        self._providers: dict[str, BaseProvider] = dict(providers or {})
        self._transport = transport

    def get_provider(self, provider_id: str) -> BaseProvider:
        """Retorna (criando se preciso) a instância do provedor."""
        if provider_id not in self._providers:
            provider_class = PROVIDER_REGISTRY[provider_id]
            self._providers[provider_id] = provider_class(
                settings=self.settings,
                transport=self._transport,
            )
        return self._providers[provider_id]

    def resolve_provider_id(self, options: SearchOptions) -> str:
        """
        Decide o provedor da busca.

        SerpApi sem chave configurada cai para o Gemini.
        """
        provider_id = options.provider or self.settings.default_provider
        if provider_id == "serpapi" and not self.settings.is_configured("serpapi"):
            self.logger.warning(
                "SerpApi solicitada sem SERPAPI_API_KEY, usando Gemini",
            )
            provider_id = "gemini"
        return provider_id

    async def search(self, request: SearchRequest) -> SearchResponse:
        """
        Executa busca completa.

        Args:
            request: Query e opções

        Returns:
            SearchResponse com produtos e diagnósticos

        Raises:
            ProviderError: Falha do provedor (única falha fatal)
        """
        start = time.perf_counter()
        provider_id = self.resolve_provider_id(request.options)

        self.logger.info(
            "Iniciando busca",
            query=request.query,
            provider=provider_id,
            max_results=request.options.max_results,
        )

        provider = self.get_provider(provider_id)
        if isinstance(provider, SerpApiProvider):
            response = await self._search_shopping(provider, request)
        else:
            response = await self._search_llm(provider, request)

        response.meta.response_time_ms = round((time.perf_counter() - start) * 1000, 2)

        self.logger.info(
            "Busca concluída",
            provider=provider_id,
            products=response.total_found,
            parse_errors=len(response.parse_errors),
            filtered=len(response.filtered_urls),
            response_time_ms=response.meta.response_time_ms,
        )
        return response

    def search_text(
        self,
        text: str,
        options: Optional[SearchOptions] = None,
    ) -> SearchResponse:
        """
        Processa uma resposta salva de modelo, sem acessar a rede.

        Args:
            text: Resposta bruta do modelo
            options: Opções (idioma e limite)

        Returns:
            SearchResponse sem resolução de imagens
        """
        start = time.perf_counter()
        options = options or SearchOptions()

        result = self.pipeline.process_text(
            text,
            language=options.language,
            max_results=options.max_results,
        )

        return SearchResponse(
            products=result.products,
            query_interpreted=result.search_summary,
            images=merge_images(None, result.products),
            parse_errors=result.parse_errors,
            filtered_urls=result.filtered_urls,
            meta=SearchMeta(
                model_used=OFFLINE_MODEL_LABEL,
                response_time_ms=round((time.perf_counter() - start) * 1000, 2),
            ),
        )

    async def _search_llm(
        self,
        provider: BaseLLMProvider,
        request: SearchRequest,
    ) -> SearchResponse:
        """Busca via modelo de linguagem: prompt -> texto -> pipeline -> imagens."""
        options = request.options
        log = self.log_operation("llm_search", provider=provider.provider_id)

        if not is_likely_product_query(request.query):
            log.warning("Query não parece ser sobre produtos", query=request.query)

        system_prompt, user_prompt = build_search_prompt(request.query, options)
        result = await provider.search(
            LlmSearchParams(
                system_prompt=system_prompt,
                user_prompt=user_prompt,
                model_override=self._select_model(provider.provider_id, options.llm_model),
            )
        )

        log.debug("Chamada ao modelo concluída", model=result.model, tokens=result.tokens_used)

        processed = self.pipeline.process_text(
            result.content,
            language=options.language,
            max_results=options.max_results,
        )

        products = processed.products
        images = list(dict.fromkeys(result.images))
        if products:
            resolution = await self.image_resolver.resolve(products, result.images)
            products = resolution.products
            images = resolution.images

        return SearchResponse(
            products=products,
            query_interpreted=processed.search_summary,
            images=images,
            citations=result.citations,
            parse_errors=processed.parse_errors,
            filtered_urls=processed.filtered_urls,
            meta=SearchMeta(
                model_used=result.model,
                provider=provider.provider_id,
                tokens_used=result.tokens_used,
            ),
        )

    async def _search_shopping(
        self,
        provider: SerpApiProvider,
        request: SearchRequest,
    ) -> SearchResponse:
        """Busca via Google Shopping: itens -> registros -> pipeline."""
        options = request.options
        country = options.serpapi_country or "br"

        result = await provider.search(
            ShoppingSearchParams(
                query=request.query,
                country=country,
                language=options.serpapi_language or "pt",
                num=options.max_results,
                min_price=options.serpapi_min_price,
                max_price=options.serpapi_max_price,
                sort_by=options.serpapi_sort_by,
                free_shipping=bool(options.serpapi_free_shipping),
                on_sale=bool(options.serpapi_on_sale),
            )
        )

        processed = self.pipeline.process_records(
            result.records,
            language=options.language,
            max_results=options.max_results,
        )

        return SearchResponse(
            products=processed.products,
            query_interpreted=f'Resultados do Google Shopping para "{request.query}"',
            images=merge_images(None, processed.products),
            parse_errors=processed.parse_errors,
            filtered_urls=processed.filtered_urls,
            meta=SearchMeta(
                model_used=provider.config.model_label or provider.provider_id,
                provider=provider.provider_id,
                search_url=result.search_url,
            ),
        )

    def _select_model(self, provider_id: str, requested: Optional[str]) -> Optional[str]:
        """Valida o modelo pedido; modelos desconhecidos caem no padrão."""
        if not requested:
            return None
        config = get_provider_config(provider_id)
        if not config.supports_model(requested):
            self.logger.warning(
                "Modelo não suportado, usando padrão",
                provider=provider_id,
                model=requested,
                default=config.default_model,
            )
            return None
        return requested
