"""
Módulo de provedores: clientes de modelos de linguagem e do Google Shopping.
"""

from product_search.providers.base import (
    BaseLLMProvider,
    BaseProvider,
    LlmSearchParams,
    LlmSearchResult,
)
from product_search.providers.gemini import GeminiProvider
from product_search.providers.perplexity import PerplexityProvider
from product_search.providers.serpapi import (
    SerpApiProvider,
    ShoppingSearchParams,
    ShoppingSearchResult,
)
from product_search.providers.prompts import build_search_prompt, is_likely_product_query

# Registry de provedores disponíveis
PROVIDER_REGISTRY: dict[str, type[BaseProvider]] = {
    "gemini": GeminiProvider,
    "perplexity": PerplexityProvider,
    "serpapi": SerpApiProvider,
}

__all__ = [
    "BaseProvider",
    "BaseLLMProvider",
    "LlmSearchParams",
    "LlmSearchResult",
    "GeminiProvider",
    "PerplexityProvider",
    "SerpApiProvider",
    "ShoppingSearchParams",
    "ShoppingSearchResult",
    "build_search_prompt",
    "is_likely_product_query",
    "PROVIDER_REGISTRY",
]
