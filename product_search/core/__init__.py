"""
Módulo core: modelos de dados, exceções, tipos e constantes.
"""

from product_search.core.models import (
    Price,
    Source,
    Product,
    ExtractionResult,
    ParseOutcome,
    UrlFilterResult,
    ImageResolution,
    SearchOptions,
    SearchRequest,
    SearchMeta,
    SearchResponse,
)
from product_search.core.exceptions import (
    ProductSearchError,
    ProviderError,
    ProviderAuthError,
    RateLimitError,
    NetworkError,
    ProviderResponseError,
    PageFetchError,
    ConfigurationError,
)
from product_search.core.types import (
    Currency,
    UrlKind,
    ProviderID,
    Language,
)

__all__ = [
    # Models
    "Price",
    "Source",
    "Product",
    "ExtractionResult",
    "ParseOutcome",
    "UrlFilterResult",
    "ImageResolution",
    "SearchOptions",
    "SearchRequest",
    "SearchMeta",
    "SearchResponse",
    # Exceptions
    "ProductSearchError",
    "ProviderError",
    "ProviderAuthError",
    "RateLimitError",
    "NetworkError",
    "ProviderResponseError",
    "PageFetchError",
    "ConfigurationError",
    # Types
    "Currency",
    "UrlKind",
    "ProviderID",
    "Language",
]
