"""
Modelos de dados Pydantic para o sistema.
Define o contrato de produto, documentos intermediários e envelopes de busca.
"""

from dataclasses import dataclass, field
from typing import Any, Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, ConfigDict, Field, computed_field, field_validator

from product_search.core.types import (
    Currency,
    Language,
    PriceValue,
    ProviderID,
    Rating,
    Score,
    SearchQuery,
    SortBy,
    URLString,
)


def _blank_to_none(v: Any) -> Any:
    """Trata string vazia como campo ausente (modelos costumam enviar "")."""
    if isinstance(v, str) and not v.strip():
        return None
    return v


class Price(BaseModel):
    """Preço de um produto. Todos os valores numéricos são não-negativos."""

    model_config = ConfigDict(extra="ignore")

    value: Optional[PriceValue] = None
    min: Optional[PriceValue] = None
    max: Optional[PriceValue] = None
    currency: Currency = Currency.BRL
    formatted: Optional[str] = None

    @property
    def numeric_value(self) -> Optional[float]:
        """Valor usado para score e formatação (value, senão min)."""
        return self.value or self.min or None


class Source(BaseModel):
    """Loja de origem do produto."""

    model_config = ConfigDict(extra="ignore")

    name: str = Field(..., min_length=1)
    url: Optional[URLString] = None

    @field_validator("url", mode="before")
    @classmethod
    def blank_url_to_none(cls, v: Any) -> Any:
        return _blank_to_none(v)


class Product(BaseModel):
    """
    Produto validado.
    Unidade canônica de saída: todo produto que sai do pipeline
    satisfaz este contrato.
    """

    model_config = ConfigDict(extra="ignore")

    name: str = Field(..., min_length=3, max_length=200)
    description: Optional[str] = Field(default=None, max_length=500)
    price: Optional[Price] = None
    source: Optional[Source] = None
    image_url: Optional[URLString] = None
    specs: Optional[list[str]] = None
    rating: Optional[Rating] = None
    availability: Optional[str] = None
    brand: Optional[str] = None
    category: Optional[str] = None

    # Calculado localmente pelo normalizador, nunca vindo do provedor
    relevance_score: Score = 0.0

    @field_validator("image_url", mode="before")
    @classmethod
    def blank_image_to_none(cls, v: Any) -> Any:
        return _blank_to_none(v)

    @property
    def source_url(self) -> Optional[str]:
        """URL da página de origem, se houver."""
        return self.source.url if self.source else None

    @property
    def numeric_price(self) -> Optional[float]:
        """Preço numérico (value ou min), se houver."""
        return self.price.numeric_value if self.price else None


class ExtractionResult(BaseModel):
    """
    Documento recuperado do texto bruto, antes da validação por registro.
    Os produtos ainda são registros não tipados.
    """

    model_config = ConfigDict(extra="ignore")

    products: list[Any]
    search_summary: Optional[str] = None


@dataclass
class ParseOutcome:
    """Resultado do parsing: produtos válidos e diagnósticos (nunca lançados)."""

    products: list[Product] = field(default_factory=list)
    search_summary: Optional[str] = None
    parse_errors: list[str] = field(default_factory=list)


@dataclass
class UrlFilterResult:
    """Resultado do filtro de URLs de busca/categoria."""

    valid_products: list[Product] = field(default_factory=list)
    invalid_urls: list[str] = field(default_factory=list)

    @property
    def invalid_count(self) -> int:
        """Quantidade de produtos removidos."""
        return len(self.invalid_urls)


@dataclass
class ImageResolution:
    """Produtos com imagens resolvidas e lista única de imagens."""

    products: list[Product] = field(default_factory=list)
    images: list[str] = field(default_factory=list)


# =============================================================================
# REQUISIÇÃO E RESPOSTA DE BUSCA
# =============================================================================

class SearchOptions(BaseModel):
    """Opções de uma busca."""

    model_config = ConfigDict(extra="forbid")

    max_results: int = Field(default=10, ge=1, le=50)
    language: Language = "pt-BR"
    include_prices: bool = True
    include_sources: bool = True
    provider: Optional[ProviderID] = None
    llm_model: Optional[str] = None

    # Opções específicas do Google Shopping (SerpApi)
    serpapi_country: Optional[str] = None
    serpapi_language: Optional[str] = None
    serpapi_sort_by: Optional[SortBy] = None
    serpapi_min_price: Optional[float] = None
    serpapi_max_price: Optional[float] = None
    serpapi_free_shipping: Optional[bool] = None
    serpapi_on_sale: Optional[bool] = None


class SearchRequest(BaseModel):
    """Requisição de busca de produtos."""

    query: SearchQuery
    options: SearchOptions = Field(default_factory=SearchOptions)


class SearchMeta(BaseModel):
    """Metadados da resposta."""

    request_id: UUID = Field(default_factory=uuid4)
    response_time_ms: float = Field(default=0, ge=0)
    model_used: str
    provider: Optional[ProviderID] = None
    tokens_used: int = Field(default=0, ge=0)
    search_url: Optional[str] = None


class SearchResponse(BaseModel):
    """Resposta completa de uma busca."""

    products: list[Product] = Field(default_factory=list)
    query_interpreted: Optional[str] = None
    images: list[str] = Field(default_factory=list)
    citations: list[str] = Field(default_factory=list)
    parse_errors: list[str] = Field(default_factory=list)
    filtered_urls: list[str] = Field(default_factory=list)
    meta: SearchMeta

    @computed_field
    @property
    def total_found(self) -> int:
        """Total de produtos retornados."""
        return len(self.products)
