"""
Tipos customizados e enumerações do sistema.
"""

from enum import Enum
from typing import Annotated, Literal

from pydantic import Field, StringConstraints


# ENUMERAÇÕES

class Currency(str, Enum):
    """Moedas suportadas nos preços."""

    BRL = "BRL"
    USD = "USD"

    @property
    def symbol(self) -> str:
        """Símbolo exibido na formatação pt-BR."""
        return {Currency.BRL: "R$", Currency.USD: "US$"}[self]


class UrlKind(str, Enum):
    """Classificação de uma URL de origem."""

    PRODUCT = "product"           # Página de detalhe de um produto
    SEARCH = "search"             # Busca, categoria ou listagem


# TIPOS ANOTADOS

# Provedores suportados
ProviderID = Literal["gemini", "perplexity", "serpapi"]

# Idiomas aceitos na busca
Language = Literal["pt-BR", "en-US"]

# Ordenações aceitas pelo Google Shopping
SortBy = Literal["relevance", "price_low", "price_high", "review"]

# Preço (sempre não-negativo)
PriceValue = Annotated[float, Field(ge=0)]

# Nota (0 a 5)
Rating = Annotated[float, Field(ge=0, le=5)]

# Score de relevância (0 a 1)
Score = Annotated[float, Field(ge=0, le=1)]

# URL absoluta validada
URLString = Annotated[
    str,
    StringConstraints(
        pattern=r"^https?://[^\s/$.?#][^\s]*$",
        strip_whitespace=True,
    ),
]

# Query de busca
SearchQuery = Annotated[
    str,
    StringConstraints(
        min_length=3,
        max_length=500,
        strip_whitespace=True,
    ),
]
