"""
Normalizador de produtos.
Filtra conteúdo que não é produto, remove duplicatas, calcula score
de relevância e formata preços.
"""

import re
from typing import Optional

from config.logging_config import LoggerMixin
from product_search.core.constants import NON_PRODUCT_PATTERNS
from product_search.core.models import Price, Product
from product_search.core.types import Currency, Language

_WHITESPACE = re.compile(r"\s+")

# Pesos do score de relevância
BASE_SCORE = 0.5
NAME_BONUS = 0.1
DESCRIPTION_BONUS = 0.1
PRICE_BONUS = 0.15
SOURCE_URL_BONUS = 0.1
SPECS_BONUS = 0.05


def format_price(value: float, currency: Currency = Currency.BRL) -> str:
    """
    Formata valor no padrão brasileiro.

    Exemplos:
        1234.56, BRL -> "R$ 1.234,56"
        10, USD -> "US$ 10,00"
    """
    formatted = f"{value:,.2f}".replace(",", "X").replace(".", ",").replace("X", ".")
    return f"{currency.symbol} {formatted}"


def dedup_key(name: str) -> str:
    """Chave de deduplicação: nome em minúsculas com espaços colapsados."""
    return _WHITESPACE.sub(" ", name.lower()).strip()


class ProductNormalizer(LoggerMixin):
    """
    Normalizador da lista de produtos validados.
    Todas as etapas são puras e preservam a ordem quando não reordenam.
    """

    def is_non_product(self, product: Product, language: Language = "pt-BR") -> bool:
        """
        Verifica se o item é conteúdo informativo (tutorial, review, etc).

        Args:
            product: Produto validado
            language: Idioma que seleciona a lista de padrões

        Returns:
            True se não for um produto à venda
        """
        text = f"{product.name} {product.description or ''}"
        patterns = NON_PRODUCT_PATTERNS.get(language, NON_PRODUCT_PATTERNS["pt-BR"])
        return any(pattern.search(text) for pattern in patterns)

    def filter_non_products(
        self,
        products: list[Product],
        language: Language = "pt-BR",
    ) -> list[Product]:
        """Remove itens que não são produtos."""
        kept = [p for p in products if not self.is_non_product(p, language)]
        if len(kept) < len(products):
            self.logger.debug(
                "Itens não-produto removidos",
                removed=len(products) - len(kept),
            )
        return kept

    def calculate_relevance_score(self, product: Product) -> float:
        """
        Calcula score de relevância pela completude dos dados.

        Args:
            product: Produto validado

        Returns:
            Score entre 0 e 1
        """
        score = BASE_SCORE

        if len(product.name) > 5:
            score += NAME_BONUS
        if product.description and len(product.description) > 20:
            score += DESCRIPTION_BONUS
        if product.numeric_price:
            score += PRICE_BONUS
        if product.source_url:
            score += SOURCE_URL_BONUS
        if product.specs:
            score += SPECS_BONUS

        return round(min(score, 1.0), 2)

    def deduplicate(self, products: list[Product]) -> list[Product]:
        """
        Remove produtos com o mesmo nome normalizado.

        Mantém o de maior score; em empate, o primeiro visto. O
        sobrevivente ocupa a posição da primeira ocorrência.
        """
        unique: dict[str, Product] = {}
        for product in products:
            key = dedup_key(product.name)
            current = unique.get(key)
            if current is None:
                unique[key] = product
            elif self.calculate_relevance_score(product) > self.calculate_relevance_score(current):
                unique[key] = product

        if len(unique) < len(products):
            self.logger.debug(
                "Duplicatas removidas",
                removed=len(products) - len(unique),
            )
        return list(unique.values())

    def format_product_price(self, price: Optional[Price]) -> Optional[Price]:
        """Preenche o campo formatted quando existe preço numérico."""
        if price is None:
            return None
        value = price.numeric_value
        formatted = format_price(value, price.currency) if value else None
        return price.model_copy(update={"formatted": formatted})

    def normalize(
        self,
        products: list[Product],
        language: Language = "pt-BR",
    ) -> list[Product]:
        """
        Executa a normalização completa.

        Args:
            products: Produtos validados
            language: Idioma da busca

        Returns:
            Produtos normalizados, ordenados por score decrescente
        """
        products = self.filter_non_products(products, language)
        products = self.deduplicate(products)

        normalized = [
            product.model_copy(
                update={
                    "relevance_score": self.calculate_relevance_score(product),
                    "price": self.format_product_price(product.price),
                }
            )
            for product in products
        ]

        # sorted é estável: empates mantêm a ordem original
        normalized = sorted(normalized, key=lambda p: p.relevance_score, reverse=True)

        self.logger.debug("Produtos normalizados", total=len(normalized))
        return normalized
