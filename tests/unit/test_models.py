"""
Testes unitários para os modelos de dados.
"""

import pytest
from pydantic import ValidationError

from product_search.core.models import (
    Price,
    Product,
    SearchMeta,
    SearchOptions,
    SearchRequest,
    SearchResponse,
    Source,
)
from product_search.core.types import Currency


class TestPrice:
    """Testes para Price."""

    def test_valor_negativo(self):
        """Valores negativos são rejeitados."""
        with pytest.raises(ValidationError):
            Price(value=-10)

    def test_moeda_padrao(self):
        """Moeda padrão é BRL."""
        assert Price(value=10).currency == Currency.BRL

    def test_moeda_desconhecida(self):
        """Moedas fora da lista são rejeitadas."""
        with pytest.raises(ValidationError):
            Price(value=10, currency="EUR")

    def test_numeric_value(self):
        """value tem prioridade sobre min; zero conta como ausente."""
        assert Price(value=10, min=5).numeric_value == 10
        assert Price(min=5).numeric_value == 5
        assert Price(value=0).numeric_value is None


class TestSource:
    """Testes para Source."""

    def test_url_vazia(self):
        """URL vazia vira None."""
        assert Source(name="Loja", url="").url is None

    def test_url_invalida(self):
        """URL sem esquema é rejeitada."""
        with pytest.raises(ValidationError):
            Source(name="Loja", url="loja.example/produto")

    def test_nome_obrigatorio(self):
        """Nome vazio é rejeitado."""
        with pytest.raises(ValidationError):
            Source(name="")


class TestProduct:
    """Testes para Product."""

    @pytest.mark.parametrize("name", ["TV", "x" * 201])
    def test_tamanho_do_nome(self, name):
        """Nome precisa ter entre 3 e 200 caracteres."""
        with pytest.raises(ValidationError):
            Product(name=name)

    def test_descricao_longa(self):
        """Descrição acima de 500 caracteres é rejeitada."""
        with pytest.raises(ValidationError):
            Product(name="Produto", description="x" * 501)

    @pytest.mark.parametrize("rating", [-0.1, 5.1])
    def test_rating_fora_da_faixa(self, rating):
        """Rating precisa estar entre 0 e 5."""
        with pytest.raises(ValidationError):
            Product(name="Produto", rating=rating)

    def test_imagem_vazia(self):
        """image_url em branco vira None."""
        assert Product(name="Produto", image_url="").image_url is None

    def test_propriedades(self, product_completo, product_minimo):
        """source_url e numeric_price leem os campos aninhados."""
        assert product_completo.source_url == "https://www.amazon.com.br/dp/B0BS1QCFHX"
        assert product_completo.numeric_price == 249.9
        assert product_minimo.source_url is None
        assert product_minimo.numeric_price is None


class TestSearchRequest:
    """Testes para SearchRequest e SearchOptions."""

    def test_query_com_espacos(self):
        """Query é aparada antes da validação."""
        request = SearchRequest(query="  iphone 15  ")

        assert request.query == "iphone 15"
        assert request.options.max_results == 10
        assert request.options.language == "pt-BR"

    def test_query_curta(self):
        """Query com menos de 3 caracteres é rejeitada."""
        with pytest.raises(ValidationError):
            SearchRequest(query=" ab ")

    @pytest.mark.parametrize("max_results", [0, 51])
    def test_max_results_fora_da_faixa(self, max_results):
        """max_results precisa estar entre 1 e 50."""
        with pytest.raises(ValidationError):
            SearchOptions(max_results=max_results)

    def test_opcao_desconhecida(self):
        """Opções desconhecidas são rejeitadas."""
        with pytest.raises(ValidationError):
            SearchOptions(foo="bar")

    def test_provedor_desconhecido(self):
        """Provedor fora da lista é rejeitado."""
        with pytest.raises(ValidationError):
            SearchOptions(provider="openai")

    def test_idioma_desconhecido(self):
        """Idioma fora da lista é rejeitado."""
        with pytest.raises(ValidationError):
            SearchOptions(language="es-ES")


class TestSearchResponse:
    """Testes para SearchResponse."""

    def test_total_found(self, product_completo, product_minimo):
        """total_found acompanha a lista de produtos e aparece no dump."""
        response = SearchResponse(
            products=[product_completo, product_minimo],
            meta=SearchMeta(model_used="gemini-2.5-flash"),
        )

        assert response.total_found == 2
        assert response.model_dump()["total_found"] == 2

    def test_request_id_unico(self):
        """Cada resposta recebe um request_id novo."""
        first = SearchMeta(model_used="x")
        second = SearchMeta(model_used="x")

        assert first.request_id != second.request_id


class TestCurrency:
    """Testes para Currency."""

    def test_simbolos(self):
        """Símbolos usados na formatação."""
        assert Currency.BRL.symbol == "R$"
        assert Currency.USD.symbol == "US$"
