"""
Testes unitários para extração de imagem de páginas HTML.
"""

import pytest

from product_search.images.html import extract_image_from_html, image_from_jsonld, to_absolute_url
from tests.fixtures.html_samples import (
    INVALID_JSONLD_PAGE,
    JSONLD_GRAPH_PAGE,
    JSONLD_OFFERS_IMAGE_PAGE,
    JSONLD_PRODUCT_PAGE,
    NO_IMAGE_PAGE,
    OG_IMAGE_PAGE,
    RELATIVE_OG_IMAGE_PAGE,
    TWITTER_IMAGE_PAGE,
)

PAGE_URL = "https://loja.example/p/123"


class TestExtractImageFromHtml:
    """Testes para extract_image_from_html."""

    def test_og_image_tem_prioridade(self):
        """og:image vence twitter:image."""
        assert extract_image_from_html(OG_IMAGE_PAGE, PAGE_URL) == "https://cdn.loja.example/jbl-520bt.jpg"

    def test_og_image_relativa(self):
        """Imagem relativa é resolvida contra a URL da página."""
        result = extract_image_from_html(RELATIVE_OG_IMAGE_PAGE, PAGE_URL)
        assert result == "https://loja.example/images/produto-123.png"

    def test_twitter_image(self):
        """Sem og:image, usa twitter:image."""
        result = extract_image_from_html(TWITTER_IMAGE_PAGE, PAGE_URL)
        assert result == "https://cdn.loja.example/twitter-card.jpg"

    def test_jsonld_lista_de_imagens(self):
        """Pula blocos sem imagem e usa a primeira da lista."""
        result = extract_image_from_html(JSONLD_PRODUCT_PAGE, PAGE_URL)
        assert result == "https://cdn.loja.example/essenza-1.jpg"

    def test_jsonld_graph(self):
        """Procura dentro de @graph e aceita ImageObject."""
        result = extract_image_from_html(JSONLD_GRAPH_PAGE, PAGE_URL)
        assert result == "https://cdn.loja.example/airfryer.jpg"

    def test_jsonld_offers(self):
        """Usa offers.image quando o produto não tem image."""
        result = extract_image_from_html(JSONLD_OFFERS_IMAGE_PAGE, PAGE_URL)
        assert result == "https://cdn.loja.example/mouse.jpg"

    def test_jsonld_invalido(self):
        """JSON-LD inválido é ignorado; tags img não são usadas."""
        assert extract_image_from_html(INVALID_JSONLD_PAGE, PAGE_URL) is None

    def test_sem_imagem(self):
        """Página sem nenhuma fonte devolve None."""
        assert extract_image_from_html(NO_IMAGE_PAGE, PAGE_URL) is None

    def test_html_vazio(self):
        """HTML vazio devolve None."""
        assert extract_image_from_html("", PAGE_URL) is None


class TestImageFromJsonld:
    """Testes para image_from_jsonld."""

    @pytest.mark.parametrize(
        "node,expected",
        [
            ({"image": "https://a.example/1.jpg"}, "https://a.example/1.jpg"),
            ({"image": [{"url": "https://a.example/2.jpg"}]}, "https://a.example/2.jpg"),
            ([{"name": "sem imagem"}, {"image": "https://a.example/3.jpg"}], "https://a.example/3.jpg"),
            ({"image": ""}, None),
            ("texto", None),
        ],
    )
    def test_formatos(self, node, expected):
        """Aceita os formatos comuns do schema.org."""
        assert image_from_jsonld(node) == expected


class TestToAbsoluteUrl:
    """Testes para to_absolute_url."""

    def test_absoluta_inalterada(self):
        """URL absoluta não muda."""
        assert to_absolute_url("https://cdn.example/a.jpg", PAGE_URL) == "https://cdn.example/a.jpg"

    def test_relativa_ao_caminho(self):
        """Caminho relativo usa o diretório da página."""
        assert to_absolute_url("img/a.jpg", PAGE_URL) == "https://loja.example/p/img/a.jpg"

    def test_sem_esquema(self):
        """URL iniciada por // herda o esquema da página."""
        assert to_absolute_url("//cdn.example/a.jpg", PAGE_URL) == "https://cdn.example/a.jpg"

    def test_url_quebrada(self):
        """URL impossível de interpretar é devolvida como veio."""
        assert to_absolute_url("http://[quebrada", PAGE_URL) == "http://[quebrada"
