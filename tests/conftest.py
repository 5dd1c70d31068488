"""
Configurações e fixtures compartilhadas para pytest.
"""

from pathlib import Path
from typing import Callable, Optional

import httpx
import pytest
import structlog

from config.settings import Settings
from product_search.core.models import Price, Product, Source
from product_search.images.cache import ImageCache


# ISOLAMENTO DE LOGGING

@pytest.fixture(autouse=True)
def _reset_structlog():
    """Desfaz o structlog.configure() feito por testes (ex.: CLI), cujo
    PrintLogger fica preso ao stderr capturado e já fechado pelo pytest."""
    yield
    structlog.reset_defaults()


# FIXTURES DE DIRETÓRIOS

@pytest.fixture
def temp_log_dir(tmp_path) -> Path:
    """Cria diretório temporário para logs de teste."""
    log_dir = tmp_path / "logs"
    log_dir.mkdir()
    return log_dir


# FIXTURES DE CONFIGURAÇÃO

@pytest.fixture
def test_settings() -> Settings:
    """Configurações com todas as chaves definidas e retry rápido."""
    return Settings(
        _env_file=None,
        env="testing",
        gemini_api_key="gemini-test-key",
        perplexity_api_key="pplx-test-key",
        serpapi_api_key="serpapi-test-key",
        max_retries=3,
    )


@pytest.fixture
def settings_without_keys() -> Settings:
    """Configurações sem nenhuma chave de API."""
    return Settings(
        _env_file=None,
        env="testing",
        gemini_api_key="",
        perplexity_api_key="",
        serpapi_api_key="",
    )


# FIXTURES DE PRODUTOS

@pytest.fixture
def product_completo() -> Product:
    """Produto com todos os campos que pontuam."""
    return Product(
        name="Fone de Ouvido JBL Tune 520BT",
        description="Fone bluetooth on-ear com até 57 horas de bateria",
        price=Price(value=249.9, currency="BRL"),
        source=Source(name="Amazon", url="https://www.amazon.com.br/dp/B0BS1QCFHX"),
        specs=["Bluetooth 5.3"],
    )


@pytest.fixture
def product_minimo() -> Product:
    """Produto apenas com nome curto."""
    return Product(name="Fone")


@pytest.fixture
def make_product() -> Callable[..., Product]:
    """Fábrica de produtos com URL de origem opcional."""

    def _make(
        name: str = "Produto Teste",
        source_url: Optional[str] = None,
        image_url: Optional[str] = None,
        **kwargs,
    ) -> Product:
        source = Source(name="Loja", url=source_url) if source_url else None
        return Product(name=name, source=source, image_url=image_url, **kwargs)

    return _make


# FIXTURES DE IMAGENS

@pytest.fixture
def image_cache() -> ImageCache:
    """Cache isolado (não usa a instância global)."""
    return ImageCache()


class FakePageFetcher:
    """Fetcher em memória que registra as URLs pedidas."""

    def __init__(self, pages: Optional[dict[str, str]] = None, errors: Optional[dict[str, Exception]] = None):
        self.pages = pages or {}
        self.errors = errors or {}
        self.calls: list[str] = []

    async def fetch(self, url: str, timeout: float, max_redirects: int) -> str:
        self.calls.append(url)
        if url in self.errors:
            raise self.errors[url]
        return self.pages.get(url, "<html></html>")


@pytest.fixture
def fake_fetcher_factory() -> Callable[..., FakePageFetcher]:
    """Fábrica de FakePageFetcher."""
    return FakePageFetcher


# FIXTURES DE HTTP

@pytest.fixture
def json_transport() -> Callable[..., httpx.MockTransport]:
    """
    Cria MockTransport que devolve respostas em sequência.

    Cada item é (status, corpo) ou uma exceção httpx a ser lançada.
    As requisições recebidas ficam em transport.requests.
    """

    def _make(*responses) -> httpx.MockTransport:
        queue = list(responses)
        requests: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            requests.append(request)
            item = queue.pop(0) if len(queue) > 1 else queue[0]
            if isinstance(item, Exception):
                raise item
            status, body = item
            if isinstance(body, (dict, list)):
                return httpx.Response(status, json=body)
            return httpx.Response(status, text=body)

        transport = httpx.MockTransport(handler)
        transport.requests = requests
        return transport

    return _make
