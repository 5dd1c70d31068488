"""
Testes de integração para a CLI.
"""

import json

import pytest
from rich.console import Console
from typer.testing import CliRunner

from config.settings import Settings
from product_search import __version__, cli
from product_search.core.exceptions import ProviderAuthError
from product_search.core.models import SearchMeta, SearchResponse
from tests.fixtures.llm_responses import DUPLICATES_RESPONSE

runner = CliRunner()


@pytest.fixture(autouse=True)
def quiet_cli(monkeypatch):
    """Console largo e logs só de erro para a saída ficar legível."""
    monkeypatch.setattr(cli, "console", Console(width=200))
    monkeypatch.setattr(cli, "get_settings", lambda: Settings(_env_file=None, log_level="ERROR"))


class TestCli:
    """Testes dos comandos da CLI."""

    def test_version(self):
        """Exibe a versão do pacote."""
        result = runner.invoke(cli.app, ["version"])

        assert result.exit_code == 0
        assert __version__ in result.stdout

    def test_providers(self):
        """Lista os provedores cadastrados."""
        result = runner.invoke(cli.app, ["providers"])

        assert result.exit_code == 0
        for provider_id in ("gemini", "perplexity", "serpapi"):
            assert provider_id in result.stdout

    def test_parse_json(self, tmp_path):
        """Processa uma resposta salva e imprime JSON."""
        response_file = tmp_path / "resposta.json"
        response_file.write_text(DUPLICATES_RESPONSE, encoding="utf-8")

        result = runner.invoke(cli.app, ["parse", str(response_file), "--json"])

        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert data["total_found"] == 1
        assert data["products"][0]["name"] == "Fone X"
        assert data["meta"]["model_used"] == "offline"

    def test_parse_tabela(self, tmp_path):
        """Sem --json, exibe a tabela de resultados."""
        response_file = tmp_path / "resposta.json"
        response_file.write_text(DUPLICATES_RESPONSE, encoding="utf-8")

        result = runner.invoke(cli.app, ["parse", str(response_file)])

        assert result.exit_code == 0
        assert "Fone X" in result.stdout

    def test_parse_arquivo_inexistente(self, tmp_path):
        """Arquivo inexistente é erro de uso."""
        result = runner.invoke(cli.app, ["parse", str(tmp_path / "nao_existe.json")])

        assert result.exit_code != 0

    def test_query_curta(self):
        """Query inválida sai com código 2."""
        result = runner.invoke(cli.app, ["search", "ab"])

        assert result.exit_code == 2

    def test_max_results_invalido(self):
        """max_results fora da faixa sai com código 2."""
        result = runner.invoke(cli.app, ["search", "fone bluetooth", "-n", "99"])

        assert result.exit_code == 2


class TestCliSearch:
    """Testes do comando search com buscador simulado."""

    @pytest.fixture
    def fake_searcher(self, monkeypatch):
        """Substitui o ProductSearcher da CLI; devolve a lista de requisições."""
        requests = []

        class FakeSearcher:
            error = None

            async def search(self, request):
                requests.append(request)
                if FakeSearcher.error:
                    raise FakeSearcher.error
                return SearchResponse(meta=SearchMeta(model_used="gemini-2.5-flash", provider="gemini"))

        monkeypatch.setattr(cli, "ProductSearcher", FakeSearcher)
        return FakeSearcher, requests

    def test_opcoes_repassadas(self, fake_searcher):
        """Opções da linha de comando chegam na requisição."""
        _, requests = fake_searcher

        result = runner.invoke(
            cli.app,
            ["search", "notebook gamer", "-p", "perplexity", "-n", "5", "-l", "en-US", "--json"],
        )

        assert result.exit_code == 0
        request = requests[0]
        assert request.query == "notebook gamer"
        assert request.options.provider == "perplexity"
        assert request.options.max_results == 5
        assert request.options.language == "en-US"
        assert json.loads(result.stdout)["total_found"] == 0

    def test_erro_do_provedor(self, fake_searcher):
        """Erro do provedor sai com código 1."""
        searcher_class, _ = fake_searcher
        searcher_class.error = ProviderAuthError("Chave de API inválida", provider="gemini")

        result = runner.invoke(cli.app, ["search", "fone bluetooth"])

        assert result.exit_code == 1
        assert "Chave de API inválida" in result.stdout
