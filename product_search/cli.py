"""
Interface de linha de comando (CLI) da busca de produtos.
Usa Typer para uma experiência moderna e rica.
"""

import asyncio
import json
from pathlib import Path
from typing import Optional

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.panel import Panel
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich.table import Table

from config.logging_config import setup_logging
from config.providers import PROVIDERS_CONFIG
from config.settings import get_settings
from product_search.core.exceptions import ProviderError
from product_search.core.models import SearchOptions, SearchRequest, SearchResponse
from product_search.searcher import ProductSearcher

# Inicializa CLI
app = typer.Typer(
    name="product-search",
    help="Busca de produtos em lojas online via modelos de linguagem e Google Shopping.",
    add_completion=False,
)

# Console Rico para output formatado
console = Console()


@app.callback()
def configure(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Logs em nível DEBUG"),
):
    """Configura logging antes de qualquer comando."""
    settings = get_settings()
    setup_logging(
        level="DEBUG" if verbose else settings.log_level,
        log_path=settings.log_path,
        json_format=settings.json_logs,
    )


@app.command("search")
def search(
    query: str = typer.Argument(..., help="Termo de busca (ex: 'iphone 15 128gb')"),
    provider: Optional[str] = typer.Option(
        None, "--provider", "-p", help="Provedor: gemini, perplexity ou serpapi"
    ),
    max_results: int = typer.Option(10, "--max-results", "-n", help="Máximo de produtos"),
    language: str = typer.Option("pt-BR", "--language", "-l", help="Idioma: pt-BR ou en-US"),
    model: Optional[str] = typer.Option(None, "--model", help="Modelo do provedor LLM"),
    json_output: bool = typer.Option(False, "--json", "-j", help="Saída em formato JSON"),
):
    """
    Busca produtos usando um provedor.

    Exemplos:
        product-search search "fone bluetooth jbl"
        product-search search "notebook gamer" --provider serpapi -n 5
        product-search search "air fryer" --model gemini-2.5-pro --json
    """
    request = _build_request(
        query,
        provider=provider,
        max_results=max_results,
        language=language,
        llm_model=model,
    )

    searcher = ProductSearcher()
    try:
        with Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            console=console,
            transient=True,
        ) as progress:
            progress.add_task(f"Buscando '{request.query}'...", total=None)
            response = asyncio.run(searcher.search(request))
    except ProviderError as e:
        console.print(f"[red]Erro do provedor:[/red] {e.message}")
        raise typer.Exit(code=1)

    if json_output:
        _output_json(response)
        return

    _display_results(response, request.query)


@app.command("parse")
def parse(
    file: Path = typer.Argument(..., exists=True, dir_okay=False, help="Arquivo com a resposta do modelo"),
    max_results: int = typer.Option(10, "--max-results", "-n", help="Máximo de produtos"),
    language: str = typer.Option("pt-BR", "--language", "-l", help="Idioma: pt-BR ou en-US"),
    json_output: bool = typer.Option(False, "--json", "-j", help="Saída em formato JSON"),
):
    """
    Processa uma resposta de modelo salva em arquivo (sem rede).

    Exemplos:
        product-search parse resposta.json
        product-search parse resposta.txt --json
    """
    try:
        options = SearchOptions(max_results=max_results, language=language)
    except ValidationError as e:
        _exit_invalid(e)

    text = file.read_text(encoding="utf-8")
    response = ProductSearcher().search_text(text, options)

    if json_output:
        _output_json(response)
        return

    _display_results(response, file.name)


@app.command("providers")
def list_providers():
    """
    Lista provedores disponíveis.
    """
    settings = get_settings()

    table = Table(title="Provedores Disponíveis")
    table.add_column("ID", style="cyan")
    table.add_column("Nome", style="green")
    table.add_column("Tipo", style="blue")
    table.add_column("Status", style="yellow")
    table.add_column("Modelo padrão")
    table.add_column("Configurado")

    for config in PROVIDERS_CONFIG.values():
        configured = settings.is_configured(config.id)
        table.add_row(
            config.id,
            config.display_name,
            config.kind.value,
            config.status.value,
            config.default_model or config.model_label or "-",
            "[green]✓[/green]" if configured else "[red]✗[/red]",
        )

    console.print(table)


@app.command("version")
def version():
    """
    Exibe a versão do sistema.
    """
    from product_search import __version__

    console.print(f"[bold blue]Product Search[/bold blue] v{__version__}")
    console.print("Busca de produtos em lojas online via IA")


# FUNÇÕES AUXILIARES

def _build_request(query: str, **options) -> SearchRequest:
    """Valida query e opções; sai com código 2 se inválidas."""
    try:
        return SearchRequest(query=query, options=SearchOptions(**options))
    except ValidationError as e:
        _exit_invalid(e)


def _exit_invalid(error: ValidationError):
    """Exibe erros de validação e encerra."""
    for err in error.errors():
        location = ".".join(str(p) for p in err["loc"])
        console.print(f"[red]Parâmetro inválido[/red] {location}: {err['msg']}")
    raise typer.Exit(code=2)


# FUNÇÕES DE DISPLAY

def _display_results(response: SearchResponse, title: str):
    """Exibe resultados de busca formatados."""
    meta = response.meta

    console.print()
    console.print(Panel(
        f"[bold]Busca:[/bold] {title}\n"
        f"[bold]Resumo:[/bold] {response.query_interpreted or '-'}\n"
        f"[bold]Modelo:[/bold] {meta.model_used}\n"
        f"[bold]Duração:[/bold] {meta.response_time_ms:.0f}ms",
        title="🔍 Resultado da Busca",
        border_style="blue",
    ))

    if response.products:
        table = Table(title=f"Encontrados {response.total_found} produtos")
        table.add_column("#", style="dim", width=4)
        table.add_column("Produto", style="white", width=40, overflow="fold")
        table.add_column("Loja", style="cyan", width=18)
        table.add_column("Preço", justify="right", style="green", width=14)
        table.add_column("Score", justify="right", style="yellow", width=6)

        for i, product in enumerate(response.products, 1):
            price = product.price.formatted if product.price else None
            table.add_row(
                str(i),
                product.name[:80],
                product.source.name[:18] if product.source else "-",
                price or "-",
                f"{product.relevance_score:.2f}",
            )

        console.print(table)
    else:
        console.print("[yellow]Nenhum produto encontrado.[/yellow]")

    if response.parse_errors:
        console.print(f"\n[yellow]Avisos de parsing ({len(response.parse_errors)}):[/yellow]")
        for error in response.parse_errors[:5]:
            console.print(f"[dim]- {error}[/dim]")

    if response.filtered_urls:
        console.print(
            f"[dim]{len(response.filtered_urls)} produto(s) com URL de busca removido(s)[/dim]"
        )


def _output_json(response: SearchResponse):
    """Exibe resultado em formato JSON."""
    console.print_json(json.dumps(response.model_dump(mode="json"), indent=2, default=str))


# ENTRY POINT

def main():
    """Entry point principal."""
    app()


if __name__ == "__main__":
    main()
