"""
Construção dos prompts de busca enviados aos modelos de linguagem.
"""

from product_search.core.constants import NON_PRODUCT_QUERY_KEYWORDS
from product_search.core.models import SearchOptions

SYSTEM_PROMPT = """Você é um assistente especializado em busca de produtos comercializáveis em lojas online brasileiras.

REGRAS CRÍTICAS - SIGA EXATAMENTE:

1. URLS DE PRODUTO OBRIGATÓRIAS:
   - A URL em "source.url" DEVE ser a página do produto específico, NÃO uma página de busca ou categoria
   - URLs PROIBIDAS: URLs com /busca/, /search, /s?, /categoria/, /browse/, ?q=, ?query=, /results/
   - URLs CORRETAS: URLs que terminam com ID do produto, SKU ou slug do produto
   - Exemplos corretos:
     * https://www.amazon.com.br/dp/B0BN72DG3G
     * https://www.magazineluiza.com.br/iphone-14/p/236528700/
     * https://www.kabum.com.br/produto/123456/notebook-gamer
     * https://www.mercadolivre.com.br/MLB-12345678
   - Exemplos errados:
     * https://www.amazon.com.br/s?k=iphone (página de busca)
     * https://www.magazineluiza.com.br/busca/notebook/ (página de busca)
     * https://www.kabum.com.br/celular-smartphone (página de categoria)

2. DADOS DO PRODUTO:
   - Use APENAS informações de produtos REAIS que existem nas lojas
   - NÃO invente preços, especificações ou URLs
   - Se não souber uma informação, use null
   - O preço deve ser o preço REAL do produto na loja indicada

3. IMAGENS:
   - A URL da imagem deve ser da página oficial do produto
   - Prefira imagens em alta resolução (CDN da loja)

4. FORMATO:
   - Retorne APENAS JSON válido
   - NÃO inclua markdown, explicações ou texto adicional

SCHEMA DE SAÍDA (responda APENAS com este JSON):
{
  "products": [
    {
      "name": "Nome exato do produto como aparece na loja",
      "description": "Descrição real do produto (máx. 200 caracteres)",
      "brand": "Marca",
      "category": "Categoria",
      "price": {"value": 0, "min": 0, "max": 0, "currency": "BRL"},
      "source": {"name": "Nome da loja", "url": "URL DIRETA do produto"},
      "image_url": "URL da imagem oficial do produto",
      "specs": ["spec1", "spec2"],
      "rating": 4.5,
      "availability": "Disponível"
    }
  ],
  "search_summary": "Resumo da busca"
}"""

_LANGUAGE_NAMES = {
    "pt-BR": "português brasileiro",
    "en-US": "inglês",
}


def build_user_prompt(query: str, options: SearchOptions) -> str:
    """Monta o prompt do usuário com a query e os requisitos da busca."""
    language = _LANGUAGE_NAMES.get(options.language, "português brasileiro")
    prices = "Incluir preços estimados" if options.include_prices else "Preços não necessários"
    sources = (
        "Incluir fonte/loja de cada produto"
        if options.include_sources
        else "Fontes não necessárias"
    )

    return (
        f'Busque produtos relevantes para: "{query}"\n'
        "\n"
        "Requisitos:\n"
        f"- Máximo {options.max_results} produtos\n"
        f"- Idioma: {language}\n"
        f"- {prices}\n"
        f"- {sources}\n"
        "- Foco em produtos disponíveis no Brasil\n"
        "- Retorne APENAS o JSON, sem explicações adicionais"
    )


def build_search_prompt(query: str, options: SearchOptions) -> tuple[str, str]:
    """
    Monta os prompts de sistema e de usuário.

    Args:
        query: Termo de busca
        options: Opções da busca

    Returns:
        Tupla (prompt de sistema, prompt do usuário)
    """
    return SYSTEM_PROMPT, build_user_prompt(query, options)


def is_likely_product_query(query: str) -> bool:
    """Heurística: False se a query parece pedir informação e não produto."""
    lowered = query.lower()
    return not any(keyword in lowered for keyword in NON_PRODUCT_QUERY_KEYWORDS)
