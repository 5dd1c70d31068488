"""
Constantes e padrões regex para extração, filtragem e classificação.
"""

import re
from typing import Final

# =============================================================================
# PADRÕES DE CONTEÚDO QUE NÃO É PRODUTO
# =============================================================================

# O modelo às vezes devolve conteúdo informativo (tutoriais, reviews)
# em vez de itens à venda. Aplicados sobre "nome + descrição".
NON_PRODUCT_PATTERNS: Final[dict[str, list[re.Pattern]]] = {
    "pt-BR": [
        re.compile(r"como fazer", re.IGNORECASE),
        re.compile(r"tutorial", re.IGNORECASE),
        re.compile(r"guia de", re.IGNORECASE),
        re.compile(r"review", re.IGNORECASE),
        re.compile(r"comparativo", re.IGNORECASE),
        re.compile(r"dicas de", re.IGNORECASE),
        re.compile(r"o que é", re.IGNORECASE),
        re.compile(r"história de", re.IGNORECASE),
    ],
    "en-US": [
        re.compile(r"how to", re.IGNORECASE),
        re.compile(r"tutorial", re.IGNORECASE),
        re.compile(r"guide to", re.IGNORECASE),
        re.compile(r"review", re.IGNORECASE),
        re.compile(r"comparison", re.IGNORECASE),
        re.compile(r"tips for", re.IGNORECASE),
        re.compile(r"what is", re.IGNORECASE),
        re.compile(r"history of", re.IGNORECASE),
    ],
}

# Palavras que indicam que a query não é sobre produtos
NON_PRODUCT_QUERY_KEYWORDS: Final[list[str]] = [
    "como fazer",
    "how to",
    "tutorial",
    "o que é",
    "what is",
    "por que",
    "why",
    "história de",
    "history of",
    "significado de",
    "meaning of",
]


# =============================================================================
# PADRÕES DE URL
# =============================================================================

# Páginas de busca, categoria ou listagem (NÃO são páginas de produto)
SEARCH_URL_PATTERNS: Final[list[re.Pattern]] = [
    re.compile(r"/busca/", re.IGNORECASE),
    re.compile(r"/search", re.IGNORECASE),
    re.compile(r"/s\?", re.IGNORECASE),
    re.compile(r"/s/", re.IGNORECASE),
    re.compile(r"[?&]q=", re.IGNORECASE),
    re.compile(r"[?&]query=", re.IGNORECASE),
    re.compile(r"[?&]search=", re.IGNORECASE),
    re.compile(r"[?&]s=", re.IGNORECASE),
    re.compile(r"[?&]k=", re.IGNORECASE),
    re.compile(r"/categoria/", re.IGNORECASE),
    re.compile(r"/category/", re.IGNORECASE),
    re.compile(r"/browse/", re.IGNORECASE),
    re.compile(r"/results/", re.IGNORECASE),
    re.compile(r"/produtos\?", re.IGNORECASE),
    re.compile(r"/products\?", re.IGNORECASE),
    re.compile(r"/lista/", re.IGNORECASE),
    re.compile(r"/list/", re.IGNORECASE),
    re.compile(r"/catalogo/", re.IGNORECASE),
    re.compile(r"/catalog/", re.IGNORECASE),
    re.compile(r"/departamento/", re.IGNORECASE),
    re.compile(r"/department/", re.IGNORECASE),
]

# Assinaturas de página de detalhe de produto
PRODUCT_URL_PATTERNS: Final[list[re.Pattern]] = [
    re.compile(r"/dp/[A-Z0-9]+", re.IGNORECASE),     # Amazon: /dp/B0BN72DG3G
    re.compile(r"/produto/\d+", re.IGNORECASE),      # Kabum: /produto/123456
    re.compile(r"/p/\d+", re.IGNORECASE),            # Magazine Luiza: /p/236528700
    re.compile(r"/product/\d+", re.IGNORECASE),
    re.compile(r"/MLB-?\d+", re.IGNORECASE),         # Mercado Livre: MLB-12345678
    re.compile(r"/item/\d+", re.IGNORECASE),
    re.compile(r"/sku/\d+", re.IGNORECASE),
    re.compile(r"/id/\d+", re.IGNORECASE),
    re.compile(r"/pd/\d+", re.IGNORECASE),           # Casas Bahia: /pd/123
    re.compile(r"\d{6,}"),                           # ID numérico com 6+ dígitos
]


# =============================================================================
# EXTRAÇÃO DE JSON
# =============================================================================

# Bloco de código markdown, com ou sem tag de linguagem
CODE_FENCE_PATTERN: Final[re.Pattern] = re.compile(
    r"```[\w-]*\s*(.*?)```",
    re.DOTALL,
)

# Início do array "products" em um documento possivelmente quebrado
PRODUCTS_KEY_PATTERN: Final[re.Pattern] = re.compile(
    r'"products"\s*:\s*(\[)',
    re.IGNORECASE,
)


# =============================================================================
# MARCAS CONHECIDAS (heurística do SerpApi)
# =============================================================================

KNOWN_BRANDS: Final[list[str]] = [
    "Apple", "Samsung", "Xiaomi", "Motorola", "LG", "Sony", "Dell", "HP",
    "Lenovo", "Asus", "Acer", "Microsoft", "Google", "Nike", "Adidas", "JBL",
    "Bose", "Philips", "Panasonic", "Canon", "Nikon", "Logitech", "Razer",
    "Corsair",
]


# =============================================================================
# HEADERS HTTP PADRÃO
# =============================================================================

PAGE_FETCH_HEADERS: Final[dict[str, str]] = {
    "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
    "Accept-Language": "pt-BR,pt;q=0.9,en-US;q=0.8,en;q=0.7",
}


# =============================================================================
# CONFIGURAÇÕES DE RETRY
# =============================================================================

RETRY_STATUS_CODES: Final[set[int]] = {408, 429, 500, 502, 503, 504}
