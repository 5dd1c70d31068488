"""
Extração de JSON de respostas de modelos de linguagem.
Tenta estratégias da mais estrita para a mais tolerante.
"""

import json
from typing import Any, Optional

from config.logging_config import LoggerMixin
from product_search.core.constants import CODE_FENCE_PATTERN, PRODUCTS_KEY_PATTERN
from product_search.pipeline.repair import iter_structural_chars, repair_json

EXTRACTION_FAILED_MESSAGE = "Não foi possível extrair JSON da resposta"


def loads_lenient(text: str) -> Any:
    """Parse JSON aceitando caracteres de controle crus dentro de strings."""
    return json.loads(text, strict=False)


def find_products_array(text: str) -> Optional[str]:
    """
    Localiza o array "products" por contagem de profundidade.

    Args:
        text: Texto contendo a chave "products"

    Returns:
        Trecho do array (o restante do texto se nunca fechar) ou None
    """
    match = PRODUCTS_KEY_PATTERN.search(text)
    if not match:
        return None

    start = match.start(1)
    depth = 0
    for i, ch in iter_structural_chars(text[start:]):
        if ch == "[":
            depth += 1
        elif ch == "]":
            depth -= 1
            if depth == 0:
                return text[start:start + i + 1]
    return text[start:]


class JsonExtractor(LoggerMixin):
    """
    Recupera um documento JSON de texto livre.
    Nunca lança exceção: falhas viram diagnóstico.
    """

    def extract(self, text: str) -> tuple[Optional[Any], Optional[str]]:
        """
        Extrai o documento JSON do texto.

        Args:
            text: Resposta bruta do modelo

        Returns:
            Tupla (documento ou None, diagnóstico ou None)
        """
        if not text or not text.strip():
            return None, EXTRACTION_FAILED_MESSAGE

        # Etapa 1: texto já é JSON válido
        try:
            return loads_lenient(text), None
        except json.JSONDecodeError:
            pass

        # Etapa 2: bloco de código markdown
        fence = CODE_FENCE_PATTERN.search(text)
        if fence:
            document = self._try_repaired(fence.group(1), "bloco_de_codigo")
            if document is not None:
                return document, None

        # Etapa 3: primeiro '{' até o último '}'
        start = text.find("{")
        end = text.rfind("}")
        if start >= 0 and end > start:
            document = self._try_repaired(text[start:end + 1], "objeto_guloso")
            if document is not None:
                return document, None

        # Etapa 4: apenas o array "products"
        array_text = find_products_array(text)
        if array_text is not None:
            products = self._try_repaired(array_text, "array_products")
            if isinstance(products, list):
                return {"products": products, "search_summary": ""}, None

        self.logger.warning(
            "Falha ao extrair JSON",
            preview=text[:200],
            length=len(text),
        )
        return None, EXTRACTION_FAILED_MESSAGE

    def _try_repaired(self, candidate: str, strategy: str) -> Optional[Any]:
        """Repara e tenta parsear um trecho candidato."""
        try:
            document = loads_lenient(repair_json(candidate))
        except json.JSONDecodeError as e:
            self.logger.debug(
                "Estratégia de extração falhou",
                strategy=strategy,
                error=str(e),
            )
            return None

        self.logger.debug("JSON extraído", strategy=strategy)
        return document
