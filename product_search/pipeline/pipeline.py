"""
Pipeline de processamento completo.
Orquestra parser, normalizer e classificador de URLs.
"""

from dataclasses import dataclass, field
from typing import Any, Optional

from config.logging_config import LoggerMixin
from product_search.core.models import ParseOutcome
from product_search.core.types import Language
from product_search.pipeline.normalizer import ProductNormalizer
from product_search.pipeline.parser import ProductParser
from product_search.pipeline.url_classifier import UrlClassifier


@dataclass
class PipelineResult(ParseOutcome):
    """Saída do pipeline: ParseOutcome mais as URLs filtradas."""

    filtered_urls: list[str] = field(default_factory=list)


class ProcessingPipeline(LoggerMixin):
    """
    Pipeline de processamento de respostas.
    Fluxo: texto -> Product validado -> normalizado -> filtrado por URL
    """

    def __init__(self):
        """Inicializa o pipeline com seus componentes."""
        self.parser = ProductParser()
        self.normalizer = ProductNormalizer()
        self.url_classifier = UrlClassifier()

    def process_text(
        self,
        text: str,
        *,
        language: Language = "pt-BR",
        max_results: Optional[int] = None,
    ) -> PipelineResult:
        """
        Processa a resposta bruta de um modelo.

        Args:
            text: Resposta do modelo
            language: Idioma da busca (seleciona filtros de não-produto)
            max_results: Limite de produtos na saída

        Returns:
            PipelineResult com produtos e diagnósticos
        """
        outcome = self.parser.parse_products(text)
        return self._finish(outcome, language, max_results)

    def process_records(
        self,
        records: list[Any],
        *,
        language: Language = "pt-BR",
        max_results: Optional[int] = None,
    ) -> PipelineResult:
        """
        Processa registros já estruturados (Google Shopping).

        Args:
            records: Registros brutos de produto
            language: Idioma da busca
            max_results: Limite de produtos na saída

        Returns:
            PipelineResult com produtos e diagnósticos
        """
        outcome = self.parser.validate_records(records)
        return self._finish(outcome, language, max_results)

    def _finish(
        self,
        outcome: ParseOutcome,
        language: Language,
        max_results: Optional[int],
    ) -> PipelineResult:
        """Normaliza, filtra URLs e limita a quantidade."""
        if outcome.parse_errors:
            self.logger.warning(
                "Erros de parsing encontrados",
                errors=outcome.parse_errors[:10],
                total=len(outcome.parse_errors),
            )

        products = self.normalizer.normalize(outcome.products, language)
        url_filter = self.url_classifier.filter_products_by_url(products)
        products = url_filter.valid_products

        if max_results is not None:
            products = products[:max_results]

        self.logger.info(
            "Pipeline concluído",
            valid=len(outcome.products),
            output=len(products),
            errors=len(outcome.parse_errors),
            filtered=url_filter.invalid_count,
        )

        return PipelineResult(
            products=products,
            search_summary=outcome.search_summary,
            parse_errors=outcome.parse_errors,
            filtered_urls=url_filter.invalid_urls,
        )
