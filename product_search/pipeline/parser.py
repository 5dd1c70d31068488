"""
Parser de respostas em produtos validados.
Compõe a extração de JSON com a validação registro a registro.
"""

from typing import Any, Optional

from pydantic import ValidationError

from config.logging_config import LoggerMixin
from product_search.core.models import ExtractionResult, ParseOutcome, Product
from product_search.pipeline.extractor import JsonExtractor

STRUCTURE_ERROR_MESSAGE = "Resposta não corresponde à estrutura esperada"


def format_validation_error(error: ValidationError) -> str:
    """
    Resume um ValidationError em uma linha.

    Exemplo: "name: String should have at least 3 characters; price.value: ..."
    """
    parts = []
    for err in error.errors():
        location = ".".join(str(p) for p in err["loc"]) or "registro"
        parts.append(f"{location}: {err['msg']}")
    return "; ".join(parts)


class RecordValidator(LoggerMixin):
    """
    Valida documentos extraídos contra o contrato de Product.
    Cada registro é validado isoladamente: um inválido não derruba os outros.
    """

    def validate(self, document: Any) -> tuple[list[Product], list[str], Optional[ExtractionResult]]:
        """
        Valida o documento completo.

        Args:
            document: Documento JSON extraído

        Returns:
            Tupla (produtos válidos, erros, documento estruturado ou None)
        """
        try:
            extraction = ExtractionResult.model_validate(document)
        except ValidationError as e:
            self.logger.warning(
                "Documento com estrutura inválida",
                error=format_validation_error(e),
            )
            return [], [STRUCTURE_ERROR_MESSAGE], None

        products, errors = self.validate_records(extraction.products)
        return products, errors, extraction

    def validate_records(self, records: list[Any]) -> tuple[list[Product], list[str]]:
        """
        Valida uma lista de registros já estruturados.

        Args:
            records: Registros brutos (dicts)

        Returns:
            Tupla (produtos válidos na ordem original, erros)
        """
        products: list[Product] = []
        errors: list[str] = []

        for position, record in enumerate(records, start=1):
            if isinstance(record, dict):
                # Score nunca é aceito do provedor
                record = {k: v for k, v in record.items() if k != "relevance_score"}

            try:
                products.append(Product.model_validate(record))
            except ValidationError as e:
                errors.append(f"Produto {position} inválido: {format_validation_error(e)}")

        if errors:
            self.logger.debug(
                "Registros descartados na validação",
                valid=len(products),
                invalid=len(errors),
            )

        return products, errors


class ProductParser(LoggerMixin):
    """
    Parser de respostas de modelos de linguagem.
    Fluxo: texto -> documento JSON -> produtos validados.
    """

    def __init__(self):
        """Inicializa o parser com seus componentes."""
        self.extractor = JsonExtractor()
        self.validator = RecordValidator()

    def parse_products(self, text: str) -> ParseOutcome:
        """
        Faz parsing completo de uma resposta.

        Args:
            text: Resposta bruta do modelo

        Returns:
            ParseOutcome com produtos válidos e diagnósticos
        """
        document, diagnostic = self.extractor.extract(text)
        if document is None:
            return ParseOutcome(parse_errors=[diagnostic or STRUCTURE_ERROR_MESSAGE])

        products, errors, extraction = self.validator.validate(document)

        self.logger.debug(
            "Resposta parseada",
            products=len(products),
            errors=len(errors),
        )

        return ParseOutcome(
            products=products,
            search_summary=extraction.search_summary if extraction else None,
            parse_errors=errors,
        )

    def validate_records(self, records: list[Any]) -> ParseOutcome:
        """
        Valida registros já estruturados (ex: resultados do Google Shopping).

        Args:
            records: Registros brutos

        Returns:
            ParseOutcome sem resumo
        """
        products, errors = self.validator.validate_records(records)
        return ParseOutcome(products=products, parse_errors=errors)
