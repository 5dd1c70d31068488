"""
Módulo de pipeline: extração de JSON, validação, normalização e filtro de URLs.
"""

from product_search.pipeline.extractor import JsonExtractor
from product_search.pipeline.parser import ProductParser, RecordValidator
from product_search.pipeline.normalizer import ProductNormalizer
from product_search.pipeline.url_classifier import (
    UrlClassifier,
    classify,
    is_product_url,
    is_search_url,
)
from product_search.pipeline.pipeline import PipelineResult, ProcessingPipeline

__all__ = [
    "JsonExtractor",
    "ProductParser",
    "RecordValidator",
    "ProductNormalizer",
    "UrlClassifier",
    "classify",
    "is_product_url",
    "is_search_url",
    "PipelineResult",
    "ProcessingPipeline",
]
