"""
Módulo de imagens: cache, download de páginas e extração da imagem principal.
"""

from product_search.images.cache import ImageCache, get_image_cache
from product_search.images.fetcher import HttpxPageFetcher, PageFetcher
from product_search.images.html import extract_image_from_html, to_absolute_url
from product_search.images.resolver import ImageResolver

__all__ = [
    "ImageCache",
    "get_image_cache",
    "HttpxPageFetcher",
    "PageFetcher",
    "extract_image_from_html",
    "to_absolute_url",
    "ImageResolver",
]
