"""
Extração da imagem principal de uma página HTML.
Ordem: og:image, twitter:image, primeiro bloco JSON-LD com imagem.
"""

import json
from typing import Any, Optional
from urllib.parse import urljoin, urlsplit

from bs4 import BeautifulSoup


def to_absolute_url(src: str, base: str) -> str:
    """
    Converte URL relativa em absoluta.

    Absolutas passam inalteradas; se não der para resolver, devolve o original.
    """
    try:
        parts = urlsplit(src)
        if parts.scheme and parts.netloc:
            return src
        return urljoin(base, src)
    except ValueError:
        return src


def _meta_content(soup: BeautifulSoup, attr: str, value: str) -> Optional[str]:
    """Conteúdo de uma tag meta, case-insensitive no nome da propriedade."""
    for tag in soup.find_all("meta", attrs={attr: True}):
        if str(tag.get(attr, "")).strip().lower() == value:
            content = tag.get("content")
            if content and content.strip():
                return content.strip()
    return None


def _image_from_value(value: Any) -> Optional[str]:
    """Interpreta o campo image do schema.org."""
    if isinstance(value, str) and value.strip():
        return value.strip()
    if isinstance(value, dict):
        url = value.get("url")
        return url if isinstance(url, str) and url.strip() else None
    if isinstance(value, list) and value:
        return _image_from_value(value[0])
    return None


def image_from_jsonld(node: Any) -> Optional[str]:
    """
    Busca uma imagem em um nó JSON-LD.

    Aceita image como string, lista de strings, lista de objetos com url
    ou objeto com url; percorre listas, @graph e offers.image.
    """
    if isinstance(node, list):
        for item in node:
            image = image_from_jsonld(item)
            if image:
                return image
        return None

    if not isinstance(node, dict):
        return None

    image = _image_from_value(node.get("image"))
    if image:
        return image

    offers = node.get("offers")
    if isinstance(offers, dict):
        image = _image_from_value(offers.get("image"))
        if image:
            return image

    graph = node.get("@graph")
    if graph:
        return image_from_jsonld(graph)

    return None


def _jsonld_image(soup: BeautifulSoup) -> Optional[str]:
    """Primeiro bloco JSON-LD válido que contém imagem."""
    for script in soup.find_all("script", attrs={"type": "application/ld+json"}):
        text = script.string or script.get_text()
        if not text or not text.strip():
            continue
        try:
            data = json.loads(text, strict=False)
        except json.JSONDecodeError:
            continue
        image = image_from_jsonld(data)
        if image:
            return image
    return None


def extract_image_from_html(html: str, page_url: str) -> Optional[str]:
    """
    Extrai a URL absoluta da imagem principal.

    Args:
        html: HTML da página
        page_url: URL da página (base para URLs relativas)

    Returns:
        URL da imagem ou None
    """
    soup = BeautifulSoup(html, "html.parser")

    candidate = (
        _meta_content(soup, "property", "og:image")
        or _meta_content(soup, "name", "twitter:image")
        or _jsonld_image(soup)
    )
    if not candidate:
        return None

    return to_absolute_url(candidate, page_url)
