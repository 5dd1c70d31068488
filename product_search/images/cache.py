"""
Cache de imagens resolvidas por URL de página.
Guarda sucessos e falhas: None significa "já tentado, sem imagem".
"""

from typing import Optional

from config.logging_config import LoggerMixin

_MISSING = object()


class ImageCache(LoggerMixin):
    """
    Cache em memória de URL de página -> URL de imagem.
    Sem expiração e sem lock: sobrescritas são idempotentes.
    """

    def __init__(self):
        self._entries: dict[str, Optional[str]] = {}

    def __contains__(self, page_url: str) -> bool:
        return page_url in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def lookup(self, page_url: str) -> tuple[bool, Optional[str]]:
        """
        Consulta o cache.

        Returns:
            Tupla (encontrado, imagem ou None para entrada negativa)
        """
        value = self._entries.get(page_url, _MISSING)
        if value is _MISSING:
            return False, None
        return True, value

    def store(self, page_url: str, image_url: Optional[str]) -> None:
        """Registra o resultado (None para falha)."""
        self._entries[page_url] = image_url

    def clear(self) -> None:
        """Esvazia o cache."""
        self._entries.clear()
        self.logger.debug("Cache de imagens limpo")


# Instância global
_image_cache: Optional[ImageCache] = None


def get_image_cache() -> ImageCache:
    """Retorna instância singleton do cache de imagens."""
    global _image_cache
    if _image_cache is None:
        _image_cache = ImageCache()
    return _image_cache
