"""
Configurações globais do sistema usando Pydantic Settings.
Carrega variáveis de ambiente e define valores padrão.
"""

from functools import lru_cache
from pathlib import Path
from typing import Literal, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from product_search.core.exceptions import ConfigurationError


class Settings(BaseSettings):
    """Configurações principais do sistema."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Ambiente
    env: Literal["development", "production", "testing"] = "development"
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    json_logs: bool = False
    log_path: Optional[Path] = None

    # Provedor padrão
    default_provider: Literal["gemini", "perplexity", "serpapi"] = "gemini"

    # Gemini
    gemini_api_key: str = ""
    gemini_base_url: str = "https://generativelanguage.googleapis.com"
    gemini_default_model: str = "gemini-2.5-flash"
    gemini_timeout: float = Field(default=60.0, ge=5, le=300)

    # Perplexity
    perplexity_api_key: str = ""
    perplexity_base_url: str = "https://api.perplexity.ai"
    perplexity_model: str = "sonar-pro"
    perplexity_timeout: float = Field(default=30.0, ge=5, le=300)

    # SerpApi (Google Shopping)
    serpapi_api_key: str = ""
    serpapi_base_url: str = "https://serpapi.com"
    serpapi_timeout: float = Field(default=30.0, ge=5, le=120)

    # Retries para provedores
    max_retries: int = Field(default=3, ge=1, le=10)

    # Resolução de imagens
    image_resolve_limit: int = Field(default=5, ge=0, le=20)
    page_fetch_timeout: float = Field(default=5.0, ge=1, le=60)
    page_fetch_max_redirects: int = Field(default=5, ge=0, le=20)

    # User Agent usado ao buscar páginas de produto
    user_agent: str = "ProductSearchBot/1.0"

    @field_validator("log_path", mode="after")
    @classmethod
    def ensure_path_exists(cls, v: Optional[Path]) -> Optional[Path]:
        """Garante que o diretório de logs exista."""
        if v is not None:
            v.mkdir(parents=True, exist_ok=True)
        return v

    def get_api_key(self, provider_id: str) -> str:
        """Retorna a chave de API de um provedor (vazia se ausente)."""
        api_keys = {
            "gemini": self.gemini_api_key,
            "perplexity": self.perplexity_api_key,
            "serpapi": self.serpapi_api_key,
        }
        return api_keys.get(provider_id, "")

    def is_configured(self, provider_id: str) -> bool:
        """Indica se o provedor tem chave de API configurada."""
        return bool(self.get_api_key(provider_id))

    def validate_providers(self) -> None:
        """
        Garante que ao menos um provedor esteja configurado.

        Raises:
            ConfigurationError: Se nenhuma chave de API foi definida
        """
        if not any(
            self.is_configured(p) for p in ("gemini", "perplexity", "serpapi")
        ):
            raise ConfigurationError(
                "Ao menos uma chave de API é necessária: "
                "GEMINI_API_KEY, PERPLEXITY_API_KEY ou SERPAPI_API_KEY",
                setting="*_API_KEY",
            )


@lru_cache
def get_settings() -> Settings:
    """
    Retorna instância singleton das configurações.
    Usa cache para evitar recarregar .env múltiplas vezes.
    """
    return Settings()
