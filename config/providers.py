"""
Configuração dos provedores de busca suportados.
Define tipo, modelos e status de cada provedor.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional


class ProviderStatus(str, Enum):
    """Status de um provedor."""
    ACTIVE = "active"
    DEVELOPMENT = "development"
    DISABLED = "disabled"


class ProviderKind(str, Enum):
    """Tipo de provedor."""
    LLM = "llm"                  # Retorna texto livre gerado por modelo
    SHOPPING = "shopping"        # Retorna itens já estruturados


@dataclass
class ProviderConfig:
    """Configuração completa de um provedor."""

    id: str
    display_name: str
    kind: ProviderKind

    status: ProviderStatus = ProviderStatus.ACTIVE

    # Modelos (apenas provedores LLM)
    default_model: Optional[str] = None
    available_models: list[str] = field(default_factory=list)

    # Rótulo usado em meta.model_used quando o provedor não tem modelo
    model_label: Optional[str] = None

    def supports_model(self, model: str) -> bool:
        """
        Verifica se o modelo é aceito pelo provedor.

        Provedores sem lista de modelos aceitam qualquer valor.
        """
        if not self.available_models:
            return True
        return model in self.available_models


GEMINI_CONFIG = ProviderConfig(
    id="gemini",
    display_name="Google Gemini",
    kind=ProviderKind.LLM,
    status=ProviderStatus.ACTIVE,
    default_model="gemini-2.5-flash",
    available_models=["gemini-2.5-flash", "gemini-2.5-pro"],
)

PERPLEXITY_CONFIG = ProviderConfig(
    id="perplexity",
    display_name="Perplexity",
    kind=ProviderKind.LLM,
    status=ProviderStatus.DEVELOPMENT,
    default_model="sonar-pro",
)

SERPAPI_CONFIG = ProviderConfig(
    id="serpapi",
    display_name="SerpApi (Google Shopping)",
    kind=ProviderKind.SHOPPING,
    status=ProviderStatus.ACTIVE,
    model_label="serpapi-google-shopping",
)


# =============================================================================
# REGISTRO DE PROVEDORES
# =============================================================================

PROVIDERS_CONFIG: dict[str, ProviderConfig] = {
    "gemini": GEMINI_CONFIG,
    "perplexity": PERPLEXITY_CONFIG,
    "serpapi": SERPAPI_CONFIG,
}


def get_provider_config(provider_id: str) -> ProviderConfig:
    """
    Retorna configuração de um provedor.

    Args:
        provider_id: ID do provedor

    Returns:
        Configuração do provedor

    Raises:
        ValueError: Se provedor não encontrado
    """
    if provider_id not in PROVIDERS_CONFIG:
        raise ValueError(f"Provedor não encontrado: {provider_id}")
    return PROVIDERS_CONFIG[provider_id]


def get_active_providers() -> list[ProviderConfig]:
    """
    Retorna lista de provedores ativos.

    Returns:
        Lista de configurações de provedores ativos
    """
    return [
        config for config in PROVIDERS_CONFIG.values()
        if config.status in (ProviderStatus.ACTIVE, ProviderStatus.DEVELOPMENT)
    ]
