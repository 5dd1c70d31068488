"""
Módulo de configuração do sistema.
Exporta as configurações principais para uso em todo o projeto.
"""

from config.settings import Settings, get_settings
from config.providers import ProviderConfig, PROVIDERS_CONFIG
from config.logging_config import setup_logging

__all__ = [
    "Settings",
    "get_settings",
    "ProviderConfig",
    "PROVIDERS_CONFIG",
    "setup_logging",
]
