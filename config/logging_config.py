"""
Configuração de logging estruturado usando structlog.
JSON em produção, console colorido em desenvolvimento. Sempre em stderr,
para que a saída --json da CLI continue parseável.
"""

import logging
import sys
from pathlib import Path
from typing import Any, Optional

import structlog
from structlog.typing import EventDict, Processor

# Campos que nunca devem aparecer em claro nos logs
SECRET_FIELDS = frozenset({"api_key", "key", "authorization", "token"})

# Limite de caracteres para trechos de resposta logados
MAX_FIELD_LENGTH = 500

# Bibliotecas HTTP que logam a URL completa (com ?key=) em nível INFO
NOISY_LOGGERS = ("httpx", "httpcore")


def redact_secrets(logger: Any, method_name: str, event_dict: EventDict) -> EventDict:
    """Mascara chaves de API, inclusive dentro de dicts de parâmetros."""
    for name, value in list(event_dict.items()):
        if name.lower() in SECRET_FIELDS and value:
            event_dict[name] = "***"
        elif isinstance(value, dict):
            event_dict[name] = {
                k: "***" if str(k).lower() in SECRET_FIELDS and v else v
                for k, v in value.items()
            }
    return event_dict


def truncate_long_values(logger: Any, method_name: str, event_dict: EventDict) -> EventDict:
    """Corta strings longas (respostas de modelo, HTML) para não inundar o log."""
    for name, value in event_dict.items():
        if name != "event" and isinstance(value, str) and len(value) > MAX_FIELD_LENGTH:
            event_dict[name] = value[:MAX_FIELD_LENGTH] + "..."
    return event_dict


def setup_logging(
    level: str = "INFO",
    log_path: Optional[Path] = None,
    json_format: bool = False,
) -> structlog.BoundLogger:
    """
    Configura structlog e o logging padrão.

    Args:
        level: Nível mínimo (DEBUG, INFO, WARNING, ERROR)
        log_path: Diretório do arquivo product_search.log (opcional)
        json_format: JSON por linha em vez do console colorido

    Returns:
        Logger raiz configurado
    """
    numeric_level = getattr(logging, level.upper())

    processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        redact_secrets,
        truncate_long_values,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]

    if json_format:
        processors += [
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(ensure_ascii=False),
        ]
    else:
        processors.append(
            structlog.dev.ConsoleRenderer(
                colors=sys.stderr.isatty(),
                exception_formatter=structlog.dev.plain_traceback,
            )
        )

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(numeric_level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(format="%(message)s", stream=sys.stderr, level=numeric_level)

    # Só em DEBUG as requisições HTTP aparecem
    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(
            logging.DEBUG if numeric_level <= logging.DEBUG else logging.WARNING
        )

    if log_path:
        log_path.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_path / "product_search.log", encoding="utf-8")
        file_handler.setLevel(numeric_level)
        logging.getLogger().addHandler(file_handler)

    return structlog.get_logger("product_search")


def get_logger(name: str = "product_search", **context) -> structlog.BoundLogger:
    """
    Retorna um logger nomeado, opcionalmente com contexto.

    Args:
        name: Nome do logger (normalmente a classe)
        **context: Campos fixos do logger
    """
    logger = structlog.get_logger(name)
    return logger.bind(**context) if context else logger


class LoggerMixin:
    """Mixin que dá a cada componente um logger com o nome da classe."""

    @property
    def logger(self) -> structlog.BoundLogger:
        if not hasattr(self, "_logger"):
            self._logger = get_logger(self.__class__.__name__)
        return self._logger

    def log_operation(self, operation: str, **kwargs) -> structlog.BoundLogger:
        """Logger com a operação (e campos extras) já vinculados."""
        return self.logger.bind(operation=operation, **kwargs)
