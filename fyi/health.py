import logging
import socket
from typing import List, Tuple
from urllib.parse import urlparse

from .config import Config

logger = logging.getLogger(__name__)

_DEFAULT_PORTS = {"http": 80, "https": 443}


def grafana_dial_target(grafana_host: str) -> Tuple[str, int]:
    """Extrai (host, porta) do FYI_GRAFANA_HOST; sem esquema assume porta 80."""
    parsed = urlparse(grafana_host if "://" in grafana_host else f"//{grafana_host}")
    host = parsed.hostname or ""
    port = parsed.port or _DEFAULT_PORTS.get(parsed.scheme, 80)
    return host, port


def dial(host: str, port: int, timeout: float) -> None:
    if not host:
        raise OSError("missing address")
    with socket.create_connection((host, port), timeout=timeout):
        pass


def run_health_checks(config: Config) -> List[str]:
    """Devolve as linhas de erro; lista vazia = saudável."""
    errors: List[str] = []

    host, port = grafana_dial_target(config.grafana_host)
    try:
        dial(host, port, config.healthz_timeout)
    except OSError as exc:
        logger.warning("Grafana dial %s:%s failed: %s", host, port, exc)
        errors.append(f"500 - {exc}")

    try:
        dial(config.host, config.port, config.healthz_timeout)
    except OSError as exc:
        logger.warning("Local API dial %s failed: %s", config.address, exc)
        errors.append(f"500 - local API - {exc}")

    return errors
