import logging
import os
import threading
from dataclasses import dataclass, field, replace
from typing import Mapping, Optional, Tuple
from urllib.parse import urlparse

from .constants import (
    DEFAULT_DEBUG,
    DEFAULT_HEALTHZ_TIMEOUT,
    DEFAULT_HOST,
    DEFAULT_ICON_URL,
    DEFAULT_PORT,
    DEFAULT_USERNAME,
    ENV_PREFIX,
    FALSE_VALUES,
    TRUE_VALUES,
)

logger = logging.getLogger(__name__)


class ConfigError(Exception):
    """Configuração inválida (fatal na inicialização)."""


def _parse_bool(name: str, raw: str) -> bool:
    value = raw.strip().lower()
    if value in TRUE_VALUES:
        return True
    if value in FALSE_VALUES:
        return False
    raise ConfigError(f"{name}: invalid boolean value {raw!r}")


def _parse_int(name: str, raw: str) -> int:
    try:
        return int(raw.strip())
    except ValueError:
        raise ConfigError(f"{name}: invalid integer value {raw!r}") from None


def _parse_timeout(name: str, raw: str) -> Optional[float]:
    if not raw.strip():
        return None
    try:
        value = float(raw.strip())
    except ValueError:
        raise ConfigError(f"{name}: invalid number value {raw!r}") from None
    if value <= 0:
        raise ConfigError(f"{name}: must be greater than zero")
    return value


def _parse_tags(raw: str) -> Tuple[str, ...]:
    return tuple(t.strip() for t in raw.split(",") if t.strip())


@dataclass(frozen=True)
class Config:
    debug: bool = True
    host: str = DEFAULT_HOST
    port: int = int(DEFAULT_PORT)
    token: str = ""
    tags: Tuple[str, ...] = field(default_factory=tuple)
    grafana_host: str = ""
    grafana_api_key: str = ""
    username: str = DEFAULT_USERNAME
    icon_url: str = DEFAULT_ICON_URL
    # None = sem timeout explícito (default do transporte)
    timeout: Optional[float] = None
    # Timeout do dial TCP do /healthz (segundos)
    healthz_timeout: int = int(DEFAULT_HEALTHZ_TIMEOUT)

    @property
    def address(self) -> str:
        return f"{self.host}:{self.port}"

    def validate(self) -> None:
        if not 0 < self.port < 65536:
            raise ConfigError(f"{ENV_PREFIX}PORT: {self.port} is out of range")
        if self.healthz_timeout <= 0:
            raise ConfigError(f"{ENV_PREFIX}HEALTHZ_DIAL_TIMEOUT: must be greater than zero")
        if self.grafana_host:
            parsed = urlparse(self.grafana_host)
            if parsed.scheme not in ("http", "https") or not parsed.netloc:
                raise ConfigError(
                    f"{ENV_PREFIX}GRAFANA_HOST must be an http or https URL, got {self.grafana_host!r}"
                )

    def with_overrides(self, **changes) -> "Config":
        return replace(self, **changes)

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Config":
        """Monta a Config a partir das variáveis FYI_* (os.environ por padrão)."""
        env = os.environ if environ is None else environ

        def get(name: str, default: str = "") -> str:
            return env.get(f"{ENV_PREFIX}{name}", default)

        config = cls(
            debug=_parse_bool(f"{ENV_PREFIX}DEBUG", get("DEBUG", DEFAULT_DEBUG)),
            host=get("HOST", DEFAULT_HOST),
            port=_parse_int(f"{ENV_PREFIX}PORT", get("PORT", DEFAULT_PORT)),
            token=get("TOKEN"),
            tags=_parse_tags(get("TAGS")),
            grafana_host=get("GRAFANA_HOST").rstrip("/"),
            grafana_api_key=get("GRAFANA_API_KEY"),
            username=get("USERNAME", DEFAULT_USERNAME),
            icon_url=get("ICON_URL", DEFAULT_ICON_URL),
            timeout=_parse_timeout(f"{ENV_PREFIX}TIMEOUT", get("TIMEOUT")),
            healthz_timeout=_parse_int(
                f"{ENV_PREFIX}HEALTHZ_DIAL_TIMEOUT", get("HEALTHZ_DIAL_TIMEOUT", DEFAULT_HEALTHZ_TIMEOUT)
            ),
        )
        config.validate()
        return config


def load_config(environ: Optional[Mapping[str, str]] = None) -> Config:
    return Config.from_env(environ)


# Definidos na inicialização (socket, logging); exigem restart
_RESTART_ONLY_FIELDS = ("host", "port", "debug")


class ConfigStore:
    """Guarda a Config atual; reload() valida antes de trocar."""

    def __init__(self, config: Config):
        self._lock = threading.RLock()
        self._config = config

    def get(self) -> Config:
        with self._lock:
            return self._config

    def reload(self, config: Config) -> Config:
        """Troca a config atual.

        host, port e debug ficam os do processo em execução: o socket e o nível
        de log já estão definidos e não mudam sem reiniciar.
        """
        config.validate()
        with self._lock:
            previous = self._config
            pinned = {name: getattr(previous, name) for name in _RESTART_ONLY_FIELDS}
            changed = sorted(n for n, v in pinned.items() if getattr(config, n) != v)
            if changed:
                logger.warning("Ignoring changes to %s on reload; restart to apply them", ", ".join(changed))
            config = config.with_overrides(**pinned)
            self._config = config
        logger.info("Configuration reloaded (tags %s -> %s)", list(previous.tags), list(config.tags))
        return config

    def reload_from_env(self, environ: Optional[Mapping[str, str]] = None) -> Config:
        return self.reload(load_config(environ))
