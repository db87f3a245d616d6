import logging
import signal
import sys

from dotenv import load_dotenv

from fyi.config import ConfigError, load_config
from fyi.controller import configure_logging, create_app

logger = logging.getLogger("fyi")


def _install_reload_handler(app):
    """Registra o reload da config no SIGHUP e devolve o handler."""
    store = app.extensions["fyi_config"]

    def _reload(signum, frame):
        # Relê o .env (sobrescrevendo) e as variáveis FYI_*; em erro mantém a config atual
        load_dotenv(override=True)
        try:
            store.reload_from_env()
        except ConfigError as exc:
            logger.error("Configuration reload refused: %s", exc)

    if hasattr(signal, "SIGHUP"):
        signal.signal(signal.SIGHUP, _reload)
    return _reload


def main():
    load_dotenv()
    try:
        config = load_config()
    except ConfigError as exc:
        print(f"FATAL: {exc}. Refusing to start.", file=sys.stderr)
        sys.exit(1)

    configure_logging(config.debug)
    app = create_app(config)
    _install_reload_handler(app)
    # FYI_DEBUG só controla o nível de log; o debugger do Werkzeug fica desligado.
    # use_reloader=False: o reloader do Flask cria um segundo processo e o SIGHUP iria só para um
    app.run(host=config.host, port=config.port, use_reloader=False)


if __name__ == '__main__':
    main()
