import logging
from typing import Optional

from flask import Flask, jsonify, request

from .command import process_command
from .config import Config, ConfigStore, load_config
from .constants import GET_NOT_ALLOWED_TEXT
from .formatters import build_command_response
from .health import run_health_checks

logger = logging.getLogger(__name__)


def configure_logging(debug: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def create_app(config: Optional[Config] = None):
    app = Flask(__name__)
    store = ConfigStore(config if config is not None else load_config())
    # main.py usa para o reload via SIGHUP
    app.extensions["fyi_config"] = store

    @app.route('/', methods=['GET', 'POST'])
    def index():
        current = store.get()
        if request.method == 'GET':
            text = GET_NOT_ALLOWED_TEXT
        else:
            text = process_command(request.get_data(cache=False), current, mimetype=request.mimetype)
        return jsonify(build_command_response(current, text)), 200

    @app.route('/healthz', methods=['GET'])
    def healthz():
        errors = run_health_checks(store.get())
        if errors:
            return "\n".join(errors), 500
        return '', 200

    @app.after_request
    def log_request(response):
        logger.info(
            '%s - "%s %s" %s',
            request.remote_addr or '-',
            request.method,
            request.full_path.rstrip('?'),
            response.status_code,
        )
        return response

    current = store.get()
    logger.info("ListenAndServe")
    logger.info("|__Address :: %s", current.address)
    logger.info("|__Grafana :: %s", current.grafana_host)
    logger.info("|__Tags :: %s", list(current.tags))

    return app
