import logging

from flask import Flask

from streakshare import config
from streakshare.api.webhook import api

LOG_FORMAT = "%(asctime)s %(levelname)s:%(message)s"


def configure_logging(level: str = None) -> None:
    logging.basicConfig(
        level=getattr(logging, (level or config.LOG_LEVEL).upper(), logging.INFO),
        format=LOG_FORMAT,
    )


# ================================
# APP FACTORY
# ================================
def create_app() -> Flask:
    configure_logging()
    app = Flask(__name__)
    app.register_blueprint(api)
    # Keep emoji readable in JSON responses
    app.json.ensure_ascii = False
    logging.info("[APP] Streakshare ready")
    return app
