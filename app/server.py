import logging

from app import create_app
from app.extensions.broadcaster import get_broadcaster
from app.extensions.extensions import socketio


logger = logging.getLogger(__name__)


def start(app, port, host="0.0.0.0"):
    if not port:
        raise ValueError("Missing Port")

    logger.info("Listening on %s", port)
    try:
        if app.config.get("SOCKETIO_ENABLED", True):
            socketio.run(app, host=host, port=int(port), allow_unsafe_werkzeug=True)
        else:
            app.run(host=host, port=int(port))
    finally:
        with app.app_context():
            get_broadcaster().shutdown()
        logger.info("Server stopped")


def main():
    app = create_app()
    start(app, app.config.get("PORT"))


if __name__ == "__main__":
    main()
