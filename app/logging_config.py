import logging
import sys
import time

from flask import g, request


access_logger = logging.getLogger("app.access")

QUIET_PATHS = {"/health"}


def configure_logging(level_name: str = "INFO"):
    level = getattr(logging, str(level_name).upper(), logging.INFO)
    root = logging.getLogger()

    if not any(getattr(h, "_app_handler", False) for h in root.handlers):
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(
            logging.Formatter("%(asctime)s %(levelname)s [%(name)s] %(message)s")
        )
        handler._app_handler = True
        root.addHandler(handler)

    root.setLevel(level)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("engineio.server").setLevel(logging.WARNING)
    logging.getLogger("socketio.server").setLevel(logging.WARNING)


def register_request_logging(app):
    @app.before_request
    def _start_timer():
        g._request_started = time.perf_counter()

    @app.after_request
    def _log_request(response):
        if request.path in QUIET_PATHS:
            return response

        started = g.pop("_request_started", None)
        duration_ms = (time.perf_counter() - started) * 1000 if started else 0.0

        status = response.status_code
        if status >= 500:
            level = logging.ERROR
        elif status >= 400:
            level = logging.WARNING
        else:
            level = logging.INFO

        access_logger.log(
            level,
            "%s %s %d %.1fms",
            request.method,
            request.path,
            status,
            duration_ms,
        )
        return response
