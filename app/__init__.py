from flask import Flask

from app.config import Config
from app.db import db
from app.extensions.broadcaster import NotificationBroadcaster
from app.extensions.extensions import cors, jwt, ma, socketio
from app.logging_config import configure_logging, register_request_logging


def create_app(config_overrides=None):
    app = Flask(__name__)
    app.config.from_object(Config)
    if config_overrides:
        app.config.update(config_overrides)

    configure_logging(app.config.get("LOG_LEVEL", "INFO"))

    db.init_app(app)
    jwt.init_app(app)
    ma.init_app(app)
    cors.init_app(
        app,
        origins=app.config["CORS_ALLOWED_ORIGINS"],
        supports_credentials=True,
    )

    broadcaster = NotificationBroadcaster()
    if app.config.get("SOCKETIO_ENABLED", True):
        socketio.init_app(
            app,
            async_mode=app.config.get("SOCKETIO_ASYNC_MODE"),
            message_queue=app.config.get("SOCKETIO_MESSAGE_QUEUE"),
            cors_allowed_origins=app.config["CORS_ALLOWED_ORIGINS"],
        )
        broadcaster.init_app(app, socketio)

        from app.socket_events import register_socket_events
        register_socket_events()
    else:
        broadcaster.init_app(app)

    from app.extensions.jwt_callbacks import register_jwt_callbacks
    register_jwt_callbacks()

    from app.routes.auth_routes import auth_bp
    from app.routes.comment_routes import comment_bp
    from app.routes.image_routes import image_bp
    from app.routes.main_routes import main_bp
    from app.routes.post_routes import post_bp
    from app.routes.reaction_routes import reaction_bp

    app.register_blueprint(main_bp)
    app.register_blueprint(auth_bp)
    app.register_blueprint(post_bp, url_prefix="/api/v2")
    app.register_blueprint(reaction_bp, url_prefix="/api/v2")
    app.register_blueprint(comment_bp, url_prefix="/api/v2")
    app.register_blueprint(image_bp, url_prefix="/api/v2/images")

    register_request_logging(app)

    with app.app_context():
        # models must be imported before create_all()
        from app.models import comment_model, image_model, post_model, reaction_model, user_model  # noqa: F401
        db.create_all()

    return app
