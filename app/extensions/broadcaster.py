import logging

from flask import current_app


logger = logging.getLogger(__name__)

EXTENSION_KEY = "broadcaster"

NEW_POST = "newPost"
NEW_COMMENT = "newComment"
REACTION = "reaction"
USER_PROFILE_IMAGE = "userProfileImage"


class NotificationBroadcaster:
    def __init__(self, app=None, socketio=None):
        self._socketio = None
        if app is not None:
            self.init_app(app, socketio)

    def init_app(self, app, socketio=None):
        self._socketio = socketio
        app.extensions[EXTENSION_KEY] = self

    @property
    def is_bound(self) -> bool:
        return self._socketio is not None

    def shutdown(self):
        self._socketio = None

    def broadcast(self, event: str, payload, room=None) -> bool:
        if self._socketio is None:
            logger.warning("Socket.IO not initialized, dropping %s event", event)
            return False

        try:
            self._socketio.emit(event, payload, to=room)
        except Exception:
            logger.exception("Failed to broadcast %s event", event)
            return False

        return True


def get_broadcaster() -> NotificationBroadcaster:
    broadcaster = current_app.extensions.get(EXTENSION_KEY)
    if broadcaster is None:
        # Apps built without the factory still get a (silent) broadcaster.
        broadcaster = NotificationBroadcaster(current_app._get_current_object())
    return broadcaster
